# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Converter generating the local env settings (.odo/env/env.yaml) of an S2I component.
"""
import logging
import os
from typing import Optional

from ..MODELS.env_settings import EnvSettingsRecord
from ..MODELS.legacy_config import LegacyComponentConfig
from ..UTILS.document_writer import DocumentWriter, YamlDocumentWriter
from ..UTILS.settings import DEFAULT_DEBUG_PORT

ENV_SETTINGS_PATH = os.path.join(".odo", "env", "env.yaml")
COMPONENT_SETTINGS_KEY = "ComponentSettings"


def synthesize_env_settings(
    config: LegacyComponentConfig,
    default_debug_port: int = DEFAULT_DEBUG_PORT,
) -> EnvSettingsRecord:
    """
    Derives the env settings of a legacy component.

    :param config: The legacy component configuration.
    :param default_debug_port: The tool's default debug port.
    :return: The settings record.
    """
    record = EnvSettingsRecord(
        name=config.name,
        project=config.project,
        application=config.application,
    )
    debug_port = config.debug_port
    # keep both clauses: a zero port is recorded when zero is the default
    if debug_port != 0 or debug_port == default_debug_port:
        record.debug_port = debug_port
    return record


class EnvSettingsConverter:
    """
    Writes or updates the env settings file of a component context.
    """

    def __init__(
        self,
        config: LegacyComponentConfig,
        writer: Optional[DocumentWriter] = None,
        logger: Optional[logging.Logger] = None,
        default_debug_port: int = DEFAULT_DEBUG_PORT,
    ):
        self.config = config
        self.writer = writer or YamlDocumentWriter()
        self.logger = logger or logging.getLogger(__name__)
        self.default_debug_port = default_debug_port

    def convert(self, context_dir: str = ".") -> EnvSettingsRecord:
        """
        Synthesizes the settings and merges them into <context_dir>/.odo/env/env.yaml.
        Fields set in the new record replace existing ones; other keys are kept.

        :param context_dir: The component context directory.
        :return: The synthesized record.
        """
        self.logger.debug("Generating env.yaml")
        record = synthesize_env_settings(self.config, self.default_debug_port)

        path = os.path.join(context_dir, ENV_SETTINGS_PATH)
        document = self.writer.read(path) or {}
        settings = dict(document.get(COMPONENT_SETTINGS_KEY) or {})
        settings.update(record.to_document())
        document[COMPONENT_SETTINGS_KEY] = settings

        self.writer.write(path, document)
        self.logger.info("Generated %s for component %s", path, self.config.name)
        return record


def generate_env_settings(
    config: LegacyComponentConfig,
    context_dir: str,
    writer: Optional[DocumentWriter] = None,
    logger: Optional[logging.Logger] = None,
    default_debug_port: int = DEFAULT_DEBUG_PORT,
) -> EnvSettingsRecord:
    """
    Generates <context_dir>/.odo/env/env.yaml from the legacy configuration.

    :return: The synthesized record.
    """
    converter = EnvSettingsConverter(
        config, writer=writer, logger=logger, default_debug_port=default_debug_port
    )
    return converter.convert(context_dir)
