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
Converter generating a devfile.yaml from an S2I component configuration.
"""
import logging
import os
from typing import List, Optional

from ..MODELS.devfile import Command, Component, Descriptor, Metadata
from ..MODELS.legacy_config import LegacyComponentConfig
from ..REGISTRY.image_resolver import ImageResolver
from ..UTILS.document_writer import DocumentWriter, YamlDocumentWriter
from .commands import build_commands
from .components import build_components
from . import s2i_env

DEVFILE_SCHEMA_VERSION = "2.0.0"
DEVFILE_METADATA_VERSION = "1.0.0"
DEVFILE_NAME = "devfile.yaml"


def assemble(
    commands: List[Command],
    components: List[Component],
    legacy: LegacyComponentConfig,
) -> Descriptor:
    """
    Puts schema version, metadata, commands and components together.

    :param commands: Commands from build_commands.
    :param components: Components from build_components.
    :param legacy: The legacy component configuration.
    :return: The devfile.
    """
    return Descriptor(
        schema_version=DEVFILE_SCHEMA_VERSION,
        metadata=Metadata(name=legacy.name, version=DEVFILE_METADATA_VERSION),
        commands=commands,
        components=components,
    )


class DevfileConverter:
    """
    Converts a legacy S2I component into a devfile and writes it to the
    component context directory.
    """

    def __init__(
        self,
        config: LegacyComponentConfig,
        resolver: ImageResolver,
        writer: Optional[DocumentWriter] = None,
        logger: Optional[logging.Logger] = None,
        inject_s2i_env: bool = False,
    ):
        """
        Initializes the converter.

        :param config: The legacy component configuration.
        :param resolver: Resolver for the component type.
        :param writer: Document writer. Defaults to YamlDocumentWriter.
        :param logger: Logger for progress messages.
        :param inject_s2i_env: Add the S2I path variables of the builder image to the container.
        """
        self.config = config
        self.resolver = resolver
        self.writer = writer or YamlDocumentWriter()
        self.logger = logger or logging.getLogger(__name__)
        self.inject_s2i_env = inject_s2i_env

    def build(self) -> Descriptor:
        """
        Builds the devfile in memory without writing anything.

        :return: The devfile.
        """
        resolved = self.resolver.resolve(self.config.type)

        env = None
        if self.inject_s2i_env:
            env = s2i_env.inject_s2i_env(
                self.config.source_type, self.config.envs, resolved.image, logger=self.logger
            )

        components = build_components(resolved, self.config, env=env, logger=self.logger)
        self.logger.debug("Set devfile commands from s2i data")
        commands = build_commands()
        return assemble(commands, components, self.config)

    def convert(self, context_dir: str = ".") -> str:
        """
        Builds the devfile and writes it to <context_dir>/devfile.yaml.
        Nothing is written if any step fails.

        :param context_dir: The component context directory.
        :return: The path of the written devfile.
        """
        self.logger.debug("Generating %s", DEVFILE_NAME)
        return self.write(self.build(), context_dir)

    def write(self, descriptor: Descriptor, context_dir: str = ".") -> str:
        """
        Writes a built devfile to <context_dir>/devfile.yaml.

        :param descriptor: Devfile returned by build.
        :param context_dir: The component context directory.
        :return: The path of the written devfile.
        """
        path = os.path.join(context_dir, DEVFILE_NAME)
        self.writer.write(path, descriptor.to_document())
        self.logger.info("Generated %s for component %s", path, self.config.name)
        return path


def generate_descriptor(
    resolver: ImageResolver,
    config: LegacyComponentConfig,
    context_dir: str,
    writer: Optional[DocumentWriter] = None,
    logger: Optional[logging.Logger] = None,
    inject_s2i_env: bool = False,
) -> str:
    """
    Generates <context_dir>/devfile.yaml from the legacy configuration.

    :return: The path of the written devfile.
    """
    converter = DevfileConverter(
        config, resolver, writer=writer, logger=logger, inject_s2i_env=inject_s2i_env
    )
    return converter.convert(context_dir)
