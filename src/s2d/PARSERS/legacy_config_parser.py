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
Parser for the legacy odo local configuration (.odo/config.yaml).
"""
import yaml
from typing import Dict, Any, List
from pydantic import ValidationError

from ..errors import LegacyConfigReadFailure
from ..MODELS.legacy_config import (
    LegacyComponentConfig,
    LegacyEnvVar,
    LegacyStorage,
    LegacyURL,
    SourceType,
)

LEGACY_CONFIG_PATH = ".odo/config.yaml"


class LegacyConfigParser:
    """
    Parser for odo LocalConfig files of S2I components.
    """

    def parse(self, config_path: str) -> LegacyComponentConfig:
        """
        Parses a local config file from a path.

        :param config_path: Path to the config file.
        :return: Parsed configuration.
        """
        try:
            with open(config_path, 'r') as f:
                content = f.read()
        except OSError as e:
            raise LegacyConfigReadFailure(f"failed to read {config_path}: {e}") from e
        return self.parse_from_string(content, source=config_path)

    def parse_from_string(self, content: str, source: str = "<string>") -> LegacyComponentConfig:
        """
        Parses a local config from a string.

        :param content: YAML content of the config file.
        :param source: Name used in error messages.
        :return: Parsed configuration.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise LegacyConfigReadFailure(f"invalid YAML in {source}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get('ComponentSettings'), dict):
            raise LegacyConfigReadFailure(f"{source} has no ComponentSettings")
        spec = data['ComponentSettings']

        if not spec.get('Type'):
            raise LegacyConfigReadFailure(
                f"{source} is not an S2I component config: ComponentSettings.Type is not set"
            )

        try:
            return LegacyComponentConfig(
                type=spec['Type'],
                source_type=SourceType(spec.get('SourceType') or 'local'),
                source_location=spec.get('SourceLocation'),
                name=spec.get('Name', ''),
                application=spec.get('Application') or '',
                project=spec.get('Project') or '',
                max_memory=self._to_str(spec.get('MaxMemory')),
                debug_port=spec.get('DebugPort') or 0,
                storage=self._parse_storage(spec.get('Storage')),
                urls=self._parse_urls(spec.get('Url')),
                envs=self._parse_envs(spec.get('Envs')),
            )
        except (ValidationError, ValueError, TypeError, KeyError) as e:
            raise LegacyConfigReadFailure(f"invalid component settings in {source}: {e}") from e

    def _parse_storage(self, entries: Any) -> List[LegacyStorage]:
        return [
            LegacyStorage(name=s['Name'], size=self._to_str(s.get('Size')) or '', path=s.get('Path', ''))
            for s in self._to_list(entries)
        ]

    def _parse_urls(self, entries: Any) -> List[LegacyURL]:
        return [
            LegacyURL(name=u['Name'], port=u['Port'], secure=bool(u.get('Secure', False)), kind=u.get('Kind'))
            for u in self._to_list(entries)
        ]

    def _parse_envs(self, entries: Any) -> List[LegacyEnvVar]:
        return [
            LegacyEnvVar(name=e['Name'], value=self._to_str(e.get('Value')) or '')
            for e in self._to_list(entries)
        ]

    def _to_str(self, val: Any):
        """
        YAML may load values like 512 or true as non-strings; config values are strings.
        """
        if val is None:
            return None
        if isinstance(val, bool):
            return 'true' if val else 'false'
        return str(val)

    def _to_list(self, val: Any) -> List[Dict[str, Any]]:
        """
        Helper to ensure a section is a list of mappings.

        :param val: The value to convert.
        :return: A list.
        """
        if val is None:
            return []
        if not isinstance(val, list) or not all(isinstance(v, dict) for v in val):
            raise ValueError(f"expected a list of mappings, got {val!r}")
        return val
