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
Unit tests for env settings synthesis and the env.yaml writer.
"""
import os

import pytest
import yaml
from s2d.errors import PersistenceFailure
from s2d.CONVERTERS.to_env_settings import (
    ENV_SETTINGS_PATH,
    EnvSettingsConverter,
    generate_env_settings,
    synthesize_env_settings,
)
from s2d.MODELS.legacy_config import LegacyComponentConfig


def make_config(debug_port):
    return LegacyComponentConfig(
        type="openshift/nodejs:12",
        name="nodejs-app",
        project="myproject",
        application="app",
        debug_port=debug_port,
    )


class TestSynthesizeEnvSettings:

    def test_copies_identity(self, legacy_config):
        record = synthesize_env_settings(legacy_config)
        assert record.name == "nodejs-app"
        assert record.project == "myproject"
        assert record.application == "app"
        assert record.debug_port == 5858

    def test_zero_port_with_zero_default_is_recorded(self):
        record = synthesize_env_settings(make_config(0), default_debug_port=0)
        assert record.debug_port == 0
        assert record.to_document()["DebugPort"] == 0

    def test_zero_port_with_default_is_absent(self):
        record = synthesize_env_settings(make_config(0), default_debug_port=5858)
        assert record.debug_port is None
        assert "DebugPort" not in record.to_document()

    @pytest.mark.parametrize("default", [0, 5858, 9229])
    def test_set_port_always_recorded(self, default):
        assert synthesize_env_settings(make_config(5858), default).debug_port == 5858
        assert synthesize_env_settings(make_config(9000), default).debug_port == 9000

    def test_document_keys(self, legacy_config):
        assert synthesize_env_settings(legacy_config).to_document() == {
            "Name": "nodejs-app",
            "Project": "myproject",
            "AppName": "app",
            "DebugPort": 5858,
        }


class TestGenerateEnvSettings:

    def test_writes_env_yaml(self, tmp_path, legacy_config):
        record = generate_env_settings(legacy_config, str(tmp_path))
        path = tmp_path / ENV_SETTINGS_PATH
        data = yaml.safe_load(path.read_text())
        assert data == {"ComponentSettings": record.to_document()}

    def test_updates_existing_file(self, tmp_path):
        path = tmp_path / ENV_SETTINGS_PATH
        path.parent.mkdir(parents=True)
        path.write_text(yaml.safe_dump({
            "ComponentSettings": {"Name": "old", "DebugPort": 9229, "URL": [{"Name": "http"}]},
            "Other": "kept",
        }))

        generate_env_settings(make_config(0), str(tmp_path))
        data = yaml.safe_load(path.read_text())
        assert data["Other"] == "kept"
        assert data["ComponentSettings"] == {
            "Name": "nodejs-app",
            "DebugPort": 9229,
            "URL": [{"Name": "http"}],
            "Project": "myproject",
            "AppName": "app",
        }

    def test_record_returned(self, tmp_path):
        record = EnvSettingsConverter(make_config(0), default_debug_port=0).convert(str(tmp_path))
        assert record.debug_port == 0

    def test_unreadable_existing_file(self, tmp_path, legacy_config):
        path = tmp_path / ENV_SETTINGS_PATH
        path.parent.mkdir(parents=True)
        path.write_text("- not\n- a mapping\n")
        with pytest.raises(PersistenceFailure):
            generate_env_settings(legacy_config, str(tmp_path))

    def test_path_under_odo_dir(self):
        assert ENV_SETTINGS_PATH == os.path.join(".odo", "env", "env.yaml")
