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
Unit tests for devfile generation.
"""
import os
import stat

import pytest
import yaml
from s2d.errors import MalformedReference, ImageStreamNotFound, PersistenceFailure
from s2d.CONVERTERS.commands import build_commands
from s2d.CONVERTERS.components import build_components
from s2d.CONVERTERS.to_devfile import DevfileConverter, assemble, generate_descriptor
from s2d.MODELS.devfile import (
    Container,
    ContainerComponent,
    Descriptor,
    Metadata,
    VolumeMount,
)
from s2d.MODELS.legacy_config import LegacyComponentConfig, LegacyEnvVar, LegacyStorage


class FailingWriter:
    def write(self, path, document):
        raise PersistenceFailure(path, OSError("disk full"))

    def read(self, path):
        return None


class TestAssemble:

    def test_assemble(self, resolver, legacy_config):
        resolved = resolver.resolve(legacy_config.type)
        descriptor = assemble(build_commands(), build_components(resolved, legacy_config), legacy_config)
        assert descriptor.schema_version == "2.0.0"
        assert descriptor.metadata.name == "nodejs-app"
        assert descriptor.metadata.version == "1.0.0"
        assert len(descriptor.commands) == 2
        assert descriptor.container.name == "s2i-builder"
        assert [v.name for v in descriptor.volumes] == ["data", "cache"]

    def test_document_shape(self, resolver, legacy_config):
        document = DevfileConverter(legacy_config, resolver).build().to_document()
        assert list(document) == ["schemaVersion", "metadata", "commands", "components"]
        assert document["commands"][0] == {
            "id": "s2i-assemble",
            "exec": {
                "component": "s2i-builder",
                "commandLine": "/opt/odo/bin/s2i-setup && /opt/odo/bin/assemble-and-restart",
                "group": {"kind": "build", "isDefault": True},
            },
        }
        assert document["components"][0] == {"name": "data", "volume": {"size": "1Gi"}}

        container = document["components"][-1]["container"]
        assert container["image"] == "registry.access.redhat.com/ubi8/nodejs-12:latest"
        assert container["mountSources"] is True
        assert container["sourceMapping"] == "/tmp/projects"
        assert container["memoryLimit"] == "512Mi"
        assert container["volumeMounts"] == [
            {"name": "data", "path": "/data"},
            {"name": "cache", "path": "/cache"},
        ]
        assert container["endpoints"] == [
            {"name": "http", "targetPort": 8080},
            {"name": "https", "targetPort": 8443, "secure": True},
        ]


class TestDescriptorInvariants:

    def _container(self, mounts=()):
        return ContainerComponent(
            name="s2i-builder",
            container=Container(image="img", volume_mounts=[VolumeMount(name=m, path="/" + m) for m in mounts]),
        )

    def test_requires_one_container(self):
        with pytest.raises(ValueError):
            Descriptor(schema_version="2.0.0", metadata=Metadata(name="x", version="1.0.0"), components=[])
        with pytest.raises(ValueError):
            Descriptor(
                schema_version="2.0.0",
                metadata=Metadata(name="x", version="1.0.0"),
                components=[self._container(), self._container()],
            )

    def test_mount_must_reference_volume(self):
        with pytest.raises(ValueError, match="data"):
            Descriptor(
                schema_version="2.0.0",
                metadata=Metadata(name="x", version="1.0.0"),
                components=[self._container(mounts=["data"])],
            )

    def test_one_default_per_group(self):
        commands = build_commands()
        with pytest.raises(ValueError):
            Descriptor(
                schema_version="2.0.0",
                metadata=Metadata(name="x", version="1.0.0"),
                commands=commands + [commands[0].model_copy(update={"id": "other"})],
                components=[self._container()],
            )

    def test_round_trip_from_document(self, resolver, legacy_config):
        document = DevfileConverter(legacy_config, resolver).build().to_document()
        parsed = Descriptor.model_validate(document)
        assert parsed.container.container.env[-1].name == "ODO_S2I_CONVERTED_DEVFILE"
        assert [v.name for v in parsed.volumes] == ["data", "cache"]


class TestGenerateDescriptor:

    def test_writes_devfile(self, tmp_path, resolver, legacy_config):
        path = generate_descriptor(resolver, legacy_config, str(tmp_path))
        assert path == os.path.join(str(tmp_path), "devfile.yaml")

        with open(path) as f:
            data = yaml.safe_load(f)
        assert data["schemaVersion"] == "2.0.0"
        assert data["metadata"] == {"name": "nodejs-app", "version": "1.0.0"}
        assert [c["id"] for c in data["commands"]] == ["s2i-assemble", "s2i-run"]
        assert [c["name"] for c in data["components"]] == ["data", "cache", "s2i-builder"]
        assert data["components"][-1]["container"]["env"][-1] == {
            "name": "ODO_S2I_CONVERTED_DEVFILE",
            "value": "true",
        }

    def test_byte_identical_output(self, tmp_path, resolver, legacy_config):
        first = tmp_path / "first"
        second = tmp_path / "second"
        generate_descriptor(resolver, legacy_config, str(first))
        generate_descriptor(resolver, legacy_config.model_copy(deep=True), str(second))
        assert (first / "devfile.yaml").read_bytes() == (second / "devfile.yaml").read_bytes()

    def test_regeneration_is_idempotent(self, tmp_path, resolver, legacy_config):
        generate_descriptor(resolver, legacy_config, str(tmp_path))
        before = (tmp_path / "devfile.yaml").read_bytes()
        generate_descriptor(resolver, legacy_config, str(tmp_path))
        assert (tmp_path / "devfile.yaml").read_bytes() == before

    def test_env_order_survives_serialization(self, tmp_path, resolver):
        names = ["ZETA", "ALPHA", "MIDDLE", "BETA"]
        config = LegacyComponentConfig(
            type="openshift/nodejs:12",
            name="ordered",
            envs=[LegacyEnvVar(name=n, value=n.lower()) for n in names],
            storage=[
                LegacyStorage(name="zz", size="1Gi", path="/zz"),
                LegacyStorage(name="aa", size="2Gi", path="/aa"),
            ],
        )
        generate_descriptor(resolver, config, str(tmp_path))
        data = yaml.safe_load((tmp_path / "devfile.yaml").read_text())
        container = data["components"][-1]["container"]
        assert [e["name"] for e in container["env"]] == names + ["ODO_S2I_CONVERTED_DEVFILE"]
        assert [c["name"] for c in data["components"]] == ["zz", "aa", "s2i-builder"]

    def test_malformed_type_writes_nothing(self, tmp_path, resolver, legacy_config):
        config = legacy_config.model_copy(update={"type": "nodejs"})
        with pytest.raises(MalformedReference):
            generate_descriptor(resolver, config, str(tmp_path))
        assert not (tmp_path / "devfile.yaml").exists()

    def test_missing_stream_writes_nothing(self, tmp_path, resolver, legacy_config):
        config = legacy_config.model_copy(update={"type": "openshift/ruby:2.7"})
        with pytest.raises(ImageStreamNotFound):
            generate_descriptor(resolver, config, str(tmp_path))
        assert os.listdir(tmp_path) == []

    def test_persistence_failure_propagates(self, tmp_path, resolver, legacy_config):
        with pytest.raises(PersistenceFailure, match="disk full"):
            generate_descriptor(resolver, legacy_config, str(tmp_path), writer=FailingWriter())

    def test_inject_s2i_env(self, resolver, legacy_config):
        descriptor = DevfileConverter(legacy_config, resolver, inject_s2i_env=True).build()
        names = [e.name for e in descriptor.container.container.env]
        assert names[:2] == ["NODE_ENV", "DEBUG"]
        assert "ODO_S2I_SCRIPTS_URL" in names
        assert "ODO_SRC_BACKUP_DIR" in names
        assert names[-1] == "ODO_S2I_CONVERTED_DEVFILE"

    def test_no_injection_by_default(self, resolver, legacy_config):
        descriptor = DevfileConverter(legacy_config, resolver).build()
        assert len(descriptor.container.container.env) == len(legacy_config.envs) + 1

    def test_devfile_is_world_readable(self, tmp_path, resolver, legacy_config):
        old = os.umask(0o022)
        try:
            path = generate_descriptor(resolver, legacy_config, str(tmp_path))
        finally:
            os.umask(old)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o644

    def test_empty_lists_left_out(self, resolver):
        config = LegacyComponentConfig(type="openshift/nodejs:12", name="bare")
        document = DevfileConverter(config, resolver).build().to_document()
        container = document["components"][-1]["container"]
        assert "volumeMounts" not in container
        assert "endpoints" not in container
        assert container["env"] == [{"name": "ODO_S2I_CONVERTED_DEVFILE", "value": "true"}]
        assert Descriptor.model_validate(document).container.container.endpoints == []
