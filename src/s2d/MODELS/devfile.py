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
Models for the devfile (schema 2.0.0) emitted by the conversion.

Field aliases are the devfile wire names. Dump with
model_dump(by_alias=True, exclude_none=True) to get the document.
"""
from typing import List, Optional, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator


class _DevfileModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CommandGroupKind(str, Enum):
    BUILD = "build"
    RUN = "run"


class CommandGroup(_DevfileModel):
    kind: CommandGroupKind
    is_default: bool = Field(False, alias="isDefault")


class ExecCommand(_DevfileModel):
    component: str
    command_line: str = Field(alias="commandLine")
    group: Optional[CommandGroup] = None


class Command(_DevfileModel):
    id: str
    exec: ExecCommand


class EnvVar(_DevfileModel):
    name: str
    value: str


class VolumeMount(_DevfileModel):
    name: str
    path: Optional[str] = None


class Endpoint(_DevfileModel):
    """
    A port exposed by the container. secure is only written when true.
    """
    name: str
    target_port: int = Field(alias="targetPort")
    secure: Optional[bool] = None


class Container(_DevfileModel):
    image: str
    mount_sources: Optional[bool] = Field(None, alias="mountSources")
    source_mapping: Optional[str] = Field(None, alias="sourceMapping")
    memory_limit: Optional[str] = Field(None, alias="memoryLimit")
    env: List[EnvVar] = []
    volume_mounts: List[VolumeMount] = Field([], alias="volumeMounts")
    endpoints: List[Endpoint] = []


class Volume(_DevfileModel):
    size: Optional[str] = None


class ContainerComponent(_DevfileModel):
    name: str
    container: Container


class VolumeComponent(_DevfileModel):
    name: str
    volume: Volume


Component = Union[ContainerComponent, VolumeComponent]


class Metadata(_DevfileModel):
    name: str
    version: str


class Descriptor(_DevfileModel):
    """
    A devfile document. Holds exactly one container component; every volume
    mount of it refers to a declared volume component.
    """
    schema_version: str = Field(alias="schemaVersion")
    metadata: Metadata
    commands: List[Command] = []
    components: List[Component] = []

    @model_validator(mode="after")
    def _check_invariants(self) -> "Descriptor":
        containers = [c for c in self.components if isinstance(c, ContainerComponent)]
        if len(containers) != 1:
            raise ValueError(
                f"devfile must have exactly one container component, got {len(containers)}"
            )

        volumes = {c.name for c in self.components if isinstance(c, VolumeComponent)}
        for mount in containers[0].container.volume_mounts:
            if mount.name not in volumes:
                raise ValueError(f"volume mount {mount.name} has no matching volume component")

        ids = [c.id for c in self.commands]
        if len(ids) != len(set(ids)):
            raise ValueError(f"duplicate command ids in {ids}")

        defaults = [
            c.exec.group.kind for c in self.commands
            if c.exec.group is not None and c.exec.group.is_default
        ]
        if len(defaults) != len(set(defaults)):
            raise ValueError("more than one default command in a group")
        return self

    @property
    def container(self) -> ContainerComponent:
        return next(c for c in self.components if isinstance(c, ContainerComponent))

    @property
    def volumes(self) -> List[VolumeComponent]:
        return [c for c in self.components if isinstance(c, VolumeComponent)]

    def to_document(self) -> dict:
        """
        Plain dict in devfile wire format, ready for serialization. Empty
        container lists are left out, like unset fields.
        """
        document = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        for component in document.get("components", []):
            container = component.get("container")
            if container is None:
                continue
            for key in ("env", "volumeMounts", "endpoints"):
                if container.get(key) == []:
                    del container[key]
        return document
