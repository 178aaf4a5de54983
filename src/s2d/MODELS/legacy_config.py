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
Models for the legacy S2I component configuration (.odo/config.yaml).
"""
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, field_validator


class SourceType(str, Enum):
    """
    Where the S2I component takes its sources from. Exactly one applies.
    """
    GIT = "git"
    LOCAL = "local"
    BINARY = "binary"
    NONE = "none"


class LegacyStorage(BaseModel):
    """
    A persistent volume claimed by the S2I component.
    """
    name: str
    size: str
    path: str


class LegacyURL(BaseModel):
    """
    A URL exposing one of the component ports.
    """
    name: str
    port: int
    secure: bool = False
    kind: Optional[str] = None


class LegacyEnvVar(BaseModel):
    name: str
    value: str = ""


class LegacyComponentConfig(BaseModel):
    """
    The S2I-era component settings. The component type embeds the builder
    image as namespace/name:tag.
    """
    type: str
    source_type: SourceType = SourceType.LOCAL
    source_location: Optional[str] = None

    name: str
    application: str = ""
    project: str = ""

    max_memory: Optional[str] = None
    debug_port: int = 0

    storage: List[LegacyStorage] = []
    urls: List[LegacyURL] = []
    envs: List[LegacyEnvVar] = []

    @field_validator("envs")
    @classmethod
    def _unique_env_names(cls, envs: List[LegacyEnvVar]) -> List[LegacyEnvVar]:
        seen = set()
        for env in envs:
            if env.name in seen:
                raise ValueError(f"duplicate environment variable {env.name}")
            seen.add(env.name)
        return envs

    def list_storage(self) -> List[LegacyStorage]:
        """Storage volumes in declaration order."""
        return list(self.storage)

    def list_urls(self) -> List[LegacyURL]:
        """URLs in declaration order."""
        return list(self.urls)
