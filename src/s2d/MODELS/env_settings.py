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
Models for the local environment settings (.odo/env/env.yaml).
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class EnvSettingsRecord(BaseModel):
    """
    ComponentSettings section of env.yaml. debug_port stays None when the
    legacy config did not set one.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    project: str = Field("", alias="Project")
    application: str = Field("", alias="AppName")
    debug_port: Optional[int] = Field(None, alias="DebugPort")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
