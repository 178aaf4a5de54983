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
Settings read from the environment and an optional .env file.
"""
import os
from typing import Dict, Optional

from dotenv import dotenv_values
from pydantic import BaseModel

ENV_PREFIX = "S2D_"

# odo's default debug port
DEFAULT_DEBUG_PORT = 5858


class Settings(BaseModel):
    """
    Tool settings. Each field can be set with an S2D_<FIELD> variable.
    """
    default_debug_port: int = DEFAULT_DEBUG_PORT
    log_level: str = "INFO"
    image_api_url: Optional[str] = None
    token: Optional[str] = None
    inject_s2i_env: bool = False

    @classmethod
    def load(cls, context_dir: str = ".", environ: Optional[Dict[str, str]] = None) -> "Settings":
        """
        Loads settings from <context_dir>/.env, then the process environment.
        Process variables win over the .env file.

        :param context_dir: Directory that may contain a .env file.
        :param environ: Environment to read instead of os.environ.
        :return: The settings.
        """
        values: Dict[str, Optional[str]] = {}
        env_file = os.path.join(context_dir, ".env")
        if os.path.exists(env_file):
            values.update(dotenv_values(env_file))
        values.update(os.environ if environ is None else environ)

        fields = {}
        for field in cls.model_fields:
            value = values.get(ENV_PREFIX + field.upper())
            if value is not None and value != "":
                fields[field] = value
        return cls(**fields)
