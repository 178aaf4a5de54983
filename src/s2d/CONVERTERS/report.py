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
Human readable summary of a conversion.
"""
from jinja2 import Template

from ..MODELS.devfile import Descriptor
from ..MODELS.env_settings import EnvSettingsRecord

SUMMARY_TEMPLATE = """\
Converted S2I component {{ descriptor.metadata.name }} to devfile {{ descriptor.schema_version }}
  devfile:   {{ devfile_path }}
  env file:  {{ env_path }}
  image:     {{ container.image }}
{% for cmd in descriptor.commands %}  command:   {{ cmd.id }} ({{ cmd.exec.group.kind.value }}) -> {{ cmd.exec.command_line }}
{% endfor %}{% for vol in descriptor.volumes %}  volume:    {{ vol.name }} {{ vol.volume.size or '' }}
{% endfor %}{% for ep in container.endpoints %}  endpoint:  {{ ep.name }} {{ ep.target_port }}{% if ep.secure %} (secure){% endif %}
{% endfor %}  project:   {{ settings.project or '-' }}
  app:       {{ settings.application or '-' }}
  debug:     {{ settings.debug_port if settings.debug_port is not none else '-' }}
"""


class ConversionReport:
    """
    Renders what was generated for the user.
    """

    def __init__(self):
        self.template = Template(SUMMARY_TEMPLATE)

    def render(
        self,
        descriptor: Descriptor,
        settings: EnvSettingsRecord,
        devfile_path: str,
        env_path: str,
    ) -> str:
        return self.template.render(
            descriptor=descriptor,
            container=descriptor.container.container,
            settings=settings,
            devfile_path=devfile_path,
            env_path=env_path,
        )
