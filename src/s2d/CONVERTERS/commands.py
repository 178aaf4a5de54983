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
Default build and run commands of a devfile converted from S2I.
"""
from typing import List
from ..MODELS.devfile import Command, ExecCommand, CommandGroup, CommandGroupKind

BUILD_COMMAND_ID = "s2i-assemble"
BUILD_COMMAND_LINE = "/opt/odo/bin/s2i-setup && /opt/odo/bin/assemble-and-restart"
RUN_COMMAND_ID = "s2i-run"
RUN_COMMAND_LINE = "/opt/odo/bin/run"

# name of the single container component
CONTAINER_NAME = "s2i-builder"


def _exec_command(command_id: str, command_line: str, kind: CommandGroupKind) -> Command:
    return Command(
        id=command_id,
        exec=ExecCommand(
            component=CONTAINER_NAME,
            command_line=command_line,
            group=CommandGroup(kind=kind, is_default=True),
        ),
    )


def build_commands() -> List[Command]:
    """
    Returns the default build command followed by the default run command,
    both running the S2I scripts shipped in the builder container.
    """
    return [
        _exec_command(BUILD_COMMAND_ID, BUILD_COMMAND_LINE, CommandGroupKind.BUILD),
        _exec_command(RUN_COMMAND_ID, RUN_COMMAND_LINE, CommandGroupKind.RUN),
    ]
