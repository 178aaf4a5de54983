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
Translation of S2I storage, URLs and environment into devfile components.
"""
import logging
from typing import List, Optional, Sequence

from ..errors import ConversionError, LegacyConfigReadFailure
from ..MODELS.devfile import (
    Component,
    Container,
    ContainerComponent,
    Endpoint,
    EnvVar,
    Volume,
    VolumeComponent,
    VolumeMount,
)
from ..MODELS.image_stream import ResolvedImage
from ..MODELS.legacy_config import LegacyComponentConfig, LegacyEnvVar
from .commands import CONTAINER_NAME

SOURCE_MAPPING = "/tmp/projects"

# tells the odo init scripts the component came from an S2I conversion
CONVERTED_DEVFILE_ENV = "ODO_S2I_CONVERTED_DEVFILE"


def build_components(
    resolved: ResolvedImage,
    legacy: LegacyComponentConfig,
    env: Optional[Sequence[LegacyEnvVar]] = None,
    logger: Optional[logging.Logger] = None,
) -> List[Component]:
    """
    Builds the volume components and the builder container.

    :param resolved: The resolved builder image.
    :param legacy: The legacy component configuration.
    :param env: Environment to put on the container. Defaults to legacy.envs.
    :param logger: Optional logger.
    :return: Volume components in storage order, then the container.
    :raises LegacyConfigReadFailure: If listing storage or URLs fails.
    """
    logger = logger or logging.getLogger(__name__)
    logger.debug("Set devfile components from s2i data")

    try:
        storage = legacy.list_storage()
        urls = legacy.list_urls()
    except ConversionError:
        raise
    except (OSError, ValueError) as e:
        raise LegacyConfigReadFailure(
            f"failed to read storage and urls of component {legacy.name}: {e}"
        ) from e

    components: List[Component] = []
    volume_mounts = []
    for vol in storage:
        components.append(VolumeComponent(name=vol.name, volume=Volume(size=vol.size)))
        volume_mounts.append(VolumeMount(name=vol.name, path=vol.path))

    envs = [EnvVar(name=e.name, value=e.value) for e in (legacy.envs if env is None else env)]
    envs.append(EnvVar(name=CONVERTED_DEVFILE_ENV, value="true"))

    endpoints = [
        Endpoint(name=url.name, target_port=url.port, secure=True if url.secure else None)
        for url in urls
    ]

    container = ContainerComponent(
        name=CONTAINER_NAME,
        container=Container(
            image=resolved.pull_spec,
            mount_sources=True,
            source_mapping=SOURCE_MAPPING,
            memory_limit=legacy.max_memory or None,
            env=envs,
            volume_mounts=volume_mounts,
            endpoints=endpoints,
        ),
    )
    # container goes last; consumers resolve name clashes by declaration order
    components.append(container)

    logger.debug(
        "Built %d volumes, %d env vars and %d endpoints for %s",
        len(storage), len(envs), len(endpoints), legacy.name,
    )
    return components
