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
S2I path variables for the converted container.

The odo assemble-and-restart scripts locate the builder's S2I scripts and
source directories through ODO_* variables. They are derived from the labels
of the builder image.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..errors import S2IMetadataError
from ..MODELS.image_stream import ImageStreamImage
from ..MODELS.legacy_config import LegacyEnvVar, SourceType

SCRIPTS_URL_LABEL = "io.openshift.s2i.scripts-url"
DESTINATION_LABEL = "io.openshift.s2i.destination"
BUILDER_NAME_LABEL = "name"

DEFAULT_SRC_OR_BIN_PATH = "/tmp"
DEFAULT_SRC_BACKUP_DIR = "/opt/app-root/src-backup"

ENV_SCRIPTS_URL = "ODO_S2I_SCRIPTS_URL"
ENV_SCRIPTS_PROTOCOL = "ODO_S2I_SCRIPTS_PROTOCOL"
ENV_SRC_OR_BIN_PATH = "ODO_S2I_SRC_BIN_PATH"
ENV_DEPLOYMENT_DIR = "ODO_S2I_DEPLOYMENT_DIR"
ENV_WORKING_DIR = "ODO_S2I_WORKING_DIR"
ENV_BUILDER_IMG = "ODO_S2I_BUILDER_IMG"
ENV_SRC_BACKUP_DIR = "ODO_SRC_BACKUP_DIR"


@dataclass
class S2IPaths:
    """Locations inside the builder image used by the S2I scripts."""
    scripts_protocol: str
    scripts_path: str
    src_or_bin_path: str
    deployment_dir: str
    working_dir: str
    src_backup_path: str
    builder_image_name: str


def get_s2i_paths(image: ImageStreamImage) -> S2IPaths:
    """
    Reads the S2I paths from the builder image labels.

    :param image: The builder image content.
    :return: The paths.
    :raises S2IMetadataError: If the scripts URL label is missing or uses an unknown protocol.
    """
    labels = image.labels
    scripts_url = labels.get(SCRIPTS_URL_LABEL, "")
    if not scripts_url:
        raise S2IMetadataError(
            f"builder image {image.name} has no {SCRIPTS_URL_LABEL} label"
        )

    if scripts_url.startswith("image://"):
        protocol, path = "image://", scripts_url[len("image://"):]
    elif scripts_url.startswith("file://"):
        protocol, path = "file://", scripts_url[len("file://"):]
    elif scripts_url.startswith(("http://", "https://")):
        protocol, path = "http(s)://", scripts_url
    else:
        raise S2IMetadataError(
            f"unknown scripts url {scripts_url} in builder image {image.name}"
        )

    # images like nodejs run sources in place and set no destination
    src_or_bin_path = labels.get(DESTINATION_LABEL) or DEFAULT_SRC_OR_BIN_PATH

    return S2IPaths(
        scripts_protocol=protocol,
        scripts_path=path,
        src_or_bin_path=src_or_bin_path,
        deployment_dir=image.working_dir or src_or_bin_path,
        working_dir=image.working_dir,
        src_backup_path=DEFAULT_SRC_BACKUP_DIR,
        builder_image_name=labels.get(BUILDER_NAME_LABEL, ""),
    )


def _append_or_overwrite(envs: List[LegacyEnvVar], name: str, value: str) -> None:
    for i, env in enumerate(envs):
        if env.name == name:
            envs[i] = LegacyEnvVar(name=name, value=value)
            return
    envs.append(LegacyEnvVar(name=name, value=value))


def inject_s2i_env(
    source_type: SourceType,
    envs: Sequence[LegacyEnvVar],
    image: ImageStreamImage,
    logger: Optional[logging.Logger] = None,
) -> List[LegacyEnvVar]:
    """
    Returns envs followed by the S2I path variables of the builder image.
    A variable already present keeps its position and takes the new value.

    :param source_type: Source type of the legacy component.
    :param envs: Environment of the legacy component, in order.
    :param image: The builder image content.
    :param logger: Optional logger.
    :return: A new ordered list.
    """
    logger = logger or logging.getLogger(__name__)
    logger.debug("Get S2I environment variables to be added in devfile")

    paths = get_s2i_paths(image)
    result = list(envs)
    _append_or_overwrite(result, ENV_SCRIPTS_URL, paths.scripts_path)
    _append_or_overwrite(result, ENV_SCRIPTS_PROTOCOL, paths.scripts_protocol)
    _append_or_overwrite(result, ENV_SRC_OR_BIN_PATH, paths.src_or_bin_path)
    _append_or_overwrite(result, ENV_DEPLOYMENT_DIR, paths.deployment_dir)
    _append_or_overwrite(result, ENV_WORKING_DIR, paths.working_dir)
    _append_or_overwrite(result, ENV_BUILDER_IMG, paths.builder_image_name)

    if SourceType(source_type) == SourceType.LOCAL:
        _append_or_overwrite(result, ENV_SRC_BACKUP_DIR, paths.src_backup_path)

    return result
