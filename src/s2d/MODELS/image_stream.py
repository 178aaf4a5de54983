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
Models for image streams and the images they resolve to.
"""
from typing import List, Dict, Optional, Any
from pydantic import BaseModel


class TagReference(BaseModel):
    """
    A spec tag of an image stream. from_name is the pull specification the
    tag was created from.
    """
    name: str
    from_name: Optional[str] = None


class TagEvent(BaseModel):
    """
    A status entry recording which image a tag points at.
    """
    image: str
    docker_image_reference: Optional[str] = None


class ImageStream(BaseModel):
    namespace: str
    name: str
    spec_tags: List[TagReference] = []
    status_tags: Dict[str, List[TagEvent]] = {}

    @property
    def full_name(self) -> str:
        return f"{self.namespace}/{self.name}"


class ImageStreamImage(BaseModel):
    """
    The content of a tagged image. The docker metadata is kept as returned
    by the registry; only the labels and working dir are read from it.
    """
    name: str
    docker_image_metadata: Dict[str, Any] = {}

    @property
    def labels(self) -> Dict[str, str]:
        config = self.docker_image_metadata.get("Config") or {}
        labels = config.get("Labels")
        if labels is None:
            container_config = self.docker_image_metadata.get("ContainerConfig") or {}
            labels = container_config.get("Labels")
        return labels or {}

    @property
    def working_dir(self) -> str:
        config = self.docker_image_metadata.get("Config") or {}
        return config.get("WorkingDir") or ""


class ResolvedImage(BaseModel):
    """
    Result of resolving a component type: the pull spec to put in the
    devfile plus the image content it points at.
    """
    pull_spec: str
    image: ImageStreamImage


def image_stream_from_api(obj: Dict[str, Any]) -> ImageStream:
    """
    Build an ImageStream from an image.openshift.io/v1 ImageStream object.
    """
    metadata = obj.get("metadata") or {}
    spec_tags = [
        TagReference(name=str(t.get("name", "")), from_name=(t.get("from") or {}).get("name"))
        for t in (obj.get("spec") or {}).get("tags") or []
    ]
    status_tags = {}
    for t in (obj.get("status") or {}).get("tags") or []:
        status_tags[str(t.get("tag", ""))] = [
            TagEvent(image=item["image"], docker_image_reference=item.get("dockerImageReference"))
            for item in t.get("items") or []
        ]
    return ImageStream(
        namespace=metadata.get("namespace", ""),
        name=metadata.get("name", ""),
        spec_tags=spec_tags,
        status_tags=status_tags,
    )


def image_stream_image_from_api(obj: Dict[str, Any]) -> ImageStreamImage:
    """
    Build an ImageStreamImage from an image.openshift.io/v1 ImageStreamImage object.
    """
    metadata = obj.get("metadata") or {}
    image = obj.get("image") or {}
    return ImageStreamImage(
        name=metadata.get("name", ""),
        docker_image_metadata=image.get("dockerImageMetadata") or {},
    )
