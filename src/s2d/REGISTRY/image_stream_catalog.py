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
File-backed image stream lookup.
Serves image streams exported from a cluster (e.g. `oc get is,isimage -o yaml`)
without network access.
"""

import logging
from typing import Optional, Dict, Any, Tuple
from pathlib import Path

import yaml

from ..errors import ConversionError
from ..MODELS.image_stream import (
    ImageStream,
    ImageStreamImage,
    image_stream_from_api,
    image_stream_image_from_api,
)


class ImageStreamCatalog:
    """
    In-memory set of image streams and images, keyed the way the cluster
    keys them: streams by (namespace, name), images by (namespace, 'name@digest').
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._streams: Dict[Tuple[str, str], ImageStream] = {}
        self._images: Dict[Tuple[str, str], ImageStreamImage] = {}
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def load(cls, path: str, logger: Optional[logging.Logger] = None) -> "ImageStreamCatalog":
        """
        Load a catalog from a YAML file holding a List (or a single object).

        Args:
            path: Path to the exported YAML.
            logger: Optional logger.

        Returns:
            The populated catalog.
        """
        try:
            with open(path, "r") as f:
                documents = list(yaml.safe_load_all(f))
        except (OSError, yaml.YAMLError) as e:
            raise ConversionError(f"failed to read image streams from {path}: {e}") from e

        catalog = cls(logger=logger)
        for doc in documents:
            if isinstance(doc, dict):
                catalog.add_object(doc)
        catalog.logger.debug("Loaded %d image streams from %s", len(catalog._streams), Path(path).name)
        return catalog

    def add_object(self, obj: Dict[str, Any]) -> None:
        """Add an ImageStream, ImageStreamImage or List object."""
        kind = obj.get("kind")
        if kind == "List" or (kind is None and "items" in obj):
            for item in obj.get("items") or []:
                self.add_object(item)
        elif kind == "ImageStream":
            self.add_stream(image_stream_from_api(obj))
        elif kind == "ImageStreamImage":
            namespace = (obj.get("metadata") or {}).get("namespace", "")
            self.add_image(namespace, image_stream_image_from_api(obj))
        else:
            self.logger.debug("Skipping object of kind %s", kind)

    def add_stream(self, stream: ImageStream) -> None:
        self._streams[(stream.namespace, stream.name)] = stream

    def add_image(self, namespace: str, image: ImageStreamImage) -> None:
        self._images[(namespace, image.name)] = image

    def get_image_stream(self, namespace: str, name: str, tag: str) -> Optional[ImageStream]:
        stream = self._streams.get((namespace, name))
        if stream is None:
            return None
        known_tags = set(stream.status_tags) | {t.name for t in stream.spec_tags}
        if tag not in known_tags:
            self.logger.debug("Image stream %s has no tag %s", stream.full_name, tag)
            return None
        return stream

    def get_image_stream_image(self, image_stream: ImageStream, tag: str) -> Optional[ImageStreamImage]:
        events = image_stream.status_tags.get(tag)
        if not events:
            return None
        image_name = f"{image_stream.name}@{events[0].image}"
        return self._images.get((image_stream.namespace, image_name))
