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
Read-only client for the OpenShift image API.
Implements the image stream lookups used to resolve S2I builder images.
"""

import json
import logging
from typing import Optional, Dict, Any
from urllib.request import urlopen, Request
from urllib.error import HTTPError
from urllib.parse import quote

from ..errors import ConversionError
from ..MODELS.image_stream import (
    ImageStream,
    ImageStreamImage,
    image_stream_from_api,
    image_stream_image_from_api,
)

API_PREFIX = "/apis/image.openshift.io/v1"


class ImageStreamClient:
    """
    Client for image streams and image stream images on a cluster.
    Requests are made once; retrying is left to the caller.
    """

    def __init__(
        self,
        server: str,
        token: Optional[str] = None,
        timeout: float = 30,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the client.

        Args:
            server: API server URL (e.g., 'https://api.cluster:6443')
            token: Bearer token sent with every request
            timeout: Socket timeout in seconds
            logger: Optional logger
        """
        if "://" not in server:
            server = f"https://{server}"
        self.server = server.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def _get(self, path: str) -> Optional[Dict[str, Any]]:
        """GET an API path. Returns None on 404."""
        url = f"{self.server}{API_PREFIX}{path}"
        request = Request(url)
        request.add_header("Accept", "application/json")
        if self.token:
            request.add_header("Authorization", f"Bearer {self.token}")

        self.logger.debug("GET %s", url)
        try:
            with urlopen(request, timeout=self.timeout) as response:
                body = response.read()
        except HTTPError as e:
            if e.code == 404:
                return None
            raise

        try:
            obj = json.loads(body.decode())
        except ValueError as e:
            raise ConversionError(f"invalid response from {url}: not JSON ({e})") from e
        if not isinstance(obj, dict):
            raise ConversionError(f"invalid response from {url}: expected a JSON object")
        return obj

    def get_image_stream(self, namespace: str, name: str, tag: str) -> Optional[ImageStream]:
        """
        Get an image stream that carries the given tag.

        Args:
            namespace: Namespace of the stream
            name: Stream name
            tag: Tag that must be present on the stream

        Returns:
            The image stream, or None if it or the tag does not exist.
        """
        obj = self._get(f"/namespaces/{quote(namespace)}/imagestreams/{quote(name)}")
        if obj is None:
            return None

        stream = image_stream_from_api(obj)
        known_tags = set(stream.status_tags) | {t.name for t in stream.spec_tags}
        if tag not in known_tags:
            self.logger.debug("Image stream %s has no tag %s", stream.full_name, tag)
            return None
        return stream

    def get_image_stream_image(self, image_stream: ImageStream, tag: str) -> Optional[ImageStreamImage]:
        """
        Get the image a tag of the stream currently points at.

        Args:
            image_stream: Stream returned by get_image_stream
            tag: Tag to resolve

        Returns:
            The image, or None if the tag has no image yet.
        """
        events = image_stream.status_tags.get(tag)
        if not events:
            return None

        image_name = f"{image_stream.name}@{events[0].image}"
        obj = self._get(
            f"/namespaces/{quote(image_stream.namespace)}/imagestreamimages/{quote(image_name, safe='@:')}"
        )
        if obj is None:
            return None
        return image_stream_image_from_api(obj)
