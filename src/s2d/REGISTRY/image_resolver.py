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
Resolution of an S2I component type to the builder image used by the devfile.
"""

import logging
from typing import Optional, Protocol

from ..errors import ImageStreamNotFound, ImageNotFound, CorruptImageStream
from ..MODELS.image_stream import ImageStream, ImageStreamImage, ResolvedImage
from .image_reference import ImageReference


class ImageStreamLookup(Protocol):
    """
    Read-only access to image streams. Both calls return None when the
    object does not exist and raise for any other failure.
    """

    def get_image_stream(
        self, namespace: str, name: str, tag: str
    ) -> Optional[ImageStream]:
        ...

    def get_image_stream_image(
        self, image_stream: ImageStream, tag: str
    ) -> Optional[ImageStreamImage]:
        ...


class ImageResolver:
    """
    Resolves component types through an injected ImageStreamLookup.
    """

    def __init__(self, lookup: ImageStreamLookup, logger: Optional[logging.Logger] = None):
        """
        Args:
            lookup: Image stream lookup used for both registry calls.
            logger: Logger for progress messages. Defaults to this module's logger.
        """
        self.lookup = lookup
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, component_type: str) -> ResolvedImage:
        """
        Resolve a component type to a pull spec and image content.

        Args:
            component_type: Builder reference, e.g. 'openshift/nodejs:12'

        Returns:
            The resolved image.

        Raises:
            MalformedReference: component_type cannot be parsed.
            ImageStreamNotFound: no image stream for the reference.
            ImageNotFound: the stream has no image for the tag.
            CorruptImageStream: the stream has no spec tag to pull from.
        """
        self.logger.debug("Getting container image details for %s", component_type)
        ref = ImageReference.parse(component_type)

        image_stream = self.lookup.get_image_stream(ref.namespace, ref.name, ref.tag)
        if image_stream is None:
            raise ImageStreamNotFound(ref.namespace, ref.name, ref.tag)

        image = self.lookup.get_image_stream_image(image_stream, ref.tag)
        if image is None:
            raise ImageNotFound(image_stream.full_name, ref.tag)

        # spec tag 0 is the one set when the stream was tagged
        if not image_stream.spec_tags or not image_stream.spec_tags[0].from_name:
            raise CorruptImageStream(image_stream.full_name)
        pull_spec = image_stream.spec_tags[0].from_name

        self.logger.debug("Resolved %s to %s", ref, pull_spec)
        return ResolvedImage(pull_spec=pull_spec, image=image)
