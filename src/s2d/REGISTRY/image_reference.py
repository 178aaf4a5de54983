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
Image reference parsing for S2I component types.
Parses builder references like 'openshift/nodejs:12' into namespace, name and tag.
"""

import re
from dataclasses import dataclass

from ..errors import MalformedReference


@dataclass(frozen=True)
class ImageReference:
    """
    Parsed S2I builder image reference.

    Examples:
        - openshift/nodejs:12 -> namespace=openshift, name=nodejs, tag=12
        - openshift:java:8 -> namespace=openshift, name=java, tag=8
        - nodejs:12 -> MalformedReference (no namespace)
        - openshift/nodejs -> MalformedReference (no tag)
    """

    namespace: str
    name: str
    tag: str

    # namespace and name may be separated by '/' or ':', the tag always by ':'
    PATTERN = re.compile(
        r"(?P<namespace>[^/:@\s]+)[/:](?P<name>[^/:@\s]+):(?P<tag>[^/:@\s]+)"
    )

    @classmethod
    def parse(cls, reference: str) -> "ImageReference":
        """
        Parse a component type string.

        Both namespace/name:tag (the form odo writes) and namespace:name:tag
        are accepted on purpose. Either way all three parts are required.

        Args:
            reference: Component type (e.g., 'openshift/nodejs:12')

        Returns:
            Parsed ImageReference object.

        Raises:
            MalformedReference: If any of namespace, name or tag is missing.
        """
        if not reference:
            raise MalformedReference(reference, "empty component type")

        if "@" in reference:
            raise MalformedReference(reference, "digest references are not supported")

        match = cls.PATTERN.fullmatch(reference)
        if not match:
            raise MalformedReference(
                reference, "expected <namespace>/<name>:<tag>"
            )

        return cls(
            namespace=match.group("namespace"),
            name=match.group("name"),
            tag=match.group("tag"),
        )

    @property
    def stream_name(self) -> str:
        """Image stream name with namespace."""
        return f"{self.namespace}/{self.name}"

    @property
    def full_name(self) -> str:
        return f"{self.namespace}/{self.name}:{self.tag}"

    def __str__(self) -> str:
        return self.full_name

    def __repr__(self) -> str:
        return f"ImageReference({self.full_name})"
