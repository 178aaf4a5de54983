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
Errors raised while converting an S2I component to a devfile.

Every error is terminal for the conversion call. Messages carry the stage
that failed and the component or image involved so the CLI can show them
as-is.
"""


class ConversionError(Exception):
    """Base class for all conversion failures."""


class MalformedReference(ConversionError, ValueError):
    """The component type is not a valid namespace/name:tag reference."""

    def __init__(self, reference: str, reason: str = ""):
        self.reference = reference
        message = f"invalid image reference {reference!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ImageStreamNotFound(ConversionError):
    """The registry lookup has no image stream for the reference."""

    def __init__(self, namespace: str, name: str, tag: str):
        self.namespace = namespace
        self.name = name
        self.tag = tag
        super().__init__(
            f"failed to get image stream {namespace}/{name}:{tag}: not found"
        )


class ImageNotFound(ConversionError):
    """The image stream exists but the tagged image could not be resolved."""

    def __init__(self, stream: str, tag: str):
        self.stream = stream
        self.tag = tag
        super().__init__(f"unable to find tag {tag} for image stream {stream}")


class CorruptImageStream(ConversionError):
    """The image stream carries no pull specification in its spec tags."""

    def __init__(self, stream: str):
        self.stream = stream
        super().__init__(f"image stream {stream} has no spec tags to pull from")


class S2IMetadataError(ConversionError):
    """The builder image labels cannot be turned into S2I paths."""


class LegacyConfigReadFailure(ConversionError):
    """Reading the legacy S2I configuration (storage, urls, envs) failed."""


class PersistenceFailure(ConversionError):
    """Writing the devfile or the env settings to disk failed."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to write {path}: {cause}")
