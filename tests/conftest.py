"""
Shared fixtures: a legacy component and an in-memory image stream lookup.
"""
import pytest

from s2d.MODELS.image_stream import ImageStream, ImageStreamImage, TagReference, TagEvent
from s2d.MODELS.legacy_config import (
    LegacyComponentConfig,
    LegacyEnvVar,
    LegacyStorage,
    LegacyURL,
    SourceType,
)
from s2d.REGISTRY.image_resolver import ImageResolver
from s2d.REGISTRY.image_stream_catalog import ImageStreamCatalog

NODEJS_PULL_SPEC = "registry.access.redhat.com/ubi8/nodejs-12:latest"
NODEJS_DIGEST = "sha256:7ab3e5d1c0d2b1f36f0a1f6f4a4b7e2c5d9f8e7a6b5c4d3e2f1a0b9c8d7e6f5a"

NODEJS_METADATA = {
    "Config": {
        "WorkingDir": "/opt/app-root/src",
        "Labels": {
            "io.openshift.s2i.scripts-url": "image:///usr/libexec/s2i",
            "name": "ubi8/nodejs-12",
        },
    }
}


def make_stream(spec_tags=None):
    return ImageStream(
        namespace="openshift",
        name="nodejs",
        spec_tags=[TagReference(name="12", from_name=NODEJS_PULL_SPEC)] if spec_tags is None else spec_tags,
        status_tags={"12": [TagEvent(image=NODEJS_DIGEST)]},
    )


def make_catalog(stream=None):
    catalog = ImageStreamCatalog()
    catalog.add_stream(stream or make_stream())
    catalog.add_image(
        "openshift",
        ImageStreamImage(name=f"nodejs@{NODEJS_DIGEST}", docker_image_metadata=NODEJS_METADATA),
    )
    return catalog


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def resolver(catalog):
    return ImageResolver(catalog)


@pytest.fixture
def legacy_config():
    return LegacyComponentConfig(
        type="openshift/nodejs:12",
        source_type=SourceType.LOCAL,
        source_location="./",
        name="nodejs-app",
        application="app",
        project="myproject",
        max_memory="512Mi",
        debug_port=5858,
        storage=[
            LegacyStorage(name="data", size="1Gi", path="/data"),
            LegacyStorage(name="cache", size="512Mi", path="/cache"),
        ],
        urls=[
            LegacyURL(name="http", port=8080, kind="route"),
            LegacyURL(name="https", port=8443, secure=True, kind="route"),
        ],
        envs=[
            LegacyEnvVar(name="NODE_ENV", value="development"),
            LegacyEnvVar(name="DEBUG", value="*"),
        ],
    )


LEGACY_CONFIG_YAML = """\
kind: LocalConfig
apiversion: odo.dev/v1alpha1
ComponentSettings:
  Type: openshift/nodejs:12
  SourceLocation: ./
  SourceType: local
  Ports:
  - 8080/TCP
  Application: app
  Project: myproject
  Name: nodejs-app
  MaxMemory: 512Mi
  DebugPort: 5858
  Storage:
  - Name: data
    Size: 1Gi
    Path: /data
  - Name: cache
    Size: 512Mi
    Path: /cache
  Url:
  - Name: http
    Port: 8080
    Secure: false
    Kind: route
  Envs:
  - Name: NODE_ENV
    Value: development
  - Name: DEBUG
    Value: "*"
"""

IMAGE_STREAMS_YAML = f"""\
kind: List
apiVersion: v1
items:
- kind: ImageStream
  apiVersion: image.openshift.io/v1
  metadata:
    name: nodejs
    namespace: openshift
  spec:
    tags:
    - name: "12"
      from:
        kind: DockerImage
        name: {NODEJS_PULL_SPEC}
  status:
    tags:
    - tag: "12"
      items:
      - image: {NODEJS_DIGEST}
        dockerImageReference: {NODEJS_PULL_SPEC}
- kind: ImageStreamImage
  apiVersion: image.openshift.io/v1
  metadata:
    name: nodejs@{NODEJS_DIGEST}
    namespace: openshift
  image:
    dockerImageMetadata:
      Config:
        WorkingDir: /opt/app-root/src
        Labels:
          io.openshift.s2i.scripts-url: image:///usr/libexec/s2i
          name: ubi8/nodejs-12
"""


@pytest.fixture
def legacy_config_yaml():
    return LEGACY_CONFIG_YAML


@pytest.fixture
def image_streams_yaml():
    return IMAGE_STREAMS_YAML


@pytest.fixture
def nodejs_stream():
    return make_stream


@pytest.fixture
def catalog_factory():
    return make_catalog
