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
Command Line Interface for S2D.
"""
import os
import sys

import click
from pydantic import ValidationError

from ..errors import ConversionError
from ..PARSERS.legacy_config_parser import LegacyConfigParser, LEGACY_CONFIG_PATH
from ..REGISTRY.image_reference import ImageReference
from ..REGISTRY.image_resolver import ImageResolver
from ..REGISTRY.image_stream_catalog import ImageStreamCatalog
from ..REGISTRY.image_stream_client import ImageStreamClient
from ..CONVERTERS.to_devfile import DevfileConverter
from ..CONVERTERS.to_env_settings import EnvSettingsConverter, ENV_SETTINGS_PATH
from ..CONVERTERS.report import ConversionReport
from ..UTILS.log_setup import init_logging
from ..UTILS.settings import Settings


@click.group()
@click.option('--context', '-c', default='.', type=click.Path(file_okay=False), help='Component context directory')
@click.option('--verbose', '-v', is_flag=True, help='Show debug output')
@click.pass_context
def cli(ctx, context, verbose):
    """
    S2D - S2I to Devfile converter.

    Converts an S2I component into a devfile and its local env settings.
    """
    ctx.ensure_object(dict)
    try:
        settings = Settings.load(context)
    except ValidationError as e:
        _fail(f"invalid S2D_* settings: {e}")
    ctx.obj['context'] = context
    ctx.obj['settings'] = settings
    ctx.obj['logger'] = init_logging(verbose=verbose, level=settings.log_level)


def _load_config(ctx, config_path):
    path = config_path or os.path.join(ctx.obj['context'], LEGACY_CONFIG_PATH)
    return LegacyConfigParser().parse(path)


def _fail(error):
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@cli.command()
@click.option('--config', 'config_path', default=None, help='Legacy config file (default: <context>/.odo/config.yaml)')
@click.option('--image-streams', '-i', default=None, type=click.Path(dir_okay=False), help='YAML export of image streams and images')
@click.option('--server', '-s', default=None, help='Cluster API server for image stream lookups')
@click.option('--token', '-t', default=None, help='Bearer token for the API server')
@click.option('--inject-s2i-env/--no-inject-s2i-env', default=None, help='Add S2I path variables of the builder image')
@click.pass_context
def convert(ctx, config_path, image_streams, server, token, inject_s2i_env):
    """Write devfile.yaml and .odo/env/env.yaml for an S2I component."""
    settings = ctx.obj['settings']
    logger = ctx.obj['logger']
    context = ctx.obj['context']

    server = server or settings.image_api_url
    if not image_streams and not server:
        raise click.UsageError("one of --image-streams or --server is required")

    if inject_s2i_env is None:
        inject_s2i_env = settings.inject_s2i_env

    try:
        if image_streams:
            lookup = ImageStreamCatalog.load(image_streams, logger=logger)
        else:
            lookup = ImageStreamClient(server, token=token or settings.token, logger=logger)

        config = _load_config(ctx, config_path)
        devfile_converter = DevfileConverter(
            config,
            ImageResolver(lookup, logger=logger),
            logger=logger,
            inject_s2i_env=inject_s2i_env,
        )
        descriptor = devfile_converter.build()
        devfile_path = devfile_converter.write(descriptor, context)

        env_converter = EnvSettingsConverter(
            config, logger=logger, default_debug_port=settings.default_debug_port
        )
        record = env_converter.convert(context)
    except (ConversionError, OSError) as e:
        _fail(e)

    click.echo(ConversionReport().render(
        descriptor,
        record,
        devfile_path=devfile_path,
        env_path=os.path.join(context, ENV_SETTINGS_PATH),
    ))


@cli.command()
@click.option('--config', 'config_path', default=None, help='Legacy config file (default: <context>/.odo/config.yaml)')
@click.pass_context
def env(ctx, config_path):
    """Write only .odo/env/env.yaml for an S2I component."""
    settings = ctx.obj['settings']
    try:
        config = _load_config(ctx, config_path)
        record = EnvSettingsConverter(
            config, logger=ctx.obj['logger'], default_debug_port=settings.default_debug_port
        ).convert(ctx.obj['context'])
    except ConversionError as e:
        _fail(e)

    click.echo(f"{'NAME':12} {record.name}")
    click.echo(f"{'PROJECT':12} {record.project}")
    click.echo(f"{'APP':12} {record.application}")
    if record.debug_port is not None:
        click.echo(f"{'DEBUG PORT':12} {record.debug_port}")


@cli.command(name='parse-type')
@click.argument('component_type')
def parse_type(component_type):
    """Show the builder image a component type refers to."""
    try:
        ref = ImageReference.parse(component_type)
    except ConversionError as e:
        _fail(e)
    click.echo(f"{'NAMESPACE':10} {ref.namespace}")
    click.echo(f"{'NAME':10} {ref.name}")
    click.echo(f"{'TAG':10} {ref.tag}")


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
