"""
Command Line Interface for Project-X.
"""
import logging

import click
import yaml

from ..CONFIG.config_store import ConfigStore, CONFIG_FILENAME
from ..errors import ProjectXError
from ..MANAGERS.service_composer import ServiceComposer
from ..PLUGINS.manifest import JsonManifest
from ..PLUGINS.resolver import CapabilityPluginResolver


@click.group()
@click.option('--file', '-f', default=CONFIG_FILENAME, help='Project configuration path')
@click.option('--manifest', '-m', default=None, help='Installed package manifest (JSON)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, file, manifest, verbose):
    """
    Project-X - development environment composition.

    Composes the services declared in the project configuration and lists
    the project, engine and platform types available to it.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    ctx.ensure_object(dict)
    ctx.obj['file'] = file
    ctx.obj['resolver'] = CapabilityPluginResolver(JsonManifest(manifest) if manifest else None)


def _load_config(ctx) -> ConfigStore:
    try:
        return ConfigStore.load(ctx.obj['file'])
    except ProjectXError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.pass_context
def services(ctx):
    """Print the composed services as compose YAML."""
    config = _load_config(ctx)
    composer = ServiceComposer(ctx.obj['resolver'])
    try:
        composed = composer.compose_services(config)
    except ProjectXError as e:
        raise click.ClickException(str(e)) from e

    document = {'services': {name: service.as_dict() for name, service in composed.items()}}
    click.echo(yaml.safe_dump(document, default_flow_style=False, sort_keys=False), nl=False)


@cli.command()
@click.argument('family', type=click.Choice(['project', 'engine', 'platform']))
@click.pass_context
def types(ctx, family):
    """List available types of a capability family."""
    resolver = ctx.obj['resolver']
    try:
        options = resolver.get_options(family)
    except ProjectXError as e:
        raise click.ClickException(str(e)) from e
    for identifier, label in options.items():
        click.echo(f"{identifier:20} {label}")
    for diagnostic in resolver.diagnostics:
        click.echo(f"skipped: {diagnostic}", err=True)


@cli.command()
@click.argument('service_type')
@click.pass_context
def find(ctx, service_type):
    """List declared services of a builtin kind."""
    config = _load_config(ctx)
    names = ServiceComposer(ctx.obj['resolver']).get_service_names_by_type(config, service_type)
    if not names:
        ctx.exit(1)
    for name in names:
        click.echo(name)


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
