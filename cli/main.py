# cli/main.py
"""Main CLI entry point for the Lona converter."""

import logging

import click

from core import __version__


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Log every converted file')
def cli(verbose: bool):
    """Lona - convert design workspaces into JavaScript, Swift or XML."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(logging.INFO if verbose else logging.WARNING)


def register_commands():
    """Register all CLI commands."""
    from cli.commands.convert import (
        colors_command,
        component_command,
        targets_command,
        text_styles_command,
        workspace_command,
    )
    cli.add_command(workspace_command)
    cli.add_command(component_command)
    cli.add_command(colors_command)
    cli.add_command(text_styles_command)
    cli.add_command(targets_command)


register_commands()


if __name__ == '__main__':
    cli()
