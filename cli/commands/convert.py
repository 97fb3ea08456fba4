# cli/commands/convert.py
"""Conversion commands: workspace, component, colors, text styles."""

import sys
from pathlib import Path
from typing import Optional

import click

from core.converter import (
    ConversionContext,
    convert_component,
    convert_text_styles,
    convert_workspace,
    render_colors,
)
from core.errors import (
    LonaError,
    TokenDecodeError,
    UnknownFrameworkError,
    UnknownTargetError,
    WorkspaceNotFoundError,
)
from core.workspace import Workspace
from plugins.registry import target_registry


class TargetType(click.ParamType):
    """Target name or alias, checked against the registry while parsing arguments."""
    name = "target"

    def convert(self, value, param, ctx):
        try:
            return target_registry.get(value).name
        except UnknownTargetError as e:
            self.fail(str(e), param, ctx)

    def get_metavar(self, param, *args, **kwargs):
        return "[" + "|".join(target_registry.names()) + "]"


TARGET = TargetType()

framework_option = click.option(
    '--framework', '-f',
    help='Framework variant of the target (e.g. reactdom, appkit)',
)


def _make_context(target: str, framework: Optional[str]) -> ConversionContext:
    try:
        return ConversionContext.create(target, framework)
    except UnknownFrameworkError as e:
        raise click.BadParameter(str(e), param_hint="'--framework'")


def _read_input(file: Optional[Path]) -> str:
    if file is None:
        return click.get_text_stream('stdin').read()
    try:
        return file.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise TokenDecodeError(f"{file} is not valid UTF-8: {e}")


def _fail(message: str):
    click.echo(f"❌ {message}", err=True)
    sys.exit(1)


# ============================================================================
# Commands
# ============================================================================

@click.command('workspace')
@click.argument('target', type=TARGET)
@click.argument('workspace', type=click.Path(path_type=Path))
@click.argument('output', type=click.Path(path_type=Path))
@framework_option
def workspace_command(target: str, workspace: Path, output: Path, framework: Optional[str]):
    """Convert every token, component and asset in WORKSPACE into OUTPUT."""
    context = _make_context(target, framework)

    try:
        report = convert_workspace(context, workspace, output)
    except WorkspaceNotFoundError as e:
        _fail(str(e))
    except LonaError as e:
        _fail(f"Conversion failed: {e}")

    click.echo(f"✅ Converted {len(report.converted)}/{report.total_components} components "
               f"to {context.target_name} in {output}")
    click.echo(f"   🎨 Token files: {', '.join(p.name for p in report.token_files)}")
    if report.static_files:
        click.echo(f"   📄 Support files: {', '.join(p.name for p in report.static_files)}")
    if report.assets:
        click.echo(f"   🖼️  Assets copied: {len(report.assets)}")
    if report.skipped_components:
        click.echo(f"   ⏭️  Skipped {report.skipped_components} components "
                   f"({context.target_name} has no component output)")
    if report.failed:
        click.echo(f"⚠️  {len(report.failed)} components failed:")
        for failed in report.failed:
            click.echo(f"   • {failed.path} [{failed.kind.value}]: {failed.message}")


@click.command('component')
@click.argument('target', type=TARGET)
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--workspace', '-w', type=click.Path(exists=True, file_okay=False, path_type=Path),
              help='Workspace directory (default: nearest directory above FILE with colors.json)')
@framework_option
def component_command(target: str, file: Path, workspace: Optional[Path], framework: Optional[str]):
    """Convert a single component FILE and print the result."""
    context = _make_context(target, framework)

    try:
        resolved = Workspace.load(workspace) if workspace else Workspace.find(file)
        click.echo(convert_component(context, resolved, file), nl=False)
    except LonaError as e:
        _fail(str(e))


@click.command('colors')
@click.argument('target', type=TARGET)
@click.argument('file', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@framework_option
def colors_command(target: str, file: Optional[Path], framework: Optional[str]):
    """Convert a color file (or stdin) and print the result."""
    context = _make_context(target, framework)

    try:
        raw = _read_input(file)
        click.echo(render_colors(context, raw), nl=False)
    except LonaError as e:
        _fail(str(e))


@click.command('text-styles')
@click.argument('target', type=TARGET)
@click.argument('file', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--workspace', '-w', type=click.Path(exists=True, file_okay=False, path_type=Path),
              help='Workspace providing colors (default: nearest directory above FILE with colors.json)')
@framework_option
def text_styles_command(target: str, file: Optional[Path], workspace: Optional[Path], framework: Optional[str]):
    """Convert a text style file (or stdin) and print the result."""
    context = _make_context(target, framework)

    try:
        if workspace:
            resolved = Workspace.load(workspace)
        else:
            resolved = Workspace.find(file if file is not None else Path.cwd())
        raw = _read_input(file)
        click.echo(convert_text_styles(context, resolved, raw), nl=False)
    except LonaError as e:
        _fail(str(e))


@click.command('targets')
def targets_command():
    """List available targets."""
    click.echo("Available targets:")
    for info in target_registry.list_targets():
        aliases = f" (alias: {', '.join(info['aliases'])})" if info['aliases'] else ""
        click.echo(f"  • {info['name']}{aliases} [{info['extension']}] - {info['description']}")
        if info['frameworks']:
            click.echo(f"      frameworks: {', '.join(info['frameworks'])} (default: {info['frameworks'][0]})")
        capabilities = ["colors"]
        if info['text_styles']:
            capabilities.append("text styles")
        if info['components']:
            capabilities.append("components")
        click.echo(f"      outputs: {', '.join(capabilities)}")
