# core/converter/pipeline.py
"""Token and component conversion for a single target."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from core.components.document import ComponentDocument
from core.converter.context import ConversionContext
from core.errors import TokenDecodeError
from core.tokens.colors import ColorSet, load_colors, parse_colors
from core.tokens.text_styles import TextStyleSet, load_text_styles, parse_text_styles
from core.workspace import ComponentLibrary, Workspace
from plugins.base import ComponentLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceTokens:
    colors: ColorSet
    text_styles: TextStyleSet


def render_colors(context: ConversionContext, raw_color_text: str) -> str:
    """Parse a color file and render it for the context's target."""
    colors = parse_colors(raw_color_text)
    return context.target.render_colors(context, colors)


def render_text_styles(context: ConversionContext, colors: ColorSet, raw_text_style_text: str) -> str:
    """Parse a text style file against ``colors`` and render it.

    Returns an empty string for targets without text styles.
    """
    if colors is None:
        raise TokenDecodeError("Text styles cannot be rendered without colors")
    text_styles = parse_text_styles(colors, raw_text_style_text)
    return context.target.render_text_styles(context, colors, text_styles)


def load_tokens(workspace: Workspace) -> WorkspaceTokens:
    """Parse the workspace's colors, then its text styles."""
    colors = load_colors(workspace.colors_path)
    if workspace.text_styles_path.is_file():
        text_styles = load_text_styles(colors, workspace.text_styles_path)
    else:
        logger.warning(f"No {workspace.settings.text_styles_file} in {workspace.root}; using no text styles")
        text_styles = TextStyleSet([])
    return WorkspaceTokens(colors=colors, text_styles=text_styles)


def render_component(
    context: ConversionContext,
    name: str,
    colors: ColorSet,
    text_styles: TextStyleSet,
    lookup: ComponentLookup,
    document: ComponentDocument,
) -> str:
    return context.target.render_component(context, name, colors, text_styles, lookup, document)


def convert_component(
    context: ConversionContext,
    workspace: Workspace,
    path: Path,
    tokens: Optional[WorkspaceTokens] = None,
    library: Optional[ComponentLibrary] = None,
) -> str:
    """Decode and render one component file of ``workspace``."""
    tokens = tokens or load_tokens(workspace)
    library = library or ComponentLibrary(workspace)
    document = library.load(path)
    return render_component(
        context,
        document.name,
        tokens.colors,
        tokens.text_styles,
        library.lookup,
        document,
    )


def convert_text_styles(context: ConversionContext, workspace: Workspace, raw_text_style_text: str) -> str:
    """Render standalone text styles, resolving colors from ``workspace``."""
    colors = load_colors(workspace.colors_path)
    return render_text_styles(context, colors, raw_text_style_text)
