# core/converter/__init__.py
"""Workspace conversion pipeline."""

from .context import ConversionContext
from .outcome import Outcome, capture
from .pipeline import (
    WorkspaceTokens,
    convert_component,
    convert_text_styles,
    load_tokens,
    render_colors,
    render_component,
    render_text_styles,
)
from .batch import (
    BatchReport,
    WorkspaceConverter,
    convert_workspace,
    convert_workspace_async,
    discover_workspace_files,
)

__all__ = [
    'ConversionContext',
    'Outcome',
    'capture',
    'WorkspaceTokens',
    'convert_component',
    'convert_text_styles',
    'load_tokens',
    'render_colors',
    'render_component',
    'render_text_styles',
    'BatchReport',
    'WorkspaceConverter',
    'convert_workspace',
    'convert_workspace_async',
    'discover_workspace_files',
]
