"""Value resolution shared by the component renderers."""

import posixpath
from typing import Any, Optional, Tuple

from core.components.document import COLOR_PROPERTIES, ComponentDocument, Layer
from core.errors import RenderError, UnknownParameterError
from core.tokens.colors import ColorSet, Rgba, parse_color_value
from core.tokens.text_styles import TextStyle, TextStyleSet

ASSET_PREFIX = "file://"


def resolve_color(value: Any, colors: ColorSet) -> Tuple[Optional[str], Optional[Rgba]]:
    """Return (token id, None) for a color token or (None, rgba) for a literal."""
    if isinstance(value, str):
        if value in colors:
            return value, None
        rgba = parse_color_value(value)
        if rgba is not None:
            return None, rgba
    raise RenderError(f"'{value}' is neither a color token nor a color value")


def resolve_text_style(value: Any, text_styles: TextStyleSet) -> TextStyle:
    style = text_styles.get(value) if isinstance(value, str) else None
    if style is None:
        raise RenderError(f"Unknown text style '{value}'")
    return style


def asset_path(value: Any) -> str:
    """Relative path of a ``file://`` image reference."""
    if not isinstance(value, str) or not value.startswith(ASSET_PREFIX):
        raise RenderError(f"Image '{value}' must be a {ASSET_PREFIX} URL")
    path = posixpath.normpath(value[len(ASSET_PREFIX):])
    return path if path.startswith(".") else f"./{path}"


def asset_name(value: Any) -> str:
    return posixpath.splitext(posixpath.basename(asset_path(value)))[0]


def check_component_arguments(layer: Layer, sibling: ComponentDocument) -> None:
    """Layer parameters of an embedded component must be parameters of that component."""
    for key in layer.parameters:
        if sibling.parameter(key) is None:
            raise UnknownParameterError(f"{layer.id}.{key}", sibling.name)


def value_kind(layer: Layer, prop: str, lookup) -> str:
    """How a value assigned to ``layer.prop`` is interpreted: color, font, image or literal."""
    if layer.is_builtin:
        if prop in COLOR_PROPERTIES:
            return "color"
        if prop == "font":
            return "font"
        if prop == "image":
            return "image"
        return "literal"

    parameter = lookup(layer.type).parameter(prop)
    if parameter is None:
        raise UnknownParameterError(f"{layer.id}.{prop}", layer.type)
    return {"Color": "color", "URL": "image"}.get(parameter.type, "literal")
