# core/tokens/text_styles.py
"""Text style token decoding.

Text styles reference colors by id, so they are always parsed against an
already-parsed :class:`ColorSet`.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.errors import TokenDecodeError
from core.naming import camel_case
from core.tokens.colors import ColorSet, parse_color_value

logger = logging.getLogger(__name__)

FONT_WEIGHTS = ("100", "200", "300", "400", "500", "600", "700", "800", "900")


class TextStyle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    font_family: Optional[str] = Field(default=None, alias="fontFamily")
    font_weight: Optional[str] = Field(default=None, alias="fontWeight")
    font_size: Optional[float] = Field(default=None, alias="fontSize")
    line_height: Optional[float] = Field(default=None, alias="lineHeight")
    letter_spacing: Optional[float] = Field(default=None, alias="letterSpacing")
    color: Optional[str] = None
    text_transform: Optional[str] = Field(default=None, alias="textTransform")

    @field_validator("font_weight", mode="before")
    @classmethod
    def _check_weight(cls, value: Union[str, int, None]) -> Optional[str]:
        if value is None:
            return None
        weight = str(value)
        if weight not in FONT_WEIGHTS:
            raise ValueError(f"font weight must be one of {', '.join(FONT_WEIGHTS)}")
        return weight

    def color_reference(self, colors: ColorSet) -> Optional[str]:
        """Color id this style points at, if it points at a token."""
        if self.color is not None and self.color in colors:
            return self.color
        return None


class TextStyleSet:
    """Ordered collection of text styles, looked up by id."""

    def __init__(self, styles: List[TextStyle], default_style_name: Optional[str] = None):
        self._styles = list(styles)
        self._by_id = {style.id: style for style in self._styles}
        self.default_style_name = default_style_name

    def __iter__(self) -> Iterator[TextStyle]:
        return iter(self._styles)

    def __len__(self) -> int:
        return len(self._styles)

    def __contains__(self, style_id: object) -> bool:
        return style_id in self._by_id

    def get(self, style_id: str) -> Optional[TextStyle]:
        return self._by_id.get(style_id)

    @property
    def default_style(self) -> Optional[TextStyle]:
        if self.default_style_name is None:
            return None
        return self._by_id.get(self.default_style_name)


def _style_entries(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, dict) and isinstance(data.get("styles"), list):
        return data["styles"]
    if isinstance(data, dict) and "styles" not in data:
        entries = []
        for key, value in data.items():
            if key == "defaultStyleName":
                continue
            if not isinstance(value, dict):
                raise TokenDecodeError(f"Text style '{key}' must be an object")
            entries.append({"id": key, **value})
        return entries
    raise TokenDecodeError("Text style file must be an object with a 'styles' list or an id -> style mapping")


def parse_text_styles(colors: ColorSet, raw_text: str) -> TextStyleSet:
    """Parse a text style file, resolving color references against ``colors``."""
    if colors is None:
        raise TokenDecodeError("Text styles require parsed colors")

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise TokenDecodeError(f"Invalid JSON in text style file: {e}")

    styles: List[TextStyle] = []
    keys: Dict[str, str] = {}
    for index, entry in enumerate(_style_entries(data)):
        if not isinstance(entry, dict):
            raise TokenDecodeError(f"styles[{index}]: entry must be an object")
        fields = dict(entry)
        if isinstance(fields.get("id"), str):
            fields.setdefault("name", fields["id"])
        try:
            style = TextStyle.model_validate(fields)
        except ValidationError as e:
            raise TokenDecodeError(f"styles[{index}]: {e}")

        if style.id in (s.id for s in styles):
            raise TokenDecodeError(f"Duplicate text style id: {style.id}")
        key = camel_case(style.id)
        if key in keys:
            raise TokenDecodeError(f"Text style ids '{keys[key]}' and '{style.id}' both map to '{key}'")
        keys[key] = style.id
        if style.color is not None and style.color not in colors and parse_color_value(style.color) is None:
            raise TokenDecodeError(f"Text style '{style.id}' references unknown color '{style.color}'")
        styles.append(style)

    default_style_name = data.get("defaultStyleName") if isinstance(data, dict) else None
    if default_style_name is not None and default_style_name not in (s.id for s in styles):
        raise TokenDecodeError(f"Default text style '{default_style_name}' is not defined")

    logger.debug(f"Parsed {len(styles)} text styles")
    return TextStyleSet(styles, default_style_name)


def load_text_styles(colors: ColorSet, path: Path) -> TextStyleSet:
    try:
        raw_text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise TokenDecodeError(f"Text style file {path} is not valid UTF-8: {e}")
    return parse_text_styles(colors, raw_text)
