# core/tokens/colors.py
"""Color token decoding."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ValidationError, field_validator

from core.errors import TokenDecodeError
from core.naming import camel_case

logger = logging.getLogger(__name__)

_HEX_PATTERN = re.compile(r'^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')
_RGB_PATTERN = re.compile(
    r'^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$'
)


@dataclass(frozen=True)
class Rgba:
    """Color channels normalized to 0..1."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def to_hex(self) -> str:
        channels = [self.red, self.green, self.blue]
        if self.alpha < 1.0:
            channels.append(self.alpha)
        return '#' + ''.join(f"{round(c * 255):02X}" for c in channels)


def parse_color_value(value: str) -> Optional[Rgba]:
    """Parse a hex or rgb()/rgba() color literal, or return None."""
    value = value.strip()

    match = _HEX_PATTERN.match(value)
    if match:
        digits = match.group(1)
        if len(digits) in (3, 4):
            digits = ''.join(d * 2 for d in digits)
        channels = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
        return Rgba(*channels)

    match = _RGB_PATTERN.match(value)
    if match:
        red, green, blue = (int(match.group(i)) for i in (1, 2, 3))
        if max(red, green, blue) > 255:
            return None
        alpha = float(match.group(4)) if match.group(4) is not None else 1.0
        if alpha > 1.0:
            return None
        return Rgba(red / 255, green / 255, blue / 255, alpha)

    return None


class ColorToken(BaseModel):
    id: str
    name: str
    value: str
    comment: str = ""

    @field_validator("value")
    @classmethod
    def _check_value(cls, value: str) -> str:
        if parse_color_value(value) is None:
            raise ValueError(f"'{value}' is not a valid color")
        return value

    @property
    def rgba(self) -> Rgba:
        return parse_color_value(self.value)


class ColorSet:
    """Ordered collection of color tokens, looked up by id."""

    def __init__(self, colors: List[ColorToken]):
        self._colors = list(colors)
        self._by_id = {color.id: color for color in self._colors}

    def __iter__(self) -> Iterator[ColorToken]:
        return iter(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __contains__(self, color_id: object) -> bool:
        return color_id in self._by_id

    def get(self, color_id: str) -> Optional[ColorToken]:
        return self._by_id.get(color_id)

    @property
    def ids(self) -> List[str]:
        return [color.id for color in self._colors]


def _color_entries(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, dict) and isinstance(data.get("colors"), list):
        return data["colors"]
    if isinstance(data, dict) and "colors" not in data:
        # Flat form: {"red": "#FF0000"}
        return [{"id": key, "value": value} for key, value in data.items()]
    raise TokenDecodeError("Color file must be an object with a 'colors' list or an id -> value mapping")


def parse_colors(raw_text: str) -> ColorSet:
    """Parse the contents of a color token file."""
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise TokenDecodeError(f"Invalid JSON in color file: {e}")

    colors: List[ColorToken] = []
    keys: Dict[str, str] = {}
    for index, entry in enumerate(_color_entries(data)):
        if not isinstance(entry, dict):
            raise TokenDecodeError(f"colors[{index}]: entry must be an object")
        fields = dict(entry)
        if isinstance(fields.get("id"), str):
            fields.setdefault("name", fields["id"])
        try:
            color = ColorToken(**fields)
        except ValidationError as e:
            raise TokenDecodeError(f"colors[{index}]: {e}")
        if color.id in keys.values():
            raise TokenDecodeError(f"Duplicate color id: {color.id}")
        key = camel_case(color.id)
        if key in keys:
            raise TokenDecodeError(f"Color ids '{keys[key]}' and '{color.id}' both map to '{key}'")
        keys[key] = color.id
        colors.append(color)

    logger.debug(f"Parsed {len(colors)} colors")
    return ColorSet(colors)


def load_colors(path: Path) -> ColorSet:
    try:
        raw_text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise TokenDecodeError(f"Color file {path} is not valid UTF-8: {e}")
    return parse_colors(raw_text)
