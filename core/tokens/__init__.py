"""Design token decoding (colors, text styles)."""

from .colors import ColorSet, ColorToken, Rgba, load_colors, parse_color_value, parse_colors
from .text_styles import TextStyle, TextStyleSet, load_text_styles, parse_text_styles
