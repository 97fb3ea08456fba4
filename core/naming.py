# core/naming.py
"""Identifier case conversion shared by token parsing and target templates."""

import re
from typing import List


def _words(text: str) -> List[str]:
    return [word for word in re.split(r'[^a-zA-Z0-9]+', text) if word]


def camel_case(text: str) -> str:
    """Convert to camelCase, keeping existing inner capitals."""
    words = _words(text)
    if not words:
        return text
    first = words[0][0].lower() + words[0][1:]
    return first + ''.join(w[0].upper() + w[1:] for w in words[1:])


def pascal_case(text: str) -> str:
    """Convert to PascalCase, keeping existing inner capitals."""
    return ''.join(w[0].upper() + w[1:] for w in _words(text))
