# core/merge.py
"""Preserve developer-owned regions of generated files across regeneration.

A previously generated file may contain a line with ``LONA: KEEP ABOVE``
and/or a line with ``LONA: KEEP BELOW``. Everything from the top of the file
through the first KEEP ABOVE line, and everything from the first KEEP BELOW
line to the end, is carried over into the regenerated file. Regions are taken
from the existing file only; markers in newly generated text are ignored.

Only the first marker of each kind counts. Files with repeated markers are
merged the same way, with a warning.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

KEEP_ABOVE_MARKER = "LONA: KEEP ABOVE"
KEEP_BELOW_MARKER = "LONA: KEEP BELOW"


def _marker_indexes(lines: List[str], marker: str) -> List[int]:
    return [index for index, line in enumerate(lines) if marker in line]


def _first_marker(lines: List[str], marker: str) -> Optional[int]:
    indexes = _marker_indexes(lines, marker)
    if not indexes:
        return None
    if len(indexes) > 1:
        logger.warning(
            f"Found {len(indexes)} '{marker}' markers; only the first (line {indexes[0] + 1}) is used"
        )
    return indexes[0]


def find_contents_above(existing: str) -> Optional[str]:
    """Lines from the start of the file through the first KEEP ABOVE marker."""
    lines = existing.split("\n")
    index = _first_marker(lines, KEEP_ABOVE_MARKER)
    if index is None:
        return None
    return "\n".join(lines[:index + 1])


def find_contents_below(existing: str) -> Optional[str]:
    """Lines from the first KEEP BELOW marker through the end of the file."""
    lines = existing.split("\n")
    index = _first_marker(lines, KEEP_BELOW_MARKER)
    if index is None:
        return None
    return "\n".join(lines[index:])


def preserved_regions(existing: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    if existing is None:
        return None, None
    return find_contents_above(existing), find_contents_below(existing)


def merge(new_text: str, existing: Optional[str]) -> str:
    """Splice preserved regions of ``existing`` around ``new_text``."""
    above, below = preserved_regions(existing)
    contents = new_text
    if above is not None:
        contents = above + "\n\n" + contents
    if below is not None:
        contents = contents + "\n" + below
    return contents


def read_existing(path: Path) -> Optional[str]:
    path = Path(path)
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def write_merged(path: Path, new_text: str) -> str:
    """Merge ``new_text`` with whatever is at ``path`` and write the result."""
    path = Path(path)
    contents = merge(new_text, read_existing(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    return contents
