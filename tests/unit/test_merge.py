"""
Tests for core.merge: preserved regions of regenerated files.
"""

import logging

import pytest

from core.merge import (
    KEEP_ABOVE_MARKER,
    KEEP_BELOW_MARKER,
    find_contents_above,
    find_contents_below,
    merge,
    write_merged,
)


NEW = "generated line 1\ngenerated line 2\n"


# ============================================================================
# REGION EXTRACTION TESTS
# ============================================================================

class TestRegions:
    """Test cases for marker detection."""

    def test_contents_above_includes_marker_line(self):
        existing = "import custom\n// LONA: KEEP ABOVE\nold\n"
        assert find_contents_above(existing) == "import custom\n// LONA: KEEP ABOVE"

    def test_contents_below_includes_marker_line(self):
        existing = "old\n// LONA: KEEP BELOW\nextra()\n"
        assert find_contents_below(existing) == "// LONA: KEEP BELOW\nextra()\n"

    def test_no_markers(self):
        assert find_contents_above("plain file\n") is None
        assert find_contents_below("plain file\n") is None

    def test_marker_may_appear_anywhere_in_line(self):
        existing = f"<!-- {KEEP_ABOVE_MARKER} -->\nold"
        assert find_contents_above(existing) == f"<!-- {KEEP_ABOVE_MARKER} -->"

    def test_first_marker_wins_with_warning(self, caplog):
        existing = f"a\n{KEEP_ABOVE_MARKER}\nb\n{KEEP_ABOVE_MARKER}\nc"
        with caplog.at_level(logging.WARNING, logger="core.merge"):
            assert find_contents_above(existing) == f"a\n{KEEP_ABOVE_MARKER}"
        assert "only the first" in caplog.text


# ============================================================================
# MERGE TESTS
# ============================================================================

class TestMerge:
    """Test cases for splicing regions around new content."""

    def test_no_existing_file(self):
        assert merge(NEW, None) == NEW

    def test_existing_without_markers_is_replaced(self):
        assert merge(NEW, "old content\n") == NEW

    def test_keep_above(self):
        existing = f"// mine\n// {KEEP_ABOVE_MARKER}\nold generated\n"
        assert merge(NEW, existing) == f"// mine\n// {KEEP_ABOVE_MARKER}\n\n{NEW}"

    def test_keep_below(self):
        existing = f"old generated\n// {KEEP_BELOW_MARKER}\n// mine\n"
        assert merge(NEW, existing) == f"{NEW}\n// {KEEP_BELOW_MARKER}\n// mine\n"

    def test_keep_above_and_below(self):
        existing = f"top\n{KEEP_ABOVE_MARKER}\nold\n{KEEP_BELOW_MARKER}\nbottom"
        assert merge(NEW, existing) == f"top\n{KEEP_ABOVE_MARKER}\n\n{NEW}\n{KEEP_BELOW_MARKER}\nbottom"

    def test_markers_in_new_text_are_ignored(self):
        new = f"{KEEP_ABOVE_MARKER}\ngenerated\n"
        assert merge(new, "unrelated\n") == new

    @pytest.mark.parametrize("existing", [
        None,
        "stale\n",
        f"top\n{KEEP_ABOVE_MARKER}\nstale\n",
        f"stale\n{KEEP_BELOW_MARKER}\nbottom\n",
        f"top\n{KEEP_ABOVE_MARKER}\nstale\n{KEEP_BELOW_MARKER}\nbottom\n",
    ])
    def test_merge_is_idempotent(self, existing):
        once = merge(NEW, existing)
        assert merge(NEW, once) == once


class TestWriteMerged:
    """Test cases for merging against files on disk."""

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "a" / "b" / "File.js"
        write_merged(path, NEW)
        assert path.read_text() == NEW

    def test_preserves_region_of_existing_file(self, tmp_path):
        path = tmp_path / "File.js"
        path.write_text(f"import x from 'y'\n// {KEEP_ABOVE_MARKER}\nold\n")
        result = write_merged(path, NEW)
        assert path.read_text() == result
        assert result.startswith("import x from 'y'\n")
        assert result.endswith(NEW)
        assert "old" not in result
