"""
Tests for workspace discovery, settings and sibling component lookup.
"""

import pytest

from core.config import Settings, WorkspaceConfig
from core.errors import (
    ComponentDecodeError,
    ComponentNotFoundError,
    ErrorKind,
    WorkspaceConfigError,
    WorkspaceNotFoundError,
)
from core.workspace import (
    ComponentLibrary,
    Workspace,
    locate_workspace,
    relative_import,
    require_workspace,
)


# ============================================================================
# DISCOVERY TESTS
# ============================================================================

class TestLocateWorkspace:
    """Test cases for walking up to the workspace root."""

    def test_from_nested_file(self, workspace_dir):
        card = workspace_dir / "nested" / "Card.component"
        assert locate_workspace(card) == workspace_dir.resolve()

    def test_from_root_directory(self, workspace_dir):
        assert locate_workspace(workspace_dir) == workspace_dir.resolve()

    def test_not_found(self, tmp_path):
        lonely = tmp_path / "lonely"
        lonely.mkdir()
        assert locate_workspace(lonely, marker="no-such-marker.json") is None
        with pytest.raises(WorkspaceNotFoundError, match="--workspace"):
            require_workspace(lonely, marker="no-such-marker.json")


class TestWorkspace:
    """Test cases for the Workspace value."""

    def test_load_requires_colors(self, tmp_path):
        with pytest.raises(WorkspaceNotFoundError):
            Workspace.load(tmp_path)

    def test_find(self, workspace_dir):
        workspace = Workspace.find(workspace_dir / "nested" / "Card.component")
        assert workspace.root == workspace_dir.resolve()
        assert workspace.colors_path.name == "colors.json"
        assert workspace.text_styles_path.name == "textStyles.json"

    def test_relative_path_and_component_name(self, workspace_dir):
        workspace = Workspace.load(workspace_dir)
        card = workspace_dir / "nested" / "Card.component"
        assert workspace.relative_path(card) == "nested/Card.component"
        assert workspace.component_name(card) == "Card"

    def test_find_component_files_sorted(self, workspace_dir):
        (workspace_dir / "Alpha.component").write_text("{}")
        workspace = Workspace.load(workspace_dir)
        names = [workspace.relative_path(p) for p in workspace.find_component_files()]
        assert names == ["Alpha.component", "Button.component", "nested/Card.component"]

    def test_node_modules_ignored(self, workspace_dir):
        vendored = workspace_dir / "node_modules" / "pkg" / "Vendored.component"
        vendored.parent.mkdir(parents=True)
        vendored.write_text("{}")
        workspace = Workspace.load(workspace_dir)
        assert vendored.resolve() not in workspace.find_component_files()

    def test_workspace_config_ignore(self, workspace_dir):
        (workspace_dir / "lona.json").write_text('{"ignore": ["nested"]}')
        workspace = Workspace.load(workspace_dir)
        assert "nested" in workspace.ignored_names
        assert [p.name for p in workspace.find_component_files()] == ["Button.component"]

    def test_invalid_workspace_config(self, workspace_dir):
        (workspace_dir / "lona.json").write_text('{"ignore": "nested"}')
        with pytest.raises(WorkspaceConfigError, match="Invalid workspace config"):
            Workspace.load(workspace_dir)

    def test_workspace_config_not_utf8(self, workspace_dir):
        (workspace_dir / "lona.json").write_bytes(b'{"ignore": ["\xff"]}')
        with pytest.raises(WorkspaceConfigError):
            Workspace.load(workspace_dir)


class TestSettings:
    """Test cases for environment driven settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.colors_file == "colors.json"
        assert settings.component_extension == ".component"
        assert settings.ignore == ["node_modules"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LONA_COLORS_FILE", "palette.json")
        assert Settings().colors_file == "palette.json"

    def test_workspace_config_defaults(self, tmp_path):
        assert WorkspaceConfig.load(tmp_path, Settings()).ignore == []


# ============================================================================
# COMPONENT LIBRARY TESTS
# ============================================================================

class TestComponentLibrary:
    """Test cases for sibling lookup by name."""

    def test_lookup(self, workspace_dir):
        library = ComponentLibrary(Workspace.load(workspace_dir))
        button = library.lookup("Button")
        assert button.name == "Button"
        assert [p.name for p in button.parameters] == ["title", "enabled"]
        assert library("Button") is button

    def test_lookup_nested(self, workspace_dir):
        library = ComponentLibrary(Workspace.load(workspace_dir))
        assert library.lookup("Card").relative_path == "nested/Card.component"

    def test_not_found(self, workspace_dir):
        library = ComponentLibrary(Workspace.load(workspace_dir))
        with pytest.raises(ComponentNotFoundError, match="Missing"):
            library.lookup("Missing")

    def test_load_not_utf8(self, workspace_dir):
        latin = workspace_dir / "Latin.component"
        latin.write_bytes(b'{"root": {"id": "Caf\xe9", "type": "View"}}')
        library = ComponentLibrary(Workspace.load(workspace_dir))
        with pytest.raises(ComponentDecodeError, match="not valid UTF-8") as exc_info:
            library.load(latin)
        assert exc_info.value.kind == ErrorKind.DECODE


class TestRelativeImport:
    """Test cases for import specifiers between workspace files."""

    @pytest.mark.parametrize("from_path,to_path,expected", [
        ("Button.component", "Colors", "./Colors"),
        ("nested/Card.component", "Colors", "../Colors"),
        ("nested/Card.component", "Button.component", "../Button"),
        ("Button.component", "nested/Card.component", "./nested/Card"),
        ("a/One.component", "a/Two.component", "./Two"),
    ])
    def test_relative_import(self, from_path, to_path, expected):
        assert relative_import(from_path, to_path) == expected
