# core/workspace.py
"""Workspace discovery and sibling component lookup."""

import logging
import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from core.components.document import ComponentDocument, decode_component
from core.config import Settings, WorkspaceConfig, get_settings
from core.errors import ComponentDecodeError, ComponentNotFoundError, WorkspaceNotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def locate_workspace(start_path: PathLike, marker: Optional[str] = None) -> Optional[Path]:
    """Walk up from ``start_path`` to the nearest directory containing the color file."""
    marker = marker or get_settings().colors_file
    current = Path(start_path).resolve()
    if not current.is_dir():
        current = current.parent

    while True:
        if (current / marker).is_file():
            logger.debug(f"Found workspace at {current}")
            return current
        if current.parent == current:
            return None
        current = current.parent


def require_workspace(start_path: PathLike, marker: Optional[str] = None) -> Path:
    marker = marker or get_settings().colors_file
    workspace = locate_workspace(start_path, marker)
    if workspace is None:
        raise WorkspaceNotFoundError(start_path, marker)
    return workspace


@dataclass(frozen=True)
class Workspace:
    root: Path
    config: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    settings: Settings = field(default_factory=get_settings)

    @classmethod
    def load(cls, root: PathLike, settings: Optional[Settings] = None) -> "Workspace":
        """Open an explicit workspace directory; it must contain the color file."""
        settings = settings or get_settings()
        root = Path(root).resolve()
        if not (root / settings.colors_file).is_file():
            raise WorkspaceNotFoundError(root, settings.colors_file)
        return cls(root=root, config=WorkspaceConfig.load(root, settings), settings=settings)

    @classmethod
    def find(cls, start_path: PathLike, settings: Optional[Settings] = None) -> "Workspace":
        settings = settings or get_settings()
        return cls.load(require_workspace(start_path, settings.colors_file), settings)

    @property
    def colors_path(self) -> Path:
        return self.root / self.settings.colors_file

    @property
    def text_styles_path(self) -> Path:
        return self.root / self.settings.text_styles_file

    @property
    def ignored_names(self) -> List[str]:
        return list(dict.fromkeys(self.settings.ignore + self.config.ignore))

    def is_ignored(self, path: Path) -> bool:
        """True when any directory between the root and ``path`` is ignored."""
        try:
            parts = path.relative_to(self.root).parts[:-1]
        except ValueError:
            return True
        return any(part in self.ignored_names for part in parts)

    def relative_path(self, path: Path) -> str:
        """POSIX path of ``path`` relative to the workspace root."""
        return Path(os.path.relpath(Path(path).resolve(), self.root)).as_posix()

    def component_name(self, path: Path) -> str:
        name = Path(path).name
        extension = self.settings.component_extension
        return name[:-len(extension)] if name.endswith(extension) else Path(path).stem

    def find_component_files(self) -> List[Path]:
        pattern = f"**/*{self.settings.component_extension}"
        return sorted(p for p in self.root.glob(pattern) if p.is_file() and not self.is_ignored(p))


class ComponentLibrary:
    """Resolves sibling components by name within one workspace.

    Decoded documents are cached for the duration of a run.
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace
        self._paths: Optional[Dict[str, Path]] = None
        self._documents: Dict[str, ComponentDocument] = {}

    def _index(self) -> Dict[str, Path]:
        if self._paths is None:
            self._paths = {}
            for path in self.workspace.find_component_files():
                # First match in sorted order wins
                self._paths.setdefault(self.workspace.component_name(path), path)
        return self._paths

    def find_file(self, name: str) -> Path:
        path = self._index().get(name)
        if path is None:
            raise ComponentNotFoundError(name)
        return path

    def load(self, path: Path) -> ComponentDocument:
        """Decode the component file at ``path``."""
        path = Path(path).resolve()
        name = self.workspace.component_name(path)
        try:
            raw_text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ComponentDecodeError(f"Component '{name}' is not valid UTF-8: {e}")
        return decode_component(raw_text, name, self.workspace.relative_path(path))

    def lookup(self, name: str) -> ComponentDocument:
        if name not in self._documents:
            self._documents[name] = self.load(self.find_file(name))
        return self._documents[name]

    __call__ = lookup


def relative_import(from_path: str, to_path: str) -> str:
    """Import specifier from one workspace-relative file to another, without extension."""
    target = posixpath.splitext(to_path)[0]
    relative = posixpath.relpath(target, posixpath.dirname(from_path) or ".")
    return relative if relative.startswith(".") else f"./{relative}"
