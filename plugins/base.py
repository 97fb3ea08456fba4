"""Target plugin base classes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import jinja2
import yaml

from core.components.document import ComponentDocument
from core.errors import UnsupportedTargetOperation
from core.naming import camel_case, pascal_case
from core.tokens.colors import ColorSet
from core.tokens.text_styles import TextStyleSet

ComponentLookup = Callable[[str], ComponentDocument]


@dataclass
class StaticFile:
    """Support file shipped with a target; ``{framework}`` is substituted in ``source``."""
    source: str
    target: str


@dataclass
class TargetManifest:
    """Target manifest data."""
    name: str
    version: str
    description: str
    extension: str
    aliases: List[str] = field(default_factory=list)
    colors_file: Optional[str] = None
    text_styles_file: Optional[str] = None
    frameworks: List[str] = field(default_factory=list)
    static_files: List[StaticFile] = field(default_factory=list)
    supports_text_styles: bool = False
    supports_components: bool = False

    @property
    def default_framework(self) -> Optional[str]:
        return self.frameworks[0] if self.frameworks else None


class TargetPlugin(ABC):
    """Base class for output targets.

    Subclasses render colors, and optionally text styles and components,
    to target syntax. Text styles render to an empty string for targets
    without a text style abstraction; components raise
    :class:`UnsupportedTargetOperation`.
    """

    def __init__(self, manifest_path: Path):
        self.manifest_path = manifest_path
        self.plugin_dir = manifest_path.parent
        self.manifest = self._load_manifest()
        self._setup_jinja()

    def _load_manifest(self) -> TargetManifest:
        """Load target manifest from YAML file."""
        with open(self.manifest_path, 'r') as f:
            data = yaml.safe_load(f)

        tokens = data.get('tokens', {})
        supports = data.get('supports', {})
        return TargetManifest(
            name=data['name'],
            version=data['version'],
            description=data['description'],
            extension=data['extension'],
            aliases=data.get('aliases', []),
            colors_file=tokens.get('colors'),
            text_styles_file=tokens.get('text_styles'),
            frameworks=data.get('frameworks', []),
            static_files=[StaticFile(**entry) for entry in data.get('static_files', [])],
            supports_text_styles=supports.get('text_styles', False),
            supports_components=supports.get('components', False),
        )

    def _setup_jinja(self):
        """Setup Jinja2 environment."""
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(self.plugin_dir / "templates"),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self.jinja_env.filters['camel_case'] = camel_case
        self.jinja_env.filters['pascal_case'] = pascal_case
        self.jinja_env.filters['indent_lines'] = indent_lines
        self.jinja_env.filters['number'] = format_number

    def render_template(self, template_name: str, **context: Any) -> str:
        return self.jinja_env.get_template(template_name).render(**context)

    @property
    def name(self) -> str:
        return self.manifest.name

    @property
    def extension(self) -> str:
        return self.manifest.extension

    def output_name(self, stem: str) -> str:
        return f"{stem}{self.extension}"

    @property
    def colors_output_name(self) -> str:
        return self.output_name(self.manifest.colors_file or "Colors")

    @property
    def text_styles_output_name(self) -> str:
        return self.output_name(self.manifest.text_styles_file or "TextStyles")

    def static_files(self, framework: Optional[str]) -> List[Tuple[Path, str]]:
        """(source path, output name) pairs of support files for ``framework``."""
        files = []
        for static in self.manifest.static_files:
            source = static.source.format(framework=framework or "")
            files.append((self.plugin_dir / "static" / source, static.target))
        return files

    @abstractmethod
    def render_colors(self, context, colors: ColorSet) -> str:
        """Render the color tokens."""
        pass

    def render_text_styles(self, context, colors: ColorSet, text_styles: TextStyleSet) -> str:
        return ""

    def render_component(
        self,
        context,
        name: str,
        colors: ColorSet,
        text_styles: TextStyleSet,
        lookup: ComponentLookup,
        document: ComponentDocument,
    ) -> str:
        raise UnsupportedTargetOperation(self.name, "component conversion")


def indent_lines(text: str, width: int = 2) -> str:
    """Indent every non-empty line by ``width`` spaces."""
    indent = ' ' * width
    return '\n'.join(indent + line if line.strip() else line for line in text.splitlines())


def format_number(value: Any) -> str:
    """Render a number without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return f"{value:.4g}" if abs(value) < 1 else repr(value)
    return str(value)
