# core/converter/batch.py
"""Whole-workspace conversion.

Conversion runs in two phases. Discovery globs component files and asset
files concurrently and returns fully materialized, sorted lists. Processing
then walks those lists one file at a time, in discovery order; a file that
fails is logged and skipped without stopping the batch.
"""

import asyncio
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set

from core.converter.context import ConversionContext
from core.converter.outcome import Outcome, capture
from core.converter.pipeline import WorkspaceTokens, convert_component, load_tokens
from core.errors import ErrorKind
from core.merge import write_merged
from core.workspace import ComponentLibrary, Workspace

logger = logging.getLogger(__name__)


@dataclass
class FailedFile:
    path: str
    kind: ErrorKind
    message: str


@dataclass
class BatchReport:
    """What a workspace conversion wrote, copied and skipped."""
    workspace: Path
    output_dir: Path
    token_files: List[Path] = field(default_factory=list)
    static_files: List[Path] = field(default_factory=list)
    converted: List[Path] = field(default_factory=list)
    failed: List[FailedFile] = field(default_factory=list)
    assets: List[Path] = field(default_factory=list)
    skipped_components: int = 0

    @property
    def total_components(self) -> int:
        return len(self.converted) + len(self.failed)

    @property
    def succeeded(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class WorkspaceFiles:
    components: List[Path]
    assets: List[Path]


def _glob_files(workspace: Workspace, extensions: Iterable[str], exclude: Optional[Path]) -> List[Path]:
    found = set()
    for extension in extensions:
        for path in workspace.root.glob(f"**/*{extension}"):
            if not path.is_file() or workspace.is_ignored(path):
                continue
            if exclude is not None and (path == exclude or exclude in path.parents):
                continue
            found.add(path)
    return sorted(found)


async def discover_workspace_files(workspace: Workspace, exclude: Optional[Path] = None) -> WorkspaceFiles:
    """Find component and asset files; ``exclude`` removes a subtree (the output directory)."""
    settings = workspace.settings
    components, assets = await asyncio.gather(
        asyncio.to_thread(_glob_files, workspace, [settings.component_extension], exclude),
        asyncio.to_thread(_glob_files, workspace, settings.asset_extensions, exclude),
    )
    logger.debug(f"Discovered {len(components)} components and {len(assets)} assets in {workspace.root}")
    return WorkspaceFiles(components=components, assets=assets)


def component_output_path(context: ConversionContext, workspace: Workspace, source: Path, output_dir: Path) -> Path:
    """Mirror ``source``'s workspace-relative path under ``output_dir`` with the target extension."""
    relative = Path(workspace.relative_path(source))
    stem = workspace.component_name(relative)
    return output_dir / relative.parent / context.target.output_name(stem)


class WorkspaceConverter:
    """Convert every token, component and asset file of one workspace.

    ``convert()`` runs its own event loop for discovery. Code that is already
    inside an event loop awaits ``run()`` instead.
    """

    def __init__(self, context: ConversionContext, workspace: Workspace, output_dir: Path):
        self.context = context
        self.workspace = workspace
        self.output_dir = Path(output_dir).resolve()
        self._generated: Set[Path] = set()

    def convert(self) -> BatchReport:
        return asyncio.run(self.run())

    async def run(self) -> BatchReport:
        report = BatchReport(workspace=self.workspace.root, output_dir=self.output_dir)
        target = self.context.target

        # Token files are parsed before anything is written; colors before text styles
        tokens = load_tokens(self.workspace)
        colors_text = target.render_colors(self.context, tokens.colors)
        text_styles_text = target.render_text_styles(self.context, tokens.colors, tokens.text_styles)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        colors_path = self.output_dir / target.colors_output_name
        write_merged(colors_path, colors_text)
        report.token_files.append(colors_path)
        self._generated.add(colors_path)
        # Written even when empty, for targets without text styles
        text_styles_path = self.output_dir / target.text_styles_output_name
        write_merged(text_styles_path, text_styles_text)
        report.token_files.append(text_styles_path)
        self._generated.add(text_styles_path)

        self._copy_static_files(report)

        exclude = self.output_dir if self.output_dir != self.workspace.root else None
        files = await discover_workspace_files(self.workspace, exclude=exclude)

        if target.manifest.supports_components:
            library = ComponentLibrary(self.workspace)
            for source in files.components:
                self._process_component(source, tokens, library, report)
        elif files.components:
            report.skipped_components = len(files.components)
            logger.warning(
                f"Target '{target.name}' does not convert components; "
                f"skipped {len(files.components)} component files"
            )

        for source in files.assets:
            self._copy_asset(source, report)

        logger.info(
            f"Converted {len(report.converted)}/{report.total_components} components, "
            f"copied {len(report.assets)} assets"
        )
        return report

    def convert_file(self, source: Path, tokens: WorkspaceTokens, library: ComponentLibrary) -> Outcome[Path]:
        """Render, merge and write one component; failures come back as an outcome."""
        output_path = component_output_path(self.context, self.workspace, source, self.output_dir)
        if output_path in self._generated:
            return Outcome.failure(
                ErrorKind.OTHER,
                f"Output {output_path.name} would overwrite a generated token or support file",
            )
        rendered = capture(convert_component, self.context, self.workspace, source, tokens, library)
        if not rendered.ok:
            return Outcome.failure(rendered.error_kind, rendered.message)
        written = capture(write_merged, output_path, rendered.value)
        if not written.ok:
            return Outcome.failure(written.error_kind, written.message)
        return Outcome.success(output_path)

    def _process_component(
        self,
        source: Path,
        tokens: WorkspaceTokens,
        library: ComponentLibrary,
        report: BatchReport,
    ) -> None:
        relative = self.workspace.relative_path(source)
        outcome = self.convert_file(source, tokens, library)
        if outcome.ok:
            logger.info(f"{relative} => {outcome.value.relative_to(self.output_dir).as_posix()}")
            report.converted.append(outcome.value)
            return

        if outcome.error_kind == ErrorKind.DECODE:
            logger.error(f"Failed to decode {relative}: {outcome.message}")
        elif outcome.error_kind == ErrorKind.OTHER:
            logger.error(f"Unknown error converting {relative}: {outcome.message}")
        else:
            # unknown parameter, unknown expression type, component not found
            logger.error(f"{relative}: {outcome.message}")
        report.failed.append(FailedFile(path=relative, kind=outcome.error_kind, message=outcome.message))

    def _copy_static_files(self, report: BatchReport) -> None:
        for source, name in self.context.target.static_files(self.context.framework):
            destination = self.output_dir / name
            shutil.copyfile(source, destination)
            report.static_files.append(destination)
            self._generated.add(destination)
            logger.debug(f"Copied support file {source.name} => {name}")

    def _copy_asset(self, source: Path, report: BatchReport) -> None:
        relative = self.workspace.relative_path(source)
        destination = self.output_dir / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        report.assets.append(destination)
        logger.info(f"{relative} => {relative}")


def convert_workspace(context: ConversionContext, workspace_path: Path, output_dir: Path) -> BatchReport:
    """Convert the workspace at ``workspace_path`` into ``output_dir``."""
    workspace = Workspace.load(workspace_path)
    return WorkspaceConverter(context, workspace, output_dir).convert()


async def convert_workspace_async(context: ConversionContext, workspace_path: Path, output_dir: Path) -> BatchReport:
    """Same as :func:`convert_workspace`, for callers running an event loop."""
    workspace = Workspace.load(workspace_path)
    return await WorkspaceConverter(context, workspace, output_dir).run()
