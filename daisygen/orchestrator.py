"""Pipeline orchestration: discover docs, generate components, write modules."""

from __future__ import annotations

import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Callable, List, Optional, Sequence, Union

from jinja2 import TemplateError

from .generator.analyzer import analyze_path_group
from .generator.helpers import DEFAULT_BASE_MODULE, extract_component_name
from .generator.template import ModuleRenderer
from .logging import get_logger
from .models import GenerationResult, PathGroup
from .parser import ExtractionError, examples_to_path_group, parse_file_lines

Reporter = Callable[[str], None]


class MissingSourceDirectoryError(FileNotFoundError):
    """Raised when the documentation components directory does not exist."""


@dataclass
class LoadedSources:
    """Parsed documentation files plus the files that failed extraction."""

    path_groups: List[PathGroup] = field(default_factory=list)
    failures: List[GenerationResult] = field(default_factory=list)


@dataclass
class RunSummary:
    """Aggregated per-component results of a generation run."""

    results: List[GenerationResult]
    output_dir: Path
    dry_run: bool = False

    @property
    def ok(self) -> List[GenerationResult]:
        return [result for result in self.results if result.ok]

    @property
    def errors(self) -> List[GenerationResult]:
        return [result for result in self.results if not result.ok]

    @property
    def succeeded(self) -> int:
        return len(self.ok)

    @property
    def failed(self) -> int:
        return len(self.errors)


class Generator:
    """Coordinates the parse -> analyze -> render -> write pipeline per file."""

    def __init__(
        self,
        renderer: ModuleRenderer | None = None,
        *,
        reporter: Reporter | None = None,
        max_workers: int = 1,
    ) -> None:
        self.renderer = renderer or ModuleRenderer()
        self.max_workers = max(1, max_workers)
        self.logger = get_logger("orchestrator")
        self._reporter = reporter

    def run(
        self,
        components_dir: Path,
        output_dir: Path,
        *,
        base_module: str = DEFAULT_BASE_MODULE,
        components: Sequence[str] | None = None,
        dry_run: bool = False,
    ) -> RunSummary:
        """Generate every (or every selected) component found under ``components_dir``."""
        files = self.discover(components_dir)
        self._report(f"Found {len(files)} documentation file(s)")
        loaded = self.load_path_groups(files, components=components)
        self._report(f"Loaded {len(loaded.path_groups)} component(s) from extraction")

        def _generate(path_group: PathGroup) -> GenerationResult:
            return self.generate_one(
                path_group, output_dir, base_module=base_module, dry_run=dry_run
            )

        if self.max_workers > 1 and len(loaded.path_groups) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                generated = list(executor.map(_generate, loaded.path_groups))
        else:
            generated = [_generate(group) for group in loaded.path_groups]

        summary = RunSummary(
            results=loaded.failures + generated,
            output_dir=Path(output_dir),
            dry_run=dry_run,
        )
        self.logger.debug(
            "Run finished: %d succeeded, %d failed", summary.succeeded, summary.failed
        )
        return summary

    def discover(self, components_dir: Path) -> List[Path]:
        """Return documentation markdown files in a stable order."""
        root = Path(components_dir)
        if not root.is_dir():
            raise MissingSourceDirectoryError(f"Components directory not found: {root}")
        return sorted(path for path in root.glob("**/*.md") if path.is_file())

    def load_path_groups(
        self, files: Sequence[Path], *, components: Sequence[str] | None = None
    ) -> LoadedSources:
        """Parse documentation files, skipping those without examples.

        Unreadable files and extraction errors are recorded per file so the
        remaining files still load.
        """
        selected = {name.lower() for name in components} if components else None
        loaded = LoadedSources()
        for path in files:
            if selected is not None and component_key(path) not in selected:
                continue
            try:
                path_group = self.extract_from_file(path)
            except ExtractionError as exc:
                self.logger.debug("Extraction failed for %s: %s", path, exc)
                self._report(f"Failed to parse {path}: {exc.reason}")
                loaded.failures.append(
                    GenerationResult.failure(extract_component_name(str(path)), str(exc))
                )
                continue
            except (UnicodeDecodeError, OSError) as exc:
                self.logger.debug("Read failed for %s: %s", path, exc)
                self._report(f"Failed to read {path}: {exc}")
                loaded.failures.append(
                    GenerationResult.failure(
                        extract_component_name(str(path)), f"Failed to read {path}: {exc}"
                    )
                )
                continue
            if path_group is None:
                self.logger.debug("No examples in %s", path)
                continue
            loaded.path_groups.append(path_group)
        return loaded

    def extract_from_file(self, path: Path) -> Optional[PathGroup]:
        source_path = _display_path(path)
        lines = Path(path).read_text(encoding="utf-8").splitlines()
        examples = parse_file_lines(lines, source_path)
        return examples_to_path_group(examples, source_path)

    def generate_one(
        self,
        path_group: PathGroup,
        output_dir: Path,
        *,
        base_module: str = DEFAULT_BASE_MODULE,
        dry_run: bool = False,
    ) -> GenerationResult:
        """Render one component completely in memory, then write it unless ``dry_run``."""
        spec = analyze_path_group(path_group, base_module=base_module)
        try:
            code = self.renderer.render(spec)
        except TemplateError as exc:
            self._report(f"Failed to render {spec.name}: {exc}")
            return GenerationResult.failure(spec.name, f"Template error: {exc}")
        file_path = Path(output_dir) / f"{spec.file_name}.ex"

        if dry_run:
            self._report(f"Would generate: {file_path}")
            return GenerationResult.success(spec, str(file_path), dry_run=True)

        try:
            write_atomic(file_path, code)
        except OSError as exc:
            self.logger.debug("Write failed for %s: %s", file_path, exc)
            self._report(f"Failed to generate {spec.name}: {exc}")
            return GenerationResult.failure(spec.name, f"Failed to write {file_path}: {exc}")

        self._report(f"{spec.name} -> {file_path}")
        return GenerationResult.success(spec, str(file_path))

    def _report(self, message: str) -> None:
        self.logger.debug(message)
        if self._reporter is not None:
            self._reporter(message)


def component_key(path: Union[str, PurePath]) -> str:
    """Lower-cased component identifier of a documentation file (its directory name)."""
    return PurePath(path).parent.name.lower()


def write_atomic(path: Path, content: str) -> None:
    """Write ``content`` so readers never observe a partially written file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _display_path(path: Path) -> str:
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


__all__ = [
    "Generator",
    "LoadedSources",
    "MissingSourceDirectoryError",
    "RunSummary",
    "component_key",
    "write_atomic",
]
