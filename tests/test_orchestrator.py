"""Tests for daisygen.orchestrator."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
from jinja2 import TemplateError

from daisygen import orchestrator as orchestrator_module
from daisygen.generator.template import ModuleRenderer
from daisygen.orchestrator import (
    Generator,
    MissingSourceDirectoryError,
    component_key,
    write_atomic,
)
from daisygen.parser import ExtractionError, parse_file_lines
from tests._fixtures.docs_builder import DocsBuilder

BUTTON_DOC = """
    # Button

    ### ~Button
    ```html
    <button class="btn btn-primary">Click</button>
    ```
"""

BADGE_DOC = """
    ### ~Badge
    ```html
    <span class="badge badge-secondary">New</span>
    ```
"""

PROSE_DOC = """
    # Colors

    Nothing to extract here.
"""


def test_run_writes_one_module_per_component(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"button": BUTTON_DOC, "badge": BADGE_DOC, "colors": PROSE_DOC})
    output_dir = tmp_path / "out"
    messages: List[str] = []

    summary = Generator(reporter=messages.append).run(docs_builder.components_dir, output_dir)

    assert summary.failed == 0
    assert sorted(result.component for result in summary.ok) == ["Badge", "Button"]
    button = (output_dir / "button.ex").read_text(encoding="utf-8")
    assert button.startswith("defmodule DaisyGen.Components.Button do")
    assert "values: [nil, :primary]" in button
    assert (output_dir / "badge.ex").exists()
    assert not (output_dir / "colors.ex").exists()
    assert "Found 3 documentation file(s)" in messages
    assert any(message.startswith("Button -> ") for message in messages)


def test_run_uses_base_module(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"button": BUTTON_DOC})
    output_dir = tmp_path / "out"

    summary = Generator().run(
        docs_builder.components_dir, output_dir, base_module="MyAppWeb.Components"
    )

    [result] = summary.ok
    assert result.module_name == "MyAppWeb.Components.Button"
    assert "defmodule MyAppWeb.Components.Button do" in (output_dir / "button.ex").read_text(
        encoding="utf-8"
    )


def test_dry_run_reports_without_writing(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"button": BUTTON_DOC})
    output_dir = tmp_path / "out"
    messages: List[str] = []

    summary = Generator(reporter=messages.append).run(
        docs_builder.components_dir, output_dir, dry_run=True
    )

    [result] = summary.ok
    assert summary.dry_run is True
    assert result.dry_run is True
    assert result.path == str(output_dir / "button.ex")
    assert result.base_class == "btn"
    assert result.dimensions == ("color",)
    assert result.example_count == 1
    assert not output_dir.exists()
    assert f"Would generate: {output_dir / 'button.ex'}" in messages


def test_component_filter_is_case_insensitive(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"button": BUTTON_DOC, "badge": BADGE_DOC})
    output_dir = tmp_path / "out"

    summary = Generator().run(docs_builder.components_dir, output_dir, components=["BADGE"])

    assert [result.component for result in summary.results] == ["Badge"]
    assert not (output_dir / "button.ex").exists()


def test_filter_matching_nothing_yields_empty_summary(
    docs_builder: DocsBuilder, tmp_path: Path
) -> None:
    docs_builder.write({"button": BUTTON_DOC})

    summary = Generator().run(docs_builder.components_dir, tmp_path / "out", components=["nope"])

    assert summary.results == []


def test_extraction_error_fails_only_that_component(
    docs_builder: DocsBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    docs_builder.write({"button": BUTTON_DOC, "badge": BADGE_DOC})

    def _parse(lines, source_path):
        if "badge" in source_path:
            raise ExtractionError(source_path, "Badge", "unexpected end of markup")
        return parse_file_lines(lines, source_path)

    monkeypatch.setattr(orchestrator_module, "parse_file_lines", _parse)
    output_dir = tmp_path / "out"

    summary = Generator().run(docs_builder.components_dir, output_dir)

    assert [result.component for result in summary.ok] == ["Button"]
    [failure] = summary.errors
    assert failure.component == "Badge"
    assert "unexpected end of markup" in (failure.reason or "")
    assert (output_dir / "button.ex").exists()


def test_undecodable_file_fails_only_that_component(
    docs_builder: DocsBuilder, tmp_path: Path
) -> None:
    docs_builder.write({"button": BUTTON_DOC})
    badge_page = docs_builder.page("badge")
    badge_page.parent.mkdir(parents=True)
    badge_page.write_bytes(b"### ~Badge\n```html\n<span class=\"badge\">\xff\xfe</span>\n```\n")
    output_dir = tmp_path / "out"
    messages: List[str] = []

    summary = Generator(reporter=messages.append).run(docs_builder.components_dir, output_dir)

    assert [result.component for result in summary.ok] == ["Button"]
    [failure] = summary.errors
    assert failure.component == "Badge"
    assert (failure.reason or "").startswith("Failed to read")
    assert (output_dir / "button.ex").exists()
    assert any(message.startswith("Failed to read") for message in messages)


def test_unreadable_file_fails_only_that_component(
    docs_builder: DocsBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    docs_builder.write({"button": BUTTON_DOC, "badge": BADGE_DOC})
    real_read_text = Path.read_text

    def _read_text(self: Path, *args, **kwargs) -> str:
        if self.parent.name == "badge":
            raise PermissionError(13, "Permission denied", str(self))
        return real_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", _read_text)
    output_dir = tmp_path / "out"

    summary = Generator(max_workers=2).run(docs_builder.components_dir, output_dir)

    assert [result.component for result in summary.ok] == ["Button"]
    [failure] = summary.errors
    assert failure.component == "Badge"
    assert "Permission denied" in (failure.reason or "")


def test_template_error_is_reported_per_component(
    docs_builder: DocsBuilder, tmp_path: Path
) -> None:
    docs_builder.write({"button": BUTTON_DOC})

    class _BrokenRenderer(ModuleRenderer):
        def render(self, spec):
            raise TemplateError("boom")

    summary = Generator(_BrokenRenderer()).run(docs_builder.components_dir, tmp_path / "out")

    [failure] = summary.errors
    assert failure.component == "Button"
    assert failure.reason == "Template error: boom"


def test_write_failure_is_reported_and_others_continue(
    docs_builder: DocsBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    docs_builder.write({"button": BUTTON_DOC, "badge": BADGE_DOC})
    real_write = orchestrator_module.write_atomic

    def _write(path: Path, content: str) -> None:
        if path.name == "badge.ex":
            raise PermissionError("read-only")
        real_write(path, content)

    monkeypatch.setattr(orchestrator_module, "write_atomic", _write)
    output_dir = tmp_path / "out"

    summary = Generator().run(docs_builder.components_dir, output_dir)

    [failure] = summary.errors
    assert failure.component == "Badge"
    assert (failure.reason or "").startswith("Failed to write")
    assert (output_dir / "button.ex").exists()


def test_parallel_run_matches_sequential(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"button": BUTTON_DOC, "badge": BADGE_DOC})

    sequential = Generator().run(docs_builder.components_dir, tmp_path / "seq")
    parallel = Generator(max_workers=4).run(docs_builder.components_dir, tmp_path / "par")

    assert [r.component for r in parallel.results] == [r.component for r in sequential.results]
    for name in ("button.ex", "badge.ex"):
        assert (tmp_path / "par" / name).read_text(encoding="utf-8") == (
            tmp_path / "seq" / name
        ).read_text(encoding="utf-8")


def test_missing_components_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(MissingSourceDirectoryError):
        Generator().run(tmp_path / "missing", tmp_path / "out")


def test_discover_returns_sorted_markdown_files(docs_builder: DocsBuilder) -> None:
    docs_builder.write({"button": BUTTON_DOC, "alert": BADGE_DOC})
    (docs_builder.components_dir / "button" / "notes.txt").write_text("x", encoding="utf-8")

    files = Generator().discover(docs_builder.components_dir)

    assert files == [docs_builder.page("alert"), docs_builder.page("button")]


def test_component_key_uses_directory_name() -> None:
    assert component_key("/docs/File-Input/+page.md") == "file-input"


def test_write_atomic_replaces_content_and_leaves_no_temp_files(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "button.ex"

    write_atomic(target, "first\n")
    write_atomic(target, "second\n")

    assert target.read_text(encoding="utf-8") == "second\n"
    assert [path.name for path in target.parent.iterdir()] == ["button.ex"]
