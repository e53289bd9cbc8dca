"""CLI parser and entrypoint tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from daisygen import cli as cli_module
from daisygen.cli import _build_parser, main
from daisygen.cloner import CloneError
from daisygen.logging import configure_logging
from tests._fixtures.docs_builder import DocsBuilder

BUTTON_DOC = """
    ### ~Button
    ```html
    <button class="btn btn-primary">Click</button>
    ```
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "gen"])
    assert args.verbose is True
    assert args.command == "gen"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["gen", "-v"])
    assert args.verbose is True


def test_cli_parses_gen_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        [
            "gen",
            "--components",
            "button,badge",
            "--output-dir",
            "lib/ui",
            "--base-module",
            "MyAppWeb.Components",
            "--workers",
            "4",
            "--dry-run",
            "--skip-clone",
        ]
    )
    assert args.components == "button,badge"
    assert args.output_dir == "lib/ui"
    assert args.base_module == "MyAppWeb.Components"
    assert args.workers == 4
    assert args.dry_run is True
    assert args.skip_clone is True
    assert args.config == "."


def test_cli_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def _gen_args(docs_builder: DocsBuilder, output_dir: Path, *extra: str) -> list[str]:
    return [
        "gen",
        "--skip-clone",
        "--config",
        str(docs_builder.base_dir),
        "--base-dir",
        str(docs_builder.base_dir),
        "--output-dir",
        str(output_dir),
        *extra,
    ]


def test_gen_writes_modules_and_prints_summary(
    docs_builder: DocsBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    docs_builder.write({"button": BUTTON_DOC})
    output_dir = tmp_path / "out"

    main(_gen_args(docs_builder, output_dir))

    out = capsys.readouterr().out
    assert "DaisyUI Component Generator" in out
    assert "Generated 1 component(s)" in out
    assert (output_dir / "button.ex").exists()


def test_gen_dry_run_prints_details(
    docs_builder: DocsBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    docs_builder.write({"button": BUTTON_DOC})
    output_dir = tmp_path / "out"

    main(_gen_args(docs_builder, output_dir, "--dry-run"))

    out = capsys.readouterr().out
    assert f"Button -> {output_dir / 'button.ex'}" in out
    assert "  Module: DaisyGen.Components.Button" in out
    assert "  Base class: btn" in out
    assert "  Variants: color" in out
    assert "  Examples: 1" in out
    assert "Dry run complete - 1 component(s) would be generated" in out
    assert not output_dir.exists()


def test_gen_detects_base_module_from_mix_project(
    docs_builder: DocsBuilder, tmp_path: Path
) -> None:
    docs_builder.write({"button": BUTTON_DOC})
    (docs_builder.base_dir / "mix.exs").write_text(
        "def project do\n  [app: :shop, version: \"0.1.0\"]\nend\n", encoding="utf-8"
    )
    (docs_builder.base_dir / "lib" / "shop_web").mkdir(parents=True)
    output_dir = tmp_path / "out"

    main(_gen_args(docs_builder, output_dir))

    code = (output_dir / "button.ex").read_text(encoding="utf-8")
    assert code.startswith("defmodule ShopWeb.Components.Button do")


def test_gen_exits_when_filter_matches_nothing(
    docs_builder: DocsBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    docs_builder.write({"button": BUTTON_DOC})

    with pytest.raises(SystemExit) as excinfo:
        main(_gen_args(docs_builder, tmp_path / "out", "--components", "nope"))

    assert excinfo.value.code == 1
    assert "No components to generate (filter: nope)" in capsys.readouterr().err


def test_gen_exits_when_components_directory_missing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(
            [
                "gen",
                "--skip-clone",
                "--config",
                str(tmp_path),
                "--base-dir",
                str(tmp_path),
            ]
        )

    assert excinfo.value.code == 1
    assert "Components directory not found" in capsys.readouterr().err


def test_gen_exits_when_clone_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _fail(self, base_dir: Path) -> Path:
        raise CloneError("Git clone failed with exit code 128")

    monkeypatch.setattr(cli_module.Cloner, "ensure_available", _fail)

    with pytest.raises(SystemExit) as excinfo:
        main(["gen", "--config", str(tmp_path), "--base-dir", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Failed to clone DaisyUI repository" in capsys.readouterr().err


def test_gen_exits_on_invalid_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".daisygen.yml").write_text("- not\n- a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["gen", "--skip-clone", "--config", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "must contain a mapping" in capsys.readouterr().err


def test_gen_writes_debug_log_file(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"button": BUTTON_DOC})
    log_file = tmp_path / "logs" / "run.log"

    try:
        main(_gen_args(docs_builder, tmp_path / "out", "--log-file", str(log_file)))
    finally:
        configure_logging()

    log_text = log_file.read_text(encoding="utf-8")
    assert "daisygen.orchestrator" in log_text
    assert "Run finished: 1 succeeded, 0 failed" in log_text
