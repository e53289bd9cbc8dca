"""CLI entrypoints for daisygen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .cloner import CloneError, Cloner, components_dir
from .config import ConfigError, DaisyGenConfig, load_config, parse_component_filter
from .generator.template import ModuleRenderer
from .logging import configure_logging
from .models import GenerationResult
from .orchestrator import Generator, MissingSourceDirectoryError, RunSummary
from .project import detect_base_module


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daisygen",
        description="Generate Phoenix components from DaisyUI documentation.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen_parser = subparsers.add_parser(
        "gen",
        help="Generate component modules from the documentation examples.",
    )
    _add_verbose_option(gen_parser, suppress_default=True)
    gen_parser.add_argument(
        "--components",
        help="Comma-separated list of components to generate (default: all).",
    )
    gen_parser.add_argument(
        "--output-dir",
        help="Directory for generated modules (default: lib/daisygen_components).",
    )
    gen_parser.add_argument(
        "--base-module",
        help="Module namespace (default: detected from mix.exs).",
    )
    gen_parser.add_argument(
        "--base-dir",
        help="Directory holding the tmp/daisyui checkout (default: project root).",
    )
    gen_parser.add_argument(
        "--config",
        default=".",
        help="Path to .daisygen.yml or the directory containing it.",
    )
    gen_parser.add_argument(
        "--workers",
        type=int,
        help="Number of components generated in parallel.",
    )
    gen_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without writing files.",
    )
    gen_parser.add_argument(
        "--skip-clone",
        action="store_true",
        help="Use the existing tmp/daisyui checkout instead of cloning.",
    )
    gen_parser.add_argument(
        "--log-file",
        type=Path,
        help="Write the full debug log of the run to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for daisygen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "gen":
        _run_gen(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_gen(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    base_dir = Path(args.base_dir).resolve() if args.base_dir else config.source_base_dir
    output_dir = Path(args.output_dir) if args.output_dir else config.output_dir
    base_module = args.base_module or config.base_module or detect_base_module(config.root)
    components = parse_component_filter(args.components) or config.components
    workers = args.workers if args.workers is not None else config.workers
    dry_run = bool(args.dry_run)

    print("DaisyUI Component Generator")
    print("")

    if not (args.skip_clone or config.skip_clone):
        _ensure_sources(parser, config, base_dir)

    generator = Generator(
        ModuleRenderer(config.templates_dir),
        reporter=print,
        max_workers=workers,
    )
    try:
        summary = generator.run(
            components_dir(base_dir),
            output_dir,
            base_module=base_module,
            components=components or None,
            dry_run=dry_run,
        )
    except MissingSourceDirectoryError as exc:
        parser.exit(
            1,
            f"{exc}\nThe DaisyUI repository may be missing or incomplete.\n",
        )

    if not summary.results:
        message = "No components to generate"
        if components:
            message += f" (filter: {', '.join(components)})"
        parser.exit(1, f"{message}\n")

    _print_summary(summary)
    if summary.failed:
        parser.exit(1)


def _ensure_sources(
    parser: argparse.ArgumentParser, config: DaisyGenConfig, base_dir: Path
) -> None:
    cloner = Cloner(repo_url=config.repo_url, output_callback=print)
    try:
        cloner.ensure_available(base_dir)
    except CloneError as exc:
        parser.exit(1, f"Failed to clone DaisyUI repository: {exc}\n")


def _print_summary(summary: RunSummary) -> None:
    print("")
    if summary.dry_run:
        for result in summary.ok:
            _print_dry_run_result(result)
        print(f"Dry run complete - {summary.succeeded} component(s) would be generated")
        print("   Run without --dry-run to write files")
    else:
        print(f"Generated {summary.succeeded} component(s) in {_relativize(summary.output_dir)}/")

    if summary.failed:
        print(f"{summary.failed} component(s) failed:")
        for result in summary.errors:
            print(f"  {result.component}: {result.reason}")


def _print_dry_run_result(result: GenerationResult) -> None:
    print(f"{result.component} -> {result.path}")
    print(f"  Module: {result.module_name}")
    print(f"  Base class: {result.base_class or 'none'}")
    if result.dimensions:
        print(f"  Variants: {', '.join(result.dimensions)}")
    print(f"  Examples: {result.example_count}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
