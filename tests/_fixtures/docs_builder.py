"""Helper utilities for constructing temporary documentation trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from daisygen.cloner import components_dir


class DocsBuilder:
    """Writes component markdown files into a fake ``tmp/daisyui`` checkout."""

    def __init__(self, tmp_path: Path) -> None:
        self.base_dir = tmp_path / "project"
        self.components_dir = components_dir(self.base_dir)
        self.components_dir.mkdir(parents=True)

    def write(self, docs: Mapping[str, str]) -> None:
        """Write ``component -> markdown`` entries as ``<component>/+page.md``."""
        for component, content in docs.items():
            path = self.components_dir / component / "+page.md"
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def page(self, component: str) -> Path:
        return self.components_dir / component / "+page.md"


__all__ = ["DocsBuilder"]
