"""Module namespace detection from a Mix project's files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from .generator.helpers import DEFAULT_BASE_MODULE, camelize

_APP_RE = re.compile(r"\bapp:\s*:([a-z_][a-z0-9_]*)")


def read_app_name(project_root: Path) -> Optional[str]:
    """Return the ``app:`` atom declared in ``mix.exs``, if any."""
    mix_file = Path(project_root) / "mix.exs"
    try:
        text = mix_file.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        return None
    match = _APP_RE.search(text)
    return match.group(1) if match else None


def detect_base_module(project_root: Path) -> str:
    """Propose a namespace for generated components.

    Phoenix app ``my_app`` (with ``lib/my_app_web``) -> ``MyAppWeb.Components``;
    other Mix app -> ``MyApp.Components``; no Mix project -> the default.
    """
    app_name = read_app_name(project_root)
    if not app_name:
        return DEFAULT_BASE_MODULE
    module_name = camelize(app_name)
    if (Path(project_root) / "lib" / f"{app_name}_web").is_dir():
        return f"{module_name}Web.Components"
    return f"{module_name}.Components"


__all__ = ["detect_base_module", "read_app_name"]
