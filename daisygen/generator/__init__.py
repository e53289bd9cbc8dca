"""Component analysis and code generation stages."""

from __future__ import annotations

from .analyzer import analyze_path_group, default_variant
from .example_builder import build_all_examples, build_example_function
from .template import ModuleRenderer, render_module

__all__ = [
    "ModuleRenderer",
    "analyze_path_group",
    "build_all_examples",
    "build_example_function",
    "default_variant",
    "render_module",
]
