"""String, naming and class-token utilities for component generation."""

from __future__ import annotations

import re
from collections import Counter
from pathlib import PurePath
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..models import Node, Tag

DEFAULT_BASE_MODULE = "DaisyGen.Components"

SIZE_VARIANTS: Tuple[str, ...] = ("xs", "sm", "md", "lg", "xl")
COLOR_VARIANTS: Tuple[str, ...] = (
    "primary",
    "secondary",
    "accent",
    "neutral",
    "info",
    "success",
    "warning",
    "error",
)
STYLE_VARIANTS: Tuple[str, ...] = ("outline", "soft", "ghost", "link", "dash")
MODIFIER_VARIANTS: Tuple[str, ...] = (
    "wide",
    "block",
    "square",
    "circle",
    "active",
    "disabled",
    "loading",
)

# Checked in this order; the first vocabulary that matches wins.
VARIANT_VOCABULARIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("size", SIZE_VARIANTS),
    ("color", COLOR_VARIANTS),
    ("style", STYLE_VARIANTS),
    ("modifier", MODIFIER_VARIANTS),
)

BASE = "base"
UNKNOWN = "unknown"

Category = Union[str, Tuple[str, str]]

_SYMBOL_WORDS: Tuple[Tuple[str, str], ...] = (
    ("⌘", "cmd"),
    ("⌥", "opt"),
    ("⇧", "shift"),
    ("⌃", "ctrl"),
    ("▲", "up"),
    ("▼", "down"),
    ("◀︎", "left"),
    ("◀", "left"),
    ("▶︎", "right"),
    ("▶", "right"),
)

_COMPONENT_PREFIX_RE = re.compile(r"^(button|badge|card|alert)\s+", re.IGNORECASE)
_COMPONENT_SUFFIX_RE = re.compile(r"\s+(button|badge|card|alert)$", re.IGNORECASE)
_NON_IDENT_RE = re.compile(r"[^a-z0-9\s_]")
_WHITESPACE_RE = re.compile(r"\s+")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

_HEEX_ESCAPES: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)


# Naming


def extract_component_name(path: str) -> str:
    """Return the component name for a documentation file.

    ``/docs/button/+page.md`` -> ``Button``; ``/docs/file-input/+page.md`` -> ``FileInput``.
    """
    directory = PurePath(path).parent.name
    return camelize(directory.replace("-", "_"))


def camelize(value: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in value.split("_") if part)


def to_module_name(component_name: str, base_module: str = DEFAULT_BASE_MODULE) -> str:
    return f"{base_module}.{component_name}"


def to_file_name(component_name: str) -> str:
    """Convert ``FileInput`` to ``file_input``."""
    return _CAMEL_BOUNDARY_RE.sub("_", component_name).lower()


def title_to_function_name(title: str) -> str:
    """Convert an example title into an Elixir function name.

    Symbol glyphs become ASCII words, a leading or trailing component word is
    dropped and everything outside ``[a-z0-9_]`` is removed. Names starting
    with a digit get an underscore prefix; an empty result becomes ``example``.
    """
    text = replace_symbols(title).lower()
    text = _COMPONENT_PREFIX_RE.sub("", text)
    text = _COMPONENT_SUFFIX_RE.sub("", text)
    text = _NON_IDENT_RE.sub("", text)
    name = _WHITESPACE_RE.sub("_", text).strip("_")
    if not name:
        return "example"
    if name[0].isdigit():
        return f"_{name}"
    return name


def replace_symbols(text: str) -> str:
    for symbol, word in _SYMBOL_WORDS:
        text = text.replace(symbol, word)
    return text


# Class analysis


def split_classes(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return value.split()


def extract_all_classes(nodes: Iterable[Node]) -> List[str]:
    """Flatten class tokens from an element tree, unique within each pass."""
    classes: List[str] = []
    for node in nodes:
        classes.extend(extract_classes_from_node(node))
    return _unique(classes)


def extract_classes_from_node(node: Node) -> List[str]:
    if not isinstance(node, Tag):
        return []
    return split_classes(node.attrs.get("class")) + extract_all_classes(node.children)


def detect_base_class(classes: Sequence[str]) -> Optional[str]:
    """Return the most common class stem, e.g. ``btn`` for ``btn btn-primary btn-lg``."""
    if not classes:
        return None
    counts = Counter(class_stem(token) for token in classes)
    best: Optional[str] = None
    best_count = 0
    # Counter preserves insertion order, so ties resolve to the first stem seen.
    for stem, count in counts.items():
        if count > best_count:
            best, best_count = stem, count
    return best


def class_stem(token: str) -> str:
    return token.split("-", 1)[0]


def categorize_class(token: str, base_class: str) -> Category:
    """Categorize a class token as ``BASE``, ``UNKNOWN`` or ``(dimension, value)``."""
    if token == base_class:
        return BASE
    for dimension, vocabulary in VARIANT_VOCABULARIES:
        if match_variant(token, base_class, vocabulary):
            return (dimension, token[len(base_class) + 1 :])
    return UNKNOWN


def match_variant(token: str, base_class: str, variants: Sequence[str]) -> bool:
    pattern = rf"^{re.escape(base_class)}-({'|'.join(variants)})$"
    return re.match(pattern, token) is not None


# Markup formatting


def needs_escape(text: str) -> bool:
    return any(char in text for char in "<>&\"")


def escape_heex(text: str) -> str:
    for char, entity in _HEEX_ESCAPES:
        text = text.replace(char, entity)
    return text


def format_attrs(attrs: Mapping[str, str]) -> str:
    """Render attributes as `` key="value"`` pairs with a leading space."""
    if not attrs:
        return ""
    parts = []
    for key, value in attrs.items():
        if value == "":
            parts.append(key)
            continue
        escaped = value.replace('"', "&quot;")
        parts.append(f'{key}="{escaped}"')
    return " " + " ".join(parts)


def indent(text: str, spaces: int = 2) -> str:
    prefix = " " * spaces
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


def elixir_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("#{", "\\#{")
    return f'"{escaped}"'


def _unique(values: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


__all__ = [
    "BASE",
    "COLOR_VARIANTS",
    "DEFAULT_BASE_MODULE",
    "MODIFIER_VARIANTS",
    "SIZE_VARIANTS",
    "STYLE_VARIANTS",
    "UNKNOWN",
    "VARIANT_VOCABULARIES",
    "categorize_class",
    "detect_base_class",
    "elixir_string",
    "escape_heex",
    "extract_all_classes",
    "extract_component_name",
    "format_attrs",
    "indent",
    "needs_escape",
    "title_to_function_name",
    "to_file_name",
    "to_module_name",
]
