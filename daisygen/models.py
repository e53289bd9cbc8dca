"""Core data models shared across daisygen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

DIMENSIONS: Tuple[str, ...] = ("size", "color", "style", "modifier")


@dataclass(frozen=True)
class Tag:
    """HTML element with its attributes and owned children."""

    name: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class Text:
    """Literal text between tags."""

    value: str


@dataclass(frozen=True)
class Comment:
    """HTML comment body."""

    text: str


Node = Union[Tag, Text, Comment]

VariantMap = Dict[str, Tuple[str, ...]]


@dataclass(frozen=True)
class Example:
    """One fenced HTML block found under a title marker."""

    title: str
    source_path: str
    elements: Tuple[Node, ...]


@dataclass(frozen=True)
class TitleGroup:
    """Titled element list handed to code generation."""

    title: str
    elements: Tuple[Node, ...]


@dataclass(frozen=True)
class PathGroup:
    """All title groups extracted from a single documentation file."""

    source_path: str
    title_groups: Tuple[TitleGroup, ...]


@dataclass(frozen=True)
class ComponentSpec:
    """Specification for a component module to be generated."""

    name: str
    module_name: str
    file_name: str
    base_class: Optional[str]
    variants: VariantMap
    title_groups: Tuple[TitleGroup, ...]
    source_path: str
    # dimension -> default value, as chosen by the analyzer
    defaults: Dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def has_variants(self) -> bool:
        return bool(self.variants)

    @property
    def dimensions(self) -> Tuple[str, ...]:
        return tuple(name for name in DIMENSIONS if name in self.variants)

    @property
    def example_count(self) -> int:
        return len(self.title_groups)


@dataclass
class GenerationResult:
    """Outcome of generating one component, tagged ``ok`` or ``error``."""

    status: str
    component: str
    path: Optional[str] = None
    reason: Optional[str] = None
    module_name: Optional[str] = None
    base_class: Optional[str] = None
    dimensions: Tuple[str, ...] = ()
    example_count: int = 0
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def success(
        cls, spec: ComponentSpec, path: str, *, dry_run: bool = False
    ) -> "GenerationResult":
        return cls(
            status="ok",
            component=spec.name,
            path=path,
            module_name=spec.module_name,
            base_class=spec.base_class,
            dimensions=spec.dimensions,
            example_count=spec.example_count,
            dry_run=dry_run,
        )

    @classmethod
    def failure(cls, component: str, reason: str) -> "GenerationResult":
        return cls(status="error", component=component, reason=reason)


__all__ = [
    "DIMENSIONS",
    "Comment",
    "ComponentSpec",
    "Example",
    "GenerationResult",
    "Node",
    "PathGroup",
    "Tag",
    "Text",
    "TitleGroup",
    "VariantMap",
]
