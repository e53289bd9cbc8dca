"""Derives component specifications from parsed documentation examples."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import DIMENSIONS, ComponentSpec, Node, PathGroup, Tag, TitleGroup, VariantMap
from . import helpers

_LOGGER = get_logger("analyzer")

# (dimension, value) -> number of elements carrying that class
Observations = Mapping[Tuple[str, str], int]


def analyze_path_group(
    path_group: PathGroup, *, base_module: str = helpers.DEFAULT_BASE_MODULE
) -> ComponentSpec:
    """Analyze a PathGroup and return the ComponentSpec for code generation."""
    name = helpers.extract_component_name(path_group.source_path)
    all_elements = collect_all_elements(path_group.title_groups)
    all_classes = helpers.extract_all_classes(all_elements)
    base_class = helpers.detect_base_class(all_classes)
    variants = extract_variants(all_classes, base_class)
    observed = count_observations(all_elements, base_class)
    defaults = {
        dimension: default_variant(variants, dimension, observed) for dimension in variants
    }
    _LOGGER.debug(
        "Analyzed %s: base class %s, %d class tokens, dimensions %s",
        name,
        base_class,
        len(all_classes),
        ", ".join(variants) or "none",
    )

    return ComponentSpec(
        name=name,
        module_name=helpers.to_module_name(name, base_module),
        file_name=helpers.to_file_name(name),
        base_class=base_class,
        variants=variants,
        title_groups=tuple(path_group.title_groups),
        source_path=path_group.source_path,
        defaults=defaults,
    )


def collect_all_elements(title_groups: Iterable[TitleGroup]) -> List[Node]:
    elements: List[Node] = []
    for group in title_groups:
        elements.extend(group.elements)
    return elements


def extract_variants(classes: Sequence[str], base_class: Optional[str]) -> VariantMap:
    """Group classified class tokens into unique values per dimension."""
    if base_class is None:
        return {}

    grouped: Dict[str, List[str]] = {}
    for token in classes:
        category = helpers.categorize_class(token, base_class)
        if not isinstance(category, tuple):
            continue
        dimension, value = category
        values = grouped.setdefault(dimension, [])
        if value not in values:
            values.append(value)

    return {dimension: tuple(grouped[dimension]) for dimension in DIMENSIONS if dimension in grouped}


def default_variant(
    variants: VariantMap, dimension: str, observed: Optional[Observations] = None
) -> Optional[str]:
    """Return the default value for a dimension.

    Sizes default to ``md`` when documented, otherwise to the value carried by
    the most elements in ``observed``; ties (or no counts) go to the first
    documented size. Color, style and modifier always default to no class.
    """
    values = variants.get(dimension)
    if not values or dimension != "size":
        return None
    if "md" in values:
        return "md"
    counts = observed or {}
    return max(values, key=lambda value: counts.get((dimension, value), 0))


def count_observations(nodes: Iterable[Node], base_class: Optional[str]) -> Counter:
    """Count, per ``(dimension, value)``, the elements whose classes carry it."""
    counts: Counter = Counter()
    if base_class is None:
        return counts
    for node in nodes:
        if not isinstance(node, Tag):
            continue
        for token in dict.fromkeys(helpers.split_classes(node.attrs.get("class"))):
            category = helpers.categorize_class(token, base_class)
            if isinstance(category, tuple):
                counts[category] += 1
        counts.update(count_observations(node.children, base_class))
    return counts


def has_variants(spec: ComponentSpec) -> bool:
    return spec.has_variants


def get_variants(spec: ComponentSpec, dimension: str) -> Tuple[str, ...]:
    return spec.variants.get(dimension, ())


__all__ = [
    "analyze_path_group",
    "collect_all_elements",
    "count_observations",
    "default_variant",
    "extract_variants",
    "get_variants",
    "has_variants",
]
