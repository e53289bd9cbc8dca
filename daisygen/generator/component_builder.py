"""Builds Phoenix.Component code fragments from a ComponentSpec.

Produces the ``attr`` declarations, the component function itself and the
private helpers that turn variant atoms into DaisyUI class names.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..models import ComponentSpec
from . import helpers
from .analyzer import default_variant

# HTML void elements cannot have children and must be self-closing.
VOID_ELEMENTS = frozenset(
    "area base br col embed hr img input link meta param source track wbr".split()
)

HTML_TAGS: Dict[str, str] = {
    "btn": "button",
    "input": "input",
    "textarea": "textarea",
    "select": "select",
}
DEFAULT_HTML_TAG = "div"

GLOBAL_ATTRS: Dict[str, Tuple[str, ...]] = {
    "input": ("disabled", "form", "name", "value", "type", "placeholder"),
    "textarea": ("disabled", "form", "name", "placeholder", "rows", "cols"),
    "select": ("disabled", "form", "name"),
    "btn": ("disabled", "form", "type"),
}

# dimension -> (attr name, helper name, attr doc)
DIMENSION_ATTRS: Dict[str, Tuple[str, str, str]] = {
    "size": ("size", "size_class", "Size variant"),
    "color": ("variant", "variant_class", "Color variant"),
    "style": ("style", "style_class", "Style variant"),
    "modifier": ("modifier", "modifier_class", "Modifier classes"),
}


def is_void_element(tag: Optional[str]) -> bool:
    return tag in VOID_ELEMENTS


def infer_html_tag(base_class: Optional[str]) -> str:
    return HTML_TAGS.get(base_class or "", DEFAULT_HTML_TAG)


def declared_values(spec: ComponentSpec, dimension: str) -> List[Optional[str]]:
    """Legal values for a dimension's attr, unset value first (``md`` for size)."""
    detected = list(spec.variants.get(dimension, ()))
    head: Optional[str] = "md" if dimension == "size" else None
    values: List[Optional[str]] = [head]
    values.extend(value for value in detected if value != head)
    return values


def build_attrs(spec: ComponentSpec) -> str:
    """Generate attr declarations for each present dimension plus ``class`` and ``rest``."""
    lines: List[str] = []
    for dimension in spec.dimensions:
        attr_name, _, doc = DIMENSION_ATTRS[dimension]
        default = spec.defaults.get(dimension) or default_variant(spec.variants, dimension)
        if dimension == "size" and default is None:
            default = "md"
        values = ", ".join(_atom(value) for value in declared_values(spec, dimension))
        lines.append(
            f"attr :{attr_name}, :atom, default: {_atom(default)}, values: [{values}], "
            f"doc: {helpers.elixir_string(doc)}"
        )

    lines.append('attr :class, :string, default: "", doc: "Additional CSS classes"')
    include = GLOBAL_ATTRS.get(spec.base_class or "", ())
    if include:
        lines.append(f"attr :rest, :global, include: ~w({' '.join(include)})")
    else:
        lines.append("attr :rest, :global")
    return "\n".join(lines)


def build_class_composition(spec: ComponentSpec) -> str:
    """Build the class list: base class, one helper call per dimension, then ``@class``."""
    parts: List[str] = []
    if spec.base_class:
        parts.append(f'"{spec.base_class}"')
    for dimension in spec.dimensions:
        attr_name, helper_name, _ = DIMENSION_ATTRS[dimension]
        parts.append(f"{helper_name}(@{attr_name})")
    parts.append("@class")
    return f"[{', '.join(parts)}]"


def build_component_function(spec: ComponentSpec) -> str:
    fn_name = helpers.to_file_name(spec.name)
    html_tag = infer_html_tag(spec.base_class)
    void = is_void_element(html_tag)

    if spec.base_class:
        class_expr = build_class_composition(spec)
    else:
        class_expr = "@class"

    lines = ['@doc """', f"Renders a {spec.name} component.", '"""']
    if not void:
        lines.extend(["slot :inner_block, required: true", ""])
    lines.extend([f"def {fn_name}(assigns) do", '  ~H"""'])
    if void:
        lines.append(f"  <{html_tag} class={{{class_expr}}} {{@rest}} />")
    else:
        lines.extend(
            [
                f"  <{html_tag} class={{{class_expr}}} {{@rest}}>",
                "    <%= render_slot(@inner_block) %>",
                f"  </{html_tag}>",
            ]
        )
    lines.extend(['  """', "end"])
    return "\n".join(lines)


def build_class_helpers(spec: ComponentSpec) -> str:
    """Build one ``defp <dimension>_class/1`` per present dimension."""
    helpers_code = [build_variant_helper(spec, dimension) for dimension in spec.dimensions]
    if not helpers_code:
        return ""
    return "# Helper functions for class composition\n\n" + "\n\n".join(helpers_code)


def build_variant_helper(spec: ComponentSpec, dimension: str) -> str:
    _, helper_name, _ = DIMENSION_ATTRS[dimension]
    clauses = [f"defp {helper_name}(nil), do: nil"]
    for value in declared_values(spec, dimension):
        if value is None:
            continue
        clauses.append(f'defp {helper_name}(:{value}), do: "{spec.base_class}-{value}"')
    return "\n".join(clauses)


def _atom(value: Optional[str]) -> str:
    return "nil" if value is None else f":{value}"


__all__ = [
    "DIMENSION_ATTRS",
    "GLOBAL_ATTRS",
    "VOID_ELEMENTS",
    "build_attrs",
    "build_class_composition",
    "build_class_helpers",
    "build_component_function",
    "build_variant_helper",
    "declared_values",
    "infer_html_tag",
    "is_void_element",
]
