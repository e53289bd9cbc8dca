"""Converts title groups into example functions with HEEx templates."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..models import Comment, Node, Tag, Text, TitleGroup
from . import helpers

INDENT_UNIT = "  "


def build_example_function(title_group: TitleGroup) -> str:
    """Build example function code for a TitleGroup.

    Several sibling elements sharing one tag are split into one function
    each; anything else becomes a single function named after the title.
    """
    elements = title_group.elements
    if should_split_elements(elements):
        return "\n".join(
            build_single_element_example(element, title_group.title)
            for element in elements
            if isinstance(element, Tag)
        )

    fn_name = helpers.title_to_function_name(title_group.title)
    return _example_function(fn_name, title_group.title, elements_to_heex(elements, 2))


def should_split_elements(elements: Sequence[Node]) -> bool:
    tags = [element.name for element in elements if isinstance(element, Tag)]
    return len(tags) > 1 and len(set(tags)) == 1


def build_single_element_example(element: Tag, base_title: str) -> str:
    fn_name = generate_element_function_name(element, base_title)
    doc_title = generate_element_doc_title(element, base_title)
    return _example_function(fn_name, doc_title, element_to_heex(element, 2))


def generate_element_function_name(element: Tag, base_title: str) -> str:
    """Name a split element after its class variant, its text, or ``example``."""
    variant = extract_variant_from_class(element.attrs.get("class"))
    if variant:
        return helpers.title_to_function_name(variant)
    text = extract_first_text(element.children)
    if text:
        return helpers.title_to_function_name(text)
    return "example"


def generate_element_doc_title(element: Tag, base_title: str) -> str:
    variant = extract_variant_from_class(element.attrs.get("class"))
    if variant:
        return variant.capitalize()
    text = extract_first_text(element.children)
    if text:
        return text
    return base_title


def extract_variant_from_class(class_value: Optional[str]) -> Optional[str]:
    """Return the suffix of the first hyphenated class, e.g. ``primary`` for ``btn btn-primary``."""
    for token in helpers.split_classes(class_value):
        parts = token.split("-", 1)
        if len(parts) == 2 and parts[1]:
            return parts[1]
    return None


def extract_first_text(children: Iterable[Node]) -> Optional[str]:
    for child in children:
        if isinstance(child, Text):
            return child.value.strip() or None
    return None


def elements_to_heex(elements: Iterable[Node], indent_level: int = 0) -> str:
    return "\n".join(element_to_heex(element, indent_level) for element in elements)


def element_to_heex(node: Node, indent_level: int = 0) -> str:
    """Render a node as HEEx markup indented by ``indent_level`` units."""
    prefix = INDENT_UNIT * indent_level
    if isinstance(node, Comment):
        return f"{prefix}<!-- {node.text} -->"
    if isinstance(node, Text):
        return f"{prefix}{text_to_heex(node.value.strip())}"

    attrs = helpers.format_attrs(node.attrs)
    if not node.children:
        return f"{prefix}<{node.name}{attrs} />"

    if all(isinstance(child, Text) for child in node.children):
        inline = "".join(text_to_heex(child.value) for child in node.children)  # type: ignore[union-attr]
        return f"{prefix}<{node.name}{attrs}>{inline}</{node.name}>"

    lines: List[str] = [f"{prefix}<{node.name}{attrs}>"]
    lines.extend(element_to_heex(child, indent_level + 1) for child in node.children)
    lines.append(f"{prefix}</{node.name}>")
    return "\n".join(lines)


def text_to_heex(text: str) -> str:
    if helpers.needs_escape(text):
        return helpers.escape_heex(text)
    return text


def build_all_examples(title_groups: Iterable[TitleGroup]) -> str:
    return "\n".join(build_example_function(group) for group in title_groups)


def _example_function(fn_name: str, doc_title: str, body: str) -> str:
    label = helpers.elixir_string(f"Example: {doc_title}")
    return "\n".join(
        [
            f"@doc {label}",
            f"def {fn_name}_example(assigns) do",
            '  ~H"""',
            body,
            '  """',
            "end",
            "",
        ]
    )


__all__ = [
    "build_all_examples",
    "build_example_function",
    "build_single_element_example",
    "element_to_heex",
    "elements_to_heex",
    "generate_element_doc_title",
    "generate_element_function_name",
    "should_split_elements",
    "text_to_heex",
]
