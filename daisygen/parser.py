"""Extracts HTML examples from DaisyUI-style markdown documentation.

A documentation file names each example with a ``### ~Title`` heading and
follows it with a fenced ``html`` block. Every block becomes an
:class:`~daisygen.models.Example` holding a normalized element tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Comment as SoupComment
from bs4.element import NavigableString, PageElement, PreformattedString, Tag as SoupTag

from .logging import get_logger
from .models import Comment, Example, Node, PathGroup, Tag, Text, TitleGroup

TITLE_PREFIX = "### ~"
FENCE_OPEN = "```html"
FENCE_CLOSE = "```"
TEMPLATE_MARKER = "$$"

_LOGGER = get_logger("parser")


class ExtractionError(ValueError):
    """Raised when a fenced HTML block cannot be parsed."""

    def __init__(self, path: str, title: Optional[str], reason: str) -> None:
        self.path = path
        self.title = title
        self.reason = reason
        where = f"{path} ({title})" if title else path
        super().__init__(f"Malformed HTML in {where}: {reason}")


@dataclass
class _ScanState:
    source_path: str
    current_title: Optional[str] = None
    in_code_block: bool = False
    current_html: List[str] = field(default_factory=list)
    examples: List[Example] = field(default_factory=list)


def parse_file_lines(lines: Sequence[str], source_path: str) -> List[Example]:
    """Return the examples of one documentation file in document order."""
    state = _ScanState(source_path=source_path)
    for raw in lines:
        line = raw.rstrip("\r\n")
        stripped = line.strip()
        if line.startswith(TITLE_PREFIX):
            state.current_title = line[len(TITLE_PREFIX) :]
        elif stripped == FENCE_OPEN:
            state.in_code_block = True
            state.current_html = []
        elif state.in_code_block and stripped == FENCE_CLOSE:
            _finalize_block(state)
        elif state.in_code_block:
            state.current_html.append(line)

    if state.in_code_block:
        _finalize_block(state)
    return state.examples


def examples_to_path_group(examples: Sequence[Example], source_path: str) -> Optional[PathGroup]:
    """Group one file's examples; ``None`` when the file had none."""
    if not examples:
        return None
    title_groups = tuple(
        TitleGroup(title=example.title, elements=example.elements) for example in examples
    )
    return PathGroup(source_path=source_path, title_groups=title_groups)


def parse_html(html: str, *, path: str = "<string>", title: Optional[str] = None) -> Tuple[Node, ...]:
    """Parse an HTML fragment into cleaned nodes."""
    try:
        soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
    except (ParserRejectedMarkup, AssertionError) as exc:
        raise ExtractionError(path, title, str(exc) or exc.__class__.__name__) from exc
    return _convert_children(soup)


def clean_class_value(value: str) -> str:
    """Drop ``$$`` runtime markers from a class attribute value."""
    return value.replace(TEMPLATE_MARKER, "")


def _finalize_block(state: _ScanState) -> None:
    html = "\n".join(state.current_html)
    title = state.current_title
    state.in_code_block = False
    state.current_html = []

    if title is None:
        _LOGGER.debug("Skipping untitled block in %s", state.source_path)
        return
    if not html.strip():
        _LOGGER.debug("Skipping empty block '%s' in %s", title, state.source_path)
        return

    elements = parse_html(html, path=state.source_path, title=title)
    state.examples.append(Example(title=title, source_path=state.source_path, elements=elements))


def _convert_children(parent: SoupTag) -> Tuple[Node, ...]:
    nodes: List[Node] = []
    for child in parent.children:
        node = _convert(child)
        if node is not None:
            nodes.append(node)
    return tuple(nodes)


def _convert(element: PageElement) -> Optional[Node]:
    if isinstance(element, SoupTag):
        attrs = {key: _attr_value(key, value) for key, value in element.attrs.items()}
        return Tag(name=element.name, attrs=attrs, children=_convert_children(element))
    if isinstance(element, SoupComment):
        return Comment(text=str(element).strip())
    if isinstance(element, PreformattedString):
        # Doctype, CData, declarations and processing instructions.
        return None
    if isinstance(element, NavigableString):
        text = str(element)
        return Text(value=text) if text.strip() else None
    return None


def _attr_value(key: str, value: object) -> str:
    text = " ".join(value) if isinstance(value, list) else str(value)
    if key == "class":
        return clean_class_value(text)
    return text


__all__ = [
    "ExtractionError",
    "clean_class_value",
    "examples_to_path_group",
    "parse_file_lines",
    "parse_html",
]
