"""HTML parsing helpers built around BeautifulSoup."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from bs4 import BeautifulSoup, NavigableString, Tag

Node = Any


def parse_document(html: str) -> BeautifulSoup:
    """Parse a document or fragment, keeping source line numbers on tags."""
    return BeautifulSoup(html, "html.parser")


def iter_elements(doc: Node) -> Iterator[Tag]:
    """Yield every element below ``doc`` in document order."""
    if not hasattr(doc, "descendants"):
        return
    for node in doc.descendants:
        if isinstance(node, Tag):
            yield node


def attr(node: Node | None, name: str) -> str | None:
    """Get an element attribute by name."""
    if node is None:
        return None
    attrs = getattr(node, "attrs", None)
    if not isinstance(attrs, dict):
        return None
    value = attrs.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(str(item) for item in value)
    return str(value)


def raw_text(node: Node | None) -> str:
    """Return the unnormalized text held directly by a node (script and style bodies)."""
    children = getattr(node, "children", None)
    if children is None:
        return ""
    return "".join(str(child) for child in children if isinstance(child, NavigableString))


def source_line(node: Node | None) -> int | None:
    line = getattr(node, "sourceline", None)
    return line if isinstance(line, int) else None
