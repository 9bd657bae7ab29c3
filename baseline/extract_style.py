"""Stylesheet declaration extractor built on tinycss2."""

from __future__ import annotations

from collections.abc import Iterable

import tinycss2
from tinycss2.ast import AtRule, Declaration, Node

from .model import RawMention
from .util.log import debug_log
from .util.text import normalize_whitespace

# At-rules whose block holds nested rules rather than declarations.
_GROUPING_AT_RULES = frozenset(
    {"media", "supports", "layer", "container", "document", "scope", "starting-style"}
)


def _declaration_value(declaration: Declaration) -> str | None:
    value = normalize_whitespace(tinycss2.serialize(declaration.value))
    return value or None


def _mention(declaration: Declaration, line: int | None) -> RawMention:
    return RawMention(
        raw_key=declaration.lower_name,
        kind="style",
        line=line,
        value=_declaration_value(declaration),
    )


class _StyleWalker:
    def __init__(
        self, *, line_offset: int = 0, pinned: bool = False, pinned_line: int | None = None
    ) -> None:
        self._line_offset = line_offset
        self._pinned = pinned
        self._pinned_line = pinned_line
        self.mentions: list[RawMention] = []

    def _line_for(self, node: Node) -> int | None:
        if self._pinned:
            return self._pinned_line
        line = getattr(node, "source_line", None)
        if not isinstance(line, int):
            return None
        return line + self._line_offset

    def walk_rules(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            if node.type == "qualified-rule":
                self.walk_block(node.content)
            elif node.type == "at-rule":
                self._walk_at_rule(node, nested=False)

    def walk_block(self, content: object) -> None:
        for node in tinycss2.parse_blocks_contents(
            content, skip_comments=True, skip_whitespace=True
        ):
            if node.type == "declaration":
                self.mentions.append(_mention(node, self._line_for(node)))
            elif node.type == "qualified-rule":
                self.walk_block(node.content)
            elif node.type == "at-rule":
                self._walk_at_rule(node, nested=True)

    def _walk_at_rule(self, rule: AtRule, *, nested: bool) -> None:
        if rule.content is None:
            return
        # Inside a style rule a grouping rule holds declarations as well as rules.
        if rule.lower_at_keyword in _GROUPING_AT_RULES and not nested:
            self.walk_rules(
                tinycss2.parse_rule_list(rule.content, skip_comments=True, skip_whitespace=True)
            )
        else:
            self.walk_block(rule.content)


def extract_style_mentions(text: str, *, line_offset: int = 0) -> list[RawMention]:
    """Return one style mention per declaration found in a stylesheet.

    Malformed input never raises: parse errors are skipped by tinycss2 and any
    unexpected failure yields an empty list.
    """
    walker = _StyleWalker(line_offset=line_offset)
    try:
        walker.walk_rules(
            tinycss2.parse_stylesheet(text, skip_comments=True, skip_whitespace=True)
        )
    except Exception as exc:
        debug_log("stylesheet parse failed: %s", exc)
        return []
    return walker.mentions


def extract_declaration_mentions(text: str, line: int | None) -> list[RawMention]:
    """Return style mentions for a bare declaration list such as an inline style attribute."""
    walker = _StyleWalker(pinned=True, pinned_line=line)
    try:
        walker.walk_block(text)
    except Exception as exc:
        debug_log("inline style parse failed: %s", exc)
        return []
    return walker.mentions
