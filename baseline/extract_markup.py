"""Markup extractor: element tags, inline styles and embedded script/style blocks."""

from __future__ import annotations

from bs4 import Tag

from .constants import NON_SCRIPT_TYPES
from .extract_script import extract_script_mentions
from .extract_style import extract_declaration_mentions, extract_style_mentions
from .model import RawMention
from .util.html import attr, iter_elements, parse_document, raw_text, source_line
from .util.log import debug_log


def _is_code_script(element: Tag) -> bool:
    script_type = (attr(element, "type") or "").strip().lower()
    return script_type not in NON_SCRIPT_TYPES


def _element_mentions(element: Tag) -> list[RawMention]:
    tag = element.name.lower()
    line = source_line(element)
    mentions = [RawMention(raw_key=tag, kind="markup", line=line)]

    style_attr = attr(element, "style")
    if style_attr and style_attr.strip():
        mentions.extend(extract_declaration_mentions(style_attr, line))

    if tag == "script" and _is_code_script(element):
        body = raw_text(element)
        if body.strip():
            mentions.extend(extract_script_mentions(body, line=line))
    elif tag == "style":
        body = raw_text(element)
        if body.strip():
            offset = line - 1 if line is not None else 0
            mentions.extend(extract_style_mentions(body, line_offset=offset))

    return mentions


def extract_markup_mentions(text: str) -> list[RawMention]:
    """Return mentions for every element of a markup document or fragment.

    Script containers contribute script candidates pinned to the container's
    line; inline ``style`` attributes contribute style mentions on the
    element's line. A document that fails to parse yields no mentions.
    """
    try:
        doc = parse_document(text)
        mentions: list[RawMention] = []
        for element in iter_elements(doc):
            mentions.extend(_element_mentions(element))
    except Exception as exc:
        debug_log("markup parse failed: %s", exc)
        return []
    return mentions
