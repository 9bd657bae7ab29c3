"""Lexical heuristics for API identifiers in script text.

This is not a parser. Dotted member chains (``navigator.gpu``,
``Array.prototype.at``) and capitalized constructor-like names
(``IntersectionObserver``) are collected line by line; over-matches are
filtered later when the catalog fails to resolve them.
"""

from __future__ import annotations

import re
from typing import Protocol

from .model import RawMention, ScriptCandidate

_IDENT = r"[A-Za-z_$][A-Za-z0-9_$]*"
_DOTTED_RE = re.compile(rf"\b{_IDENT}(?:\.(?:prototype\.)?{_IDENT})+")
_CAPITALIZED_RE = re.compile(r"\b[A-Z][A-Za-z0-9_$]{3,}\b")


class ScriptExtractor(Protocol):
    def __call__(self, text: str) -> list[ScriptCandidate]: ...


def extract_script_candidates(text: str) -> list[ScriptCandidate]:
    """Return API-like candidates in first-occurrence order, one per distinct string."""
    seen: set[str] = set()
    output: list[ScriptCandidate] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        matches = _DOTTED_RE.findall(line) + _CAPITALIZED_RE.findall(line)
        for candidate in matches:
            if candidate in seen:
                continue
            seen.add(candidate)
            output.append(ScriptCandidate(candidate=candidate, line=line_number))
    return output


def extract_script_mentions(
    text: str,
    *,
    line: int | None = None,
    extractor: ScriptExtractor = extract_script_candidates,
) -> list[RawMention]:
    """Wrap script candidates as mentions; ``line`` pins every mention to one line."""
    return [
        RawMention(
            raw_key=item.candidate,
            kind="script",
            line=item.line if line is None else line,
        )
        for item in extractor(text)
    ]
