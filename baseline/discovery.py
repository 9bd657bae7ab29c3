"""Source file discovery: glob expansion, traversal and reading."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import os
from pathlib import Path
import re

from .constants import DEFAULT_PATTERNS, IGNORED_DIRS, SOURCE_KIND_BY_SUFFIX
from .exceptions import SourceDiscoveryError
from .model import SourceKind, SourceUnit
from .util.log import debug_log

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` groups, e.g. ``*.{css,html}`` -> ``*.css``, ``*.html``."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    output: list[str] = []
    for option in match.group(1).split(","):
        output.extend(expand_braces(f"{head}{option}{tail}"))
    return output


def source_kind(path: str | Path) -> SourceKind | None:
    return SOURCE_KIND_BY_SUFFIX.get(Path(path).suffix.lower())


def pattern_regex(pattern: str) -> re.Pattern[str]:
    """Translate a glob (``**``, ``*``, ``?``) into a regex over POSIX relative paths."""
    parts: list[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
        elif pattern.startswith("**", index):
            parts.append(".*")
            index += 2
        elif pattern[index] == "*":
            parts.append("[^/]*")
            index += 1
        elif pattern[index] == "?":
            parts.append("[^/]")
            index += 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return re.compile("".join(parts) + r"\Z")


def _relative_pattern(pattern: str, base: Path) -> str:
    if not Path(pattern).is_absolute():
        return pattern.removeprefix("./")
    try:
        return Path(pattern).relative_to(base.resolve()).as_posix()
    except ValueError:
        debug_log("ignoring pattern outside the scan root: %s", pattern)
        return ""


def _walk_files(base: Path, ignored: frozenset[str]) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(base):
        # Prune in place so ignored subtrees are never entered.
        dirnames[:] = [name for name in dirnames if name not in ignored]
        relative = Path(dirpath).relative_to(base)
        for filename in filenames:
            yield (relative / filename).as_posix()


def iter_source_paths(
    patterns: Sequence[str] | None = None,
    *,
    root: str | Path = ".",
    ignore_dirs: Iterable[str] = IGNORED_DIRS,
) -> list[tuple[str, Path]]:
    """Return sorted ``(display path, filesystem path)`` pairs matching ``patterns``.

    The tree under ``root`` is walked once; patterns are matched against paths
    relative to it.
    """
    base = Path(root)
    if not base.is_dir():
        raise SourceDiscoveryError(str(root))

    matchers = [
        pattern_regex(pattern)
        for raw_pattern in patterns or DEFAULT_PATTERNS
        for pattern in expand_braces(_relative_pattern(raw_pattern.strip(), base))
        if pattern
    ]
    found: dict[str, Path] = {}
    for display in _walk_files(base, frozenset(ignore_dirs)):
        if not any(matcher.match(display) for matcher in matchers):
            continue
        path = base / display
        if path.is_file():
            found[display] = path
    return sorted(found.items())


def discover_sources(
    patterns: Sequence[str] | None = None,
    *,
    root: str | Path = ".",
    ignore_dirs: Iterable[str] = IGNORED_DIRS,
) -> list[SourceUnit]:
    """Read every scannable file matching ``patterns``; unreadable files are skipped."""
    units: list[SourceUnit] = []
    for display, path in iter_source_paths(patterns, root=root, ignore_dirs=ignore_dirs):
        kind = source_kind(path)
        if kind is None:
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            debug_log("skipping unreadable file %s: %s", display, exc)
            continue
        units.append(SourceUnit(path=display, text=text, kind=kind))
    return units
