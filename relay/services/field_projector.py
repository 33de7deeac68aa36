"""Field projection over arbitrary JSON values.

Callers select fields with dotted paths such as ``main.temp`` or
``weather[0].description``. Each path is parsed into a tuple of
``PathSegment`` tokens and evaluated by a small recursive-descent resolver.
Paths that cannot be resolved are left out of the result entirely.

All functions are pure and never mutate their input.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

# ``name[index]`` as a whole segment; anything else is a plain key
_INDEXED_SEGMENT = re.compile(r"(?P<key>.+?)\[(?P<index>\d+)\]")


class _Missing:
    """Sentinel type for a value that could not be resolved."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class PathSegment:
    """One step of a field path.

    Attributes:
        key: Mapping key to look up.
        index: Optional list position applied after the key lookup.
    """

    key: str
    index: int | None = None


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Parse a dotted field path into segment tokens.

    No syntax validation happens here: a malformed segment becomes a plain
    key that will simply fail to resolve.

    Args:
        path: Field path, e.g. ``"weather[0].description"``.

    Returns:
        Tuple of PathSegment tokens in traversal order.
    """
    segments: list[PathSegment] = []
    for part in path.split("."):
        match = _INDEXED_SEGMENT.fullmatch(part)
        if match:
            segments.append(PathSegment(key=match["key"], index=int(match["index"])))
        else:
            segments.append(PathSegment(key=part))
    return tuple(segments)


def _lookup(value: Any, key: str) -> Any:
    if not isinstance(value, dict):
        return MISSING
    return value.get(key, MISSING)


def _index(value: Any, index: int) -> Any:
    if not isinstance(value, list) or index >= len(value):
        return MISSING
    return value[index]


def resolve(value: Any, segments: Sequence[PathSegment]) -> Any:
    """Resolve parsed segments against a JSON value.

    Args:
        value: Current JSON value.
        segments: Remaining segments to apply.

    Returns:
        The resolved value, or MISSING as soon as any step fails.
    """
    if not segments:
        return value

    head, rest = segments[0], segments[1:]
    value = _lookup(value, head.key)
    if value is MISSING:
        return MISSING
    if head.index is not None:
        value = _index(value, head.index)
        if value is MISSING:
            return MISSING
    return resolve(value, rest)


def project(data: Any, paths: Sequence[str] | None) -> Any:
    """Extract the selected fields from a JSON value.

    With no paths the input is returned unchanged. Otherwise the result maps
    each resolvable path string (verbatim) to its value, in input order.
    A path resolving to JSON null is kept; only unresolvable paths are
    dropped.

    Args:
        data: Any JSON value.
        paths: Field paths to extract, or None.

    Returns:
        ``data`` itself when ``paths`` is empty, else a dict of path -> value.
    """
    if not paths:
        return data

    projected: dict[str, Any] = {}
    for path in paths:
        value = resolve(data, parse_path(path))
        if value is not MISSING:
            projected.setdefault(path, value)
    return projected
