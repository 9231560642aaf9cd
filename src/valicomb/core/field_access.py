"""
Field path resolution over nested input data.

This module resolves dotted field paths such as ``user.email`` or
``items.*.price`` against an untyped data tree. Resolution is lazy (paths are
split at validation time, never precompiled) and total: a missing key or a
scalar in the middle of a path degrades to "no match" instead of raising.
"""

from dataclasses import dataclass
from typing import Any

from valicomb.core.types import ResolvedValue
from valicomb.core.values import (
    INDEX_PATTERN,
    container_values,
    is_container,
    is_mapping,
    is_sequence,
)

WILDCARD = "*"
SEPARATOR = "."


@dataclass
class PathComponents:
    """Result of splitting a field path at its first separator."""

    root: str
    remainder: str
    has_remainder: bool

    @classmethod
    def split_field(cls, field: str) -> "PathComponents":
        """
        Split a field path at the first dot.

        Params:
            field: Field path (e.g., "user.address.city")

        Returns:
            PathComponents with root, remainder, and has_remainder flag

        Examples:
            "user.address.city" -> PathComponents("user", "address.city", True)
            "name" -> PathComponents("name", "", False)
        """
        if not field or SEPARATOR not in field:
            return cls(root=field, remainder="", has_remainder=False)

        root, remainder = field.split(SEPARATOR, 1)
        return cls(root=root, remainder=remainder, has_remainder=True)


def split_path(field: str) -> list[str]:
    """
    Split a field path into its segments.

    Params:
        field: Field path (e.g., "items.*.price")

    Returns:
        List of segments; the wildcard stays a literal "*" segment

    Examples:
        "items.*.price" -> ["items", "*", "price"]
        "name" -> ["name"]
    """
    return str(field).split(SEPARATOR)


class FieldAccessor:
    """
    Resolve field paths against a data tree.

    The accessor is stateless; validators hold one instance so that rules
    which inspect sibling fields (``equals``, ``required_with``) resolve
    paths exactly the way the engine does.
    """

    def resolve(
        self, data: Any, path: list[str], check_presence: bool = False
    ) -> ResolvedValue:
        """
        Resolve a list of path segments against a subtree.

        Params:
            data: Current subtree
            path: Remaining segments
            check_presence: Report whether the final key exists instead of
                whether the match is an aggregate

        Returns:
            Tuple of (value, flag). The flag is True when a wildcard produced
            an aggregate list; in presence-check mode it also reports whether
            the addressed key exists, even when its value is empty.
        """
        if not path:
            return data, False

        if not is_container(data):
            return None, False

        segment, rest = path[0], path[1:]

        if segment == WILDCARD:
            return self._resolve_wildcard(data, rest, check_presence)

        found, key = self._lookup(data, segment)
        if not found or data[key] is None:
            if check_presence:
                return None, found
            return None, False

        if not rest:
            return data[key], check_presence

        return self.resolve(data[key], rest, check_presence)

    def resolve_field(
        self, data: Any, field: str, check_presence: bool = False
    ) -> ResolvedValue:
        """Resolve a dotted field path string; see resolve()."""
        return self.resolve(data, split_path(field), check_presence)

    def is_associative(self, value: Any) -> bool:
        """
        Check if a container is keyed by name rather than by position.

        Params:
            value: Mapping or sequence to inspect

        Returns:
            True if at least one key is non-numeric; sequences are never associative
        """
        if not is_mapping(value):
            return False
        return any(not _is_index_key(key) for key in value.keys())

    def _resolve_wildcard(
        self, data: Any, rest: list[str], check_presence: bool
    ) -> ResolvedValue:
        values: list[Any] = []
        for row in container_values(data):
            value, aggregate = self.resolve(row, rest, check_presence)
            if aggregate and isinstance(value, list):
                values.extend(value)
            else:
                values.append(value)
        return values, True

    def _lookup(self, data: Any, segment: str) -> tuple[bool, Any]:
        """Find the key addressed by a literal segment in a mapping or sequence."""
        if is_sequence(data):
            if INDEX_PATTERN.match(segment) is None:
                return False, None
            index = int(segment)
            if 0 <= index < len(data):
                return True, index
            return False, None

        if segment in data:
            return True, segment
        if INDEX_PATTERN.match(segment) is not None and int(segment) in data:
            return True, int(segment)
        return False, None


def _is_index_key(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return isinstance(key, str) and INDEX_PATTERN.match(key) is not None


def root_segment(field: str) -> str:
    """Return the top-level key a field path starts at."""
    return PathComponents.split_field(str(field)).root


__all__ = [
    "WILDCARD",
    "FieldAccessor",
    "PathComponents",
    "root_segment",
    "split_path",
]
