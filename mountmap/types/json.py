"""
JSON Value Types

Typing aliases for JSON documents and the NOT_FOUND sentinel returned
when a path does not resolve.
"""

from __future__ import annotations

from typing import Any, Callable, Union

JSONScalar = Union[str, int, float, bool, None]
JSONValue = Union[JSONScalar, list[Any], dict[str, Any]]
"""Any value json.loads can produce. Container members are typed as Any to keep the alias non-recursive."""

JSONObject = dict[str, Any]
FlatMap = dict[str, JSONScalar]
"""Flat encoding: dotted path -> scalar, plus ``<path>.$type`` container markers."""


def _get_not_found() -> "_NotFoundType":
    """Return the NOT_FOUND singleton. Called by pickle to reconstruct."""
    return NOT_FOUND


class _NotFoundType:
    """Sentinel type for a path that does not resolve."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_NotFoundType":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "_NotFoundType":
        return self

    def __reduce__(self) -> tuple[Callable[[], "_NotFoundType"], tuple[()]]:
        return (_get_not_found, ())


NOT_FOUND = _NotFoundType()


def is_container(value: Any) -> bool:
    """True for JSON objects and arrays."""
    return isinstance(value, (dict, list))
