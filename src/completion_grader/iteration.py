"""Iteration utilities."""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def first(iterable: Iterable[T], predicate: Callable[[T], bool]) -> T | None:
    """Return the first item in iterable that satisfies the predicate, or None if no match.

    Stops consuming the iterable at the first match, so it is safe to use with
    lazy tree walks.

    Examples:
        >>> first(["a.txt", "b.js", "c.js"], lambda name: name.endswith(".js"))
        'b.js'
        >>> first([1, 2, 3], lambda x: x > 10) is None
        True
    """
    return next((item for item in iterable if predicate(item)), None)
