"""Key-based joins between the fact table and its dimensions.

These follow SQL semantics: a ``None`` key never matches anything, and a key
present several times on the right side yields one output pair per match.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Iterator, Sequence, TypeVar

L = TypeVar("L")
R = TypeVar("R")


def index_by(
    rows: Iterable[R], key: Callable[[R], Hashable | None]
) -> dict[Hashable, list[R]]:
    """Group ``rows`` by ``key`` for lookup, skipping ``None`` keys."""

    index: dict[Hashable, list[R]] = {}
    for row in rows:
        value = key(row)
        if value is None:
            continue
        index.setdefault(value, []).append(row)
    return index


def left_join(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], Hashable | None],
    right_key: Callable[[R], Hashable | None],
) -> Iterator[tuple[L, R | None]]:
    """Yield every left row paired with each matching right row.

    Left rows without a match (including those with a ``None`` key) are
    yielded once, paired with ``None``.
    """

    index = index_by(right, right_key)
    for row in left:
        value = left_key(row)
        matches: Sequence[R] = index.get(value, ()) if value is not None else ()
        if not matches:
            yield row, None
            continue
        for match in matches:
            yield row, match


def inner_join(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], Hashable | None],
    right_key: Callable[[R], Hashable | None],
) -> Iterator[tuple[L, R]]:
    """Yield only the left/right pairs whose keys match."""

    for row, match in left_join(left, right, left_key, right_key):
        if match is not None:
            yield row, match
