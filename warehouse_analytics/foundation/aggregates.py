"""Null-aware aggregate helpers with SQL semantics."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable


def sql_sum(values: Iterable[Decimal | int | None]) -> Decimal | None:
    """Sum non-null values; return ``None`` when there are none.

    >>> sql_sum([Decimal("1.5"), None, 2])
    Decimal('3.5')
    >>> sql_sum([None, None]) is None
    True
    """

    total: Decimal | None = None
    for value in values:
        if value is None:
            continue
        total = Decimal(value) if total is None else total + value
    return total


def sql_avg(values: Iterable[Decimal | int | None]) -> Decimal | None:
    """Mean of the non-null values, or ``None`` when there are none."""

    total = Decimal("0")
    count = 0
    for value in values:
        if value is None:
            continue
        total += value
        count += 1
    if count == 0:
        return None
    return total / count


def add_nullable(left: Decimal | None, right: Decimal | None) -> Decimal | None:
    """Add two nullable amounts, treating ``None`` as absent."""

    if left is None:
        return right
    if right is None:
        return left
    return left + right
