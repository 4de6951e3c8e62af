"""Shared utilities for pandas conversion operations."""

from dataclasses import fields, is_dataclass
from decimal import Decimal
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd  # type: ignore


def decimal_to_float(value: Optional[Decimal]) -> Optional[float]:
    """Convert Decimal to float for pandas compatibility, keeping None."""
    if value is None:
        return None
    return float(value)


def cell_to_python(value: Any) -> Any:
    """Normalise a DataFrame cell to a plain Python value.

    NaN/NaT/None become None and numpy scalars are unwrapped, so that the
    core record coercion sees the same types it would get from a cursor.

    Example:
        >>> cell_to_python(np.int64(3))
        3
        >>> cell_to_python(float("nan")) is None
        True
    """
    if value is None:
        return None
    if isinstance(value, (str, bytes)):
        return value
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if isinstance(value, np.generic):
        return value.item()
    return value


def require_columns(df: pd.DataFrame, columns: Sequence[str]) -> None:
    """Raise ValueError naming any required column absent from ``df``."""
    missing_cols = set(columns) - set(df.columns)
    if missing_cols:
        raise ValueError(f"DataFrame missing required columns: {sorted(missing_cols)}")


def results_to_dataframe(rows: Sequence[Any], columns: Sequence[str]) -> pd.DataFrame:
    """Convert result dataclasses to a DataFrame with the given columns.

    Decimal values are converted to float; None is preserved. An empty
    input produces an empty DataFrame that still carries ``columns``.
    """
    if not rows:
        return pd.DataFrame(columns=list(columns))

    records = []
    for row in rows:
        if not is_dataclass(row):
            raise TypeError(f"Expected a dataclass result row, got {type(row)}")
        record = {}
        for field in fields(row):
            if field.name not in columns:
                continue
            value = getattr(row, field.name)
            if isinstance(value, Decimal):
                value = decimal_to_float(value)
            record[field.name] = value
        records.append(record)

    return pd.DataFrame(records, columns=list(columns))
