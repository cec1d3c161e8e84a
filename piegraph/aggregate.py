"""Per-category aggregation of the data series added to a pie.

Every series added to a pie is summed index-wise into a single totals
vector, one entry per category. Nulls (``None``, ``NaN``, ``pd.NA``)
count as zero, short series leave the trailing categories untouched and
entries past the last category are dropped.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def coerce_series(values: Iterable[Any]) -> np.ndarray:
    """Convert a caller-supplied series to a float vector with nulls as 0.

    Args:
        values: Ordered numbers; null entries (anything ``pd.isna`` accepts)
            are allowed.

    Returns:
        1-D ``float64`` array of the same length.

    Raises:
        TypeError: If an entry is neither null nor numeric.
    """
    if isinstance(values, (str, bytes)):
        raise TypeError("a data series must be a sequence of numbers, not a string")
    items = [0.0 if pd.api.types.is_scalar(v) and pd.isna(v) else v for v in values]
    try:
        arr = np.asarray(items, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise TypeError(f"data series contains a non-numeric entry: {e}") from e
    if arr.ndim != 1:
        raise TypeError("a data series must be one-dimensional")
    return arr


def merge_series(existing: np.ndarray, incoming: Iterable[Any]) -> np.ndarray:
    """Return ``existing`` with ``incoming`` added index-wise.

    The input array is not modified. Only the first ``len(incoming)``
    entries change; an ``incoming`` longer than ``existing`` is truncated.
    """
    merged = np.array(existing, dtype=np.float64, copy=True)
    values = coerce_series(incoming)
    n = min(len(merged), len(values))
    if len(values) > len(merged):
        logger.debug(
            "dropping %d value(s) past the last of %d categories",
            len(values) - len(merged),
            len(merged),
        )
    merged[:n] += values[:n]
    return merged


class SeriesTotals:
    """Owned per-category totals for one chart.

    Not safe for concurrent use: callers that share a chart between threads
    must serialize ``add`` and any render that reads ``values``.
    """

    def __init__(self, n_categories: int):
        if n_categories <= 0:
            raise ValueError("at least one category is required")
        self._values = np.zeros(n_categories, dtype=np.float64)
        self.titles: List[Optional[str]] = []

    def __len__(self) -> int:
        return len(self._values)

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the current totals."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    @property
    def grand_total(self) -> float:
        return float(self._values.sum())

    @property
    def max_value(self) -> float:
        return float(self._values.max())

    def add(self, data: Sequence[Any], title: Optional[str] = None) -> np.ndarray:
        """Merge one series into the totals and return the new totals."""
        values = coerce_series(data)
        self._values = merge_series(self._values, values)
        self.titles.append(title)
        logger.debug(
            "merged series %r (%d value(s)); grand total now %s",
            title,
            len(values),
            self.grand_total,
        )
        return self.values
