"""Legend (key) entries for a pie."""

from __future__ import annotations

from typing import List, Sequence

from ..config import PieConfig
from .format_utils import fmt_value, round_half_up
from .wedges import percent_of


def key_entry(name: str, value: float, total: float, config: PieConfig) -> str:
    """One legend line: ``name [value] NN%``, parts controlled by the key flags.

    The percentage is taken against the grand total; a zero total reads 0%.
    """
    entry = str(name)
    if config.show_key_actual_values:
        entry += " [" + fmt_value(value) + "]"
    if config.show_key_percent:
        entry += " " + str(round_half_up(percent_of(value, total))) + "%"
    return entry


def build_keys(
    labels: Sequence[str], totals: Sequence[float], config: PieConfig
) -> List[str]:
    total = float(sum(totals))
    return [
        key_entry(name, float(value), total, config)
        for name, value in zip(labels, totals)
    ]
