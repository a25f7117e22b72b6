# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for FinStat BR.

Helpers that prepare computed tables for display or CSV export. They do
not compute anything financial; they only reshape and round the output of
``ratios.compute_ratios``.
"""

import pandas as pd

from .ratios import INDICATOR_COLUMN, RatiosResult

# Group labels used in the long format, in display order.
RATIO_GROUPS: tuple[tuple[str, str], ...] = (
    ("bp", "bp_ratios"),
    ("dre", "dre_ratios"),
    ("combined", "combined_ratios"),
)


def round_ratios(df: pd.DataFrame, decimals: int) -> pd.DataFrame:
    """Return a copy of a ratio table with every period column rounded."""
    out = df.copy()
    for c in out.columns:
        if c != INDICATOR_COLUMN:
            out[c] = out[c].astype("float64").round(decimals)
    return out


def ratios_to_long(result: RatiosResult) -> pd.DataFrame:
    """
    Convert a RatiosResult into a single long-format DataFrame.

    The resulting DataFrame has the following columns:
        - group:     'bp', 'dre' or 'combined'.
        - Indicador: ratio label (e.g. 'Liquidez Corrente').
        - period:    period column the value comes from.
        - value:     numeric value, NaN when the ratio has no value.

    Groups whose table is None are left out. Rows keep the group order, then
    the indicator order, then the period order of the source tables.
    """
    frames: list[pd.DataFrame] = []
    for group, attr in RATIO_GROUPS:
        table = getattr(result, attr)
        if table is None or len(table.columns) <= 1:
            continue
        long = table.melt(
            id_vars=[INDICATOR_COLUMN], var_name="period", value_name="value"
        )
        # melt stacks period by period; restore the indicator-major order.
        long["__order__"] = long[INDICATOR_COLUMN].map(
            {name: i for i, name in enumerate(table[INDICATOR_COLUMN])}
        )
        long = long.sort_values("__order__", kind="stable").drop(columns="__order__")
        long.insert(0, "group", group)
        frames.append(long)

    if not frames:
        return pd.DataFrame(columns=["group", INDICATOR_COLUMN, "period", "value"])

    return pd.concat(frames, ignore_index=True)[
        ["group", INDICATOR_COLUMN, "period", "value"]
    ]
