# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Vertical and horizontal analysis (Análise Vertical / Análise Horizontal).

``analyze`` works on either:

- an aggregated Balance Sheet (rows identified by category code, e.g. the
  ``aggregated`` table returned by ``standardize_balance_sheet``), or
- a detailed statement (rows identified by account name in 'Conta', with
  explicit "Ativo Total" and "Passivo Total" rows).

It produces two tables:

1. AV_AH
   The input table followed by one ``<period>_AV`` column per period
   (vertical analysis) and one ``<period>_AH`` column per period
   (horizontal analysis).

   - AV: asset rows (ACO, ACF, ANC) are divided by the asset total of the
     period, every other row by the liability total (PCO, PCF, PNC, PL).
   - AH: every value is divided by the same row's value in the base period,
     which is the first period column of the table.

2. Projection
   A naive next-period placeholder: every period value grown by 5%, with
   the identifying column prefixed by "Ano Seguinte_".

Divisions by zero produce inf / NaN cells and never raise.
"""

from dataclasses import dataclass
from typing import Union

import pandas as pd

from .errors import ConfigurationError
from .schema import (
    AggregatedMode,
    AnalysisMode,
    find_category_column,
    numeric_columns,
    resolve_mode,
)
from .taxonomy import ASSET_CATEGORIES, LIABILITY_CATEGORIES
from .text import normalize_text

PROJECTION_GROWTH = 1.05
PROJECTION_PREFIX = "Ano Seguinte_"

ASSET_TOTAL_ACCOUNT = "ativo total"
LIABILITY_TOTAL_ACCOUNT = "passivo total"


@dataclass(frozen=True)
class AnalysisResult:
    """Result of ``analyze``.

    Attributes:
        av_ah: Input columns + '<period>_AV' + '<period>_AH' columns.
        projection: Identifying column ('Ano Seguinte_<value>') followed by
            the period columns grown by 5%.
    """

    av_ah: pd.DataFrame
    projection: pd.DataFrame


def _category_totals(
    df: pd.DataFrame, column: str, categories: frozenset[str], periods: list[str]
) -> pd.Series:
    """Sum of the rows whose category is in ``categories``, per period."""
    mask = df[column].isin(categories)
    if not mask.any():
        return pd.Series(0.0, index=periods)
    return df.loc[mask, periods].sum(skipna=True).astype("float64")


def _account_totals(
    df: pd.DataFrame, column: str, account: str, periods: list[str]
) -> pd.Series:
    """Values of the first row whose account name matches ``account``."""
    mask = df[column].map(normalize_text) == account
    if not mask.any():
        return pd.Series(0.0, index=periods)
    return df.loc[mask, periods].iloc[0].astype("float64")


def _safe_ratio(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Element-wise division where x/0 gives inf (or NaN for 0/0)."""
    return numerator.astype("float64") / denominator.astype("float64")


def analyze(
    table: pd.DataFrame, mode: Union[str, AnalysisMode] = "aggregated"
) -> AnalysisResult:
    """Compute vertical analysis, horizontal analysis and a 5% projection.

    Args:
        table: Aggregated or detailed statement with numeric period columns.
        mode: 'aggregated' (or 'agregado'), 'detailed' (or 'detalhado'),
            or an AggregatedMode / DetailedMode instance.

    Returns:
        An AnalysisResult with the AV_AH and projection tables.

    Raises:
        ConfigurationError: if the identifying column cannot be found or the
            table has no numeric period column.
    """
    df = table.copy()
    resolved = resolve_mode(df, mode)
    id_col = resolved.column

    periods = list(numeric_columns(df, exclude=(id_col,)))
    if not periods:
        raise ConfigurationError("No numeric period column found in table.")

    # Totals per period, zero when the reference rows are missing.
    if isinstance(resolved, AggregatedMode):
        asset_total = _category_totals(df, id_col, ASSET_CATEGORIES, periods)
        liability_total = _category_totals(df, id_col, LIABILITY_CATEGORIES, periods)
        category_col = id_col
    else:
        asset_total = _account_totals(df, id_col, ASSET_TOTAL_ACCOUNT, periods)
        liability_total = _account_totals(
            df, id_col, LIABILITY_TOTAL_ACCOUNT, periods
        )
        # Detailed tables coming out of standardization keep their category.
        category_col = find_category_column(df) or id_col

    is_asset = df[category_col].isin(ASSET_CATEGORIES)

    # Vertical analysis
    av_columns: dict[str, pd.Series] = {}
    for p in periods:
        denominator = pd.Series(liability_total[p], index=df.index).where(
            ~is_asset, asset_total[p]
        )
        av_columns[f"{p}_AV"] = _safe_ratio(df[p], denominator)

    # Horizontal analysis, base = first period column.
    base = df[periods[0]]
    ah_columns: dict[str, pd.Series] = {
        f"{p}_AH": _safe_ratio(df[p], base) for p in periods
    }

    av_ah = pd.concat(
        [
            df,
            pd.DataFrame(av_columns, index=df.index),
            pd.DataFrame(ah_columns, index=df.index),
        ],
        axis=1,
    )

    # Projection
    projection = (df[periods].astype("float64") * PROJECTION_GROWTH).copy()
    labels = [
        PROJECTION_PREFIX + ("NA" if pd.isna(v) else str(v)) for v in df[id_col]
    ]
    projection.insert(0, id_col, labels)

    return AnalysisResult(
        av_ah=av_ah.reset_index(drop=True),
        projection=projection.reset_index(drop=True),
    )
