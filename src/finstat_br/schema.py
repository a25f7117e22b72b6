# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Column detection for statement tables.

Statement tables carry their structure implicitly: the account names are in
the first column, periods are the remaining columns, and aggregated tables
use one of several historical names for their category column. This module
resolves that structure once into explicit objects that the later stages
consume:

- ColumnManifest:  name column + period columns (+ which ones are text).
- AggregatedMode / DetailedMode: the analysis mode, carrying the resolved
  identifying column.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Union

import pandas as pd

from .errors import ConfigurationError

# Name of the account-name column in standardized tables.
ACCOUNT_COLUMN = "Conta"

# Category column names accepted in aggregated tables, by priority.
CATEGORY_COLUMN_CANDIDATES: tuple[str, ...] = (
    "categorias_bp",
    "Categorias",
    "Categoria",
    "categoria",
)


@dataclass(frozen=True)
class ColumnManifest:
    """Resolved structure of a statement table.

    Attributes:
        name_column: Column holding the account names (or categories).
        period_columns: Value columns, in table order.
        text_columns: Subset of ``period_columns`` holding formatted text
            that must be decoded into numbers.
    """

    name_column: str
    period_columns: tuple[str, ...]
    text_columns: tuple[str, ...] = ()


def _is_text_column(col: pd.Series) -> bool:
    """True if every non-missing entry of the column is a string."""
    if pd.api.types.is_numeric_dtype(col) or pd.api.types.is_bool_dtype(col):
        return False
    non_missing = col.dropna()
    return all(isinstance(v, str) for v in non_missing)


def _is_period_dtype(col: pd.Series) -> bool:
    return pd.api.types.is_numeric_dtype(col) and not pd.api.types.is_bool_dtype(
        col
    )


def infer_statement_manifest(
    df: pd.DataFrame, name_column: str = ACCOUNT_COLUMN
) -> ColumnManifest:
    """Infer the manifest of a raw statement whose first column is the name.

    A non-name column is a period column when it is numeric, or when all its
    non-missing entries are strings (these are also listed as text columns).
    Columns mixing numbers and text are left out.

    Args:
        df: Raw statement with the account names already in ``name_column``.
        name_column: Name of the account-name column.

    Returns:
        The ColumnManifest of the table.
    """
    periods: list[str] = []
    texts: list[str] = []
    for c in df.columns:
        if c == name_column:
            continue
        col = df[c]
        if _is_period_dtype(col):
            periods.append(c)
        elif _is_text_column(col):
            periods.append(c)
            texts.append(c)
    return ColumnManifest(
        name_column=name_column,
        period_columns=tuple(periods),
        text_columns=tuple(texts),
    )


def numeric_columns(
    df: pd.DataFrame, exclude: Sequence[str] = ()
) -> tuple[str, ...]:
    """Return the numeric (non-boolean) columns of a table, in table order."""
    return tuple(
        c for c in df.columns if c not in exclude and _is_period_dtype(df[c])
    )


def find_category_column(df: pd.DataFrame) -> Optional[str]:
    """Return the first category column candidate present in ``df``, if any."""
    for cand in CATEGORY_COLUMN_CANDIDATES:
        if cand in df.columns:
            return cand
    return None


@dataclass(frozen=True)
class AggregatedMode:
    """Analysis of an aggregated table, rows identified by category code."""

    column: str


@dataclass(frozen=True)
class DetailedMode:
    """Analysis of a detailed table, rows identified by account name."""

    column: str = ACCOUNT_COLUMN


AnalysisMode = Union[AggregatedMode, DetailedMode]

_AGGREGATED_NAMES = {"aggregated", "agregado"}
_DETAILED_NAMES = {"detailed", "detalhado"}


def resolve_mode(df: pd.DataFrame, mode: Union[str, AnalysisMode]) -> AnalysisMode:
    """Resolve an analysis mode against a table.

    Args:
        df: Table to analyze.
        mode: 'aggregated' / 'detailed' (or the Portuguese 'agregado' /
            'detalhado'), or an already resolved mode.

    Returns:
        AggregatedMode or DetailedMode carrying the identifying column.

    Raises:
        ConfigurationError: if the mode is unknown or its identifying column
            is not in the table.
    """
    if isinstance(mode, (AggregatedMode, DetailedMode)):
        if mode.column not in df.columns:
            raise ConfigurationError(
                f"Identifying column '{mode.column}' not found in table."
            )
        return mode

    key = str(mode).strip().lower()
    if key in _AGGREGATED_NAMES:
        col = find_category_column(df)
        if col is None:
            raise ConfigurationError(
                "No category column found in table. Expected one of: "
                + ", ".join(f"'{c}'" for c in CATEGORY_COLUMN_CANDIDATES)
                + "."
            )
        return AggregatedMode(column=col)

    if key in _DETAILED_NAMES:
        if ACCOUNT_COLUMN not in df.columns:
            raise ConfigurationError(
                f"Detailed analysis requires a '{ACCOUNT_COLUMN}' column."
            )
        return DetailedMode()

    raise ConfigurationError(
        f"Unknown analysis mode {mode!r}, expected 'aggregated' or 'detailed'."
    )
