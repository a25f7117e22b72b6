# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Statement standardization.

This module turns a raw statement table (first column = account names,
other columns = periods with Brazilian formatted amounts) into:

- ``original``:   the input with normalized names, decoded amounts and a
                  new category column,
- ``aggregated``: one row per category with the amounts summed per period.

Steps (see ``standardize``):
    1. Rename the first column to 'Conta'.
    2. Infer the column manifest (period columns, text columns).
    3. Normalize account names.
    4. Decode text period columns (numeric columns are kept as is).
    5. Classify every account against the taxonomy.
    6. Aggregate by category in a single pass.

Unclassified accounts keep a None category in ``original`` and do not
contribute to ``aggregated`` unless explicitly requested.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

import pandas as pd

from .parsing import decode_column
from .schema import ACCOUNT_COLUMN, ColumnManifest, infer_statement_manifest
from .taxonomy import BALANCE_SHEET_TAXONOMY, INCOME_STATEMENT_TAXONOMY, Taxonomy
from .text import normalize_text

logger = logging.getLogger(__name__)

BP_CATEGORY_COLUMN = "categorias_bp"
DRE_CATEGORY_COLUMN = "Categoria"

# Category label used for unclassified accounts when they are aggregated.
UNCLASSIFIED = "NAO_CLASSIFICADO"

TableLike = Union[
    pd.DataFrame, Mapping[str, Iterable[Any]], Iterable[Mapping[str, Any]]
]


@dataclass(frozen=True)
class StandardizedStatement:
    """Result of a statement standardization.

    Attributes:
        aggregated: Category column + one float column per period, one row
            per category (first-seen order).
        original: Input rows with normalized names, decoded values and the
            category column (None for unclassified accounts).
        manifest: Column manifest inferred from the input.
    """

    aggregated: pd.DataFrame
    original: pd.DataFrame
    manifest: ColumnManifest


def _as_dataframe(table: TableLike) -> pd.DataFrame:
    if isinstance(table, pd.DataFrame):
        return table.copy()
    if isinstance(table, Mapping):
        return pd.DataFrame({k: list(v) for k, v in table.items()})
    return pd.DataFrame(list(table))


def _finite_sum(values: Iterable[float]) -> float:
    """Exact sum of the finite values; 0.0 when there are none."""
    return math.fsum(v for v in values if not pd.isna(v) and math.isfinite(v))


def aggregate_by_category(
    classified: pd.DataFrame,
    category_column: str,
    period_columns: Iterable[str],
    include_unclassified: bool = False,
) -> pd.DataFrame:
    """Sum period values per category, preserving first-seen category order.

    Missing and non-finite values are skipped; a category whose values are
    all missing sums to 0.0. Rows with a None category are ignored unless
    ``include_unclassified`` is True, in which case they are summed into a
    trailing UNCLASSIFIED row.

    Args:
        classified: Table with the category column and numeric periods.
        category_column: Name of the category column.
        period_columns: Columns to sum.
        include_unclassified: Whether to aggregate unclassified rows.

    Returns:
        A new DataFrame: category column followed by the period columns.
    """
    periods = list(period_columns)
    buckets: dict[str, dict[str, list[float]]] = {}
    unclassified: dict[str, list[float]] = {p: [] for p in periods}

    for _, row in classified.iterrows():
        category = row[category_column]
        if category is None or (not isinstance(category, str) and pd.isna(category)):
            target = unclassified
        else:
            target = buckets.setdefault(str(category), {p: [] for p in periods})
        for p in periods:
            target[p].append(float(row[p]))

    rows: list[dict[str, Any]] = []
    for category, values in buckets.items():
        out: dict[str, Any] = {category_column: category}
        out.update({p: _finite_sum(values[p]) for p in periods})
        rows.append(out)

    if include_unclassified and any(unclassified[p] for p in periods):
        out = {category_column: UNCLASSIFIED}
        out.update({p: _finite_sum(unclassified[p]) for p in periods})
        rows.append(out)

    result = pd.DataFrame(rows, columns=[category_column, *periods])
    return result.astype({p: "float64" for p in periods})


def standardize(
    table: TableLike,
    taxonomy: Taxonomy,
    category_column: str,
    *,
    include_unclassified: bool = False,
    label: Optional[str] = None,
) -> StandardizedStatement:
    """Normalize, decode, classify and aggregate a raw statement table.

    Args:
        table: Raw statement. The first column holds the account names, the
            other columns the period values (Brazilian formatted strings or
            numbers). A mapping of column lists or a sequence of row mappings
            is also accepted.
        taxonomy: Taxonomy used to classify the accounts.
        category_column: Name of the category column to create.
        include_unclassified: Aggregate unclassified accounts into an
            UNCLASSIFIED row instead of leaving them out.
        label: Statement name used in the completion message.

    Returns:
        A StandardizedStatement with the aggregated and enriched tables.

    Raises:
        ValueError: if the table has no columns.
    """
    df = _as_dataframe(table)
    if len(df.columns) == 0:
        raise ValueError("Statement table has no columns.")

    # 1) The first column always holds the account names.
    df = df.rename(columns={df.columns[0]: ACCOUNT_COLUMN})

    # 2) Resolve the structure once; later steps only use the manifest.
    manifest = infer_statement_manifest(df, name_column=ACCOUNT_COLUMN)

    # 3) Normalize names.
    df[ACCOUNT_COLUMN] = [normalize_text(v) for v in df[ACCOUNT_COLUMN]]

    # 4) Decode text columns; numeric columns pass through.
    for c in manifest.text_columns:
        df[c] = decode_column(df[c])

    # 5) Classify.
    categories = [taxonomy.classify(name) for name in df[ACCOUNT_COLUMN]]
    df[category_column] = pd.Series(categories, index=df.index, dtype="object")

    unknown = [n for n, c in zip(df[ACCOUNT_COLUMN], categories) if c is None]
    if unknown:
        logger.debug(
            "%d account(s) not found in taxonomy '%s': %s",
            len(unknown),
            taxonomy.name,
            ", ".join(unknown),
        )

    # 6) Aggregate.
    aggregated = aggregate_by_category(
        df,
        category_column,
        manifest.period_columns,
        include_unclassified=include_unclassified,
    )

    logger.info(
        "%s standardized: %d account(s), %d categor%s, %d unclassified.",
        label or "Statement",
        len(df),
        len(aggregated),
        "y" if len(aggregated) == 1 else "ies",
        len(unknown),
    )

    return StandardizedStatement(aggregated=aggregated, original=df, manifest=manifest)


def standardize_balance_sheet(
    table: TableLike,
    taxonomy: Taxonomy = BALANCE_SHEET_TAXONOMY,
    *,
    include_unclassified: bool = False,
) -> StandardizedStatement:
    """Standardize a Balance Sheet (categories in the 'categorias_bp' column)."""
    return standardize(
        table,
        taxonomy,
        BP_CATEGORY_COLUMN,
        include_unclassified=include_unclassified,
        label="Balance sheet",
    )


def standardize_income_statement(
    table: TableLike,
    taxonomy: Taxonomy = INCOME_STATEMENT_TAXONOMY,
    *,
    include_unclassified: bool = False,
) -> StandardizedStatement:
    """Standardize an Income Statement (categories in the 'Categoria' column)."""
    return standardize(
        table,
        taxonomy,
        DRE_CATEGORY_COLUMN,
        include_unclassified=include_unclassified,
        label="Income statement",
    )
