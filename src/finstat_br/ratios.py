# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.


"""
Financial ratios (indicadores) computed from aggregated BP and DRE tables.

This module complements the standardization step (standardize.py) by
computing, for every period column:

1. Balance Sheet ratios (liquidity and capital structure)
   -------------------------------------------------------
       Liquidez Corrente          = (ACO + ACF) / (PCO + PCF)
       Liquidez Seca              = ACO / (PCO + PCF)
       Liquidez Imediata          = ACF / (PCO + PCF)
       Endividamento Geral        = (PCO + PCF + PNC) / (ACO + ACF + ANC)
       Composição do Endividamento = (PCO + PCF) / (PCO + PCF + PNC)
       Imobilização do PL         = ANC / PL

2. Income Statement ratios (margins)
   ----------------------------------
       Margem Bruta       = (RECEITA_LIQUIDA - CUSTO_BENS_SERVICOS) / RECEITA_LIQUIDA
       Margem Operacional = EBIT / RECEITA_LIQUIDA
       Margem Líquida     = RESULTADO_LIQUIDO / RECEITA_LIQUIDA

   EBIT is derived automatically (see ``derive_ebit``) as
       LUCRO_BRUTO - DESPESAS_OPERACIONAIS + RESULTADO_FINANCEIRO

3. Combined ratios (profitability, DuPont)
   ----------------------------------------
   Computed only for the periods present in both tables:
       ROA                    = RESULTADO_LIQUIDO / Ativo Total
       ROE                    = RESULTADO_LIQUIDO / PL
       Giro do Ativo          = RECEITA_LIQUIDA / Ativo Total
       Alavancagem Financeira = Ativo Total / PL
       EBIT/Ativo             = EBIT / Ativo Total
   where Ativo Total = ACO + ACF + ANC.

Missing values
--------------
A missing table, category or period, and any division by zero, yields
"no value" (None internally, NaN in the output tables). Nothing in this
module raises because of incomplete data; output tables simply contain
NaN cells or are None when their input table is absent.

Expense categories (CUSTO_*, DESPESAS_OPERACIONAIS) enter the formulas
above as magnitudes: a cost printed in parentheses ("(40.000,00)") and
decoded as a negative number gives the same ratio as its positive form.
"""

import math
import warnings
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .errors import DuplicateCategoryError, MissingEbitInputsWarning
from .schema import find_category_column, numeric_columns

EBIT = "EBIT"
EBIT_INPUTS: tuple[str, ...] = (
    "LUCRO_BRUTO",
    "DESPESAS_OPERACIONAIS",
    "RESULTADO_FINANCEIRO",
)

# The cost line used by the gross margin. CUSTO_VENDAS is the name used by
# the built-in DRE taxonomy and is used when CUSTO_BENS_SERVICOS is absent.
COST_CATEGORY = "CUSTO_BENS_SERVICOS"
COST_CATEGORY_FALLBACK = "CUSTO_VENDAS"

INDICATOR_COLUMN = "Indicador"

BP_INDICATORS: tuple[str, ...] = (
    "Liquidez Corrente",
    "Liquidez Seca",
    "Liquidez Imediata",
    "Endividamento Geral",
    "Composição do Endividamento",
    "Imobilização do PL",
)
DRE_INDICATORS: tuple[str, ...] = (
    "Margem Bruta",
    "Margem Operacional",
    "Margem Líquida",
)
COMBINED_INDICATORS: tuple[str, ...] = (
    "ROA",
    "ROE",
    "Giro do Ativo",
    "Alavancagem Financeira",
    "EBIT/Ativo",
)


@dataclass(frozen=True)
class RatiosResult:
    """
    Ratio tables returned by ``compute_ratios``.

    Each table has an 'Indicador' column followed by one column per period.
    A table is None when the statement(s) it depends on were not provided.

    Attributes:
        bp_ratios: Liquidity and capital structure ratios.
        dre_ratios: Margin ratios.
        combined_ratios: Profitability / DuPont ratios (periods common to
            both statements).
    """

    bp_ratios: Optional[pd.DataFrame]
    dre_ratios: Optional[pd.DataFrame]
    combined_ratios: Optional[pd.DataFrame]


def lookup(
    table: Optional[pd.DataFrame], category: str, period: str
) -> Optional[float]:
    """
    Return the summed value of a category for a period, or None.

    None ("no value") is returned when the table is None, has no category
    column, has no such period column, or does not contain the category.
    Missing cells are skipped in the sum.
    """
    if table is None:
        return None
    cat_col = find_category_column(table)
    if cat_col is None or period not in table.columns:
        return None
    mask = table[cat_col] == category
    if not mask.any():
        return None
    values = pd.to_numeric(table.loc[mask, period], errors="coerce")
    return float(values.sum(skipna=True))


def safe_divide(a: Optional[float], b: Optional[float]) -> Optional[float]:
    """Return a / b, or None if either operand is None or b is zero."""
    if a is None or b is None or b == 0:
        return None
    return a / b


def _add(*values: Optional[float]) -> Optional[float]:
    """Sum that propagates "no value"."""
    if any(v is None for v in values):
        return None
    return math.fsum(values)  # type: ignore[arg-type]


def _sub(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None or b is None:
        return None
    return a - b


def _magnitude(value: Optional[float]) -> Optional[float]:
    return None if value is None else abs(value)


def _periods(table: pd.DataFrame) -> list[str]:
    cat_col = find_category_column(table)
    return list(numeric_columns(table, exclude=(cat_col,) if cat_col else ()))


def derive_ebit(dre: pd.DataFrame, stacklevel: int = 2) -> pd.DataFrame:
    """
    Return a copy of the DRE with a synthetic EBIT row appended.

    EBIT = LUCRO_BRUTO - DESPESAS_OPERACIONAIS + RESULTADO_FINANCEIRO,
    computed for every period column. DESPESAS_OPERACIONAIS is taken as a
    magnitude, whatever its sign in the statement.

    ``stacklevel`` is forwarded to ``warnings.warn`` so that the warning
    points at the caller of the public entry point.

    If one of the three input categories is missing (or the table has no
    category column), a MissingEbitInputsWarning is emitted and the table is
    returned unchanged; EBIT-based ratios will then have no value.

    Raises:
        DuplicateCategoryError: if the table already contains an EBIT row.
    """
    out = dre.copy()
    cat_col = find_category_column(out)
    categories = set(out[cat_col].dropna()) if cat_col is not None else set()

    if EBIT in categories:
        raise DuplicateCategoryError(
            "The DRE already contains an 'EBIT' category; refusing to overwrite it."
        )

    missing = [c for c in EBIT_INPUTS if c not in categories]
    if missing:
        warnings.warn(
            "EBIT cannot be computed: the DRE must contain the categories "
            + ", ".join(EBIT_INPUTS)
            + f" (missing: {', '.join(missing)}).",
            MissingEbitInputsWarning,
            stacklevel=stacklevel,
        )
        return out

    row: dict[str, object] = {cat_col: EBIT}
    for p in _periods(out):
        gross_profit = lookup(out, "LUCRO_BRUTO", p)
        operating_expenses = lookup(out, "DESPESAS_OPERACIONAIS", p)
        financial_result = lookup(out, "RESULTADO_FINANCEIRO", p)
        row[p] = _add(
            _sub(gross_profit, _magnitude(operating_expenses)), financial_result
        )
    return pd.concat([out, pd.DataFrame([row])], ignore_index=True)


def _build_table(
    indicators: Sequence[str],
    periods: Sequence[str],
    compute: Callable[[str], Sequence[Optional[float]]],
) -> pd.DataFrame:
    """Build an 'Indicador' x period table; None values become NaN."""
    data: dict[str, list] = {INDICATOR_COLUMN: list(indicators)}
    for p in periods:
        values = compute(p)
        data[p] = [math.nan if v is None else float(v) for v in values]
    return pd.DataFrame(data)


def _bp_ratios(bp: pd.DataFrame, period: str) -> list[Optional[float]]:
    aco = lookup(bp, "ACO", period)
    acf = lookup(bp, "ACF", period)
    pco = lookup(bp, "PCO", period)
    pcf = lookup(bp, "PCF", period)
    anc = lookup(bp, "ANC", period)
    pnc = lookup(bp, "PNC", period)
    pl = lookup(bp, "PL", period)

    current_liabilities = _add(pco, pcf)
    return [
        safe_divide(_add(aco, acf), current_liabilities),
        safe_divide(aco, current_liabilities),
        safe_divide(acf, current_liabilities),
        safe_divide(_add(pco, pcf, pnc), _add(aco, acf, anc)),
        safe_divide(current_liabilities, _add(pco, pcf, pnc)),
        safe_divide(anc, pl),
    ]


def _dre_ratios(dre: pd.DataFrame, period: str) -> list[Optional[float]]:
    revenue = lookup(dre, "RECEITA_LIQUIDA", period)
    cost = lookup(dre, COST_CATEGORY, period)
    if cost is None:
        cost = lookup(dre, COST_CATEGORY_FALLBACK, period)
    net_income = lookup(dre, "RESULTADO_LIQUIDO", period)
    ebit = lookup(dre, EBIT, period)

    return [
        safe_divide(_sub(revenue, _magnitude(cost)), revenue),
        safe_divide(ebit, revenue),
        safe_divide(net_income, revenue),
    ]


def _combined_ratios(
    bp: pd.DataFrame, dre: pd.DataFrame, period: str
) -> list[Optional[float]]:
    total_assets = _add(
        lookup(bp, "ACO", period), lookup(bp, "ACF", period), lookup(bp, "ANC", period)
    )
    pl = lookup(bp, "PL", period)
    revenue = lookup(dre, "RECEITA_LIQUIDA", period)
    net_income = lookup(dre, "RESULTADO_LIQUIDO", period)
    ebit = lookup(dre, EBIT, period)

    return [
        safe_divide(net_income, total_assets),
        safe_divide(net_income, pl),
        safe_divide(revenue, total_assets),
        safe_divide(total_assets, pl),
        safe_divide(ebit, total_assets),
    ]


def compute_ratios(
    bp: Optional[pd.DataFrame] = None,
    dre: Optional[pd.DataFrame] = None,
) -> RatiosResult:
    """
    Compute BP, DRE and combined ratios for every available period.

    Args:
        bp: Aggregated Balance Sheet (category column + period columns), or
            None.
        dre: Aggregated Income Statement, or None. EBIT is derived on a copy
            of it before the ratios are computed.

    Returns:
        A RatiosResult. ``bp_ratios`` is None without ``bp``, ``dre_ratios``
        is None without ``dre``, ``combined_ratios`` is None unless both are
        given. Ratios that cannot be computed are NaN.

    Warns:
        MissingEbitInputsWarning: if EBIT cannot be derived from ``dre``.

    Raises:
        DuplicateCategoryError: if ``dre`` already contains an EBIT row.
    """
    if dre is not None:
        dre = derive_ebit(dre, stacklevel=3)

    bp_table: Optional[pd.DataFrame] = None
    if bp is not None:
        bp_table = _build_table(
            BP_INDICATORS, _periods(bp), lambda p: _bp_ratios(bp, p)
        )

    dre_table: Optional[pd.DataFrame] = None
    if dre is not None:
        dre_table = _build_table(
            DRE_INDICATORS, _periods(dre), lambda p: _dre_ratios(dre, p)
        )

    combined_table: Optional[pd.DataFrame] = None
    if bp is not None and dre is not None:
        dre_periods = set(_periods(dre))
        common = [p for p in _periods(bp) if p in dre_periods]
        combined_table = _build_table(
            COMBINED_INDICATORS, common, lambda p: _combined_ratios(bp, dre, p)
        )

    return RatiosResult(
        bp_ratios=bp_table,
        dre_ratios=dre_table,
        combined_ratios=combined_table,
    )
