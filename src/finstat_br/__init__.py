# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
FinStat BR
----------

A Python library and command-line tool that standardizes raw Brazilian
financial statements (Balanço Patrimonial - BP, and Demonstração do
Resultado do Exercício - DRE) into a normalized account taxonomy and
derives classic financial analyses from them.

Main capabilities:
- locale-insensitive normalization of account names,
- decoding of Brazilian formatted amounts ("(1.234,56)" -> -1234.56),
- classification of accounts into BP / DRE categories (ACO, PCF, ...),
- aggregation of the statement by category,
- vertical and horizontal analysis (AV / AH) with a naive projection,
- liquidity, leverage, margin and DuPont ratios with automatic EBIT.

The computation modules work on pandas DataFrames and never touch the
filesystem. Configuration (TOML) and CSV ingestion are kept in separate
modules used by the command-line interface.

Version: 0.2.0

Usage:
    python -m finstat_br.cli --help
"""

from .analysis import AnalysisResult, analyze
from .ratios import RatiosResult, compute_ratios
from .standardize import (
    StandardizedStatement,
    standardize_balance_sheet,
    standardize_income_statement,
)

__all__ = [
    "AnalysisResult",
    "RatiosResult",
    "StandardizedStatement",
    "analyze",
    "compute_ratios",
    "standardize_balance_sheet",
    "standardize_income_statement",
]

__version__ = "0.2.0"
