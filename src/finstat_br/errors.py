# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Exceptions and warnings raised by FinStat BR.

All errors derive from ``ValueError`` so that callers already guarding
against invalid input/configuration with ``except ValueError`` keep working.

Only configuration problems are fatal. Data-quality issues (unparseable
amounts, unknown accounts, missing categories, divisions by zero) degrade
to missing values instead of raising.
"""


class ConfigurationError(ValueError):
    """A required column, mode or configuration value is missing or invalid."""


class ParseError(ValueError):
    """An amount string could not be decoded into a number."""


class DuplicateCategoryError(ValueError):
    """A synthetic category would overwrite one already present in a table."""


class MissingEbitInputsWarning(UserWarning):
    """EBIT could not be derived because the DRE lacks one of its inputs."""
