# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for FinStat BR.

This module is responsible for:
- loading the main application configuration from a TOML file,
- loading custom account taxonomies from TOML files,
- exposing typed dataclasses used by the command-line interface.

The computation modules never read configuration themselves: taxonomies
and options are passed to them explicitly.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import tomllib  # Python 3.11+

from .errors import ConfigurationError
from .taxonomy import BALANCE_SHEET_TAXONOMY, INCOME_STATEMENT_TAXONOMY, Taxonomy

DEFAULT_CONFIG_FILE = "finstat_br_config.toml"

DISPLAY_MODES = ("table", "csv", "both")


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for FinStat BR.

    Attributes:
        balance_sheet_taxonomy: Taxonomy used to classify BP accounts.
        income_statement_taxonomy: Taxonomy used to classify DRE accounts.
        analysis_mode: Default mode for the AV/AH analysis
            ('aggregated' or 'detailed').
        display_mode: 'table', 'csv' or 'both'.
        ratio_decimals: Number of decimals used when displaying ratios.
        output_dir: Directory where CSV outputs are written.
    """

    balance_sheet_taxonomy: Taxonomy
    income_statement_taxonomy: Taxonomy
    analysis_mode: str
    display_mode: str
    ratio_decimals: int
    output_dir: Path


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ConfigurationError: if the TOML content cannot be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Failed to parse TOML config file: {path}") from exc

    return data


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return a TOML table, or an empty mapping if absent or malformed."""
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        return {}
    return section


def load_taxonomy(path: Path, name: Optional[str] = None) -> Taxonomy:
    """
    Load an account taxonomy from a TOML file.

    Expected structure:

        [categories]
        ACF = ["Caixa e equivalentes de caixa", "Aplicações financeiras"]
        PL  = ["Patrimônio líquido", "Capital social"]

    Category order is preserved. Account names are normalized on load, so
    they may be written with accents and capitals.

    Args:
        path: Path to the taxonomy TOML file.
        name: Taxonomy name (defaults to the file stem).

    Returns:
        A Taxonomy instance.

    Raises:
        ConfigurationError: if [categories] is missing or malformed.
    """
    data = _load_toml(Path(path))
    categories = data.get("categories")
    if not isinstance(categories, Mapping) or not categories:
        raise ConfigurationError(f"Taxonomy file {path} has no [categories] table.")

    raw: dict[str, list[str]] = {}
    for code, accounts in categories.items():
        if isinstance(accounts, str) or not isinstance(accounts, list):
            raise ConfigurationError(
                f"Category '{code}' in {path} must be a list of account names."
            )
        raw[str(code)] = [str(a) for a in accounts]

    return Taxonomy.from_mapping(name or Path(path).stem, raw)


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the FinStat BR application configuration from a TOML file.

    Expected top-level sections (all optional)
    ------------------------------------------
    [taxonomy]
        balance_sheet_file, income_statement_file: paths to custom taxonomy
        files. When absent, the built-in taxonomies are used.

    [analysis]
        mode: default AV/AH mode ('aggregated' or 'detailed').

    [display]
        mode: 'table', 'csv' or 'both'.
        ratio_decimals: decimals used to display ratios.
        output_dir: directory for CSV outputs.

    All file paths are resolved relative to the directory of the TOML file.
    When ``config_path`` is None and 'finstat_br_config.toml' does not exist
    in the current directory, the defaults are returned.

    Raises:
        FileNotFoundError: if an explicit config file or a referenced taxonomy
            file does not exist.
        ConfigurationError: if a value is invalid.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILE).resolve()
        raw: dict[str, Any] = _load_toml(config_file) if config_file.is_file() else {}
    else:
        config_file = Path(config_path).resolve()
        raw = _load_toml(config_file)
    base_dir = config_file.parent

    # 1) Taxonomies
    taxonomy_section = _section(raw, "taxonomy")

    bp_file = taxonomy_section.get("balance_sheet_file")
    bp_taxonomy = (
        load_taxonomy(base_dir / str(bp_file), name="bp")
        if bp_file
        else BALANCE_SHEET_TAXONOMY
    )

    dre_file = taxonomy_section.get("income_statement_file")
    dre_taxonomy = (
        load_taxonomy(base_dir / str(dre_file), name="dre")
        if dre_file
        else INCOME_STATEMENT_TAXONOMY
    )

    # 2) Analysis options
    analysis_section = _section(raw, "analysis")
    analysis_mode = str(analysis_section.get("mode", "aggregated"))

    # 3) Display options
    display_section = _section(raw, "display")

    display_mode = str(display_section.get("mode", "table"))
    if display_mode not in DISPLAY_MODES:
        raise ConfigurationError(
            f"Invalid display mode {display_mode!r}, expected one of: "
            + ", ".join(DISPLAY_MODES)
            + "."
        )

    try:
        ratio_decimals = int(display_section.get("ratio_decimals", 4))
    except (TypeError, ValueError):
        ratio_decimals = 4

    output_dir = base_dir / str(display_section.get("output_dir", "data/output"))

    return AppConfig(
        balance_sheet_taxonomy=bp_taxonomy,
        income_statement_taxonomy=dre_taxonomy,
        analysis_mode=analysis_mode,
        display_mode=display_mode,
        ratio_decimals=ratio_decimals,
        output_dir=output_dir.resolve(),
    )
