# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for FinStat BR.

The CLI is intentionally thin: it does not implement accounting or
financial logic itself. It wires together:

- the TOML configuration (taxonomies, analysis and display options),
- CSV ingestion of raw statements,
- statement standardization (BP and/or DRE),
- vertical/horizontal analysis of the Balance Sheet,
- the ratios engine,
- console and/or CSV rendering.


High-level pipeline
-------------------

1) Load the configuration (``finstat_br_config.toml`` by default, or the
   file given with ``--config``). Without a configuration file, built-in
   taxonomies and defaults are used.

2) Read the raw statements given with ``--bp`` and/or ``--dre``.

3) Standardize them (normalize names, decode amounts, classify and
   aggregate by category).

4) Run the vertical/horizontal analysis on the Balance Sheet, either on
   the aggregated table (``--analysis aggregated``, default) or on the
   detailed table (``--analysis detailed``).

5) Compute the ratios (BP, DRE and combined ratios).

6) Render the tables on the console and/or write them as CSV files,
   depending on ``--display-mode`` (or ``[display].mode`` in the config).


Examples
--------

    python -m finstat_br.cli --bp data/bp.csv --dre data/dre.csv
    python -m finstat_br.cli --bp data/bp.csv --display-mode csv --output-dir out
"""

import argparse
import logging
import warnings
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from . import __version__
from .analysis import analyze
from .config import DISPLAY_MODES, load_app_config
from .errors import MissingEbitInputsWarning
from .io import read_statement_csv
from .ratios import compute_ratios
from .standardize import standardize_balance_sheet, standardize_income_statement
from .views import round_ratios


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m finstat_br.cli",
        description=(
            "FinStat BR - standardizes Brazilian financial statements (BP/DRE), "
            "computes vertical/horizontal analysis and financial ratios."
        ),
    )

    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of finstat_br and exit.",
    )

    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the main TOML configuration file. "
            "If omitted, 'finstat_br_config.toml' in the current directory is "
            "used when present."
        ),
    )

    ap.add_argument(
        "--bp",
        dest="bp_path",
        metavar="CSV_PATH",
        help="Raw Balance Sheet (Balanço Patrimonial) CSV file.",
    )
    ap.add_argument(
        "--dre",
        dest="dre_path",
        metavar="CSV_PATH",
        help="Raw Income Statement (DRE) CSV file.",
    )

    ap.add_argument(
        "--analysis",
        choices=["aggregated", "detailed"],
        help=(
            "Vertical/horizontal analysis mode for the Balance Sheet. "
            "Overrides [analysis].mode from the configuration."
        ),
    )

    ap.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=list(DISPLAY_MODES),
        help=(
            "Where to render results: 'table' (console), 'csv' (files) or "
            "'both'. Overrides [display].mode from the configuration."
        ),
    )
    ap.add_argument(
        "--output-dir",
        dest="output_dir",
        help="Directory for CSV outputs. Overrides [display].output_dir.",
    )

    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress and debug messages.",
    )

    return ap


def _print_table(title: str, df: Optional[pd.DataFrame]) -> None:
    if df is None:
        return
    print()
    print(f"=== {title} ===")
    print(df.to_string(index=False))


def main() -> None:
    """Entry point for the FinStat BR CLI.

    Parses command-line arguments, loads the configuration, reads and
    standardizes the given statements, runs the Balance Sheet analysis and
    the ratios engine, and renders the results as console tables and/or CSV
    files.
    """
    parser = _build_parser()
    args = parser.parse_args()

    # --version: short-circuit and exit early.
    if args.version:
        print(f"finstat_br version {__version__}")
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.bp_path and not args.dre_path:
        parser.error("At least one statement is required: use --bp and/or --dre.")

    # 1) Configuration
    config = load_app_config(args.config_path)

    # 2-3) Read and standardize statements.
    bp_std = None
    if args.bp_path:
        bp_path = Path(args.bp_path)
        if not bp_path.is_file():
            parser.error(f"Balance Sheet CSV file not found: {bp_path}")
        bp_std = standardize_balance_sheet(
            read_statement_csv(bp_path), config.balance_sheet_taxonomy
        )

    dre_std = None
    if args.dre_path:
        dre_path = Path(args.dre_path)
        if not dre_path.is_file():
            parser.error(f"Income Statement CSV file not found: {dre_path}")
        dre_std = standardize_income_statement(
            read_statement_csv(dre_path), config.income_statement_taxonomy
        )

    # 4) Vertical / horizontal analysis of the Balance Sheet.
    analysis = None
    if bp_std is not None:
        mode = args.analysis or config.analysis_mode
        detailed = mode.strip().lower() in {"detailed", "detalhado"}
        source = bp_std.original if detailed else bp_std.aggregated
        analysis = analyze(source, mode)

    # 5) Ratios. The EBIT warning is reported to the user, not raised.
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", MissingEbitInputsWarning)
        ratios = compute_ratios(
            bp_std.aggregated if bp_std is not None else None,
            dre_std.aggregated if dre_std is not None else None,
        )
    for w in caught:
        print(f"Warning: {w.message}")

    outputs: dict[str, Optional[pd.DataFrame]] = {
        "bp_aggregated": bp_std.aggregated if bp_std is not None else None,
        "dre_aggregated": dre_std.aggregated if dre_std is not None else None,
        "bp_av_ah": analysis.av_ah if analysis is not None else None,
        "bp_projection": analysis.projection if analysis is not None else None,
        "bp_ratios": (
            round_ratios(ratios.bp_ratios, config.ratio_decimals)
            if ratios.bp_ratios is not None
            else None
        ),
        "dre_ratios": (
            round_ratios(ratios.dre_ratios, config.ratio_decimals)
            if ratios.dre_ratios is not None
            else None
        ),
        "combined_ratios": (
            round_ratios(ratios.combined_ratios, config.ratio_decimals)
            if ratios.combined_ratios is not None
            else None
        ),
    }
    titles = {
        "bp_aggregated": "Balanço Patrimonial (agregado)",
        "dre_aggregated": "DRE (agregada)",
        "bp_av_ah": "Análise Vertical / Horizontal",
        "bp_projection": "Projeção (ano seguinte)",
        "bp_ratios": "Indicadores do Balanço",
        "dre_ratios": "Indicadores da DRE",
        "combined_ratios": "Indicadores Conjuntos (DuPont)",
    }

    # 6) Resolve display mode: config value overridden by CLI if provided.
    display_mode = args.display_mode or config.display_mode

    if display_mode in {"table", "both"}:
        for key, df in outputs.items():
            _print_table(titles[key], df)

    if display_mode in {"csv", "both"}:
        output_dir = Path(args.output_dir) if args.output_dir else config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")

        for key, df in outputs.items():
            if df is None:
                continue
            path = output_dir / f"{key}_{timestamp}.csv"
            df.to_csv(path, index=False)
            print(f"Wrote {path} ({len(df)} rows)")


if __name__ == "__main__":
    main()
