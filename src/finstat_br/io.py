# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for FinStat BR.

This module reads raw statements exported from spreadsheets or accounting
systems. Every cell is kept as text: decoding Brazilian formatted amounts
is the job of the standardization step, which must see the original
strings ("(1.234,56)") rather than whatever pandas would guess.

Expected input format
---------------------

    Conta;2022;2023
    Caixa e equivalentes de caixa;1.000,00;1.200,00
    Fornecedores;(500,00);(600,00)

- first column: account name,
- other columns: one column per period.

The separator is detected automatically (',' or ';' are the usual ones).
Empty cells are read as missing values.
"""

import os
from typing import Optional, Union

import pandas as pd


def read_statement_csv(
    path: Union[str, "os.PathLike[str]"], sep: Optional[str] = None
) -> pd.DataFrame:
    """
    Read a raw statement CSV, keeping every cell as text.

    Parameters
    ----------
    path:
        Path to the CSV file.
    sep:
        Field separator. None (default) lets pandas sniff it.

    Returns
    -------
    pandas.DataFrame
        The raw statement, column names stripped, all values as str (or
        NaN for empty cells).

    Raises
    ------
    ValueError
        If the file has fewer than two columns (account name + one period).
    """
    df = pd.read_csv(
        path,
        sep=sep,
        engine="python",
        dtype=str,
        encoding="utf-8-sig",
        skipinitialspace=True,
    )
    df.columns = [str(c).strip() for c in df.columns]

    if len(df.columns) < 2:
        raise ValueError(
            "Invalid statement structure. Expected an account name column "
            "followed by at least one period column."
        )

    return df
