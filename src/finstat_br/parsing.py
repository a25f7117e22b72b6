# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Decoding of Brazilian formatted amounts.

Brazilian statements print amounts with '.' as thousands separator, ','
as decimal separator and parentheses for negative values:

    "1.000,00"    ->  1000.0
    "(1.234,56)"  -> -1234.56
    "0,00"        ->  0.0

``decode_amount`` converts one value and raises ``ParseError`` when the
text is not a number. ``decode_column`` applies it to a whole column and
turns every failing cell into NaN, so a single bad cell never aborts the
processing of a statement.
"""

import logging
import math
from collections.abc import Iterable
from typing import Any

import pandas as pd

from .errors import ParseError

logger = logging.getLogger(__name__)


def decode_amount(text: Any) -> float:
    """Decode a Brazilian formatted amount into a float.

    The replacements are applied in this exact order:
        1. '(' -> '-'
        2. ')' removed
        3. '.' removed (thousands separator)
        4. ',' -> '.' (decimal separator)
        5. parse as float

    Values that are already numeric (int/float) are returned as float.

    Args:
        text: Amount as printed in the statement.

    Returns:
        The signed float value.

    Raises:
        ParseError: if the remaining text is not a valid number.
    """
    if isinstance(text, bool):
        raise ParseError(f"Boolean is not an amount: {text!r}")
    if isinstance(text, (int, float)):
        return float(text)

    s = str(text).strip()
    s = s.replace("(", "-").replace(")", "")
    s = s.replace(".", "").replace(",", ".")
    s = s.replace(" ", "").replace("\xa0", "")
    if not s:
        raise ParseError(f"Empty amount: {text!r}")

    try:
        return float(s)
    except ValueError as exc:
        raise ParseError(f"Invalid amount: {text!r}") from exc


def decode_column(values: Iterable[Any]) -> pd.Series:
    """Decode every cell of a column, mapping failures to NaN.

    Missing cells (None / NaN) and cells that cannot be decoded become NaN;
    the other cells are decoded with :func:`decode_amount`.

    Args:
        values: Column values (a pandas Series keeps its index).

    Returns:
        A float Series with the decoded values.
    """
    index = values.index if isinstance(values, pd.Series) else None
    decoded: list[float] = []
    for raw in values:
        if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
            decoded.append(math.nan)
            continue
        try:
            decoded.append(decode_amount(raw))
        except ParseError:
            logger.debug("Could not decode amount %r, using NaN", raw)
            decoded.append(math.nan)
    return pd.Series(decoded, index=index, dtype="float64")
