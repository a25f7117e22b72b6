# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Text helpers used to match account names regardless of case and accents.
"""

import unicodedata
from typing import Any

import pandas as pd


def normalize_text(text: Any) -> str:
    """Return a lowercase, accent-free version of an account name.

    Steps:
        1. Unicode canonical composition (NFC).
        2. Lowercase.
        3. Canonical decomposition (NFD) and removal of nonspacing marks
           (accents, cedillas), then recomposition.
        4. Strip surrounding whitespace.

    The operation is idempotent, and NFC/NFD variants of the same text give
    the same result:

        "Patrimônio Líquido" -> "patrimonio liquido"
        "Ção"                -> "cao"

    Missing values (None / NaN) are mapped to an empty string.

    Args:
        text: Account name (any object, converted with ``str``).

    Returns:
        The normalized string.
    """
    if text is None or (not isinstance(text, str) and pd.isna(text)):
        return ""
    s = unicodedata.normalize("NFC", str(text)).lower()
    decomposed = unicodedata.normalize("NFD", s)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped).strip()
