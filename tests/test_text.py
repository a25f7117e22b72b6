import unicodedata

import pytest

from finstat_br.text import normalize_text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Patrimônio Líquido", "patrimonio liquido"),
        ("Ção", "cao"),
        ("OPERAÇÕES DE CRÉDITO", "operacoes de credito"),
        ("  Estoques ", "estoques"),
        ("", ""),
    ],
)
def test_normalize_text_strips_case_and_accents(raw: str, expected: str) -> None:
    assert normalize_text(raw) == expected


def test_normalize_text_is_idempotent() -> None:
    once = normalize_text("Empréstimos e Financiamentos")
    assert normalize_text(once) == once


def test_normalize_text_nfc_and_nfd_inputs_are_equivalent() -> None:
    """Composed and decomposed forms of the same text normalize identically."""
    nfc = unicodedata.normalize("NFC", "Debêntures")
    nfd = unicodedata.normalize("NFD", "Debêntures")
    assert nfc != nfd
    assert normalize_text(nfc) == normalize_text(nfd) == "debentures"


def test_normalize_text_missing_values() -> None:
    assert normalize_text(None) == ""
    assert normalize_text(float("nan")) == ""
