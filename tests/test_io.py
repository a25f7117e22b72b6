import pandas as pd
import pytest

from finstat_br.io import read_statement_csv


def test_read_semicolon_statement_keeps_text(tmp_path) -> None:
    csv_path = tmp_path / "bp.csv"
    csv_path.write_text(
        "Conta;2022;2023\n"
        "Caixa e equivalentes de caixa;1.000,00;1.200,00\n"
        "Fornecedores;(500,00);\n",
        encoding="utf-8",
    )

    df = read_statement_csv(csv_path)

    assert list(df.columns) == ["Conta", "2022", "2023"]
    assert df.loc[0, "2022"] == "1.000,00"
    assert df.loc[1, "2022"] == "(500,00)"
    assert pd.isna(df.loc[1, "2023"])


def test_read_comma_statement_with_quoted_amounts(tmp_path) -> None:
    csv_path = tmp_path / "dre.csv"
    csv_path.write_text(
        'Conta,2023\n"Receita Bruta de Vendas","100.000,00"\nICMS,"(15.000,00)"\n',
        encoding="utf-8",
    )

    df = read_statement_csv(csv_path)

    assert list(df["2023"]) == ["100.000,00", "(15.000,00)"]


def test_single_column_file_is_rejected(tmp_path) -> None:
    csv_path = tmp_path / "bad.csv"
    csv_path.write_text("Conta\nCaixa\n", encoding="utf-8")

    with pytest.raises(ValueError):
        read_statement_csv(csv_path, sep=";")
