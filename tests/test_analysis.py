import math

import pandas as pd
import pytest

from finstat_br.analysis import analyze
from finstat_br.errors import ConfigurationError
from finstat_br.schema import AggregatedMode, DetailedMode
from finstat_br.standardize import standardize_balance_sheet


def _aggregated_bp() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "categorias_bp": ["ACF", "ACO", "ANC", "PCO", "PCF", "PNC", "PL"],
            "2022": [500.0, 1000.0, 2000.0, 600.0, 400.0, 1500.0, 1000.0],
            "2023": [650.0, 1080.0, 2100.0, 640.0, 420.0, 1550.0, 1220.0],
        }
    )


def test_vertical_analysis_sums_to_one_over_assets() -> None:
    result = analyze(_aggregated_bp(), "aggregated")
    av_ah = result.av_ah

    assets = av_ah[av_ah["categorias_bp"].isin(["ACF", "ACO", "ANC"])]
    liabilities = av_ah[~av_ah["categorias_bp"].isin(["ACF", "ACO", "ANC"])]
    for period in ("2022", "2023"):
        assert assets[f"{period}_AV"].sum() == pytest.approx(1.0)
        assert liabilities[f"{period}_AV"].sum() == pytest.approx(1.0)

    # ACF 2022: 500 / (500 + 1000 + 2000)
    assert av_ah.loc[0, "2022_AV"] == pytest.approx(500.0 / 3500.0)


def test_horizontal_analysis_base_period_is_one() -> None:
    av_ah = analyze(_aggregated_bp(), "aggregated").av_ah

    assert list(av_ah["2022_AH"]) == pytest.approx([1.0] * 7)
    assert av_ah.loc[0, "2023_AH"] == pytest.approx(650.0 / 500.0)


def test_output_columns_order() -> None:
    av_ah = analyze(_aggregated_bp(), "agregado").av_ah

    assert list(av_ah.columns) == [
        "categorias_bp",
        "2022",
        "2023",
        "2022_AV",
        "2023_AV",
        "2022_AH",
        "2023_AH",
    ]


def test_projection_grows_values_by_five_percent() -> None:
    projection = analyze(_aggregated_bp(), "aggregated").projection

    assert list(projection.columns) == ["categorias_bp", "2022", "2023"]
    assert projection.loc[0, "categorias_bp"] == "Ano Seguinte_ACF"
    assert projection.loc[6, "categorias_bp"] == "Ano Seguinte_PL"
    assert projection.loc[0, "2023"] == pytest.approx(650.0 * 1.05)
    assert len(projection) == 7


def test_zero_totals_and_zero_base_are_not_errors() -> None:
    df = pd.DataFrame(
        {
            "Categoria": ["ACF", "PL"],
            "2022": [0.0, 0.0],
            "2023": [10.0, 5.0],
        }
    )

    av_ah = analyze(df, "aggregated").av_ah

    # 0 / 0 -> NaN, 10 / 0 -> inf
    assert math.isnan(av_ah.loc[0, "2022_AV"])
    assert math.isnan(av_ah.loc[0, "2022_AH"])
    assert math.isinf(av_ah.loc[0, "2023_AH"])


def test_missing_category_groups_default_to_zero_totals() -> None:
    df = pd.DataFrame({"categoria": ["ACF"], "2022": [100.0]})

    av_ah = analyze(df, "aggregated").av_ah

    assert av_ah.loc[0, "2022_AV"] == pytest.approx(1.0)


def test_category_column_priority() -> None:
    df = pd.DataFrame(
        {
            "Categoria": ["x", "y"],
            "categorias_bp": ["ACF", "PL"],
            "2022": [1.0, 2.0],
        }
    )

    result = analyze(df, "aggregated")

    assert result.projection.columns[0] == "categorias_bp"


def test_aggregated_mode_without_category_column_fails() -> None:
    df = pd.DataFrame({"Conta": ["a"], "2022": [1.0]})
    with pytest.raises(ConfigurationError):
        analyze(df, "aggregated")


def test_detailed_mode_without_conta_column_fails() -> None:
    with pytest.raises(ConfigurationError):
        analyze(_aggregated_bp(), "detailed")


def test_unknown_mode_fails() -> None:
    with pytest.raises(ConfigurationError):
        analyze(_aggregated_bp(), "vertical")


def test_table_without_numeric_columns_fails() -> None:
    df = pd.DataFrame({"Categoria": ["ACF"], "2022": ["1.000,00"]})
    with pytest.raises(ConfigurationError):
        analyze(df, "aggregated")


def test_detailed_mode_uses_total_rows() -> None:
    df = pd.DataFrame(
        {
            "Conta": [
                "Caixa",
                "Ativo Total",
                "Fornecedores",
                "Passivo Total",
            ],
            "2022": [250.0, 1000.0, 100.0, 1000.0],
            "2023": [300.0, 1200.0, 200.0, 1200.0],
        }
    )

    result = analyze(df, "detalhado")

    # Without a category column every row is measured against the
    # liability total.
    assert result.av_ah.loc[0, "2022_AV"] == pytest.approx(0.25)
    assert result.av_ah.loc[3, "2023_AV"] == pytest.approx(1.0)
    assert result.projection.loc[1, "Conta"] == "Ano Seguinte_Ativo Total"


def test_detailed_mode_reads_category_of_standardized_table() -> None:
    raw = pd.DataFrame(
        {
            "Conta": [
                "Caixa e equivalentes de caixa",
                "Estoques",
                "Ativo total",
                "Fornecedores",
                "Patrimônio líquido",
                "Passivo total",
            ],
            "2022": ["300,00", "700,00", "1.000,00", "400,00", "400,00", "800,00"],
        }
    )
    original = standardize_balance_sheet(raw).original

    result = analyze(original, DetailedMode())

    av = result.av_ah.set_index("Conta")["2022_AV"]
    assert av["caixa e equivalentes de caixa"] == pytest.approx(0.3)
    assert av["estoques"] == pytest.approx(0.7)
    assert av["fornecedores"] == pytest.approx(0.5)
    # Unclassified projection label.
    assert result.projection.loc[2, "Conta"] == "Ano Seguinte_ativo total"


def test_detailed_mode_missing_totals_yield_non_finite_values() -> None:
    df = pd.DataFrame({"Conta": ["Caixa"], "2022": [10.0]})

    av_ah = analyze(df, "detailed").av_ah

    assert math.isinf(av_ah.loc[0, "2022_AV"])


def test_resolved_mode_is_accepted_and_input_not_mutated() -> None:
    df = _aggregated_bp()
    before = df.copy()

    analyze(df, AggregatedMode(column="categorias_bp"))

    pd.testing.assert_frame_equal(df, before)


def test_empty_standardized_statement_is_analyzed() -> None:
    agg = standardize_balance_sheet({"Conta": [], "2022": []}).aggregated

    result = analyze(agg, "aggregated")

    assert result.av_ah.empty
    assert list(result.av_ah.columns) == [
        "categorias_bp",
        "2022",
        "2022_AV",
        "2022_AH",
    ]
    assert list(result.projection.columns) == ["categorias_bp", "2022"]
