import math

import pandas as pd
import pytest

from finstat_br.ratios import RatiosResult
from finstat_br.views import ratios_to_long, round_ratios


def _table(indicators, **periods) -> pd.DataFrame:
    data = {"Indicador": list(indicators)}
    data.update({k: list(v) for k, v in periods.items()})
    return pd.DataFrame(data)


def test_round_ratios_rounds_period_columns_only() -> None:
    df = _table(["A", "B"], p2022=[1.23456, float("nan")])

    out = round_ratios(df, 2)

    assert list(out["Indicador"]) == ["A", "B"]
    assert out.loc[0, "p2022"] == pytest.approx(1.23)
    assert math.isnan(out.loc[1, "p2022"])
    # Input untouched.
    assert df.loc[0, "p2022"] == 1.23456


def test_ratios_to_long_orders_and_skips_missing_groups() -> None:
    result = RatiosResult(
        bp_ratios=_table(["L1", "L2"], a=[1.0, 2.0], b=[3.0, 4.0]),
        dre_ratios=None,
        combined_ratios=_table(["ROA"], a=[0.5]),
    )

    long = ratios_to_long(result)

    assert list(long.columns) == ["group", "Indicador", "period", "value"]
    assert list(long["group"]) == ["bp", "bp", "bp", "bp", "combined"]
    assert list(long["Indicador"]) == ["L1", "L1", "L2", "L2", "ROA"]
    assert list(long["period"]) == ["a", "b", "a", "b", "a"]
    assert list(long["value"]) == [1.0, 3.0, 2.0, 4.0, 0.5]


def test_ratios_to_long_empty() -> None:
    long = ratios_to_long(RatiosResult(None, None, None))
    assert long.empty
    assert list(long.columns) == ["group", "Indicador", "period", "value"]
