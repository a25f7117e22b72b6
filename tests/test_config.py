from pathlib import Path

import pytest

from finstat_br.config import load_app_config, load_taxonomy
from finstat_br.errors import ConfigurationError
from finstat_br.taxonomy import BALANCE_SHEET_TAXONOMY, INCOME_STATEMENT_TAXONOMY

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_load_taxonomy_normalizes_names(tmp_path) -> None:
    path = tmp_path / "bp.toml"
    path.write_text(
        '[categories]\nACF = ["Caixa", "Aplicações Financeiras"]\nPL = ["Capital"]\n',
        encoding="utf-8",
    )

    taxonomy = load_taxonomy(path)

    assert taxonomy.name == "bp"
    assert taxonomy.codes == ("ACF", "PL")
    assert "aplicacoes financeiras" in taxonomy.categories["ACF"]
    assert taxonomy.classify("APLICAÇÕES FINANCEIRAS") == "ACF"


def test_load_taxonomy_without_categories_fails(tmp_path) -> None:
    path = tmp_path / "empty.toml"
    path.write_text("[other]\nx = 1\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_taxonomy(path)


def test_load_taxonomy_rejects_non_list_category(tmp_path) -> None:
    path = tmp_path / "bad.toml"
    path.write_text('[categories]\nACF = "Caixa"\n', encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_taxonomy(path)


def test_invalid_toml_raises_configuration_error(tmp_path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("[categories\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_taxonomy(path)


def test_missing_explicit_config_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "nope.toml"))


def test_defaults_without_config_file(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    config = load_app_config()

    assert config.balance_sheet_taxonomy is BALANCE_SHEET_TAXONOMY
    assert config.income_statement_taxonomy is INCOME_STATEMENT_TAXONOMY
    assert config.analysis_mode == "aggregated"
    assert config.display_mode == "table"
    assert config.ratio_decimals == 4
    assert config.output_dir == (tmp_path / "data/output").resolve()


def test_config_resolves_paths_relative_to_file(tmp_path) -> None:
    (tmp_path / "tax").mkdir()
    (tmp_path / "tax" / "bp.toml").write_text(
        '[categories]\nACF = ["Caixa"]\n', encoding="utf-8"
    )
    cfg = tmp_path / "app.toml"
    cfg.write_text(
        "[taxonomy]\n"
        'balance_sheet_file = "tax/bp.toml"\n'
        "[analysis]\n"
        'mode = "detailed"\n'
        "[display]\n"
        'mode = "both"\n'
        "ratio_decimals = 2\n"
        'output_dir = "out"\n',
        encoding="utf-8",
    )

    config = load_app_config(str(cfg))

    assert config.balance_sheet_taxonomy.codes == ("ACF",)
    assert config.balance_sheet_taxonomy.name == "bp"
    assert config.income_statement_taxonomy is INCOME_STATEMENT_TAXONOMY
    assert config.analysis_mode == "detailed"
    assert config.display_mode == "both"
    assert config.ratio_decimals == 2
    assert config.output_dir == (tmp_path / "out").resolve()


def test_invalid_display_mode(tmp_path) -> None:
    cfg = tmp_path / "app.toml"
    cfg.write_text('[display]\nmode = "pdf"\n', encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_app_config(str(cfg))


def test_shipped_taxonomies_match_builtin() -> None:
    """The example TOML taxonomies mirror the built-in ones."""
    config = load_app_config(str(REPO_ROOT / "finstat_br_config.toml"))

    assert dict(config.balance_sheet_taxonomy.categories) == dict(
        BALANCE_SHEET_TAXONOMY.categories
    )
    assert dict(config.income_statement_taxonomy.categories) == dict(
        INCOME_STATEMENT_TAXONOMY.categories
    )
