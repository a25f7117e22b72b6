# FinStat BR - Brazilian financial statements standardization & ratio analysis
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Account taxonomies and classification.

A taxonomy maps a category code (e.g. 'ACF', 'RECEITA_LIQUIDA') to the set
of canonical account names belonging to it. Names are stored already
normalized (lowercase, without accents) so that classification is an exact
lookup of the normalized account name.

Two built-in taxonomies are provided:

- BALANCE_SHEET_TAXONOMY (Balanço Patrimonial):
    ACF  Ativo Circulante Financeiro
    ACO  Ativo Circulante Operacional
    PCF  Passivo Circulante Financeiro
    PCO  Passivo Circulante Operacional
    ANC  Ativo Não Circulante
    PNC  Passivo Não Circulante
    PL   Patrimônio Líquido

- INCOME_STATEMENT_TAXONOMY (Demonstração do Resultado do Exercício):
    RECEITA_BRUTA, DEDUCOES, RECEITA_LIQUIDA, CUSTO_VENDAS, LUCRO_BRUTO,
    DESPESAS_OPERACIONAIS, OUTRAS_RECEITAS, OUTRAS_DESPESAS,
    RESULTADO_FINANCEIRO, RESULTADO_ANTES_IR, IMPOSTO_RENDA,
    RESULTADO_LIQUIDO

Taxonomies are immutable and can be shared freely. Custom taxonomies can
be loaded from TOML files with ``config.load_taxonomy``.

Category sets are expected to be disjoint. This is not checked: when an
account name appears in several categories, the first category (in
definition order) wins.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from .text import normalize_text


@dataclass(frozen=True)
class Taxonomy:
    """Read-only mapping of category codes to canonical account names.

    Attributes:
        name: Short identifier (e.g. 'bp', 'dre'), used in messages.
        categories: Category code -> frozenset of normalized account names,
            in definition order.
    """

    name: str
    categories: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @staticmethod
    def from_mapping(name: str, raw: Mapping[str, Iterable[str]]) -> "Taxonomy":
        """Build a Taxonomy from plain account name lists.

        Account names are normalized with ``normalize_text``; empty names are
        dropped.
        """
        categories = {
            str(code): frozenset(
                n for n in (normalize_text(a) for a in accounts) if n
            )
            for code, accounts in raw.items()
        }
        return Taxonomy(name=name, categories=MappingProxyType(categories))

    @property
    def codes(self) -> tuple[str, ...]:
        """Category codes in definition order."""
        return tuple(self.categories)

    def classify(self, account_name: str) -> Optional[str]:
        """Return the category of an account name, or None if unmapped."""
        return classify_account(account_name, self)


def classify_account(account_name: str, taxonomy: Taxonomy) -> Optional[str]:
    """Return the category code whose canonical names contain ``account_name``.

    The name is normalized before the lookup, so raw and normalized names
    give the same result. Unknown names return None; this is never an error.

    Args:
        account_name: Account name (raw or normalized).
        taxonomy: Taxonomy to look the name up in.

    Returns:
        The first matching category code, or None.
    """
    key = normalize_text(account_name)
    for code, accounts in taxonomy.categories.items():
        if key in accounts:
            return code
    return None


BALANCE_SHEET_TAXONOMY = Taxonomy.from_mapping(
    "bp",
    {
        "ACF": [
            "caixa e equivalentes de caixa",
            "aplicacoes financeiras",
            "titulos e valores mobiliarios",
        ],
        "ACO": [
            "contas a receber de clientes",
            "adiantamento a fornecedores",
            "estoques",
            "tributos a recuperar",
            "outros ativos circulantes",
        ],
        "PCF": [
            "emprestimos e financiamentos",
            "debentures",
            "operacoes de credito",
        ],
        "PCO": [
            "fornecedores",
            "obrigacoes trabalhistas e previdenciarias",
            "tributos a pagar",
            "adiantamento de clientes",
            "outras obrigacoes circulantes",
        ],
        "ANC": ["ativo nao circulante"],
        "PNC": ["passivo nao circulante"],
        "PL": [
            "patrimonio liquido",
            "capital social",
            "reservas de lucros",
            "prejuizos acumulados",
            "ajustes de avaliacao patrimonial",
        ],
    },
)

INCOME_STATEMENT_TAXONOMY = Taxonomy.from_mapping(
    "dre",
    {
        "RECEITA_BRUTA": [
            "receita bruta de vendas",
            "receita operacional bruta",
            "vendas de mercadorias",
            "vendas de produtos",
        ],
        "DEDUCOES": [
            "devolucoes de vendas",
            "abatimentos",
            "impostos sobre vendas",
            "pis",
            "cofins",
            "icms",
        ],
        "RECEITA_LIQUIDA": [
            "receita liquida de vendas",
            "receita operacional liquida",
        ],
        "CUSTO_VENDAS": [
            "custo das mercadorias vendidas",
            "custo dos produtos vendidos",
            "custo dos servicos prestados",
        ],
        "LUCRO_BRUTO": ["lucro bruto"],
        "DESPESAS_OPERACIONAIS": [
            "despesas com vendas",
            "despesas administrativas",
            "despesas gerais e administrativas",
        ],
        "OUTRAS_RECEITAS": ["outras receitas operacionais", "outras receitas"],
        "OUTRAS_DESPESAS": ["outras despesas operacionais", "outras despesas"],
        "RESULTADO_FINANCEIRO": [
            "receitas financeiras",
            "despesas financeiras",
            "resultado financeiro liquido",
        ],
        "RESULTADO_ANTES_IR": [
            "resultado antes do imposto de renda",
            "lucro antes do imposto de renda",
            "lucro antes dos tributos",
        ],
        "IMPOSTO_RENDA": [
            "imposto de renda",
            "contribuicao social sobre o lucro",
            "csll",
        ],
        "RESULTADO_LIQUIDO": [
            "lucro liquido",
            "prejuizo liquido",
            "lucro liquido do exercicio",
        ],
    },
)

# Category groups used by the vertical analysis and the ratio engine.
ASSET_CATEGORIES: frozenset[str] = frozenset({"ACO", "ACF", "ANC"})
LIABILITY_CATEGORIES: frozenset[str] = frozenset({"PCO", "PCF", "PNC", "PL"})
