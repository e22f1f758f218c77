from rich.text import Text

from genebattle.core.genes import (
    format_genes, gene_abbreviation, gene_symbol, rich_gene_markup, wheel_distance,
)
from genebattle.battle.models import SingleAttack, SplashAttack, attack_options_for


def test_gene_abbreviations():
    assert gene_abbreviation("Orange") == "ORG"
    assert gene_abbreviation("Neutral") == "NEU"


def test_format_genes_dual():
    out = format_genes(("Red", "Orange"))
    assert out == "[#ef5350]RED[/#ef5350]/[#ff8a65]ORG[/#ff8a65]"
    assert Text.from_markup(out).plain == "RED/ORG"


def test_symbols_and_markup():
    assert gene_symbol(("Blue", "Blue")) == "🌊🌊"
    assert rich_gene_markup("Red", "x") == "[#ef5350]x[/#ef5350]"
    assert rich_gene_markup("Neutral", "x") == "x"
    assert wheel_distance("Purple", "Red") == 1


def test_attack_options_by_gene_shape():
    assert attack_options_for(("Red",)) == (SingleAttack("Red"), SingleAttack("Neutral"))
    assert attack_options_for(("Red", "Red")) == (SingleAttack("Red"), SplashAttack("Red"))
    assert attack_options_for(("Red", "Blue")) == (SingleAttack("Red"), SingleAttack("Blue"))
    assert SplashAttack("Red").label == "Red Splash"
