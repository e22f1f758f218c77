"""Gene metadata: the advantage wheel, colors, symbols & abbreviations.

Provides:
  GENES: the six genes in wheel order (Red -> Orange -> ... -> Purple -> Red)
  NEUTRAL: sentinel attack gene that is never effective or resisted
  GENE_COLORS_HEX / GENE_SYMBOLS / GENE_ABBREVIATIONS: display metadata
  helpers that turn genes into rich markup for the terminal view.
"""
from __future__ import annotations
from typing import Dict, Literal, Sequence, Tuple

Gene = Literal["Red", "Orange", "Yellow", "Green", "Blue", "Purple"]
AttackGene = Literal["Red", "Orange", "Yellow", "Green", "Blue", "Purple", "Neutral"]

GENES: Tuple[Gene, ...] = ("Red", "Orange", "Yellow", "Green", "Blue", "Purple")
NEUTRAL: AttackGene = "Neutral"

GENE_COLORS_HEX: Dict[str, str] = {
    "Red": "#ef5350",
    "Orange": "#ff8a65",
    "Yellow": "#ffeb3b",
    "Green": "#66bb6a",
    "Blue": "#42a5f5",
    "Purple": "#ab47bc",
}

GENE_SYMBOLS: Dict[str, str] = {
    "Red": "🥀",
    "Orange": "🔥",
    "Yellow": "🌤️",
    "Green": "🍃",
    "Blue": "🌊",
    "Purple": "🔮",
}

GENE_ABBREVIATIONS: Dict[str, str] = {
    "Red": "RED",
    "Orange": "ORG",
    "Yellow": "YEL",
    "Green": "GRN",
    "Blue": "BLU",
    "Purple": "PUR",
    "Neutral": "NEU",
}

def is_gene(value: str) -> bool:
    return value in GENES

def wheel_distance(attack: str, defend: str) -> int:
    """Steps forward from ``attack`` to ``defend`` on the wheel (0..5)."""
    return (GENES.index(defend) - GENES.index(attack)) % len(GENES)

def gene_abbreviation(gene: str) -> str:
    return GENE_ABBREVIATIONS.get(gene, gene[:3].upper())

def gene_symbol(genes: Sequence[str]) -> str:
    return ''.join(GENE_SYMBOLS.get(g, '') for g in genes)

def rich_gene_markup(gene: str, text: str) -> str:
    """Wrap ``text`` in rich markup using the gene's hex color."""
    hex_val = GENE_COLORS_HEX.get(gene)
    if not hex_val:
        return text
    return f"[{hex_val}]{text}[/{hex_val}]"

def format_genes(genes: Sequence[str]) -> str:
    """Slash-joined, colour-marked abbreviations, e.g. RED/ORG."""
    return '/'.join(rich_gene_markup(g, gene_abbreviation(g)) for g in genes)

__all__ = [
    'Gene','AttackGene','GENES','NEUTRAL','GENE_COLORS_HEX','GENE_SYMBOLS',
    'GENE_ABBREVIATIONS','is_gene','wheel_distance','gene_abbreviation',
    'gene_symbol','rich_gene_markup','format_genes',
]
