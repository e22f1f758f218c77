"""Gene effectiveness chart and exact damage arithmetic.

The wheel runs Red -> Orange -> Yellow -> Green -> Blue -> Purple -> Red.
One step forward is a strong advantage, two steps a moderate one; one or
two steps backward are the matching disadvantages. Anything else
(including a gene against itself) is neutral.
"""
from __future__ import annotations
from typing import Dict, Sequence

from genebattle.core.genes import NEUTRAL
from .constants import SPLASH_DAMAGE_MULTIPLIER

_TYPE_CHART: Dict[str, Dict[str, float]] = {
    "Red":    {"Orange": 1.5, "Yellow": 1.25, "Purple": 0.5, "Blue": 0.75},
    "Orange": {"Yellow": 1.5, "Green": 1.25, "Red": 0.5, "Purple": 0.75},
    "Yellow": {"Green": 1.5, "Blue": 1.25, "Orange": 0.5, "Red": 0.75},
    "Green":  {"Blue": 1.5, "Purple": 1.25, "Yellow": 0.5, "Orange": 0.75},
    "Blue":   {"Purple": 1.5, "Red": 1.25, "Green": 0.5, "Yellow": 0.75},
    "Purple": {"Red": 1.5, "Orange": 1.25, "Blue": 0.5, "Green": 0.75},
}

MULTIPLIERS = (0.5, 0.75, 1.0, 1.25, 1.5)

def effectiveness(attack_gene: str, defending_gene: str) -> float:
    if attack_gene == NEUTRAL:
        return 1.0
    return _TYPE_CHART.get(attack_gene, {}).get(defending_gene, 1.0)

def effectiveness_against(attack_gene: str, defender_genes: Sequence[str]) -> float:
    # Only the first gene defends.
    return effectiveness(attack_gene, defender_genes[0])

def exact_damage(attack: int, multiplier: float) -> int:
    # Stat table guarantees an integral product; rounding absorbs float drift.
    return int(round(attack * multiplier))

def single_damage(attack: int, attack_gene: str, defender_genes: Sequence[str]) -> int:
    return exact_damage(attack, effectiveness_against(attack_gene, defender_genes))

def splash_damage(attack: int, attack_gene: str, defender_genes: Sequence[str]) -> int:
    mult = effectiveness_against(attack_gene, defender_genes) * SPLASH_DAMAGE_MULTIPLIER
    return exact_damage(attack, mult)

__all__ = ["MULTIPLIERS","effectiveness","effectiveness_against","exact_damage","single_damage","splash_damage"]
