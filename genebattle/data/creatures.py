"""Creature templates keyed by gene combination.

Stat budget: (HP / 3) + Attack + Speed = 200 for every creature, with no
stat below 40. Two-gene ids are order sensitive ("Red-Blue" and
"Blue-Red" are different creatures). Single-gene creatures start
unlocked; the breeding side unlocks the rest through ``CreatureCatalog.unlock``.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from genebattle.core.errors import UnknownCreatureError
from genebattle.core.genes import GENES, Gene, gene_symbol
from genebattle.core.logging import logger
from genebattle.battle.models import (
    AttackOption, Rarity, attack_options_for, describe_attack, rarity_for, validate_genes,
)

# id -> (hp, attack, speed)
CHARACTER_STATS: Dict[str, Tuple[int, int, int]] = {
    # Single genes
    "Red": (120, 120, 40),
    "Orange": (240, 80, 40),
    "Yellow": (360, 40, 40),
    "Green": (240, 40, 80),
    "Blue": (120, 40, 120),
    "Purple": (120, 80, 80),
    # Same-gene doubles
    "Red-Red": (144, 104, 48),
    "Orange-Orange": (216, 72, 56),
    "Yellow-Yellow": (312, 48, 48),
    "Green-Green": (216, 56, 72),
    "Blue-Blue": (144, 48, 104),
    "Purple-Purple": (168, 72, 72),
    # Different-gene doubles
    "Red-Orange": (216, 88, 40),
    "Red-Yellow": (300, 60, 40),
    "Red-Green": (216, 56, 72),
    "Red-Blue": (120, 60, 100),
    "Red-Purple": (120, 88, 72),
    "Orange-Red": (156, 108, 40),
    "Orange-Yellow": (324, 52, 40),
    "Orange-Green": (240, 48, 72),
    "Orange-Blue": (156, 52, 96),
    "Orange-Purple": (144, 80, 72),
    "Yellow-Red": (180, 100, 40),
    "Yellow-Orange": (264, 72, 40),
    "Yellow-Green": (264, 40, 72),
    "Yellow-Blue": (180, 40, 100),
    "Yellow-Purple": (168, 72, 72),
    "Green-Red": (156, 96, 52),
    "Green-Orange": (240, 72, 48),
    "Green-Yellow": (324, 40, 52),
    "Green-Blue": (156, 40, 108),
    "Green-Purple": (144, 72, 80),
    "Blue-Red": (120, 100, 60),
    "Blue-Orange": (216, 72, 56),
    "Blue-Yellow": (300, 40, 60),
    "Blue-Green": (216, 40, 88),
    "Blue-Purple": (120, 72, 88),
    "Purple-Red": (120, 108, 52),
    "Purple-Orange": (216, 80, 48),
    "Purple-Yellow": (288, 52, 52),
    "Purple-Green": (216, 48, 80),
    "Purple-Blue": (120, 52, 108),
}

def genes_for_id(cid: str) -> Tuple[Gene, ...]:
    if cid not in CHARACTER_STATS:
        raise UnknownCreatureError(cid)
    return validate_genes(cid.split("-"))

def base_stats(cid: str) -> Tuple[int, int, int]:
    try:
        return CHARACTER_STATS[cid]
    except KeyError:
        raise UnknownCreatureError(cid) from None

@dataclass(frozen=True)
class CreatureStats:
    hp: int
    attack: int
    speed: int

@dataclass
class CreatureTemplate:
    id: str
    genes: Tuple[Gene, ...]
    unlocked: bool = False
    stats: CreatureStats = field(init=False)

    def __post_init__(self):
        self.genes = validate_genes(self.genes)
        hp, attack, speed = base_stats(self.id)
        self.stats = CreatureStats(hp=hp, attack=attack, speed=speed)

    @property
    def symbol(self) -> str:
        return gene_symbol(self.genes)

    @property
    def rarity(self) -> Rarity:
        return rarity_for(self.genes)

    def attack_options(self) -> Tuple[AttackOption, AttackOption]:
        return attack_options_for(self.genes)

    def description(self) -> str:
        return "Attacks: " + ", ".join(describe_attack(a) for a in self.attack_options())

class CreatureCatalog:
    """Every creature template plus its unlock flag."""

    def __init__(self, templates: List[CreatureTemplate]):
        self._templates: Dict[str, CreatureTemplate] = {t.id: t for t in templates}

    @classmethod
    def default(cls) -> "CreatureCatalog":
        templates = [CreatureTemplate(g, (g,), unlocked=True) for g in GENES]
        for primary in GENES:
            for secondary in GENES:
                templates.append(CreatureTemplate(f"{primary}-{secondary}", (primary, secondary)))
        return cls(templates)

    def __iter__(self) -> Iterator[CreatureTemplate]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, cid: object) -> bool:
        return cid in self._templates

    def get(self, cid: str) -> CreatureTemplate:
        try:
            return self._templates[cid]
        except KeyError:
            raise UnknownCreatureError(cid) from None

    def unlocked(self) -> List[CreatureTemplate]:
        return [t for t in self._templates.values() if t.unlocked]

    def unlock(self, cid: str) -> bool:
        """Mark a creature unlocked. Returns True if it was newly unlocked."""
        t = self.get(cid)
        if t.unlocked:
            return False
        t.unlocked = True
        logger.debug("CreatureUnlocked", creature=cid)
        return True

    def progress(self) -> Tuple[int, int]:
        return len(self.unlocked()), len(self._templates)

__all__ = [
    "CHARACTER_STATS","genes_for_id","base_stats",
    "CreatureStats","CreatureTemplate","CreatureCatalog",
]
