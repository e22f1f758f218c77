"""Battle data model: attack options, combatants and turn result records."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import re
from typing import List, Literal, Sequence, Tuple, Union

from genebattle.core.errors import ValidationError
from genebattle.core.genes import AttackGene, Gene, NEUTRAL, gene_symbol, is_gene

Team = Literal["ally", "opponent"]
Rarity = Literal["common", "uncommon", "rare"]

TEAMS: Tuple[Team, Team] = ("ally", "opponent")

_SUFFIX_RE = re.compile(r"-[PE]\d+$")

def display_name_of(name: str) -> str:
    """Battle name without its team-unique suffix (Red-E1 -> Red)."""
    return _SUFFIX_RE.sub("", name)

def opposing(team: Team) -> Team:
    return "opponent" if team == "ally" else "ally"

def validate_genes(genes: Sequence[str]) -> Tuple[Gene, ...]:
    if len(genes) not in (1, 2):
        raise ValidationError(f"Creatures carry one or two genes, got {len(genes)}")
    for g in genes:
        if not is_gene(g):
            raise ValidationError(f"Unknown gene '{g}'")
    return tuple(genes)  # type: ignore[return-value]

def rarity_for(genes: Sequence[str]) -> Rarity:
    if len(genes) == 1:
        return "common"
    if genes[0] == genes[1]:
        return "uncommon"
    return "rare"

# ---------------------------------------------------------------------------
# Attack options
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SingleAttack:
    gene: AttackGene

    @property
    def label(self) -> str:
        if self.gene == NEUTRAL:
            return "Neutral Attack"
        return f"{self.gene} Attack"

@dataclass(frozen=True)
class SplashAttack:
    gene: Gene

    @property
    def label(self) -> str:
        return f"{self.gene} Splash"

AttackOption = Union[SingleAttack, SplashAttack]

def attack_options_for(genes: Sequence[str]) -> Tuple[AttackOption, AttackOption]:
    """The two attacks a creature can use, derived from its genes."""
    genes = validate_genes(genes)
    if len(genes) == 1:
        return SingleAttack(genes[0]), SingleAttack(NEUTRAL)
    if genes[0] == genes[1]:
        return SingleAttack(genes[0]), SplashAttack(genes[0])
    return SingleAttack(genes[0]), SingleAttack(genes[1])

def describe_attack(option: AttackOption) -> str:
    if isinstance(option, SplashAttack):
        return f"{option.label} (hits all enemies)"
    if option.gene == NEUTRAL:
        return "Neutral Attack (no type bonus)"
    return option.label

# ---------------------------------------------------------------------------
# Combatants
# ---------------------------------------------------------------------------
@dataclass
class Stats:
    hp: int
    max_hp: int
    attack: int
    speed: int

@dataclass(eq=False)
class Combatant:
    """A creature taking part in one battle.

    ``name`` is the template id plus a team-unique suffix when the same
    template appears more than once; ``slot`` is the insertion index in
    its team list and is the final turn-order tie-breaker.
    """
    name: str
    template_id: str
    genes: Tuple[Gene, ...]
    team: Team
    slot: int
    stats: Stats
    symbol: str = field(default="")

    def __post_init__(self):
        self.genes = validate_genes(self.genes)
        if not self.symbol:
            self.symbol = gene_symbol(self.genes)

    @property
    def key(self) -> str:
        return f"{self.name}-{'P' if self.team == 'ally' else 'E'}"

    @property
    def display_name(self) -> str:
        return display_name_of(self.name)

    @property
    def alive(self) -> bool:
        return self.stats.hp > 0

    @property
    def is_ally(self) -> bool:
        return self.team == "ally"

    @property
    def health_fraction(self) -> float:
        if self.stats.max_hp <= 0:
            return 0.0
        return self.stats.hp / self.stats.max_hp

    @property
    def rarity(self) -> Rarity:
        return rarity_for(self.genes)

    def attack_options(self) -> Tuple[AttackOption, AttackOption]:
        return attack_options_for(self.genes)

    def take_damage(self, amount: int) -> bool:
        """Apply damage, clamping at zero. True if this hit defeated it."""
        was_alive = self.alive
        self.stats.hp = max(0, self.stats.hp - amount)
        return was_alive and self.stats.hp == 0

    def __repr__(self) -> str:
        return f"Combatant({self.key} hp={self.stats.hp}/{self.stats.max_hp})"

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SingleAttackResult:
    attacker: str
    attack_gene: AttackGene
    target: str
    damage: int
    effectiveness: float
    target_defeated: bool

    @property
    def defeated(self) -> List[str]:
        return [self.target] if self.target_defeated else []

@dataclass(frozen=True)
class SplashHit:
    target: str
    damage: int
    effectiveness: float
    defeated: bool

@dataclass(frozen=True)
class SplashAttackResult:
    attacker: str
    attack_gene: Gene
    hits: Tuple[SplashHit, ...]

    @property
    def defeated(self) -> List[str]:
        return [h.target for h in self.hits if h.defeated]

    @property
    def total_damage(self) -> int:
        return sum(h.damage for h in self.hits)

AttackResult = Union[SingleAttackResult, SplashAttackResult]

class BattlePhase(Enum):
    SETUP = "setup"
    BATTLE = "battle"
    ENDED = "ended"

__all__ = [
    "Team","Rarity","TEAMS","display_name_of","opposing","validate_genes","rarity_for",
    "SingleAttack","SplashAttack","AttackOption","attack_options_for","describe_attack",
    "Stats","Combatant","SingleAttackResult","SplashHit","SplashAttackResult",
    "AttackResult","BattlePhase",
]
