"""Opponent decision logic.

Each difficulty tier carries the probability of playing the heuristically
best move; otherwise the AI picks an attack and target uniformly at random.
The random source is injected so tests can fix outcomes.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
import random

from genebattle.core.errors import Failure, ValidationError
from genebattle.core.logging import logger
from .effectiveness import effectiveness_against, single_damage, splash_damage
from .models import AttackOption, Combatant, SingleAttack, SplashAttack

LETHAL_BONUS = 500
SOFTENED_BONUS = 100
SOFTENED_ATTACK_RATIO = 1.5
EFFECTIVE_THRESHOLD = 1.25
RESISTED_THRESHOLD = 0.75
EFFECTIVE_WEIGHT = 50
RESISTED_PENALTY = 25
WOUNDED_THREAT_BONUS = 75
SPLASH_KILL_BONUS = 200
RARITY_THREAT = {"rare": 40, "uncommon": 20, "common": 10}


@dataclass(frozen=True)
class Difficulty:
    key: str
    name: str
    smart_move_chance: float
    description: str
    behavior: str

DIFFICULTIES: Dict[str, Difficulty] = {
    "easy": Difficulty("easy", "Easy", 0.0, "Random moves",
                       "Makes completely random moves with no strategy. Good for beginners."),
    "normal": Difficulty("normal", "Normal", 0.5, "Semi-smart",
                         "Sometimes makes smart moves, sometimes random. Unpredictable but not too challenging."),
    "hard": Difficulty("hard", "Hard", 0.8, "Strategic",
                       "Usually makes strategic decisions. Considers type effectiveness and threat levels."),
    "extreme": Difficulty("extreme", "Extreme", 1.0, "Perfect play",
                          "Always calculates the optimal move. Uses advanced threat assessment and damage optimization."),
}

def get_difficulty(name: str) -> Difficulty:
    try:
        return DIFFICULTIES[name.lower()]
    except KeyError:
        raise ValidationError(f"Unknown difficulty '{name}'") from None


@dataclass(frozen=True)
class SingleEvaluation:
    attack: SingleAttack
    target: Combatant
    score: float
    damage: int
    effectiveness: float
    threat: float
    will_kill: bool

@dataclass(frozen=True)
class SplashEvaluation:
    attack: SplashAttack
    score: float
    total_damage: float
    kill_count: int
    effectiveness_bonus: float

@dataclass(frozen=True)
class AIDecision:
    attack: AttackOption
    target: Combatant
    was_heuristic: bool
    difficulty: str
    success: bool = True

@dataclass(frozen=True)
class MovePrediction:
    predictable: bool
    reason: str
    likely_attack: Optional[AttackOption] = None
    likely_target: Optional[Combatant] = None
    confidence: float = 0.0

@dataclass(frozen=True)
class TeamAnalysis:
    threat: float
    analysis: str
    alive_count: int = 0
    total_attack: int = 0
    total_speed: int = 0
    avg_health: int = 0


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
def threat_score(target: Combatant, all_targets: Sequence[Combatant]) -> float:
    score = target.stats.attack * 0.3 + target.stats.speed * 0.2
    avg_attack = sum(t.stats.attack for t in all_targets) / len(all_targets)
    if target.stats.attack > avg_attack:
        score += 50
    health = target.health_fraction
    if health > 0.75:
        score += 30
    elif health < 0.25:
        score -= 20
    return score + RARITY_THREAT[target.rarity]

def evaluate_single(attacker: Combatant, attack: SingleAttack, target: Combatant,
                    all_targets: Sequence[Combatant]) -> SingleEvaluation:
    damage = single_damage(attacker.stats.attack, attack.gene, target.genes)
    eff = effectiveness_against(attack.gene, target.genes)
    score: float = damage
    will_kill = damage >= target.stats.hp
    if will_kill:
        score += LETHAL_BONUS
    if target.stats.hp <= attacker.stats.attack * SOFTENED_ATTACK_RATIO:
        score += SOFTENED_BONUS
    if eff >= EFFECTIVE_THRESHOLD:
        score += EFFECTIVE_WEIGHT * eff
    elif eff <= RESISTED_THRESHOLD:
        score -= RESISTED_PENALTY
    threat = threat_score(target, all_targets)
    score += threat
    if target.health_fraction < 0.5 and target.stats.attack > attacker.stats.attack * 0.8:
        score += WOUNDED_THREAT_BONUS
    return SingleEvaluation(attack, target, score, damage, eff, threat, will_kill)

def evaluate_splash(attacker: Combatant, attack: SplashAttack,
                    targets: Sequence[Combatant]) -> SplashEvaluation:
    total = 0.0
    kills = 0
    bonus = 0.0
    for target in targets:
        eff = effectiveness_against(attack.gene, target.genes)
        damage = splash_damage(attacker.stats.attack, attack.gene, target.genes)
        total += damage
        if damage >= target.stats.hp:
            kills += 1
        if eff >= EFFECTIVE_THRESHOLD:
            bonus += EFFECTIVE_WEIGHT * eff
    score = total + kills * SPLASH_KILL_BONUS + bonus
    return SplashEvaluation(attack, score, total, kills, bonus)


class AIDecisionEngine:
    def __init__(self, difficulty: str | Difficulty = "easy", rng: Optional[random.Random] = None):
        self.difficulty = difficulty if isinstance(difficulty, Difficulty) else get_difficulty(difficulty)
        self.rng = rng or random.Random()

    def set_difficulty(self, name: str) -> None:
        self.difficulty = get_difficulty(name)

    def decide(self, attacker: Combatant, available_targets: Sequence[Combatant]) -> AIDecision | Failure:
        targets = [t for t in available_targets if t.alive]
        if not targets:
            return Failure("NO_AVAILABLE_TARGETS", f"{attacker.key} has nobody to attack")
        smart = self.rng.random() < self.difficulty.smart_move_chance
        if smart:
            attack, target = self.best_move(attacker, targets)
        else:
            attack = self.rng.choice(attacker.attack_options())
            target = self.rng.choice(targets)
        logger.debug("AIDecision", attacker=attacker.key, attack=attack.label,
                     target=target.key, smart=smart, difficulty=self.difficulty.key)
        return AIDecision(attack=attack, target=target, was_heuristic=smart,
                          difficulty=self.difficulty.key)

    def candidates(self, attacker: Combatant, targets: Sequence[Combatant]) -> List[SingleEvaluation | SplashEvaluation]:
        out: List[SingleEvaluation | SplashEvaluation] = []
        for option in attacker.attack_options():
            if isinstance(option, SplashAttack):
                out.append(evaluate_splash(attacker, option, targets))
            else:
                for target in targets:
                    out.append(evaluate_single(attacker, option, target, targets))
        return out

    def best_move(self, attacker: Combatant, targets: Sequence[Combatant]) -> tuple[AttackOption, Combatant]:
        best = None
        for cand in self.candidates(attacker, targets):
            # strict '>' keeps the earliest candidate on ties
            if best is None or cand.score > best.score:
                best = cand
        if best is None:
            return attacker.attack_options()[0], targets[0]
        if isinstance(best, SplashEvaluation):
            return best.attack, targets[0]
        return best.attack, best.target

    # ------------------------------------------------------------------
    # Introspection helpers for the presentation layer
    # ------------------------------------------------------------------
    def personality(self) -> Dict[str, object]:
        d = self.difficulty
        return {
            "difficulty": d.key,
            "name": d.name,
            "description": d.description,
            "smart_move_chance": d.smart_move_chance,
            "behavior": d.behavior,
        }

    def predict_move(self, attacker: Combatant, targets: Sequence[Combatant]) -> MovePrediction:
        if self.difficulty.smart_move_chance == 0:
            return MovePrediction(predictable=False, reason="AI uses random moves")
        living = [t for t in targets if t.alive]
        if not living:
            return MovePrediction(predictable=False, reason="No targets available")
        attack, target = self.best_move(attacker, living)
        chance = self.difficulty.smart_move_chance
        return MovePrediction(
            predictable=chance > 0.5,
            reason=f"{round(chance * 100)}% chance of optimal move",
            likely_attack=attack,
            likely_target=target,
            confidence=chance,
        )

    @staticmethod
    def analyze_team(team: Sequence[Combatant]) -> TeamAnalysis:
        alive = [c for c in team if c.alive]
        if not alive:
            return TeamAnalysis(threat=0, analysis="Team defeated")
        total_attack = sum(c.stats.attack for c in alive)
        total_speed = sum(c.stats.speed for c in alive)
        avg_health = sum(c.health_fraction * 100 for c in alive) / len(alive)
        threat = total_attack * 0.4 + total_speed * 0.2 + avg_health * 0.4
        if threat > 300:
            analysis = "High threat team - strong offense and healthy"
        elif threat > 200:
            analysis = "Moderate threat - balanced capabilities"
        elif threat > 100:
            analysis = "Low threat - weakened or defensive"
        else:
            analysis = "Minimal threat - nearly defeated"
        return TeamAnalysis(threat, analysis, len(alive), total_attack, total_speed, round(avg_health))


__all__ = [
    "Difficulty","DIFFICULTIES","get_difficulty","SingleEvaluation","SplashEvaluation",
    "AIDecision","MovePrediction","TeamAnalysis","threat_score","evaluate_single",
    "evaluate_splash","AIDecisionEngine",
]
