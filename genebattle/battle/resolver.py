"""Attack resolution: damage, HP updates and defeat notification."""
from __future__ import annotations
from typing import List, Sequence

from genebattle.core.errors import ValidationError
from genebattle.core.logging import logger
from .constants import SPLASH_TARGET_CAP
from .effectiveness import effectiveness_against, single_damage, splash_damage
from .models import (
    AttackOption, AttackResult, Combatant, SingleAttack, SingleAttackResult,
    SplashAttack, SplashAttackResult, SplashHit,
)
from .scheduler import TurnScheduler


class CombatResolver:
    """Sole writer of combatant HP during a battle."""

    def __init__(self, scheduler: TurnScheduler):
        self.scheduler = scheduler

    def resolve(self, attacker: Combatant, option: AttackOption, target: Combatant | None,
                opponents: Sequence[Combatant]) -> AttackResult:
        if isinstance(option, SplashAttack):
            return self.resolve_splash_attack(attacker, option.gene, opponents)
        if isinstance(option, SingleAttack):
            if target is None:
                raise ValidationError("Single attacks need a target")
            return self.resolve_single_attack(attacker, option.gene, target)
        raise ValidationError(f"Unsupported attack option {option!r}")

    def resolve_single_attack(self, attacker: Combatant, attack_gene: str, target: Combatant) -> SingleAttackResult:
        if not attacker.alive or not target.alive:
            raise ValidationError("Attacker and target must both be alive")
        eff = effectiveness_against(attack_gene, target.genes)
        damage = single_damage(attacker.stats.attack, attack_gene, target.genes)
        defeated = target.take_damage(damage)
        result = SingleAttackResult(
            attacker=attacker.name,
            attack_gene=attack_gene,  # type: ignore[arg-type]
            target=target.name,
            damage=damage,
            effectiveness=eff,
            target_defeated=defeated,
        )
        logger.debug("SingleAttack", attacker=attacker.key, gene=attack_gene, target=target.key,
                     damage=damage, eff=eff, hp=target.stats.hp)
        if defeated:
            logger.info("CombatantDefeated", combatant=target.key)
            self.scheduler.on_combatant_defeated(target)
        return result

    def splash_targets(self, opponents: Sequence[Combatant]) -> List[Combatant]:
        return [c for c in opponents if c.alive][:SPLASH_TARGET_CAP]

    def resolve_splash_attack(self, attacker: Combatant, attack_gene: str,
                              opponents: Sequence[Combatant]) -> SplashAttackResult:
        if not attacker.alive:
            raise ValidationError("Attacker must be alive")
        hits: List[SplashHit] = []
        fallen: List[Combatant] = []
        for target in self.splash_targets(opponents):
            eff = effectiveness_against(attack_gene, target.genes)
            damage = splash_damage(attacker.stats.attack, attack_gene, target.genes)
            defeated = target.take_damage(damage)
            if defeated:
                fallen.append(target)
            hits.append(SplashHit(target=target.name, damage=damage,
                                  effectiveness=eff, defeated=defeated))
        result = SplashAttackResult(attacker=attacker.name,
                                    attack_gene=attack_gene,  # type: ignore[arg-type]
                                    hits=tuple(hits))
        logger.debug("SplashAttack", attacker=attacker.key, gene=attack_gene,
                     targets=len(hits), total=result.total_damage)
        for target in fallen:
            logger.info("CombatantDefeated", combatant=target.key)
        self.scheduler.on_combatant_defeated(*fallen)
        return result


__all__ = ["CombatResolver"]
