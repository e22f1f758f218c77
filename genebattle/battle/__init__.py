"""
Battle core for gene creature battles.
Modules:
- models.py (Combatant, attack options, result records)
- effectiveness.py (gene wheel multipliers, exact damage)
- scheduler.py (action-bar turn order)
- resolver.py (single & splash attack resolution)
- ai.py (difficulty tiers, heuristic move scoring)
- session.py (setup -> battle -> ended orchestration)
"""
from .ai import AIDecisionEngine, DIFFICULTIES
from .effectiveness import effectiveness
from .models import BattlePhase, Combatant, SingleAttack, SplashAttack
from .resolver import CombatResolver
from .scheduler import TurnScheduler
__all__ = [
    "AIDecisionEngine","DIFFICULTIES","effectiveness","BattlePhase","Combatant",
    "SingleAttack","SplashAttack","CombatResolver","TurnScheduler",
]
