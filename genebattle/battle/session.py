"""Battle orchestration for 3v3 gene creature battles.

``BattleSession`` owns the phase machine (setup -> battle -> ended), the
single turn-in-progress lock, the rolling battle log and every scheduled
presentation task. It is the only caller of the resolver and the
scheduler's advancing operations, always in the order resolve, then
advance.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union
import random
import threading

from genebattle.core.errors import Failure, FailureReason
from genebattle.core.logging import logger
from genebattle.data.creatures import CreatureCatalog, CreatureTemplate
from .ai import AIDecision, AIDecisionEngine
from .constants import AI_THINK_TIME, BATTLE_LOG_SIZE, TEAM_SIZE, TURN_TRANSITION_TIME
from .factory import build_team, generate_opponent_roster
from .models import (
    AttackOption, AttackResult, BattlePhase, Combatant, SingleAttack, SplashAttack, Team,
    display_name_of,
)
from .resolver import CombatResolver
from .scheduler import TurnScheduler
from .tasks import ScheduledTask, TaskRegistry

RosterEntry = Union[CreatureTemplate, str]


@dataclass(frozen=True)
class SetupResult:
    ally_team: List[Combatant]
    opponent_team: List[Combatant]
    first_combatant: Optional[Combatant]
    display_queue: List[Combatant]
    success: bool = True

@dataclass(frozen=True)
class TurnOutcome:
    attacker: Combatant
    attack: AttackOption
    turn_result: AttackResult
    battle_ended: bool
    winner: Optional[Team] = None
    success: bool = True

@dataclass(frozen=True)
class AdvanceResult:
    next_combatant: Optional[Combatant]
    display_queue: List[Combatant]
    success: bool = True

@dataclass(frozen=True)
class LogEntry:
    message: str
    kind: str = ""

@dataclass(frozen=True)
class BattleSnapshot:
    phase: BattlePhase
    ally_team: List[Combatant]
    opponent_team: List[Combatant]
    current_combatant: Optional[Combatant]
    display_queue: List[Combatant]
    turn_in_progress: bool
    awaiting_advance: bool
    winner: Optional[Team]
    turn_number: int


class BattleSession:
    def __init__(self, catalog: Optional[CreatureCatalog] = None, *, difficulty: str = "easy",
                 rng: Optional[random.Random] = None, tasks: Optional[TaskRegistry] = None,
                 think_time: float = AI_THINK_TIME, transition_time: float = TURN_TRANSITION_TIME):
        self.catalog = catalog or CreatureCatalog.default()
        self.rng = rng or random.Random()
        self.ai = AIDecisionEngine(difficulty, self.rng)
        self.tasks = tasks or TaskRegistry()
        self.think_time = think_time
        self.transition_time = transition_time
        self.scheduler = TurnScheduler()
        self.resolver = CombatResolver(self.scheduler)
        self.phase = BattlePhase.SETUP
        self.winner: Optional[Team] = None
        self.ally_team: List[Combatant] = []
        self.opponent_team: List[Combatant] = []
        self.history: List[Combatant] = []
        self._log: List[LogEntry] = []
        self._turn_lock = threading.Lock()
        self._awaiting_advance = False
        self._listeners: List[Callable[[TurnOutcome], None]] = []

    # ------------------------------------------------------------------
    # Setup / teardown
    # ------------------------------------------------------------------
    def _template(self, entry: RosterEntry) -> CreatureTemplate:
        if isinstance(entry, CreatureTemplate):
            return entry
        return self.catalog.get(entry)

    def setup_battle(self, ally_roster: Sequence[RosterEntry],
                     opponent_roster: Optional[Sequence[RosterEntry]] = None) -> SetupResult | Failure:
        if len(ally_roster) != TEAM_SIZE:
            return self._reject("INVALID_ROSTER_SIZE", f"Roster needs {TEAM_SIZE} creatures, got {len(ally_roster)}")
        if opponent_roster is not None and len(opponent_roster) != TEAM_SIZE:
            return self._reject("INVALID_ROSTER_SIZE", f"Opponent roster needs {TEAM_SIZE} creatures")
        if not self._turn_lock.acquire(blocking=False):
            return self._reject("TURN_ALREADY_IN_PROGRESS", "Cannot set up while a turn resolves")
        try:
            return self._setup_locked(ally_roster, opponent_roster)
        finally:
            self._turn_lock.release()

    def _setup_locked(self, ally_roster: Sequence[RosterEntry],
                      opponent_roster: Optional[Sequence[RosterEntry]]) -> SetupResult:
        allies = [self._template(e) for e in ally_roster]
        if opponent_roster is None:
            opponents = generate_opponent_roster(self.catalog, [t.id for t in allies], self.rng)
        else:
            opponents = [self._template(e) for e in opponent_roster]

        self._clear()
        self.ally_team = build_team(allies, "ally")
        self.opponent_team = build_team(opponents, "opponent", reserved=[c.name for c in self.ally_team])
        display = self.scheduler.initialize(self.ally_team + self.opponent_team)
        self.phase = BattlePhase.BATTLE
        first = self.scheduler.peek_current()
        logger.info("BattleSetup", allies=",".join(c.name for c in self.ally_team),
                    opponents=",".join(c.name for c in self.opponent_team),
                    first=first.key if first else None, difficulty=self.ai.difficulty.key)
        self.add_log("Battle started!", "system")
        return SetupResult(list(self.ally_team), list(self.opponent_team), first, display)

    def reset(self) -> Optional[Failure]:
        """Disown every scheduled task and return to the setup phase.

        Refused while a turn resolves, so a timer callback can never tear
        the teams down under a running resolution.
        """
        if not self._turn_lock.acquire(blocking=False):
            return self._reject("TURN_ALREADY_IN_PROGRESS", "Cannot reset while a turn resolves")
        try:
            self._clear()
        finally:
            self._turn_lock.release()
        logger.debug("BattleReset")
        return None

    def _clear(self) -> None:
        self.tasks.cancel_all()
        self.scheduler = TurnScheduler()
        self.resolver = CombatResolver(self.scheduler)
        self.phase = BattlePhase.SETUP
        self.winner = None
        self.ally_team = []
        self.opponent_team = []
        self.history = []
        self._log = []
        self._awaiting_advance = False

    def set_difficulty(self, name: str) -> None:
        self.ai.set_difficulty(name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def turn_in_progress(self) -> bool:
        return self._turn_lock.locked()

    @property
    def awaiting_advance(self) -> bool:
        return self._awaiting_advance

    def current_combatant(self) -> Optional[Combatant]:
        if self.phase is not BattlePhase.BATTLE:
            return None
        return self.scheduler.peek_current()

    def team_of(self, team: Team) -> List[Combatant]:
        return self.ally_team if team == "ally" else self.opponent_team

    def opponents_of(self, combatant: Combatant) -> List[Combatant]:
        return self.opponent_team if combatant.is_ally else self.ally_team

    def get_available_targets(self) -> List[Combatant]:
        current = self.current_combatant()
        if current is None:
            return []
        return [c for c in self.opponents_of(current) if c.alive]

    def display_queue(self) -> List[Combatant]:
        return self.scheduler.display_queue()

    def battle_state(self) -> BattleSnapshot:
        return BattleSnapshot(
            phase=self.phase,
            ally_team=list(self.ally_team),
            opponent_team=list(self.opponent_team),
            current_combatant=self.current_combatant(),
            display_queue=self.display_queue(),
            turn_in_progress=self.turn_in_progress,
            awaiting_advance=self._awaiting_advance,
            winner=self.winner,
            turn_number=len(self.history) + 1,
        )

    # ------------------------------------------------------------------
    # Battle log
    # ------------------------------------------------------------------
    def add_log(self, message: str, kind: str = "") -> List[LogEntry]:
        self._log.append(LogEntry(message, kind))
        if len(self._log) > BATTLE_LOG_SIZE:
            self._log.pop(0)
        return self.battle_log()

    def battle_log(self) -> List[LogEntry]:
        return list(self._log)

    def on_turn_resolved(self, fn: Callable[[TurnOutcome], None]) -> None:
        """Register a listener called while the turn lock is still held."""
        self._listeners.append(fn)

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------
    def process_turn(self, attack: AttackOption, target: Optional[Combatant] = None) -> TurnOutcome | Failure:
        if self.phase is not BattlePhase.BATTLE:
            return self._reject("BATTLE_NOT_ACTIVE", f"Battle phase is {self.phase.value}")
        if not self._turn_lock.acquire(blocking=False):
            return self._reject("TURN_ALREADY_IN_PROGRESS", "Another turn is still resolving")
        try:
            return self._process_locked(attack, target)
        finally:
            self._turn_lock.release()

    def _process_locked(self, attack: AttackOption, target: Optional[Combatant]) -> TurnOutcome | Failure:
        attacker = self.scheduler.peek_current()
        if attacker is None or not attacker.alive or self._awaiting_advance:
            return self._reject("INVALID_ATTACKER", "No combatant is waiting to act")
        if attack not in attacker.attack_options():
            return self._reject("INVALID_ATTACK", f"{attacker.name} cannot use {attack!r}")
        targets = [c for c in self.opponents_of(attacker) if c.alive]
        if not targets:
            return self._reject("NO_AVAILABLE_TARGETS", f"{attacker.name} has nobody to attack")
        if isinstance(attack, SingleAttack):
            if target is None:
                return self._reject("MISSING_REQUIRED_TARGET", "Single attacks need a target")
            if not any(t is target for t in targets):
                return self._reject("INVALID_TARGET", f"{target.name} is not a living opponent")
            result = self.resolver.resolve_single_attack(attacker, attack.gene, target)
        elif isinstance(attack, SplashAttack):
            result = self.resolver.resolve_splash_attack(attacker, attack.gene, self.opponents_of(attacker))
        else:
            return self._reject("INVALID_ATTACK", f"Unsupported attack {attack!r}")

        self._awaiting_advance = True
        self.history.append(attacker)
        self._log_result(attacker, attack, result)
        ended, winner = self._check_battle_end()
        outcome = TurnOutcome(attacker=attacker, attack=attack, turn_result=result,
                              battle_ended=ended, winner=winner)
        logger.debug("TurnResolved", attacker=attacker.key, attack=attack.label, ended=ended)
        for fn in list(self._listeners):
            fn(outcome)
        return outcome

    def advance_turn(self) -> AdvanceResult | Failure:
        if self.phase is not BattlePhase.BATTLE:
            return self._reject("BATTLE_NOT_ACTIVE", f"Battle phase is {self.phase.value}")
        if not self._turn_lock.acquire(blocking=False):
            return self._reject("TURN_ALREADY_IN_PROGRESS", "Cannot advance while a turn resolves")
        try:
            if not self._awaiting_advance:
                return self._reject("TURN_NOT_RESOLVED", "The current combatant has not acted yet")
            nxt, queue = self.scheduler.advance()
            self._awaiting_advance = False
        finally:
            self._turn_lock.release()
        return AdvanceResult(nxt, queue)

    def request_ai_decision(self, difficulty: Optional[str] = None) -> AIDecision | Failure:
        if self.phase is not BattlePhase.BATTLE:
            return self._reject("BATTLE_NOT_ACTIVE", f"Battle phase is {self.phase.value}")
        attacker = self.scheduler.peek_current()
        if attacker is None or not attacker.alive or self._awaiting_advance:
            return self._reject("INVALID_ATTACKER", "No combatant is waiting to act")
        engine = self.ai if difficulty is None else AIDecisionEngine(difficulty, self.rng)
        decision = engine.decide(attacker, self.get_available_targets())
        if isinstance(decision, AIDecision):
            self.add_log(f"{attacker.display_name} is thinking...", "ai")
        return decision

    def run_ai_turn(self) -> TurnOutcome | Failure:
        """Decide, resolve and (unless the battle ended) advance in one step."""
        decision = self.request_ai_decision()
        if isinstance(decision, Failure):
            return decision
        outcome = self.process_turn(decision.attack, decision.target)
        if isinstance(outcome, TurnOutcome) and not outcome.battle_ended:
            self.advance_turn()
        return outcome

    # ------------------------------------------------------------------
    # Scheduled presentation tasks
    # ------------------------------------------------------------------
    def schedule_ai_turn(self, on_complete: Optional[Callable[[TurnOutcome | Failure], None]] = None,
                         delay: Optional[float] = None) -> ScheduledTask:
        def _run():
            outcome = self.run_ai_turn()
            if on_complete is not None:
                on_complete(outcome)
        return self.tasks.schedule("ai_turn", self.think_time if delay is None else delay, _run)

    def schedule_advance(self, callback: Optional[Callable[[AdvanceResult | Failure], None]] = None,
                         delay: Optional[float] = None) -> ScheduledTask:
        def _run():
            result = self.advance_turn()
            if callback is not None:
                callback(result)
        return self.tasks.schedule("advance", self.transition_time if delay is None else delay, _run)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _reject(self, reason: FailureReason, detail: str) -> Failure:
        logger.debug("OperationRejected", reason=reason, detail=detail)
        return Failure(reason, detail)

    def _check_battle_end(self) -> tuple[bool, Optional[Team]]:
        ally_alive = any(c.alive for c in self.ally_team)
        opponent_alive = any(c.alive for c in self.opponent_team)
        if ally_alive and opponent_alive:
            return False, None
        self.phase = BattlePhase.ENDED
        self.winner = "ally" if ally_alive else "opponent"
        self.tasks.cancel_all()
        logger.info("BattleEnded", winner=self.winner, turns=len(self.history))
        self.add_log("Victory!" if self.winner == "ally" else "Defeat...", "system")
        return True, self.winner

    def _log_result(self, attacker: Combatant, attack: AttackOption, result: AttackResult) -> None:
        self.add_log(f"{attacker.display_name} used {attack.label}!",
                     "ally-attack" if attacker.is_ally else "enemy-attack")
        for name in result.defeated:
            self.add_log(f"{display_name_of(name)} was defeated!", "defeat")


__all__ = [
    "BattleSession","SetupResult","TurnOutcome","AdvanceResult","LogEntry","BattleSnapshot",
]
