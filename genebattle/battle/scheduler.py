"""Speed-based turn scheduling.

Every combatant owns an action bar. Each simulated tick adds the
combatant's speed to its bar; anyone at or above ``ACTION_THRESHOLD``
takes a turn and pays exactly one threshold back, keeping any overflow
as a head start on the next turn.

The scheduler keeps the *committed* bars, i.e. the bar values at the
moment the front of the queue is about to act. Combatants whose bar is
still at or above the threshold are the members of the current ready
group that have not acted yet. The upcoming-turn buffer is always a
pure simulation forward from the committed bars, so the order only
depends on speeds, the set of living combatants and the bars.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

from genebattle.core.logging import logger
from .constants import ACTION_THRESHOLD, DISPLAY_QUEUE_SIZE, LOOKAHEAD_TURNS
from .models import Combatant


def ready_order_key(combatant: Combatant, bar: float) -> Tuple[float, int, int, int]:
    """Sort key for combatants that became ready in the same tick.

    Higher bar first, then lower base speed, then allies before
    opponents, then team insertion order.
    """
    return (-bar, combatant.stats.speed, 0 if combatant.is_ally else 1, combatant.slot)


class TurnScheduler:
    def __init__(self, threshold: int = ACTION_THRESHOLD, lookahead: int = LOOKAHEAD_TURNS,
                 display_size: int = DISPLAY_QUEUE_SIZE):
        self.threshold = threshold
        self.lookahead = lookahead
        self.display_size = display_size
        self._combatants: List[Combatant] = []
        self._bars: Dict[str, float] = {}
        self._upcoming: List[Combatant] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def upcoming(self) -> List[Combatant]:
        return list(self._upcoming)

    def display_queue(self) -> List[Combatant]:
        return self._upcoming[:self.display_size]

    def bar(self, combatant: Combatant) -> Optional[float]:
        return self._bars.get(combatant.key)

    def peek_current(self) -> Optional[Combatant]:
        if not self._upcoming:
            return None
        return self._upcoming[0]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self, combatants: Sequence[Combatant]) -> List[Combatant]:
        """Reset every bar to zero and compute the first window.

        Returns the display slice.
        """
        self._combatants = list(combatants)
        self._bars = {c.key: 0 for c in self._combatants if c.alive}
        self._fast_forward()
        self._upcoming = self._simulate(self.lookahead)
        logger.debug("SchedulerInitialized", combatants=len(self._bars),
                     first=self._upcoming[0].key if self._upcoming else None)
        return self.display_queue()

    def advance(self) -> Tuple[Optional[Combatant], List[Combatant]]:
        """Consume the current combatant's turn and move to the next one.

        Must be called exactly once per resolved turn.
        """
        current = self.peek_current()
        if current is not None:
            if current.key in self._bars:
                self._bars[current.key] -= self.threshold
            self._upcoming.pop(0)
            self._fast_forward()
            if len(self._upcoming) < self.lookahead:
                self._upcoming = self._simulate(self.lookahead)
        return self.peek_current(), self.display_queue()

    def on_combatant_defeated(self, *defeated: Combatant) -> None:
        """Drop defeated combatants and rebuild the buffer.

        Survivors keep their accumulated bars.
        """
        for c in defeated:
            self._bars.pop(c.key, None)
        self._upcoming = self._simulate(self.lookahead)
        logger.debug("SchedulerRebuilt", removed=",".join(c.key for c in defeated),
                     remaining=len(self._bars))

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def _living(self) -> List[Combatant]:
        return [c for c in self._combatants if c.alive and c.key in self._bars]

    def _ready(self, living: Sequence[Combatant], bars: Dict[str, float]) -> List[Combatant]:
        ready = [c for c in living if bars[c.key] >= self.threshold]
        ready.sort(key=lambda c: ready_order_key(c, bars[c.key]))
        return ready

    def _tick(self, living: Sequence[Combatant], bars: Dict[str, float]) -> None:
        for c in living:
            bars[c.key] += c.stats.speed

    def _fast_forward(self) -> None:
        # Move the committed bars to the next tick in which someone is ready.
        living = self._living()
        if not living or all(c.stats.speed <= 0 for c in living):
            return
        while not self._ready(living, self._bars):
            self._tick(living, self._bars)

    def _simulate(self, count: int) -> List[Combatant]:
        living = self._living()
        if not living or all(c.stats.speed <= 0 for c in living):
            return []
        bars = dict(self._bars)
        turns: List[Combatant] = []
        # Unconsumed members of the current ready group act before any tick.
        ready = self._ready(living, bars)
        while True:
            for c in ready:
                turns.append(c)
                bars[c.key] -= self.threshold
            if len(turns) >= count:
                return turns
            self._tick(living, bars)
            ready = self._ready(living, bars)


__all__ = ["TurnScheduler", "ready_order_key"]
