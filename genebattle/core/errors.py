"""
Error classes for clearer exception sources.

Programming mistakes (unknown creature ids, malformed gene lists) raise.
Expected battle conditions (a double click while a turn resolves, a
target that is already down) never raise; they come back as a
``Failure`` carrying one of the ``FailureReason`` codes.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal

class GeneBattleError(Exception):
    pass

class UnknownCreatureError(GeneBattleError):
    def __init__(self, creature_id: str):
        super().__init__(f"Unknown creature '{creature_id}'")
        self.creature_id = creature_id

class ValidationError(GeneBattleError):
    pass

FailureReason = Literal[
    "INVALID_ROSTER_SIZE",
    "TURN_ALREADY_IN_PROGRESS",
    "INVALID_ATTACKER",
    "NO_AVAILABLE_TARGETS",
    "MISSING_REQUIRED_TARGET",
    "INVALID_TARGET",
    "INVALID_ATTACK",
    "BATTLE_NOT_ACTIVE",
    "TURN_NOT_RESOLVED",
]

@dataclass(frozen=True)
class Failure:
    """Rejected battle operation. State is left exactly as it was."""
    reason: FailureReason
    detail: str = ""
    success: bool = False

    def __bool__(self) -> bool:
        return False

__all__ = ["GeneBattleError","UnknownCreatureError","ValidationError","FailureReason","Failure"]
