"""Factory helpers for turning creature templates into battle combatants.

Templates are never mutated: every combatant gets its own fresh stats so
battle damage cannot leak back into the persistent roster.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Set
import random

from genebattle.core.errors import ValidationError
from genebattle.core.logging import logger
from genebattle.data.creatures import CreatureCatalog, CreatureTemplate
from .constants import TEAM_SIZE
from .models import Combatant, Stats, Team

def combatant_from_template(template: CreatureTemplate, team: Team, slot: int,
                            name: Optional[str] = None) -> Combatant:
    s = template.stats
    return Combatant(
        name=name or template.id,
        template_id=template.id,
        genes=tuple(template.genes),
        team=team,
        slot=slot,
        stats=Stats(hp=s.hp, max_hp=s.hp, attack=s.attack, speed=s.speed),
    )

def build_team(templates: Sequence[CreatureTemplate], team: Team,
               reserved: Sequence[str] = ()) -> List[Combatant]:
    """Build a team list, suffixing names that would collide.

    ``reserved`` holds names already used by the other team; the template
    ids stay visible through ``Combatant.display_name``.
    """
    tag = "P" if team == "ally" else "E"
    taken: Set[str] = set(reserved)
    members: List[Combatant] = []
    for slot, template in enumerate(templates):
        name = template.id
        if name in taken:
            name = f"{template.id}-{tag}{slot + 1}"
        taken.add(name)
        members.append(combatant_from_template(template, team, slot, name))
    return members

def generate_opponent_roster(catalog: CreatureCatalog, ally_ids: Sequence[str],
                             rng: Optional[random.Random] = None,
                             size: int = TEAM_SIZE) -> List[CreatureTemplate]:
    """Pick opponents from unlocked creatures.

    Prefers creatures the ally roster does not use, without repeats; when
    there are too few of those, draws with replacement from everything
    unlocked.
    """
    rng = rng or random.Random()
    unlocked = catalog.unlocked()
    if not unlocked:
        raise ValidationError("No unlocked creatures to build an opponent team from")
    fresh = [t for t in unlocked if t.id not in set(ally_ids)]
    if len(fresh) >= size:
        picks = []
        pool = list(fresh)
        for _ in range(size):
            choice = rng.choice(pool)
            pool.remove(choice)
            picks.append(choice)
    else:
        picks = [rng.choice(unlocked) for _ in range(size)]
    logger.debug("OpponentRoster", picks=",".join(t.id for t in picks))
    return picks

__all__ = ["combatant_from_template", "build_team", "generate_opponent_roster"]
