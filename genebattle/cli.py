from __future__ import annotations
from typing import List, Optional, Sequence
import argparse
import random

from rich.console import Console

from genebattle.core.errors import Failure, GeneBattleError
from genebattle.core.logging import logger
from genebattle.data.creatures import CreatureCatalog
from genebattle.battle.ai import DIFFICULTIES
from genebattle.battle.constants import TEAM_SIZE
from genebattle.battle.session import BattleSession
from genebattle.system.settings import LOG_LEVELS, Settings
from genebattle.ui.battle import run_auto_battle

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gene creature 3v3 auto battle")
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTIES), help="Opponent AI difficulty")
    parser.add_argument("--seed", type=int, help="Fixed RNG seed for a reproducible battle")
    parser.add_argument("--roster", nargs=TEAM_SIZE, metavar="ID",
                        help="Ally creature ids, e.g. Red Blue Red-Yellow")
    parser.add_argument("--max-turns", type=int, default=200, help="Stop after this many turns")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Logger threshold")
    parser.add_argument("--delay", type=float, default=0.0, help="Seconds to pause between turns")
    parser.add_argument("--quiet", action="store_true", help="Only print turn text, not the board")
    return parser

def pick_default_roster(catalog: CreatureCatalog, rng: random.Random) -> List[str]:
    unlocked = [t.id for t in catalog.unlocked()]
    if len(unlocked) >= TEAM_SIZE:
        return rng.sample(unlocked, TEAM_SIZE)
    return [rng.choice(unlocked) for _ in range(TEAM_SIZE)]

def run(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None,
        settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or Settings.load()
    if args.log_level:
        settings.data.log_level = args.log_level
    settings.apply_log_level()
    console = console or Console()

    seed = args.seed if args.seed is not None else settings.data.seed
    rng = random.Random(seed)
    difficulty = args.difficulty or settings.data.difficulty
    catalog = CreatureCatalog.default()
    session = BattleSession(catalog, difficulty=difficulty, rng=rng,
                            think_time=settings.data.ai_think_time,
                            transition_time=settings.data.turn_transition_time)
    try:
        roster = args.roster or pick_default_roster(catalog, rng)
        setup = session.setup_battle(roster)
    except GeneBattleError as e:
        logger.error("BattleSetupFailed", error=str(e))
        console.print(f"[red]{e}[/red]")
        return 2
    if isinstance(setup, Failure):
        console.print(f"[red]Setup rejected: {setup.reason} {setup.detail}[/red]")
        return 2

    outcome = run_auto_battle(session, console, max_turns=args.max_turns,
                              delay=args.delay, show_state=not args.quiet)
    console.print(f"[bold]Result:[/bold] {outcome}")
    logger.info("AutoBattleFinished", outcome=outcome, turns=len(session.history), seed=seed)
    return 0

if __name__ == "__main__":
    raise SystemExit(run())
