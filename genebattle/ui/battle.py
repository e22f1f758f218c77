"""Terminal battle view built on rich.

Draws both teams with HP bars, the upcoming turn queue and a text line
per resolved turn. It talks to the battle only through ``BattleSession``'s
public calls (setup, targets, process, advance, AI decision), so it is a
plain consumer of the core.
"""
from __future__ import annotations
from typing import List, Optional
import time

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.columns import Columns
from rich.box import ROUNDED

from genebattle.core.errors import Failure
from genebattle.core.genes import NEUTRAL, format_genes, rich_gene_markup
from genebattle.core.logging import logger
from genebattle.battle.ai import AIDecisionEngine
from genebattle.battle.models import BattlePhase, Combatant, SingleAttackResult, display_name_of
from genebattle.battle.session import BattleSession, TurnOutcome

console = Console()

_EFFECT_TEXT = {
    1.5: "It's super effective!",
    1.25: "It's effective.",
    0.75: "It's not very effective...",
    0.5: "It's barely effective...",
}

def hp_bar_markup(current: int, max_hp: int, width: int = 20) -> str:
    if max_hp <= 0 or current <= 0:
        return "[red]DEFEATED[/red]"
    percent = current / max_hp
    filled = max(1, int(percent * width))
    if percent > 0.5:
        color = "green"
    elif percent > 0.25:
        color = "yellow"
    else:
        color = "red"
    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/{color}]"

def _team_panel(title: str, team: List[Combatant], current: Optional[Combatant]) -> Panel:
    lines = []
    for c in team:
        pointer = "▶ " if c is current else "  "
        name = f"[bold]{c.display_name}[/bold]" if c.alive else f"[strike dim]{c.display_name}[/strike dim]"
        lines.append(f"{pointer}{c.symbol} {name} ({format_genes(c.genes)})")
        lines.append(f"    {hp_bar_markup(c.stats.hp, c.stats.max_hp)} {c.stats.hp}/{c.stats.max_hp}"
                     f"  ATK {c.stats.attack} SPD {c.stats.speed}")
    return Panel("\n".join(lines), title=f"[bold]{title}[/bold]", box=ROUNDED, width=48, padding=(0, 1))

def _queue_table(queue: List[Combatant]) -> Table:
    table = Table(title="Turn Order", box=ROUNDED, show_header=False)
    for i, c in enumerate(queue, 1):
        side = "[cyan]ALLY[/cyan]" if c.is_ally else "[red]FOE[/red]"
        table.add_row(str(i), side, f"{c.symbol} {c.display_name}")
    return table

def render_state(session: BattleSession, out: Optional[Console] = None) -> None:
    out = out or console
    state = session.battle_state()
    current = state.current_combatant
    columns = Columns([
        _team_panel("OPPONENTS", state.opponent_team, current),
        _team_panel("YOUR TEAM", state.ally_team, current),
        _queue_table(state.display_queue),
    ], padding=(0, 2))
    out.print(columns)

def describe_turn(outcome: TurnOutcome | Failure) -> str:
    if isinstance(outcome, Failure):
        return f"(turn rejected: {outcome.reason})"
    attacker = outcome.attacker.display_name
    result = outcome.turn_result
    gene = result.attack_gene
    attack = outcome.attack.label if gene == NEUTRAL else rich_gene_markup(gene, outcome.attack.label)
    lines = [f"{attacker} used {attack}!"]
    if isinstance(result, SingleAttackResult):
        target = display_name_of(result.target)
        lines.append(f"  {target} took {result.damage} damage. {_EFFECT_TEXT.get(result.effectiveness, '')}".rstrip())
        if result.target_defeated:
            lines.append(f"  {target} was defeated!")
    else:
        for hit in result.hits:
            target = display_name_of(hit.target)
            lines.append(f"  {target} took {hit.damage} splash damage. {_EFFECT_TEXT.get(hit.effectiveness, '')}".rstrip())
            if hit.defeated:
                lines.append(f"  {target} was defeated!")
    if outcome.battle_ended:
        lines.append("[bold green]You won the battle![/bold green]" if outcome.winner == "ally"
                     else "[bold red]Your team was defeated...[/bold red]")
    return "\n".join(lines)

def run_auto_battle(session: BattleSession, out: Optional[Console] = None, *,
                    ally_ai: Optional[AIDecisionEngine] = None, max_turns: int = 200,
                    delay: float = 0.0, show_state: bool = True) -> str:
    """Play an already set-up battle to the end with AI on both sides.

    Returns PLAYER_WIN, PLAYER_LOSS or STALEMATE.
    """
    out = out or console
    ally_ai = ally_ai or AIDecisionEngine("extreme", session.rng)
    turns = 0
    while session.phase is BattlePhase.BATTLE and turns < max_turns:
        current = session.current_combatant()
        if current is None:
            break
        if show_state:
            render_state(session, out)
        if current.is_ally:
            decision = ally_ai.decide(current, session.get_available_targets())
        else:
            decision = session.request_ai_decision()
        if isinstance(decision, Failure):
            logger.warn("AutoBattleStalled", reason=decision.reason)
            break
        outcome = session.process_turn(decision.attack, decision.target)
        out.print(describe_turn(outcome))
        turns += 1
        if isinstance(outcome, Failure):
            logger.warn("AutoBattleStalled", reason=outcome.reason)
            break
        if outcome.battle_ended:
            break
        session.advance_turn()
        if delay > 0:
            time.sleep(delay)
    if session.winner == "ally":
        return "PLAYER_WIN"
    if session.winner == "opponent":
        return "PLAYER_LOSS"
    return "STALEMATE"

__all__ = ["hp_bar_markup", "render_state", "describe_turn", "run_auto_battle"]
