"""engine.pipeline

Core decision flow (headless).

Responsibilities:
- Look up the chosen option (before touching state)
- Snapshot -> immediate effects -> six months pass -> chapter 5 inflation shock
- Advance the decision index, record history, evaluate badges

This layer is UI-agnostic.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from content.catalog import find_choice
from content.schemas import DecisionSpec
from core.badges import EMERGENCY_FUND_MONTHS, evaluate_badges, newly_unlocked
from core.effects import INFLATION_SPIKE_RATE, advance_time, apply_effects, effects_to_dict
from core.history import snapshot, undo
from core.rng import create_seed, mulberry32
from core.state import ChoiceRecord, GameState, stats_to_dict

from .config import EngineConfig

logger = logging.getLogger(__name__)


def _inflation_shock_due(state: GameState, next_decision: int, config: EngineConfig) -> bool:
    """Chapter 5 opens with an inflation spike for anyone without an emergency fund."""
    if next_decision != int(config.inflation_shock_decision) or state.inflation_spike_active:
        return False
    return state.cash < state.monthly_expenses * EMERGENCY_FUND_MONTHS


def apply_choice(
    *,
    state: GameState,
    decision: DecisionSpec,
    choice_id: str,
    config: EngineConfig,
    total_decisions: int,
) -> Tuple[GameState, Dict[str, Any]]:
    """Apply a choice and let six months pass.

    Returns (new_state, decision_log). Raises ValueError for an unknown choice;
    the input state is never modified.
    """
    choice = find_choice(decision, choice_id)

    index = int(state.current_decision)
    if state.choices_made and state.choices_made[-1].decision_id == decision.id:
        # allow (educator replays), but log it
        logger.warning("decision %s answered twice in a row", decision.id)

    before_stats = stats_to_dict(state)

    # 1) snapshot of what the player saw
    snap = snapshot(state, decision.id)

    # 2) immediate effects
    s = apply_effects(state, choice.effects)

    # 3) six months pass, market seeded by (session, decision index)
    seed = create_seed(state.session_id, index)
    s = advance_time(s, mulberry32(seed))

    # 4) scenario rules at chapter boundaries
    next_decision = index + 1
    shock = _inflation_shock_due(s, next_decision, config)
    if shock:
        s = replace(s, inflation_spike_active=True, inflation_rate=INFLATION_SPIKE_RATE)
        logger.info("inflation shock hit session %s at decision %d", state.session_id, next_decision)

    # 5) bookkeeping + badges
    s = replace(
        s,
        current_decision=next_decision,
        history=[*state.history, snap],
        choices_made=[*state.choices_made, ChoiceRecord(decision_id=decision.id, choice_id=choice.id)],
        completed=next_decision >= int(total_decisions),
    )
    badges = evaluate_badges(s)
    unlocked = newly_unlocked(state.badges, badges)
    new_state = replace(s, badges=badges)

    log: Dict[str, Any] = {
        "decision_index": index,
        "decision_id": decision.id,
        "chapter": int(decision.chapter),
        "choice": choice.id,
        "choice_label": choice.label,
        "seed": int(seed),
        "before": before_stats,
        "after": stats_to_dict(new_state),
        "effects": effects_to_dict(choice.effects),
        "inflation_shock": bool(shock),
        "badges_unlocked": [b.id for b in unlocked],
    }
    return new_state, log


def undo_last_choice(state: GameState) -> Optional[GameState]:
    """Undo wrapper; None when there is no history."""
    prev = undo(state)
    if prev is None:
        logger.debug("undo requested with empty history (session %s)", state.session_id)
    return prev
