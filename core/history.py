"""
core.history
Decision snapshots and undo.

Snapshots are rounded for display; undo restores the rounded values. Fields
that are not snapshotted (badges, risk level, long-term counter, scenario
flags) keep their current values on undo.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Optional

from .state import DebtBalances, GameState, StateSnapshot


def round_half_up(x: float, ndigits: int = 0) -> float:
    """Round .5 away from the floor (Python's round() is banker's rounding)."""
    scale = 10 ** ndigits
    return math.floor(x * scale + 0.5) / scale


def snapshot(state: GameState, decision_id: str) -> StateSnapshot:
    r = round_half_up
    return StateSnapshot(
        decision_id=str(decision_id),
        age=state.age,
        year=state.year,
        cash=r(state.cash),
        monthly_income=r(state.monthly_income),
        monthly_expenses=r(state.monthly_expenses),
        debt=DebtBalances(
            credit_card=r(state.debt.credit_card),
            student_loan=r(state.debt.student_loan),
            auto_loan=r(state.debt.auto_loan),
            mortgage=r(state.debt.mortgage),
        ),
        credit_score=r(state.credit_score),
        investments=r(state.investments),
        net_worth=r(state.net_worth),
        stress=r(state.stress),
        inflation_rate=state.inflation_rate,
        real_purchasing_power=r(state.real_purchasing_power, 2),
    )


def undo(state: GameState) -> Optional[GameState]:
    """Roll back the last decision. Returns None when there is nothing to undo."""
    if not state.history:
        return None

    prev = state.history[-1]
    return replace(
        state,
        current_decision=max(0, state.current_decision - 1),
        age=prev.age,
        year=prev.year,
        cash=prev.cash,
        monthly_income=prev.monthly_income,
        monthly_expenses=prev.monthly_expenses,
        debt=prev.debt,
        credit_score=prev.credit_score,
        investments=prev.investments,
        net_worth=prev.net_worth,
        stress=prev.stress,
        inflation_rate=prev.inflation_rate,
        real_purchasing_power=prev.real_purchasing_power,
        history=list(state.history[:-1]),
        choices_made=list(state.choices_made[:-1]),
        completed=False,
    )
