"""
core.selfcheck
Minimal "it runs" proof for the simulation core.

Run:
  python -m core.selfcheck
"""

from __future__ import annotations

from dataclasses import replace

from .badges import evaluate_badges
from .effects import Effects, advance_time, apply_effects
from .finance import net_worth
from .history import snapshot, undo
from .rng import create_seed, mulberry32
from .state import ChoiceRecord, default_start_state


def run_30_decisions_smoke() -> None:
    session_id = "selfcheck"
    state = default_start_state(session_id)

    # alternate a saver and a spender bundle
    saver = Effects(cash=500.0, monthly_expenses=-50.0, stress=-2.0, long_term_choice=True)
    spender = Effects(cash=-800.0, monthly_expenses=150.0, investments=300.0, stress=4.0)

    for i in range(30):
        before = state
        snap = snapshot(state, f"d{i}")
        state = apply_effects(state, saver if i % 2 == 0 else spender)
        state = advance_time(state, mulberry32(create_seed(session_id, i)))
        state = replace(
            state,
            current_decision=i + 1,
            history=[*state.history, snap],
            choices_made=[*state.choices_made, ChoiceRecord(f"d{i}", "a")],
        )
        state = replace(state, badges=evaluate_badges(state))

        # invariants
        assert state.cash >= 0.0
        assert 300.0 <= state.credit_score <= 850.0
        assert 0.0 <= state.stress <= 100.0
        assert state.net_worth == net_worth(state.cash, state.investments, state.debt)
        assert state.age == before.age + 0.5

    prev = undo(state)
    assert prev is not None and prev.current_decision == 29

    print("OK: 30-decision core smoke test passed.")
    print("Final net worth:", round(state.net_worth, 2))
    print("Badges:", [b.id for b in state.badges if b.unlocked])


if __name__ == "__main__":
    run_30_decisions_smoke()
