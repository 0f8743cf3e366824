from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.state import DebtBalances, GameState, default_start_state  # noqa: E402


def make_state(**overrides) -> GameState:
    """Test state: 5000 cash, 3000 in / 2000 out, 1000 invested, no debt."""
    base = replace(
        default_start_state("test-session-123", 0),
        cash=5000.0,
        monthly_income=3000.0,
        monthly_expenses=2000.0,
        debt=DebtBalances(),
        credit_score=700.0,
        investments=1000.0,
        stress=30.0,
        inflation_rate=0.03,
        risk_level=30.0,
        net_worth=6000.0,
    )
    return replace(base, **overrides)


@pytest.fixture
def state() -> GameState:
    return make_state()
