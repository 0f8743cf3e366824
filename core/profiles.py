"""
core.profiles
Starting profiles and goals (who you are at 22, what you aim for).

Kept in core so balancing lives in one place, but UI can still display labels.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict

from .finance import net_worth
from .state import DebtBalances, GameState


@dataclass(frozen=True)
class ProfileSpec:
    key: str
    title: str
    desc: str
    cash: float
    monthly_income: float
    monthly_expenses: float
    debt: DebtBalances
    credit_score: float
    investments: float
    stress: float


@dataclass(frozen=True)
class GoalSpec:
    key: str
    title: str
    desc: str
    risk_level: float


DEFAULT_PROFILES: Dict[str, ProfileSpec] = {
    "scratch": ProfileSpec(
        key="scratch",
        title="Starting from Scratch",
        desc="Fresh out of school with minimal savings but no debt. A clean slate.",
        cash=1000.0,
        monthly_income=2800.0,
        monthly_expenses=2200.0,
        debt=DebtBalances(),
        credit_score=650.0,
        investments=0.0,
        stress=30.0,
    ),
    "safety_net": ProfileSpec(
        key="safety_net",
        title="Supportive Safety Net",
        desc="Family support gave you a head start. Higher savings and some investments.",
        cash=5000.0,
        monthly_income=3200.0,
        monthly_expenses=2400.0,
        debt=DebtBalances(),
        credit_score=700.0,
        investments=2000.0,
        stress=20.0,
    ),
    "debt_start": ProfileSpec(
        key="debt_start",
        title="Debt Head Start",
        desc="Student loans and credit card debt from college. Starting in the red.",
        cash=500.0,
        monthly_income=2800.0,
        monthly_expenses=2300.0,
        debt=DebtBalances(credit_card=2000.0, student_loan=28000.0),
        credit_score=620.0,
        investments=0.0,
        stress=45.0,
    ),
}


DEFAULT_GOALS: Dict[str, GoalSpec] = {
    "stability": GoalSpec(
        key="stability",
        title="Financial Stability",
        desc="Focus on building a solid foundation with emergency savings and low debt.",
        risk_level=20.0,
    ),
    "growth": GoalSpec(
        key="growth",
        title="Wealth Growth",
        desc="Prioritize investing and building long-term wealth through compound returns.",
        risk_level=50.0,
    ),
    "freedom": GoalSpec(
        key="freedom",
        title="Financial Freedom",
        desc="Balance between stability and growth, aiming for flexibility and options.",
        risk_level=35.0,
    ),
}


def get_profile_spec(profile_key: str) -> ProfileSpec:
    return DEFAULT_PROFILES.get(profile_key, DEFAULT_PROFILES["scratch"])


def get_goal_spec(goal_key: str) -> GoalSpec:
    return DEFAULT_GOALS.get(goal_key, DEFAULT_GOALS["stability"])


def apply_profile(state: GameState, profile_key: str) -> GameState:
    """Overwrite starting balances with a profile (pure)."""
    spec = get_profile_spec(profile_key)
    return replace(
        state,
        cash=spec.cash,
        monthly_income=spec.monthly_income,
        monthly_expenses=spec.monthly_expenses,
        debt=spec.debt,
        credit_score=spec.credit_score,
        investments=spec.investments,
        stress=spec.stress,
        net_worth=net_worth(spec.cash, spec.investments, spec.debt),
    )


def apply_goal(state: GameState, goal_key: str) -> GameState:
    return replace(state, risk_level=get_goal_spec(goal_key).risk_level)
