"""
core.effects
Economy / physics rules:
- effect bundles (sparse deltas + scenario triggers) and their clamp rules
- the 6-month time step: cash flow, inflation, debt interest, market growth,
  negative cash rolled onto the credit card
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Union

from .finance import (
    adjust_for_inflation,
    compound_interest,
    investment_growth,
    net_worth,
    real_purchasing_power,
    simple_interest,
)
from .rng import Rng
from .state import CREDIT_SCORE_MAX, CREDIT_SCORE_MIN, DebtBalances, GameState, clamp

TIME_STEP_MONTHS = 6
INFLATION_SPIKE_RATE = 0.08
NEGATIVE_CASH_CREDIT_PENALTY = 15.0
NEGATIVE_CASH_STRESS = 10.0
PURCHASING_POWER_BASELINE = 10_000.0


@dataclass(frozen=True)
class Effects:
    """Immediate consequences of a choice.

    Numeric fields are signed deltas; None means "no change" (a 0.0 delta still
    runs the clamp). Exception: inflation_rate is the new absolute rate.

    trigger_inflation_spike also forces inflation_rate to INFLATION_SPIKE_RATE,
    overriding any inflation_rate in the same bundle.
    """

    cash: Optional[float] = None
    monthly_income: Optional[float] = None
    monthly_expenses: Optional[float] = None
    credit_card_debt: Optional[float] = None
    student_loan: Optional[float] = None
    auto_loan: Optional[float] = None
    mortgage: Optional[float] = None
    credit_score: Optional[float] = None
    investments: Optional[float] = None
    stress: Optional[float] = None
    risk_level: Optional[float] = None
    inflation_rate: Optional[float] = None

    trigger_recession: bool = False
    trigger_inflation_spike: bool = False
    long_term_choice: bool = False


_FLAG_FIELDS = {"trigger_recession", "trigger_inflation_spike", "long_term_choice"}
EFFECT_FIELDS = tuple(f.name for f in fields(Effects))
NUMERIC_EFFECT_FIELDS = tuple(k for k in EFFECT_FIELDS if k not in _FLAG_FIELDS)


def effects_from_mapping(d: Mapping[str, Any]) -> Effects:
    """Parse an effect dict (catalog JSON). Strict: nothing is guessed.

    Raises ValueError on unknown keys or wrongly typed values.
    """
    unknown = sorted(set(d) - set(EFFECT_FIELDS))
    if unknown:
        raise ValueError(f"unknown effect field(s): {', '.join(unknown)}")

    kwargs: Dict[str, Any] = {}
    for k, v in d.items():
        if v is None:
            continue
        if k in _FLAG_FIELDS:
            if not isinstance(v, bool):
                raise ValueError(f"effect {k} must be a boolean, got {v!r}")
            kwargs[k] = v
        else:
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise ValueError(f"effect {k} must be a number, got {v!r}")
            kwargs[k] = float(v)
    return Effects(**kwargs)


def effects_to_dict(e: Effects) -> Dict[str, Any]:
    """Sparse dict: only the fields that are present / set."""
    out: Dict[str, Any] = {}
    for k in NUMERIC_EFFECT_FIELDS:
        v = getattr(e, k)
        if v is not None:
            out[k] = float(v)
    for k in sorted(_FLAG_FIELDS):
        if getattr(e, k):
            out[k] = True
    return out


def _floor0(base: float, delta: Optional[float]) -> float:
    if delta is None:
        return base
    return max(0.0, base + delta)


def _bounded(base: float, delta: Optional[float], lo: float, hi: float) -> float:
    if delta is None:
        return base
    return clamp(base + delta, lo, hi)


def apply_effects(state: GameState, effects: Union[Effects, Mapping[str, Any]]) -> GameState:
    """Apply an effect bundle with clamp rules (pure function)."""
    e = effects if isinstance(effects, Effects) else effects_from_mapping(effects)

    debt = DebtBalances(
        credit_card=_floor0(state.debt.credit_card, e.credit_card_debt),
        student_loan=_floor0(state.debt.student_loan, e.student_loan),
        auto_loan=_floor0(state.debt.auto_loan, e.auto_loan),
        mortgage=_floor0(state.debt.mortgage, e.mortgage),
    )
    cash = _floor0(state.cash, e.cash)
    investments = _floor0(state.investments, e.investments)

    inflation_rate = state.inflation_rate
    if e.inflation_rate is not None:
        inflation_rate = max(0.0, e.inflation_rate)
    inflation_spike_active = state.inflation_spike_active
    if e.trigger_inflation_spike:
        inflation_spike_active = True
        inflation_rate = INFLATION_SPIKE_RATE

    return replace(
        state,
        cash=cash,
        investments=investments,
        monthly_income=_floor0(state.monthly_income, e.monthly_income),
        monthly_expenses=_floor0(state.monthly_expenses, e.monthly_expenses),
        debt=debt,
        credit_score=_bounded(state.credit_score, e.credit_score, CREDIT_SCORE_MIN, CREDIT_SCORE_MAX),
        stress=_bounded(state.stress, e.stress, 0.0, 100.0),
        risk_level=_bounded(state.risk_level, e.risk_level, 0.0, 100.0),
        inflation_rate=inflation_rate,
        recession_active=state.recession_active or e.trigger_recession,
        inflation_spike_active=inflation_spike_active,
        long_term_choices=state.long_term_choices + (1 if e.long_term_choice else 0),
        net_worth=net_worth(cash, investments, debt),
    )


def advance_time(state: GameState, rng: Rng) -> GameState:
    """Six months pass (pure given rng).

    Every step reads the values as they were at the start of the call, except
    the negative-cash rollover, which runs last on the already-accrued debt.
    Exactly one rng draw, and only when investments > 0.
    """
    months = TIME_STEP_MONTHS

    # 1) cash flow, may go negative until step 5
    cash = state.cash + (state.monthly_income - state.monthly_expenses) * months

    # 2) prices rise
    monthly_expenses = adjust_for_inflation(state.monthly_expenses, state.inflation_rate, months)

    # 3) interest: revolving/mortgage compound, installment loans simple
    d, r = state.debt, state.interest_rates
    credit_card = compound_interest(d.credit_card, r.credit_card, months) if d.credit_card > 0 else d.credit_card
    student_loan = d.student_loan + simple_interest(d.student_loan, r.student_loan, months) if d.student_loan > 0 else d.student_loan
    auto_loan = d.auto_loan + simple_interest(d.auto_loan, r.auto_loan, months) if d.auto_loan > 0 else d.auto_loan
    mortgage = compound_interest(d.mortgage, r.mortgage, months) if d.mortgage > 0 else d.mortgage

    # 4) market
    investments = state.investments
    if investments > 0:
        investments = investment_growth(investments, state.risk_level, months, rng, state.recession_active)

    # 5) shortfall goes on the card
    credit_score = state.credit_score
    stress = state.stress
    if cash < 0:
        credit_card += abs(cash)
        cash = 0.0
        credit_score = max(CREDIT_SCORE_MIN, credit_score - NEGATIVE_CASH_CREDIT_PENALTY)
        stress = min(100.0, stress + NEGATIVE_CASH_STRESS)

    debt = DebtBalances(credit_card=credit_card, student_loan=student_loan, auto_loan=auto_loan, mortgage=mortgage)

    # 6) clock
    age = state.age + 0.5
    year = state.year + 0.5

    # 7-8) derived
    nw = net_worth(cash, investments, debt)
    # Cumulative inflation uses today's rate over all elapsed years, not the rate history.
    cumulative = (1 + state.inflation_rate) ** year
    rpp = real_purchasing_power(100.0 * (nw / PURCHASING_POWER_BASELINE), cumulative)

    return replace(
        state,
        cash=cash,
        monthly_expenses=monthly_expenses,
        debt=debt,
        investments=investments,
        credit_score=credit_score,
        stress=stress,
        age=age,
        year=year,
        net_worth=nw,
        real_purchasing_power=rpp,
    )
