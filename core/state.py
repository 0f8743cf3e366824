"""
core.state
Core domain data models (UI independent).

All models are frozen: engine functions return new values, never mutate.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


CREDIT_SCORE_MIN = 300.0
CREDIT_SCORE_MAX = 850.0


@dataclass(frozen=True)
class DebtBalances:
    credit_card: float = 0.0
    student_loan: float = 0.0
    auto_loan: float = 0.0
    mortgage: float = 0.0


@dataclass(frozen=True)
class InterestRates:
    """Annual rates per debt category. Fixed at session start."""

    credit_card: float = 0.1999
    student_loan: float = 0.055
    auto_loan: float = 0.065
    mortgage: float = 0.065


@dataclass(frozen=True)
class Badge:
    id: str
    name: str
    description: str
    icon: str
    unlocked: bool = False
    unlocked_at: Optional[int] = None  # decision index


@dataclass(frozen=True)
class StateSnapshot:
    """Rounded, display-grade copy of the state at a decision boundary.

    Undo restores these values verbatim, so the rounding is part of the contract.
    """

    decision_id: str
    age: float
    year: float
    cash: float
    monthly_income: float
    monthly_expenses: float
    debt: DebtBalances
    credit_score: float
    investments: float
    net_worth: float
    stress: float
    inflation_rate: float
    real_purchasing_power: float


@dataclass(frozen=True)
class ChoiceRecord:
    decision_id: str
    choice_id: str


@dataclass(frozen=True)
class GameState:
    """Root state of one session.

    net_worth and real_purchasing_power are derived; only the engine sets them.
    """

    session_id: str
    started_at: int  # epoch ms

    current_decision: int
    age: float
    year: float

    cash: float
    investments: float
    monthly_income: float
    monthly_expenses: float
    debt: DebtBalances
    interest_rates: InterestRates

    credit_score: float  # 300..850
    stress: float        # 0..100
    risk_level: float    # 0..100
    inflation_rate: float

    net_worth: float
    real_purchasing_power: float

    recession_active: bool = False
    inflation_spike_active: bool = False
    long_term_choices: int = 0

    badges: List[Badge] = field(default_factory=list)
    history: List[StateSnapshot] = field(default_factory=list)
    choices_made: List[ChoiceRecord] = field(default_factory=list)
    completed: bool = False


def default_start_state(session_id: str, started_at: int = 0) -> GameState:
    """Baseline start state (the 'scratch' profile with no goal applied).

    Keep it in core so headless tests and UI share the same baseline.
    """
    from .badges import initialize_badges

    return GameState(
        session_id=str(session_id),
        started_at=int(started_at),
        current_decision=0,
        age=22.0,
        year=0.0,
        cash=1000.0,
        investments=0.0,
        monthly_income=2800.0,
        monthly_expenses=2200.0,
        debt=DebtBalances(),
        interest_rates=InterestRates(),
        credit_score=650.0,
        stress=30.0,
        risk_level=30.0,
        inflation_rate=0.03,
        net_worth=1000.0,
        real_purchasing_power=100.0,
        badges=initialize_badges(),
    )


# -------------------------
# Serialization (save/resume, run export)
# -------------------------


def state_to_dict(s: GameState) -> Dict[str, Any]:
    return asdict(s)


def stats_to_dict(s: GameState) -> Dict[str, float]:
    """Flat numeric view used by run logs and the UI."""
    return {
        "age": float(s.age),
        "cash": float(s.cash),
        "investments": float(s.investments),
        "monthly_income": float(s.monthly_income),
        "monthly_expenses": float(s.monthly_expenses),
        "credit_card_debt": float(s.debt.credit_card),
        "student_loan": float(s.debt.student_loan),
        "auto_loan": float(s.debt.auto_loan),
        "mortgage": float(s.debt.mortgage),
        "credit_score": float(s.credit_score),
        "stress": float(s.stress),
        "risk_level": float(s.risk_level),
        "inflation_rate": float(s.inflation_rate),
        "net_worth": float(s.net_worth),
        "real_purchasing_power": float(s.real_purchasing_power),
    }


def _debt_from_mapping(d: Mapping[str, Any]) -> DebtBalances:
    return DebtBalances(
        credit_card=float(d.get("credit_card", 0.0)),
        student_loan=float(d.get("student_loan", 0.0)),
        auto_loan=float(d.get("auto_loan", 0.0)),
        mortgage=float(d.get("mortgage", 0.0)),
    )


def _snapshot_from_mapping(d: Mapping[str, Any]) -> StateSnapshot:
    return StateSnapshot(
        decision_id=str(d["decision_id"]),
        age=float(d["age"]),
        year=float(d["year"]),
        cash=float(d["cash"]),
        monthly_income=float(d["monthly_income"]),
        monthly_expenses=float(d["monthly_expenses"]),
        debt=_debt_from_mapping(d.get("debt") or {}),
        credit_score=float(d["credit_score"]),
        investments=float(d["investments"]),
        net_worth=float(d["net_worth"]),
        stress=float(d["stress"]),
        inflation_rate=float(d["inflation_rate"]),
        real_purchasing_power=float(d["real_purchasing_power"]),
    )


def state_from_mapping(d: Mapping[str, Any]) -> GameState:
    """Rebuild a GameState from state_to_dict() output.

    Raises ValueError if a required field is missing or malformed.
    """
    if not isinstance(d, Mapping):
        raise ValueError(f"invalid game state payload: expected an object, got {type(d).__name__}")
    try:
        rates = dict(d.get("interest_rates") or {})
        badges = [
            Badge(
                id=str(b["id"]),
                name=str(b.get("name", "")),
                description=str(b.get("description", "")),
                icon=str(b.get("icon", "")),
                unlocked=bool(b.get("unlocked", False)),
                unlocked_at=None if b.get("unlocked_at") is None else int(b["unlocked_at"]),
            )
            for b in list(d.get("badges") or [])
        ]
        return GameState(
            session_id=str(d["session_id"]),
            started_at=int(d.get("started_at", 0)),
            current_decision=int(d["current_decision"]),
            age=float(d["age"]),
            year=float(d["year"]),
            cash=float(d["cash"]),
            investments=float(d["investments"]),
            monthly_income=float(d["monthly_income"]),
            monthly_expenses=float(d["monthly_expenses"]),
            debt=_debt_from_mapping(d.get("debt") or {}),
            interest_rates=InterestRates(**{k: float(v) for k, v in rates.items()}),
            credit_score=float(d["credit_score"]),
            stress=float(d["stress"]),
            risk_level=float(d["risk_level"]),
            inflation_rate=float(d["inflation_rate"]),
            net_worth=float(d["net_worth"]),
            real_purchasing_power=float(d["real_purchasing_power"]),
            recession_active=bool(d.get("recession_active", False)),
            inflation_spike_active=bool(d.get("inflation_spike_active", False)),
            long_term_choices=int(d.get("long_term_choices", 0)),
            badges=badges,
            history=[_snapshot_from_mapping(x) for x in list(d.get("history") or [])],
            choices_made=[
                ChoiceRecord(decision_id=str(x["decision_id"]), choice_id=str(x["choice_id"]))
                for x in list(d.get("choices_made") or [])
            ],
            completed=bool(d.get("completed", False)),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"invalid game state payload: {type(e).__name__}: {e}") from e
