"""
core.badges
Achievement latches. A badge unlocks the first time its predicate holds and
never locks again.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, List, Sequence

from .state import Badge, GameState

EMERGENCY_FUND_MONTHS = 3
INVESTOR_THRESHOLD = 1000.0
CREDIT_BUILDER_SCORE = 720.0
LONG_TERM_CHOICES_REQUIRED = 5


def initialize_badges() -> List[Badge]:
    return [
        Badge(
            id="emergency_ready",
            name="Emergency Ready",
            description="Built an emergency fund covering 3+ months of expenses",
            icon="🛡️",
        ),
        Badge(
            id="debt_slayer",
            name="Debt Slayer",
            description="Paid off all credit card debt",
            icon="⚔️",
        ),
        Badge(
            id="investor",
            name="Investor",
            description="Grew investments to over $1,000",
            icon="📈",
        ),
        Badge(
            id="credit_builder",
            name="Credit Builder",
            description="Achieved a credit score of 720 or higher",
            icon="⭐",
        ),
        Badge(
            id="anti_present_bias",
            name="Future Thinker",
            description="Chose long-term benefits over immediate gratification 5 times",
            icon="🔮",
        ),
    ]


def _emergency_ready(s: GameState) -> bool:
    expenses = s.monthly_expenses or 1.0
    return s.cash >= expenses * EMERGENCY_FUND_MONTHS


def _debt_slayer(s: GameState) -> bool:
    # nobody slays a debt they never made a decision about
    return s.debt.credit_card == 0 and s.current_decision > 0


PREDICATES: Dict[str, Callable[[GameState], bool]] = {
    "emergency_ready": _emergency_ready,
    "debt_slayer": _debt_slayer,
    "investor": lambda s: s.investments >= INVESTOR_THRESHOLD,
    "credit_builder": lambda s: s.credit_score >= CREDIT_BUILDER_SCORE,
    "anti_present_bias": lambda s: s.long_term_choices >= LONG_TERM_CHOICES_REQUIRED,
}


def evaluate_badges(state: GameState) -> List[Badge]:
    """Return the badge list with any newly earned badges unlocked (pure)."""
    out: List[Badge] = []
    for badge in state.badges:
        pred = PREDICATES.get(badge.id)
        if not badge.unlocked and pred is not None and pred(state):
            badge = replace(badge, unlocked=True, unlocked_at=int(state.current_decision))
        out.append(badge)
    return out


def newly_unlocked(before: Sequence[Badge], after: Sequence[Badge]) -> List[Badge]:
    was_unlocked = {b.id for b in before if b.unlocked}
    return [b for b in after if b.unlocked and b.id not in was_unlocked]
