"""engine.results

End-of-run summary: lesson takeaways and grades derived from the final state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from core.badges import EMERGENCY_FUND_MONTHS
from core.finance import total_debt
from core.formatting import format_currency_full
from core.state import GameState

MAX_TAKEAWAYS = 6


@dataclass(frozen=True)
class Takeaway:
    title: str
    description: str
    concept_tag: str


@dataclass(frozen=True)
class Grade:
    grade: str
    title: str


DEFAULT_TAKEAWAYS = (
    Takeaway(
        title="Pay Yourself First",
        description=(
            "Automating savings before spending ensures you build wealth consistently. "
            "Even small amounts compound significantly over decades."
        ),
        concept_tag="Budgeting",
    ),
    Takeaway(
        title="Understand Your Risk Tolerance",
        description=(
            "Your investment strategy should match your ability to handle volatility. "
            "Higher returns require accepting higher short-term risk."
        ),
        concept_tag="Risk-Return",
    ),
    Takeaway(
        title="Insurance Protects What You Build",
        description=(
            "Proper insurance coverage transfers catastrophic risks to insurance companies. "
            "Protect against disasters, not minor inconveniences."
        ),
        concept_tag="Insurance",
    ),
)


def generate_takeaways(state: GameState, profile_key: Optional[str] = None) -> List[Takeaway]:
    out: List[Takeaway] = []

    if state.investments > 5000:
        out.append(Takeaway(
            title="The Power of Compound Growth",
            description=(
                f"Your investments grew to {format_currency_full(state.investments)}. Starting early and "
                "staying invested lets compound interest work its magic over time."
            ),
            concept_tag="Compound Interest",
        ))

    debt = total_debt(state.debt)
    if debt < 10000 and profile_key == "debt_start":
        out.append(Takeaway(
            title="Debt Freedom Achieved",
            description=(
                "You started with significant debt but made choices that prioritized paying it down. "
                "High-interest debt is a wealth destroyer."
            ),
            concept_tag="Debt Management",
        ))
    elif debt > 50000:
        out.append(Takeaway(
            title="The Weight of Debt",
            description=(
                f"You accumulated {format_currency_full(debt)} in debt. Remember: compound interest "
                "works against you with debt, especially at high rates."
            ),
            concept_tag="Minimum Payments",
        ))

    if state.credit_score >= 720:
        out.append(Takeaway(
            title="Credit Builder Success",
            description=(
                "Your credit score reached excellent status. Good credit opens doors to better rates "
                "on mortgages, cars, and more."
            ),
            concept_tag="Credit Score",
        ))

    if state.cash >= state.monthly_expenses * EMERGENCY_FUND_MONTHS:
        out.append(Takeaway(
            title="Emergency Fund Protected You",
            description=(
                "Having 3+ months of expenses saved provided a safety net during life's uncertainties. "
                "This is foundational to financial security."
            ),
            concept_tag="Emergency Fund",
        ))
    else:
        out.append(Takeaway(
            title="Emergency Fund Lesson",
            description=(
                "Without adequate savings, unexpected expenses forced you into debt. "
                "An emergency fund is your first line of financial defense."
            ),
            concept_tag="Emergency Fund",
        ))

    if state.stress > 60:
        out.append(Takeaway(
            title="Financial Stress Takes a Toll",
            description=(
                "High financial stress affects health, relationships, and decision-making. "
                "Building security reduces this burden over time."
            ),
            concept_tag="Budgeting",
        ))

    if state.long_term_choices >= 5:
        out.append(Takeaway(
            title="Future-Focused Mindset",
            description=(
                "You consistently chose long-term benefits over immediate gratification. "
                "This anti-present-bias thinking is key to building wealth."
            ),
            concept_tag="Present Bias",
        ))

    if state.inflation_spike_active:
        out.append(Takeaway(
            title="Inflation: The Silent Tax",
            description=(
                "You experienced how inflation erodes purchasing power. Investments in stocks "
                "historically beat inflation; cash loses value over time."
            ),
            concept_tag="Inflation",
        ))

    for t in DEFAULT_TAKEAWAYS:
        if len(out) >= MAX_TAKEAWAYS:
            break
        if all(x.concept_tag != t.concept_tag for x in out):
            out.append(t)

    return out[:MAX_TAKEAWAYS]


def credit_score_grade(score: float) -> str:
    if score >= 750:
        return "Excellent"
    if score >= 700:
        return "Good"
    if score >= 650:
        return "Fair"
    return "Needs Work"


def overall_score(state: GameState) -> int:
    """0..10 points over net worth, credit, stress and badges."""
    score = 0
    if state.net_worth > 50000:
        score += 3
    elif state.net_worth > 10000:
        score += 2
    elif state.net_worth > 0:
        score += 1

    if state.credit_score >= 750:
        score += 3
    elif state.credit_score >= 700:
        score += 2
    elif state.credit_score >= 650:
        score += 1

    if state.stress < 30:
        score += 2
    elif state.stress < 50:
        score += 1

    unlocked = sum(1 for b in state.badges if b.unlocked)
    if unlocked >= 4:
        score += 2
    elif unlocked >= 2:
        score += 1
    return score


def overall_grade(state: GameState) -> Grade:
    score = overall_score(state)
    if score >= 9:
        return Grade("S", "Financial Genius!")
    if score >= 7:
        return Grade("A", "Excellent Work!")
    if score >= 5:
        return Grade("B", "Great Progress!")
    if score >= 3:
        return Grade("C", "Keep Learning!")
    return Grade("D", "Room to Grow!")
