from dataclasses import replace

from core.state import Badge, DebtBalances
from engine.results import (
    MAX_TAKEAWAYS,
    credit_score_grade,
    generate_takeaways,
    overall_grade,
    overall_score,
)

from conftest import make_state


def _tags(ts):
    return [t.concept_tag for t in ts]


def test_emergency_fund_takeaway_always_present():
    rich = generate_takeaways(make_state(cash=10_000.0))
    poor = generate_takeaways(make_state(cash=0.0))
    assert "Emergency Fund Protected You" in [t.title for t in rich]
    assert "Emergency Fund Lesson" in [t.title for t in poor]


def test_debt_start_payoff_takeaway():
    s = make_state(debt=DebtBalances(student_loan=5000.0))
    assert "Debt Management" in _tags(generate_takeaways(s, "debt_start"))
    assert "Debt Management" not in _tags(generate_takeaways(s, "scratch"))


def test_heavy_debt_takeaway_mentions_amount():
    s = make_state(debt=DebtBalances(student_loan=60_000.0))
    t = next(t for t in generate_takeaways(s) if t.concept_tag == "Minimum Payments")
    assert "$60,000" in t.description


def test_defaults_fill_without_duplicate_tags_and_cap():
    s = make_state(
        investments=9000.0,
        credit_score=780.0,
        cash=50_000.0,
        stress=80.0,
        long_term_choices=7,
        inflation_spike_active=True,
    )
    out = generate_takeaways(s)
    assert len(out) == MAX_TAKEAWAYS
    assert len(set(_tags(out))) == len(out)

    few = generate_takeaways(make_state(cash=0.0))
    assert _tags(few) == ["Emergency Fund", "Budgeting", "Risk-Return", "Insurance"]


def test_credit_score_grade_bands():
    assert credit_score_grade(780) == "Excellent"
    assert credit_score_grade(700) == "Good"
    assert credit_score_grade(650) == "Fair"
    assert credit_score_grade(649.9) == "Needs Work"


def test_overall_grade():
    unlocked = [Badge(id=str(i), name="", description="", icon="", unlocked=True) for i in range(4)]
    best = make_state(net_worth=60_000.0, credit_score=760.0, stress=10.0, badges=unlocked)
    assert overall_score(best) == 10
    assert overall_grade(best).grade == "S"

    worst = replace(make_state(net_worth=-100.0, credit_score=500.0, stress=90.0), badges=[])
    assert overall_score(worst) == 0
    assert overall_grade(worst).grade == "D"
