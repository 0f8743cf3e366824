from dataclasses import replace

from core.badges import evaluate_badges, initialize_badges, newly_unlocked
from core.state import DebtBalances

from conftest import make_state


def _unlocked(badges):
    return {b.id for b in badges if b.unlocked}


def test_initial_badges_are_locked():
    badges = initialize_badges()
    assert [b.id for b in badges] == [
        "emergency_ready", "debt_slayer", "investor", "credit_builder", "anti_present_bias",
    ]
    assert not _unlocked(badges)


def test_emergency_ready_threshold():
    assert "emergency_ready" in _unlocked(evaluate_badges(make_state(cash=6000.0, monthly_expenses=2000.0)))
    assert "emergency_ready" not in _unlocked(evaluate_badges(make_state(cash=5999.0, monthly_expenses=2000.0)))


def test_emergency_ready_zero_expenses_uses_floor_of_one():
    assert "emergency_ready" not in _unlocked(evaluate_badges(make_state(cash=2.0, monthly_expenses=0.0)))
    assert "emergency_ready" in _unlocked(evaluate_badges(make_state(cash=3.0, monthly_expenses=0.0)))


def test_debt_slayer_needs_a_decision():
    assert "debt_slayer" not in _unlocked(evaluate_badges(make_state(current_decision=0)))
    assert "debt_slayer" in _unlocked(evaluate_badges(make_state(current_decision=1)))
    s = make_state(current_decision=3, debt=DebtBalances(credit_card=1.0))
    assert "debt_slayer" not in _unlocked(evaluate_badges(s))


def test_investor_credit_builder_future_thinker():
    s = make_state(investments=1000.0, credit_score=720.0, long_term_choices=5, cash=0.0)
    assert _unlocked(evaluate_badges(s)) >= {"investor", "credit_builder", "anti_present_bias"}
    s = make_state(investments=999.0, credit_score=719.0, long_term_choices=4, cash=0.0)
    assert not _unlocked(evaluate_badges(s)) & {"investor", "credit_builder", "anti_present_bias"}


def test_unlock_records_decision_index():
    badges = evaluate_badges(make_state(investments=5000.0, current_decision=7))
    investor = next(b for b in badges if b.id == "investor")
    assert investor.unlocked_at == 7


def test_one_way_latch():
    s = make_state(investments=1500.0, current_decision=2)
    s = replace(s, badges=evaluate_badges(s))
    s = replace(s, investments=10.0, current_decision=3)
    badges = evaluate_badges(s)
    investor = next(b for b in badges if b.id == "investor")
    assert investor.unlocked
    assert investor.unlocked_at == 2


def test_newly_unlocked():
    before = initialize_badges()
    after = evaluate_badges(make_state(investments=5000.0, cash=0.0, credit_score=600.0))
    assert [b.id for b in newly_unlocked(before, after)] == ["investor"]
    assert newly_unlocked(after, after) == []
