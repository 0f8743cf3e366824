from dataclasses import replace

from core.history import round_half_up, snapshot, undo
from core.state import ChoiceRecord, DebtBalances

from conftest import make_state


def test_snapshot_rounds_display_fields():
    s = make_state(cash=1234.5, monthly_expenses=2000.49, investments=10.6,
                   debt=DebtBalances(credit_card=99.5), credit_score=701.4,
                   real_purchasing_power=87.654321, inflation_rate=0.0312345, age=23.5, year=1.5)
    snap = snapshot(s, "ch1-d3")
    assert snap.decision_id == "ch1-d3"
    assert snap.cash == 1235
    assert snap.monthly_expenses == 2000
    assert snap.investments == 11
    assert snap.debt.credit_card == 100
    assert snap.credit_score == 701
    assert snap.real_purchasing_power == 87.65
    assert snap.inflation_rate == 0.0312345
    assert snap.age == 23.5 and snap.year == 1.5


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(1.234, 2) == 1.23


def test_undo_empty_history_is_noop():
    assert undo(make_state()) is None


def test_undo_restores_snapshot_fields():
    before = make_state(cash=1234.4, current_decision=4)
    snap = snapshot(before, "ch1-d5")
    after = replace(
        before,
        cash=0.0,
        stress=80.0,
        debt=DebtBalances(credit_card=5000.0),
        current_decision=5,
        history=[snap],
        choices_made=[ChoiceRecord("ch1-d5", "ch1-d5-c")],
        completed=True,
        risk_level=90.0,
        long_term_choices=3,
        recession_active=True,
    )
    restored = undo(after)
    assert restored is not None
    assert restored.current_decision == 4
    assert restored.cash == 1234
    assert restored.stress == 30
    assert restored.debt == DebtBalances()
    assert restored.history == []
    assert restored.choices_made == []
    assert restored.completed is False
    # not snapshotted: left as they are
    assert restored.risk_level == 90.0
    assert restored.long_term_choices == 3
    assert restored.recession_active is True
