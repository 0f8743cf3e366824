import json
import logging

import pytest

from core.rng import create_seed
from engine.config import EngineConfig
from engine.logging import dumps_run_export
from engine.session import GameSession, new_session_id
from engine.sim_runner import run_headless_sim


def test_new_session_id_shape():
    sid = new_session_id()
    ms, suffix = sid.split("-")
    assert ms.isdigit()
    assert len(suffix) == 7 and suffix.isalnum() and suffix.lower() == suffix


def test_profiles_seed_the_start_state():
    s = GameSession(EngineConfig(profile_key="debt_start", goal_key="growth"), session_id="p", started_at=0)
    assert s.state.cash == 500
    assert s.total_debt() == 30000
    assert s.state.net_worth == 500 - 30000
    assert s.state.risk_level == 50
    assert s.monthly_cash_flow() == 500


def test_first_choice_records_pre_choice_snapshot():
    s = GameSession(session_id="pipe", started_at=0)
    assert s.current_decision().id == "ch1-d1"
    s.make_choice("ch1-d1", "ch1-d1-a")
    assert s.state.current_decision == 1
    assert s.state.history[0].cash == 1000
    assert s.logs[0]["seed"] == create_seed("pipe", 0)
    assert s.current_decision().id == "ch1-d2"
    assert s.progress() == pytest.approx(100 / 30)
    assert s.chapter() == 1


def test_unknown_ids_raise_and_leave_state():
    s = GameSession(session_id="x", started_at=0)
    before = s.state
    with pytest.raises(ValueError, match="Unknown decision_id"):
        s.make_choice("nope", "ch1-d1-a")
    with pytest.raises(ValueError, match="Unknown choice_id"):
        s.make_choice("ch1-d1", "nope")
    assert s.state is before
    assert s.logs == []


def test_undo_pops_state_and_log():
    s = GameSession(session_id="u", started_at=0)
    assert s.undo_last_choice() is False
    s.make_choice("ch1-d1", "ch1-d1-b")
    assert s.undo_last_choice() is True
    assert s.state.current_decision == 0
    assert s.state.cash == 1000
    assert s.logs == []


def test_same_session_id_same_run():
    a = run_headless_sim("second", session_id="same")
    b = run_headless_sim("second", session_id="same")
    assert a["final"] == b["final"]
    assert [x["seed"] for x in a["logs"]] == [x["seed"] for x in b["logs"]]


def test_full_season_completes_and_locks():
    out = run_headless_sim("long_term", session_id="season")
    assert out["decisions"] == 30
    final = out["final"]
    assert final.completed
    assert final.age == 37.0
    assert len(final.history) == 30
    assert 1 <= len(out["takeaways"]) <= 6
    assert any(b == "anti_present_bias" for b in out["badges_unlocked"])


def test_completed_session_rejects_choices():
    s = GameSession(session_id="done", started_at=0)
    while not s.state.completed:
        d = s.current_decision()
        s.make_choice(d.id, d.choices[0].id)
    with pytest.raises(ValueError, match="completed"):
        s.make_choice("ch5-d6", "ch5-d6-a")
    assert s.current_decision() is None


def test_max_decisions_stops_early():
    out = run_headless_sim("first", session_id="short", max_decisions=4)
    assert out["decisions"] == 4
    assert out["final"].current_decision == 4
    assert not out["final"].completed


def test_go_to_decision_requires_educator_mode():
    s = GameSession(session_id="edu", started_at=0)
    for _ in range(3):
        d = s.current_decision()
        s.make_choice(d.id, d.choices[0].id)
    assert s.go_to_decision(1) is False

    s.config = EngineConfig(educator_mode=True)
    assert s.go_to_decision(5) is False
    assert s.go_to_decision(1) is True
    assert s.current_decision().id == "ch1-d2"


def test_export_resume_round_trip():
    s = GameSession(EngineConfig(profile_key="safety_net"), session_id="save", started_at=0)
    for _ in range(5):
        d = s.current_decision()
        s.make_choice(d.id, d.choices[1].id)

    data = json.loads(dumps_run_export(s.export()))
    r = GameSession.from_export(data)
    assert r.state == s.state
    assert r.initial_state == s.initial_state
    assert r.config == s.config
    assert r.logs == s.logs

    d = s.current_decision()
    s.make_choice(d.id, d.choices[0].id)
    r.make_choice(d.id, d.choices[0].id)
    assert r.state == s.state


def test_out_of_order_choice_is_logged(caplog):
    s = GameSession(session_id="order", started_at=0)
    with caplog.at_level(logging.WARNING, logger="engine.session"):
        s.make_choice("ch5-d6", "ch5-d6-b")
    assert "expected ch1-d1" in caplog.text
    assert s.state.history[0].decision_id == "ch5-d6"


def test_in_order_and_educator_choices_are_quiet(caplog):
    s = GameSession(session_id="order", started_at=0)
    edu = GameSession(EngineConfig(educator_mode=True), session_id="edu", started_at=0)
    with caplog.at_level(logging.WARNING, logger="engine.session"):
        s.make_choice("ch1-d1", "ch1-d1-b")
        edu.make_choice("ch3-d1", "ch3-d1-a")
    assert caplog.records == []


def test_unknown_policy_raises():
    with pytest.raises(ValueError, match="unknown policy"):
        run_headless_sim("yolo")


def test_policy_reported_is_the_one_run():
    out = run_headless_sim("third", session_id="p", max_decisions=2)
    assert out["policy"] == "third"
    assert [x["choice"] for x in out["logs"]] == ["ch1-d1-c", "ch1-d2-c"]
