from core.profiles import apply_goal, apply_profile, get_goal_spec, get_profile_spec
from core.state import default_start_state


def test_unknown_keys_fall_back_to_defaults():
    assert get_profile_spec("nope").key == "scratch"
    assert get_goal_spec("nope").key == "stability"


def test_safety_net_profile():
    s = apply_profile(default_start_state("p", 0), "safety_net")
    assert (s.cash, s.investments, s.credit_score, s.stress) == (5000, 2000, 700, 20)
    assert s.net_worth == 7000


def test_goal_sets_risk_only():
    base = default_start_state("p", 0)
    s = apply_goal(base, "freedom")
    assert s.risk_level == 35
    assert s.cash == base.cash
