"""engine.sim_runner

Headless runner for quick sanity checks.

This keeps tests deterministic and CI-friendly: fixed session id, fixed
choice policy, no UI.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from content.catalog import Catalog
from content.schemas import ChoiceSpec, DecisionSpec

from .config import EngineConfig
from .session import GameSession

ChoicePolicy = Callable[[DecisionSpec], ChoiceSpec]


def pick_index(i: int) -> ChoicePolicy:
    """Always take the i-th choice."""
    return lambda d: d.choices[i]


def prefer_long_term(d: DecisionSpec) -> ChoiceSpec:
    """First choice flagged long-term, else the first choice."""
    return next((c for c in d.choices if c.effects.long_term_choice), d.choices[0])


POLICIES: Dict[str, ChoicePolicy] = {
    "first": pick_index(0),
    "second": pick_index(1),
    "third": pick_index(2),
    "long_term": prefer_long_term,
}


def run_headless_sim(
    policy: str = "long_term",
    *,
    session_id: str = "headless-run",
    config: Optional[EngineConfig] = None,
    catalog: Optional[Catalog] = None,
    max_decisions: Optional[int] = None,
) -> Dict[str, Any]:
    """Play a whole season deterministically and return a summary.

    Raises ValueError for a policy name not in POLICIES.
    """
    if policy not in POLICIES:
        raise ValueError(f"unknown policy {policy!r}; expected one of {sorted(POLICIES)}")
    choose = POLICIES[policy]
    session = GameSession(config or EngineConfig(), catalog=catalog, session_id=session_id, started_at=0)

    unlocked: List[str] = []
    while not session.state.completed:
        if max_decisions is not None and len(session.logs) >= max_decisions:
            break
        decision = session.current_decision()
        if decision is None:
            break
        choice = choose(decision)
        unlocked.extend(b.id for b in session.make_choice(decision.id, choice.id))

    return {
        "policy": policy,
        "decisions": len(session.logs),
        "final": session.state,
        "badges_unlocked": unlocked,
        "takeaways": session.takeaways(),
        "logs": session.logs,
    }
