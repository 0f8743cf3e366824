"""engine.session

Session store: the one place that holds a mutable reference to the game state.

Everything it calls is pure; it only threads the current state through the
pipeline and keeps the run log.
"""

from __future__ import annotations

import logging
import random
import string
import time
from dataclasses import replace
from typing import Any, Dict, List, Optional

from content.catalog import Catalog, chapter_for_decision, decision_at, find_decision, load_catalog
from content.schemas import DecisionSpec
from core.finance import total_debt
from core.profiles import apply_goal, apply_profile
from core.state import Badge, GameState, default_start_state

from .config import EngineConfig
from .logging import loads_run_export, make_run_export, parse_run_export
from .pipeline import apply_choice, undo_last_choice
from .results import Takeaway, generate_takeaways

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_session_id() -> str:
    """'<epoch ms>-<7 base36 chars>'. Only the market seed depends on it."""
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(7))
    return f"{int(time.time() * 1000)}-{suffix}"


def new_game_state(config: EngineConfig, session_id: Optional[str] = None, started_at: Optional[int] = None) -> GameState:
    sid = session_id or new_session_id()
    ts = int(time.time() * 1000) if started_at is None else int(started_at)
    state = default_start_state(sid, ts)
    state = apply_profile(state, config.profile_key)
    return apply_goal(state, config.goal_key)


class GameSession:
    """Orchestrates one playthrough over a catalog."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        catalog: Optional[Catalog] = None,
        session_id: Optional[str] = None,
        started_at: Optional[int] = None,
    ) -> None:
        self.catalog = catalog or load_catalog()
        self.config = config or EngineConfig()
        self.initial_state = new_game_state(self.config, session_id, started_at)
        self.state = self.initial_state
        self.logs: List[Dict[str, Any]] = []

    # -------------------------
    # Lifecycle
    # -------------------------

    def start(self, profile_key: str, goal_key: str, educator_mode: bool = False, session_id: Optional[str] = None) -> GameState:
        self.config = replace(self.config, profile_key=str(profile_key), goal_key=str(goal_key), educator_mode=bool(educator_mode))
        self.initial_state = new_game_state(self.config, session_id)
        self.state = self.initial_state
        self.logs = []
        logger.info("session %s started (profile=%s goal=%s)", self.state.session_id, profile_key, goal_key)
        return self.state

    def reset(self) -> GameState:
        """Fresh session (new id) with the same config."""
        return self.start(self.config.profile_key, self.config.goal_key, self.config.educator_mode)

    # -------------------------
    # Actions
    # -------------------------

    def make_choice(self, decision_id: str, choice_id: str) -> List[Badge]:
        """Apply a choice; returns the badges it unlocked.

        Raises ValueError for unknown ids or a completed session (state untouched).
        """
        if self.state.completed:
            raise ValueError("session already completed")
        decision = find_decision(self.catalog, decision_id)
        expected = decision_at(self.catalog, self.state.current_decision)
        if not self.config.educator_mode and expected is not None and expected.id != decision.id:
            logger.warning(
                "session %s answered %s at decision %d (expected %s)",
                self.state.session_id, decision.id, self.state.current_decision, expected.id,
            )
        new_state, log = apply_choice(
            state=self.state,
            decision=decision,
            choice_id=choice_id,
            config=self.config,
            total_decisions=len(self.catalog),
        )
        unlocked_ids = set(log["badges_unlocked"])
        self.state = new_state
        self.logs.append(log)
        return [b for b in new_state.badges if b.id in unlocked_ids]

    def undo_last_choice(self) -> bool:
        prev = undo_last_choice(self.state)
        if prev is None:
            return False
        self.state = prev
        if self.logs:
            self.logs.pop()
        return True

    def go_to_decision(self, index: int) -> bool:
        """Educator mode: revisit an already reached decision (no state rollback)."""
        if not self.config.educator_mode:
            return False
        if not 0 <= int(index) < len(self.catalog):
            return False
        if int(index) > self.state.current_decision:
            return False
        self.state = replace(self.state, current_decision=int(index))
        return True

    # -------------------------
    # Selectors
    # -------------------------

    def current_decision(self) -> Optional[DecisionSpec]:
        return decision_at(self.catalog, self.state.current_decision)

    def progress(self) -> float:
        return self.state.current_decision / len(self.catalog) * 100

    def chapter(self) -> int:
        return chapter_for_decision(self.state.current_decision)

    def total_debt(self) -> float:
        return total_debt(self.state.debt)

    def monthly_cash_flow(self) -> float:
        return self.state.monthly_income - self.state.monthly_expenses

    def unlocked_badges(self) -> List[Badge]:
        return [b for b in self.state.badges if b.unlocked]

    def takeaways(self) -> List[Takeaway]:
        return generate_takeaways(self.state, self.config.profile_key)

    # -------------------------
    # Save / resume
    # -------------------------

    def export(self) -> Dict[str, Any]:
        return make_run_export(
            config=self.config,
            initial_state=self.initial_state,
            state=self.state,
            decision_logs=self.logs,
        )

    @classmethod
    def from_export(cls, data: Dict[str, Any], *, catalog: Optional[Catalog] = None) -> "GameSession":
        """Resume from make_run_export() output. Raises ValueError."""
        return cls._resume(*parse_run_export(data), catalog=catalog)

    @classmethod
    def from_export_text(cls, text: str, *, catalog: Optional[Catalog] = None) -> "GameSession":
        """Resume from a downloaded run file. Raises ValueError."""
        return cls._resume(*loads_run_export(text), catalog=catalog)

    @classmethod
    def _resume(
        cls,
        cfg: EngineConfig,
        initial: GameState,
        state: GameState,
        logs: List[Dict[str, Any]],
        *,
        catalog: Optional[Catalog] = None,
    ) -> "GameSession":
        session = cls(cfg, catalog=catalog, session_id=state.session_id, started_at=state.started_at)
        session.initial_state = initial
        session.state = state
        session.logs = logs
        return session
