"""engine.config

Engine configuration chosen at session start.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

DEFAULT_INFLATION_SHOCK_DECISION = 24  # first decision of chapter 5


@dataclass(frozen=True)
class EngineConfig:
    profile_key: str = "scratch"
    goal_key: str = "stability"
    educator_mode: bool = False
    inflation_shock_decision: int = DEFAULT_INFLATION_SHOCK_DECISION


def config_to_dict(cfg: EngineConfig) -> Dict[str, Any]:
    return asdict(cfg)


def config_from_mapping(d: Mapping[str, Any]) -> EngineConfig:
    return EngineConfig(
        profile_key=str(d.get("profile_key", "scratch")),
        goal_key=str(d.get("goal_key", "stability")),
        educator_mode=bool(d.get("educator_mode", False)),
        inflation_shock_decision=int(d.get("inflation_shock_decision", DEFAULT_INFLATION_SHOCK_DECISION)),
    )
