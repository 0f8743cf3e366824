"""engine.logging

Helpers for storing run logs.

A run export is JSON-serializable so it can be downloaded and loaded back to
resume a session.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Tuple

from core.state import GameState, state_from_mapping, state_to_dict

from .config import EngineConfig, config_from_mapping, config_to_dict

EXPORT_VERSION = 1


def make_run_export(
    *,
    config: EngineConfig,
    initial_state: GameState,
    state: GameState,
    decision_logs: List[Dict[str, Any]],
) -> Dict[str, Any]:
    return {
        "version": EXPORT_VERSION,
        "session_id": state.session_id,
        "config": config_to_dict(config),
        "initial_state": state_to_dict(initial_state),
        "state": state_to_dict(state),
        "decision_logs": list(decision_logs),
    }


def dumps_run_export(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)


def parse_run_export(
    data: Mapping[str, Any],
) -> Tuple[EngineConfig, GameState, GameState, List[Dict[str, Any]]]:
    """Return (config, initial_state, state, decision_logs). Raises ValueError."""
    if not isinstance(data, Mapping):
        raise ValueError("run export must be a JSON object")
    try:
        version = int(data.get("version", 0))
    except (TypeError, ValueError):
        version = None
    if version != EXPORT_VERSION:
        raise ValueError(f"unsupported run export version: {data.get('version')!r}")
    if "state" not in data or "initial_state" not in data:
        raise ValueError("run export is missing state")
    initial = state_from_mapping(data["initial_state"])
    state = state_from_mapping(data["state"])
    try:
        cfg = config_from_mapping(dict(data.get("config") or {}))
        logs = [dict(x) for x in list(data.get("decision_logs") or [])]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid run export: {e}") from e
    return cfg, initial, state, logs


def loads_run_export(text: str) -> Tuple[EngineConfig, GameState, GameState, List[Dict[str, Any]]]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"run export is not valid JSON: {e}") from e
    return parse_run_export(data)
