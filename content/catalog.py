"""content.catalog

Loading and lookup over the Decision Catalog.

The catalog ships as content/data/decisions.json and is treated as read-only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from .schemas import (
    CHAPTER_COUNT,
    DECISIONS_PER_CHAPTER,
    ChapterSpec,
    ChoiceSpec,
    DecisionSpec,
    chapter_from_mapping,
    decision_from_mapping,
    validate_catalog,
)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "decisions.json"


@dataclass(frozen=True)
class Catalog:
    decisions: List[DecisionSpec]
    chapters: List[ChapterSpec]

    def __len__(self) -> int:
        return len(self.decisions)


def parse_catalog(data: dict) -> Catalog:
    """Build and validate a Catalog from its JSON object."""
    raw = data.get("decisions")
    if not isinstance(raw, list):
        raise ValueError("catalog JSON must contain a 'decisions' list")
    decisions = [decision_from_mapping(d) for d in raw]
    validate_catalog(decisions)

    chapters = [chapter_from_mapping(c) for c in list(data.get("chapters") or [])]
    if not chapters:
        chapters = [chapter_from_mapping({"number": n}) for n in range(1, CHAPTER_COUNT + 1)]
    if [c.number for c in chapters] != list(range(1, CHAPTER_COUNT + 1)):
        raise ValueError(f"catalog chapters must be numbered 1..{CHAPTER_COUNT}")
    return Catalog(decisions=decisions, chapters=chapters)


@lru_cache(maxsize=1)
def _default_catalog() -> Catalog:
    return load_catalog(DEFAULT_CATALOG_PATH)


def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """Load the catalog from `path`, or the packaged one (cached) when omitted."""
    if path is None:
        return _default_catalog()
    with open(path, "r", encoding="utf-8") as f:
        return parse_catalog(json.load(f))


# -------------------------
# Lookup
# -------------------------


def find_decision(catalog: Catalog, decision_id: str) -> DecisionSpec:
    d = next((x for x in catalog.decisions if x.id == str(decision_id)), None)
    if d is None:
        raise ValueError(f"Unknown decision_id: {decision_id}")
    return d


def find_choice(decision: DecisionSpec, choice_id: str) -> ChoiceSpec:
    c = next((x for x in decision.choices if x.id == str(choice_id)), None)
    if c is None:
        raise ValueError(f"Unknown choice_id: {choice_id} (decision {decision.id})")
    return c


def decision_at(catalog: Catalog, index: int) -> Optional[DecisionSpec]:
    """Decision at a 0-based index, or None past the end."""
    if 0 <= int(index) < len(catalog.decisions):
        return catalog.decisions[int(index)]
    return None


# -------------------------
# Chapter math
# -------------------------


def chapter_for_decision(index: int) -> int:
    """1-based chapter of a 0-based decision index."""
    return int(index) // DECISIONS_PER_CHAPTER + 1


def is_chapter_boundary(index: int) -> bool:
    """True when `index` is the first decision of a chapter after the first."""
    return int(index) > 0 and int(index) % DECISIONS_PER_CHAPTER == 0


def chapter_info(catalog: Catalog, number: int) -> Optional[ChapterSpec]:
    return next((c for c in catalog.chapters if c.number == int(number)), None)
