"""content.schemas

Contracts for the Decision Catalog:
- ChoiceSpec: one option, carrying an engine-ready Effects bundle.
- DecisionSpec: a scenario with exactly 3 choices.
- ChapterSpec: chapter display metadata.

Design choice:
The catalog is read-only data. Parsing is strict (unknown effect fields are an
error) so a typo in the data can never silently skip an effect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from core.effects import Effects, effects_from_mapping, effects_to_dict

CHAPTER_COUNT = 5
DECISIONS_PER_CHAPTER = 6
CHOICES_PER_DECISION = 3
MAX_EXPLANATION_CHARS = 400

ALLOWED_CONCEPT_TAGS = {
    "Compound Interest",
    "Inflation",
    "Opportunity Cost",
    "Risk-Return",
    "Diversification",
    "APR vs APY",
    "Minimum Payments",
    "Credit Utilization",
    "Emergency Fund",
    "Insurance",
    "Taxes",
    "Lifestyle Inflation",
    "Present Bias",
    "Loss Aversion",
    "Unemployment",
    "Recession",
    "Budgeting",
    "Debt Management",
    "Investment Growth",
    "Credit Score",
}


def normalize_tags(tags: Any) -> List[str]:
    if tags is None:
        return []
    if isinstance(tags, str):
        return [t.strip() for t in tags.split(",") if t.strip()]
    return [str(t).strip() for t in list(tags) if str(t or "").strip()]


@dataclass(frozen=True)
class ChoiceSpec:
    id: str
    label: str
    short_tradeoff: str
    effects: Effects
    explanation: str
    hidden_cost: str = ""
    educator_note: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "short_tradeoff": self.short_tradeoff,
            "effects": effects_to_dict(self.effects),
            "explanation": self.explanation,
        }
        if self.hidden_cost:
            out["hidden_cost"] = self.hidden_cost
        if self.educator_note:
            out["educator_note"] = self.educator_note
        return out


@dataclass(frozen=True)
class DecisionSpec:
    id: str
    chapter: int
    title: str
    scenario_text: str
    concept_tags: List[str]
    why_it_matters: str
    choices: List[ChoiceSpec]
    bias_nudge: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "chapter": int(self.chapter),
            "title": self.title,
            "scenario_text": self.scenario_text,
            "concept_tags": list(self.concept_tags),
            "why_it_matters": self.why_it_matters,
            "choices": [c.to_dict() for c in self.choices],
        }
        if self.bias_nudge:
            out["bias_nudge"] = self.bias_nudge
        return out


@dataclass(frozen=True)
class ChapterSpec:
    number: int
    title: str
    description: str
    decisions: List[int] = field(default_factory=list)  # 0-based decision indices


# =========================
# Parsing
# =========================


def choice_from_mapping(obj: Mapping[str, Any]) -> ChoiceSpec:
    cid = str(obj.get("id") or "").strip()
    try:
        effects = effects_from_mapping(dict(obj.get("effects") or {}))
    except ValueError as e:
        raise ValueError(f"choice {cid or '?'}: {e}") from e
    return ChoiceSpec(
        id=cid,
        label=str(obj.get("label") or "").strip(),
        short_tradeoff=str(obj.get("short_tradeoff") or "").strip(),
        effects=effects,
        explanation=str(obj.get("explanation") or "").strip(),
        hidden_cost=str(obj.get("hidden_cost") or "").strip(),
        educator_note=str(obj.get("educator_note") or "").strip(),
    )


def decision_from_mapping(obj: Mapping[str, Any]) -> DecisionSpec:
    """Parse and validate one decision record."""
    raw_choices = obj.get("choices")
    if not isinstance(raw_choices, list):
        raise ValueError(f"decision {obj.get('id')!r}: choices must be a list")
    try:
        chapter = int(obj.get("chapter") or 0)
    except (TypeError, ValueError) as e:
        raise ValueError(f"decision {obj.get('id')!r}: chapter must be an int") from e

    d = DecisionSpec(
        id=str(obj.get("id") or "").strip(),
        chapter=chapter,
        title=str(obj.get("title") or "").strip(),
        scenario_text=str(obj.get("scenario_text") or "").strip(),
        concept_tags=normalize_tags(obj.get("concept_tags")),
        why_it_matters=str(obj.get("why_it_matters") or "").strip(),
        choices=[choice_from_mapping(c) for c in raw_choices if isinstance(c, dict)],
        bias_nudge=str(obj.get("bias_nudge") or "").strip(),
    )
    validate_decision(d)
    return d


def chapter_from_mapping(obj: Mapping[str, Any]) -> ChapterSpec:
    number = int(obj.get("number") or 0)
    start = (number - 1) * DECISIONS_PER_CHAPTER
    return ChapterSpec(
        number=number,
        title=str(obj.get("title") or f"Chapter {number}").strip(),
        description=str(obj.get("description") or "").strip(),
        decisions=list(range(start, start + DECISIONS_PER_CHAPTER)),
    )


# =========================
# Validation
# =========================


def validate_decision(d: DecisionSpec) -> None:
    if not d.id:
        raise ValueError("decision.id is required")
    if not 1 <= d.chapter <= CHAPTER_COUNT:
        raise ValueError(f"decision {d.id}: chapter must be 1..{CHAPTER_COUNT}")
    if len(d.title) < 3:
        raise ValueError(f"decision {d.id}: title too short")
    if not d.scenario_text:
        raise ValueError(f"decision {d.id}: scenario_text is required")
    bad_tags = [t for t in d.concept_tags if t not in ALLOWED_CONCEPT_TAGS]
    if bad_tags:
        raise ValueError(f"decision {d.id}: unknown concept tag(s) {bad_tags}")

    if len(d.choices) != CHOICES_PER_DECISION:
        raise ValueError(f"decision {d.id}: must have exactly {CHOICES_PER_DECISION} choices")
    ids = [c.id for c in d.choices]
    if len(set(ids)) != len(ids) or not all(ids):
        raise ValueError(f"decision {d.id}: choice ids must be unique and non-empty")

    for c in d.choices:
        if len(c.label) < 3:
            raise ValueError(f"choice {c.id}: label too short")
        if not c.explanation:
            raise ValueError(f"choice {c.id}: explanation is required")
        if len(c.explanation) > MAX_EXPLANATION_CHARS:
            raise ValueError(f"choice {c.id}: explanation too long (>{MAX_EXPLANATION_CHARS} chars)")


def validate_catalog(decisions: Sequence[DecisionSpec]) -> None:
    """Whole-catalog shape: 5 chapters x 6 decisions, in order, unique ids."""
    expected = CHAPTER_COUNT * DECISIONS_PER_CHAPTER
    if len(decisions) != expected:
        raise ValueError(f"catalog must have {expected} decisions, got {len(decisions)}")

    ids = [d.id for d in decisions]
    if len(set(ids)) != len(ids):
        raise ValueError("decision ids must be unique")

    choice_ids = [c.id for d in decisions for c in d.choices]
    if len(set(choice_ids)) != len(choice_ids):
        raise ValueError("choice ids must be unique across the catalog")

    for i, d in enumerate(decisions):
        want = i // DECISIONS_PER_CHAPTER + 1
        if d.chapter != want:
            raise ValueError(f"decision {d.id} at index {i} must be in chapter {want}, not {d.chapter}")

    return None
