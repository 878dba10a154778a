"""
AI service data models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_WATCH_OUT_FOR = [
    "Document all interactions and keep copies of all documents",
    "Be aware of deadlines and prescription periods",
    "Seek legal advice if situation escalates",
]


class GenerationMode(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class GenerationParams:
    """Model parameters for one kind of request."""

    mode: GenerationMode
    temperature: float
    max_tokens: int


SUMMARY_PARAMS = GenerationParams(GenerationMode.JSON, temperature=0.7, max_tokens=3000)
ANALYSIS_PARAMS = GenerationParams(GenerationMode.JSON, temperature=0.7, max_tokens=2000)
REPLY_PARAMS = GenerationParams(GenerationMode.TEXT, temperature=0.7, max_tokens=300)


class AnalysisResult(BaseModel):
    """Structured legal consultation output.

    Serialized with camelCase keys (situation, relevantLaws, recommendedSteps,
    watchOutFor, contacts, nextAction).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    situation: str = ""
    relevant_laws: list[str] = Field(default_factory=list)
    recommended_steps: list[str] = Field(default_factory=list)
    watch_out_for: list[str] = Field(default_factory=lambda: list(DEFAULT_WATCH_OUT_FOR))
    contacts: dict[str, str] = Field(default_factory=dict)
    next_action: str = ""

    @field_validator("situation", "next_action", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return " ".join(str(item) for item in v)
        return str(v)

    @field_validator("relevant_laws", "recommended_steps", "watch_out_for", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list[str]:
        """Models sometimes return a single string where a list is expected."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, (list, tuple)):
            return [_item_text(item) for item in v if item is not None]
        return [str(v)]

    @field_validator("contacts", mode="before")
    @classmethod
    def coerce_contacts(cls, v: Any) -> dict[str, str]:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(k): _item_text(val) for k, val in v.items()}
        if isinstance(v, (list, tuple)):
            return {str(i): _item_text(item) for i, item in enumerate(v, start=1)}
        return {"info": str(v)}

    def to_record(self) -> dict[str, Any]:
        """Plain dict with camelCase keys, ready for persistence."""
        return self.model_dump(by_alias=True)


def _item_text(item: Any) -> str:
    if isinstance(item, dict):
        # e.g. {"law": "RA 9262", "description": "..."}
        return " - ".join(str(v) for v in item.values() if v not in (None, ""))
    return str(item)


class ProviderStatus(BaseModel):
    """Diagnostic snapshot of one provider."""

    key: str
    display_name: str
    enabled: bool
    available: bool
    priority: int
    model: str | None = None
    last_error: str | None = None
    cooldown_remaining_seconds: float = 0.0
