"""
JSON extraction and repair for model output.

Models asked for JSON still wrap it in code fences or surround it with
prose. Extraction tries, in order:

1. the whole text
2. the interior of a ```json fenced block
3. the span from the first "{" to the last "}"

and falls back to a fixed consultation summary if nothing parses.
Everything here is pure: text in, dict or AnalysisResult out.
"""

import json
import re
from copy import deepcopy
from typing import Any

import structlog
from pydantic import ValidationError

from app.services.ai.errors import OutputParseError
from app.services.ai.schemas import AnalysisResult

logger = structlog.get_logger()

FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
BRACE_SPAN_RE = re.compile(r"\{[\s\S]*\}")

DEFAULT_NEXT_ACTION = "Seek legal counsel immediately"

FALLBACK_ANALYSIS: dict[str, Any] = {
    "situation": "Unable to analyze situation automatically",
    "relevantLaws": ["Please consult with a legal professional"],
    "recommendedSteps": [
        "Contact PAO (Public Attorney's Office) at (02) 8426-2075",
        "Visit your local barangay hall",
        "Gather all relevant documents",
    ],
    "watchOutFor": [
        "Ensure all claims are documented with evidence",
        "Be aware of prescription periods for filing cases",
    ],
    "contacts": {
        "pao": "PAO: (02) 8426-2075",
        "barangay": "Local Barangay Hall",
        "pnp": "PNP Emergency: 911",
        "dswd": "DSWD Hotline: 1343",
    },
    "nextAction": "Seek immediate legal counsel from PAO",
}


def fallback_analysis() -> dict[str, Any]:
    """Fresh copy of the fallback summary."""
    return deepcopy(FALLBACK_ANALYSIS)


def _loads_object(candidate: str) -> dict[str, Any]:
    try:
        parsed = json.loads(candidate)
    except (json.JSONDecodeError, TypeError) as e:
        raise OutputParseError(str(e)) from e
    if not isinstance(parsed, dict):
        raise OutputParseError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a JSON object out of free-form model output.

    Raises:
        OutputParseError: If no stage yields a JSON object
    """
    raw = (text or "").strip()
    if not raw:
        raise OutputParseError("Model returned empty output")

    try:
        return _loads_object(raw)
    except OutputParseError:
        pass

    fenced = FENCED_BLOCK_RE.search(raw)
    if fenced:
        try:
            return _loads_object(fenced.group(1).strip())
        except OutputParseError:
            pass

    span = BRACE_SPAN_RE.search(raw)
    if span:
        return _loads_object(span.group(0))

    raise OutputParseError("Could not extract a JSON object from model output")


def normalize_next_action(value: Any) -> Any:
    """Flatten a {"step", "timeline"} object into one line of text."""
    if not isinstance(value, dict):
        return value

    step = str(value.get("step") or "").strip()
    timeline = str(value.get("timeline") or "").strip()

    if step and timeline:
        return f"{step} (Timeline: {timeline})"
    if step:
        return step
    return DEFAULT_NEXT_ACTION


def extract_json(text: str) -> dict[str, Any]:
    """Extract and normalize a JSON object, or return the fallback summary.

    Never raises.
    """
    try:
        parsed = parse_json_object(text)
    except OutputParseError as e:
        logger.warning(
            "ai_output_parse_failed",
            error=str(e),
            preview=(text or "")[:200],
        )
        return fallback_analysis()

    if "nextAction" in parsed:
        parsed["nextAction"] = normalize_next_action(parsed["nextAction"])
    return parsed


def to_analysis_result(data: dict[str, Any]) -> AnalysisResult:
    """Validate extracted data, degrading to the fallback on bad shapes."""
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        logger.warning("ai_output_invalid_shape", error=str(e))
        return AnalysisResult.model_validate(fallback_analysis())


def parse_analysis(text: str) -> AnalysisResult:
    return to_analysis_result(extract_json(text))
