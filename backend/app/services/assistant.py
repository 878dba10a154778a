"""
Legal Assistant Service

Caller-facing boundary over the AI gateway for the call UI:
- live chat replies with a time budget and localized fallbacks
- in-call analysis and end-of-session summaries
- transcript formatting for summary prompts

Provider calls are shielded when the time budget runs out: the in-flight
request is abandoned and its late result discarded, not cancelled.
"""

import asyncio
from collections.abc import Awaitable, Iterable, Mapping
from typing import Any, TypeVar

import structlog

from app.core.config import Settings, get_settings
from app.core.logging import bind_session_context
from app.services.ai.errors import AIRequestTimeoutError
from app.services.ai.gateway import AIGateway
from app.services.ai.schemas import AnalysisResult

logger = structlog.get_logger()

T = TypeVar("T")

INVALID_MESSAGE_REPLY = "Sorry, I didn't receive your message properly. Please try again."
AI_ERROR_REPLY = "Pasensya na, may problema sa AI. Maaari mo bang ulitin?"


def format_transcript(entries: Iterable[Mapping[str, Any]]) -> str:
    """Join saved transcript records into "Speaker: text" lines.

    Records without text are skipped; a missing speaker becomes "User".
    """
    lines = []
    for entry in entries:
        text = str(entry.get("text") or "").strip()
        if not text:
            continue
        speaker = str(entry.get("speaker") or "User").strip()
        lines.append(f"{speaker}: {text}")
    return "\n".join(lines)


def _discard_result(task: asyncio.Future) -> None:
    # Retrieve the outcome of an abandoned call so it is never reported as unhandled
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.info("ai_abandoned_request_failed", error=str(error))


class LegalAssistant:
    """AI consultation features for one process, backed by a shared gateway."""

    def __init__(self, gateway: AIGateway, settings: Settings | None = None):
        self.gateway = gateway
        self.settings = settings or get_settings()

    @property
    def timeout_seconds(self) -> float:
        return self.settings.ai_request_timeout_seconds

    async def _with_timeout(self, awaitable: Awaitable[T]) -> T:
        task = asyncio.ensure_future(awaitable)
        try:
            return await asyncio.wait_for(asyncio.shield(task), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.warning("ai_request_timeout", timeout_s=self.timeout_seconds)
            raise AIRequestTimeoutError(self.timeout_seconds) from e
        finally:
            # Timed out or cancelled by the caller: the call keeps running unobserved
            if not task.done():
                task.add_done_callback(_discard_result)

    async def chat(self, message: Any, context: str | None = None) -> str:
        """Reply to one spoken/typed user message. Never raises."""
        if not message or not isinstance(message, str) or not message.strip():
            logger.warning("ai_chat_invalid_message", message_type=type(message).__name__)
            return INVALID_MESSAGE_REPLY

        logger.info(
            "ai_chat_request",
            message_len=len(message),
            context_preview=(context or "")[:100],
        )

        try:
            reply = await self._with_timeout(self.gateway.generate_reply(message, context or ""))
        except AIRequestTimeoutError:
            return AI_ERROR_REPLY
        except Exception:
            logger.exception("ai_chat_error")
            return AI_ERROR_REPLY

        logger.info("ai_chat_response", response_len=len(reply))
        return reply

    async def analyze(self, transcript: str, category: str | None = None) -> AnalysisResult:
        """Quick in-call analysis. Raises when no provider can answer."""
        category = category or self.settings.default_category
        return await self._with_timeout(self.gateway.analyze_situation(transcript, category))

    async def summarize_session(
        self,
        transcript: str | Iterable[Mapping[str, Any]],
        category: str | None = None,
        session_id: str | None = None,
    ) -> AnalysisResult:
        """Comprehensive end-of-session summary.

        Args:
            transcript: Full transcript text, or saved transcript records
            category: Legal category chosen when the session started
            session_id: Call session, attached to log lines

        Raises:
            AIRequestTimeoutError: If the time budget ran out
            AIServiceError: If no provider could produce a summary
        """
        category = category or self.settings.default_category
        with bind_session_context(session_id=session_id, category=category):
            full_text = transcript if isinstance(transcript, str) else format_transcript(transcript)
            result = await self._with_timeout(self.gateway.generate_structured_summary(full_text, category))

            logger.info("ai_session_summarized", laws=len(result.relevant_laws), steps=len(result.recommended_steps))
        return result
