"""Gemini API client for report generation and grounded chat."""

import logging
from typing import Any, Sequence

import httpx

from feed_briefing.config import Settings
from feed_briefing.core import (
    ChatMessage,
    ChatResponse,
    ContentItem,
    DeliveryChannels,
    EmptyResponseError,
    GeneratedReport,
    ModelGateway,
    ReportPreferences,
    ResponseValidationError,
    TransportError,
    UserProfile,
)
from feed_briefing.core.entities import CHAT_MODE, REPORT_MODE
from feed_briefing.core.payloads import build_chat_payload, build_report_payload, serialize_payload
from feed_briefing.core.schemas import CHAT_RESPONSE_SCHEMA, REPORT_RESPONSE_SCHEMA
from feed_briefing.core.validator import parse_chat_response, parse_report

logger = logging.getLogger(__name__)


class GeminiClient(ModelGateway):
    """Gemini API client implementation.

    Each operation makes exactly one ``generateContent`` call. Failures are
    raised to the caller as-is; nothing is retried.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.temperature = settings.gemini_temperature
        self.timeout = settings.gemini_timeout
        self.base_url = settings.gemini.base_url.rstrip("/")
        self.system_instruction = settings.system_instruction

    async def generate_report(
        self,
        profile: UserProfile,
        preferences: ReportPreferences,
        channels: DeliveryChannels,
        items: Sequence[ContentItem],
    ) -> GeneratedReport:
        """Generate a structured report from the given items."""
        payload = build_report_payload(profile, preferences, channels, items)

        logger.info("Requesting report for %d content items", len(items), extra={"mode": REPORT_MODE})
        text = await self._call_api(serialize_payload(payload), REPORT_RESPONSE_SCHEMA)

        try:
            report = parse_report(text, items)
        except ResponseValidationError as e:
            logger.warning("Rejected report response: %s", e, extra={"mode": REPORT_MODE, "field": e.field})
            raise

        logger.info("Report %r generated with %d sections", report.report_id, len(report.sections))
        return report

    async def chat(
        self,
        query: str,
        history: Sequence[ChatMessage],
        profile: UserProfile,
        items: Sequence[ContentItem],
    ) -> ChatResponse:
        """Answer a chat message using all items as context."""
        payload = build_chat_payload(query, history, profile, items)

        logger.info(
            "Sending chat turn (%d prior turns, %d snippets)",
            len(history), len(items), extra={"mode": CHAT_MODE},
        )
        text = await self._call_api(serialize_payload(payload), CHAT_RESPONSE_SCHEMA)

        try:
            # The chat payload does not expose any reports yet
            return parse_chat_response(text, items, known_report_ids=())
        except ResponseValidationError as e:
            logger.warning("Rejected chat response: %s", e, extra={"mode": CHAT_MODE, "field": e.field})
            raise

    async def _call_api(self, contents: str, response_schema: dict[str, Any]) -> str:
        """Call the Gemini API once and return the response text."""
        if not self.api_key:
            raise TransportError("GEMINI_API_KEY is not set")

        body = {
            "systemInstruction": {"parts": [{"text": self.system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": contents}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
                "temperature": self.temperature,
            },
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    headers={
                        "x-goog-api-key": self.api_key,
                        "content-type": "application/json",
                    },
                    json=body,
                )
        except httpx.RequestError as e:
            logger.error("Network error calling Gemini: %s", e)
            raise TransportError(f"Request to Gemini failed: {e}") from e

        if response.status_code != 200:
            message = self._error_message(response)
            logger.error("Gemini returned HTTP %d: %s", response.status_code, message)
            raise TransportError(
                f"Gemini returned HTTP {response.status_code}: {message}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError("Gemini returned a body that is not JSON", status_code=200) from e

        text = self._extract_text(data)
        if not text.strip():
            feedback = data.get("promptFeedback")
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            raise EmptyResponseError(
                f"No response text from Gemini (blocked: {reason})" if reason
                else "No response text from Gemini"
            )
        return text

    def _extract_text(self, data: Any) -> str:
        """Concatenate the text parts of the first candidate."""
        if not isinstance(data, dict):
            raise TransportError("Gemini returned an unexpected response body", status_code=200)
        candidates = data.get("candidates") or []
        if not isinstance(candidates, list):
            raise TransportError("Gemini returned malformed candidates", status_code=200)
        if not candidates:
            return ""

        candidate = candidates[0]
        content = (candidate.get("content") or {}) if isinstance(candidate, dict) else None
        parts = (content.get("parts") or []) if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise TransportError("Gemini returned a malformed candidate", status_code=200)
        return "".join(
            part.get("text") or "" for part in parts
            if isinstance(part, dict) and isinstance(part.get("text", ""), str)
        )

    def _error_message(self, response: httpx.Response) -> str:
        """Pull the error message out of an error response."""
        try:
            return str(response.json()["error"]["message"])
        except (ValueError, KeyError, TypeError):
            return response.text[:200]
