"""Generative model adapters."""

from feed_briefing.adapters.llm.gemini_client import GeminiClient

__all__ = ["GeminiClient"]
