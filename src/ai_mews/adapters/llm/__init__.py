"""LLM adapters."""

from ai_mews.adapters.llm.openai_client import OpenAISummarizer

__all__ = ["OpenAISummarizer"]
