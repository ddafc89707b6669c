"""Search provider adapters."""

from ai_mews.adapters.search.brave_client import BraveSearchClient

__all__ = ["BraveSearchClient"]
