"""Article extraction adapters."""

from ai_mews.adapters.extract.readability_extractor import ReadabilityExtractor

__all__ = ["ReadabilityExtractor"]
