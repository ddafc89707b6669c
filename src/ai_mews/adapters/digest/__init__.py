"""Post writers."""

from ai_mews.adapters.digest.markdown_post import MarkdownPostPublisher

__all__ = ["MarkdownPostPublisher"]
