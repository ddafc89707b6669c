"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

from ai_mews.core.entities import Article, DigestDocument, Item, SearchHit


class SearchClient(ABC):
    """Interface for the web search provider."""

    @abstractmethod
    async def search(self, query: str) -> list[SearchHit]:
        """Run a query and return raw hits in provider order."""
        pass


class ArticleExtractor(ABC):
    """Interface for turning a URL into readable text."""

    @abstractmethod
    async def extract(self, url: str) -> Article:
        """Fetch the page and return its article text."""
        pass


class Summarizer(ABC):
    """Interface for LLM summarization."""

    @abstractmethod
    async def summarize(self, source_url: str, title: str, text: str) -> Item:
        """Summarize article text into an Item."""
        pass


class PostPublisher(ABC):
    """Interface for the document store."""

    @abstractmethod
    def exists(self, date_key: date) -> bool:
        """Check whether a document for the date was already written."""
        pass

    @abstractmethod
    def publish(self, document: DigestDocument, overwrite: bool = False) -> Path:
        """Persist the document and return where it was written."""
        pass


class DigestNotifier(ABC):
    """Interface for sending the digest to a channel."""

    @abstractmethod
    async def send_digest(self, document: DigestDocument) -> None:
        """Send a condensed digest of the document."""
        pass
