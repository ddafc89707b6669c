"""Readable-text extraction for article pages."""

import re

import httpx
from bs4 import BeautifulSoup
from readability import Document

from ai_mews.config import ExtractionConfig
from ai_mews.core import Article, ArticleExtractor, ExtractionError, FetchError


class ReadabilityExtractor(ArticleExtractor):
    """Fetch a page and keep only its main article text."""

    def __init__(self, config: ExtractionConfig) -> None:
        self.config = config

    async def extract(self, url: str) -> Article:
        """Fetch URL and return truncated readable text."""
        html = await self._fetch(url)
        title, text = self._readable_text(html, url)

        if len(text) < self.config.min_chars:
            raise ExtractionError(
                f"No readable article text ({len(text)} chars) at {url}", url=url
            )

        return Article(url=url, title=title, text=text[: self.config.max_chars])

    async def _fetch(self, url: str) -> str:
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml",
        }
        async with httpx.AsyncClient(timeout=self.config.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(url, headers=headers)
            except httpx.RequestError as e:
                raise FetchError(f"Fetch failed: {e} {url}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise FetchError(
                f"Fetch failed: {response.status_code} {url}",
                url=url,
                status_code=response.status_code,
            )
        return response.text

    def _readable_text(self, html: str, url: str) -> tuple[str, str]:
        """Strip navigation and boilerplate, returning (title, text)."""
        if not html or not html.strip():
            raise ExtractionError(f"Empty page at {url}", url=url)

        try:
            doc = Document(html)
            summary_html = doc.summary(html_partial=True)
            title = (doc.short_title() or "").strip()
        except Exception as e:
            # readability raises its own Unparseable plus assorted lxml errors
            raise ExtractionError(f"Readability failed for {url}: {e}", url=url) from e

        soup = BeautifulSoup(summary_html, "html.parser")
        for tag in soup(["script", "style", "noscript", "nav", "aside", "footer", "form"]):
            tag.decompose()

        blocks = []
        for line in soup.get_text("\n").splitlines():
            line = re.sub(r"\s+", " ", line).strip()
            if line:
                blocks.append(line)

        return title or url, "\n".join(blocks)
