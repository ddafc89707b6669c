"""Brave web search client."""

import httpx

from ai_mews.config import SearchConfig
from ai_mews.core import SearchClient, SearchError, SearchHit


class BraveSearchClient(SearchClient):
    """Query the Brave Search web endpoint."""

    def __init__(self, api_key: str, config: SearchConfig) -> None:
        self.api_key = api_key
        self.config = config

    async def search(self, query: str) -> list[SearchHit]:
        """Return web results for a query in provider order."""
        params = {
            "q": query,
            "country": self.config.country,
            "search_lang": self.config.search_lang,
            "freshness": self.config.freshness,
            "count": self.config.count,
        }
        headers = {
            "Accept": "application/json",
            "X-Subscription-Token": self.api_key,
        }

        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            try:
                response = await client.get(self.config.endpoint, params=params, headers=headers)
            except httpx.RequestError as e:
                raise SearchError(f"Brave search request failed: {e}") from e

        if response.status_code != 200:
            raise SearchError(
                f"Brave search failed: {response.status_code} {response.text[:500]}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SearchError(
                "Brave search returned non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from e

        return self._parse_results(data)

    def _parse_results(self, data: dict) -> list[SearchHit]:
        """Pull {title, url, description, age} out of web.results."""
        results = ((data or {}).get("web") or {}).get("results") or []

        hits: list[SearchHit] = []
        for result in results:
            url = (result.get("url") or "").strip()
            if not url:
                continue
            hits.append(SearchHit(
                title=(result.get("title") or "").strip(),
                url=url,
                description=(result.get("description") or "").strip(),
                age=(result.get("age") or "").strip(),
            ))
        return hits
