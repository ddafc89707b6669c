"""OpenAI chat-completions client for article summarization."""

import json
import re

import httpx

from ai_mews.config import LLMConfig
from ai_mews.core import Item, SummarizationError, Summarizer

SYSTEM_PROMPT = (
    "You write short, sharp briefs about AI news for busy practitioners. "
    "You only state what the article supports."
)

PROMPT_TEMPLATE = """Return STRICT JSON with exactly these keys: title, dek, bullets, take.
- title: a plain headline for the story.
- dek: one sentence saying why it matters.
- bullets: an array of 4 short bullets with the concrete facts.
- take: 2-3 sentences of opinion.

Tone for take: realistic/pragmatic, dry humor, sometimes snarky or salty.
Always truthful. No fabrication: if the article does not say it, neither do you.
No emojis anywhere.

SOURCE URL: {source_url}

ARTICLE TITLE: {title}

ARTICLE TEXT:
{text}"""


class OpenAISummarizer(Summarizer):
    """Summarize articles with an OpenAI-compatible chat completions API."""

    def __init__(self, api_key: str, config: LLMConfig) -> None:
        self.api_key = api_key
        self.config = config
        self.model = config.model
        self.base_url = config.base_url.rstrip("/")

    async def summarize(self, source_url: str, title: str, text: str) -> Item:
        """Summarize article text into a validated Item."""
        prompt = PROMPT_TEMPLATE.format(source_url=source_url, title=title, text=text)
        content = await self._call_api(prompt=prompt, system=SYSTEM_PROMPT, source_url=source_url)

        json_text = self._extract_json(content)
        try:
            payload = json.loads(json_text)
        except json.JSONDecodeError as e:
            raise SummarizationError(
                f"Model returned non-JSON: {content[:400]}", url=source_url
            ) from e

        try:
            return Item.from_payload(payload, source_url=source_url)
        except ValueError as e:
            raise SummarizationError(f"Model returned wrong shape: {e}", url=source_url) from e

    async def _call_api(self, prompt: str, system: str, source_url: str) -> str:
        """Call chat completions in JSON mode and return the message content."""
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "model": self.model,
                        "temperature": self.config.temperature,
                        "max_tokens": self.config.max_tokens,
                        "response_format": {"type": "json_object"},
                        "messages": [
                            {"role": "system", "content": system},
                            {"role": "user", "content": prompt},
                        ],
                    },
                )
            except httpx.RequestError as e:
                raise SummarizationError(f"LLM request failed: {e}", url=source_url) from e

        if response.status_code != 200:
            raise SummarizationError(
                f"LLM call failed: {response.status_code} {response.text[:300]}",
                url=source_url,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise SummarizationError(f"Unexpected LLM response: {e}", url=source_url) from e

        if not content:
            raise SummarizationError("LLM returned empty content", url=source_url)
        if not isinstance(content, str):
            raise SummarizationError(
                f"LLM returned non-text content: {type(content).__name__}", url=source_url
            )
        return content

    def _extract_json(self, text: str) -> str:
        """Extract JSON from a markdown code block or raw text."""
        code_block_match = re.search(r"```(?:json)?\s*\n(.*?)\n```", text, re.DOTALL)
        if code_block_match:
            return code_block_match.group(1).strip()
        return text.strip()
