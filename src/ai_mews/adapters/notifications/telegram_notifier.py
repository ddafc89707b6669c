"""Telegram notification adapter."""

import httpx

from ai_mews.config import NotifyConfig
from ai_mews.core import DigestDocument, DigestNotifier, NotifyError

TRUNCATION_MARKER = "\n\n[truncated]"
MAX_BULLETS_IN_DIGEST = 4


def format_digest(document: DigestDocument, max_chars: int = 3900) -> str:
    """Format the document as a plain-text numbered digest.

    Args:
        document: Published document
        max_chars: Character budget; longer messages are cut and marked

    Returns:
        Message text no longer than max_chars
    """
    lines = [f"AI news digest for {document.date_key.isoformat()}", ""]

    for i, item in enumerate(document.items, 1):
        lines.append(f"{i}. {item.title}")
        lines.append(item.dek)
        for bullet in item.bullets[:MAX_BULLETS_IN_DIGEST]:
            lines.append(f"- {bullet}")
        lines.append(f"Take: {item.take}")
        lines.append(item.source_url)
        lines.append("")

    message = "\n".join(lines).rstrip()
    if len(message) <= max_chars:
        return message

    cut = max(max_chars - len(TRUNCATION_MARKER), 0)
    return message[:cut].rstrip() + TRUNCATION_MARKER


class TelegramNotifier(DigestNotifier):
    """Send the digest to a Telegram chat via the Bot API."""

    def __init__(self, config: NotifyConfig) -> None:
        """Initialize Telegram notifier.

        Args:
            config: Notify settings; bot_token and chat_id must both be set.
        """
        self.config = config

    @property
    def send_url(self) -> str:
        return f"{self.config.api_base.rstrip('/')}/bot{self.config.bot_token}/sendMessage"

    async def send_digest(self, document: DigestDocument) -> None:
        """Send the digest; any delivery failure raises NotifyError."""
        payload = {
            "chat_id": self.config.chat_id,
            "text": format_digest(document, self.config.max_chars),
            "disable_web_page_preview": True,
        }

        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            try:
                response = await client.post(self.send_url, json=payload)
            except httpx.RequestError as e:
                # Exception text can include the bot token via the URL
                raise NotifyError(f"Telegram request failed: {type(e).__name__}") from e

        if response.status_code != 200:
            raise NotifyError(
                f"Telegram send failed: {response.status_code} {response.text[:300]}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise NotifyError("Telegram returned non-JSON body", status_code=200) from e

        if not body.get("ok"):
            raise NotifyError(
                f"Telegram rejected message: {body.get('description', 'unknown error')}",
                status_code=200,
            )

        print("✓ Digest sent to Telegram")
