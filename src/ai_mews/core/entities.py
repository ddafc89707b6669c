"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Optional

MIN_BULLETS = 3
MAX_BULLETS = 5
MIN_ITEMS = 3
MAX_ITEMS = 5

PAYLOAD_KEYS = ("title", "dek", "bullets", "take")


class PipelineState(str, Enum):
    """Stage reached by a curation run."""

    INIT = "init"
    SEARCHED = "searched"
    SELECTED = "selected"
    ACCUMULATING = "accumulating"
    DONE = "done"
    ABORTED = "aborted"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SearchHit:
    """Single result returned by the search provider."""

    title: str
    url: str
    description: str = ""
    age: str = ""


@dataclass(frozen=True)
class ScoredCandidate(SearchHit):
    """Search hit annotated with its heuristic score."""

    score: float = 0.0

    @classmethod
    def from_hit(cls, hit: SearchHit, score: float) -> "ScoredCandidate":
        return cls(
            title=hit.title,
            url=hit.url,
            description=hit.description,
            age=hit.age,
            score=score,
        )


@dataclass
class Article:
    """Readable article text extracted from a page."""

    url: str
    title: str
    text: str

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ValueError("Article text cannot be empty")


@dataclass
class Item:
    """One curated, publishable summary."""

    title: str
    dek: str
    bullets: list[str]
    take: str
    source_url: str

    def __post_init__(self) -> None:
        for name in ("title", "dek", "take", "source_url"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} cannot be empty")
        if not isinstance(self.bullets, list):
            raise ValueError("bullets must be a list")
        if not MIN_BULLETS <= len(self.bullets) <= MAX_BULLETS:
            raise ValueError(
                f"bullets must have {MIN_BULLETS}-{MAX_BULLETS} entries, got {len(self.bullets)}"
            )
        if any(not isinstance(b, str) or not b.strip() for b in self.bullets):
            raise ValueError("bullets cannot contain empty entries")

    @classmethod
    def from_payload(cls, payload: Any, source_url: str) -> "Item":
        """Decode a language-model JSON object into an Item.

        Raises:
            ValueError: if the payload does not have the expected shape.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")

        missing = [key for key in PAYLOAD_KEYS if key not in payload]
        if missing:
            raise ValueError(f"missing keys: {', '.join(missing)}")

        for key in ("title", "dek", "take"):
            if not isinstance(payload[key], str):
                raise ValueError(f"{key} must be a string")

        bullets = payload["bullets"]
        if not isinstance(bullets, list) or not all(isinstance(b, str) for b in bullets):
            raise ValueError("bullets must be a list of strings")

        return cls(
            title=payload["title"].strip(),
            dek=payload["dek"].strip(),
            bullets=[b.strip() for b in bullets],
            take=payload["take"].strip(),
            source_url=source_url,
        )

    def to_front_matter(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "dek": self.dek,
            "sourceUrl": self.source_url,
            "bullets": list(self.bullets),
            "take": self.take,
        }

    @classmethod
    def from_front_matter(cls, data: dict[str, Any]) -> "Item":
        return cls(
            title=data.get("title", ""),
            dek=data.get("dek", ""),
            bullets=list(data.get("bullets") or []),
            take=data.get("take", ""),
            source_url=data.get("sourceUrl", ""),
        )


@dataclass
class DigestDocument:
    """A day's published set of items."""

    date_key: date
    items: list[Item]
    title: str = ""
    dek: str = ""

    def __post_init__(self) -> None:
        if not MIN_ITEMS <= len(self.items) <= MAX_ITEMS:
            raise ValueError(
                f"document must have {MIN_ITEMS}-{MAX_ITEMS} items, got {len(self.items)}"
            )
        # Lead story doubles as the post headline
        if not self.title:
            self.title = self.items[0].title
        if not self.dek:
            self.dek = self.items[0].dek


@dataclass
class CandidateFailure:
    """A candidate that was skipped and why."""

    url: str
    stage: str
    reason: str


@dataclass
class RunResult:
    """Outcome of one pipeline run."""

    state: PipelineState
    date_key: date
    document: Optional[DigestDocument] = None
    path: Optional[Path] = None
    failures: list[CandidateFailure] = field(default_factory=list)
    notified: bool = False
    reason: str = ""
