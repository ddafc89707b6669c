"""Heuristic scoring and source-diverse selection of search hits."""

import re
from collections import Counter
from typing import Iterable, Optional
from urllib.parse import urlsplit

from ai_mews.core.entities import ScoredCandidate, SearchHit

TRUSTED_HOSTS = frozenset({
    # AI labs
    "openai.com",
    "anthropic.com",
    "deepmind.google",
    "blog.google",
    "ai.meta.com",
    "mistral.ai",
    "huggingface.co",
    "nvidia.com",
    "microsoft.com",
    "arxiv.org",
    "github.com",
    # Tech press
    "techcrunch.com",
    "theverge.com",
    "theinformation.com",
    "wired.com",
    "arstechnica.com",
    "venturebeat.com",
    "technologyreview.com",
    "semianalysis.com",
    "stratechery.com",
    "404media.co",
    # Aggregators and communities
    "news.ycombinator.com",
    "producthunt.com",
    "lobste.rs",
    "simonwillison.net",
    # General press, for variety
    "reuters.com",
    "bloomberg.com",
    "apnews.com",
    "ft.com",
    "axios.com",
})

SOCIAL_HOSTS = frozenset({"twitter.com", "x.com"})
VIDEO_HOSTS = frozenset({"youtube.com", "youtu.be", "tiktok.com"})

TOPIC_PATTERN = re.compile(
    r"agent|bot|tool|startup|funding|seed|series|acquir|merger|m&a|m%26a|launch|release|copilot|vibe"
)
RECENT_AGE_PATTERN = re.compile(r"minute|hour", re.IGNORECASE)
# "amp" only as a delimited token so words like "example" are not penalized
TRACKING_PATTERN = re.compile(r"utm_|(?:^|[/.?&=_-])amp(?:$|[/.?&=_-])")

TRUSTED_BOOST = 3.0
TOPIC_BOOST = 2.0
SOCIAL_PENALTY = -2.0
VIDEO_PENALTY = -1.0
RECENCY_BOOST = 1.0
TRACKING_PENALTY = -0.5


def normalize_host(url: str) -> Optional[str]:
    """Return the lowercased host of a URL without a leading "www.".

    Returns None for empty or unparseable URLs.
    """
    if not url or not url.strip():
        return None
    try:
        host = urlsplit(url.strip()).hostname
    except ValueError:
        return None
    if not host:
        return None
    if host.startswith("www."):
        host = host[4:]
    return host or None


def _host_in(host: str, domains: Iterable[str]) -> bool:
    return any(host == d or host.endswith("." + d) for d in domains)


def score(hit: SearchHit) -> float:
    """Score a hit from its URL and age; higher is better."""
    url = (hit.url or "").strip().lower()
    host = normalize_host(url) or ""
    try:
        parts = urlsplit(url)
        path_and_query = f"{parts.path}?{parts.query}"
    except ValueError:
        path_and_query = ""

    s = 0.0
    if host and _host_in(host, TRUSTED_HOSTS):
        s += TRUSTED_BOOST
    if TOPIC_PATTERN.search(path_and_query):
        s += TOPIC_BOOST
    if host and _host_in(host, SOCIAL_HOSTS):
        s += SOCIAL_PENALTY
    if host and _host_in(host, VIDEO_HOSTS):
        s += VIDEO_PENALTY
    if hit.age and RECENT_AGE_PATTERN.search(hit.age):
        s += RECENCY_BOOST
    if TRACKING_PATTERN.search(url):
        s += TRACKING_PENALTY
    return s


def rank(hits: Iterable[SearchHit]) -> list[ScoredCandidate]:
    """Score hits and sort them best-first, keeping provider order on ties."""
    scored = [ScoredCandidate.from_hit(hit, score(hit)) for hit in hits]
    # sorted() is stable, so equal scores keep provider order
    return sorted(scored, key=lambda c: -c.score)


def select(
    hits: Iterable[SearchHit],
    max_per_host: int = 2,
    limit: int = 10,
) -> list[ScoredCandidate]:
    """Pick up to ``limit`` best hits with at most ``max_per_host`` per source."""
    chosen: list[ScoredCandidate] = []
    seen_urls: set[str] = set()
    per_host: Counter[str] = Counter()

    for candidate in rank(hits):
        if len(chosen) >= limit:
            break

        host = normalize_host(candidate.url)
        if host is None:
            continue

        url = candidate.url.strip()
        if url in seen_urls:
            continue
        if per_host[host] >= max_per_host:
            continue

        seen_urls.add(url)
        per_host[host] += 1
        chosen.append(candidate)

    return chosen
