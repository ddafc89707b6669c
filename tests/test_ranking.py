"""Tests for scoring and selection."""

import pytest

from ai_mews.core import ScoredCandidate, SearchHit
from ai_mews.core.ranking import normalize_host, rank, score, select


def hit(url: str, age: str = "", title: str = "") -> SearchHit:
    return SearchHit(title=title or url, url=url, description="", age=age)


def test_score_is_deterministic():
    """Same hit scores the same every time."""
    h = hit("https://techcrunch.com/2026/10/18/ai-startup-funding/?utm_source=x", "3 hours ago")
    assert score(h) == score(h) == score(SearchHit(**vars(h)))


def test_score_trusted_source():
    assert score(hit("https://openai.com/blog/y", "2 days ago")) == 3


def test_score_trusted_subdomain_and_www():
    assert score(hit("https://www.theverge.com/2026/ai-policy")) == 3
    assert score(hit("https://news.ycombinator.com/item?id=1")) == 3


def test_score_lookalike_host_not_trusted():
    assert score(hit("https://notopenai.com/blog/y")) == 0


def test_score_topic_keywords():
    assert score(hit("https://example.org/new-coding-agents-launch")) == 2
    assert score(hit("https://example.org/news?topic=acquisition")) == 2
    assert score(hit("https://example.org/m&a-roundup")) == 2


def test_score_social_penalty_and_recency():
    """Twitter post from an hour ago: -2 social, +1 recent."""
    assert score(hit("https://twitter.com/x", "1 hour ago")) == -1
    assert score(hit("https://x.com/someone/status/1")) == -2


def test_score_social_host_does_not_match_suffix_words():
    assert score(hit("https://netflix.com/about")) == 0


def test_score_video_penalty():
    assert score(hit("https://www.youtube.com/watch?v=abc")) == -1
    assert score(hit("https://tiktok.com/@ai/video/1")) == -1


def test_score_recency_case_insensitive():
    assert score(hit("https://example.org/a", "12 Minutes ago")) == 1
    assert score(hit("https://example.org/a", "2 days ago")) == 0


def test_score_tracking_markers():
    assert score(hit("https://example.org/story?utm_source=feed")) == -0.5
    assert score(hit("https://example.org/amp/story")) == -0.5
    assert score(hit("https://example.org/story.amp")) == -0.5


def test_score_amp_substring_in_words_not_penalized():
    assert score(hit("https://example.com/champion-campaign")) == 0


def test_score_is_additive():
    """Trusted + topic + recent + tracking."""
    h = hit("https://techcrunch.com/ai-startup-raises-seed/?utm_medium=rss", "5 hours ago")
    assert score(h) == pytest.approx(3 + 2 + 1 - 0.5)


def test_score_handles_empty_url():
    assert score(hit("")) == 0


def test_normalize_host():
    assert normalize_host("https://www.Example.com/a") == "example.com"
    assert normalize_host("https://blog.example.com") == "blog.example.com"
    assert normalize_host("") is None
    assert normalize_host("not a url") is None
    assert normalize_host("http://[::1") is None


def test_twitter_vs_openai_scenario():
    """OpenAI post outranks a fresher tweet and is selected first."""
    hits = [
        hit("https://twitter.com/x", "1 hour"),
        hit("https://openai.com/blog/y", "2 days"),
    ]
    selected = select(hits)
    assert [c.url for c in selected] == ["https://openai.com/blog/y", "https://twitter.com/x"]
    assert selected[0].score == 3
    assert selected[1].score == -1


def test_rank_is_stable_on_ties():
    hits = [hit(f"https://site{i}.org/a") for i in range(5)]
    assert [c.url for c in rank(hits)] == [h.url for h in hits]


def test_rank_sorts_descending():
    hits = [
        hit("https://example.org/a"),
        hit("https://openai.com/a"),
        hit("https://x.com/a"),
        hit("https://example.org/launch"),
    ]
    ranked = rank(hits)
    scores = [c.score for c in ranked]
    assert scores == sorted(scores, reverse=True)
    assert ranked[0].url == "https://openai.com/a"
    assert all(isinstance(c, ScoredCandidate) for c in ranked)


def test_select_host_cap():
    """Third hit from the same host is dropped even with the best score."""
    hits = [
        hit("https://example.com/1"),
        hit("https://example.com/2"),
        hit("https://example.com/3-launch", "1 hour"),
    ]
    selected = select(hits, max_per_host=2)
    assert [c.url for c in selected] == [
        "https://example.com/3-launch",
        "https://example.com/1",
    ]


def test_select_host_cap_ignores_www():
    hits = [
        hit("https://www.example.com/1"),
        hit("https://example.com/2"),
        hit("https://WWW.example.com/3"),
    ]
    assert len(select(hits, max_per_host=2)) == 2


def test_select_skips_duplicate_urls():
    hits = [hit("https://a.org/1"), hit("https://a.org/1"), hit("https://b.org/1")]
    assert [c.url for c in select(hits)] == ["https://a.org/1", "https://b.org/1"]


def test_select_skips_empty_and_unparseable_urls():
    hits = [hit(""), hit("   "), hit("nonsense"), hit("https://a.org/1")]
    assert [c.url for c in select(hits)] == ["https://a.org/1"]


def test_select_respects_limit():
    hits = [hit(f"https://site{i}.org/a") for i in range(20)]
    selected = select(hits, max_per_host=2, limit=10)
    assert len(selected) == 10
    assert [c.url for c in selected] == [h.url for h in hits[:10]]


def test_select_invariants_over_mixed_hits():
    hosts = ["a.org", "b.org", "openai.com", "x.com", "youtube.com"]
    hits = [
        hit(f"https://{hosts[i % len(hosts)]}/{'launch' if i % 3 == 0 else 'post'}/{i % 7}", "1 hour" if i % 2 else "")
        for i in range(40)
    ]
    selected = select(hits, max_per_host=2, limit=50)

    per_host: dict[str, int] = {}
    for c in selected:
        host = normalize_host(c.url)
        per_host[host] = per_host.get(host, 0) + 1
    assert max(per_host.values()) <= 2
    assert len({c.url for c in selected}) == len(selected)

    scores = [c.score for c in selected]
    assert scores == sorted(scores, reverse=True)


def test_select_empty():
    assert select([]) == []
