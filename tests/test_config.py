"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from ai_mews.config import DEFAULT_QUERY, Settings, get_settings
from ai_mews.core import ConfigError, MisconfiguredNotifier

BASE_ENV = {"BRAVE_API_KEY": "brave", "OPENAI_API_KEY": "openai"}


def test_defaults(tmp_path: Path) -> None:
    settings = get_settings(tmp_path / "missing.yaml", environ=BASE_ENV)

    assert settings.brave_api_key == "brave"
    assert settings.timezone == "America/Chicago"
    assert settings.search.query == DEFAULT_QUERY
    assert settings.llm.model == "gpt-4o-mini"
    assert settings.selection.max_per_host == 2
    assert settings.selection.candidate_limit == 10
    assert settings.selection.target_items == 5
    assert settings.selection.min_items == 3
    assert settings.extraction.max_chars == 12000
    assert settings.force_overwrite is False
    assert settings.force_run is False
    assert not settings.notify.enabled
    settings.validate()


def test_environment_overrides(tmp_path: Path) -> None:
    env = dict(
        BASE_ENV,
        SITE_TZ="Europe/Berlin",
        SEARCH_QUERY="AI agents",
        OPENAI_MODEL="gpt-4.1-mini",
        TELEGRAM_BOT_TOKEN="123:abc",
        TELEGRAM_CHAT_ID="-100",
        FORCE_OVERWRITE="true",
        FORCE_RUN="1",
        PUBLISH_HOUR="7",
        POSTS_DIR="site/posts",
    )
    settings = get_settings(tmp_path / "missing.yaml", environ=env)

    assert settings.timezone == "Europe/Berlin"
    assert settings.search.query == "AI agents"
    assert settings.llm.model == "gpt-4.1-mini"
    assert settings.notify.enabled
    assert settings.force_overwrite is True
    assert settings.force_run is True
    assert settings.publish_hour == 7
    assert settings.posts_dir == Path("site/posts")
    settings.validate()


def test_yaml_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "selection:\n"
        "  max_per_host: 1\n"
        "  candidate_limit: 12\n"
        "extraction:\n"
        "  max_chars: 8000\n"
        "paths:\n"
        "  posts_dir: out/posts\n"
        "timezone: UTC\n",
        encoding="utf-8",
    )
    settings = get_settings(config_path, environ=dict(BASE_ENV, SITE_TZ="Asia/Tokyo"))

    assert settings.selection.max_per_host == 1
    assert settings.selection.candidate_limit == 12
    assert settings.extraction.max_chars == 8000
    assert settings.posts_dir == Path("out/posts")
    # Environment wins
    assert settings.timezone == "Asia/Tokyo"


@pytest.mark.parametrize("missing", ["BRAVE_API_KEY", "OPENAI_API_KEY"])
def test_missing_required_key(tmp_path: Path, missing: str) -> None:
    env = {k: v for k, v in BASE_ENV.items() if k != missing}
    settings = get_settings(tmp_path / "missing.yaml", environ=env)

    with pytest.raises(ConfigError, match=missing):
        settings.validate()


@pytest.mark.parametrize("key", ["TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID"])
def test_half_configured_notifier(tmp_path: Path, key: str) -> None:
    settings = get_settings(tmp_path / "missing.yaml", environ=dict(BASE_ENV, **{key: "x"}))

    with pytest.raises(MisconfiguredNotifier):
        settings.validate()


def test_unknown_timezone() -> None:
    settings = Settings(brave_api_key="b", openai_api_key="o", timezone="Mars/Olympus")

    with pytest.raises(ConfigError, match="timezone"):
        settings.validate()


def test_bad_publish_hour_env(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="PUBLISH_HOUR"):
        get_settings(tmp_path / "missing.yaml", environ=dict(BASE_ENV, PUBLISH_HOUR="seven"))


@pytest.mark.parametrize(
    "field, value",
    [
        ("max_per_host", 0),
        ("min_items", 6),
        ("target_items", 11),
        ("min_items", 2),
        ("target_items", 6),
    ],
)
def test_inconsistent_selection(field: str, value: int) -> None:
    settings = Settings(brave_api_key="b", openai_api_key="o")
    setattr(settings.selection, field, value)

    with pytest.raises(ConfigError):
        settings.validate()


def test_today_uses_timezone() -> None:
    settings = Settings(timezone="Pacific/Kiritimati")
    assert settings.now().utcoffset().total_seconds() == 14 * 3600
    assert settings.today() == settings.now().date()


def test_yaml_unknown_key(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("selection:\n  max_per_hosts: 1\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="selection.max_per_hosts"):
        get_settings(config_path, environ=BASE_ENV)


@pytest.mark.parametrize(
    "body",
    [
        "selection:\n  max_per_host: two\n",
        "selection:\n  min_items: true\n",
        "search:\n  query: 42\n",
    ],
)
def test_yaml_wrong_type(tmp_path: Path, body: str) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError, match="must be"):
        get_settings(config_path, environ=BASE_ENV)


def test_yaml_int_accepted_for_float(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("llm:\n  temperature: 1\n  timeout: 90\n", encoding="utf-8")

    settings = get_settings(config_path, environ=BASE_ENV)

    assert settings.llm.temperature == 1
    assert settings.llm.timeout == 90
