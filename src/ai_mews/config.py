"""Configuration management."""

import os
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from pathlib import Path
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from dotenv import load_dotenv

from ai_mews.core.entities import MAX_ITEMS, MIN_ITEMS
from ai_mews.core.errors import ConfigError, MisconfiguredNotifier

DEFAULT_QUERY = (
    '("AI agent" OR "AI startup" OR "AI funding" OR OpenAI OR Anthropic OR LLM) '
    "AND (launch OR release OR funding OR acquisition OR research)"
)

TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class SearchConfig:
    """Brave Search settings."""
    endpoint: str = "https://api.search.brave.com/res/v1/web/search"
    query: str = DEFAULT_QUERY
    country: str = "US"
    search_lang: str = "en"
    freshness: str = "pd"
    count: int = 20
    timeout: float = 30.0


@dataclass
class LLMConfig:
    """Language model API settings."""
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1200
    timeout: float = 60.0


@dataclass
class SelectionConfig:
    """Candidate selection and quality gate."""
    max_per_host: int = 2
    candidate_limit: int = 10
    target_items: int = 5
    min_items: int = 3


@dataclass
class ExtractionConfig:
    """Article extraction settings."""
    max_chars: int = 12000
    min_chars: int = 200
    timeout: float = 30.0
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )


@dataclass
class NotifyConfig:
    """Telegram settings."""
    bot_token: Optional[str] = None
    chat_id: Optional[str] = None
    api_base: str = "https://api.telegram.org"
    max_chars: int = 3900
    timeout: float = 30.0

    @property
    def enabled(self) -> bool:
        return bool(self.bot_token and self.chat_id)


@dataclass
class PathsConfig:
    """Path settings."""
    posts_dir: Path = Path("src/posts")
    debug_dir: Path = Path("debug")


@dataclass
class Settings:
    """Application settings."""

    # API keys (from environment only)
    brave_api_key: str = ""
    openai_api_key: str = ""

    timezone: str = "America/Chicago"
    force_overwrite: bool = False
    force_run: bool = False
    publish_hour: Optional[int] = None

    # Config sections
    search: SearchConfig = field(default_factory=SearchConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    notify: NotifyConfig = field(default_factory=NotifyConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @property
    def tz(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {self.timezone}") from e

    @property
    def posts_dir(self) -> Path:
        return self.paths.posts_dir

    @property
    def debug_dir(self) -> Path:
        return self.paths.debug_dir

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        """Today's date in the site timezone; the document key."""
        return self.now().date()

    def validate(self) -> None:
        """Fail fast on missing credentials or inconsistent tunables."""
        if not self.brave_api_key:
            raise ConfigError("Missing BRAVE_API_KEY")
        if not self.openai_api_key:
            raise ConfigError("Missing OPENAI_API_KEY")
        if bool(self.notify.bot_token) != bool(self.notify.chat_id):
            raise MisconfiguredNotifier(
                "TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID must be set together"
            )

        # Raises ConfigError for an unknown zone
        self.tz

        sel = self.selection
        if sel.max_per_host < 1:
            raise ConfigError("max_per_host must be at least 1")
        if not 1 <= sel.min_items <= sel.target_items <= sel.candidate_limit:
            raise ConfigError(
                "Expected 1 <= min_items <= target_items <= candidate_limit, got "
                f"{sel.min_items}/{sel.target_items}/{sel.candidate_limit}"
            )
        if sel.min_items < MIN_ITEMS or sel.target_items > MAX_ITEMS:
            raise ConfigError(f"A post holds {MIN_ITEMS}-{MAX_ITEMS} items")
        if self.publish_hour is not None and not 0 <= self.publish_hour <= 23:
            raise ConfigError(f"publish_hour must be 0-23, got {self.publish_hour}")


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in TRUTHY


def _int(env: Mapping[str, str], key: str) -> Optional[int]:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from e


def _apply(target: object, section: str, key: str, value: object) -> None:
    """Set one YAML value on a config section, rejecting typos and wrong types."""
    if key not in {f.name for f in fields(target)}:
        raise ConfigError(f"Unknown config key: {section}.{key}")

    current = getattr(target, key)
    expected = float if isinstance(current, float) else type(current)
    if current is not None and (
        isinstance(value, bool)
        or not (isinstance(value, expected) or (expected is float and isinstance(value, int)))
    ):
        raise ConfigError(
            f"{section}.{key} must be {expected.__name__}, got {type(value).__name__}"
        )
    setattr(target, key, value)


def get_settings(
    config_path: Path = Path("config.yaml"),
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Get application settings from YAML config and environment."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    config = load_config(config_path)
    settings = Settings()

    # Apply YAML config
    for section in ("search", "llm", "selection", "extraction", "notify"):
        for key, value in (config.get(section) or {}).items():
            _apply(getattr(settings, section), section, key, value)

    for key, value in (config.get("paths") or {}).items():
        _apply(settings.paths, "paths", key, Path(str(value)))

    for key in ("timezone", "publish_hour", "force_overwrite", "force_run"):
        if key in config:
            setattr(settings, key, config[key])

    # Environment wins over YAML
    settings.brave_api_key = environ.get("BRAVE_API_KEY", "")
    settings.openai_api_key = environ.get("OPENAI_API_KEY", "")
    settings.notify.bot_token = environ.get("TELEGRAM_BOT_TOKEN") or settings.notify.bot_token
    settings.notify.chat_id = environ.get("TELEGRAM_CHAT_ID") or settings.notify.chat_id

    if environ.get("SITE_TZ"):
        settings.timezone = environ["SITE_TZ"]
    if environ.get("SEARCH_QUERY"):
        settings.search.query = environ["SEARCH_QUERY"]
    if environ.get("OPENAI_MODEL"):
        settings.llm.model = environ["OPENAI_MODEL"]
    if environ.get("OPENAI_BASE_URL"):
        settings.llm.base_url = environ["OPENAI_BASE_URL"]
    if environ.get("POSTS_DIR"):
        settings.paths.posts_dir = Path(environ["POSTS_DIR"])

    publish_hour = _int(environ, "PUBLISH_HOUR")
    if publish_hour is not None:
        settings.publish_hour = publish_hour

    settings.force_overwrite = settings.force_overwrite or _flag(environ.get("FORCE_OVERWRITE"))
    settings.force_run = settings.force_run or _flag(environ.get("FORCE_RUN"))

    return settings
