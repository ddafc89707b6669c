"""Error taxonomy for a curation run."""

from typing import Optional


class CurationError(Exception):
    """Base class for every error that ends or degrades a run."""


class ConfigError(CurationError):
    """Required setting is missing or invalid."""


class MisconfiguredNotifier(ConfigError):
    """Only one of the two messaging credentials is set."""


class SearchError(CurationError):
    """Search provider call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SelectionExhausted(CurationError):
    """No viable candidates to work with."""


class CandidateError(CurationError):
    """Failure scoped to a single candidate; the pipeline skips it."""

    stage = "candidate"

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class FetchError(CandidateError):
    """Article URL could not be fetched."""

    stage = "fetch"

    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, url)
        self.status_code = status_code


class ExtractionError(CandidateError):
    """Fetched page has no readable article text."""

    stage = "extract"


class SummarizationError(CandidateError):
    """Language model call failed or returned an unusable payload."""

    stage = "summarize"


class QualityGateError(CurationError):
    """Too few items survived to publish a document."""

    def __init__(self, produced: int, required: int) -> None:
        super().__init__(f"Only {produced} item(s) produced, at least {required} required")
        self.produced = produced
        self.required = required


class NotifyError(CurationError):
    """Digest could not be delivered."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
