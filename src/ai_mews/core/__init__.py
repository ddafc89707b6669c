"""Core domain layer."""

from ai_mews.core.entities import (
    Article,
    CandidateFailure,
    DigestDocument,
    Item,
    PipelineState,
    RunResult,
    ScoredCandidate,
    SearchHit,
)
from ai_mews.core.errors import (
    CandidateError,
    ConfigError,
    CurationError,
    ExtractionError,
    FetchError,
    MisconfiguredNotifier,
    NotifyError,
    QualityGateError,
    SearchError,
    SelectionExhausted,
    SummarizationError,
)
from ai_mews.core.interfaces import (
    ArticleExtractor,
    DigestNotifier,
    PostPublisher,
    SearchClient,
    Summarizer,
)

__all__ = [
    "Article",
    "CandidateFailure",
    "DigestDocument",
    "Item",
    "PipelineState",
    "RunResult",
    "ScoredCandidate",
    "SearchHit",
    "CandidateError",
    "ConfigError",
    "CurationError",
    "ExtractionError",
    "FetchError",
    "MisconfiguredNotifier",
    "NotifyError",
    "QualityGateError",
    "SearchError",
    "SelectionExhausted",
    "SummarizationError",
    "ArticleExtractor",
    "DigestNotifier",
    "PostPublisher",
    "SearchClient",
    "Summarizer",
]
