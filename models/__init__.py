"""Data models for jsonlocalize.

This package contains dataclass definitions for configuration, loaded translation data,
resolution outcomes, and regular expression patterns used throughout the library.
"""

from __future__ import annotations

from models.config_models import Config, General, Localize
from models.outcome_models import FailureKind, Outcome
from models.re_models import LANGUAGE_CODE_PATTERN, TRAILING_COMMA_PATTERN
from models.translation_models import (
    DEFAULT_LANGUAGE,
    LanguageRecord,
    LoadStatus,
    NamespaceHandle,
    NodeShape,
    StoreSummary,
    TranslationStore,
)

__all__: list[str] = [
    "DEFAULT_LANGUAGE",
    "LANGUAGE_CODE_PATTERN",
    "TRAILING_COMMA_PATTERN",
    "Config",
    "FailureKind",
    "General",
    "LanguageRecord",
    "LoadStatus",
    "Localize",
    "NamespaceHandle",
    "NodeShape",
    "Outcome",
    "StoreSummary",
    "TranslationStore",
]
