"""Language fallback resolution.

Picks the text to show from one language record. The order is fixed:
active language, then English, then the first non-empty value in file order. When none of
these has text, the caller's literal fallback is used.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from models.outcome_models import FailureKind, Outcome
from models.translation_models import DEFAULT_LANGUAGE
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config
    from models.translation_models import LanguageRecord, TranslationStore

__all__: list[str] = ["LanguageResolver", "LanguageSource", "has_text", "pick_text"]

type LanguageSource = Callable[[], str | None]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


def has_text(value: str | None) -> bool:
    """A value counts as present only if it has non-whitespace content."""
    return isinstance(value, str) and bool(value.strip())


def pick_text(record: LanguageRecord, language: str) -> Outcome[str]:
    """Choose the text for a language from a record.

    Args:
        record (LanguageRecord): Language code to text.
        language (str): Active language code.

    Returns:
        Outcome[str]: The chosen text, or EMPTY_RECORD when no entry has text.
    """
    if not record:
        return Outcome.fail(FailureKind.EMPTY_RECORD, "record has no languages")

    value: str | None = record.get(language)
    if has_text(value):
        return Outcome.ok(value)  # type: ignore[arg-type]

    value = record.get(DEFAULT_LANGUAGE)
    if has_text(value):
        return Outcome.ok(value)  # type: ignore[arg-type]

    for value in record.values():
        if has_text(value):
            return Outcome.ok(value)

    return Outcome.fail(FailureKind.EMPTY_RECORD, "every language value is empty")


class LanguageResolver:
    """Resolves language records against the host's current language.

    Args:
        language_source (LanguageSource | None): Callable returning the host's language code.
        config (Config): Library configuration.
    """

    def __init__(self, language_source: LanguageSource | None, config: Config) -> None:
        self._language_source: LanguageSource | None = language_source
        self.config: Config = config

    def active_language(self) -> Outcome[str]:
        """Ask the host for its current language.

        Any non-empty string is accepted as a language code. Codes missing from
        LOCALIZE.KNOWN_LANGUAGES are only noted in the debug log.

        Returns:
            Outcome[str]: The language code, or LANGUAGE_SOURCE_UNAVAILABLE.
        """
        if self._language_source is None:
            return Outcome.fail(FailureKind.LANGUAGE_SOURCE_UNAVAILABLE, "no language source configured")

        try:
            lang: object = self._language_source()
        except Exception as err:  # noqa: BLE001
            return Outcome.fail(FailureKind.LANGUAGE_SOURCE_UNAVAILABLE, f"language source raised: {err!r}")

        if not isinstance(lang, str) or not lang.strip():
            return Outcome.fail(FailureKind.LANGUAGE_SOURCE_UNAVAILABLE, f"language source returned {lang!r}")

        lang = lang.strip()
        if self.config.debug and lang not in self.config.LOCALIZE.KNOWN_LANGUAGES:
            logger.debug("Language '%s' is not in the known language list", lang)
        return Outcome.ok(lang)

    def current_language(self) -> str:
        """Active language code, or "en" when the host cannot tell."""
        outcome: Outcome[str] = self.active_language()
        if not outcome.is_ok:
            logger.debug("Using '%s': %s", DEFAULT_LANGUAGE, outcome.detail)
        return outcome.collapse(DEFAULT_LANGUAGE)

    def resolve(self, record: LanguageRecord, store: TranslationStore | None = None) -> Outcome[str]:
        """Pick the text to show from a record.

        Args:
            record (LanguageRecord): The record to resolve.
            store (TranslationStore | None): When given, its current_lang is updated and a
                language change is logged in debug mode.

        Returns:
            Outcome[str]: The text, or EMPTY_RECORD.
        """
        if not record:
            return Outcome.fail(FailureKind.EMPTY_RECORD, "record has no languages")

        lang: str = self.current_language()
        if store is not None:
            self._note_language(store, lang)
        return pick_text(record, lang)

    def _note_language(self, store: TranslationStore, lang: str) -> None:
        with store.lock:
            if lang == store.current_lang:
                return
            store.current_lang = lang
        if self.config.debug:
            logger.info("Language changed to: %s", lang)
