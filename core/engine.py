"""Resolution engine.

Public entry point of the library. Each operation looks up the caller's namespace store (loading
it on first use), selects a language record, and resolves it to text. No operation raises: every
failure is logged and turned into the caller's literal fallback.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Final

from core.language import LanguageResolver
from core.store.loader import TranslationStoreLoader
from core.store.registry import StoreRegistry
from models.outcome_models import FailureKind, Outcome
from models.translation_models import LoadStatus
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Callable

    from core.language import LanguageSource
    from models.config_models import Config
    from models.translation_models import LanguageRecord, NamespaceHandle, StoreSummary, TranslationStore

__all__: list[str] = ["BoundLocalizer", "LocalizeEngine"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Log level per failure kind. None means "debug mode only".
_FAILURE_LOG_LEVELS: Final[dict[FailureKind, int | None]] = {
    FailureKind.MISSING_HANDLE: logging.WARNING,
    FailureKind.MISSING_FILE: None,
    FailureKind.PARSE_FAILURE: None,
    FailureKind.MISSING_KEY: None,
    FailureKind.EMPTY_SELECTION: logging.WARNING,
    FailureKind.INDEX_OUT_OF_RANGE: logging.WARNING,
    FailureKind.LANGUAGE_SOURCE_UNAVAILABLE: logging.DEBUG,
    FailureKind.EMPTY_RECORD: logging.DEBUG,
    FailureKind.UNEXPECTED: logging.ERROR,
}

# Failure reported for a missing key when the store itself did not load.
_LOAD_STATUS_FAILURES: Final[dict[LoadStatus, FailureKind]] = {
    LoadStatus.MISSING_FILE: FailureKind.MISSING_FILE,
    LoadStatus.PARSE_FAILURE: FailureKind.PARSE_FAILURE,
    LoadStatus.READ_FAILURE: FailureKind.PARSE_FAILURE,
}


class LocalizeEngine:
    """Resolves localized strings for any number of consuming modules.

    One engine is created at startup and shared by every caller. Each caller passes its own
    NamespaceHandle, so translation files of different modules never mix.

    Usage::

        engine = LocalizeEngine(config, language_source=lambda: host.current_language)
        handle = NamespaceHandle.for_module(__name__)

        toast = engine.get_random_from_array(handle, "toast_messages", "PARRY!")
        speech = engine.get_from_object(handle, "brazen_head_10_parry", "Fine, I noticed.")
        step = engine.get_from_array_index(handle, "tutorial_steps", 2, "Step 3")

    Attributes:
        MAX_RESAMPLE (ClassVar[int]): Upper bound on redraws when avoiding a repeat.
    """

    MAX_RESAMPLE: ClassVar[int] = 1000

    def __init__(
        self,
        config: Config,
        language_source: LanguageSource | None,
        *,
        registry: StoreRegistry | None = None,
        loader: TranslationStoreLoader | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config (Config): Library configuration.
            language_source (LanguageSource | None): Callable returning the host's language code.
            registry (StoreRegistry | None): Store cache. A new one is created when omitted.
            loader (TranslationStoreLoader | None): Loader for a newly created registry.
            rng (random.Random | None): Random source for array selection.
        """
        self.config: Config = config
        if registry is None:
            registry = StoreRegistry(loader if loader is not None else TranslationStoreLoader(config))
        self.registry: StoreRegistry = registry
        self.resolver: LanguageResolver = LanguageResolver(language_source, config)
        self._rng: random.Random = rng if rng is not None else random.Random()  # noqa: S311

    def get_random_from_array(self, namespace: NamespaceHandle | None, array_key: str, fallback: str) -> str:
        """Return a random entry of an array key, never the same index twice in a row.

        Args:
            namespace (NamespaceHandle | None): The caller's namespace.
            array_key (str): Array key in the translation file (e.g., "toast_messages").
            fallback (str): Text returned when no translation can be produced.

        Returns:
            str: Localized text, or fallback.
        """
        return self._guarded("get_random_from_array", fallback, lambda: self._random_from_array(namespace, array_key))

    def get_from_object(self, namespace: NamespaceHandle | None, object_key: str, fallback: str) -> str:
        """Return the text of an object key.

        Args:
            namespace (NamespaceHandle | None): The caller's namespace.
            object_key (str): Object key in the translation file (e.g., "achievement_unlocked").
            fallback (str): Text returned when no translation can be produced.

        Returns:
            str: Localized text, or fallback.
        """
        return self._guarded("get_from_object", fallback, lambda: self._from_object(namespace, object_key))

    def get_from_array_index(
        self, namespace: NamespaceHandle | None, array_key: str, index: int, fallback: str
    ) -> str:
        """Return a specific entry of an array key. Does not affect random selection.

        Args:
            namespace (NamespaceHandle | None): The caller's namespace.
            array_key (str): Array key in the translation file.
            index (int): Zero-based index.
            fallback (str): Text returned when no translation can be produced.

        Returns:
            str: Localized text, or fallback.
        """
        return self._guarded(
            "get_from_array_index", fallback, lambda: self._from_array_index(namespace, array_key, index)
        )

    def summary(self, namespace: NamespaceHandle | None) -> StoreSummary | None:
        """Describe the store of a namespace, loading it if needed. None for an invalid handle."""
        outcome: Outcome[TranslationStore] = self.registry.get_or_load(namespace)
        if not outcome.is_ok or outcome.value is None:
            return None
        return outcome.value.summarize()

    def bind(self, namespace: NamespaceHandle) -> BoundLocalizer:
        """Return a helper that always passes the given namespace."""
        return BoundLocalizer(engine=self, namespace=namespace)

    def _random_from_array(self, namespace: NamespaceHandle | None, array_key: str) -> Outcome[str]:
        lookup: Outcome[tuple[TranslationStore, list[LanguageRecord]]] = self._lookup_array(namespace, array_key)
        if not lookup.is_ok or lookup.value is None:
            return Outcome.fail(lookup.failure or FailureKind.UNEXPECTED, lookup.detail)
        store, records = lookup.value

        with store.lock:
            index: int = self._choose_index(len(records), store.last_index_by_array.get(array_key))
            store.last_index_by_array[array_key] = index

        result: Outcome[str] = self.resolver.resolve(records[index], store)
        if self.config.debug:
            logger.info("get_random_from_array(%s): index=%d, result=%s", array_key, index, result.value)
        return result

    def _from_object(self, namespace: NamespaceHandle | None, object_key: str) -> Outcome[str]:
        store_outcome: Outcome[TranslationStore] = self.registry.get_or_load(namespace)
        if not store_outcome.is_ok or store_outcome.value is None:
            return Outcome.fail(store_outcome.failure or FailureKind.UNEXPECTED, store_outcome.detail)
        store: TranslationStore = store_outcome.value

        if not isinstance(object_key, str) or object_key not in store.object_translations:
            return self._missing_key(store, "Object", object_key)

        result: Outcome[str] = self.resolver.resolve(store.object_translations[object_key], store)
        if self.config.debug:
            logger.info("get_from_object(%s): result=%s", object_key, result.value)
        return result

    def _from_array_index(self, namespace: NamespaceHandle | None, array_key: str, index: int) -> Outcome[str]:
        lookup: Outcome[tuple[TranslationStore, list[LanguageRecord]]] = self._lookup_array(namespace, array_key)
        if not lookup.is_ok or lookup.value is None:
            return Outcome.fail(lookup.failure or FailureKind.UNEXPECTED, lookup.detail)
        store, records = lookup.value

        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(records):
            return Outcome.fail(
                FailureKind.INDEX_OUT_OF_RANGE,
                f"Index {index!r} out of range for array '{array_key}' (count: {len(records)}) in {store.namespace}",
            )

        result: Outcome[str] = self.resolver.resolve(records[index], store)
        if self.config.debug:
            logger.info("get_from_array_index(%s, %d): result=%s", array_key, index, result.value)
        return result

    def _lookup_array(
        self, namespace: NamespaceHandle | None, array_key: str
    ) -> Outcome[tuple[TranslationStore, list[LanguageRecord]]]:
        store_outcome: Outcome[TranslationStore] = self.registry.get_or_load(namespace)
        if not store_outcome.is_ok or store_outcome.value is None:
            return Outcome.fail(store_outcome.failure or FailureKind.UNEXPECTED, store_outcome.detail)
        store: TranslationStore = store_outcome.value

        if not isinstance(array_key, str) or array_key not in store.array_translations:
            return self._missing_key(store, "Array", array_key)

        records: list[LanguageRecord] = store.array_translations[array_key]
        if not records:
            return Outcome.fail(FailureKind.EMPTY_SELECTION, f"Array '{array_key}' is empty in {store.namespace}")
        return Outcome.ok((store, records))

    def _missing_key(self, store: TranslationStore, kind: str, key: object) -> Outcome[Any]:
        failure: FailureKind = _LOAD_STATUS_FAILURES.get(store.load_status, FailureKind.MISSING_KEY)
        return Outcome.fail(failure, f"{kind} key {key!r} not found in {store.namespace}")

    def _choose_index(self, count: int, last_index: int | None) -> int:
        """Pick a uniform random index in [0, count), redrawing while it equals last_index.

        With a single entry, or no previous pick, any draw is accepted.
        """
        index: int = self._rng.randrange(count)
        if count == 1 or last_index is None:
            return index

        attempts: int = 1
        while index == last_index:
            if attempts >= self.MAX_RESAMPLE:
                # the generator keeps repeating itself; step off the last index instead
                return (last_index + 1) % count
            index = self._rng.randrange(count)
            attempts += 1
        return index

    def _guarded(self, operation: str, fallback: str, step: Callable[[], Outcome[str]]) -> str:
        try:
            outcome: Outcome[str] = step()
        except Exception as err:  # noqa: BLE001
            logger.error("%s error: %s", operation, err, exc_info=True)
            return fallback

        if not outcome.is_ok:
            self._report(operation, outcome)
        return outcome.collapse(fallback)

    def _report(self, operation: str, outcome: Outcome[str]) -> None:
        if outcome.failure is None:
            return
        level: int | None = _FAILURE_LOG_LEVELS.get(outcome.failure, logging.ERROR)
        if level is None:
            if not self.config.debug:
                return
            level = logging.INFO
        logger.log(level, "%s: %s", operation, outcome.detail or outcome.failure.value)


@dataclass(frozen=True)
class BoundLocalizer:
    """Shortcut bound to one namespace.

    Usage::

        tr = engine.bind(NamespaceHandle.for_module(__name__))
        tr.random("toast_messages", "PARRY!")
        tr.get("brazen_head_10_parry", "Fine, I noticed.")
        tr.at("tutorial_steps", 0, "Press E to parry")
    """

    engine: LocalizeEngine
    namespace: NamespaceHandle

    def random(self, array_key: str, fallback: str) -> str:
        return self.engine.get_random_from_array(self.namespace, array_key, fallback)

    def get(self, object_key: str, fallback: str) -> str:
        return self.engine.get_from_object(self.namespace, object_key, fallback)

    def at(self, array_key: str, index: int, fallback: str) -> str:
        return self.engine.get_from_array_index(self.namespace, array_key, index, fallback)
