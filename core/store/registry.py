from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from models.outcome_models import FailureKind, Outcome
from models.translation_models import LoadStatus, NamespaceHandle, TranslationStore
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.store.loader import TranslationStoreLoader


__all__: list[str] = ["StoreRegistry"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class StoreRegistry:
    """Process-lifetime cache of translation stores, one per namespace.

    A store is loaded the first time its namespace is requested and is then returned on every
    later request without touching the file system again, whether the load succeeded or not.
    Entries are never evicted.

    Concurrent first requests for the same namespace load once: the registry lock only guards the
    lookup tables, and each namespace has its own load lock so that a slow file read does not
    block lookups for other namespaces.
    """

    def __init__(self, loader: TranslationStoreLoader) -> None:
        self._loader: TranslationStoreLoader = loader
        self._stores: dict[NamespaceHandle, TranslationStore] = {}
        self._load_locks: dict[NamespaceHandle, threading.Lock] = {}
        self._lock: threading.Lock = threading.Lock()

    def __contains__(self, handle: object) -> bool:
        with self._lock:
            return handle in self._stores

    def __len__(self) -> int:
        with self._lock:
            return len(self._stores)

    def handles(self) -> list[NamespaceHandle]:
        with self._lock:
            return list(self._stores)

    def get_or_load(self, handle: NamespaceHandle | None) -> Outcome[TranslationStore]:
        """Return the cached store for a namespace, loading it on first use.

        Args:
            handle (NamespaceHandle | None): The namespace.

        Returns:
            Outcome[TranslationStore]: The store, or MISSING_HANDLE when the handle is not usable.
        """
        if not isinstance(handle, NamespaceHandle):
            return Outcome.fail(FailureKind.MISSING_HANDLE, f"invalid namespace handle: {handle!r}")

        with self._lock:
            store: TranslationStore | None = self._stores.get(handle)
            if store is not None:
                return Outcome.ok(store)
            load_lock: threading.Lock = self._load_locks.setdefault(handle, threading.Lock())

        with load_lock:
            with self._lock:
                store = self._stores.get(handle)
            if store is not None:
                # another thread finished the load while we waited
                return Outcome.ok(store)

            store = self._load(handle)
            with self._lock:
                self._stores[handle] = store
                self._load_locks.pop(handle, None)
        return Outcome.ok(store)

    def _load(self, handle: NamespaceHandle) -> TranslationStore:
        try:
            return self._loader.load(handle)
        except Exception as err:  # noqa: BLE001
            logger.error("Error loading translations for %s: %s", handle.name, err)
            return TranslationStore(namespace=handle.name, load_status=LoadStatus.READ_FAILURE)
