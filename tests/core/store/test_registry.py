from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from core.store.loader import TranslationStoreLoader
from core.store.registry import StoreRegistry
from models.outcome_models import FailureKind
from models.translation_models import LoadStatus, TranslationStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from models.config_models import Config
    from models.translation_models import NamespaceHandle


class CountingLoader(TranslationStoreLoader):
    """Loader that counts calls and can stall to widen race windows."""

    def __init__(self, config: Config, delay: float = 0.0) -> None:
        super().__init__(config)
        self.delay: float = delay
        self.calls: int = 0
        self._count_lock = threading.Lock()

    def load(self, handle: NamespaceHandle) -> TranslationStore:
        with self._count_lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return super().load(handle)


class ExplodingLoader(TranslationStoreLoader):
    def load(self, handle: NamespaceHandle) -> TranslationStore:
        msg = "boom"
        raise RuntimeError(msg)


def test_store_is_loaded_once_and_cached(config: Config, make_namespace: Callable[..., NamespaceHandle]) -> None:
    handle = make_namespace(content={"greet": {"en": "Hi"}})
    loader = CountingLoader(config)
    registry = StoreRegistry(loader)

    first = registry.get_or_load(handle)
    (handle.location / "translations.json").write_text('{"greet": {"en": "Changed"}}', encoding="utf-8")
    second = registry.get_or_load(handle)

    assert first.value is second.value
    assert second.value is not None
    assert second.value.object_translations["greet"] == {"en": "Hi"}
    assert loader.calls == 1
    assert handle in registry
    assert len(registry) == 1


def test_missing_file_result_is_cached_too(config: Config, make_namespace: Callable[..., NamespaceHandle]) -> None:
    handle = make_namespace()
    loader = CountingLoader(config)
    registry = StoreRegistry(loader)

    registry.get_or_load(handle)
    (handle.location / "translations.json").write_text('{"greet": {"en": "Late"}}', encoding="utf-8")
    outcome = registry.get_or_load(handle)

    assert outcome.value is not None
    assert outcome.value.is_empty
    assert loader.calls == 1


def test_namespaces_are_isolated(config: Config, make_namespace: Callable[..., NamespaceHandle]) -> None:
    a = make_namespace("mod_a", {"greet": {"en": "A"}})
    b = make_namespace("mod_b", {"greet": {"en": "B"}})
    registry = StoreRegistry(TranslationStoreLoader(config))

    store_a = registry.get_or_load(a).value
    store_b = registry.get_or_load(b).value

    assert store_a is not None
    assert store_b is not None
    assert store_a is not store_b
    assert store_a.object_translations["greet"] == {"en": "A"}
    assert store_b.object_translations["greet"] == {"en": "B"}
    assert set(registry.handles()) == {a, b}


@pytest.mark.parametrize("handle", [None, "mod_a", 42])
def test_invalid_handle_is_reported(config: Config, handle: object) -> None:
    registry = StoreRegistry(TranslationStoreLoader(config))

    outcome = registry.get_or_load(handle)  # type: ignore[arg-type]

    assert outcome.failure is FailureKind.MISSING_HANDLE
    assert len(registry) == 0


def test_loader_exception_yields_empty_store(config: Config, make_namespace: Callable[..., NamespaceHandle]) -> None:
    handle = make_namespace(content={"greet": {"en": "Hi"}})
    registry = StoreRegistry(ExplodingLoader(config))

    outcome = registry.get_or_load(handle)

    assert outcome.is_ok
    assert outcome.value is not None
    assert outcome.value.is_empty
    assert outcome.value.load_status is LoadStatus.READ_FAILURE


def test_concurrent_first_access_loads_once(config: Config, make_namespace: Callable[..., NamespaceHandle]) -> None:
    handle = make_namespace(content={"msgs": [{"en": "A"}, {"en": "B"}]})
    loader = CountingLoader(config, delay=0.05)
    registry = StoreRegistry(loader)
    barrier = threading.Barrier(8)
    results: list[TranslationStore | None] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        store = registry.get_or_load(handle).value
        with results_lock:
            results.append(store)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert loader.calls == 1
    assert len(results) == 8
    assert all(store is results[0] for store in results)


def test_invalid_handle_never_reaches_loader() -> None:
    loader = MagicMock(spec=TranslationStoreLoader)
    registry = StoreRegistry(loader)

    registry.get_or_load(None)

    loader.load.assert_not_called()


def test_loader_is_called_with_handle(make_namespace: Callable[..., NamespaceHandle]) -> None:
    handle = make_namespace()
    loader = MagicMock(spec=TranslationStoreLoader)
    loader.load.return_value = TranslationStore(namespace=handle.name, load_status=LoadStatus.LOADED)
    registry = StoreRegistry(loader)

    outcome = registry.get_or_load(handle)
    registry.get_or_load(handle)

    loader.load.assert_called_once_with(handle)
    assert outcome.value is loader.load.return_value
