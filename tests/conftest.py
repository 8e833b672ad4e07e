from __future__ import annotations

import json
import logging
import warnings
from typing import TYPE_CHECKING, Any

import pytest

from models.config_models import Config
from models.translation_models import NamespaceHandle
from utils.logger_utils import DEFAULT_NAMESPACE, LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_logger_utils() -> Iterator[None]:
    """Undo LoggerUtils configuration so each test starts with an untouched logger tree."""
    showwarning = warnings.showwarning
    yield
    warnings.showwarning = showwarning
    namespace_logger: logging.Logger = logging.getLogger(DEFAULT_NAMESPACE)
    for handler in list(namespace_logger.handlers):
        namespace_logger.removeHandler(handler)
        handler.close()
    namespace_logger.setLevel(logging.NOTSET)
    LoggerUtils._configured = False  # noqa: SLF001
    LoggerUtils._instance = None  # noqa: SLF001
    LoggerUtils._LOGGER_NAMESPACE = DEFAULT_NAMESPACE  # noqa: SLF001


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def debug_config() -> Config:
    cfg = Config()
    cfg.GENERAL.DEBUG = True
    return cfg


@pytest.fixture
def make_namespace(tmp_path: Path) -> Callable[..., NamespaceHandle]:
    """Create a namespace directory, optionally with a translations.json.

    ``content`` may be a JSON-serializable object or raw text written verbatim.
    """

    def _make(name: str = "mod_a", content: Any = None) -> NamespaceHandle:
        directory: Path = tmp_path / name
        directory.mkdir(exist_ok=True)
        if content is not None:
            text: str = content if isinstance(content, str) else json.dumps(content, ensure_ascii=False)
            (directory / "translations.json").write_text(text, encoding="utf-8")
        return NamespaceHandle.for_directory(name, directory)

    return _make
