"""Models for loaded translation data.

Defines the namespace handle that identifies a consuming module, the per-namespace translation
store, the node-shape classification used while loading, and a serializable store summary.
"""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import ModuleType
from typing import Any

from dataclasses_json import DataClassJsonMixin

__all__: list[str] = [
    "DEFAULT_LANGUAGE",
    "LanguageRecord",
    "LoadStatus",
    "NamespaceHandle",
    "NodeShape",
    "StoreSummary",
    "TranslationStore",
]

type LanguageRecord = dict[str, str]

DEFAULT_LANGUAGE: str = "en"


@dataclass(frozen=True)
class NamespaceHandle:
    """Identity of one consuming module.

    Used as the cache key for the module's translation store and as the directory in which its
    translation file is looked up. Two handles are the same namespace only if both fields match.

    Attributes:
        name (str): Module name, used in log messages.
        location (Path): Directory holding the module's translation file.
    """

    name: str
    location: Path

    @classmethod
    def for_module(cls, module: ModuleType | str) -> NamespaceHandle:
        """Build the handle for an imported module.

        The translation file is expected next to the module's source file, so a plugin that calls
        ``NamespaceHandle.for_module(__name__)`` reads the translations.json in its own directory.

        Args:
            module (ModuleType | str): A module object or the dotted name of an imported module.

        Returns:
            NamespaceHandle: Handle named after the module.

        Raises:
            LookupError: If a module name is not present in sys.modules.
            ValueError: If the module has no source file (built-in or namespace package).
        """
        if isinstance(module, str):
            try:
                module = sys.modules[module]
            except KeyError:
                msg = f"Module '{module}' has not been imported"
                raise LookupError(msg) from None

        module_file: str | None = getattr(module, "__file__", None)
        if not module_file:
            msg = f"Module '{module.__name__}' has no file location"
            raise ValueError(msg)
        return cls(name=module.__name__, location=Path(module_file).resolve().parent)

    @classmethod
    def for_directory(cls, name: str, directory: str | Path) -> NamespaceHandle:
        """Build a handle for an explicit directory."""
        return cls(name=name, location=Path(directory).resolve())


class NodeShape(Enum):
    """Shape of a decoded JSON node."""

    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"

    @classmethod
    def of(cls, node: Any) -> NodeShape:
        if isinstance(node, list):
            return cls.SEQUENCE
        if isinstance(node, dict):
            return cls.MAPPING
        return cls.SCALAR


class LoadStatus(Enum):
    """How a translation store was populated."""

    LOADED = "loaded"
    MISSING_FILE = "missing_file"
    PARSE_FAILURE = "parse_failure"
    READ_FAILURE = "read_failure"


@dataclass
class TranslationStore:
    """Translation data and selection state for one namespace.

    A key appears in at most one of array_translations and object_translations. After loading,
    only last_index_by_array and current_lang change, and only while holding lock.

    Attributes:
        namespace (str): Name of the owning namespace.
        array_translations (dict[str, list[LanguageRecord]]): Keys whose value is a list of records.
        object_translations (dict[str, LanguageRecord]): Keys whose value is a single record.
        last_index_by_array (dict[str, int]): Index last returned by random selection, per array key.
        current_lang (str): Language seen on the previous resolution. Used for change logging only.
        source_path (Path | None): Translation file that was probed.
        load_status (LoadStatus): Result of the load attempt.
        lock (threading.Lock): Serializes updates to the selection state.
    """

    namespace: str = ""
    array_translations: dict[str, list[LanguageRecord]] = field(default_factory=dict)
    object_translations: dict[str, LanguageRecord] = field(default_factory=dict)
    last_index_by_array: dict[str, int] = field(default_factory=dict)
    current_lang: str = DEFAULT_LANGUAGE
    source_path: Path | None = None
    load_status: LoadStatus = LoadStatus.MISSING_FILE
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.array_translations and not self.object_translations

    def summarize(self) -> StoreSummary:
        return StoreSummary(
            namespace=self.namespace,
            source_path=str(self.source_path) if self.source_path is not None else None,
            load_status=self.load_status.value,
            arrays={key: len(records) for key, records in self.array_translations.items()},
            objects=list(self.object_translations),
        )


@dataclass
class StoreSummary(DataClassJsonMixin):
    """Serializable overview of a translation store.

    Attributes:
        namespace (str): Namespace name.
        source_path (str | None): Probed translation file.
        load_status (str): LoadStatus value.
        arrays (dict[str, int]): Array keys and their lengths, in file order.
        objects (list[str]): Object keys, in file order.
    """

    namespace: str
    source_path: str | None
    load_status: str
    arrays: dict[str, int] = field(default_factory=dict)
    objects: list[str] = field(default_factory=list)
