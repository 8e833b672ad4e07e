"""Translation store loader.

Reads one namespace's translation file and turns it into a TranslationStore. Any problem with the
file produces an empty store and a log line; the loader never raises for bad data.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from models.translation_models import LoadStatus, NodeShape, TranslationStore
from utils.json_utils import JsonUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from pathlib import Path

    from models.config_models import Config
    from models.translation_models import LanguageRecord, NamespaceHandle

__all__: list[str] = ["TranslationStoreLoader"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TranslationStoreLoader:
    """Builds translation stores from translation files.

    The top level of a translation file maps each key to either a list of language maps (an
    array key, used for random or indexed selection) or a single language map (an object key).
    Top-level scalars are ignored.
    """

    def __init__(self, config: Config) -> None:
        self.config: Config = config

    def translation_path(self, handle: NamespaceHandle) -> Path:
        return handle.location / self.config.LOCALIZE.FILENAME

    def load(self, handle: NamespaceHandle) -> TranslationStore:
        """Load the translation file for a namespace.

        Args:
            handle (NamespaceHandle): The namespace to load.

        Returns:
            TranslationStore: The populated store, or an empty one if the file is missing,
            unreadable or malformed. load_status tells which.
        """
        json_path: Path = self.translation_path(handle)
        store = TranslationStore(namespace=handle.name, source_path=json_path)

        if self.config.debug:
            logger.info("Looking for translations at: %s", json_path)

        if not json_path.is_file():
            logger.warning("No %s found for %s, using fallbacks", json_path.name, handle.name)
            store.load_status = LoadStatus.MISSING_FILE
            return store

        try:
            json_content: str = json_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as err:
            logger.error("Failed to read %s for %s: %s", json_path.name, handle.name, err)
            store.load_status = LoadStatus.READ_FAILURE
            return store

        if self.config.debug:
            logger.info("JSON content length for %s: %d chars", handle.name, len(json_content))

        try:
            root: Any = JsonUtils.loads_tolerant(json_content)
        except json.JSONDecodeError as err:
            logger.error("Failed to parse %s for %s: %s", json_path.name, handle.name, err)
            store.load_status = LoadStatus.PARSE_FAILURE
            return store

        if NodeShape.of(root) is not NodeShape.MAPPING:
            logger.error(
                "Failed to parse %s for %s: top level is a %s, expected a mapping",
                json_path.name,
                handle.name,
                NodeShape.of(root).value,
            )
            store.load_status = LoadStatus.PARSE_FAILURE
            return store

        logger.info("Successfully parsed %s for %s", json_path.name, handle.name)
        self.populate(store, root)
        store.load_status = LoadStatus.LOADED

        if self.config.debug:
            logger.info(
                "Loaded translations for %s: %d arrays, %d objects",
                handle.name,
                len(store.array_translations),
                len(store.object_translations),
            )
        return store

    def populate(self, store: TranslationStore, root: dict[str, Any]) -> None:
        """Classify each top-level entry and add it to the store.

        Args:
            store (TranslationStore): Store to fill.
            root (dict[str, Any]): Decoded top-level mapping.
        """
        for key, node in root.items():
            shape: NodeShape = NodeShape.of(node)
            if shape is NodeShape.SEQUENCE:
                records: list[LanguageRecord] = [self.decode_record(item) for item in node]
                store.array_translations[key] = records
                if self.config.debug:
                    logger.info("Loaded array '%s' with %d items for %s", key, len(records), store.namespace)
            elif shape is NodeShape.MAPPING:
                record: LanguageRecord = self.decode_record(node)
                store.object_translations[key] = record
                if self.config.debug:
                    logger.info("Loaded object '%s' with %d languages for %s", key, len(record), store.namespace)
            elif self.config.debug:
                logger.info("Ignoring scalar entry '%s' for %s", key, store.namespace)

    @staticmethod
    def decode_record(node: Any) -> LanguageRecord:
        """Decode one language map.

        Strings are kept verbatim, numbers and booleans become their JSON text, and null or nested
        containers become "" (treated as absent on lookup). A node that is not a mapping yields
        an empty record, which still occupies its position in an array.

        Args:
            node (Any): Decoded JSON node.

        Returns:
            LanguageRecord: Language code to text, in file order.
        """
        if NodeShape.of(node) is not NodeShape.MAPPING:
            return {}

        record: LanguageRecord = {}
        for lang, value in node.items():
            if isinstance(value, str):
                record[lang] = value
            elif isinstance(value, (bool, int, float)):
                record[lang] = json.dumps(value)
            else:
                record[lang] = ""
        return record
