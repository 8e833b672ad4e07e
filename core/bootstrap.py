"""Startup helper that wires logging, configuration and the resolution engine together."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.engine import LocalizeEngine
from core.version import NAME, VERSION
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from pathlib import Path

    from core.language import LanguageSource
    from models.config_models import Config

__all__: list[str] = ["create_engine"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


def create_engine(
    config: Config,
    language_source: LanguageSource | None,
    *,
    log_file: str | Path | None = None,
    use_null_console: bool = False,
) -> LocalizeEngine:
    """Configure logging and build the engine shared by all consumers.

    In debug mode the console shows the debug traces as well, not only warnings.

    Args:
        config (Config): Loaded configuration.
        language_source (LanguageSource | None): Callable returning the host's language code.
        log_file (str | Path | None): Overrides GENERAL.LOG_FILE when given.
        use_null_console (bool): Suppress console log output.

    Returns:
        LocalizeEngine: The engine.
    """
    filename: str | Path = log_file if log_file is not None else config.GENERAL.LOG_FILE
    if str(filename).strip():
        filename = FileUtils.resolve_path(filename)

    logger_utils = LoggerUtils(filename, use_null_console=use_null_console)
    logger_utils.set_level("DEBUG" if config.debug else config.GENERAL.LOG_LEVEL)  # type: ignore[arg-type]
    if config.debug:
        logger_utils.set_console_level("DEBUG")

    logger.info("================================================")
    logger.info("[%s] v%s loaded!", NAME, VERSION)
    logger.info(" - JSON-based localization for module content")
    logger.info(" - Runtime language detection")
    logger.info(" - Per-module translation support")
    logger.info("================================================")
    if config.debug:
        logger.info("Debug mode enabled: translation loading and lookups are traced")

    return LocalizeEngine(config, language_source)
