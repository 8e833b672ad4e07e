from __future__ import annotations

import logging
import sys
import warnings
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, NamedTuple, Self, TextIO

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LoggerUtils", "LogLevel"]

type LevelType = Literal[
    "NOTSET",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

_LOG_FILE_SIZE: Final[int] = 2 * 1024 * 1024  # 2MB
_LOG_BACKUP_COUNT: Final[int] = 2

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
DEFAULT_NAMESPACE: Final[str] = "JsonLocalize"


class LogLevel(NamedTuple):
    """Logging level as a (name, value) pair.

    Attributes:
        name (str): Level name such as 'INFO'.
        value (int): Numeric level.
    """

    name: str
    value: int


class LoggerUtils:
    """Singleton that configures the 'JsonLocalize' logger tree.

    The host application normally owns logging. This class only attaches handlers to the
    namespace logger, so messages from the localization core can be routed to the console
    and to a rotating file without touching the host's root logger.

    Attributes:
        _LOGGER_NAMESPACE (str): Prefix for every logger returned by get_logger().
        _configured (bool): Set once handlers have been attached.
        _instance (LoggerUtils | None): The singleton instance.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False
    _instance: ClassVar[Self | None] = None

    def __new__(cls, *args, **kwargs) -> Self:
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "", *, use_null_console: bool = False) -> None:
        """Attach console and file handlers to the namespace logger.

        Calling this again after the first configuration does nothing.

        Args:
            filename (str | Path): Absolute path of the log file. Empty disables file logging.
            use_null_console (bool): Use a NullHandler instead of writing to stderr.
        """
        if LoggerUtils._configured:
            return

        self.root_logger: logging.Logger = logging.getLogger(self._LOGGER_NAMESPACE)
        self._use_null_console: bool = bool(use_null_console) or sys.stderr is None
        filename = str(filename)
        self.root_logger.setLevel(DEFAULT_LOG_LEVEL)

        self._console_handler: StreamHandler[TextIO] | None = None

        self._console_logging()
        if filename.strip():
            self._file_logging(filename)

        LoggerUtils._configured = True

    def capture_warnings(self) -> None:
        """Send warnings.warn() output to the log.

        Replaces the process-wide warnings.showwarning. Only the command-line tool calls this.
        """
        warnings.showwarning = self.warning_to_log

    def warning_to_log(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        """Send warnings.warn() output to the log. Signature matches warnings.showwarning."""
        _ = file, line
        self.root_logger.warning("%s:%d: %s: %s", filename, lineno, category.__name__, message)

    @classmethod
    def initialize(cls, namespace: str) -> None:
        """Change the logger namespace before the first configuration.

        Raises:
            RuntimeError: If handlers were already attached.
        """
        if cls._configured:
            msg = "LoggerUtils is already configured. Reinitialization is not allowed."
            raise RuntimeError(msg)

        cls._LOGGER_NAMESPACE = namespace

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    def _console_logging(self) -> None:
        """Console output shows WARNING and above by default, message text only."""
        if self._use_null_console:
            if not self._has_handler(NullHandler):
                self.root_logger.addHandler(NullHandler())
            return

        if self._has_handler(StreamHandler):
            self.root_logger.warning("Console logging is already configured.")
            return

        console_handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(Formatter("[LOCALIZE] %(message)s"))
        self.root_logger.addHandler(console_handler)
        self._console_handler = console_handler

    def _file_logging(self, filename: str) -> None:
        """Write everything from DEBUG up to a UTF-8 rotating file.

        Args:
            filename (str): Absolute path to the log file.
        """
        if self._has_handler(RotatingFileHandler):
            self.root_logger.warning("File logging is already configured.")
            return

        try:
            file_handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except (FileNotFoundError, PermissionError):
            self.root_logger.error("Incorrect log file name: %s\nLogging to the file is not performed.", filename)
            return

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            Formatter("%(asctime)s %(levelname)-8s %(thread)5d %(lineno)4d %(name)-36s\t%(funcName)s\t%(message)s")
        )
        self.root_logger.addHandler(file_handler)

    def _has_handler(self, handler_type: type) -> bool:
        return any(isinstance(h, handler_type) for h in self.root_logger.handlers)

    def set_level(self, level: LevelType) -> None:
        """Set the namespace logger level. Unknown names fall back to INFO with a warning."""
        level_map: dict[str, int] = logging.getLevelNamesMapping()
        try:
            self.root_logger.setLevel(level_map[level.upper()])
        except KeyError:
            self.root_logger.setLevel(DEFAULT_LOG_LEVEL)
            self.root_logger.warning("Unknown logging level '%s' specified.\nLogging level set to 'INFO'.", level)

    def set_console_level(self, level: LevelType) -> None:
        """Set the console handler level. Unknown names leave it unchanged with a warning.

        Has no effect when the console output is a NullHandler.
        """
        if self._console_handler is None:
            return
        level_map: dict[str, int] = logging.getLevelNamesMapping()
        try:
            self._console_handler.setLevel(level_map[level.upper()])
        except KeyError:
            self.root_logger.warning("Unknown console logging level '%s' specified.", level)

    def get_level(self) -> LogLevel:
        level_value: int = self.root_logger.getEffectiveLevel()
        return LogLevel(name=logging.getLevelName(level_value), value=level_value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Return the logger '<namespace>.<name>', or the namespace logger when name is None.

        Args:
            name (str | None): Usually the caller's __name__.

        Returns:
            logging.Logger: The logger instance.
        """
        full_name: str | None
        if LoggerUtils._LOGGER_NAMESPACE:
            full_name = f"{LoggerUtils._LOGGER_NAMESPACE}.{name}" if name else LoggerUtils._LOGGER_NAMESPACE
        else:
            full_name = name or None
        return logging.getLogger(full_name)
