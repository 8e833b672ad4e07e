"""Configuration file loader and validator.

Reads the INI configuration file into the Config dataclass, coercing each value to the type of
the matching dataclass field, and validates the result.
Raises exceptions for any issues encountered during loading; this runs once at startup, before
any string is resolved.
"""

from __future__ import annotations

import ast
import configparser
import logging
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from models.config_models import Config
from models.re_models import LANGUAGE_CODE_PATTERN
from utils.file_utils import FileMissingError, FileUtils, FileUtilsError
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Callable
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "Config",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_CONFIG_FILENAME: str = "jsonlocalize.ini"


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration file contains an invalid type."""


class ConfigLoader:
    """Handles loading and validation of configuration settings.

    Args:
        config_filename (str | Path): INI file to load.
        debug (bool): Force GENERAL.DEBUG on, regardless of the file.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values/types.
    """

    def __init__(self, *, config_filename: str | Path = DEFAULT_CONFIG_FILENAME, debug: bool = False) -> None:
        config_path = Path(config_filename)
        msg: str
        try:
            FileUtils.check_readable_file(config_path)
        except FileMissingError:
            msg = f"Configuration file '{config_filename}' not found."
            raise ConfigFileNotFoundError(msg) from None
        except FileUtilsError as err:
            msg = f"Configuration file '{config_filename}' is not usable: {err}"
            raise ConfigFormatError(msg) from None

        parser: ConfigParser = ConfigParser()
        # keep key case so that INI keys map directly onto the upper-case dataclass fields
        parser.optionxform = str  # type: ignore[assignment,method-assign]

        try:
            parser.read(config_path, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self._convert_settings(parser)
        if debug:
            self.config.GENERAL.DEBUG = True
        self._validate_settings()

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Copy every known section and key from the parser onto the Config object.

        Raises:
            ConfigFormatError: If a value cannot be coerced to the expected type.
        """
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Skipping undefined section: '%s'", section.name)
                continue
            for key in fields(getattr(self.config, section.name)):
                if not parser.has_option(section.name, key.name):
                    logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                    continue
                formatted_value = formatter.apply_format(section, key)
                setattr(getattr(self.config, section.name), key.name, formatted_value)

    def _validate_settings(self) -> None:
        """Validate the translation file name, log level and language list.

        Raises:
            ConfigFormatError: If validation fails for any setting.
        """
        self._validate_filename("LOCALIZE", "FILENAME")
        self._validate_log_level("GENERAL", "LOG_LEVEL")
        self._inspect_language_codes("LOCALIZE", "KNOWN_LANGUAGES")

    def _validate_filename(self, section_name: str, key_name: str) -> None:
        value: str = getattr(getattr(self.config, section_name), key_name)
        try:
            FileUtils.validate_file_name(value, ".json")
        except FileUtilsError as err:
            msg: str = f"Invalid value for '{section_name}.{key_name}': {err}"
            raise ConfigValueError(msg) from None

    def _validate_log_level(self, section_name: str, key_name: str) -> None:
        value: str = getattr(getattr(self.config, section_name), key_name)
        if value.upper() not in logging.getLevelNamesMapping():
            msg: str = f"Unknown logging level for '{section_name}.{key_name}': {value}"
            raise ConfigValueError(msg)
        setattr(getattr(self.config, section_name), key_name, value.upper())

    def _inspect_language_codes(self, section_name: str, key_name: str) -> None:
        """Warn about entries that do not look like language codes.

        The list is advisory, so odd entries are kept; only a wrong type is an error.

        Raises:
            ConfigTypeError: If the configured value is neither list nor str.
        """
        value: str | list[str] = getattr(getattr(self.config, section_name), key_name)
        field_name: str = f"{section_name}.{key_name}"

        if not isinstance(value, (list, str)):
            msg: str = f"Unsupported type used for '{field_name}': {type(value)}"
            raise ConfigTypeError(msg)

        values: list[str] = value if isinstance(value, list) else [value]
        for val in values:
            if not isinstance(val, str) or not LANGUAGE_CODE_PATTERN.match(val):
                logger.warning("Value '%s' in '%s' does not look like a language code", val, field_name)
        setattr(getattr(self.config, section_name), key_name, [str(val) for val in values])


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, int, float, str, list)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert an INI value to the type of the field's default value.

        Args:
            section (DataclassField[Any]): Configuration section field containing the key.
            key (DataclassField[Any]): Target field within the section.

        Returns:
            Any: Parsed value.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If a literal evaluates to the wrong type.
        """
        current: Any = getattr(getattr(self.config, section.name), key.name)
        formatters: dict[type, Callable[[DataclassField[Any], DataclassField[Any]], Any]] = {
            bool: self.parse_as_boolean,
            int: self.parse_as_integer,
            float: self.parse_as_float,
            str: self.parse_as_string,
        }

        formatter = formatters.get(type(current))
        if formatter:
            try:
                return formatter(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            value: Any = ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

        if not isinstance(value, type(current)):
            msg = f"Expected {type(current).__name__} for {section.name}.{key.name}, got {type(value).__name__}"
            raise ConfigTypeError(msg)
        return value

    def _strip_quotes(self, section: DataclassField[Any], key: DataclassField[Any]) -> str:
        value: str = self.parser.get(section.name, key.name).strip()
        for char in ("'", '"'):
            if len(value) >= 2 and value.startswith(char) and value.endswith(char):
                return value[1:-1]
        return value

    def parse_as_string(self, section: DataclassField[Any], key: DataclassField[Any]) -> str:
        """Return the INI value, with one pair of surrounding quotes removed."""
        return self._strip_quotes(section, key)

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        return float(self._strip_quotes(section, key))

    def parse_as_integer(self, section: DataclassField[Any], key: DataclassField[Any]) -> int:
        return int(float(self._strip_quotes(section, key)))

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        return self.parser.getboolean(section.name, key.name)
