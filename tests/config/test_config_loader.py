from __future__ import annotations

import logging
from pathlib import Path
from textwrap import dedent

import pytest

from config.loader import (
    ConfigFileNotFoundError,
    ConfigFormatError,
    ConfigLoader,
    ConfigTypeError,
    ConfigValueError,
)


def _write_ini(tmp_path: Path, content: str) -> Path:
    ini_path: Path = tmp_path / "jsonlocalize.ini"
    ini_path.write_text(dedent(content), encoding="utf-8")
    return ini_path


def test_config_loader_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigFileNotFoundError):
        ConfigLoader(config_filename=tmp_path / "missing.ini")


def test_defaults_when_sections_absent(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "")

    config = ConfigLoader(config_filename=ini_path).config

    assert config.GENERAL.DEBUG is False
    assert config.GENERAL.LOG_LEVEL == "INFO"
    assert config.LOCALIZE.FILENAME == "translations.json"
    assert "pt-BR" in config.LOCALIZE.KNOWN_LANGUAGES


def test_values_are_coerced_by_field_type(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = yes
        LOG_FILE = "~/logs/jsonlocalize.log"
        LOG_LEVEL = debug

        [LOCALIZE]
        FILENAME = 'strings.json'
        KNOWN_LANGUAGES = ["en", "ja"]
        """,
    )

    config = ConfigLoader(config_filename=ini_path).config

    assert config.GENERAL.DEBUG is True
    assert config.GENERAL.LOG_FILE == "~/logs/jsonlocalize.log"
    assert config.GENERAL.LOG_LEVEL == "DEBUG"
    assert config.LOCALIZE.FILENAME == "strings.json"
    assert config.LOCALIZE.KNOWN_LANGUAGES == ["en", "ja"]


def test_debug_override(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = False
        """,
    )

    assert ConfigLoader(config_filename=ini_path, debug=True).config.debug is True


def test_invalid_boolean_value_raises_config_value_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = maybe
        """,
    )

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=ini_path)


@pytest.mark.parametrize("filename", ["'translations.yaml'", "'sub/translations.json'", "''"])
def test_invalid_filename_raises_config_value_error(tmp_path: Path, filename: str) -> None:
    ini_path: Path = _write_ini(tmp_path, f"[LOCALIZE]\nFILENAME = {filename}\n")

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=ini_path)


def test_unknown_log_level_raises(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "[GENERAL]\nLOG_LEVEL = LOUD\n")

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=ini_path)


def test_language_list_with_wrong_type_raises_type_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "[LOCALIZE]\nKNOWN_LANGUAGES = 1\n")

    with pytest.raises(ConfigTypeError):
        ConfigLoader(config_filename=ini_path)


def test_language_list_with_bad_syntax_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, '[LOCALIZE]\nKNOWN_LANGUAGES = ["en",\n')

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=ini_path)


def test_odd_language_codes_are_kept_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    ini_path: Path = _write_ini(tmp_path, '[LOCALIZE]\nKNOWN_LANGUAGES = ["en", "klingon!"]\n')

    with caplog.at_level(logging.WARNING):
        config = ConfigLoader(config_filename=ini_path).config

    assert config.LOCALIZE.KNOWN_LANGUAGES == ["en", "klingon!"]
    assert "klingon!" in caplog.text


def test_malformed_ini_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "DEBUG = True\n")

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=ini_path)


def test_directory_as_config_file_raises_format_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigFormatError, match="not usable"):
        ConfigLoader(config_filename=tmp_path)


def test_sample_config_file_loads() -> None:
    sample: Path = Path(__file__).resolve().parents[2] / "jsonlocalize.ini"

    config = ConfigLoader(config_filename=sample).config

    assert config.GENERAL.LOG_FILE == ""
    assert config.LOCALIZE.FILENAME == "translations.json"
    assert config.LOCALIZE.KNOWN_LANGUAGES[-1] == "pt-BR"
