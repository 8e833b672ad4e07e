from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

import localize

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from models.translation_models import NamespaceHandle

CONTENT = {
    "msgs": [{"en": "A"}, {"en": "B", "ru": "Б"}],
    "greet": {"en": "Single", "ru": "Одна"},
}


@pytest.fixture
def mod_dir(make_namespace: Callable[..., NamespaceHandle]) -> Path:
    return make_namespace("my_mod", CONTENT).location


def _stdout_lines(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return capsys.readouterr().out.splitlines()


def test_object_command(mod_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert localize.main(["--lang", "ru", str(mod_dir), "object", "greet"]) == 0
    assert _stdout_lines(capsys) == ["Одна"]


def test_object_command_prints_fallback(mod_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert localize.main([str(mod_dir), "object", "nope", "--fallback", "Hello"]) == 0
    assert _stdout_lines(capsys) == ["Hello"]


def test_random_command_does_not_repeat(mod_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert localize.main([str(mod_dir), "random", "msgs", "--count", "6"]) == 0

    lines = _stdout_lines(capsys)
    assert len(lines) == 6
    assert all(a != b for a, b in zip(lines, lines[1:], strict=False))


def test_index_command(mod_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert localize.main(["--lang", "ru", str(mod_dir), "index", "msgs", "1"]) == 0
    assert localize.main(["--lang", "ru", str(mod_dir), "index", "msgs", "5", "--fallback", "X"]) == 0
    assert _stdout_lines(capsys) == ["Б", "X"]


def test_summary_command(mod_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert localize.main([str(mod_dir), "summary"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["namespace"] == "my_mod"
    assert data["load_status"] == "loaded"
    assert data["arrays"] == {"msgs": 2}
    assert data["objects"] == ["greet"]


def test_missing_translation_file_still_exits_ok(
    make_namespace: Callable[..., NamespaceHandle], capsys: pytest.CaptureFixture[str]
) -> None:
    empty_dir = make_namespace("empty_mod").location

    assert localize.main([str(empty_dir), "object", "greet", "--fallback", "FB"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["FB"]
    assert "using fallbacks" in captured.err


def test_config_file_changes_file_name(
    make_namespace: Callable[..., NamespaceHandle], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    mod_dir = make_namespace("custom_mod").location
    (mod_dir / "strings.json").write_text('{"greet": {"en": "From strings",}}', encoding="utf-8")
    ini_path = tmp_path / "jsonlocalize.ini"
    ini_path.write_text("[LOCALIZE]\nFILENAME = strings.json\n", encoding="utf-8")

    assert localize.main(["--config", str(ini_path), str(mod_dir), "object", "greet"]) == 0
    assert _stdout_lines(capsys) == ["From strings"]


def test_not_a_directory_exits_with_usage_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert localize.main([str(tmp_path / "nowhere"), "summary"]) == 2
    assert "Not a directory" in capsys.readouterr().err


def test_bad_config_exits_with_usage_error(
    mod_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    ini_path = tmp_path / "bad.ini"
    ini_path.write_text("[GENERAL]\nLOG_LEVEL = LOUD\n", encoding="utf-8")

    assert localize.main(["--config", str(ini_path), str(mod_dir), "summary"]) == 2
    assert "Failed to load configuration file" in capsys.readouterr().err


def test_missing_command_is_a_usage_error(mod_dir: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        localize.main([str(mod_dir)])

    assert exc_info.value.code == 2


def test_debug_flag_prints_traces_to_stderr(mod_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert localize.main(["--debug", str(mod_dir), "object", "greet"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["Single"]
    assert "[LOCALIZE] Looking for translations at:" in captured.err
    assert "get_from_object(greet): result=Single" in captured.err


def test_without_debug_flag_traces_are_hidden(mod_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert localize.main([str(mod_dir), "object", "greet"]) == 0

    assert "Looking for translations at:" not in capsys.readouterr().err
