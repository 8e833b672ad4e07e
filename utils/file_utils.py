from __future__ import annotations

import os
from pathlib import Path

__all__: list[str] = [
    "FileMissingError",
    "FileUtils",
    "FileUtilsError",
    "InvalidFileTypeError",
    "UnsupportedFileFormatError",
]


class FileUtils:
    """Path helpers used by the configuration layer and the translation file loader."""

    @staticmethod
    def resolve_path(path: str | Path, *, strict: bool = False) -> Path:
        """Convert a user-supplied path to an absolute path.

        Expands environment variables (e.g., $HOME, %APPDATA%) and ~, and resolves relative
        paths against the current working directory.

        Args:
            path (str | Path): The input path (e.g., "~/logs/$APP_ENV/jsonlocalize.log").
            strict (bool): Raise if the path does not exist. Defaults to False.

        Returns:
            Path: The absolute path.
        """
        expanded: str = os.path.expandvars(str(path))
        user_expanded: Path = Path(expanded).expanduser()

        if user_expanded.is_absolute():
            return user_expanded.resolve(strict=strict)
        return (Path.cwd() / user_expanded).resolve(strict=strict)

    @staticmethod
    def check_readable_file(file_path: Path) -> None:
        """Check that a path names an existing regular file.

        Args:
            file_path (Path): Path to check.

        Raises:
            FileMissingError: If nothing exists at the path.
            InvalidFileTypeError: If the path is a directory.
        """
        if not file_path.exists():
            msg = f"File does not exist: {file_path}"
            raise FileMissingError(msg)
        if file_path.is_dir():
            msg = f"Invalid file type (directory): {file_path}"
            raise InvalidFileTypeError(msg)

    @staticmethod
    def validate_file_name(file_name: str, suffix: list[str] | str) -> None:
        """Validate a bare file name (no directory part) and its suffix.

        Args:
            file_name (str): Name such as "translations.json".
            suffix (list[str] | str): Allowed suffix(es), e.g. ".json".

        Raises:
            InvalidFileTypeError: If the name is empty or contains a directory component.
            UnsupportedFileFormatError: If the suffix is not allowed.
        """
        if isinstance(suffix, str):
            suffix = [suffix]

        name_path = Path(file_name)
        if not file_name.strip() or name_path.name != file_name:
            msg = f"Expected a bare file name, got: '{file_name}'"
            raise InvalidFileTypeError(msg)
        if name_path.suffix.lower() not in [s.lower() for s in suffix]:
            msg = f"Unsupported file format: '{name_path.suffix}'. Supported formats are: {', '.join(suffix)}"
            raise UnsupportedFileFormatError(msg)


class FileUtilsError(Exception):
    """Custom exception for FileUtils-related errors."""


class FileMissingError(FileUtilsError):
    """Custom exception for file missing errors."""


class InvalidFileTypeError(FileUtilsError):
    """Custom exception for invalid file type errors."""


class UnsupportedFileFormatError(FileUtilsError):
    """Custom exception for unsupported file format errors."""
