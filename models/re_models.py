"""Regular expressions used when reading translation files and configuration.

Patterns for tolerant JSON decoding and for recognizing language codes.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Final

__all__: list[str] = [
    "LANGUAGE_CODE_PATTERN",
    "TRAILING_COMMA_PATTERN",
]

# A JSON string literal (group 1), or a comma followed only by whitespace and a closing bracket.
# String literals are matched first so that commas inside them are never touched.
# Example: '{"a": ["x", "y",],}' -> '{"a": ["x", "y"]}'
TRAILING_COMMA_PATTERN: Final[Pattern[str]] = re.compile(
    r"""
    ("(?:[^"\\]|\\.)*")     # string literal, kept as is
    |
    ,(?=\s*[\]}])           # trailing comma, removed
""",
    re.VERBOSE | re.DOTALL,
)

# BCP 47 style language code, loosely
# Examples: "en", "ru", "pt-BR", "zh_Hant"
LANGUAGE_CODE_PATTERN: Final[Pattern[str]] = re.compile(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$")
