from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final

from models.re_models import TRAILING_COMMA_PATTERN

if TYPE_CHECKING:
    from re import Match

__all__: list[str] = ["JsonUtils"]

_UTF8_BOM: Final[str] = "\ufeff"


class JsonUtils:
    """Helpers for decoding hand-written JSON files."""

    @staticmethod
    def strip_trailing_commas(text: str) -> str:
        """Remove commas that directly precede a closing bracket or brace.

        Commas inside string literals are left alone.

        Args:
            text (str): JSON text, possibly with trailing commas.

        Returns:
            str: The text without trailing commas.
        """

        def _keep_strings(match: Match[str]) -> str:
            return match.group(1) or ""

        return TRAILING_COMMA_PATTERN.sub(_keep_strings, text)

    @staticmethod
    def loads_tolerant(text: str) -> Any:
        """Decode JSON text written by hand.

        Accepts a leading byte order mark and trailing commas, which are common in translation
        files edited by people. Object key order is preserved.

        Args:
            text (str): The JSON text.

        Returns:
            Any: The decoded value.

        Raises:
            json.JSONDecodeError: If the text is still not valid JSON after cleanup.
        """
        text = text.removeprefix(_UTF8_BOM)
        return json.loads(JsonUtils.strip_trailing_commas(text))
