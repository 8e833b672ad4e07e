"""Configuration data models for the localization core.

Each dataclass is one INI section. Field names match the INI keys, and field defaults are used
for any key the file does not define.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = [
    "Config",
    "General",
    "Localize",
]

DEFAULT_KNOWN_LANGUAGES: list[str] = ["en", "ru", "fr", "de", "es", "it", "pl", "pt-BR"]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""
    LOG_LEVEL: str = "INFO"


@dataclass
class Localize:
    # Name of the translation file looked up in each namespace directory
    FILENAME: str = "translations.json"
    # Advisory only; unlisted codes are still accepted
    KNOWN_LANGUAGES: list[str] = field(default_factory=lambda: list(DEFAULT_KNOWN_LANGUAGES))


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    LOCALIZE: Localize = field(default_factory=Localize)

    @property
    def debug(self) -> bool:
        return self.GENERAL.DEBUG
