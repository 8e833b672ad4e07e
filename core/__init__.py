"""Localization core for jsonlocalize.

This package contains the resolution engine, the language fallback resolver, the per-namespace
translation store loader and registry, and the startup helper.
"""

from core.bootstrap import create_engine
from core.engine import BoundLocalizer, LocalizeEngine
from core.language import LanguageResolver, LanguageSource
from core.store import StoreRegistry, TranslationStoreLoader
from core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "BoundLocalizer",
    "LanguageResolver",
    "LanguageSource",
    "LocalizeEngine",
    "StoreRegistry",
    "TranslationStoreLoader",
    "create_engine",
]
