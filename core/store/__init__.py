"""Translation store package.

Loads translation files into per-namespace stores and caches them for the process lifetime.
"""

from __future__ import annotations

from core.store.loader import TranslationStoreLoader
from core.store.registry import StoreRegistry

__all__: list[str] = ["StoreRegistry", "TranslationStoreLoader"]
