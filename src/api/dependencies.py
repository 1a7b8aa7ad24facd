"""Shared FastAPI dependencies.

Holds the process-wide catalog and preference stores, loaded lazily on the
first request and cached at module level, plus request identity helpers.
"""

import logging
from typing import Optional

from fastapi import Header

from src.api.exceptions import AuthenticationRequiredError, PreferenceStoreError
from src.config import get_settings
from src.recommender.catalog import CatalogStore
from src.recommender.preferences import PreferenceStore

# Configure module logger
logger = logging.getLogger(__name__)

# Cached stores
_catalog_store: Optional[CatalogStore] = None
_preference_store: Optional[PreferenceStore] = None


def load_catalog_if_needed() -> CatalogStore:
    """Return the loaded catalog, reading it from disk on first use.

    Raises:
        CatalogNotFoundError: If the catalog file is missing.
        CatalogLoadError: If the catalog cannot be parsed.
    """
    global _catalog_store

    if _catalog_store is not None:
        logger.debug("Using cached catalog")
        return _catalog_store

    store = CatalogStore(get_settings().catalog_path)
    store.load()
    _catalog_store = store
    return _catalog_store


def load_preferences_if_needed() -> PreferenceStore:
    """Return the loaded preference store, reading it on first use.

    Raises:
        PreferenceStoreError: If persisted answers cannot be read.
    """
    global _preference_store

    if _preference_store is not None:
        return _preference_store

    store = PreferenceStore(get_settings().preferences_dir)
    store.load()
    _preference_store = store
    return _preference_store


def get_catalog_store() -> CatalogStore:
    return load_catalog_if_needed()


def get_preference_store() -> PreferenceStore:
    return load_preferences_if_needed()


def get_optional_preference_store() -> Optional[PreferenceStore]:
    """Preference store for read paths; None when it cannot be loaded."""
    try:
        return load_preferences_if_needed()
    except PreferenceStoreError as e:
        logger.warning(f"Preference store unavailable: {e.message}")
        return None


def get_cached_catalog() -> Optional[CatalogStore]:
    """Catalog store if already loaded, without touching disk."""
    return _catalog_store


def get_cached_preferences() -> Optional[PreferenceStore]:
    return _preference_store


def reset_stores() -> None:
    """Drop cached stores so the next request reloads them."""
    global _catalog_store, _preference_store
    _catalog_store = None
    _preference_store = None


def get_optional_user_id(x_user_id: Optional[str] = Header(default=None)) -> Optional[str]:
    """Signed-in shopper id from the auth gateway, or None for guests."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


def get_required_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    user_id = get_optional_user_id(x_user_id)
    if user_id is None:
        raise AuthenticationRequiredError()
    return user_id
