# donors/store.py
"""
Request Store Adapter - key-value access to the shared request collection.

Every dashboard session reads and rewrites the same collection blob. There is
no locking and no version token: an accept rewrites the whole collection, so
two sessions writing at the same moment can lose each other's edits (last
write wins).
"""
import logging

from django.conf import settings
from django.core.cache import caches

from .exceptions import CorruptStoreError

logger = logging.getLogger(__name__)


class MappingStore:
    """Store backed by any dict-like object, e.g. request.session."""

    def __init__(self, mapping=None):
        self.mapping = {} if mapping is None else mapping

    def read(self, key):
        return self.mapping.get(key)

    def write(self, key, value):
        self.mapping[key] = value
        return True

    def remove(self, key):
        self.mapping.pop(key, None)


class CacheStore:
    """Store backed by a Django cache alias, shared by every session and worker."""

    def __init__(self, alias=None):
        self.alias = alias or settings.LIFELINK_STORE_CACHE

    @property
    def cache(self):
        return caches[self.alias]

    def read(self, key):
        return self.cache.get(key)

    def write(self, key, value):
        # No expiry: requests live until the hospital side removes them
        self.cache.set(key, value, timeout=None)
        return True

    def remove(self, key):
        self.cache.delete(key)


def load_requests(store, key=None):
    """Read the raw request collection. Absent means empty."""
    key = key or settings.LIFELINK_REQUESTS_KEY
    raw = store.read(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.error(f"Store key '{key}' holds {type(raw).__name__}, expected a list")
        raise CorruptStoreError(key, f'expected a list, got {type(raw).__name__}')
    return raw


def save_requests(store, requests, key=None):
    """Write the entire collection back (no partial patch)."""
    key = key or settings.LIFELINK_REQUESTS_KEY
    return store.write(key, list(requests))


def is_available(store, key=None):
    """Availability toggle. A donor who never toggled is available."""
    value = store.read(key or settings.LIFELINK_AVAILABILITY_KEY)
    if value is None:
        return True
    return bool(value)


def set_available(store, available, key=None):
    store.write(key or settings.LIFELINK_AVAILABILITY_KEY, bool(available))
    return bool(available)
