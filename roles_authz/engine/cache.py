"""
Read-through cache for the permissions granted to each role.

Two cache clients share one interface and are chosen when the cache is built:

    - TaggedCacheClient: entries live in a shared Django cache backend, grouped
      under a tag (the role-permission join table) and expire after a TTL.
      Flushing the tag drops the entries of every role at once.
    - LocalCacheClient: entries live in a process-local store with no expiry.
      Flushing is not supported, so entries stay until the process restarts.

Usage:
    from roles_authz.engine.cache import get_permission_cache
    permissions = get_permission_cache("roles_authz_role_permissions", "roles_authz.role").get(role)

Reads the `ROLES_AUTHZ_CACHE_*` settings, see roles_authz/settings/common.py.
"""

import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any
from uuid import uuid4

from django.conf import settings
from django.core.cache import caches
from django.core.cache.backends.base import BaseCache
from django.core.cache.backends.locmem import LocMemCache

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 60
DEFAULT_LOCAL_CACHE_LOCATION = "roles_authz_permissions"

_MISSING = object()


class BaseCacheClient(ABC):
    """Interface of the stores backing a PermissionCache.

    Attributes:
        supports_tags (bool): Whether flush() actually drops the stored entries.
        cache (BaseCache): The Django cache backend holding the entries.
    """

    supports_tags: bool = False
    cache: BaseCache

    def remember(self, key: str, populate: Callable[[], Any]) -> Any:
        """Return the value stored under key, computing and storing it on a miss.

        Args:
            key: The cache key.
            populate: Zero-argument callable returning the value to store.

        Returns:
            The cached or freshly computed value.
        """
        store_key = self.make_key(key)
        value = self.cache.get(store_key, _MISSING)
        if value is _MISSING:
            logger.debug(f"Permission cache miss for {store_key}")
            value = populate()
            self.cache.set(store_key, value, self.timeout)
        return value

    @property
    @abstractmethod
    def timeout(self) -> int | None:
        """Lifetime of new entries in seconds, None for no expiry."""

    @abstractmethod
    def make_key(self, key: str) -> str:
        """Map a permission cache key to the key used in the backend."""

    @abstractmethod
    def flush(self) -> None:
        """Drop the entries written by this client, if supported."""


class TaggedCacheClient(BaseCacheClient):
    """Cache client grouping its entries under a tag in a shared backend.

    The tag is backed by a version token stored next to the entries. Each entry
    key embeds the current token, so replacing the token orphans every entry
    written before, and the orphans expire with their TTL.
    """

    supports_tags = True

    def __init__(self, cache: BaseCache, tag: str, ttl: int = DEFAULT_CACHE_TTL):
        self.cache = cache
        self.tag = tag
        self.ttl = ttl

    @property
    def timeout(self) -> int | None:
        return self.ttl

    @property
    def tag_key(self) -> str:
        return f"tag:{self.tag}:key"

    def get_tag_version(self) -> str:
        """Get the current version token of the tag, creating it if needed.

        Returns:
            str: The version token.
        """
        version = self.cache.get(self.tag_key)
        if version is None:
            # add() keeps the token another process may have just created
            self.cache.add(self.tag_key, uuid4().hex, None)
            version = self.cache.get(self.tag_key)
        return version

    def make_key(self, key: str) -> str:
        return f"{self.tag}:{self.get_tag_version()}:{key}"

    def flush(self) -> None:
        """Rotate the tag version, invalidating every entry under the tag."""
        version = uuid4().hex
        self.cache.set(self.tag_key, version, None)
        logger.info(f"Flushed permission cache tag {self.tag!r} (version {version})")


class LocalCacheClient(BaseCacheClient):
    """Cache client keeping untagged entries in a process-local store.

    Entries never expire and are never culled. Stores built with the same
    location share their contents within a process.
    """

    supports_tags = False

    def __init__(self, location: str = DEFAULT_LOCAL_CACHE_LOCATION):
        self.cache = LocMemCache(location, {"TIMEOUT": None, "OPTIONS": {"MAX_ENTRIES": sys.maxsize}})

    @property
    def timeout(self) -> int | None:
        return None

    def make_key(self, key: str) -> str:
        return key

    def flush(self) -> None:
        """Do nothing: untagged entries cannot be flushed as a group."""
        logger.debug("Permission cache store does not support tags; cached permissions were not flushed.")


class PermissionCache:
    """Read-through cache of the permissions granted to roles.

    Entries are stored under the role key prefixed with a namespace (the role
    model label), so role models sharing one store or one tag never read each
    other's permissions.

    Attributes:
        KEY_PREFIX (str): Default prefix of the per-role cache keys.
        client (BaseCacheClient): The store holding the entries.
        namespace (str): Prefix separating the entries of one role model from another.
        key_prefix (str): Prefix of the per-role cache keys.
    """

    KEY_PREFIX = "permissions_for_role_"

    def __init__(self, client: BaseCacheClient, namespace: str = "", key_prefix: str = KEY_PREFIX):
        self.client = client
        self.namespace = namespace
        self.key_prefix = key_prefix

    @property
    def supports_tags(self) -> bool:
        return self.client.supports_tags

    def key_for(self, role) -> str:
        """Build the cache key of a role.

        Args:
            role: A saved role instance.

        Returns:
            str: The key, e.g. 'permissions_for_role_3'.
        """
        return f"{self.key_prefix}{role.pk}"

    def entry_key_for(self, role) -> str:
        """Build the key the role's entry is stored under, e.g. 'roles_authz.role:permissions_for_role_3'."""
        key = self.key_for(role)
        return f"{self.namespace}:{key}" if self.namespace else key

    def get(self, role) -> list:
        """Get the permissions granted to a role, querying the database on a miss.

        Args:
            role: A saved role instance.

        Returns:
            list[Permission]: The role's permissions, in database order. Empty if it has none.
        """
        return self.client.remember(self.entry_key_for(role), lambda: list(role.permissions.all()))

    def invalidate(self) -> None:
        """Drop the cached permissions of every role, when the store supports tags."""
        self.client.flush()


def get_cache_client(tag: str) -> BaseCacheClient:
    """Build the cache client selected by the Django settings.

    Args:
        tag: The tag grouping the entries when tagging is enabled.

    Returns:
        BaseCacheClient: A TaggedCacheClient on the configured cache alias, or a
        LocalCacheClient when `ROLES_AUTHZ_CACHE_SUPPORTS_TAGS` is False.
    """
    if getattr(settings, "ROLES_AUTHZ_CACHE_SUPPORTS_TAGS", True):
        alias = getattr(settings, "ROLES_AUTHZ_CACHE_ALIAS", "default")
        ttl = getattr(settings, "ROLES_AUTHZ_CACHE_TTL", DEFAULT_CACHE_TTL)
        return TaggedCacheClient(caches[alias], tag, ttl)

    location = getattr(settings, "ROLES_AUTHZ_LOCAL_CACHE_LOCATION", DEFAULT_LOCAL_CACHE_LOCATION)
    return LocalCacheClient(location)


def get_permission_cache(tag: str, namespace: str = "") -> PermissionCache:
    """Build a PermissionCache backed by the client selected by the Django settings.

    Args:
        tag: The tag grouping the entries when tagging is enabled.
        namespace: Prefix of the stored keys, e.g. the role model label.

    Returns:
        PermissionCache: The permission cache.
    """
    return PermissionCache(get_cache_client(tag), namespace)
