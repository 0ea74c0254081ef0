"""
breakdown-config — short-lived memoization of merged configs.

File: src/breakdown_config/utils/cache.py

Purpose
- Avoid re-reading and re-validating the same app/user file pair within a short window.

What should be included in this file
- ``ConfigCache`` keyed by ``app_path[:user_path]`` with a per-entry TTL.
- Expiry on read (``now - timestamp > ttl``) and an explicit ``cleanup`` sweep.
- Approximate memory accounting from the serialized size of cached values.
- Entries are copied in and out so cached configs cannot be mutated by callers.
- A lazily constructed process-wide default instance.

Non-functional requirements
- The clock is injectable so expiry can be tested without sleeping.
"""

from __future__ import annotations

import copy
import json
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from breakdown_config.constants import DEFAULT_CACHE_TTL_SECONDS
from breakdown_config.domain.models import MergedConfig, json_ready
from breakdown_config.result import Success

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    data: MergedConfig
    timestamp: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.timestamp > self.ttl


@dataclass(frozen=True, slots=True)
class CacheStats:
    size: int
    keys: tuple[str, ...]
    memory_usage: int


class ConfigCache:
    """In-memory TTL cache of merged configurations."""

    def __init__(self, *, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Success[MergedConfig] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return Success(_detached(entry.data))

    def set(self, key: str, data: MergedConfig, ttl: float = DEFAULT_CACHE_TTL_SECONDS) -> None:
        self._entries[key] = CacheEntry(data=_detached(data), timestamp=self._clock(), ttl=ttl)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def cleanup(self) -> int:
        """Evict every expired entry and return how many were removed."""

        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def get_stats(self) -> CacheStats:
        memory = sum(_serialized_size(entry.data) for entry in self._entries.values())
        return CacheStats(
            size=len(self._entries),
            keys=tuple(self._entries),
            memory_usage=memory,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @staticmethod
    def create_key(app_path: str, user_path: str | None = None) -> str:
        if user_path:
            return f"{app_path}:{user_path}"
        return app_path


_DEFAULT_CACHE: ConfigCache | None = None


def default_cache() -> ConfigCache:
    """Return the process-wide cache, constructing it on first use."""

    global _DEFAULT_CACHE
    if _DEFAULT_CACHE is None:
        _DEFAULT_CACHE = ConfigCache()
    return _DEFAULT_CACHE


def reset_default_cache() -> None:
    global _DEFAULT_CACHE
    _DEFAULT_CACHE = None


def _detached(data: MergedConfig) -> MergedConfig:
    # Callers never share custom-field containers with a cached entry.
    return replace(data, custom_fields=copy.deepcopy(data.custom_fields))


def _serialized_size(data: MergedConfig) -> int:
    payload = json.dumps(json_ready(data.to_dict()), ensure_ascii=False, default=str)
    return len(payload)


__all__ = [
    "CacheEntry",
    "CacheStats",
    "Clock",
    "ConfigCache",
    "default_cache",
    "reset_default_cache",
]
