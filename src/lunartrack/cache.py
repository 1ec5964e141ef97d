"""Explicit memoization of computed tracks, keyed by input values."""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from cachetools import LRUCache

from lunartrack.compute import (
    PositionProvider,
    compute_track,
    resolve_config,
    to_utc,
)
from lunartrack.models import ObserverLocation, Track, TrackConfig

logger = logging.getLogger(__name__)

_CacheKey = tuple[datetime, ObserverLocation, TrackConfig]


class TrackCache:
    """Least-recently-used cache of tracks for one position provider.

    Keys are (center_time in UTC, location, resolved config), so equal inputs
    hit regardless of object identity or whether the config was passed as a
    mapping. Failed computations are not stored.
    """

    def __init__(self, provider: PositionProvider | None = None, maxsize: int = 32) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be at least 1, got {maxsize}")
        self._provider = provider
        self._entries: LRUCache[_CacheKey, Track] = LRUCache(maxsize=maxsize)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @staticmethod
    def key(
        center_time: datetime,
        location: ObserverLocation,
        config: TrackConfig | Mapping[str, Any] | None = None,
    ) -> _CacheKey:
        return (to_utc(center_time), location, resolve_config(config))

    def get(
        self,
        center_time: datetime,
        location: ObserverLocation,
        config: TrackConfig | Mapping[str, Any] | None = None,
    ) -> Track:
        """Return the cached track for these inputs, computing it on a miss."""
        key = self.key(center_time, location, config)
        track = self._entries.get(key)
        if track is not None:
            logger.debug("Track cache hit for %s", key[0].isoformat())
            return track

        logger.debug("Track cache miss for %s", key[0].isoformat())
        track = compute_track(key[0], location, key[2], provider=self._provider)
        self._entries[key] = track
        return track

    def clear(self) -> None:
        self._entries.clear()
