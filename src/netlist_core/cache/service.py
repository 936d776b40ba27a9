# src/netlist_core/cache/service.py
"""
Provides the caller-owned cache for coincidence results.
"""
import logging
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)


class CoincidenceCache:
    """
    An instance-level cache of coincidence edge lists keyed on a geometry
    fingerprint (see `create_coincidence_key`). Its lifetime is whatever the
    caller makes it; there is no process-wide state. Switch toggling in an
    editor leaves geometry untouched, so repeated extractions of the same
    layout skip the coincidence pass.
    """

    def __init__(self):
        self._cache: Dict[Tuple, Any] = {}
        self.clear_stats()
        logger.debug("CoincidenceCache instance created.")

    def get(self, key: Tuple) -> Any:
        """Retrieves an item, or None on a miss."""
        if key in self._cache:
            self._stats['hits'] += 1
            logger.debug(f"Cache HIT for key: {str(key)[:150]}...")
            return self._cache[key]

        self._stats['misses'] += 1
        logger.debug(f"Cache MISS for key: {str(key)[:150]}...")
        return None

    def put(self, key: Tuple, value: Any):
        """Stores an item."""
        if key in self._cache:
            logger.warning("Cache key collision detected. Overwriting existing value.")
        self._cache[key] = value

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> Dict[str, int]:
        """Returns a copy of the hit/miss statistics."""
        return dict(self._stats)

    def clear_stats(self):
        self._stats = {'hits': 0, 'misses': 0}

    def clear(self):
        """Drops every cached entry and resets the statistics."""
        self._cache.clear()
        self.clear_stats()
        logger.info("Cleared the coincidence cache.")
