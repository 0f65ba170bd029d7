"""Time-limited in-memory cache keyed by hashable values"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable


_MISSING = object()


@dataclass
class TTLCache:
    """Map of key -> (value, stored_at); entries older than ttl seconds are treated as absent.

    ttl=0 disables caching. The clock is injectable so expiry can be driven in tests.
    Not locked: concurrent misses on one key may both recompute, which is harmless
    because loaders only re-read the store.
    """
    ttl: float = 300.0
    clock: Callable[[], float] = time.monotonic
    _entries: dict[Hashable, tuple[Any, float]] = field(default_factory=dict)

    def get(self, key: Hashable, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        value, stored_at = entry
        if self.clock() - stored_at >= self.ttl:
            self._entries.pop(key, None)
            return default
        return value

    def set(self, key: Hashable, value: Any) -> None:
        if self.ttl > 0:
            self._entries[key] = (value, self.clock())

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        """Return the cached value for key, calling loader() and storing its result on a miss."""
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = loader()
            self.set(key, value)
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
