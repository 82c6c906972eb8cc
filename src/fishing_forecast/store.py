"""Response caching and file-backed data store.

Two layers:
  - ``ResponseCache``: the minimal capability fetch functions accept
    (``get(key)`` / ``put(key, value, ttl)``). Callers own the cache and
    pass it in; fetch functions never keep hidden module state.
  - ``DataStore``: enveloped JSON files with a ``valid_until`` expiry,
    provider responses under ``live/`` and computed outputs under
    ``derived/``.

``MemoryCache`` and ``DataStore`` both satisfy ``ResponseCache``.
"""

from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 3600.0  # seconds


def cache_key(source: str, lat: float, lon: float) -> str:
    """Cache key for a provider response at a coordinate."""
    return f"{source}:{lat},{lon}"


class ResponseCache(Protocol):
    """Capability a fetch function needs from a cache."""

    def get(self, key: str) -> Any | None: ...

    def put(self, key: str, value: Any, ttl: float) -> None: ...


class MemoryCache:
    """In-process TTL cache."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: Any, ttl: float) -> None:
        self._entries[key] = (self._clock() + ttl, value)

    def __len__(self) -> int:
        return len(self._entries)


class DataStore:
    """JSON files under ``base_dir`` wrapped in a ``{"meta", "data"}`` envelope.

    ``live/cache/`` holds provider responses written through the
    ``ResponseCache`` interface; ``derived/`` holds the serialized timeline.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.live = base_dir / "live"
        self.derived = base_dir / "derived"

    def read(self, path: Path) -> Any | None:
        """Payload stored at ``path``, or None if the file doesn't exist."""
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Full envelope stored at ``path``, or None if the file doesn't exist."""
        full = self._resolve(path)
        if not full.exists():
            return None
        result: dict[str, Any] = json.loads(full.read_text())
        return result

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write ``data`` with a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``derived/forecast.json``).
            data: JSON-compatible payload.
            source: Where the payload came from (provider or flow name).
            valid_until: Expiry; omitted for outputs that never go stale.
            **params: Extra metadata (lat/lon, cache key, ...).

        Returns:
            Path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {"source": source, "fetched_at": datetime.now(UTC).isoformat()}
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        meta.update(params)

        full.write_text(json.dumps({"meta": meta, "data": data}, indent=2))
        return full

    def is_fresh(self, path: Path, now: datetime | None = None) -> bool:
        """True if ``path`` exists and its ``valid_until`` is after ``now``."""
        envelope = self.read_raw(path)
        if envelope is None:
            return False
        expiry = _valid_until(envelope.get("meta", {}))
        if expiry is None:
            return False
        return (now or datetime.now(UTC)) < expiry

    # ResponseCache

    def get(self, key: str) -> Any | None:
        """Cached payload for ``key``, or None if missing, expired or unreadable."""
        path = self._cache_path(key)
        try:
            if not self.is_fresh(path):
                return None
            return self.read(path)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable cache entry for %s", key)
            return None

    def put(self, key: str, value: Any, ttl: float) -> None:
        """Cache ``value`` under ``key`` for ``ttl`` seconds."""
        source = key.split(":", 1)[0]
        expiry = datetime.now(UTC) + timedelta(seconds=ttl)
        self.write(self._cache_path(key), value, source=source, valid_until=expiry, key=key)

    def _cache_path(self, key: str) -> Path:
        return Path("live") / "cache" / f"{re.sub(r'[^A-Za-z0-9_.-]', '_', key)}.json"

    def _resolve(self, path: Path) -> Path:
        full = path if path.is_absolute() else self.base / path
        if not full.resolve().is_relative_to(self.base.resolve()):
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg)
        return full


def _valid_until(meta: dict[str, Any]) -> datetime | None:
    raw = meta.get("valid_until")
    if raw is None:
        return None
    expiry = datetime.fromisoformat(raw)
    return expiry if expiry.tzinfo is not None else expiry.replace(tzinfo=UTC)
