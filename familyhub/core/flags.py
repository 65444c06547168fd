"""Feature flags: per-request overrides on top of process-wide state (default off)."""
import logging
import threading
from typing import Mapping, Optional

from familyhub.config import FEATURE_FLAGS, parse_flags

logger = logging.getLogger(__name__)


class FlagStore:
    """Process-wide flag values. Swap for GrowthBook/PostHog lookups later."""

    def __init__(self, initial: Optional[Mapping[str, bool]] = None) -> None:
        self._lock = threading.Lock()
        self._flags: dict[str, bool] = dict(initial or {})

    @classmethod
    def from_config(cls) -> "FlagStore":
        return cls(parse_flags(FEATURE_FLAGS))

    def get(self, name: str) -> Optional[bool]:
        """Return the stored value, or None if the flag was never set."""
        with self._lock:
            return self._flags.get(name)

    def expose(self, name: str, value: bool) -> None:
        """Set a flag; this is where an exposure event would be sent."""
        with self._lock:
            self._flags[name] = bool(value)
        logger.info("Flag exposed: %s=%s", name, bool(value))

    def snapshot(self) -> dict[str, bool]:
        with self._lock:
            return dict(self._flags)


def get_flag(
    name: str,
    provided: Optional[Mapping[str, bool]] = None,
    store: Optional[FlagStore] = None,
) -> bool:
    """Resolve a flag: explicit override, then the process-wide store, then off."""
    if provided and name in provided:
        return bool(provided[name])
    if store is not None:
        value = store.get(name)
        if value is not None:
            return value
    return False
