"""Analytics events for micro-apps. Replace the log sink with a PostHog client.

No child PII goes into props: pass ids, never names.
"""
import logging
from typing import Any, Optional

logger = logging.getLogger("familyhub.analytics")

SOUNDSCAPE_EVENTS = (
    "soundscape_started",
    "timer_set",
    "bedtime_mode_on",
    "soundscape_favorited",
    "soundscape_completed",
)


def track(name: str, props: Optional[dict[str, Any]] = None) -> None:
    """Emit one analytics event."""
    if name not in SOUNDSCAPE_EVENTS:
        raise ValueError(f"Unknown analytics event: {name}")
    logger.info("[analytics] %s %s", name, props or {})
