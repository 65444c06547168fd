"""Soundscape flows for parent and kid views on top of one SoundscapePlayer."""
import logging
import threading
from typing import Optional

from familyhub.config import (
    BEDTIME_FADE_IN_MS,
    BEDTIME_MIX_ID,
    PARENT_FADE_IN_MS,
    PARENT_STOP_FADE_MS,
)
from familyhub.core import analytics
from familyhub.core.mixes import get_mix
from familyhub.core.player import SoundscapePlayer

logger = logging.getLogger(__name__)


class SoundscapeSession:
    """Player plus the bedtime lock and the analytics each flow reports.

    The bedtime lock keeps the kid view from navigating away until the mix
    fades out on its own or a parent exits.
    """

    def __init__(self, **player_kwargs) -> None:
        # Held across player.start so a completion never sees a half-started flow
        self._lock = threading.Lock()
        self._locked = False
        # (mix_id, role) of the current flow and of the one it replaced
        self._flow: tuple[Optional[str], Optional[str]] = (None, None)
        self._previous_flow: tuple[Optional[str], Optional[str]] = (None, None)
        self.player = SoundscapePlayer(on_complete=self._on_complete, **player_kwargs)

    @property
    def bedtime_locked(self) -> bool:
        with self._lock:
            return self._locked

    def _begin_flow(self, mix_id: str, role: Optional[str]) -> None:
        self._previous_flow, self._flow = self._flow, (mix_id, role)

    def _on_complete(self) -> None:
        with self._lock:
            if self.player.current_mix is None:
                self._locked = False
                mix_id, role = self._flow
            else:
                # A new flow started between the fade-out and this callback;
                # the lock belongs to it.
                mix_id, role = self._previous_flow
        props = {"mix": mix_id}
        if role:
            props["role"] = role
        analytics.track("soundscape_completed", props)

    def start(self, mix_id: str, role: str = "caregiver") -> bool:
        """Parent view Start: play and fade in. Returns False for unknown mixes."""
        if get_mix(mix_id) is None:
            return False
        with self._lock:
            self._begin_flow(mix_id, None)
            self.player.start(mix_id)
            self.player.fade_in(PARENT_FADE_IN_MS)
        analytics.track("soundscape_started", {"mix": mix_id, "role": role})
        return True

    def stop(self) -> None:
        """Parent view Stop: fade out instead of cutting the sound."""
        self.player.fade_out(PARENT_STOP_FADE_MS)

    def start_bedtime(self, child_id: str, mix_id: str = BEDTIME_MIX_ID) -> bool:
        """Kid view Start: lock navigation, play and fade in."""
        if get_mix(mix_id) is None:
            return False
        analytics.track("bedtime_mode_on", {"child": child_id})
        with self._lock:
            self._locked = True
            self._begin_flow(mix_id, "child")
            self.player.start(mix_id)
            self.player.fade_in(BEDTIME_FADE_IN_MS)
        logger.info("Session: bedtime lock on for %s", mix_id)
        return True

    def stop_now(self) -> None:
        """Cut the sound without a fade or completion event; releases the bedtime lock."""
        with self._lock:
            self.player.stop()
            self._locked = False
        logger.info("Session: stopped immediately")

    def parent_exit(self) -> None:
        """Release the bedtime lock; playback keeps going."""
        with self._lock:
            self._locked = False
        logger.info("Session: bedtime lock released by parent")

    def set_timer(self, minutes: Optional[float]) -> None:
        self.player.set_timer(minutes)
        analytics.track("timer_set", {"minutes": minutes})

    def close(self) -> None:
        self.player.close()
        with self._lock:
            self._locked = False
