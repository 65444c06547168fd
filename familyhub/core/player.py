"""Soundscape playback engine: layered looping sources, fades, volume and sleep timer.

Status moves idle -> playing -> fading -> playing ... -> stopped. A fade-in
settles back to playing; a fade-out ends in a full stop followed by the
completion callback. At most one fade and one timer are pending at a time;
scheduling a new one cancels the previous one of the same kind.

Playback is best effort: unknown mixes, blocked autoplay and redundant stops
are ignored, never raised.
"""
import logging
import math
import threading
import time
from typing import Callable, List, Optional

from familyhub.config import DEFAULT_VOLUME, FADE_TICK_MS, TIMER_FADE_OUT_MS
from familyhub.core.audio import AudioFactory, AudioSource, PlaybackBlocked, simulated_audio_factory
from familyhub.core.envelope import envelope_step_count, envelope_value
from familyhub.core.mixes import MIXES, get_mix
from familyhub.core.scheduler import ScheduledTask, Scheduler, ThreadScheduler
from familyhub.models.soundscapes import LayerConfig, MixConfig, PlaybackState, PlayerStatus

logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class SoundscapePlayer:
    """Owns the live audio sources of one listener and the work scheduled on them."""

    def __init__(
        self,
        on_complete: Optional[Callable[[], None]] = None,
        *,
        audio_factory: Optional[AudioFactory] = None,
        scheduler: Optional[Scheduler] = None,
        mixes: tuple[MixConfig, ...] = MIXES,
        volume: float = DEFAULT_VOLUME,
        tick_ms: int = FADE_TICK_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        # Re-entrant: a fade-out tick calls stop() while holding the lock
        self._lock = threading.RLock()
        self._on_complete = on_complete
        self._audio_factory = audio_factory or simulated_audio_factory
        self._scheduler = scheduler or ThreadScheduler()
        self._mixes = mixes
        self._tick_ms = tick_ms
        self._clock = clock

        self._status = PlayerStatus.IDLE
        self._mix: Optional[MixConfig] = None
        self._volume = _clamp(volume)
        self._sources: List[AudioSource] = []
        self._layers: tuple[LayerConfig, ...] = ()

        # Callbacks carry the generation they were scheduled under and bail
        # out if it moved on (a thread may already be inside its callback
        # when the task gets canceled).
        self._fade_task: Optional[ScheduledTask] = None
        self._fade_generation = 0
        self._timer_task: Optional[ScheduledTask] = None
        self._timer_generation = 0
        self._timer_deadline: Optional[float] = None

    @property
    def status(self) -> PlayerStatus:
        return self._status

    @property
    def current_mix(self) -> Optional[MixConfig]:
        return self._mix

    @property
    def volume(self) -> float:
        return self._volume

    def snapshot(self) -> PlaybackState:
        with self._lock:
            return PlaybackState(
                status=self._status,
                mix_id=self._mix.id if self._mix else None,
                volume=self._volume,
                live_sources=len(self._sources),
                fade_pending=self._fade_task is not None,
                timer_pending=self._timer_task is not None,
                timer_deadline=self._timer_deadline,
            )

    # -- pending work -----------------------------------------------------

    def _cancel_fade(self) -> None:
        self._fade_generation += 1
        if self._fade_task is not None:
            self._fade_task.cancel()
            self._fade_task = None

    def _cancel_timer(self) -> None:
        self._timer_generation += 1
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None
        self._timer_deadline = None

    def _release_sources(self) -> None:
        for source in self._sources:
            source.pause()
            source.release()
        self._sources = []
        self._layers = ()

    def _cleanup(self) -> None:
        self._cancel_fade()
        self._cancel_timer()
        self._release_sources()

    # -- operations -------------------------------------------------------

    def start(self, mix_id: str) -> None:
        """Replace whatever is playing with mix_id. Unknown ids are ignored."""
        mix = get_mix(mix_id, self._mixes)
        if mix is None:
            logger.debug("Player: unknown mix %s, ignoring start", mix_id)
            return
        with self._lock:
            self._cleanup()
            self._mix = mix
            sources: List[AudioSource] = []
            for layer in mix.layers:
                source = self._audio_factory(layer)
                source.loop = True
                source.volume = layer.gain * self._volume
                try:
                    source.play()
                except PlaybackBlocked as e:
                    # Starts once the listener interacts; nothing to surface
                    logger.debug("Player: autoplay blocked for %s: %s", layer.id, e)
                sources.append(source)
            self._sources = sources
            self._layers = mix.layers
            self._status = PlayerStatus.PLAYING
        logger.info("Player: started %s (%d layers)", mix.id, len(mix.layers))

    def stop(self) -> None:
        """Cancel pending work and release every source. Does not call on_complete."""
        with self._lock:
            self._cleanup()
            self._mix = None
            self._status = PlayerStatus.STOPPED
        logger.debug("Player: stopped")

    def _fade_steps(self, duration_ms: float) -> Optional[int]:
        if not math.isfinite(duration_ms):
            logger.debug("Player: ignoring fade of %r ms", duration_ms)
            return None
        return envelope_step_count(duration_ms, self._tick_ms)

    def fade_in(self, duration_ms: float) -> None:
        """Ramp every layer from silence up to gain * volume."""
        steps = self._fade_steps(duration_ms)
        if steps is None:
            return
        with self._lock:
            if not self._sources:
                return
            self._cancel_fade()
            for source in self._sources:
                source.volume = 0.0
            self._status = PlayerStatus.FADING
            generation = self._fade_generation
            tick = 0

            def on_tick() -> None:
                nonlocal tick
                with self._lock:
                    if generation != self._fade_generation:
                        return
                    tick += 1
                    fraction = envelope_value(min(tick, steps), steps)
                    for source, layer in zip(self._sources, self._layers):
                        source.volume = layer.gain * self._volume * fraction
                    if tick >= steps:
                        self._cancel_fade()
                        self._status = PlayerStatus.PLAYING

            self._fade_task = self._scheduler.call_every(self._tick_ms / 1000.0, on_tick)

    def fade_out(self, duration_ms: float) -> None:
        """Ramp every layer from its current level down to silence, then stop
        and call on_complete."""
        steps = self._fade_steps(duration_ms)
        if steps is None:
            return
        with self._lock:
            if not self._sources:
                return
            self._cancel_fade()
            # Each layer's level as a share of its full level, so a fade-out
            # that interrupts a fade-in starts where the fade-in got to.
            start_levels = []
            for source, layer in zip(self._sources, self._layers):
                full = layer.gain * self._volume
                start_levels.append(_clamp(source.volume / full) if full > 0 else 0.0)
            self._status = PlayerStatus.FADING
            generation = self._fade_generation
            tick = 0

            def on_tick() -> None:
                nonlocal tick
                completed = False
                with self._lock:
                    if generation != self._fade_generation:
                        return
                    tick += 1
                    remaining = 1.0 - envelope_value(min(tick, steps), steps)
                    for source, layer, level in zip(self._sources, self._layers, start_levels):
                        source.volume = layer.gain * self._volume * level * remaining
                    if tick >= steps:
                        self.stop()
                        completed = True
                if completed:
                    logger.info("Player: fade-out complete")
                    if self._on_complete is not None:
                        self._on_complete()

            self._fade_task = self._scheduler.call_every(self._tick_ms / 1000.0, on_tick)

    def set_volume(self, value: float) -> None:
        """Set master volume (clamped to [0, 1]) and rescale live layers."""
        volume = _clamp(value)
        with self._lock:
            self._volume = volume
            for source, layer in zip(self._sources, self._layers):
                source.volume = layer.gain * volume

    def set_timer(self, minutes: Optional[float]) -> None:
        """Fade out after minutes. None or <= 0 just clears the current timer;
        NaN and infinity are ignored."""
        if minutes is not None and not math.isfinite(minutes):
            logger.debug("Player: ignoring timer of %r min", minutes)
            return
        with self._lock:
            self._cancel_timer()
            if not minutes or minutes <= 0:
                return
            delay_sec = minutes * 60.0
            generation = self._timer_generation

            def on_timer() -> None:
                with self._lock:
                    if generation != self._timer_generation:
                        return
                    self._timer_task = None
                    self._timer_deadline = None
                logger.info("Player: timer expired, fading out")
                self.fade_out(TIMER_FADE_OUT_MS)

            self._timer_task = self._scheduler.call_later(delay_sec, on_timer)
            self._timer_deadline = self._clock() + delay_sec
        logger.debug("Player: timer set for %.1f min", minutes)

    def close(self) -> None:
        """Tear down: nothing scheduled or playing survives the player."""
        self.stop()
