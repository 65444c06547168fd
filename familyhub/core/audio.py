"""Audio source handles for soundscape layers.

The service has no sound device, so the default handle only tracks what a
client-side player would be told (file, loop, volume) and logs transitions.
"""
import logging
from typing import Callable, Protocol

from familyhub.config import AUDIO_BASE_URL
from familyhub.models.soundscapes import LayerConfig

logger = logging.getLogger(__name__)


class PlaybackBlocked(Exception):
    """A source could not start on its own (e.g. waiting for a user gesture)."""


class AudioSource(Protocol):
    volume: float
    loop: bool

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def release(self) -> None: ...


AudioFactory = Callable[[LayerConfig], AudioSource]


def resolve_asset_url(file: str) -> str:
    if not AUDIO_BASE_URL:
        return file
    return AUDIO_BASE_URL.rstrip("/") + "/" + file.lstrip("/")


class SimulatedAudioSource:
    """Looping layer handle without real output."""

    def __init__(self, layer: LayerConfig) -> None:
        self.layer_id = layer.id
        self.src = resolve_asset_url(layer.file)
        self.loop = True
        self.loop_start = layer.loop_start
        self.loop_end = layer.loop_end
        self._volume = 0.0
        self.playing = False

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = max(0.0, min(1.0, value))

    def play(self) -> None:
        if not self.src:
            raise PlaybackBlocked(f"layer {self.layer_id} has no source")
        self.playing = True
        logger.debug("Audio: play %s (volume %.3f)", self.src, self._volume)

    def pause(self) -> None:
        self.playing = False

    def release(self) -> None:
        self.playing = False
        logger.debug("Audio: released %s", self.src)
        self.src = ""


def simulated_audio_factory(layer: LayerConfig) -> AudioSource:
    return SimulatedAudioSource(layer)
