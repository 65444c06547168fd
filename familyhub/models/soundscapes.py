"""Soundscape mixes, their layers, and the engine's reported state."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LayerType(str, Enum):
    NATURE = "nature"
    WHITE = "white"
    BROWN = "brown"
    PINK = "pink"
    MUSIC = "music"


@dataclass(frozen=True)
class LayerConfig:
    """One looping audio layer of a mix."""
    id: str
    type: LayerType
    file: str  # site path, e.g. /audio/soundscapes/rain.ogg
    gain: float  # 0..1 default volume
    loop_start: Optional[float] = None  # seconds
    loop_end: Optional[float] = None  # seconds


@dataclass(frozen=True)
class MixConfig:
    id: str
    title: str
    layers: tuple[LayerConfig, ...]


class PlayerStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    STOPPED = "stopped"
    FADING = "fading"


@dataclass
class PlaybackState:
    """Point-in-time view of a SoundscapePlayer."""
    status: PlayerStatus
    mix_id: Optional[str]
    volume: float
    live_sources: int
    fade_pending: bool
    timer_pending: bool
    timer_deadline: Optional[float]  # monotonic seconds


@dataclass
class Favorite:
    """Stored favorite mix for a family (optionally a single child)."""
    favorite_id: str
    mix_id: str
    family_id: str
    child_id: Optional[str]
    created_at: str
