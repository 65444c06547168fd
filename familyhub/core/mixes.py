"""Built-in soundscape mixes (read-only)."""
from typing import List, Optional

from familyhub.models.soundscapes import LayerConfig, LayerType, MixConfig

_AUDIO_DIR = "/audio/soundscapes"

MIXES: tuple[MixConfig, ...] = (
    MixConfig(
        id="focus",
        title="Focus",
        layers=(
            LayerConfig("pink", LayerType.PINK, f"{_AUDIO_DIR}/pink-noise.ogg", 0.35),
            LayerConfig("keys", LayerType.MUSIC, f"{_AUDIO_DIR}/soft-keys.ogg", 0.25),
        ),
    ),
    MixConfig(
        id="reading",
        title="Reading",
        layers=(
            LayerConfig("white", LayerType.WHITE, f"{_AUDIO_DIR}/white-noise.ogg", 0.3),
            LayerConfig("rain", LayerType.NATURE, f"{_AUDIO_DIR}/rain.ogg", 0.2),
        ),
    ),
    MixConfig(
        id="calm-play",
        title="Calm Play",
        layers=(
            LayerConfig("brown", LayerType.BROWN, f"{_AUDIO_DIR}/brown-noise.ogg", 0.3),
            LayerConfig("birds", LayerType.NATURE, f"{_AUDIO_DIR}/birds.ogg", 0.15),
        ),
    ),
    MixConfig(
        id="bedtime",
        title="Bedtime",
        layers=(
            LayerConfig("soft-music", LayerType.MUSIC, f"{_AUDIO_DIR}/lullaby.ogg", 0.2),
            LayerConfig("pink", LayerType.PINK, f"{_AUDIO_DIR}/pink-noise.ogg", 0.15),
        ),
    ),
)


def get_mix(mix_id: str, mixes: tuple[MixConfig, ...] = MIXES) -> Optional[MixConfig]:
    """Return mix by id or None."""
    for mix in mixes:
        if mix.id == mix_id:
            return mix
    return None


def asset_files(mixes: tuple[MixConfig, ...] = MIXES) -> List[str]:
    """Every distinct layer file, in catalog order (the offline precache list)."""
    seen: List[str] = []
    for mix in mixes:
        for layer in mix.layers:
            if layer.file not in seen:
                seen.append(layer.file)
    return seen
