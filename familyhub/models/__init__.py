"""Data models for micro-apps and soundscapes."""
from familyhub.models.apps import (
    ChildProfile,
    MicroAppDefinition,
    Role,
    UserIdentity,
    VisibilityContext,
)
from familyhub.models.soundscapes import LayerConfig, MixConfig, PlaybackState, PlayerStatus

__all__ = [
    "ChildProfile",
    "LayerConfig",
    "MicroAppDefinition",
    "MixConfig",
    "PlaybackState",
    "PlayerStatus",
    "Role",
    "UserIdentity",
    "VisibilityContext",
]
