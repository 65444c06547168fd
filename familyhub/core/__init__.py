"""Core services: app registry and routing gate, soundscape player."""
from familyhub.core.registry import Registry
from familyhub.core.player import SoundscapePlayer

__all__ = ["Registry", "SoundscapePlayer"]
