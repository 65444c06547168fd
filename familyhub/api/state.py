"""Shared application state (injected into routes)."""
from familyhub.core.flags import FlagStore
from familyhub.core.register_all import register_builtin_apps
from familyhub.core.registry import Registry
from familyhub.core.session import SoundscapeSession


class AppState:
    def __init__(self) -> None:
        self.flag_store = FlagStore.from_config()
        self.registry = Registry(flag_store=self.flag_store)
        register_builtin_apps(self.registry)
        self._soundscapes: SoundscapeSession | None = None

    @property
    def soundscapes(self) -> SoundscapeSession:
        if self._soundscapes is None:
            self._soundscapes = SoundscapeSession()
        return self._soundscapes

    def close(self) -> None:
        if self._soundscapes is not None:
            self._soundscapes.close()


_state = AppState()


def get_state() -> AppState:
    return _state
