"""
FamilyHub Test Fixtures
=======================

Shared fixtures: a manual clock for the player, fake audio sources, and an
isolated API client.
"""

import pytest
from typing import Callable, List, Optional

from familyhub.core.audio import PlaybackBlocked
from familyhub.core.flags import FlagStore
from familyhub.core.registry import Registry
from familyhub.models.apps import MicroAppDefinition, Role, TextLabel


# ============================================
# SCHEDULING
# ============================================

class ManualTask:
    def __init__(self, due: float, callback: Callable[[], None], interval: Optional[float]):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by advance(); callbacks run on the test thread."""

    def __init__(self):
        self.now = 0.0
        self.tasks: List[ManualTask] = []

    def monotonic(self) -> float:
        return self.now

    def call_later(self, delay_sec, callback):
        task = ManualTask(self.now + delay_sec, callback, None)
        self.tasks.append(task)
        return task

    def call_every(self, interval_sec, callback):
        task = ManualTask(self.now + interval_sec, callback, interval_sec)
        self.tasks.append(task)
        return task

    def pending(self, repeating: Optional[bool] = None) -> List[ManualTask]:
        live = [t for t in self.tasks if not t.cancelled]
        if repeating is None:
            return live
        return [t for t in live if (t.interval is not None) == repeating]

    def advance(self, seconds: float) -> None:
        end = self.now + seconds + 1e-9
        while True:
            due = [t for t in self.pending() if t.due <= end]
            if not due:
                break
            task = min(due, key=lambda t: t.due)
            self.now = max(self.now, task.due)
            if task.interval is None:
                task.cancelled = True
            else:
                task.due += task.interval
            task.callback()
        self.now = end

    def advance_ms(self, ms: float) -> None:
        self.advance(ms / 1000.0)


@pytest.fixture
def scheduler():
    return ManualScheduler()


# ============================================
# AUDIO
# ============================================

class FakeAudioSource:
    def __init__(self, layer, blocked=False):
        self.layer = layer
        self.volume = 0.0
        self.loop = False
        self.blocked = blocked
        self.playing = False
        self.released = False

    def play(self):
        if self.blocked:
            raise PlaybackBlocked("needs a user gesture")
        self.playing = True

    def pause(self):
        self.playing = False

    def release(self):
        self.released = True


class FakeAudioFactory:
    """Records every source it builds."""

    def __init__(self, blocked=False):
        self.blocked = blocked
        self.created: List[FakeAudioSource] = []

    def __call__(self, layer):
        source = FakeAudioSource(layer, blocked=self.blocked)
        self.created.append(source)
        return source

    def live(self) -> List[FakeAudioSource]:
        return [s for s in self.created if not s.released]


@pytest.fixture
def audio():
    return FakeAudioFactory()


@pytest.fixture
def make_player(scheduler, audio):
    """Build a SoundscapePlayer on the manual scheduler and fake audio."""
    from familyhub.core.player import SoundscapePlayer

    def _make(on_complete=None, **kwargs):
        return SoundscapePlayer(
            on_complete,
            audio_factory=audio,
            scheduler=scheduler,
            clock=scheduler.monotonic,
            **kwargs,
        )

    return _make


# ============================================
# REGISTRY
# ============================================

def make_app(**overrides) -> MicroAppDefinition:
    """Owner-only, plus plan, behind flag.test unless overridden."""
    fields = dict(
        id="test",
        slug="test",
        title="Test",
        icon=TextLabel("T"),
        route="/apps/test",
        allowed_roles=frozenset({Role.OWNER}),
        allowed_plans=("plus",),
        feature_flag="flag.test",
    )
    fields.update(overrides)
    return MicroAppDefinition(**fields)


@pytest.fixture
def flag_store():
    return FlagStore()


@pytest.fixture
def registry(flag_store):
    return Registry(flag_store=flag_store)


# ============================================
# API
# ============================================

@pytest.fixture
def app_state(tmp_path, scheduler, audio, monkeypatch):
    """Fresh AppState with manual scheduling, fake audio and a temp favorites file."""
    import familyhub.core.favorites_store as favorites_store
    from familyhub.api.state import AppState
    from familyhub.core.session import SoundscapeSession

    monkeypatch.setattr(favorites_store, "FAVORITES_PATH", tmp_path / "favorites.json")
    monkeypatch.setattr(favorites_store, "ensure_data_dir", lambda: None)

    state = AppState()
    state._soundscapes = SoundscapeSession(
        audio_factory=audio, scheduler=scheduler, clock=scheduler.monotonic
    )
    yield state
    state.close()


@pytest.fixture
def test_client(app_state):
    """TestClient with get_state overridden to the isolated app_state."""
    from fastapi.testclient import TestClient

    from familyhub.api.app import app
    from familyhub.api.state import get_state

    app.dependency_overrides[get_state] = lambda: app_state
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def app_factory():
    """Build MicroAppDefinitions from a gated owner-only default."""
    return make_app
