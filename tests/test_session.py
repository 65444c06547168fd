"""
Tests for Soundscape Sessions and Favorites
===========================================

Bedtime lock, analytics per flow, and the favorites JSON store.
"""

import logging

import pytest

from familyhub.core import analytics
from familyhub.core.favorites_store import list_favorites, load_favorites, toggle_favorite
from familyhub.core.session import SoundscapeSession
from familyhub.models.soundscapes import PlayerStatus


@pytest.fixture
def session(audio, scheduler):
    s = SoundscapeSession(audio_factory=audio, scheduler=scheduler, clock=scheduler.monotonic)
    yield s
    s.close()


@pytest.fixture
def tracked(monkeypatch):
    events = []
    monkeypatch.setattr(analytics, "track", lambda name, props=None: events.append((name, props)))
    return events


class TestSession:
    """Test parent and kid flows."""

    def test_parent_start_fades_in(self, session, scheduler, tracked):
        assert session.start("focus") is True
        assert session.player.status == PlayerStatus.FADING
        scheduler.advance_ms(1000)
        assert session.player.status == PlayerStatus.PLAYING
        assert tracked == [("soundscape_started", {"mix": "focus", "role": "caregiver"})]

    def test_unknown_mix(self, session, tracked):
        assert session.start("nope") is False
        assert session.start_bedtime("kid-1", "nope") is False
        assert tracked == []
        assert session.bedtime_locked is False

    def test_parent_stop_fades_out_and_completes(self, session, scheduler, tracked):
        session.start("reading")
        scheduler.advance_ms(1000)
        session.stop()
        scheduler.advance_ms(1000)
        assert session.player.status == PlayerStatus.STOPPED
        assert tracked[-1] == ("soundscape_completed", {"mix": "reading"})

    def test_bedtime_lock_released_on_completion(self, session, scheduler, tracked):
        session.start_bedtime("kid-1")
        assert session.bedtime_locked is True
        assert tracked[0] == ("bedtime_mode_on", {"child": "kid-1"})
        session.set_timer(1)
        scheduler.advance(60)
        assert session.bedtime_locked is True
        scheduler.advance_ms(3000)
        assert session.bedtime_locked is False
        assert tracked[-1] == ("soundscape_completed", {"mix": "bedtime", "role": "child"})

    def test_parent_exit_unlocks_without_stopping(self, session):
        session.start_bedtime("kid-1")
        session.parent_exit()
        assert session.bedtime_locked is False
        assert session.player.current_mix.id == "bedtime"

    def test_bedtime_started_before_completion_callback_keeps_lock(self, session, scheduler, tracked):
        session.start("reading")
        scheduler.advance_ms(1000)
        finish = session.player._on_complete

        def start_bedtime_then_finish():
            session.start_bedtime("kid-1")
            finish()

        session.player._on_complete = start_bedtime_then_finish
        session.stop()
        scheduler.advance_ms(1000)
        assert session.bedtime_locked is True
        assert session.player.current_mix.id == "bedtime"
        assert tracked[-1] == ("soundscape_completed", {"mix": "reading"})

    def test_stop_now_releases_bedtime_lock(self, session, tracked):
        session.start_bedtime("kid-1")
        session.stop_now()
        assert session.bedtime_locked is False
        assert session.player.status == PlayerStatus.STOPPED
        assert all(name != "soundscape_completed" for name, _ in tracked)

    def test_timer_tracked(self, session, tracked):
        session.set_timer(30)
        assert tracked == [("timer_set", {"minutes": 30})]


class TestAnalytics:
    """Test the event sink."""

    def test_known_event_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="familyhub.analytics"):
            analytics.track("timer_set", {"minutes": 5})
        assert "timer_set" in caplog.text

    def test_unknown_event_rejected(self):
        with pytest.raises(ValueError):
            analytics.track("page_viewed")


class TestFavoritesStore:
    """Test toggle_favorite round trip."""

    def test_toggle(self, tmp_path):
        path = tmp_path / "favorites.json"
        assert toggle_favorite("focus", "fam-1", path=path) == {"favorited": True}
        assert [f.mix_id for f in list_favorites("fam-1", path=path)] == ["focus"]
        assert toggle_favorite("focus", "fam-1", path=path) == {"favorited": False}
        assert load_favorites(path) == []

    def test_families_are_separate(self, tmp_path):
        path = tmp_path / "favorites.json"
        toggle_favorite("focus", "fam-1", path=path)
        toggle_favorite("focus", "fam-2", child_id="kid-9", path=path)
        assert len(load_favorites(path)) == 2
        assert list_favorites("fam-2", path=path)[0].child_id == "kid-9"

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "favorites.json"
        path.write_text("{not json")
        assert load_favorites(path) == []
