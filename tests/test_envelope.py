"""
Tests for the Envelope Calculator and Mix Catalog
=================================================
"""

import pytest

from familyhub.core.envelope import envelope_step_count, envelope_value, linear_envelope_steps
from familyhub.core.mixes import MIXES, asset_files, get_mix


class TestLinearEnvelope:
    """Test linear_envelope_steps."""

    def test_basic(self):
        env = linear_envelope_steps(1000, 100)
        assert env.steps == 10
        assert env.values[0] == pytest.approx(0.1)
        assert env.values[9] == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "duration,interval",
        [(1000, 100), (3000, 50), (1500, 50), (999, 100), (1, 50), (50, 50), (73, 7)],
    )
    def test_monotonic_and_saturating(self, duration, interval):
        env = linear_envelope_steps(duration, interval)
        assert env.steps == max(1, duration // interval)
        assert len(env.values) == env.steps
        assert all(a < b for a, b in zip(env.values, env.values[1:]))
        assert env.values[-1] == 1.0

    def test_shorter_than_one_tick(self):
        env = linear_envelope_steps(10, 50)
        assert env.steps == 1
        assert env.values == (1.0,)

    def test_deterministic(self):
        assert linear_envelope_steps(2000, 50) == linear_envelope_steps(2000, 50)

    def test_per_tick_value_matches_table(self):
        env = linear_envelope_steps(1500, 50)
        steps = envelope_step_count(1500, 50)
        assert steps == env.steps
        assert [envelope_value(t, steps) for t in range(1, steps + 1)] == list(env.values)

    def test_step_count_without_table(self):
        assert envelope_step_count(2e9, 50) == 40_000_000
        assert envelope_value(1, 40_000_000) == pytest.approx(2.5e-8)


class TestMixCatalog:
    """Test mix lookup and the asset list."""

    def test_get_mix(self):
        assert get_mix("bedtime").title == "Bedtime"
        assert get_mix("nonexistent-id") is None

    def test_gains_in_range(self):
        for mix in MIXES:
            assert mix.layers
            for layer in mix.layers:
                assert 0.0 <= layer.gain <= 1.0

    def test_asset_files_distinct(self):
        files = asset_files()
        assert len(files) == len(set(files)) == 7
        assert files[0] == "/audio/soundscapes/pink-noise.ogg"
