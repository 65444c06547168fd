"""Linear gain envelopes for fades."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Envelope:
    steps: int
    values: tuple[float, ...]


def envelope_step_count(duration_ms: float, interval_ms: float) -> int:
    """Number of interval_ms ticks in a fade of duration_ms, at least one."""
    return max(1, int(duration_ms // interval_ms))


def envelope_value(tick: int, steps: int) -> float:
    """Normalized gain after tick (1-based) of a steps-long fade."""
    return min(1.0, tick / steps)


def linear_envelope_steps(duration_ms: float, interval_ms: float) -> Envelope:
    """Split a fade of duration_ms into ticks of interval_ms.

    values[i] is the normalized gain after tick i + 1: strictly increasing and
    exactly 1.0 on the last tick. A fade shorter than one tick still gets one.
    The player reads the same values tick by tick through envelope_value.
    """
    steps = envelope_step_count(duration_ms, interval_ms)
    values = tuple(envelope_value(i + 1, steps) for i in range(steps))
    return Envelope(steps=steps, values=values)
