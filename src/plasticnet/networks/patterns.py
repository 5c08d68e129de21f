"""
Input spike patterns.

A pattern is an immutable schedule with one spike time (ms) per input
channel. Patterns are produced elsewhere and treated as opaque, read-only
input; this module only wraps and validates them.

During a run, channel ``k`` receives the configured pulse current on the
step whose time is within half a step of ``spike_times[k]``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from plasticnet.errors import PatternError


@dataclass(frozen=True)
class SpikePattern:
    """Named per-channel spike schedule.

    Attributes:
        name: Label used in records and logs (e.g. "A", "B")
        spike_times: One spike time in ms per input channel
    """

    name: str
    spike_times: Tuple[float, ...]

    def __post_init__(self) -> None:
        # Freeze whatever sequence was passed in
        object.__setattr__(self, "spike_times", tuple(float(t) for t in self.spike_times))

    @property
    def n_channels(self) -> int:
        return len(self.spike_times)

    def reversed(self, name: str | None = None) -> SpikePattern:
        """Same spike times with the channel order reversed."""
        return SpikePattern(name or f"{self.name}_reversed", self.spike_times[::-1])

    def pulse_mask(self, t_ms: float, dt_ms: float) -> list[bool]:
        """Channels whose scheduled spike falls within half a step of ``t_ms``."""
        half = dt_ms / 2.0
        return [abs(t_ms - ts) < half for ts in self.spike_times]


PatternLike = Union[SpikePattern, Sequence[float]]


def as_pattern(pattern: PatternLike, name: str = "pattern") -> SpikePattern:
    if isinstance(pattern, SpikePattern):
        return pattern
    return SpikePattern(name, tuple(pattern))


def n_steps(duration_ms: float, dt_ms: float) -> int:
    """Steps in a run: ``ceil(duration / dt) + 1`` (both endpoints)."""
    return math.ceil(duration_ms / dt_ms) + 1


def validate_run(
    pattern: PatternLike,
    n_inputs: int,
    duration_ms: float,
    dt_ms: float,
) -> SpikePattern:
    """Check a pattern and duration before any state is touched.

    Returns:
        The pattern as a :class:`SpikePattern`

    Raises:
        PatternError: If the pattern has no channels, a channel count other
            than ``n_inputs``, a non-finite spike time, or if
            ``duration_ms`` is shorter than one step
    """
    pattern = as_pattern(pattern)
    if pattern.n_channels == 0:
        raise PatternError(f"Pattern '{pattern.name}' has no input channels")
    if pattern.n_channels != n_inputs:
        raise PatternError(
            f"Pattern '{pattern.name}' has {pattern.n_channels} channels, "
            f"network expects {n_inputs}"
        )
    bad = [t for t in pattern.spike_times if not math.isfinite(t)]
    if bad:
        raise PatternError(f"Pattern '{pattern.name}' has non-finite spike times: {bad}")
    if not math.isfinite(duration_ms) or duration_ms < dt_ms:
        raise PatternError(
            f"Duration {duration_ms} ms is shorter than one step ({dt_ms} ms)"
        )
    return pattern
