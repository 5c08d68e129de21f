"""
Spike trace utilities for STDP.

Traces are decaying scalars that summarize recent spiking of one side of a
synapse. They decay every timestep and are bumped on each spike of their
owner:

- "all_to_all" mode: a spike adds ``amplitude`` (every past spike keeps
  contributing, summed).
- "nearest" mode: a spike resets the trace to ``amplitude`` (only the most
  recent spike counts). With exponential decay the trace then equals
  ``exp(-Δt/τ)`` for the last spike, which is exactly the pair-based
  STDP kernel.

Usage:
    trace = SpikeTrace(tau=20.0)
    trace.decay(dt=1.0)
    if spiked:
        trace.bump()
"""

from __future__ import annotations

import math

from plasticnet.errors import ConfigurationError

TRACE_MODES = ("all_to_all", "nearest")
DECAY_TYPES = ("linear", "exponential")


def compute_decay(tau: float, dt: float = 1.0, decay_type: str = "exponential") -> float:
    """Compute decay factor for a given tau and dt.

    Args:
        tau: Time constant (ms)
        dt: Time step (ms)
        decay_type: 'exponential' or 'linear'

    Returns:
        Decay factor (multiply trace by this each timestep). The linear
        form ``1 - dt/tau`` is the Euler step ``trace -= trace/tau * dt``,
        floored at zero.
    """
    if decay_type == "exponential":
        return math.exp(-dt / tau)
    return max(0.0, 1.0 - dt / tau)


class SpikeTrace:
    """Scalar decaying spike trace.

    Args:
        tau: Decay time constant (ms)
        decay_type: 'linear' or 'exponential'
        mode: 'all_to_all' (additive bump) or 'nearest' (reset bump)
        amplitude: Spike contribution
    """

    def __init__(
        self,
        tau: float = 20.0,
        decay_type: str = "linear",
        mode: str = "all_to_all",
        amplitude: float = 1.0,
    ):
        if mode not in TRACE_MODES:
            raise ConfigurationError(f"Unknown trace mode '{mode}'. Must be one of: {TRACE_MODES}")
        if decay_type not in DECAY_TYPES:
            raise ConfigurationError(f"Unknown decay type '{decay_type}'. Must be one of: {DECAY_TYPES}")
        self.tau = tau
        self.decay_type = decay_type
        self.mode = mode
        self.amplitude = amplitude
        self.value = 0.0

    def decay(self, dt: float) -> float:
        self.value *= compute_decay(self.tau, dt, self.decay_type)
        return self.value

    def bump(self) -> float:
        if self.mode == "nearest":
            self.value = self.amplitude
        else:
            self.value += self.amplitude
        return self.value

    def reset(self) -> None:
        self.value = 0.0

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"SpikeTrace(value={self.value:.4f}, tau={self.tau}, mode={self.mode})"
