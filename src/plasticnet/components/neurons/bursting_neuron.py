"""
Bursting neuron: LIF dynamics with a burst-mode state machine.

Two modes:

1. NORMAL: LIF integration minus a slow suppression variable ``s``.
   Crossing threshold emits the first spike of a burst, increments ``s``
   by ``b_burst`` and switches to BURST mode.
2. BURST: the remaining ``burst_size - 1`` spikes are emitted every
   ``intra_burst_interval_ms`` regardless of input (but never inside the
   refractory period), then NORMAL resumes.

``s`` decays exponentially every step in both modes, so bursts in quick
succession are progressively suppressed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from plasticnet.config.base import BaseConfig


@dataclass
class BurstingConfig(BaseConfig):
    """Configuration for bursting neurons.

    Attributes:
        tau_ms: Membrane time constant in ms (default: 20.0)
        v_rest: Resting potential (default: 0.0)
        v_reset: Reset potential after spike (default: 0.0)
        v_threshold: Spike threshold (default: 1.0)
        refractory_ms: Minimum spacing between any two spikes (default: 1.0)
        burst_size: Spikes per burst, including the triggering one (default: 3)
        intra_burst_interval_ms: Spacing of spikes inside a burst (default: 3.0)
        tau_burst: Decay time constant of the suppression variable (default: 200.0)
        b_burst: Suppression increment per burst onset (default: 0.15)
    """

    tau_ms: float = 20.0
    v_rest: float = 0.0
    v_reset: float = 0.0
    v_threshold: float = 1.0
    refractory_ms: float = 1.0
    burst_size: int = 3
    intra_burst_interval_ms: float = 3.0
    tau_burst: float = 200.0
    b_burst: float = 0.15


class BurstingNeuron:
    """LIF neuron that answers each threshold crossing with a fixed burst.

    Args:
        config: Bursting configuration parameters
    """

    def __init__(self, config: Optional[BurstingConfig] = None):
        self.config = config or BurstingConfig()
        self.v = self.config.v_rest
        self.burst_var = 0.0
        self.burst_remaining = 0
        self.burst_timer = 0.0
        self.t_last_spike = -math.inf
        self.spike_count = 0

    def reset(self) -> None:
        self.v = self.config.v_rest
        self.burst_var = 0.0
        self.burst_remaining = 0
        self.burst_timer = 0.0
        self.t_last_spike = -math.inf
        self.spike_count = 0

    @property
    def in_burst(self) -> bool:
        return self.burst_remaining > 0

    def _fire(self, t_ms: float) -> bool:
        self.v = self.config.v_reset
        self.t_last_spike = t_ms
        self.spike_count += 1
        return True

    def step(self, input_current: float, dt_ms: float, t_ms: float) -> bool:
        cfg = self.config

        # Slow suppression variable decays in every mode
        self.burst_var += (-self.burst_var / cfg.tau_burst) * dt_ms

        refractory = t_ms - self.t_last_spike < cfg.refractory_ms

        if self.in_burst:
            # An expired timer waits for the refractory period to clear
            self.burst_timer -= dt_ms
            if self.burst_timer <= 0 and not refractory:
                self.burst_remaining -= 1
                self.burst_timer = cfg.intra_burst_interval_ms
                return self._fire(t_ms)
            return False

        if refractory:
            self.v = cfg.v_reset
            return False

        dv = (-(self.v - cfg.v_rest) / cfg.tau_ms + input_current - self.burst_var) * dt_ms
        self.v += dv

        if self.v >= cfg.v_threshold:
            self.burst_var += cfg.b_burst
            # The triggering spike counts as the first of the burst
            self.burst_remaining = cfg.burst_size - 1
            self.burst_timer = cfg.intra_burst_interval_ms
            return self._fire(t_ms)
        return False

    def __repr__(self) -> str:
        mode = "burst" if self.in_burst else "normal"
        return f"BurstingNeuron(v={self.v:.3f}, mode={mode}, burst_var={self.burst_var:.3f})"
