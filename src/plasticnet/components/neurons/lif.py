"""
Leaky Integrate-and-Fire (LIF) neuron model.

The LIF neuron accumulates input over time, leaks toward a resting
potential, and fires a spike when threshold is reached.

Membrane dynamics (forward Euler):
    dV = (-(V - V_rest) / τ_m + I) * dt

When V >= V_threshold:
    - Emit spike
    - V = V_reset
    - Enter refractory period (V held at V_reset, no spikes)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from plasticnet.config.base import BaseConfig


@dataclass
class LIFConfig(BaseConfig):
    """Configuration for LIF neuron parameters.

    Attributes:
        tau_ms: Membrane time constant in ms (default: 20.0)
            Larger values = slower decay = longer memory of inputs.
        v_rest: Resting membrane potential (default: 0.0)
        v_reset: Reset potential after spike (default: 0.0)
        v_threshold: Spike threshold (default: 1.0)
        refractory_ms: Absolute refractory period in ms (default: 2.0)
    """

    tau_ms: float = 20.0
    v_rest: float = 0.0
    v_reset: float = 0.0
    v_threshold: float = 1.0
    refractory_ms: float = 2.0


class LIFNeuron:
    """Single current-based Leaky Integrate-and-Fire neuron.

    Args:
        config: LIF configuration parameters

    Example:
        >>> neuron = LIFNeuron(LIFConfig(tau_ms=10.0))
        >>> fired = [neuron.step(1.2, dt_ms=1.0, t_ms=float(t)) for t in range(5)]
    """

    def __init__(self, config: Optional[LIFConfig] = None):
        self.config = config or LIFConfig()
        self.v = self.config.v_rest
        self.t_last_spike = -math.inf
        self.spike_count = 0

    def reset(self) -> None:
        """Return to resting potential and forget spike history."""
        self.v = self.config.v_rest
        self.t_last_spike = -math.inf
        self.spike_count = 0

    def is_refractory(self, t_ms: float) -> bool:
        return t_ms - self.t_last_spike < self.config.refractory_ms

    def step(self, input_current: float, dt_ms: float, t_ms: float) -> bool:
        """Advance membrane by one timestep.

        Args:
            input_current: Current injected at this timestep
            dt_ms: Timestep in ms
            t_ms: Current simulation time in ms

        Returns:
            True if the neuron spiked
        """
        cfg = self.config

        # Refractory: hold at reset
        if self.is_refractory(t_ms):
            self.v = cfg.v_reset
            return False

        self.v += (-(self.v - cfg.v_rest) / cfg.tau_ms + input_current) * dt_ms

        if self.v >= cfg.v_threshold:
            self.v = cfg.v_reset
            self.t_last_spike = t_ms
            self.spike_count += 1
            return True
        return False

    def __repr__(self) -> str:
        return f"LIFNeuron(v={self.v:.3f}, τ={self.config.tau_ms}, θ={self.config.v_threshold})"
