"""
Adaptive LIF neuron with spike-frequency adaptation.

Adds a scalar adaptation current to the LIF membrane equation:

    da = -a / τ_adapt * dt
    dV = (-(V - V_rest) / τ_m + I - a) * dt

Every spike increments ``a`` by ``b_adapt``, so sustained firing builds up a
drag that lowers the firing rate for the same input (spike-frequency
adaptation). With ``b_adapt = 0`` the model reduces to plain LIF.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from plasticnet.config.base import BaseConfig


@dataclass
class AdaptiveLIFConfig(BaseConfig):
    """Configuration for adaptive LIF neurons.

    Attributes:
        tau_ms: Membrane time constant in ms (default: 20.0)
        v_rest: Resting potential (default: 0.0)
        v_reset: Reset potential after spike (default: 0.0)
        v_threshold: Spike threshold (default: 1.0)
        refractory_ms: Absolute refractory period in ms (default: 2.0)
        tau_adapt: Adaptation time constant in ms (default: 100.0)
        b_adapt: Adaptation increment per spike (default: 0.05)
    """

    tau_ms: float = 20.0
    v_rest: float = 0.0
    v_reset: float = 0.0
    v_threshold: float = 1.0
    refractory_ms: float = 2.0
    tau_adapt: float = 100.0
    b_adapt: float = 0.05


class AdaptiveLIFNeuron:
    """LIF neuron with a decaying, spike-incremented adaptation current.

    Args:
        config: Adaptive LIF configuration parameters
    """

    def __init__(self, config: Optional[AdaptiveLIFConfig] = None):
        self.config = config or AdaptiveLIFConfig()
        self._v_threshold = self.config.v_threshold
        self.v = self.config.v_rest
        self.adaptation = 0.0
        self.t_last_spike = -math.inf
        self.spike_count = 0

    def reset(self) -> None:
        self.v = self.config.v_rest
        self.adaptation = 0.0
        self.t_last_spike = -math.inf
        self.spike_count = 0

    @property
    def threshold(self) -> float:
        """Spike threshold; writable for intrinsic-excitability experiments."""
        return self._v_threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self._v_threshold = value

    def step(self, input_current: float, dt_ms: float, t_ms: float) -> bool:
        cfg = self.config

        if t_ms - self.t_last_spike < cfg.refractory_ms:
            self.v = cfg.v_reset
            return False

        # Adaptation decays toward zero before it drags the membrane
        self.adaptation += (-self.adaptation / cfg.tau_adapt) * dt_ms

        dv = (-(self.v - cfg.v_rest) / cfg.tau_ms + input_current - self.adaptation) * dt_ms
        self.v += dv

        if self.v >= self._v_threshold:
            self.v = cfg.v_reset
            self.t_last_spike = t_ms
            self.adaptation += cfg.b_adapt
            self.spike_count += 1
            return True
        return False

    def __repr__(self) -> str:
        return (
            f"AdaptiveLIFNeuron(v={self.v:.3f}, adaptation={self.adaptation:.3f}, "
            f"θ={self._v_threshold})"
        )
