"""
Homeostatic STDP synapse.

Wraps an :class:`STDPSynapse` and scales every plasticity update by a
homeostatic factor that is adjusted periodically (not every step) toward a
target postsynaptic spike count over a trailing window:

    rate = #post spikes in the last window_ms
    homeo_factor += homeo_strength × (target_rate - rate)
    homeo_factor ∈ [0.1, 3.0]

A quiet postsynaptic neuron therefore learns faster, an overactive one
slower. The factor scales plasticity *gain*; the stored weight is what
downstream code propagates as current. ``effective_weight`` exposes
``w × homeo_factor`` for inspection only.

The factor is per-run state: :meth:`reset` (called at every run start)
clears traces and spike history and restores the factor to 1, keeping
only the weight. :meth:`reset_homeostasis` resets the homeostatic state
alone (factor and spike history).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from plasticnet.components.synapses.stdp import STDPConfig, STDPSynapse
from plasticnet.config.base import BaseConfig
from plasticnet.constants import (
    DEFAULT_MAX_LOOKBACK_MS,
    HOMEO_FACTOR_MAX,
    HOMEO_FACTOR_MIN,
    HOMEOSTASIS_WINDOW_MS,
)
from plasticnet.utils.weight_utils import clamp_value


@dataclass
class HomeostaticSTDPConfig(BaseConfig):
    """Configuration for homeostatic STDP.

    STDP fields mirror :class:`STDPConfig`; traces decay exponentially and
    accumulate additively by default.

    Attributes:
        target_rate: Target post spikes per window (default: 5.0)
        homeo_strength: Factor change per unit rate error (default: 0.001)
        window_ms: Trailing window for the rate estimate (default: 1000.0)
        homeo_min: Lower bound of the factor (default: 0.1)
        homeo_max: Upper bound of the factor (default: 3.0)
    """

    w: float = 0.5
    w_min: float = 0.01
    w_max: float = 2.0
    a_plus: float = 0.01
    a_minus: float = 0.012
    tau_plus: float = 20.0
    tau_minus: float = 20.0
    decay_type: str = "exponential"
    trace_mode: str = "all_to_all"
    max_lookback_ms: float = DEFAULT_MAX_LOOKBACK_MS

    target_rate: float = 5.0
    homeo_strength: float = 0.001
    window_ms: float = HOMEOSTASIS_WINDOW_MS
    homeo_min: float = HOMEO_FACTOR_MIN
    homeo_max: float = HOMEO_FACTOR_MAX

    def stdp_config(self) -> STDPConfig:
        """Extract the plain STDP part of this config."""
        names = STDPConfig.field_names()
        return STDPConfig.from_dict({k: v for k, v in self.to_dict().items() if k in names})


class HomeostaticSTDPSynapse:
    """STDP synapse whose learning gain tracks postsynaptic activity.

    Args:
        config: Homeostatic STDP configuration
        w: Optional initial weight overriding ``config.w``
    """

    def __init__(self, config: Optional[HomeostaticSTDPConfig] = None, w: Optional[float] = None):
        self.config = config or HomeostaticSTDPConfig()
        self.stdp = STDPSynapse(self.config.stdp_config(), w=w)
        self.homeo_factor = 1.0
        self.post_spike_history: Deque[float] = deque()

    # Weight and traces live on the wrapped synapse
    @property
    def w(self) -> float:
        return self.stdp.w

    @w.setter
    def w(self, value: float) -> None:
        self.stdp.w = clamp_value(value, self.config.w_min, self.config.w_max)

    @property
    def pre_trace(self) -> float:
        return self.stdp.pre_trace.value

    @property
    def post_trace(self) -> float:
        return self.stdp.post_trace.value

    @property
    def effective_weight(self) -> float:
        """Weight scaled by the homeostatic factor (read-only)."""
        return self.stdp.w * self.homeo_factor

    def reset(self) -> None:
        """Clear traces, spike history and the homeostatic factor. The weight is kept."""
        self.stdp.reset()
        self.reset_homeostasis()

    def reset_weight(self, w: Optional[float] = None) -> None:
        self.stdp.reset_weight(w)

    def reset_homeostasis(self) -> None:
        self.homeo_factor = 1.0
        self.post_spike_history.clear()

    def decay_traces(self, dt_ms: float) -> None:
        self.stdp.decay_traces(dt_ms)

    def on_pre_spike(self, t_ms: float, learn: bool = True) -> None:
        self.stdp.on_pre_spike(t_ms, learn=learn, gain=self.homeo_factor)

    def on_post_spike(self, t_ms: float, learn: bool = True) -> None:
        self.stdp.on_post_spike(t_ms, learn=learn, gain=self.homeo_factor)
        self.post_spike_history.append(t_ms)

    def current_rate(self, t_ms: float) -> int:
        """Post spikes within the trailing window ending at ``t_ms``."""
        window = self.config.window_ms
        while self.post_spike_history and t_ms - self.post_spike_history[0] >= window:
            self.post_spike_history.popleft()
        return len(self.post_spike_history)

    def update_homeostasis(self, t_ms: float) -> float:
        """Nudge the factor toward the target rate.

        Returns:
            The updated homeostatic factor
        """
        cfg = self.config
        error = cfg.target_rate - self.current_rate(t_ms)
        self.homeo_factor = clamp_value(
            self.homeo_factor + cfg.homeo_strength * error,
            cfg.homeo_min,
            cfg.homeo_max,
        )
        return self.homeo_factor

    def __repr__(self) -> str:
        return f"HomeostaticSTDPSynapse(w={self.w:.4f}, homeo_factor={self.homeo_factor:.4f})"
