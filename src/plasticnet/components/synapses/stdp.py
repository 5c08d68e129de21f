"""
Spike-Timing Dependent Plasticity (STDP) synapse.

One canonical trace-based rule for every plastic synapse in the package:

    on presynaptic spike:   Δw = -A- × post_trace × gain   (LTD: pre after post)
                            then bump pre_trace
    on postsynaptic spike:  Δw = +A+ × pre_trace × gain    (LTP: post after pre)
                            then bump post_trace

Traces decay once per timestep via :meth:`STDPSynapse.decay_traces`. The
weight is clamped to ``[w_min, w_max]`` after every update.

Pair-based STDP is a configuration of the same class rather than a second
code path: exponential decay plus "nearest" traces (reset to 1 on each
spike) make the trace equal ``exp(-Δt/τ)`` for the most recent partner
spike, which is the classic pairwise kernel. See :func:`pair_stdp_config`.

Learning can be switched off per event (``learn=False``); traces are still
bumped so that timing information stays consistent while weights are frozen.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from plasticnet.components.synapses.traces import SpikeTrace
from plasticnet.config.base import BaseConfig
from plasticnet.constants import DEFAULT_MAX_LOOKBACK_MS
from plasticnet.utils.weight_utils import clamp_value


@dataclass
class STDPConfig(BaseConfig):
    """Configuration for trace-based STDP.

    Attributes:
        w: Initial weight (default: 0.5)
        w_min: Lower weight bound (default: 0.0)
        w_max: Upper weight bound (default: 2.0)
        a_plus: LTP amplitude (default: 0.02)
        a_minus: LTD amplitude (default: 0.025)
        tau_plus: Presynaptic trace time constant in ms (default: 20.0)
        tau_minus: Postsynaptic trace time constant in ms (default: 20.0)
        decay_type: 'linear' or 'exponential' trace decay (default: 'linear')
        trace_mode: 'all_to_all' or 'nearest' trace bumping (default: 'all_to_all')
        max_lookback_ms: Pairings further apart than this are ignored
            (default: 10000.0)
    """

    w: float = 0.5
    w_min: float = 0.0
    w_max: float = 2.0
    a_plus: float = 0.02
    a_minus: float = 0.025
    tau_plus: float = 20.0
    tau_minus: float = 20.0
    decay_type: str = "linear"
    trace_mode: str = "all_to_all"
    max_lookback_ms: float = DEFAULT_MAX_LOOKBACK_MS


def pair_stdp_config(**overrides: Any) -> STDPConfig:
    """STDPConfig that reproduces pair-based (nearest-spike) STDP.

    Example:
        >>> cfg = pair_stdp_config(w_max=1.0, a_plus=0.015, a_minus=0.012)
        >>> cfg.trace_mode
        'nearest'
    """
    return STDPConfig(decay_type="exponential", trace_mode="nearest").with_overrides(**overrides)


class STDPSynapse:
    """Single plastic synapse with pre/post eligibility traces.

    Args:
        config: STDP configuration
        w: Optional initial weight overriding ``config.w`` (e.g. jittered)
    """

    def __init__(self, config: Optional[STDPConfig] = None, w: Optional[float] = None):
        self.config = config or STDPConfig()
        cfg = self.config
        self.initial_w = cfg.w if w is None else w
        self.w = clamp_value(self.initial_w, cfg.w_min, cfg.w_max)
        self.pre_trace = SpikeTrace(cfg.tau_plus, cfg.decay_type, cfg.trace_mode)
        self.post_trace = SpikeTrace(cfg.tau_minus, cfg.decay_type, cfg.trace_mode)
        self.t_last_pre = -math.inf
        self.t_last_post = -math.inf

    # =========================================================================
    # State management
    # =========================================================================

    def reset(self) -> None:
        """Clear traces and spike history. The weight is kept."""
        self.pre_trace.reset()
        self.post_trace.reset()
        self.t_last_pre = -math.inf
        self.t_last_post = -math.inf

    def reset_weight(self, w: Optional[float] = None) -> None:
        """Restore the initial weight (or set ``w``), clamped to bounds."""
        target = self.initial_w if w is None else w
        self.w = clamp_value(target, self.config.w_min, self.config.w_max)

    # =========================================================================
    # Plasticity events
    # =========================================================================

    def decay_traces(self, dt_ms: float) -> None:
        self.pre_trace.decay(dt_ms)
        self.post_trace.decay(dt_ms)

    def _in_window(self, t_ms: float, t_partner: float) -> bool:
        return 0.0 <= t_ms - t_partner < self.config.max_lookback_ms

    def _apply(self, dw: float) -> None:
        self.w = clamp_value(self.w + dw, self.config.w_min, self.config.w_max)

    def on_pre_spike(self, t_ms: float, learn: bool = True, gain: float = 1.0) -> None:
        """Presynaptic spike: depress by the postsynaptic trace, then bump pre."""
        if learn and self._in_window(t_ms, self.t_last_post):
            self._apply(-self.config.a_minus * self.post_trace.value * gain)
        self.pre_trace.bump()
        self.t_last_pre = t_ms

    def on_post_spike(self, t_ms: float, learn: bool = True, gain: float = 1.0) -> None:
        """Postsynaptic spike: potentiate by the presynaptic trace, then bump post."""
        if learn and self._in_window(t_ms, self.t_last_pre):
            self._apply(self.config.a_plus * self.pre_trace.value * gain)
        self.post_trace.bump()
        self.t_last_post = t_ms

    def __repr__(self) -> str:
        return (
            f"STDPSynapse(w={self.w:.4f}, pre={self.pre_trace.value:.3f}, "
            f"post={self.post_trace.value:.3f})"
        )
