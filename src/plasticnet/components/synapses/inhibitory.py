"""
Inhibitory synapse for lateral and feed-forward inhibition.

Keeps one decaying current; each presynaptic spike adds the weight to it,
and the postsynaptic neuron receives the negative of the current:

    current ← current × exp(-dt / τ_decay)      (every step)
    current ← current + w                        (on pre spike)
    I_post  = -current

No plasticity.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from plasticnet.config.base import BaseConfig
from plasticnet.utils.weight_utils import clamp_value


@dataclass
class InhibitoryConfig(BaseConfig):
    """Configuration for inhibitory synapses.

    Attributes:
        w: Inhibition strength, a positive value applied as negative current
            (default: 0.8)
        w_min: Lower weight bound (default: 0.0)
        w_max: Upper weight bound (default: 5.0)
        tau_decay: Current decay time constant in ms (default: 5.0)
    """

    w: float = 0.8
    w_min: float = 0.0
    w_max: float = 5.0
    tau_decay: float = 5.0


class InhibitorySynapse:
    """Non-plastic synapse delivering a decaying negative current.

    Args:
        config: Inhibitory configuration
        w: Optional weight overriding ``config.w`` (e.g. 0 on a layer diagonal)
    """

    def __init__(self, config: Optional[InhibitoryConfig] = None, w: Optional[float] = None):
        self.config = config or InhibitoryConfig()
        self.w = clamp_value(self.config.w if w is None else w, self.config.w_min, self.config.w_max)
        self.current = 0.0

    def reset(self) -> None:
        self.current = 0.0

    def decay(self, dt_ms: float) -> None:
        self.current *= math.exp(-dt_ms / self.config.tau_decay)

    def on_pre_spike(self) -> None:
        self.current += self.w

    def get_current(self) -> float:
        return -self.current

    def __repr__(self) -> str:
        return f"InhibitorySynapse(w={self.w:.3f}, current={self.current:.4f})"
