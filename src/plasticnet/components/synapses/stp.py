"""
Short-Term Plasticity (STP) recurrent synapse - Tsodyks-Markram style.

Short-term plasticity modulates synaptic strength on fast timescales
based on recent presynaptic activity. Unlike STDP it is transient and
recovers on its own.

State:
- u: Utilization (release probability), recovers toward U
- x: Available resources, recovers toward 1

Dynamics:
    du/dt = (U - u) / τ_f
    dx/dt = (1 - x) / τ_d

On presynaptic spike at time t:
    u ← u + U(1 - u)                (facilitation)
    strength = w × u × x            (before resources are consumed)
    x ← x(1 - u)                    (depression)
    enqueue (t + delay, strength)

Transmission is delayed: :meth:`RecurrentSynapse.get_current` drains and
sums every queued entry whose arrival time has passed; later entries stay
queued.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple

from plasticnet.config.base import BaseConfig
from plasticnet.constants import TIME_EPSILON_MS
from plasticnet.utils.weight_utils import clamp_value


@dataclass
class RecurrentSynapseConfig(BaseConfig):
    """Configuration for short-term plasticity on recurrent connections.

    Attributes:
        w: Synaptic weight (default: 0.3)
        w_min: Lower weight bound (default: 0.0)
        w_max: Upper weight bound (default: 1.5)
        tau_facilitation: Recovery time constant of u in ms (default: 200.0)
        tau_depression: Recovery time constant of x in ms (default: 500.0)
        u_facilitation: Baseline utilization U (default: 0.2)
        delay_ms: Transmission delay in ms (default: 1.0)
    """

    w: float = 0.3
    w_min: float = 0.0
    w_max: float = 1.5
    tau_facilitation: float = 200.0
    tau_depression: float = 500.0
    u_facilitation: float = 0.2
    delay_ms: float = 1.0


class RecurrentSynapse:
    """Delayed synapse with facilitation and depression.

    Args:
        config: STP configuration
        w: Optional weight overriding ``config.w``
    """

    def __init__(self, config: Optional[RecurrentSynapseConfig] = None, w: Optional[float] = None):
        self.config = config or RecurrentSynapseConfig()
        cfg = self.config
        self.w = clamp_value(cfg.w if w is None else w, cfg.w_min, cfg.w_max)
        self.u = cfg.u_facilitation
        self.x = 1.0
        # (arrival_ms, strength), ordered by arrival
        self.queue: Deque[Tuple[float, float]] = deque()

    def reset(self) -> None:
        self.u = self.config.u_facilitation
        self.x = 1.0
        self.queue.clear()

    def decay_variables(self, dt_ms: float) -> None:
        cfg = self.config
        self.u += (cfg.u_facilitation - self.u) / cfg.tau_facilitation * dt_ms
        self.x += (1.0 - self.x) / cfg.tau_depression * dt_ms

    def on_pre_spike(self, t_ms: float) -> float:
        """Register a presynaptic spike.

        Returns:
            The strength queued for delivery at ``t_ms + delay_ms``
        """
        cfg = self.config
        self.u += cfg.u_facilitation * (1.0 - self.u)
        strength = self.w * self.u * self.x
        self.x *= 1.0 - self.u
        self.queue.append((t_ms + cfg.delay_ms, strength))
        return strength

    def get_current(self, t_ms: float) -> float:
        """Drain and sum all entries that have arrived by ``t_ms``."""
        total = 0.0
        while self.queue and self.queue[0][0] <= t_ms + TIME_EPSILON_MS:
            total += self.queue.popleft()[1]
        return total

    @property
    def pending(self) -> int:
        return len(self.queue)

    def __repr__(self) -> str:
        return f"RecurrentSynapse(w={self.w:.3f}, u={self.u:.3f}, x={self.x:.3f}, pending={self.pending})"
