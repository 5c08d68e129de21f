"""Izhikevich Neuron Model - Biologically Plausible Spiking with Rich Dynamics.

The Izhikevich model combines computational efficiency with biological realism,
capable of reproducing cortical firing patterns including:
- Tonic spiking (regular firing)
- Phasic spiking and bursting
- Spike frequency adaptation
- Class 1 and 2 excitability

Model equations:
    dv/dt = 0.04*v^2 + 5*v + 140 - u + I
    du/dt = a*(b*v - u)

    if v >= v_peak:
        v := c
        u := u + d

Parameters:
    a: recovery time constant (smaller = slower recovery)
    b: sensitivity of recovery variable u to voltage v
    c: after-spike reset value for voltage (mV)
    d: after-spike reset increment for recovery variable

The quadratic term makes the model stiff near spike onset, so each
simulation step is split into fixed sub-steps (~0.5 ms, at least one).

Reference: Izhikevich, E.M. (2003). Simple model of spiking neurons.
IEEE Transactions on Neural Networks, 14(6), 1569-1572.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from plasticnet.config.base import BaseConfig


@dataclass
class IzhikevichConfig(BaseConfig):
    """Configuration for Izhikevich neuron model.

    Defaults are the regular-spiking cortical cell (a=0.02, b=0.2, c=-65, d=8).
    Voltages are in mV (not normalized).
    """

    a: float = 0.02  # Recovery time constant (smaller = slower)
    b: float = 0.2  # Recovery sensitivity to voltage
    c: float = -65.0  # Reset voltage (mV)
    d: float = 8.0  # Reset recovery increment
    v_peak: float = 30.0  # Spike cutoff (mV)
    substep_ms: float = 0.5  # Integration sub-step


class IzhikevichNeuron:
    """Single Izhikevich neuron with sub-stepped Euler integration.

    Args:
        config: Configuration parameters
    """

    def __init__(self, config: Optional[IzhikevichConfig] = None):
        self.config = config or IzhikevichConfig()
        self.v = self.config.c
        self.u = self.config.b * self.v
        self.t_last_spike = -math.inf
        self.spike_count = 0

    def reset(self) -> None:
        self.v = self.config.c
        self.u = self.config.b * self.v
        self.t_last_spike = -math.inf
        self.spike_count = 0

    def n_substeps(self, dt_ms: float) -> int:
        return max(1, round(dt_ms / self.config.substep_ms))

    def step(self, input_current: float, dt_ms: float, t_ms: float) -> bool:
        """Update the neuron for one timestep.

        Returns on the first sub-step that reaches ``v_peak``; the remainder
        of the step is skipped so at most one spike is emitted per step.
        """
        cfg = self.config
        n = self.n_substeps(dt_ms)
        h = dt_ms / n

        for _ in range(n):
            dv = 0.04 * self.v * self.v + 5.0 * self.v + 140.0 - self.u + input_current
            du = cfg.a * (cfg.b * self.v - self.u)
            self.v += dv * h
            self.u += du * h

            if self.v >= cfg.v_peak:
                self.v = cfg.c
                self.u += cfg.d
                self.t_last_spike = t_ms
                self.spike_count += 1
                return True
        return False

    def __repr__(self) -> str:
        return f"IzhikevichNeuron(v={self.v:.2f}, u={self.u:.2f})"
