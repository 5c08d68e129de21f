"""
Spiking layer with all-to-all lateral inhibition (winner-take-all).

A fixed-size population of neurons plus a dense [source][destination]
matrix of :class:`InhibitorySynapse` objects whose diagonal is pinned to
zero weight (no self-inhibition).

Per step (order matters):
    (a) for every ordered pair (i, j), i != j: decay i→j and sum its
        current into inhibitions[j]
    (b) step neuron i with currents[i] + inhibitions[i]
    (c) every neuron that just spiked injects inhibition into i→j, j != i

Inhibition applied in a step therefore always comes from spikes of
*earlier* steps; a step's own spikes only affect future steps.

Example:
    >>> layer = SpikingLayer(5, inhibition_config=InhibitoryConfig(w=2.0))
    >>> for step in range(200):
    ...     state = layer.step([0.5, 0.25, 0.15, 0.1, 0.07], dt_ms=1.0, t_ms=float(step))
    >>> layer.spike_counts
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

import torch

from plasticnet.components.neurons.neuron_factory import NEURON_TYPES, create_neuron
from plasticnet.components.synapses.inhibitory import InhibitoryConfig, InhibitorySynapse
from plasticnet.config.base import BaseConfig
from plasticnet.constants import MS_PER_SECOND
from plasticnet.core.protocols import SpikingNeuron
from plasticnet.errors import ConfigurationError

logger = logging.getLogger(__name__)

NeuronFactory = Callable[[int], SpikingNeuron]


@dataclass
class LayerState:
    """Result of one :meth:`SpikingLayer.step`.

    Attributes:
        spikes: Bool tensor [size], True where the neuron fired this step
        voltages: Membrane potentials [size] after the step
        inhibitions: Inhibitory input [size] applied this step (<= 0)
        total_spikes: Number of neurons that fired this step
    """

    spikes: torch.Tensor
    voltages: torch.Tensor
    inhibitions: torch.Tensor
    total_spikes: int


def _default_factory(neuron_config: Optional[BaseConfig]) -> NeuronFactory:
    if neuron_config is None:
        return lambda _i: create_neuron("lif")
    for kind, (_neuron_cls, config_cls) in NEURON_TYPES.items():
        if type(neuron_config) is config_cls:
            return lambda _i, kind=kind: create_neuron(kind, neuron_config)
    raise ConfigurationError(
        f"No neuron kind uses {type(neuron_config).__name__}; pass neuron_factory explicitly"
    )


class SpikingLayer:
    """Population of neurons under mutual inhibition.

    Args:
        size: Number of neurons
        neuron_config: Config shared by all neurons; its type selects the model
            (default: LIF with default parameters)
        inhibition_config: Config for every off-diagonal inhibitory synapse
        enable_inhibition: If False, neurons are stepped independently
        neuron_factory: Optional callable ``index -> neuron`` overriding
            ``neuron_config``
    """

    def __init__(
        self,
        size: int,
        neuron_config: Optional[BaseConfig] = None,
        inhibition_config: Optional[InhibitoryConfig] = None,
        enable_inhibition: bool = True,
        neuron_factory: Optional[NeuronFactory] = None,
    ):
        if size < 1:
            raise ConfigurationError(f"Layer size must be at least 1, got {size}")
        self.size = size
        self.enable_inhibition = enable_inhibition
        self.inhibition_config = inhibition_config or InhibitoryConfig()

        factory = neuron_factory or _default_factory(neuron_config)
        self.neurons: List[SpikingNeuron] = [factory(i) for i in range(size)]

        # Dense [source][destination]; diagonal pinned to zero
        self.inhibitory: List[List[InhibitorySynapse]] = [
            [
                InhibitorySynapse(self.inhibition_config, w=0.0 if i == j else None)
                for j in range(size)
            ]
            for i in range(size)
        ]

        self.spike_history: List[torch.Tensor] = []
        self.spike_counts = torch.zeros(size, dtype=torch.int64)

    # =========================================================================
    # Simulation
    # =========================================================================

    def step(
        self,
        currents: Union[Sequence[float], torch.Tensor],
        dt_ms: float,
        t_ms: float,
    ) -> LayerState:
        """Advance every neuron by one timestep.

        Args:
            currents: External current per neuron [size]
            dt_ms: Timestep in ms
            t_ms: Current simulation time in ms

        Raises:
            ConfigurationError: If ``currents`` does not have ``size`` entries
        """
        if isinstance(currents, torch.Tensor):
            currents = currents.tolist()
        if len(currents) != self.size:
            raise ConfigurationError(
                f"Expected {self.size} input currents, got {len(currents)}"
            )

        n = self.size
        inhibitions = [0.0] * n

        # (a) inhibition from earlier steps' spikes
        if self.enable_inhibition:
            for i in range(n):
                for j in range(n):
                    if i == j:
                        continue
                    syn = self.inhibitory[i][j]
                    syn.decay(dt_ms)
                    inhibitions[j] += syn.get_current()

        # (b) step neurons
        fired = [
            neuron.step(float(currents[i]) + inhibitions[i], dt_ms, t_ms)
            for i, neuron in enumerate(self.neurons)
        ]

        # (c) new spikes only affect future steps
        if self.enable_inhibition:
            for i in range(n):
                if not fired[i]:
                    continue
                for j in range(n):
                    if j != i:
                        self.inhibitory[i][j].on_pre_spike()

        spikes = torch.tensor(fired, dtype=torch.bool)
        self.spike_history.append(spikes)
        self.spike_counts += spikes.long()

        return LayerState(
            spikes=spikes,
            voltages=self.voltages,
            inhibitions=torch.tensor(inhibitions, dtype=torch.float64),
            total_spikes=int(spikes.sum().item()),
        )

    # =========================================================================
    # Statistics
    # =========================================================================

    @property
    def voltages(self) -> torch.Tensor:
        return torch.tensor([neuron.v for neuron in self.neurons], dtype=torch.float64)

    @property
    def inhibition_weights(self) -> torch.Tensor:
        """Inhibitory weight matrix [source, destination]."""
        return torch.tensor(
            [[syn.w for syn in row] for row in self.inhibitory], dtype=torch.float64
        )

    def firing_rates(self, window_steps: int, dt_ms: float) -> torch.Tensor:
        """Per-neuron firing rate (Hz) over the trailing ``window_steps`` steps.

        The window is truncated to the recorded history; with no history
        the result is all zeros.
        """
        recent = self.spike_history[-window_steps:] if window_steps > 0 else []
        if not recent:
            return torch.zeros(self.size, dtype=torch.float64)
        counts = torch.stack(recent).sum(dim=0).to(torch.float64)
        duration_ms = len(recent) * dt_ms
        return counts / duration_ms * MS_PER_SECOND

    # =========================================================================
    # State management
    # =========================================================================

    def reset(self) -> None:
        """Reset neurons, inhibitory currents, spike history and counts."""
        for neuron in self.neurons:
            neuron.reset()
        for row in self.inhibitory:
            for syn in row:
                syn.reset()
        self.spike_history.clear()
        self.spike_counts.zero_()
        logger.debug(f"Reset {self!r}")

    def __repr__(self) -> str:
        kind = type(self.neurons[0]).__name__
        return (
            f"SpikingLayer(size={self.size}, neuron={kind}, "
            f"inhibition={'on' if self.enable_inhibition else 'off'})"
        )
