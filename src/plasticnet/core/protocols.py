"""
Protocol Definitions for neurons and synapses.

Structural typing protocols describe what a component CAN DO rather than
what it IS. The four neuron models and the synapse models share no base
class; layers and networks accept anything that satisfies these protocols,
so the models stay interchangeable without shared base-class state.

Protocols Defined:
==================
- `Resettable`: Has reset() to clear transient state
- `SpikingNeuron`: Has step()/reset() and exposes membrane potential
- `PlasticSynapse`: Has trace decay and pre/post spike hooks
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Resettable(Protocol):
    """Protocol for components that can reset their transient state.

    Implementations clear dynamic state (membrane potentials, traces,
    inhibitory currents, delay queues) while preserving learned parameters
    (weights). Calling reset() twice in a row is equivalent to calling it
    once.
    """

    def reset(self) -> None:
        ...


@runtime_checkable
class SpikingNeuron(Protocol):
    """Protocol for single-neuron membrane models.

    Attributes:
        v: Membrane potential after the most recent step
        spike_count: Spikes emitted since the last reset
    """

    v: float
    spike_count: int

    def step(self, input_current: float, dt_ms: float, t_ms: float) -> bool:
        """Advance one timestep.

        Args:
            input_current: Total current injected during this step
            dt_ms: Timestep in milliseconds
            t_ms: Current simulation time in milliseconds

        Returns:
            True if the neuron fired during this step
        """
        ...

    def reset(self) -> None:
        ...


@runtime_checkable
class PlasticSynapse(Protocol):
    """Protocol for trace-based plastic synapses.

    Attributes:
        w: Stored synaptic weight, always within the configured bounds
    """

    w: float

    def decay_traces(self, dt_ms: float) -> None:
        ...

    def on_pre_spike(self, t_ms: float, learn: bool = True) -> None:
        ...

    def on_post_spike(self, t_ms: float, learn: bool = True) -> None:
        ...

    def reset(self) -> None:
        ...
