"""Core abstractions: component protocols and the lateral-inhibition layer."""

from plasticnet.core.layer import LayerState, SpikingLayer
from plasticnet.core.protocols import PlasticSynapse, Resettable, SpikingNeuron

__all__ = [
    "LayerState",
    "SpikingLayer",
    "PlasticSynapse",
    "Resettable",
    "SpikingNeuron",
]
