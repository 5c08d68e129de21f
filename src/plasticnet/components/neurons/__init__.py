"""
Neuron models.

Four single-neuron membrane models sharing the ``SpikingNeuron`` contract
(``step``/``reset``/``v``/``spike_count``) plus a name-based factory.
"""

from plasticnet.components.neurons.adaptive_lif import AdaptiveLIFConfig, AdaptiveLIFNeuron
from plasticnet.components.neurons.bursting_neuron import BurstingConfig, BurstingNeuron
from plasticnet.components.neurons.izhikevich_neuron import IzhikevichConfig, IzhikevichNeuron
from plasticnet.components.neurons.lif import LIFConfig, LIFNeuron
from plasticnet.components.neurons.neuron_factory import NEURON_TYPES, create_neuron

__all__ = [
    "LIFConfig",
    "LIFNeuron",
    "AdaptiveLIFConfig",
    "AdaptiveLIFNeuron",
    "IzhikevichConfig",
    "IzhikevichNeuron",
    "BurstingConfig",
    "BurstingNeuron",
    "NEURON_TYPES",
    "create_neuron",
]
