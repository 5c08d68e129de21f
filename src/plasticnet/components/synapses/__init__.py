"""
Synapse and plasticity models.

Trace-based STDP (with pair-based STDP as a configuration), homeostatic
STDP, inhibitory synapses, and short-term-plasticity recurrent synapses
with transmission delay.
"""

from plasticnet.components.synapses.homeostatic_stdp import (
    HomeostaticSTDPConfig,
    HomeostaticSTDPSynapse,
)
from plasticnet.components.synapses.inhibitory import InhibitoryConfig, InhibitorySynapse
from plasticnet.components.synapses.stdp import STDPConfig, STDPSynapse, pair_stdp_config
from plasticnet.components.synapses.stp import RecurrentSynapse, RecurrentSynapseConfig
from plasticnet.components.synapses.traces import SpikeTrace, compute_decay
from plasticnet.components.synapses.weight_init import WeightInitializer

__all__ = [
    "SpikeTrace",
    "compute_decay",
    "STDPConfig",
    "STDPSynapse",
    "pair_stdp_config",
    "HomeostaticSTDPConfig",
    "HomeostaticSTDPSynapse",
    "InhibitoryConfig",
    "InhibitorySynapse",
    "RecurrentSynapseConfig",
    "RecurrentSynapse",
    "WeightInitializer",
]
