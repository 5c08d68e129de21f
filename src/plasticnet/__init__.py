"""
plasticnet - small spiking networks with plastic synapses.

Discrete-time simulation of spiking neuron populations wired by plastic
synapses: temporal-order learning (STDP), winner-take-all competition via
lateral inhibition, and firing-rate homeostasis.

Quick Start:
============

    from plasticnet import SimpleSTDPNetwork, SpikePattern

    net = SimpleSTDPNetwork()
    a = SpikePattern("A", (5.0, 15.0))
    result = net.run_experiment(a, [a, a.reversed("B")], epochs=80, duration_ms=50.0)
    result.tests["A"].spiked, result.tests["B"].spiked   # (True, False)

Internal code should use explicit imports:

    from plasticnet.components.synapses.stdp import STDPSynapse, pair_stdp_config
    from plasticnet.core.layer import SpikingLayer
"""

__version__ = "0.1.0"

# ============================================================================
# PUBLIC API
# ============================================================================

# Neuron models
from plasticnet.components.neurons import (
    AdaptiveLIFConfig,
    AdaptiveLIFNeuron,
    BurstingConfig,
    BurstingNeuron,
    IzhikevichConfig,
    IzhikevichNeuron,
    LIFConfig,
    LIFNeuron,
    create_neuron,
)

# Synapse / plasticity models
from plasticnet.components.synapses import (
    HomeostaticSTDPConfig,
    HomeostaticSTDPSynapse,
    InhibitoryConfig,
    InhibitorySynapse,
    RecurrentSynapse,
    RecurrentSynapseConfig,
    SpikeTrace,
    STDPConfig,
    STDPSynapse,
    WeightInitializer,
    compute_decay,
    pair_stdp_config,
)

# Configuration and errors
from plasticnet.config import BaseConfig
from plasticnet.errors import ConfigurationError, PatternError, PlasticNetError

# Layer and protocols
from plasticnet.core import LayerState, PlasticSynapse, Resettable, SpikingLayer, SpikingNeuron

# Networks
from plasticnet.networks import (
    ExperimentResult,
    RecurrentSNN,
    RecurrentSNNConfig,
    RunRecord,
    SimpleNetworkConfig,
    SimpleRunRecord,
    SimpleSTDPNetwork,
    SpikePattern,
    TestResult,
    TrainingEpochResult,
)

__all__ = [
    "__version__",
    # Neurons
    "LIFConfig",
    "LIFNeuron",
    "AdaptiveLIFConfig",
    "AdaptiveLIFNeuron",
    "IzhikevichConfig",
    "IzhikevichNeuron",
    "BurstingConfig",
    "BurstingNeuron",
    "create_neuron",
    # Synapses
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
    # Config / errors
    "BaseConfig",
    "PlasticNetError",
    "ConfigurationError",
    "PatternError",
    # Core
    "LayerState",
    "SpikingLayer",
    "SpikingNeuron",
    "PlasticSynapse",
    "Resettable",
    # Networks
    "SpikePattern",
    "SimpleNetworkConfig",
    "SimpleSTDPNetwork",
    "SimpleRunRecord",
    "TrainingEpochResult",
    "ExperimentResult",
    "RecurrentSNNConfig",
    "RecurrentSNN",
    "RunRecord",
    "TestResult",
]
