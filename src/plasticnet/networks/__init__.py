"""
Network orchestrators.

Two fixed assemblies sharing one episode protocol (reset transient state,
step ``ceil(duration / dt) + 1`` times, learn only when training):

- :class:`SimpleSTDPNetwork`: 2 inputs → 1 output temporal-order learner
- :class:`RecurrentSNN`: input → hidden WTA → output WTA classifier
"""

from plasticnet.networks.patterns import SpikePattern, as_pattern, n_steps, validate_run
from plasticnet.networks.records import (
    ExperimentResult,
    RunRecord,
    SimpleRunRecord,
    StepRecorder,
    TestResult,
    TrainingEpochResult,
)
from plasticnet.networks.recurrent_snn import RecurrentSNN, RecurrentSNNConfig
from plasticnet.networks.simple_stdp import SimpleNetworkConfig, SimpleSTDPNetwork

__all__ = [
    "SpikePattern",
    "as_pattern",
    "n_steps",
    "validate_run",
    "ExperimentResult",
    "RunRecord",
    "SimpleRunRecord",
    "StepRecorder",
    "TestResult",
    "TrainingEpochResult",
    "RecurrentSNN",
    "RecurrentSNNConfig",
    "SimpleNetworkConfig",
    "SimpleSTDPNetwork",
]
