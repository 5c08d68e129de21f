"""
Run records and summary results.

Networks append one snapshot per timestep to a :class:`StepRecorder`; at
the end of a run the snapshots are stacked into tensors with time as the
first dimension. Records are read-only outputs: the engine never reads
them back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

import torch

Snapshot = Union[float, bool, torch.Tensor]


class StepRecorder:
    """Append-only per-step snapshot buffer."""

    def __init__(self) -> None:
        self._columns: Dict[str, List[Snapshot]] = {}

    def append(self, **values: Snapshot) -> None:
        for key, value in values.items():
            self._columns.setdefault(key, []).append(value)

    def __len__(self) -> int:
        return len(next(iter(self._columns.values()), []))

    def stack(self) -> Dict[str, torch.Tensor]:
        """Stack each column along a new leading time dimension."""
        out: Dict[str, torch.Tensor] = {}
        for key, values in self._columns.items():
            if isinstance(values[0], torch.Tensor):
                out[key] = torch.stack(values)
            elif isinstance(values[0], bool):
                out[key] = torch.tensor(values, dtype=torch.bool)
            else:
                out[key] = torch.tensor(values, dtype=torch.float64)
        return out


# =============================================================================
# 2-input / 1-output network
# =============================================================================


@dataclass
class SimpleRunRecord:
    """Time series of one :class:`SimpleSTDPNetwork` run.

    Attributes:
        pattern_name: Name of the input pattern
        training: Whether plasticity was enabled
        times: Step times [T]
        input_voltages: Input membrane potentials [T, 2]
        input_spikes: Input spikes [T, 2]
        output_voltage: Output membrane potential [T]
        output_spikes: Output spikes [T]
        weights: Feed-forward weights after each step [T, 2]
    """

    pattern_name: str
    training: bool
    times: torch.Tensor
    input_voltages: torch.Tensor
    input_spikes: torch.Tensor
    output_voltage: torch.Tensor
    output_spikes: torch.Tensor
    weights: torch.Tensor

    @property
    def output_spike_times(self) -> torch.Tensor:
        return self.times[self.output_spikes]

    @property
    def output_spike_count(self) -> int:
        return int(self.output_spikes.sum().item())

    @property
    def spiked(self) -> bool:
        return self.output_spike_count > 0


@dataclass
class TrainingEpochResult:
    """Summary of one training epoch."""

    epoch: int
    pattern_name: str
    spiked: bool
    w1: float
    w2: float


@dataclass
class ExperimentResult:
    """Outcome of :meth:`SimpleSTDPNetwork.run_experiment`."""

    training_history: List[TrainingEpochResult]
    tests: Dict[str, SimpleRunRecord]
    final_weights: tuple[float, float]


# =============================================================================
# Input → hidden → output network
# =============================================================================


@dataclass
class RunRecord:
    """Time series of one :class:`RecurrentSNN` run.

    Weight and homeostatic-factor snapshots are indexed
    [T, source, destination].
    """

    pattern_name: str
    training: bool
    times: torch.Tensor
    input_spikes: torch.Tensor
    hidden_voltages: torch.Tensor
    hidden_spikes: torch.Tensor
    output_voltages: torch.Tensor
    output_spikes: torch.Tensor
    hidden_rates: torch.Tensor
    output_rates: torch.Tensor
    weights_ih: torch.Tensor
    weights_ho: torch.Tensor
    homeo_ih: torch.Tensor
    homeo_ho: torch.Tensor

    @property
    def n_steps(self) -> int:
        return int(self.times.shape[0])

    @property
    def output_spike_counts(self) -> torch.Tensor:
        return self.output_spikes.sum(dim=0)

    @property
    def hidden_spike_counts(self) -> torch.Tensor:
        return self.hidden_spikes.sum(dim=0)


@dataclass
class TestResult:
    """Classification outcome of a test run.

    Attributes:
        pattern_name: Name of the tested pattern
        winner: Index of the output neuron with the most spikes (lowest
            index on ties; 0 when nothing fired)
        confidence: winner count / total output spikes, 0.0 with no spikes
        spike_counts: Output spike count per neuron
        record: Full time series of the run
    """

    __test__ = False  # not a pytest class

    pattern_name: str
    winner: int
    confidence: float
    spike_counts: torch.Tensor
    record: Optional[RunRecord] = field(default=None, repr=False)

    @classmethod
    def from_counts(
        cls,
        pattern_name: str,
        spike_counts: torch.Tensor,
        record: Optional[RunRecord] = None,
    ) -> TestResult:
        # torch.argmax returns the first maximal index
        winner = int(torch.argmax(spike_counts).item())
        total = int(spike_counts.sum().item())
        confidence = int(spike_counts[winner].item()) / total if total > 0 else 0.0
        return cls(pattern_name, winner, confidence, spike_counts, record)
