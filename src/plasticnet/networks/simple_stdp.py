"""
SimpleSTDPNetwork - minimal 2-input / 1-output associative learner.

Architecture:

    in1 ──(STDP w1)──┐
      └──(inh)──────┤
                    ├──▶ out
    in2 ──(STDP w2)──┤
      └──(inh)──────┘

Each input is a LIF neuron driven by a single-step current pulse at its
scheduled spike time. Excitatory synapses use pair-based STDP and deliver
an instantaneous current (``w`` on the step of a presynaptic spike).
Each input also drives a feed-forward inhibitory synapse onto the output,
so after the first input spike the output is briefly suppressed. With
this, the output responds to whichever channel arrives first: after
training on "A before B" it fires on A and stays silent on the reversed
order.

Per step:
    1. step input neurons
    2. decay STDP traces
    3. on_pre_spike for spiking inputs
    4. decay feed-forward inhibition, sum its current (earlier steps' spikes)
    5. output current = Σ w_k · spike_k + inhibition
    6. step output neuron
    7. if training and output spiked: on_post_spike on both synapses
    8. register this step's input spikes on the inhibitory synapses
    9. record

Weights persist across episodes; every run resets neurons, traces and
inhibitory currents. :meth:`SimpleSTDPNetwork.reset_weights` is the full
experiment reset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

import torch

from plasticnet.components.neurons.lif import LIFConfig, LIFNeuron
from plasticnet.components.synapses.inhibitory import InhibitoryConfig, InhibitorySynapse
from plasticnet.components.synapses.stdp import STDPConfig, STDPSynapse, pair_stdp_config
from plasticnet.config.base import BaseConfig
from plasticnet.constants import DEFAULT_DT_MS
from plasticnet.networks.patterns import PatternLike, n_steps, validate_run
from plasticnet.networks.records import (
    ExperimentResult,
    SimpleRunRecord,
    StepRecorder,
    TrainingEpochResult,
)

logger = logging.getLogger(__name__)

N_INPUTS = 2


@dataclass
class SimpleNetworkConfig(BaseConfig):
    """Configuration for :class:`SimpleSTDPNetwork`.

    Attributes:
        dt_ms: Simulation timestep (default: 1.0)
        input_pulse_current: Current injected at a scheduled input spike (default: 1.2)
        input_tau_ms: Input neuron membrane time constant (default: 10.0)
        input_threshold: Input neuron threshold (default: 1.0)
        input_refractory_ms: Input neuron refractory period (default: 1.0)
        output_tau_ms: Output neuron membrane time constant (default: 20.0)
        output_threshold: Output neuron threshold (default: 0.45)
        output_refractory_ms: Output neuron refractory period (default: 2.0)
        initial_w1: Initial weight of channel 1 (default: 0.5)
        initial_w2: Initial weight of channel 2 (default: 0.5)
        w_min: Lower weight bound (default: 0.0)
        w_max: Upper weight bound (default: 1.0)
        a_plus: LTP amplitude (default: 0.015)
        a_minus: LTD amplitude (default: 0.012)
        tau_plus: LTP window in ms (default: 20.0)
        tau_minus: LTD window in ms (default: 20.0)
        feedforward_inhibition: Enable input → output inhibition (default: True)
        inhibition_w: Feed-forward inhibition strength (default: 0.3)
        inhibition_tau_ms: Feed-forward inhibition decay (default: 10.0)
    """

    dt_ms: float = DEFAULT_DT_MS
    input_pulse_current: float = 1.2

    input_tau_ms: float = 10.0
    input_threshold: float = 1.0
    input_refractory_ms: float = 1.0

    output_tau_ms: float = 20.0
    output_threshold: float = 0.45
    output_refractory_ms: float = 2.0

    initial_w1: float = 0.5
    initial_w2: float = 0.5
    w_min: float = 0.0
    w_max: float = 1.0
    a_plus: float = 0.015
    a_minus: float = 0.012
    tau_plus: float = 20.0
    tau_minus: float = 20.0

    feedforward_inhibition: bool = True
    inhibition_w: float = 0.3
    inhibition_tau_ms: float = 10.0

    def input_config(self) -> LIFConfig:
        return LIFConfig(
            tau_ms=self.input_tau_ms,
            v_threshold=self.input_threshold,
            refractory_ms=self.input_refractory_ms,
        )

    def output_config(self) -> LIFConfig:
        return LIFConfig(
            tau_ms=self.output_tau_ms,
            v_threshold=self.output_threshold,
            refractory_ms=self.output_refractory_ms,
        )

    def stdp_config(self) -> STDPConfig:
        return pair_stdp_config(
            w_min=self.w_min,
            w_max=self.w_max,
            a_plus=self.a_plus,
            a_minus=self.a_minus,
            tau_plus=self.tau_plus,
            tau_minus=self.tau_minus,
        )

    def inhibition_config(self) -> InhibitoryConfig:
        return InhibitoryConfig(w=self.inhibition_w, tau_decay=self.inhibition_tau_ms)


class SimpleSTDPNetwork:
    """Two LIF inputs converging on one LIF output through STDP synapses.

    Args:
        config: Network configuration (defaults learn "A before B" in 80
            epochs of 50 ms with channel 1 at 5 ms and channel 2 at 15 ms)
    """

    def __init__(self, config: Optional[SimpleNetworkConfig] = None):
        self.config = config or SimpleNetworkConfig()
        cfg = self.config

        self.inputs = [LIFNeuron(cfg.input_config()) for _ in range(N_INPUTS)]
        self.output = LIFNeuron(cfg.output_config())

        stdp = cfg.stdp_config()
        self.synapses = [
            STDPSynapse(stdp, w=cfg.initial_w1),
            STDPSynapse(stdp, w=cfg.initial_w2),
        ]
        self.inhibitory = [InhibitorySynapse(cfg.inhibition_config()) for _ in range(N_INPUTS)]

    # =========================================================================
    # Episodes
    # =========================================================================

    def train(self, pattern: PatternLike, duration_ms: float) -> SimpleRunRecord:
        """Run one episode with plasticity enabled."""
        return self._run(pattern, duration_ms, training=True)

    def test(self, pattern: PatternLike, duration_ms: float) -> SimpleRunRecord:
        """Run one episode with weights frozen."""
        return self._run(pattern, duration_ms, training=False)

    def train_epochs(
        self,
        pattern: PatternLike,
        duration_ms: float,
        epochs: int,
        on_epoch: Optional[Callable[[TrainingEpochResult], None]] = None,
    ) -> List[TrainingEpochResult]:
        """Train repeatedly on one pattern, summarizing each epoch.

        Args:
            pattern: Training pattern
            duration_ms: Duration of each epoch
            epochs: Number of epochs
            on_epoch: Optional callback invoked after every epoch
        """
        results: List[TrainingEpochResult] = []
        for epoch in range(1, epochs + 1):
            record = self.train(pattern, duration_ms)
            w1, w2 = self.get_weights()
            result = TrainingEpochResult(
                epoch=epoch,
                pattern_name=record.pattern_name,
                spiked=record.spiked,
                w1=w1,
                w2=w2,
            )
            results.append(result)
            if on_epoch is not None:
                on_epoch(result)
            logger.debug(f"Epoch {epoch}/{epochs}: spiked={result.spiked} w1={w1:.4f} w2={w2:.4f}")

        if results:
            last = results[-1]
            logger.info(
                f"Trained {epochs} epochs on '{last.pattern_name}': "
                f"w1={last.w1:.4f} w2={last.w2:.4f}"
            )
        return results

    def run_experiment(
        self,
        train_pattern: PatternLike,
        test_patterns: Iterable[PatternLike],
        epochs: int,
        duration_ms: float,
        on_epoch: Optional[Callable[[TrainingEpochResult], None]] = None,
    ) -> ExperimentResult:
        """Full experiment: reset weights, train, then test every pattern."""
        self.reset_weights()
        history = self.train_epochs(train_pattern, duration_ms, epochs, on_epoch)

        tests = {}
        for pattern in test_patterns:
            record = self.test(pattern, duration_ms)
            tests[record.pattern_name] = record
            logger.info(
                f"Test '{record.pattern_name}': "
                f"{record.output_spike_count} output spike(s)"
            )

        return ExperimentResult(
            training_history=history,
            tests=tests,
            final_weights=self.get_weights(),
        )

    # =========================================================================
    # Weights and state
    # =========================================================================

    def get_weights(self) -> Tuple[float, float]:
        return self.synapses[0].w, self.synapses[1].w

    def reset_weights(self) -> None:
        """Restore the initial weights and clear all transient state."""
        for syn in self.synapses:
            syn.reset_weight()
        self.reset_state()

    def reset_state(self) -> None:
        """Reset neurons, traces and inhibitory currents. Weights are kept."""
        for neuron in self.inputs:
            neuron.reset()
        self.output.reset()
        for syn in self.synapses:
            syn.reset()
        for inh in self.inhibitory:
            inh.reset()

    # =========================================================================
    # Simulation loop
    # =========================================================================

    def _run(self, pattern: PatternLike, duration_ms: float, training: bool) -> SimpleRunRecord:
        cfg = self.config
        dt = cfg.dt_ms
        pattern = validate_run(pattern, N_INPUTS, duration_ms, dt)

        self.reset_state()
        logger.debug(
            f"{'Training' if training else 'Testing'} on '{pattern.name}' "
            f"for {duration_ms} ms"
        )

        recorder = StepRecorder()
        for step in range(n_steps(duration_ms, dt)):
            t = step * dt
            pulses = pattern.pulse_mask(t, dt)

            in_spikes = [
                neuron.step(cfg.input_pulse_current if pulse else 0.0, dt, t)
                for neuron, pulse in zip(self.inputs, pulses)
            ]

            for syn in self.synapses:
                syn.decay_traces(dt)
            for syn, spiked in zip(self.synapses, in_spikes):
                if spiked:
                    syn.on_pre_spike(t, learn=training)

            inhibition = 0.0
            if cfg.feedforward_inhibition:
                for inh in self.inhibitory:
                    inh.decay(dt)
                    inhibition += inh.get_current()

            current = inhibition + sum(
                syn.w for syn, spiked in zip(self.synapses, in_spikes) if spiked
            )
            out_spike = self.output.step(current, dt, t)

            if training and out_spike:
                for syn in self.synapses:
                    syn.on_post_spike(t)

            if cfg.feedforward_inhibition:
                for inh, spiked in zip(self.inhibitory, in_spikes):
                    if spiked:
                        inh.on_pre_spike()

            recorder.append(
                times=t,
                input_voltages=torch.tensor([n.v for n in self.inputs], dtype=torch.float64),
                input_spikes=torch.tensor(in_spikes, dtype=torch.bool),
                output_voltage=self.output.v,
                output_spikes=out_spike,
                weights=torch.tensor([syn.w for syn in self.synapses], dtype=torch.float64),
            )

        return SimpleRunRecord(pattern_name=pattern.name, training=training, **recorder.stack())
