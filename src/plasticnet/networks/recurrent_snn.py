"""
RecurrentSNN - input → hidden (WTA) → output (WTA) spiking network.

Architecture:

    input (n_input adaptive LIF, pulse-driven)
      │  homeostatic STDP, dense [input][hidden]
      ▼
    hidden (SpikingLayer, lateral inhibition)  ◀─┐ recurrent STP synapses,
      │                                          │ delayed, [hidden][hidden]
      │  homeostatic STDP, dense [hidden][output]┘
      ▼
    output (SpikingLayer, lateral inhibition)

Per-step order:
     1. step input neurons
     2. decay traces on all feed-forward synapses
     3. on_pre_spike on input→hidden for spiking inputs
     4. hidden currents = Σ w of spiking inputs + delayed recurrent current
     5. step hidden layer
     6. recurrent on_pre_spike for spiking hidden neurons
     7. training: on_post_spike on input→hidden into spiking hidden neurons
     8. on_pre_spike on hidden→output for spiking hidden neurons
     9. output currents = Σ w of spiking hidden neurons
    10. step output layer
    11. training: on_post_spike on hidden→output into spiking output neurons
    12. training, every ``homeostasis_interval_steps``: update_homeostasis
    13. record

The raw stored weight is propagated as current; the homeostatic factor
only scales plasticity gain.

Example:
    >>> net = RecurrentSNN(RecurrentSNNConfig(n_input=4, n_hidden=6, n_output=2, seed=0))
    >>> net.train(SpikePattern("up", (10, 15, 20, 25)), duration_ms=100.0)
    >>> result = net.test(SpikePattern("up", (10, 15, 20, 25)), duration_ms=100.0)
    >>> result.winner, result.confidence
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import torch

from plasticnet.components.neurons.adaptive_lif import AdaptiveLIFConfig, AdaptiveLIFNeuron
from plasticnet.components.synapses.homeostatic_stdp import (
    HomeostaticSTDPConfig,
    HomeostaticSTDPSynapse,
)
from plasticnet.components.synapses.inhibitory import InhibitoryConfig
from plasticnet.components.synapses.stp import RecurrentSynapse, RecurrentSynapseConfig
from plasticnet.components.synapses.weight_init import WeightInitializer
from plasticnet.config.base import BaseConfig
from plasticnet.constants import DEFAULT_DT_MS
from plasticnet.core.layer import SpikingLayer
from plasticnet.networks.patterns import PatternLike, n_steps, validate_run
from plasticnet.networks.records import RunRecord, StepRecorder, TestResult
from plasticnet.utils.rng import make_generator

logger = logging.getLogger(__name__)


@dataclass
class RecurrentSNNConfig(BaseConfig):
    """Configuration for :class:`RecurrentSNN`.

    Layer sizes:
        n_input, n_hidden, n_output

    Neurons (adaptive LIF throughout; inputs have no adaptation):
        hidden_threshold (0.8), output_threshold (0.7), refractory 3 ms in
        both WTA layers, tau_adapt 100 ms, b_adapt 0.03 hidden / 0.02 output

    Feed-forward plasticity (homeostatic STDP):
        initial_w (0.4, jittered ×[0.8, 1.2)), w_max (2.0), a_plus (0.008),
        a_minus (0.009), target_rate (None → 8 for input→hidden, 5 for
        hidden→output), homeo_strength (0.0005)

    Inhibition and recurrence:
        inhibition_w (None → 0.6 hidden, 0.8 output), recurrent_w (0.1),
        recurrent_delay_ms (2.0), enable_recurrent (True)

    Protocol:
        input_pulse_current (1.5), homeostasis_interval_steps (50),
        firing_rate_window_steps (100)
    """

    n_input: int = 8
    n_hidden: int = 10
    n_output: int = 5
    dt_ms: float = DEFAULT_DT_MS

    input_tau_ms: float = 10.0
    input_refractory_ms: float = 1.0
    layer_tau_ms: float = 20.0
    layer_refractory_ms: float = 3.0
    tau_adapt: float = 100.0
    hidden_threshold: float = 0.8
    hidden_b_adapt: float = 0.03
    output_threshold: float = 0.7
    output_b_adapt: float = 0.02

    initial_w: float = 0.4
    weight_jitter: float = 0.2
    w_max: float = 2.0
    a_plus: float = 0.008
    a_minus: float = 0.009
    target_rate: Optional[float] = None
    homeo_strength: float = 0.0005

    inhibition_w: Optional[float] = None
    inhibition_tau_ms: float = 5.0
    recurrent_w: float = 0.1
    recurrent_delay_ms: float = 2.0
    enable_recurrent: bool = True

    input_pulse_current: float = 1.5
    homeostasis_interval_steps: int = 50
    firing_rate_window_steps: int = 100

    def _homeo_config(self, default_target: float) -> HomeostaticSTDPConfig:
        return HomeostaticSTDPConfig(
            w_max=self.w_max,
            a_plus=self.a_plus,
            a_minus=self.a_minus,
            target_rate=default_target if self.target_rate is None else self.target_rate,
            homeo_strength=self.homeo_strength,
        )

    def ih_synapse_config(self) -> HomeostaticSTDPConfig:
        return self._homeo_config(8.0)

    def ho_synapse_config(self) -> HomeostaticSTDPConfig:
        return self._homeo_config(5.0)

    def _inhibition(self, default_w: float) -> InhibitoryConfig:
        w = default_w if self.inhibition_w is None else self.inhibition_w
        return InhibitoryConfig(w=w, tau_decay=self.inhibition_tau_ms)

    def input_neuron_config(self) -> AdaptiveLIFConfig:
        return AdaptiveLIFConfig(
            tau_ms=self.input_tau_ms,
            refractory_ms=self.input_refractory_ms,
            b_adapt=0.0,
        )

    def hidden_neuron_config(self) -> AdaptiveLIFConfig:
        return AdaptiveLIFConfig(
            tau_ms=self.layer_tau_ms,
            v_threshold=self.hidden_threshold,
            refractory_ms=self.layer_refractory_ms,
            tau_adapt=self.tau_adapt,
            b_adapt=self.hidden_b_adapt,
        )

    def output_neuron_config(self) -> AdaptiveLIFConfig:
        return AdaptiveLIFConfig(
            tau_ms=self.layer_tau_ms,
            v_threshold=self.output_threshold,
            refractory_ms=self.layer_refractory_ms,
            tau_adapt=self.tau_adapt,
            b_adapt=self.output_b_adapt,
        )

    def hidden_inhibition_config(self) -> InhibitoryConfig:
        return self._inhibition(0.6)

    def output_inhibition_config(self) -> InhibitoryConfig:
        return self._inhibition(0.8)

    def recurrent_synapse_config(self) -> RecurrentSynapseConfig:
        return RecurrentSynapseConfig(w=self.recurrent_w, delay_ms=self.recurrent_delay_ms)


class RecurrentSNN:
    """Three-layer spiking classifier with homeostatic STDP.

    Args:
        config: Network configuration
        generator: Random source for weight jitter; defaults to a generator
            seeded from ``config.seed``
    """

    def __init__(
        self,
        config: Optional[RecurrentSNNConfig] = None,
        generator: Optional[torch.Generator] = None,
    ):
        self.config = config or RecurrentSNNConfig()
        cfg = self.config
        self.generator = generator if generator is not None else make_generator(cfg.seed)

        self.inputs = [AdaptiveLIFNeuron(cfg.input_neuron_config()) for _ in range(cfg.n_input)]
        self.hidden = SpikingLayer(
            cfg.n_hidden,
            neuron_config=cfg.hidden_neuron_config(),
            inhibition_config=cfg.hidden_inhibition_config(),
        )
        self.output = SpikingLayer(
            cfg.n_output,
            neuron_config=cfg.output_neuron_config(),
            inhibition_config=cfg.output_inhibition_config(),
        )

        w_ih = WeightInitializer.jittered(
            cfg.n_input, cfg.n_hidden, cfg.initial_w, self.generator, cfg.weight_jitter
        )
        w_ho = WeightInitializer.jittered(
            cfg.n_hidden, cfg.n_output, cfg.initial_w, self.generator, cfg.weight_jitter
        )
        ih_cfg = cfg.ih_synapse_config()
        ho_cfg = cfg.ho_synapse_config()

        # Dense [source][destination]
        self.synapses_ih: List[List[HomeostaticSTDPSynapse]] = [
            [HomeostaticSTDPSynapse(ih_cfg, w=float(w_ih[i, h])) for h in range(cfg.n_hidden)]
            for i in range(cfg.n_input)
        ]
        self.synapses_ho: List[List[HomeostaticSTDPSynapse]] = [
            [HomeostaticSTDPSynapse(ho_cfg, w=float(w_ho[h, o])) for o in range(cfg.n_output)]
            for h in range(cfg.n_hidden)
        ]
        rec_cfg = cfg.recurrent_synapse_config()
        self.recurrent: List[List[RecurrentSynapse]] = [
            [RecurrentSynapse(rec_cfg, w=0.0 if i == j else None) for j in range(cfg.n_hidden)]
            for i in range(cfg.n_hidden)
        ]

    def _feedforward(self):
        for row in self.synapses_ih:
            yield from row
        for row in self.synapses_ho:
            yield from row

    # =========================================================================
    # Episodes
    # =========================================================================

    def train(self, pattern: PatternLike, duration_ms: float) -> RunRecord:
        """Run one episode with plasticity and homeostasis enabled."""
        return self._run(pattern, duration_ms, training=True)

    def test(self, pattern: PatternLike, duration_ms: float) -> TestResult:
        """Run one frozen episode and classify by output spike counts."""
        record = self._run(pattern, duration_ms, training=False)
        result = TestResult.from_counts(record.pattern_name, record.output_spike_counts, record)
        logger.info(
            f"Test '{result.pattern_name}': winner={result.winner} "
            f"confidence={result.confidence:.2f} counts={result.spike_counts.tolist()}"
        )
        return result

    # =========================================================================
    # Inspection and state
    # =========================================================================

    def get_weights(self) -> Dict[str, torch.Tensor]:
        """Weight snapshots: {"ih": [n_input, n_hidden], "ho": [n_hidden, n_output]}."""
        return {
            "ih": _matrix(self.synapses_ih, lambda s: s.w),
            "ho": _matrix(self.synapses_ho, lambda s: s.w),
        }

    def get_homeo_factors(self) -> Dict[str, torch.Tensor]:
        return {
            "ih": _matrix(self.synapses_ih, lambda s: s.homeo_factor),
            "ho": _matrix(self.synapses_ho, lambda s: s.homeo_factor),
        }

    def get_recurrent_weights(self) -> torch.Tensor:
        return _matrix(self.recurrent, lambda s: s.w)

    def reset_state(self) -> None:
        """Reset neurons, layers, traces, homeostatic factors and delay queues. Weights are kept."""
        for neuron in self.inputs:
            neuron.reset()
        self.hidden.reset()
        self.output.reset()
        for syn in self._feedforward():
            syn.reset()
        for row in self.recurrent:
            for syn in row:
                syn.reset()

    def reset_weights(self) -> None:
        """Full experiment reset: initial weights, unit homeostatic factors, fresh state."""
        for syn in self._feedforward():
            syn.reset_weight()
            syn.reset_homeostasis()
        self.reset_state()
        logger.info("Reset feed-forward weights and homeostatic factors")

    # =========================================================================
    # Simulation loop
    # =========================================================================

    def _run(self, pattern: PatternLike, duration_ms: float, training: bool) -> RunRecord:
        cfg = self.config
        dt = cfg.dt_ms
        pattern = validate_run(pattern, cfg.n_input, duration_ms, dt)
        n_in, n_hid, n_out = cfg.n_input, cfg.n_hidden, cfg.n_output

        self.reset_state()
        logger.debug(
            f"{'Training' if training else 'Testing'} on '{pattern.name}' "
            f"for {duration_ms} ms"
        )

        recorder = StepRecorder()
        for step in range(n_steps(duration_ms, dt)):
            t = step * dt

            # 1. inputs
            pulses = pattern.pulse_mask(t, dt)
            in_spikes = [
                neuron.step(cfg.input_pulse_current if pulse else 0.0, dt, t)
                for neuron, pulse in zip(self.inputs, pulses)
            ]

            # 2. traces
            for syn in self._feedforward():
                syn.decay_traces(dt)

            # 3. input → hidden pre events
            for i in range(n_in):
                if in_spikes[i]:
                    for syn in self.synapses_ih[i]:
                        syn.on_pre_spike(t, learn=training)

            # 4. hidden currents
            hidden_currents = [0.0] * n_hid
            for h in range(n_hid):
                for i in range(n_in):
                    if in_spikes[i]:
                        hidden_currents[h] += self.synapses_ih[i][h].w
                if cfg.enable_recurrent:
                    for j in range(n_hid):
                        if j != h:
                            rec = self.recurrent[j][h]
                            rec.decay_variables(dt)
                            hidden_currents[h] += rec.get_current(t)

            # 5. hidden layer
            hidden_state = self.hidden.step(hidden_currents, dt, t)
            hidden_spikes = hidden_state.spikes.tolist()

            # 6. recurrent pre events
            if cfg.enable_recurrent:
                for i in range(n_hid):
                    if hidden_spikes[i]:
                        for j in range(n_hid):
                            if j != i:
                                self.recurrent[i][j].on_pre_spike(t)

            # 7. input → hidden post events
            if training:
                for h in range(n_hid):
                    if hidden_spikes[h]:
                        for i in range(n_in):
                            self.synapses_ih[i][h].on_post_spike(t)

            # 8. hidden → output pre events
            for h in range(n_hid):
                if hidden_spikes[h]:
                    for syn in self.synapses_ho[h]:
                        syn.on_pre_spike(t, learn=training)

            # 9. output currents
            output_currents = [
                sum(self.synapses_ho[h][o].w for h in range(n_hid) if hidden_spikes[h])
                for o in range(n_out)
            ]

            # 10. output layer
            output_state = self.output.step(output_currents, dt, t)
            output_spikes = output_state.spikes.tolist()

            # 11. hidden → output post events
            if training:
                for o in range(n_out):
                    if output_spikes[o]:
                        for h in range(n_hid):
                            self.synapses_ho[h][o].on_post_spike(t)

            # 12. homeostasis
            if training and step % cfg.homeostasis_interval_steps == 0:
                updated = [syn.update_homeostasis(t) for syn in self._feedforward()]
                logger.debug(
                    f"t={t:.1f} ms homeostasis: factor range "
                    f"[{min(updated):.4f}, {max(updated):.4f}]"
                )

            # 13. record
            weights = self.get_weights()
            factors = self.get_homeo_factors()
            recorder.append(
                times=t,
                input_spikes=torch.tensor(in_spikes, dtype=torch.bool),
                hidden_voltages=hidden_state.voltages,
                hidden_spikes=hidden_state.spikes,
                output_voltages=output_state.voltages,
                output_spikes=output_state.spikes,
                hidden_rates=self.hidden.firing_rates(cfg.firing_rate_window_steps, dt),
                output_rates=self.output.firing_rates(cfg.firing_rate_window_steps, dt),
                weights_ih=weights["ih"],
                weights_ho=weights["ho"],
                homeo_ih=factors["ih"],
                homeo_ho=factors["ho"],
            )

        if training:
            logger.debug(
                f"Trained on '{pattern.name}': hidden spikes "
                f"{self.hidden.spike_counts.tolist()}, output spikes "
                f"{self.output.spike_counts.tolist()}"
            )

        return RunRecord(pattern_name=pattern.name, training=training, **recorder.stack())


def _matrix(rows, value) -> torch.Tensor:
    return torch.tensor([[value(syn) for syn in row] for row in rows], dtype=torch.float64)
