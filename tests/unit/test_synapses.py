"""
Tests for synapse and plasticity models.

Covers trace decay, the canonical trace-based STDP rule and its pair-based
configuration, homeostatic gain control, inhibitory synapses and
short-term plasticity with delayed transmission.
"""

import math

import pytest
import torch

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
from plasticnet.core.protocols import PlasticSynapse, Resettable
from plasticnet.errors import ConfigurationError


def advance(syn, n_steps, dt_ms=1.0):
    for _ in range(n_steps):
        syn.decay_traces(dt_ms)


@pytest.mark.unit
class TestTraces:
    """Tests for decay factors and scalar traces."""

    def test_compute_decay(self):
        """Test linear and exponential decay factors."""
        assert compute_decay(20.0, 1.0, "linear") == pytest.approx(0.95)
        assert compute_decay(20.0, 1.0, "exponential") == pytest.approx(math.exp(-0.05))
        # Linear decay never goes negative
        assert compute_decay(1.0, 5.0, "linear") == 0.0

    def test_all_to_all_accumulates(self):
        """Test additive bumping sums spikes."""
        trace = SpikeTrace(tau=20.0, mode="all_to_all")
        trace.bump()
        trace.bump()
        assert trace.value == pytest.approx(2.0)

    def test_nearest_resets(self):
        """Test nearest mode keeps only the latest spike."""
        trace = SpikeTrace(tau=20.0, decay_type="exponential", mode="nearest")
        trace.bump()
        trace.decay(10.0)
        trace.bump()
        assert trace.value == 1.0

    def test_invalid_mode(self):
        """Test unknown modes are rejected."""
        with pytest.raises(ConfigurationError):
            SpikeTrace(mode="triplet")
        with pytest.raises(ConfigurationError):
            SpikeTrace(decay_type="cubic")


@pytest.mark.unit
class TestSTDPSynapse:
    """Tests for the trace-based STDP rule."""

    def test_causal_pairing_potentiates(self):
        """Test pre-before-post raises the weight by A+ × pre_trace."""
        syn = STDPSynapse(STDPConfig())
        syn.on_pre_spike(0.0)
        advance(syn, 5)
        syn.on_post_spike(5.0)

        assert syn.w == pytest.approx(0.5 + 0.02 * 0.95**5)

    def test_anticausal_pairing_depresses(self):
        """Test post-before-pre lowers the weight by A- × post_trace."""
        syn = STDPSynapse(STDPConfig())
        syn.on_post_spike(0.0)
        advance(syn, 5)
        syn.on_pre_spike(5.0)

        assert syn.w == pytest.approx(0.5 - 0.025 * 0.95**5)

    def test_gain_scales_update(self):
        """Test plasticity gain multiplies the weight change."""
        plain = STDPSynapse()
        boosted = STDPSynapse()
        for syn, gain in ((plain, 1.0), (boosted, 2.0)):
            syn.on_pre_spike(0.0, gain=gain)
            advance(syn, 3)
            syn.on_post_spike(3.0, gain=gain)

        assert boosted.w - 0.5 == pytest.approx(2.0 * (plain.w - 0.5))

    def test_learning_disabled_freezes_weight(self):
        """Test learn=False keeps the weight but still bumps traces."""
        syn = STDPSynapse()
        syn.on_post_spike(0.0, learn=False)
        advance(syn, 2)
        syn.on_pre_spike(2.0, learn=False)

        assert syn.w == 0.5
        assert syn.pre_trace.value == 1.0
        assert syn.post_trace.value > 0.0

    def test_lookback_window(self):
        """Test pairings further apart than max_lookback_ms are ignored."""
        syn = STDPSynapse(STDPConfig(max_lookback_ms=5.0))
        syn.on_pre_spike(0.0)
        advance(syn, 10)
        syn.on_post_spike(10.0)
        assert syn.w == 0.5

    def test_weight_bounds_under_random_events(self, generator):
        """Test weight stays within [w_min, w_max] for any event sequence."""
        config = STDPConfig(w_min=0.1, w_max=0.9, a_plus=0.2, a_minus=0.2)
        syn = STDPSynapse(config)
        events = torch.randint(0, 3, (2000,), generator=generator)

        for step, event in enumerate(events.tolist()):
            t = float(step)
            syn.decay_traces(1.0)
            if event == 1:
                syn.on_pre_spike(t)
            elif event == 2:
                syn.on_post_spike(t)
            assert config.w_min <= syn.w <= config.w_max

    def test_saturates_at_bounds(self):
        """Test repeated potentiation saturates at w_max."""
        syn = STDPSynapse(STDPConfig(w_max=0.6, a_plus=0.1))
        for t in range(20):
            syn.on_pre_spike(float(2 * t))
            syn.decay_traces(1.0)
            syn.on_post_spike(float(2 * t + 1))
            syn.decay_traces(1.0)
        assert syn.w == 0.6

    def test_initial_weight_clamped(self):
        """Test an out-of-range initial weight is clamped."""
        syn = STDPSynapse(STDPConfig(w_max=1.0), w=3.0)
        assert syn.w == 1.0

    def test_reset_keeps_weight(self):
        """Test reset clears traces and spike times only."""
        syn = STDPSynapse()
        syn.on_pre_spike(0.0)
        syn.on_post_spike(1.0)
        w = syn.w
        syn.reset()
        syn.reset()

        assert syn.w == w
        assert syn.pre_trace.value == 0.0
        assert syn.post_trace.value == 0.0
        assert syn.t_last_pre == -math.inf
        assert syn.t_last_post == -math.inf

    def test_reset_weight(self):
        """Test reset_weight restores the initial (or a given) weight."""
        syn = STDPSynapse(w=0.42)
        syn.w = 1.7
        syn.reset_weight()
        assert syn.w == 0.42
        syn.reset_weight(5.0)
        assert syn.w == 2.0

    def test_protocols(self):
        """Test STDP synapses satisfy the plastic-synapse protocol."""
        assert isinstance(STDPSynapse(), PlasticSynapse)
        assert isinstance(HomeostaticSTDPSynapse(), PlasticSynapse)


@pytest.mark.unit
class TestPairSTDP:
    """Tests for the pair-based configuration."""

    def test_config(self):
        """Test pair config uses exponential nearest-spike traces."""
        cfg = pair_stdp_config(w_max=1.0)
        assert cfg.decay_type == "exponential"
        assert cfg.trace_mode == "nearest"
        assert cfg.w_max == 1.0

    def test_pairwise_kernel(self):
        """Test Δw = A+ exp(-Δt/τ+) for the most recent pre spike."""
        syn = STDPSynapse(pair_stdp_config())
        syn.on_pre_spike(0.0)
        advance(syn, 4)
        syn.on_pre_spike(4.0)
        advance(syn, 6)
        syn.on_post_spike(10.0)

        assert syn.w == pytest.approx(0.5 + 0.02 * math.exp(-6.0 / 20.0))

    def test_depression_kernel(self):
        """Test Δw = -A- exp(-Δt/τ-) for a post spike before the pre spike."""
        syn = STDPSynapse(pair_stdp_config())
        syn.on_post_spike(0.0)
        advance(syn, 10)
        syn.on_pre_spike(10.0)

        assert syn.w == pytest.approx(0.5 - 0.025 * math.exp(-10.0 / 20.0))


@pytest.mark.unit
class TestHomeostaticSTDPSynapse:
    """Tests for homeostatic gain control."""

    def test_factor_scales_plasticity(self):
        """Test the homeostatic factor multiplies weight changes."""
        plain = HomeostaticSTDPSynapse()
        scaled = HomeostaticSTDPSynapse()
        scaled.homeo_factor = 2.0
        for syn in (plain, scaled):
            syn.on_pre_spike(0.0)
            syn.decay_traces(1.0)
            syn.on_post_spike(1.0)

        assert scaled.w - 0.5 == pytest.approx(2.0 * (plain.w - 0.5))

    def test_quiet_neuron_raises_factor(self):
        """Test rate below target increases the factor."""
        syn = HomeostaticSTDPSynapse(HomeostaticSTDPConfig(target_rate=5.0, homeo_strength=0.001))
        assert syn.update_homeostasis(0.0) == pytest.approx(1.005)

    def test_active_neuron_lowers_factor(self):
        """Test rate above target decreases the factor."""
        syn = HomeostaticSTDPSynapse(HomeostaticSTDPConfig(target_rate=5.0, homeo_strength=0.001))
        for t in range(10):
            syn.on_post_spike(float(t * 10))
        assert syn.current_rate(100.0) == 10
        assert syn.update_homeostasis(100.0) == pytest.approx(0.995)

    def test_window_drops_old_spikes(self):
        """Test spikes at least window_ms old no longer count."""
        syn = HomeostaticSTDPSynapse()
        syn.on_post_spike(0.0)
        syn.on_post_spike(500.0)
        assert syn.current_rate(999.0) == 2
        assert syn.current_rate(1000.0) == 1

    def test_factor_bounds(self):
        """Test the factor saturates within [0.1, 3.0]."""
        quiet = HomeostaticSTDPSynapse(HomeostaticSTDPConfig(homeo_strength=1.0))
        for t in range(10):
            quiet.update_homeostasis(float(t))
        assert quiet.homeo_factor == 3.0

        busy = HomeostaticSTDPSynapse(HomeostaticSTDPConfig(homeo_strength=1.0, target_rate=0.0))
        for t in range(20):
            busy.on_post_spike(float(t))
            busy.update_homeostasis(float(t))
        assert busy.homeo_factor == 0.1

    def test_effective_weight(self):
        """Test effective weight is w × factor."""
        syn = HomeostaticSTDPSynapse(w=0.8)
        syn.homeo_factor = 1.5
        assert syn.effective_weight == pytest.approx(1.2)

    def test_reset_restores_factor(self):
        """Test per-run reset restores the factor to 1 and keeps the weight."""
        syn = HomeostaticSTDPSynapse(w=0.7)
        syn.on_pre_spike(0.0)
        syn.on_post_spike(1.0)
        syn.update_homeostasis(1.0)
        assert syn.homeo_factor != 1.0
        w = syn.w

        syn.reset()

        assert syn.homeo_factor == 1.0
        assert syn.w == w
        assert len(syn.post_spike_history) == 0
        assert syn.pre_trace == 0.0
        assert syn.post_trace == 0.0

    def test_reset_homeostasis_keeps_traces(self):
        """Test reset_homeostasis touches only the factor and history."""
        syn = HomeostaticSTDPSynapse()
        syn.on_pre_spike(0.0)
        syn.homeo_factor = 1.3

        syn.reset_homeostasis()

        assert syn.homeo_factor == 1.0
        assert syn.pre_trace == 1.0

    def test_weight_setter_clamps(self):
        """Test assigning w respects bounds."""
        syn = HomeostaticSTDPSynapse()
        syn.w = 10.0
        assert syn.w == 2.0
        syn.w = -1.0
        assert syn.w == 0.01


@pytest.mark.unit
class TestInhibitorySynapse:
    """Tests for decaying inhibitory currents."""

    def test_spike_adds_weight(self):
        """Test a presynaptic spike adds w to the current, delivered negative."""
        syn = InhibitorySynapse(InhibitoryConfig(w=0.8))
        syn.on_pre_spike()
        assert syn.get_current() == pytest.approx(-0.8)

    def test_exponential_decay(self):
        """Test current decays by exp(-dt/τ)."""
        syn = InhibitorySynapse(InhibitoryConfig(w=1.0, tau_decay=5.0))
        syn.on_pre_spike()
        syn.decay(1.0)
        assert syn.get_current() == pytest.approx(-math.exp(-0.2))

    def test_reset(self):
        """Test reset clears the current but not the weight."""
        syn = InhibitorySynapse(w=2.0)
        syn.on_pre_spike()
        syn.reset()
        assert syn.get_current() == 0.0
        assert syn.w == 2.0
        assert isinstance(syn, Resettable)

    def test_weight_override_clamped(self):
        """Test an explicit weight overrides the config and is clamped to bounds."""
        assert InhibitorySynapse(InhibitoryConfig(w=0.8), w=0.0).w == 0.0
        assert InhibitorySynapse(InhibitoryConfig(w_max=5.0), w=9.0).w == 5.0


@pytest.mark.unit
class TestRecurrentSynapse:
    """Tests for short-term plasticity with delayed transmission."""

    def test_first_spike_strength(self):
        """Test facilitation then transmission then depression on a spike."""
        syn = RecurrentSynapse(RecurrentSynapseConfig(w=0.3, u_facilitation=0.2))
        strength = syn.on_pre_spike(0.0)

        assert syn.u == pytest.approx(0.36)
        assert strength == pytest.approx(0.3 * 0.36)
        assert syn.x == pytest.approx(0.64)

    def test_delayed_delivery(self):
        """Test strength arrives only once the delay has elapsed."""
        syn = RecurrentSynapse(RecurrentSynapseConfig(delay_ms=1.0))
        strength = syn.on_pre_spike(0.0)

        assert syn.get_current(0.5) == 0.0
        assert syn.pending == 1
        assert syn.get_current(1.0) == pytest.approx(strength)
        assert syn.pending == 0
        assert syn.get_current(2.0) == 0.0

    def test_later_entries_stay_queued(self):
        """Test only arrived entries are drained."""
        syn = RecurrentSynapse(RecurrentSynapseConfig(delay_ms=2.0))
        first = syn.on_pre_spike(0.0)
        syn.on_pre_spike(5.0)

        assert syn.get_current(3.0) == pytest.approx(first)
        assert syn.pending == 1

    def test_depression_weakens_bursts(self):
        """Test back-to-back spikes transmit less."""
        syn = RecurrentSynapse()
        first = syn.on_pre_spike(0.0)
        second = syn.on_pre_spike(0.0)
        assert second < first

    def test_recovery(self):
        """Test u relaxes toward U and x toward 1."""
        syn = RecurrentSynapse()
        syn.on_pre_spike(0.0)
        syn.decay_variables(1.0)
        assert syn.u == pytest.approx(0.36 + (0.2 - 0.36) / 200.0)
        assert syn.x == pytest.approx(0.64 + 0.36 / 500.0)

    def test_reset(self):
        """Test reset restores u, x and empties the queue."""
        syn = RecurrentSynapse()
        syn.on_pre_spike(0.0)
        syn.reset()
        syn.reset()
        assert syn.u == 0.2
        assert syn.x == 1.0
        assert syn.pending == 0


@pytest.mark.unit
class TestWeightInitializer:
    """Tests for initial weight matrices."""

    def test_constant(self):
        """Test constant init shape and value."""
        w = WeightInitializer.constant(3, 4, 0.5)
        assert w.shape == (3, 4)
        assert torch.all(w == 0.5)

    def test_jittered_range(self, generator):
        """Test jitter stays within w × [0.8, 1.2)."""
        w = WeightInitializer.jittered(20, 30, 0.4, generator)
        assert w.shape == (20, 30)
        assert torch.all(w >= 0.32)
        assert torch.all(w < 0.48)

    def test_jittered_reproducible(self):
        """Test same seed gives identical weights, different seeds do not."""
        from plasticnet.utils.rng import make_generator

        a = WeightInitializer.jittered(5, 5, 0.4, make_generator(7))
        b = WeightInitializer.jittered(5, 5, 0.4, make_generator(7))
        c = WeightInitializer.jittered(5, 5, 0.4, make_generator(8))

        assert torch.equal(a, b)
        assert not torch.equal(a, c)
