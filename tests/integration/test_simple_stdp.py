"""
Integration tests for SimpleSTDPNetwork.

Trains the 2-input / 1-output network on "A before B" timing and checks
that learning accumulates across epochs, that the trained ordering fires
the output while the reversed ordering does not, and that test runs leave
weights untouched.
"""

import logging
import math

import pytest
import torch

from plasticnet import SimpleNetworkConfig, SimpleSTDPNetwork

DURATION_MS = 50.0


@pytest.mark.integration
class TestSingleEpoch:
    """Tests for one training episode."""

    def test_record_shapes(self, simple_net, pattern_a):
        """Test a 50 ms run records 51 steps of every signal."""
        record = simple_net.train(pattern_a, DURATION_MS)

        assert record.pattern_name == "A"
        assert record.training is True
        assert record.times.shape == (51,)
        assert record.input_voltages.shape == (51, 2)
        assert record.input_spikes.shape == (51, 2)
        assert record.output_voltage.shape == (51,)
        assert record.output_spikes.shape == (51,)
        assert record.weights.shape == (51, 2)
        assert record.times[-1].item() == 50.0

    def test_inputs_fire_on_schedule(self, simple_net, pattern_a):
        """Test input channels spike exactly at their scheduled times."""
        record = simple_net.train(pattern_a, DURATION_MS)

        assert record.times[record.input_spikes[:, 0]].tolist() == [5.0]
        assert record.times[record.input_spikes[:, 1]].tolist() == [15.0]

    def test_first_epoch_weight_changes(self, simple_net, pattern_a):
        """Test one epoch gives exactly one LTP on w1 and one LTD on w2."""
        record = simple_net.train(pattern_a, DURATION_MS)
        w1, w2 = simple_net.get_weights()

        # Output fires with channel 1 only; channel 2 arrives 10 ms later
        assert record.output_spike_times.tolist() == [5.0]
        assert w1 == pytest.approx(0.5 + 0.015)
        assert w2 == pytest.approx(0.5 - 0.012 * math.exp(-10.0 / 20.0))

    def test_test_run_freezes_weights(self, simple_net, pattern_a, pattern_b):
        """Test test episodes never change weights."""
        simple_net.train(pattern_a, DURATION_MS)
        before = simple_net.get_weights()

        for pattern in (pattern_a, pattern_b):
            record = simple_net.test(pattern, DURATION_MS)
            assert record.training is False
            assert torch.all(record.weights == torch.tensor(before, dtype=torch.float64))

        assert simple_net.get_weights() == before


@pytest.mark.integration
class TestTraining:
    """Tests for learning across epochs."""

    def test_causal_pairing(self, simple_net, pattern_a):
        """Test A-before-B training raises w1 relative to w2."""
        history = simple_net.train_epochs(pattern_a, DURATION_MS, epochs=10)

        assert [r.epoch for r in history] == list(range(1, 11))
        assert all(b.w1 >= a.w1 for a, b in zip(history, history[1:]))
        assert history[-1].w1 > 0.5 > history[-1].w2

    def test_weights_bounded(self, simple_net, pattern_a):
        """Test weights stay within [0, 1] throughout long training."""
        for _ in range(100):
            record = simple_net.train(pattern_a, DURATION_MS)
            assert torch.all(record.weights >= 0.0)
            assert torch.all(record.weights <= 1.0)

        assert simple_net.get_weights() == (1.0, 0.0)

    def test_on_epoch_callback(self, simple_net, pattern_a):
        """Test the callback sees every epoch result."""
        seen = []
        simple_net.train_epochs(pattern_a, DURATION_MS, epochs=3, on_epoch=seen.append)
        assert [r.epoch for r in seen] == [1, 2, 3]
        assert all(r.pattern_name == "A" for r in seen)

    def test_reset_weights(self, simple_net, pattern_a):
        """Test full reset restores initial weights."""
        simple_net.train_epochs(pattern_a, DURATION_MS, epochs=5)
        simple_net.reset_weights()
        assert simple_net.get_weights() == (0.5, 0.5)

    def test_deterministic(self, pattern_a):
        """Test identical configs give identical records."""
        records = []
        for _ in range(2):
            net = SimpleSTDPNetwork()
            net.train_epochs(pattern_a, DURATION_MS, epochs=5)
            records.append(net.train(pattern_a, DURATION_MS))

        assert torch.equal(records[0].weights, records[1].weights)
        assert torch.equal(records[0].output_voltage, records[1].output_voltage)


@pytest.mark.integration
class TestTemporalOrderScenario:
    """The full A-before-B experiment with default parameters."""

    @pytest.mark.slow
    def test_trained_order_fires_reversed_silent(self, simple_net, pattern_a, pattern_b):
        """Test 80 × 50 ms epochs: w1 > w2, spikes on A, silent on B."""
        result = simple_net.run_experiment(pattern_a, [pattern_a, pattern_b], 80, DURATION_MS)

        w1, w2 = result.final_weights
        assert w1 > w2
        assert len(result.training_history) == 80
        assert result.tests["A"].spiked
        assert not result.tests["B"].spiked

    def test_experiment_resets_weights(self, simple_net, pattern_a, pattern_b):
        """Test run_experiment starts from the initial weights."""
        simple_net.train_epochs(pattern_b, DURATION_MS, epochs=20)
        result = simple_net.run_experiment(pattern_a, [pattern_a], 1, DURATION_MS)
        assert result.training_history[0].w1 == pytest.approx(0.515)

    @pytest.mark.slow
    def test_feedforward_inhibition_needed(self, pattern_a, pattern_b):
        """Test without feed-forward inhibition the reversed order also fires."""
        net = SimpleSTDPNetwork(SimpleNetworkConfig(feedforward_inhibition=False))
        result = net.run_experiment(pattern_a, [pattern_a, pattern_b], 80, DURATION_MS)

        assert result.tests["A"].spiked
        assert result.tests["B"].spiked

    def test_logs_summary(self, simple_net, pattern_a, caplog):
        """Test experiment progress is logged at INFO."""
        with caplog.at_level(logging.INFO, logger="plasticnet"):
            simple_net.run_experiment(pattern_a, [pattern_a], 2, DURATION_MS)

        assert "Trained 2 epochs on 'A'" in caplog.text
        assert "Test 'A'" in caplog.text

    def test_plain_sequences_accepted(self, simple_net):
        """Test raw spike-time sequences work as patterns."""
        record = simple_net.test([5.0, 15.0], DURATION_MS)
        assert record.pattern_name == "pattern"
        assert record.spiked
