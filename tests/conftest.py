"""Shared test fixtures and configuration."""

import numpy as np
import pytest
import torch

from plasticnet import SimpleSTDPNetwork, SpikePattern
from plasticnet.utils.rng import make_generator


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure reproducible tests by setting all random seeds.

    Library code never touches the global RNGs (it uses explicit
    generators); this guards test helpers that do.
    """
    torch.manual_seed(42)
    np.random.seed(42)


@pytest.fixture
def generator():
    """Seeded torch generator for weight jitter."""
    return make_generator(42)


@pytest.fixture
def dt_ms():
    """Standard simulation timestep."""
    return 1.0


@pytest.fixture
def pattern_a():
    """Channel 1 at 5 ms, channel 2 at 15 ms."""
    return SpikePattern("A", (5.0, 15.0))


@pytest.fixture
def pattern_b(pattern_a):
    """Reversed ordering of pattern A."""
    return pattern_a.reversed("B")


@pytest.fixture
def simple_net():
    """SimpleSTDPNetwork with default parameters."""
    return SimpleSTDPNetwork()


@pytest.fixture
def run_constant():
    """Drive a neuron with constant current; returns its spike times."""

    def _run(neuron, current, n_steps, dt_ms=1.0):
        spikes = []
        for step in range(n_steps):
            t = step * dt_ms
            if neuron.step(current, dt_ms, t):
                spikes.append(t)
        return spikes

    return _run
