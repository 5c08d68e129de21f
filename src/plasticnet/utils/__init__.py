"""Shared utilities (random generators, scalar clamping)."""

from plasticnet.utils.rng import make_generator, uniform
from plasticnet.utils.weight_utils import clamp_value

__all__ = [
    "make_generator",
    "uniform",
    "clamp_value",
]
