"""Utility functions for keeping weights and gains inside their bounds."""

from __future__ import annotations


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Saturating clamp for a scalar weight or gain.

    Applies ``max`` then ``min`` so that an inconsistent range
    (``lo > hi``) yields ``hi`` rather than raising.
    """
    return min(hi, max(lo, value))
