"""
Simulation-wide constants.

Time is measured in milliseconds throughout; firing rates in Hz.
"""

from __future__ import annotations

# ============================================================================
# SIMULATION DEFAULTS
# ============================================================================

DEFAULT_DT_MS = 1.0
"""Default timestep in milliseconds (1.0 ms)."""

MS_PER_SECOND = 1000.0
"""Conversion factor from spikes/ms to Hz."""

TIME_EPSILON_MS = 1e-9
"""Tolerance when comparing accumulated float times (delay queue arrivals)."""

# ============================================================================
# HOMEOSTASIS
# ============================================================================

HOMEOSTASIS_WINDOW_MS = 1000.0
"""Trailing window over which post-synaptic spikes are counted."""

HOMEO_FACTOR_MIN = 0.1
"""Lower saturation bound of the homeostatic plasticity gain."""

HOMEO_FACTOR_MAX = 3.0
"""Upper saturation bound of the homeostatic plasticity gain."""

# ============================================================================
# STDP
# ============================================================================

DEFAULT_MAX_LOOKBACK_MS = 10_000.0
"""Pairings further apart than this contribute no weight change."""
