"""
Custom exception classes for plasticnet.

Exception Hierarchy:
====================
PlasticNetError (base) - Base exception for all plasticnet-specific errors
├── ConfigurationError - Unknown option names, unknown component kinds,
│                        shape mismatches between components
└── PatternError - Degenerate input schedules or run durations

Numeric ill-conditioning (weight runaway, homeostatic drift) is never
raised: it is absorbed by saturating clamps in the synapse models.
"""

from __future__ import annotations

# =============================================================================
# Exception Hierarchy
# =============================================================================


class PlasticNetError(Exception):
    """Base exception for all plasticnet-specific errors.

    All custom exceptions inherit from this class, enabling callers to
    catch simulation errors specifically:

        try:
            net.train(pattern, duration_ms=50.0)
        except PlasticNetError as e:
            logger.error(f"Simulation rejected: {e}")
    """


class ConfigurationError(PlasticNetError):
    """Invalid configuration.

    Raised for option names a config does not define, unknown neuron kinds,
    and current vectors whose length does not match the population.
    """


class PatternError(PlasticNetError, ValueError):
    """Degenerate pattern or run duration.

    Raised before any state is touched when a pattern has no channels,
    the wrong number of channels, non-finite spike times, or when the
    requested duration is shorter than one timestep.
    """
