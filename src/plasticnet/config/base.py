"""
Base Configuration Classes.

Every component (neuron, synapse, layer, network) is configured by a flat
dataclass of named numeric/boolean parameters with documented defaults.
All of them inherit from :class:`BaseConfig`, which provides the seed field
and dictionary round-tripping.

Options that are not specified fall back to their defaults; option names
that a config does not define are rejected so that typos surface early.
Parameter *values* are not cross-checked (for example
``w_min > w_max`` is accepted and simply produces inconsistent clamping).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Type, TypeVar

from plasticnet.errors import ConfigurationError

ConfigT = TypeVar("ConfigT", bound="BaseConfig")


@dataclass
class BaseConfig:
    """Base configuration with fields common to all components."""

    seed: Optional[int] = None
    """Random seed for reproducibility. None = nondeterministic."""

    @classmethod
    def field_names(cls) -> set[str]:
        """Names of all options this config understands."""
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls: Type[ConfigT], d: Optional[Dict[str, Any]] = None) -> ConfigT:
        """Create from dictionary.

        Missing keys (and keys mapped to None) keep their defaults.

        Raises:
            ConfigurationError: If ``d`` contains an option this config does
                not define.
        """
        d = dict(d or {})
        unknown = set(d) - cls.field_names()
        if unknown:
            raise ConfigurationError(
                f"Unknown option(s) for {cls.__name__}: {sorted(unknown)}. "
                f"Valid options: {sorted(cls.field_names())}"
            )
        return cls(**{k: v for k, v in d.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    def with_overrides(self: ConfigT, **overrides: Any) -> ConfigT:
        """Return a copy with the given options replaced."""
        merged = self.to_dict()
        merged.update(overrides)
        return type(self).from_dict(merged)
