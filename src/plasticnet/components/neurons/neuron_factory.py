"""
Factory functions for creating neurons by name.

Layers and networks are generic over the ``SpikingNeuron`` protocol; the
factory maps short kind names to a (neuron class, config class) pair so a
layer can be built from a string plus keyword overrides.

Usage:
======
    from plasticnet.components.neurons import create_neuron

    # Defaults
    lif = create_neuron("lif")

    # Overrides are applied on top of the kind's default config
    hidden = create_neuron("lif", v_threshold=0.8)

    # Or pass a full config object
    izh = create_neuron("izhikevich", IzhikevichConfig(d=2.0))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Type

from plasticnet.components.neurons.adaptive_lif import AdaptiveLIFConfig, AdaptiveLIFNeuron
from plasticnet.components.neurons.bursting_neuron import BurstingConfig, BurstingNeuron
from plasticnet.components.neurons.izhikevich_neuron import IzhikevichConfig, IzhikevichNeuron
from plasticnet.components.neurons.lif import LIFConfig, LIFNeuron
from plasticnet.config.base import BaseConfig
from plasticnet.errors import ConfigurationError

if TYPE_CHECKING:
    from plasticnet.core.protocols import SpikingNeuron

NEURON_TYPES: Dict[str, Tuple[Type[Any], Type[BaseConfig]]] = {
    "lif": (LIFNeuron, LIFConfig),
    "adaptive_lif": (AdaptiveLIFNeuron, AdaptiveLIFConfig),
    "izhikevich": (IzhikevichNeuron, IzhikevichConfig),
    "bursting": (BurstingNeuron, BurstingConfig),
}


def create_neuron(
    kind: str,
    config: Optional[BaseConfig] = None,
    **overrides: Any,
) -> SpikingNeuron:
    """Create a single neuron of the given kind.

    Args:
        kind: One of "lif", "adaptive_lif", "izhikevich", "bursting"
        config: Optional config; must be the kind's config class
        **overrides: Options applied on top of ``config`` (or the defaults)

    Returns:
        A freshly reset neuron

    Raises:
        ConfigurationError: If ``kind`` is unknown, ``config`` has the wrong
            type, or an override names an unknown option
    """
    try:
        neuron_cls, config_cls = NEURON_TYPES[kind]
    except KeyError:
        raise ConfigurationError(
            f"Unknown neuron kind '{kind}'. Must be one of: {sorted(NEURON_TYPES)}"
        ) from None

    if config is None:
        config = config_cls.from_dict(overrides)
    elif not isinstance(config, config_cls):
        raise ConfigurationError(
            f"Neuron kind '{kind}' expects {config_cls.__name__}, "
            f"got {type(config).__name__}"
        )
    elif overrides:
        config = config.with_overrides(**overrides)

    return neuron_cls(config)
