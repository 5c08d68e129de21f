"""Random number generation utilities: explicit, seedable torch generators."""

from __future__ import annotations

from typing import Optional

import torch


def make_generator(seed: Optional[int] = None) -> torch.Generator:
    """Create a CPU ``torch.Generator``.

    With a seed the generator is deterministic; without one it is seeded
    from the OS (``Generator.seed()``), never from the global torch RNG.
    """
    gen = torch.Generator()
    if seed is None:
        gen.seed()
    else:
        gen.manual_seed(int(seed))
    return gen


def uniform(shape: tuple[int, ...], generator: torch.Generator) -> torch.Tensor:
    """Uniform [0, 1) samples drawn from ``generator``."""
    return torch.rand(shape, generator=generator, dtype=torch.float64)
