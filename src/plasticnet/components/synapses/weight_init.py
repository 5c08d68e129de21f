"""Weight Initialization - initial feed-forward weight matrices."""

from __future__ import annotations

import torch

from plasticnet.utils.rng import uniform


class WeightInitializer:
    """
    Weight initialization strategies.

    All methods return a ``torch.Tensor`` of shape [n_pre, n_post]
    indexed ``[source, destination]``.
    """

    @staticmethod
    def constant(n_pre: int, n_post: int, w: float) -> torch.Tensor:
        """Every connection starts at ``w``."""
        return torch.full((n_pre, n_post), float(w), dtype=torch.float64)

    @staticmethod
    def jittered(
        n_pre: int,
        n_post: int,
        w: float,
        generator: torch.Generator,
        jitter: float = 0.2,
    ) -> torch.Tensor:
        """
        Uniform multiplicative jitter around ``w``.

        Each weight is ``w × (1 - jitter + 2·jitter·U)`` with ``U ~ U[0, 1)``
        drawn from ``generator``; the default jitter gives ``w × (0.8 + 0.4U)``.

        Args:
            n_pre: Number of presynaptic neurons
            n_post: Number of postsynaptic neurons
            w: Mean weight
            generator: Explicit random source (never the global RNG)
            jitter: Half-width of the relative spread

        Returns:
            Weight matrix [n_pre, n_post]
        """
        u = uniform((n_pre, n_post), generator)
        return w * (1.0 - jitter + 2.0 * jitter * u)
