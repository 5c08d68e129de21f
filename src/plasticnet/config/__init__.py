"""Configuration base classes."""

from plasticnet.config.base import BaseConfig

__all__ = ["BaseConfig"]
