"""Custom exception types used across :mod:`lightpath`."""

from __future__ import annotations


class LightpathError(Exception):
    """Base class for all package-specific errors."""


class InputError(LightpathError, ValueError):
    """Raised for invalid user input such as malformed roads."""


class InvalidIndexError(InputError):
    """Raised when a junction id falls outside ``[0, n)``."""


class GraphFormatError(InputError):
    """Raised when a road weight is invalid or parsing a city file fails."""


class CapacityError(InputError):
    """Raised when adding a junction would exceed the configured capacity."""


class ConfigError(LightpathError, ValueError):
    """Raised for invalid configuration options."""


class AlgorithmError(LightpathError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


class EmptyHeapError(AlgorithmError):
    """Raised when extracting from an empty priority queue."""


__all__ = [
    "LightpathError",
    "InputError",
    "InvalidIndexError",
    "GraphFormatError",
    "CapacityError",
    "ConfigError",
    "AlgorithmError",
    "EmptyHeapError",
]
