"""Exception types shared across the package."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid run configuration (board size, delays, mode, config values).

    Raised before any run starts; no partial state is created.
    """


class ControlStateError(RuntimeError):
    """An operation was requested from a run state that does not allow it."""
