"""Error taxonomy for the gearbot engine."""
from __future__ import annotations


class GearbotError(Exception):
    """Base class for engine errors."""


class ConfigurationError(GearbotError):
    """Static configuration cannot be turned into a valid session (fatal)."""


class RejectedCommand(GearbotError):
    """A command was refused; recoverable and handled where it was detected."""
