"""Exception hierarchy for the engine.

Each failure the engine can report has its own type so callers can catch
the expected ones (bad input, bad configuration, caller abort) without
swallowing programming mistakes.
"""

from __future__ import annotations


class SpellrankError(Exception):
    """Base exception for all engine errors."""


class InvalidEncoding(SpellrankError, ValueError):
    """Text input is not well-formed Unicode."""


class ConfigError(SpellrankError, ValueError):
    """A cost weight, threshold or result size is out of range."""


class Cancelled(SpellrankError):
    """A long-running suggestion scan was aborted by the caller."""
