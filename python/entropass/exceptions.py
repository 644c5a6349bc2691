"""
Custom exceptions for Entropass.
"""


class EntropassException(Exception):
    """Base exception for Entropass."""

    pass


class InsecureRandomError(EntropassException):
    """No cryptographically secure random source is available."""

    pass


class ConfigurationError(EntropassException):
    """Generation options cannot produce a password."""

    pass


class SamplingError(EntropassException):
    """A sampling strategy could not produce a sequence."""

    pass


class InvariantViolationError(EntropassException):
    """Internal invariant broken; the result cannot be trusted."""

    pass
