"""Exception types for Dots."""

from __future__ import annotations


class DotsError(Exception):
    """Base class for Dots errors."""


class DecodeError(DotsError):
    """A stored blob is corrupt or does not match the expected schema."""


class EncodeError(DotsError):
    """A value could not be serialized for storage."""


class InvalidKeyError(DotsError, ValueError):
    """A store key contains characters outside the allowed alphabet."""
