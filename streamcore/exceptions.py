"""Exceptions for stream construction."""


class StreamCoreError(Exception):
    """Base exception for stream core errors."""


class InvalidArgumentError(StreamCoreError, ValueError):
    """An argument was rejected while constructing an observable or factory."""
