"""Exceptions raised by logaro"""


class LogaroError(Exception):
    """Base class for logaro errors."""


class SerializerError(LogaroError, TypeError):
    """
    A serializer broke its type contract.

    Raised when a serializer turns the message into something other than a
    string, or the fields into something other than a mapping. This is a
    configuration mistake in the code that installed the serializer.
    """


class EncodingError(LogaroError, ValueError):
    """A log entry could not be encoded for its sink."""
