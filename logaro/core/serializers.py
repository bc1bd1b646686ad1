"""
Per-logger serializers

A serializer is a callable applied to the message and to the fields of an
entry right before it is written. Only the logger that writes the entry
applies its serializer.
"""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Callable, Dict

from logaro.core.exceptions import SerializerError
from logaro.core.log_entry import LogEntry

Serializer = Callable[[Any], Any]
Transform = Callable[[Any], Any]

MASK = "***"


def composite_serializer(transforms: Mapping) -> Serializer:
    """
    Build a serializer that transforms selected field values.

    For a mapping input, every key that also appears in transforms is
    replaced by transforms[key](value) in a new dict; the input is left
    untouched. Any other input, such as the message string, is returned
    unchanged.

    Args:
        transforms: Mapping from field name to transform callable

    Returns:
        Serializer callable

    Raises:
        TypeError: If a transform is not callable

    Example:
        serializer = composite_serializer({"password": mask})
        serializer({"user": "bob", "password": "hunter2"})
        # {"user": "bob", "password": "***"}
    """
    table: Dict[str, Transform] = dict(transforms or {})
    for key, transform in table.items():
        if not callable(transform):
            raise TypeError(f"serializer for field '{key}' must be callable")

    def serialize(data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        result = dict(data)
        for key, transform in table.items():
            if key in result:
                result[key] = transform(result[key])
        return result

    return serialize


def serialize_entry(serializer: Serializer, entry: LogEntry) -> LogEntry:
    """
    Apply a serializer to the message and fields of an entry.

    Args:
        serializer: Serializer callable
        entry: Entry to transform

    Returns:
        New LogEntry with serialized message and fields

    Raises:
        SerializerError: If the message does not stay a string or the
            fields do not stay a mapping
    """
    message = serializer(entry.message)
    if not isinstance(message, str):
        raise SerializerError(
            f"serializer returned {type(message).__name__} for message, expected str"
        )

    fields = serializer(dict(entry.fields))
    if not isinstance(fields, Mapping):
        raise SerializerError(
            f"serializer returned {type(fields).__name__} for fields, expected mapping"
        )

    return replace(entry, message=message, fields=fields)


def mask(value: Any) -> str:
    """Replace any value with a fixed mask."""
    return MASK


def mask_with(replacement: Any) -> Transform:
    """Build a transform replacing any value with replacement."""
    def transform(value: Any) -> Any:
        return replacement
    return transform


def truncate(limit: int, suffix: str = "...") -> Transform:
    """
    Build a transform shortening long strings.

    Strings longer than limit are cut to limit characters followed by
    suffix. Other values pass through unchanged.
    """
    if limit < 0:
        raise ValueError("limit cannot be negative")

    def transform(value: Any) -> Any:
        if isinstance(value, str) and len(value) > limit:
            return value[:limit] + suffix
        return value
    return transform
