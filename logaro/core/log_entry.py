"""
Log entry data structure

One immutable record per emitted log call.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
import json


def format_timestamp(moment: datetime) -> str:
    """
    Format a datetime as an RFC3339 timestamp with second precision.

    Naive datetimes are taken as local time. A zero offset is written as "Z".
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def now_timestamp(utc: bool = False) -> str:
    """RFC3339 timestamp for the current instant."""
    if utc:
        return format_timestamp(datetime.now(timezone.utc))
    return format_timestamp(datetime.now().astimezone())


@dataclass(frozen=True, eq=False)
class LogEntry:
    """
    Log entry data structure.

    Contains the timestamp, message, level and merged fields of a single
    log call. Fields are stored as a read-only mapping.

    Two entries compare equal when timestamp, message and level match and
    their fields hold the same keys with values of identical JSON
    representation (see compare_entries).
    """

    timestamp: str
    message: str
    level: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate and freeze the entry."""
        if not isinstance(self.message, str):
            raise TypeError("message must be str")
        if not isinstance(self.level, str):
            raise TypeError("level must be str")
        fields = self.fields if self.fields is not None else {}
        object.__setattr__(self, "fields", MappingProxyType(dict(fields)))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log entry to dictionary.

        Returns:
            Dictionary in wire shape
        """
        return {
            "timestamp": self.timestamp,
            "message": self.message,
            "level": self.level,
            "fields": dict(self.fields),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        """
        Create log entry from dictionary.

        Args:
            data: Dictionary with log entry data

        Returns:
            New LogEntry instance
        """
        return cls(
            timestamp=data["timestamp"],
            message=data["message"],
            level=data["level"],
            fields=data.get("fields") or {},
        )

    @classmethod
    def from_json(cls, line: str) -> "LogEntry":
        """Decode one JSON line produced by a writer."""
        return cls.from_dict(json.loads(line))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogEntry):
            return NotImplemented
        return compare_entries(self, other)

    def __str__(self) -> str:
        """String representation."""
        return f"[{self.timestamp}] [{self.level:5}] {self.message}"


def compare_entries(a: LogEntry, b: LogEntry) -> bool:
    """Compare timestamp, message, level and fields of two entries."""
    return (
        a.timestamp == b.timestamp
        and a.message == b.message
        and a.level == b.level
        and compare_fields(a.fields, b.fields)
    )


def compare_fields(a: Mapping[str, Any], b: Mapping[str, Any]) -> bool:
    """Compare two field maps key by key, independent of key order."""
    if len(a) != len(b):
        return False

    for key, val_a in a.items():
        if key not in b or not compare_field_values(val_a, b[key]):
            return False

    return True


def compare_field_values(a: Any, b: Any) -> bool:
    """
    Compare two field values by their canonical JSON representation.

    Values that cannot be JSON-encoded never compare equal.
    """
    encoded_a = _canonical_json(a)
    encoded_b = _canonical_json(b)
    if encoded_a is None or encoded_b is None:
        return False
    return encoded_a == encoded_b


def _canonical_json(value: Any) -> Optional[str]:
    try:
        return json.dumps(value, sort_keys=True, allow_nan=False)
    except TypeError:
        pass
    except ValueError:
        return None
    # Mixed key types cannot be sorted
    try:
        return json.dumps(value, allow_nan=False)
    except (TypeError, ValueError):
        return None
