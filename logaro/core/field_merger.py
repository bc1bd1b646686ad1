"""
Field merging along the logger tree

The effective fields of a log call are the fields of every logger from the
root down to the calling node, then the call-site fields. Later sources
override earlier ones key by key.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

if TYPE_CHECKING:
    from logaro.core.logger import Logger


def overlay(*mappings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge mappings into a new dict, last writer wins per key.

    None entries are skipped.
    """
    merged: Dict[str, Any] = {}
    for mapping in mappings:
        if mapping:
            merged.update(mapping)
    return merged


def context_fields(logger: "Logger") -> Mapping[str, Any]:
    """
    Get the fields contributed by a logger and all of its ancestors.

    The result is cached on the node after the first call; event fields
    never change after construction so the cache never goes stale.
    """
    cached = logger._context_fields
    if cached is None:
        parent = logger.parent
        inherited = context_fields(parent) if parent is not None else None
        cached = MappingProxyType(overlay(inherited, logger.event_fields))
        logger._context_fields = cached
    return cached


def merge_fields(
    logger: "Logger",
    fields: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Compute the effective fields for a log call on a logger.

    Args:
        logger: Logger performing the call
        fields: Call-site fields, overriding every inherited key

    Returns:
        New dict owned by the caller
    """
    return overlay(context_fields(logger), fields)
