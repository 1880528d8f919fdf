"""
Helpers for the nested option mappings used by GoogleMapField.

Two merge rules are in play:
- merge_options: applied once when a field is constructed; nested mappings
  are merged one level deep only.
- replace_recursive: applied when building the client settings payload;
  nested mappings are merged at every level.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "."


def copy_options(options: Mapping) -> Dict[str, Any]:
    """Deep copy an option mapping into plain, mutable dicts."""
    return {
        key: copy_options(value) if isinstance(value, Mapping) else copy.deepcopy(value)
        for key, value in options.items()
    }


def merge_options(defaults: Mapping, overrides: Optional[Mapping] = None) -> Dict[str, Any]:
    """
    Merge per-instance overrides into a copy of the defaults.

    Only keys present in the defaults are considered. When both values are
    mappings they are merged key by key (override wins), otherwise the
    override replaces the default. A None override leaves the default alone.

    Args:
        defaults: Default option mapping, never modified
        overrides: Per-instance option mapping

    Returns:
        dict: A new, independently mutable option mapping

    Example:
        >>> merge_options({"show_search_box": False, "map": {"zoom": 8}}, {"map": {"zoom": 12}})
        {'show_search_box': False, 'map': {'zoom': 12}}
    """
    merged = copy_options(defaults)
    overrides = overrides or {}

    for key in overrides:
        if key not in merged:
            logger.warning(f"Ignoring unknown google map option '{key}'")

    for key, value in merged.items():
        override = overrides.get(key)
        if override is None:
            continue
        if isinstance(value, Mapping) and isinstance(override, Mapping):
            merged[key] = {**value, **copy_options(override)}
        elif isinstance(override, Mapping):
            merged[key] = copy_options(override)
        else:
            merged[key] = copy.deepcopy(override)

    return merged


def replace_recursive(base: Mapping, replacements: Mapping) -> Dict[str, Any]:
    """
    Return a copy of base with replacements applied at every nesting level.

    Lists are treated as plain values and replaced wholesale.
    """
    result = copy_options(base)
    for key, value in replacements.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = replace_recursive(current, value)
        elif isinstance(value, Mapping):
            result[key] = copy_options(value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def split_path(path: str) -> list:
    return path.split(PATH_SEPARATOR)


def get_path(options: Mapping, path: str) -> Any:
    """
    Read a dot-delimited path such as "map.zoom".

    Returns None when any segment is missing or a non-mapping is reached
    before the last segment.
    """
    value: Any = options
    for segment in split_path(path):
        if not isinstance(value, Mapping) or segment not in value:
            return None
        value = value[segment]
    return value


def set_path(options: dict, segments: Iterable[str], value: Any) -> dict:
    """
    Assign value at the given path segments, creating intermediate levels.

    A scalar found where an intermediate mapping is needed is replaced by
    an empty mapping.

    Args:
        options: Mutable option mapping owned by the caller
        segments: Path segments, e.g. ["map", "zoom"]
        value: Value to store

    Returns:
        dict: The same options mapping
    """
    head, *rest = list(segments)
    if not rest:
        options[head] = value
        return options

    child = options.get(head)
    if not isinstance(child, dict):
        child = dict(child) if isinstance(child, Mapping) else {}
        options[head] = child
    set_path(child, rest, value)
    return options
