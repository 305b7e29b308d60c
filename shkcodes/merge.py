"""Deep-merge of nested mappings.

Used to layer the site's theme override onto the base theme and to layer a
project's site.yaml onto the built-in configuration defaults.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any


def deep_merge(base: Mapping[str, Any], *overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Merge override mappings into a copy of a base mapping.

    Nested mappings are merged key by key. Every other value, lists and
    tuples included, replaces whatever the left-hand side held at that key.
    When several overrides set the same path, the rightmost one wins.

    Neither ``base`` nor any override is modified, and the result shares no
    mutable containers with them.

    Args:
        base: Mapping providing the default values.
        *overrides: Mappings applied left to right on top of ``base``.

    Returns:
        A new dictionary holding the merged structure.

    Examples:
        >>> deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}})
        {'a': {'b': 1, 'c': 3}}
    """
    result = _copy_value(base)
    for override in overrides:
        _merge_into(result, override)
    return result


def _merge_into(target: dict[str, Any], override: Mapping[str, Any]) -> None:
    for key, value in override.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            _merge_into(current, value)
        else:
            target[key] = _copy_value(value)


def _copy_value(value: Any) -> Any:
    # Mappings become plain dicts so later overrides can be merged into them.
    if isinstance(value, Mapping):
        return {key: _copy_value(item) for key, item in value.items()}
    return copy.deepcopy(value)
