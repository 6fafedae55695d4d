"""
Effect settings - normalization and merging.

An effect setting is one of:
    True            - enabled with no filter parameters
    False           - explicitly disabled, overriding inherited settings
    Mapping         - enabled with these filter parameters

None is accepted on input and means True.

Effect maps are merged by overlaying layers from lowest to highest
precedence. A False entry is kept in the merged map so that it can still
override an enabled setting further down the chain; it is only dropped
when the map is finally pushed to an audio source.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Union

from tagmix.errors import InvalidOptionError


EffectParams = Mapping[str, Any]
EffectSetting = Union[bool, EffectParams]
EffectMap = dict[str, EffectSetting]


def normalize_setting(name: str, setting: Any = True) -> EffectSetting:
    """Normalize a user-supplied effect setting.

    Args:
        name: Effect name (only used in error messages).
        setting: True, False, None or a mapping of filter parameters.

    Returns:
        True, False, or a read-only copy of the parameter mapping.

    Raises:
        InvalidOptionError: If the setting has any other type.
    """
    if setting is None or setting is True:
        return True
    if setting is False:
        return False
    if isinstance(setting, Mapping):
        return MappingProxyType(dict(setting))
    raise InvalidOptionError(
        f"effects[{name!r}]",
        f"expected bool, None or a mapping, got {type(setting).__name__}",
    )


def normalize_effects(effects: Mapping[str, Any] | None) -> EffectMap:
    """Normalize every setting in an effects mapping."""
    if not effects:
        return {}
    if not isinstance(effects, Mapping):
        raise InvalidOptionError(
            "effects",
            f"expected a mapping, got {type(effects).__name__}",
        )
    return {name: normalize_setting(name, setting) for name, setting in effects.items()}


def is_enabled(setting: EffectSetting | None) -> bool:
    """True if a setting should be applied to a source."""
    return setting is not None and setting is not False


def merge_effects(layers: Iterable[Mapping[str, EffectSetting]]) -> EffectMap:
    """Overlay effect maps, later layers winning.

    Args:
        layers: Effect maps ordered from lowest to highest precedence.

    Returns:
        A new merged map.
    """
    merged: EffectMap = {}
    for layer in layers:
        merged.update(layer)
    return merged


__all__ = [
    "EffectParams",
    "EffectSetting",
    "EffectMap",
    "normalize_setting",
    "normalize_effects",
    "is_enabled",
    "merge_effects",
]
