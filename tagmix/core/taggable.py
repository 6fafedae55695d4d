"""
Taggable - shared behavior of tags, sounds and instances.

A taggable object:
    - has its own volume multiplier
    - can have tags applied
    - can have effect overrides

Its *total* volume is its own volume times the total volume of every
applied tag. Its merged effects are the merged effects of every applied
tag, overlaid with its own overrides.

Change notification:
    Anything that might change an object's total volume calls
    _on_change_volume(); anything that might change its merged effects
    calls _on_change_effects(). The base implementations do nothing.
    Tag and Sound forward the calls to their members, Instance pushes the
    result into its audio source. A tag collects its leaves first, so an
    instance reached through several paths is still notified once. Bulk
    operations (tag, untag, apply_options) fire each callback exactly once
    at the end.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from tagmix.config import PlayOptions, validate_volume
from tagmix.effects import EffectMap, EffectSetting, merge_effects, normalize_setting
from tagmix.errors import CyclicTagGraphError

if TYPE_CHECKING:
    from tagmix.core.tag import Tag

logger = logging.getLogger(__name__)


class Taggable:
    """Base class for objects that carry a volume, tags and effects."""

    def __init__(self) -> None:
        self._volume = 1.0
        # insertion-ordered set; later tags win effect conflicts
        self._tags: dict["Tag", None] = {}
        self._effects: EffectMap = {}

    # -- volume -----------------------------------------------------------

    def get_volume(self) -> float:
        """Own volume multiplier (not including tags)."""
        return self._volume

    def set_volume(self, volume: float) -> None:
        """Set the own volume multiplier and notify dependents."""
        self._volume = validate_volume(volume)
        self._on_change_volume()

    @property
    def volume(self) -> float:
        return self.get_volume()

    @volume.setter
    def volume(self, volume: float) -> None:
        self.set_volume(volume)

    def get_total_volume(self) -> float:
        """Own volume times the total volume of every applied tag."""
        volume = self._volume
        for tag in self._tags:
            volume *= tag.get_total_volume()
        return volume

    @property
    def total_volume(self) -> float:
        return self.get_total_volume()

    # -- tags -------------------------------------------------------------

    @property
    def tags(self) -> tuple["Tag", ...]:
        """Applied tags, in application order."""
        return tuple(self._tags)

    def has_tag(self, tag: "Tag") -> bool:
        return tag in self._tags

    def tag(self, *tags: "Tag") -> None:
        """Apply tags. Already-applied tags are left as they are.

        Raises:
            TypeError: If an argument is not a Tag.
            CyclicTagGraphError: If a tag would end up (indirectly) tagging itself.
        """
        self._check_tags(tags)
        for tag in tags:
            self._tag(tag)
        logger.debug("%r tagged with %s", self, [t.name for t in tags])
        self._on_change_volume()
        self._on_change_effects()

    def untag(self, *tags: "Tag") -> None:
        """Remove tags. Tags that are not applied are ignored."""
        self._check_types(tags)
        for tag in tags:
            self._untag(tag)
        logger.debug("%r untagged from %s", self, [t.name for t in tags])
        self._on_change_volume()
        self._on_change_effects()

    # _tag/_untag/_set_effect do not notify, so bulk operations can
    # fire the callbacks once at the end.

    def _tag(self, tag: "Tag") -> None:
        if tag not in self._tags:
            self._tags[tag] = None
        tag._add_member(self)

    def _untag(self, tag: "Tag") -> None:
        if tag in self._tags:
            del self._tags[tag]
            tag._discard_member(self)

    def _check_types(self, tags: tuple[Any, ...]) -> None:
        from tagmix.core.tag import Tag

        for tag in tags:
            if not isinstance(tag, Tag):
                raise TypeError(f"expected a Tag, got {type(tag).__name__}")

    def _check_tags(self, tags: tuple[Any, ...]) -> None:
        self._check_types(tags)
        for tag in tags:
            if tag is self or self in tag.ancestors():
                raise CyclicTagGraphError(tag, self)

    # -- effects ----------------------------------------------------------

    @property
    def effects(self) -> Mapping[str, EffectSetting]:
        """Own effect overrides (read-only view)."""
        return MappingProxyType(self._effects)

    def _set_effect(self, name: str, setting: Any = True) -> None:
        self._effects[name] = normalize_setting(name, setting)

    def set_effect(self, name: str, setting: Any = True) -> None:
        """Set an effect override.

        Args:
            name: Effect name, passed through to the audio source.
            setting: True/None to enable without parameters, a mapping to
                enable with filter parameters, False to force-disable the
                effect even if a tag or sound enables it.
        """
        self._set_effect(name, setting)
        self._on_change_effects()

    def remove_effect(self, name: str) -> None:
        """Drop the own override for an effect, exposing inherited settings."""
        self._effects.pop(name, None)
        self._on_change_effects()

    def get_effect(self, name: str) -> EffectSetting | None:
        """Own setting for an effect, or None if there is no override."""
        return self._effects.get(name)

    def _effect_layers(self) -> list[Mapping[str, EffectSetting]]:
        layers: list[Mapping[str, EffectSetting]] = [tag.get_all_effects() for tag in self._tags]
        layers.append(self._effects)
        return layers

    def get_all_effects(self) -> EffectMap:
        """Merged effects of every applied tag, overlaid with own overrides.

        If several tags set the same effect, the most recently applied tag
        wins.
        """
        return merge_effects(self._effect_layers())

    # -- options ----------------------------------------------------------

    def apply_options(self, options: PlayOptions | Mapping[str, Any] | None = None) -> PlayOptions:
        """Reset volume, tags and effects from an options record.

        Membership and effect overrides are fully replaced, not merged.
        Fires one volume and one effects notification.

        Returns:
            The normalized options.
        """
        options = PlayOptions.coerce(options)
        self._check_tags(options.tags)

        self._volume = options.volume
        for tag in list(self._tags):
            self._untag(tag)
        for tag in options.tags:
            self._tag(tag)
        self._effects.clear()
        for name, setting in options.effects.items():
            self._set_effect(name, setting)

        self._on_change_volume()
        self._on_change_effects()
        return options

    # -- notifications ----------------------------------------------------

    def _leaves(self) -> tuple["Taggable", ...]:
        """Objects a tag notifies on behalf of this member."""
        return (self,)

    def _on_change_volume(self) -> None:
        """Called when the total volume may have changed."""

    def _on_change_effects(self) -> None:
        """Called when the merged effects may have changed."""
