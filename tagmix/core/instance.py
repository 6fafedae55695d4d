"""
Instance - one playback occurrence of a Sound.

Instances are created and recycled by Sound.play(); they are never
constructed directly. An instance is the only object that talks to an
audio source: it owns a clone of its sound's template source and keeps
it in sync with the combined state of

    its tags  <  its sound (and the sound's tags)  <  its own settings

for effects, and the product of all of them for volume.
"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Any, Mapping

from tagmix.config import PlayOptions, validate_pitch
from tagmix.effects import EffectMap, EffectSetting, is_enabled
from tagmix.core.taggable import Taggable
from tagmix.source.base import AudioSource

if TYPE_CHECKING:
    from tagmix.core.sound import Sound

logger = logging.getLogger(__name__)


class Instance(Taggable):
    """A playable occurrence of a Sound.

    Attributes:
        source: The live audio source driven by this instance.
    """

    def __init__(self, sound: "Sound", source: AudioSource):
        super().__init__()
        self._sound_ref = weakref.ref(sound)
        self.source = source
        self._paused = False
        self._applied_effects: set[str] = set()

    def __repr__(self) -> str:
        sound = self.sound
        state = "paused" if self._paused else ("stopped" if self.is_stopped() else "playing")
        return f"<Instance of {sound!r} {state}>"

    @property
    def sound(self) -> "Sound | None":
        """The owning sound, or None if it has been garbage-collected."""
        return self._sound_ref()

    @property
    def applied_effects(self) -> frozenset[str]:
        """Effect names currently enabled on the source."""
        return frozenset(self._applied_effects)

    # -- source-backed properties -----------------------------------------

    @property
    def pitch(self) -> float:
        return self.source.get_pitch()

    @pitch.setter
    def pitch(self, pitch: float) -> None:
        self.source.set_pitch(validate_pitch(pitch))

    @property
    def loop(self) -> bool:
        return self.source.is_looping()

    @loop.setter
    def loop(self, loop: bool) -> None:
        self.source.set_looping(bool(loop))

    @property
    def is_paused(self) -> bool:
        return self._paused

    # -- totals -----------------------------------------------------------

    def get_total_volume(self) -> float:
        """Own and tag volume, times the sound's total volume."""
        volume = super().get_total_volume()
        sound = self.sound
        if sound is not None:
            volume *= sound.get_total_volume()
        return volume

    def _effect_layers(self) -> list[Mapping[str, EffectSetting]]:
        layers: list[Mapping[str, EffectSetting]] = [tag.get_all_effects() for tag in self._tags]
        sound = self.sound
        if sound is not None:
            layers.append(sound.get_all_effects())
        layers.append(self._effects)
        return layers

    # -- notifications ----------------------------------------------------

    def _warn_if_orphaned(self) -> None:
        if self.sound is None:
            logger.warning("%r has lost its sound; using own and tag state only", self)

    def _on_change_volume(self) -> None:
        self._warn_if_orphaned()
        self.source.set_volume(self.get_total_volume())

    def _on_change_effects(self) -> None:
        self._warn_if_orphaned()
        effects: EffectMap = self.get_all_effects()
        for name, setting in effects.items():
            if not is_enabled(setting):
                continue
            if setting is True:
                self.source.set_effect(name)
            else:
                self.source.set_effect(name, setting)
            self._applied_effects.add(name)
        stale = [name for name in self._applied_effects if not is_enabled(effects.get(name))]
        for name in stale:
            logger.debug("%r disabling effect %r", self, name)
            self.source.set_effect(name, False)
            self._applied_effects.discard(name)

    # -- transport --------------------------------------------------------

    def _play(self, options: PlayOptions | Mapping[str, Any] | None = None) -> None:
        """Reset every setting from options and start playback."""
        self._paused = False
        options = self.apply_options(options)
        self.pitch = options.pitch
        if options.loop is not None:
            self.loop = options.loop
        else:
            sound = self.sound
            if sound is not None:
                self.loop = sound.loop
        self.source.seek(options.seek)
        self.source.play()

    def is_stopped(self) -> bool:
        """True if the source is not playing and the instance is not paused."""
        return not self.source.is_playing() and not self._paused

    def pause(self) -> None:
        self.source.pause()
        self._paused = True

    def resume(self) -> None:
        self.source.play()
        self._paused = False

    def stop(self) -> None:
        self.source.stop()
        self._paused = False


__all__ = ["Instance"]
