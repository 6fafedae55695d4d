"""
Sound - a playable template plus a pool of instances.

Each call to play() returns an Instance. Stopped instances are recycled
before new ones are created, so the number of cloned sources never
exceeds the largest number of overlapping plays:

    sound = Sound(source, volume=0.8, tags=[sfx])

    a = sound.play()
    b = sound.play(pitch=1.2)     # a still playing -> new instance
    a.stop()
    c = sound.play()              # c is a, fully reset

Volume and effect changes on the sound or its tags are forwarded to every
instance in the pool.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Mapping

from tagmix.config import PlayOptions
from tagmix.core.instance import Instance
from tagmix.core.taggable import Taggable
from tagmix.source.base import AudioSource

logger = logging.getLogger(__name__)


def _stop_all(instances: list[Instance]) -> None:
    """Stop and drop a collected sound's instances."""
    for instance in instances:
        instance.stop()
    logger.debug("stopped %d instances of a collected sound", len(instances))
    instances.clear()


class Sound(Taggable):
    """A playable sound.

    Dropping the last reference to a sound stops every instance it created.

    Args:
        source: Template audio source; cloned once per instance.
        options: PlayOptions or mapping (volume, tags, effects, loop).
        name: Label used in repr and log output.
        **kwargs: Option fields given as keywords instead.
    """

    def __init__(
        self,
        source: AudioSource,
        options: PlayOptions | Mapping[str, Any] | None = None,
        name: str | None = None,
        **kwargs: Any,
    ):
        if not isinstance(source, AudioSource):
            raise TypeError(f"source does not implement AudioSource: {type(source).__name__}")
        super().__init__()
        self.name = name
        self._source = source
        self._instances: list[Instance] = []
        weakref.finalize(self, _stop_all, self._instances)
        options = self.apply_options(PlayOptions.merge(options, **kwargs))
        if options.loop is not None:
            self.loop = options.loop

    def __repr__(self) -> str:
        return f"Sound({self.name!r})" if self.name else f"<Sound at {id(self):#x}>"

    @property
    def source(self) -> AudioSource:
        """The template source."""
        return self._source

    @property
    def instances(self) -> tuple[Instance, ...]:
        """Every instance in the pool, in creation order."""
        return tuple(self._instances)

    @property
    def active_instances(self) -> tuple[Instance, ...]:
        """Instances that are playing or paused."""
        return tuple(i for i in self._instances if not i.is_stopped())

    @property
    def loop(self) -> bool:
        return self._source.is_looping()

    @loop.setter
    def loop(self, loop: bool) -> None:
        loop = bool(loop)
        self._source.set_looping(loop)
        for instance in self._instances:
            instance.loop = loop

    # -- playback ---------------------------------------------------------

    def play(
        self,
        options: PlayOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Instance:
        """Play the sound.

        Reuses the oldest stopped instance if there is one, otherwise
        clones the template into a new instance.

        Args:
            options: PlayOptions or mapping for the instance.
            **kwargs: Option fields given as keywords instead.

        Returns:
            The playing instance.
        """
        options = PlayOptions.merge(options, **kwargs)
        for index, instance in enumerate(self._instances):
            if instance.is_stopped():
                logger.debug("%r reusing instance %d", self, index)
                instance._play(options)
                return instance

        instance = Instance(self, self._source.clone())
        self._instances.append(instance)
        logger.debug("%r created instance %d", self, len(self._instances) - 1)
        instance._play(options)
        return instance

    def pause(self) -> None:
        """Pause every playing instance. Stopped instances stay reusable."""
        for instance in self._instances:
            if not instance.is_stopped():
                instance.pause()

    def resume(self) -> None:
        """Resume every paused instance. Stopped instances stay stopped."""
        for instance in self._instances:
            if instance.is_paused:
                instance.resume()

    def stop(self) -> None:
        """Stop every instance."""
        for instance in self._instances:
            instance.stop()

    def release(self) -> None:
        """Stop and drop every instance and detach from all tags.

        The sound can still be played afterwards; it starts a new pool.
        """
        for instance in self._instances:
            instance.stop()
            for tag in instance.tags:
                instance._untag(tag)
        for tag in self.tags:
            self._untag(tag)
        logger.info("%r released %d instances", self, len(self._instances))
        self._instances.clear()

    # -- notifications ----------------------------------------------------

    def _leaves(self) -> tuple[Instance, ...]:
        return tuple(self._instances)

    def _on_change_volume(self) -> None:
        for instance in self._instances:
            instance._on_change_volume()

    def _on_change_effects(self) -> None:
        for instance in self._instances:
            instance._on_change_effects()


__all__ = ["Sound"]
