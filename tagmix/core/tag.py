"""
Tag - a named volume/effect modifier.

Tags can be applied to sounds, instances and other tags. A tag keeps
weak back-references to every object that currently applies it, so that
a change to the tag's volume or effects reaches every dependent
instance without a global recompute:

    music = Tag("music", volume=0.5)
    sfx = Tag("sfx")
    ui = Tag("ui", tags=[sfx])

    click = Sound(source, tags=[ui])
    click.play()

    sfx.volume = 0.2    # pushed to every playing click instance
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Mapping

from tagmix.config import PlayOptions
from tagmix.core.taggable import Taggable

logger = logging.getLogger(__name__)


class Tag(Taggable):
    """A named grouping node in the tag graph.

    Args:
        name: Label used in repr and log output.
        options: PlayOptions or mapping (volume, tags, effects).
        **kwargs: Option fields given as keywords instead.
    """

    def __init__(
        self,
        name: str | None = None,
        options: PlayOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ):
        super().__init__()
        self.name = name
        self._members: weakref.WeakSet[Taggable] = weakref.WeakSet()
        self.apply_options(PlayOptions.merge(options, **kwargs))

    def __repr__(self) -> str:
        return f"Tag({self.name!r})" if self.name else f"<Tag at {id(self):#x}>"

    @property
    def members(self) -> tuple[Taggable, ...]:
        """Live objects that currently apply this tag."""
        return tuple(self._members)

    def _add_member(self, member: Taggable) -> None:
        self._members.add(member)

    def _discard_member(self, member: Taggable) -> None:
        self._members.discard(member)

    def ancestors(self) -> set["Tag"]:
        """Every tag reachable from this one through applied tags."""
        seen: set[Tag] = set()
        stack = list(self._tags)
        while stack:
            tag = stack.pop()
            if tag not in seen:
                seen.add(tag)
                stack.extend(tag._tags)
        return seen

    def _leaves(self) -> tuple[Taggable, ...]:
        """Every object below this tag that reacts to changes, each once.

        Member tags are expanded into their own members, so a leaf reached
        through several paths (a diamond, or a tag shared by a sound and
        its instance) is only notified once per change.
        """
        leaves: dict[Taggable, None] = {}
        seen = {self}
        pending = [self]
        while pending:
            tag = pending.pop(0)
            for member in tag.members:
                if isinstance(member, Tag):
                    if member not in seen:
                        seen.add(member)
                        pending.append(member)
                    continue
                for leaf in member._leaves():
                    leaves[leaf] = None
        return tuple(leaves)

    def _on_change_volume(self) -> None:
        leaves = self._leaves()
        logger.debug("%r volume change -> %d leaves", self, len(leaves))
        for leaf in leaves:
            leaf._on_change_volume()

    def _on_change_effects(self) -> None:
        leaves = self._leaves()
        logger.debug("%r effects change -> %d leaves", self, len(leaves))
        for leaf in leaves:
            leaf._on_change_effects()


__all__ = ["Tag"]
