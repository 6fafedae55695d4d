"""
tagmix - Hierarchical volume and effect control for playable audio.

Architecture:
    Tag → Sound → Instance → AudioSource

Tags group sounds, instances and other tags. Volume multipliers and
effect settings flow down the tag graph; each object can override them.
Every change is pushed straight into the audio sources of the affected
instances.

Public API (stable):
    Tag             - Named volume/effect modifier
    Sound           - Playable template; .play() returns an Instance
    Instance        - One playback occurrence
    PlayOptions     - Options record (volume, tags, effects, pitch, loop, seek)
    AudioSource     - Protocol for the underlying playable source
    new_tag         - Shorthand for Tag(...)
    new_sound       - Shorthand for Sound(...)

Optional:
    tagmix.source.ArraySource   - numpy-backed in-memory source
    tagmix.testing              - MockSource, assertions, fixtures

Example:
    from tagmix import Tag, Sound
    from tagmix.source import ArraySource

    music = Tag("music", volume=0.6)
    underwater = Tag("underwater", effects={"lowpass": {"highgain": 0.2}})

    song = Sound(ArraySource(samples), tags=[music], loop=True)
    instance = song.play()

    music.volume = 0.3              # instance source volume -> 0.3
    song.tag(underwater)            # lowpass enabled on every instance
    instance.set_effect("lowpass", False)   # ...except this one
"""

from __future__ import annotations

from typing import Any, Mapping

from tagmix.config import PlayOptions
from tagmix.core import Instance, Sound, Tag, Taggable
from tagmix.errors import CyclicTagGraphError, InvalidOptionError, TagMixError
from tagmix.source import AudioSource

__version__ = "1.0.0"


def new_tag(
    options: PlayOptions | Mapping[str, Any] | None = None,
    name: str | None = None,
    **kwargs: Any,
) -> Tag:
    """Create a Tag from options."""
    return Tag(name, options, **kwargs)


def new_sound(
    source: AudioSource,
    options: PlayOptions | Mapping[str, Any] | None = None,
    name: str | None = None,
    **kwargs: Any,
) -> Sound:
    """Create a Sound over `source` from options."""
    return Sound(source, options, name=name, **kwargs)


__all__ = [
    # Core
    "Taggable",
    "Tag",
    "Sound",
    "Instance",
    "PlayOptions",
    "AudioSource",
    "new_tag",
    "new_sound",
    # Errors
    "TagMixError",
    "CyclicTagGraphError",
    "InvalidOptionError",
    # Version
    "__version__",
]
