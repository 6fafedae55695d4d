"""
Source Base - AudioSource protocol.

tagmix never mixes or decodes audio itself. It drives an opaque playable
source through the small set of control calls below; any object that
provides them can back a Sound.

SOURCE CONTRACT:
    Sources MUST:
        - Return an independent copy from clone() (no shared mutable state)
        - Treat play/pause/stop/seek as non-blocking control calls
        - Accept any effect name; rejecting unsupported names is the
          source's own business
        - Interpret set_effect(name, False) as "disable this effect"

    Sources MUST NOT:
        - Call back into tagmix objects from a control call
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Union, runtime_checkable


@runtime_checkable
class AudioSource(Protocol):
    """Protocol for playable audio sources."""

    def clone(self) -> "AudioSource":
        """Create an independent source playing the same audio."""
        ...

    def play(self) -> None:
        ...

    def pause(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def seek(self, offset: float) -> None:
        """Move the playback position to `offset` seconds."""
        ...

    def is_playing(self) -> bool:
        ...

    def set_volume(self, volume: float) -> None:
        ...

    def set_pitch(self, pitch: float) -> None:
        ...

    def get_pitch(self) -> float:
        ...

    def is_looping(self) -> bool:
        ...

    def set_looping(self, looping: bool) -> None:
        ...

    def set_effect(self, name: str, settings: Union[bool, Mapping[str, Any]] = True) -> None:
        """Enable (True or a parameter mapping) or disable (False) an effect."""
        ...


__all__ = ["AudioSource"]
