"""
Array Source - in-memory AudioSource backed by a numpy buffer.

Useful for offline rendering, tests, and as a reference for writing
sources over a real playback backend.

Features:
    - Shared read-only sample buffer between clones
    - Pitch via linear interpolation
    - Looping and end-of-buffer auto-stop
    - Effect state recorded (no DSP is performed)

Example:
    tone = np.sin(np.linspace(0, 2 * np.pi * 440, 44100)).astype(np.float32)
    source = ArraySource(tone, sample_rate=44100)
    sound = Sound(source)
    instance = sound.play(volume=0.5)

    block = instance.source.render(512)
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Union

import numpy as np


@dataclass
class ArrayConfig:
    """Configuration for ArraySource."""

    sample_rate: int = 44100
    looping: bool = False

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be > 0, got {self.sample_rate}")


class ArraySource:
    """
    Playable source over a float32 sample buffer.

    The buffer is either mono, shape (frames,), or multichannel, shape
    (frames, channels). Playback state (position, volume, pitch, looping,
    effects) belongs to each source; clone() shares only the buffer.

    Example:
        source = ArraySource(samples, sample_rate=24000)
        source.play()
        chunk = source.render(1024)   # float32, volume and pitch applied
    """

    def __init__(
        self,
        samples: np.ndarray,
        sample_rate: int = 44100,
        config: ArrayConfig | None = None,
    ):
        if config:
            self.config = config
        else:
            self.config = ArrayConfig(sample_rate=sample_rate)

        buffer = np.array(samples, dtype=np.float32)
        if buffer.ndim not in (1, 2):
            raise ValueError(f"samples must be 1-D or 2-D, got shape {buffer.shape}")
        buffer.setflags(write=False)
        self._init_state(buffer)

    def _init_state(self, buffer: np.ndarray) -> None:
        self._buffer = buffer
        self._playing = False
        self._position = 0.0  # in frames
        self._volume = 1.0
        self._pitch = 1.0
        self._looping = self.config.looping
        self._effects: dict[str, Union[bool, Mapping[str, Any]]] = {}

    # -- info -------------------------------------------------------------

    @property
    def samples(self) -> np.ndarray:
        """The shared, read-only sample buffer."""
        return self._buffer

    @property
    def sample_rate(self) -> int:
        return self.config.sample_rate

    @property
    def channels(self) -> int:
        return 1 if self._buffer.ndim == 1 else self._buffer.shape[1]

    @property
    def frames(self) -> int:
        return self._buffer.shape[0]

    @property
    def duration(self) -> float:
        """Length in seconds at pitch 1."""
        return self.frames / self.sample_rate

    def tell(self) -> float:
        """Current position in seconds."""
        return self._position / self.sample_rate

    # -- AudioSource --------------------------------------------------------

    def clone(self) -> "ArraySource":
        """Independent source over the same buffer, stopped at the start."""
        source = type(self).__new__(type(self))
        source.config = self.config
        source._init_state(self._buffer)
        source._volume = self._volume
        source._pitch = self._pitch
        source._looping = self._looping
        source._effects = dict(self._effects)
        return source

    def play(self) -> None:
        self._playing = True

    def pause(self) -> None:
        self._playing = False

    def stop(self) -> None:
        self._playing = False
        self._position = 0.0

    def seek(self, offset: float) -> None:
        frame = offset * self.sample_rate
        self._position = float(min(max(frame, 0.0), self.frames))

    def is_playing(self) -> bool:
        return self._playing

    def get_volume(self) -> float:
        return self._volume

    def set_volume(self, volume: float) -> None:
        self._volume = float(volume)

    def get_pitch(self) -> float:
        return self._pitch

    def set_pitch(self, pitch: float) -> None:
        if pitch <= 0:
            raise ValueError(f"pitch must be > 0, got {pitch}")
        self._pitch = float(pitch)

    def is_looping(self) -> bool:
        return self._looping

    def set_looping(self, looping: bool) -> None:
        self._looping = bool(looping)

    def set_effect(self, name: str, settings: Union[bool, Mapping[str, Any]] = True) -> None:
        if settings is False:
            self._effects.pop(name, None)
        else:
            self._effects[name] = settings

    @property
    def active_effects(self) -> Mapping[str, Union[bool, Mapping[str, Any]]]:
        """Enabled effects and their parameters (read-only view)."""
        return MappingProxyType(self._effects)

    # -- rendering ----------------------------------------------------------

    def render(self, frames: int) -> np.ndarray:
        """Advance playback and return the next block of audio.

        Args:
            frames: Number of output frames.

        Returns:
            float32 array of shape (frames,) or (frames, channels), with
            pitch and volume applied. Silence when not playing.

        When the end of a non-looping buffer is reached the block is padded
        with silence, the source stops and rewinds to the start.
        """
        out = np.zeros((max(frames, 0),) + self._buffer.shape[1:], dtype=np.float32)
        total = self.frames
        if not self._playing or frames <= 0 or total == 0:
            return out

        positions = self._position + np.arange(frames, dtype=np.float64) * self._pitch
        if self._looping:
            positions = np.mod(positions, total)
            valid = frames
        else:
            valid = int(np.count_nonzero(positions < total))

        positions = positions[:valid]
        low = np.floor(positions).astype(np.int64)
        if self._looping:
            high = (low + 1) % total
        else:
            high = np.minimum(low + 1, total - 1)
        frac = (positions - low).astype(np.float32)
        if self._buffer.ndim == 2:
            frac = frac[:, np.newaxis]

        block = self._buffer[low] * (1.0 - frac) + self._buffer[high] * frac
        out[:valid] = block * self._volume

        self._position += frames * self._pitch
        if self._looping:
            self._position = float(np.mod(self._position, total))
        elif self._position >= total:
            self.stop()

        return out


__all__ = ["ArrayConfig", "ArraySource"]
