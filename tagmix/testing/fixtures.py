"""
Test Fixtures - Common fixtures for testing.

Provides:
    - Test audio generation
    - Sounds over mock or array sources
    - A small tag hierarchy
"""

from __future__ import annotations

from typing import Any

import numpy as np

from tagmix.core.sound import Sound
from tagmix.core.tag import Tag
from tagmix.source.array import ArraySource
from tagmix.testing.mock import MockConfig, MockSource


def create_test_audio(
    duration: float = 1.0,
    sample_rate: int = 8000,
    frequency: float = 440.0,
    amplitude: float = 0.5,
    audio_type: str = "tone",
    channels: int = 1,
) -> np.ndarray:
    """
    Create test audio data.

    Args:
        duration: Duration in seconds
        sample_rate: Sample rate in Hz
        frequency: Frequency for tone (if audio_type == "tone")
        amplitude: Amplitude (0-1)
        audio_type: "tone", "dc" (constant level), "silence" or "noise"
        channels: 1 for shape (frames,), more for (frames, channels)

    Returns:
        float32 samples
    """
    num_samples = int(duration * sample_rate)

    if audio_type == "tone":
        t = np.arange(num_samples, dtype=np.float32) / sample_rate
        audio = (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)
    elif audio_type == "dc":
        audio = np.full(num_samples, amplitude, dtype=np.float32)
    elif audio_type == "silence":
        audio = np.zeros(num_samples, dtype=np.float32)
    elif audio_type == "noise":
        rng = np.random.default_rng(0)
        audio = rng.uniform(-amplitude, amplitude, num_samples).astype(np.float32)
    else:
        raise ValueError(f"Unknown audio_type: {audio_type}")

    if channels > 1:
        audio = np.repeat(audio[:, np.newaxis], channels, axis=1)
    return audio


def create_test_sound(
    kind: str = "mock",
    name: str = "test",
    duration: float = 1.0,
    sample_rate: int = 8000,
    **options: Any,
) -> Sound:
    """
    Create a Sound over a test source.

    Args:
        kind: "mock" for a MockSource, "array" for an ArraySource
            playing a constant-level signal
        name: Sound name
        duration: Source length in seconds
        sample_rate: Sample rate for array sources
        **options: PlayOptions fields for the sound
    """
    if kind == "mock":
        source = MockSource(MockConfig(duration=duration))
    elif kind == "array":
        audio = create_test_audio(duration, sample_rate, amplitude=0.5, audio_type="dc")
        source = ArraySource(audio, sample_rate=sample_rate)
    else:
        raise ValueError(f"Unknown source kind: {kind}")
    return Sound(source, name=name, **options)


def create_tag_tree() -> dict[str, Tag]:
    """
    Create a small tag hierarchy:

        master (1.0)
        ├── music (0.5)
        └── sfx (0.8, reverb)
            └── ui (0.5)
    """
    master = Tag("master")
    music = Tag("music", volume=0.5, tags=[master])
    sfx = Tag("sfx", volume=0.8, tags=[master], effects={"reverb": True})
    ui = Tag("ui", volume=0.5, tags=[sfx])
    return {"master": master, "music": music, "sfx": sfx, "ui": ui}


__all__ = [
    "create_test_audio",
    "create_test_sound",
    "create_tag_tree",
]
