"""
Audio sources driven by tagmix.

Components:
    AudioSource    - Protocol every source implements
    ArraySource    - In-memory numpy-backed source
    ArrayConfig    - ArraySource configuration
"""

from tagmix.source.base import AudioSource
from tagmix.source.array import ArrayConfig, ArraySource

__all__ = [
    "AudioSource",
    "ArrayConfig",
    "ArraySource",
]
