"""
Core mixing model - tags, sounds and instances.

Components:
    Taggable    - Shared volume/tag/effect behavior
    Tag         - Named volume/effect modifier
    Sound       - Playable template with an instance pool
    Instance    - One playback occurrence driving an audio source
"""

from tagmix.core.taggable import Taggable
from tagmix.core.tag import Tag
from tagmix.core.instance import Instance
from tagmix.core.sound import Sound

__all__ = [
    "Taggable",
    "Tag",
    "Instance",
    "Sound",
]
