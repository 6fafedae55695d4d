"""
Options for tags, sounds and instances.

The same record configures every taggable object:

    PlayOptions(
        volume=0.8,
        tags=(music, ambience),
        effects={"reverb": True, "echo": False},
        pitch=1.0,      # instances only
        loop=None,      # None keeps the sound's default
        seek=0.0,       # instances only, in seconds
    )

Tags and sounds ignore pitch and seek. Plain mappings with the same keys
are accepted anywhere a PlayOptions is, via PlayOptions.coerce().
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Mapping

from tagmix.effects import EffectMap, normalize_effects
from tagmix.errors import InvalidOptionError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from tagmix.core.tag import Tag


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def validate_volume(volume: Any, option: str = "volume") -> float:
    """Check a volume multiplier and return it as a float.

    Any finite, non-negative number is a valid multiplier, 0 included.
    """
    if not _is_number(volume) or not math.isfinite(volume):
        raise InvalidOptionError(option, f"must be a finite number, got {volume!r}")
    if volume < 0:
        raise InvalidOptionError(option, f"must be >= 0, got {volume}")
    return float(volume)


def validate_pitch(pitch: Any) -> float:
    if not _is_number(pitch) or not math.isfinite(pitch):
        raise InvalidOptionError("pitch", f"must be a finite number, got {pitch!r}")
    if pitch <= 0:
        raise InvalidOptionError("pitch", f"must be > 0, got {pitch}")
    return float(pitch)


@dataclass
class PlayOptions:
    """Options record accepted by apply_options(), Tag, Sound and play().

    Args:
        volume: Own volume multiplier.
        tags: Tags to apply, replacing any current membership.
        effects: Own effect overrides, replacing any current overrides.
        pitch: Playback rate multiplier (instances only).
        loop: Looping flag. None means "use the sound's default".
        seek: Start offset in seconds (instances only).
    """

    volume: float = 1.0
    tags: tuple["Tag", ...] = ()
    effects: EffectMap = field(default_factory=dict)
    pitch: float = 1.0
    loop: bool | None = None
    seek: float = 0.0

    def __post_init__(self) -> None:
        """Validate and normalize."""
        self.volume = validate_volume(self.volume)
        self.pitch = validate_pitch(self.pitch)
        if not _is_number(self.seek) or not math.isfinite(self.seek) or self.seek < 0:
            raise InvalidOptionError("seek", f"must be a finite number >= 0, got {self.seek!r}")
        self.seek = float(self.seek)
        if self.loop is not None:
            self.loop = bool(self.loop)
        if self.tags is None:
            self.tags = ()
        elif isinstance(self.tags, (str, bytes, Mapping)):
            raise InvalidOptionError("tags", "must be a sequence of Tag objects")
        self.tags = tuple(self.tags)
        self.effects = normalize_effects(self.effects)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "PlayOptions":
        """Build options from a plain mapping.

        Keys PlayOptions does not know are ignored, so a richer caller-side
        options table can be passed through unchanged. None values fall back
        to the defaults.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            logger.debug("Ignoring unknown option keys %s", unknown)
        values = {
            key: value
            for key, value in options.items()
            if key in known and (value is not None or key == "loop")
        }
        return cls(**values)

    @classmethod
    def coerce(cls, options: "PlayOptions | Mapping[str, Any] | None") -> "PlayOptions":
        """Accept None, a PlayOptions, or a mapping."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_mapping(options)
        raise InvalidOptionError(
            "options",
            f"expected PlayOptions, a mapping or None, got {type(options).__name__}",
        )

    @classmethod
    def merge(
        cls,
        options: "PlayOptions | Mapping[str, Any] | None",
        **overrides: Any,
    ) -> "PlayOptions":
        """Coerce options, then replace fields with keyword overrides."""
        base = cls.coerce(options)
        if not overrides:
            return base
        return cls.from_mapping({**base.to_dict(), **overrides})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "volume": self.volume,
            "tags": list(self.tags),
            "effects": dict(self.effects),
            "pitch": self.pitch,
            "loop": self.loop,
            "seek": self.seek,
        }


__all__ = [
    "PlayOptions",
    "validate_volume",
    "validate_pitch",
]
