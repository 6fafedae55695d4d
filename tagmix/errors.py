"""
tagmix Errors - Domain-specific error types.

Error hierarchy:
    TagMixError (base)
    ├── CyclicTagGraphError
    └── InvalidOptionError (also a ValueError)

Most operations in tagmix are total: removing a tag or effect that was
never applied is a no-op, and unknown effect names are forwarded to the
audio source untouched. These errors cover the remaining precondition
violations.
"""

from __future__ import annotations

from typing import Any


class TagMixError(Exception):
    """Base error for all tagmix errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CyclicTagGraphError(TagMixError):
    """
    Raised when applying a tag would make the tag graph cyclic.

    Volume and effect propagation walk the tag graph recursively, so a
    Tag that (directly or indirectly) tags itself would recurse forever.
    The check runs before any state is changed.
    """

    def __init__(
        self,
        tag: Any,
        target: Any,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"Applying {tag!r} to {target!r} would create a cycle in the tag graph",
            details,
        )
        self.tag = tag
        self.target = target


class InvalidOptionError(TagMixError, ValueError):
    """
    Raised for malformed options.

    Examples:
    - Negative or non-finite volume
    - Non-positive pitch
    - Unknown keys in an options mapping
    - An effect setting that is not a bool, None or a mapping
    """

    def __init__(
        self,
        option: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"{option}: {message}", details)
        self.option = option


__all__ = [
    "TagMixError",
    "CyclicTagGraphError",
    "InvalidOptionError",
]
