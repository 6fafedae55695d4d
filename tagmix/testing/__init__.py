"""
tagmix - Testing Utilities

Tools for testing code built on tagmix.

Components:
    MockSource         - Call-recording audio source
    RenderAssertions   - Level assertions for rendered audio
    Fixtures           - Test audio, sounds and tag trees

Usage:
    from tagmix.testing import MockSource

    sound = Sound(MockSource())
    instance = sound.play()
    assert instance.source.count("play") == 1
"""

from tagmix.testing.mock import (
    MockSource,
    MockConfig,
    CallRecord,
)

from tagmix.testing.assertions import (
    RenderAssertions,
    RenderAnalysis,
)

from tagmix.testing.fixtures import (
    create_test_audio,
    create_test_sound,
    create_tag_tree,
)

__all__ = [
    # Mock
    "MockSource",
    "MockConfig",
    "CallRecord",
    # Assertions
    "RenderAssertions",
    "RenderAnalysis",
    # Fixtures
    "create_test_audio",
    "create_test_sound",
    "create_tag_tree",
]
