"""
Instance Tests - source synchronization and transport state.

An instance pushes its total volume and the diff of its merged effects
into its source on every change, so effects never stay stuck on the
source after the setting that enabled them goes away.
"""

import gc
import logging

import pytest

from tagmix import InvalidOptionError, Sound, Tag
from tagmix.testing import MockSource


@pytest.fixture
def sound():
    return Sound(MockSource(), name="voice")


@pytest.fixture
def instance(sound):
    return sound.play()


class TestStoppedState:
    """Tests for is_stopped() and the paused flag."""

    def test_playing_is_not_stopped(self, instance):
        assert not instance.is_stopped()

    def test_finished_is_stopped(self, instance):
        """An instance whose source ran out is stopped."""
        instance.source.finish()

        assert instance.is_stopped()

    def test_paused_is_not_stopped(self, instance):
        """A paused instance is not stopped, though its source is idle."""
        instance.pause()

        assert not instance.source.playing
        assert instance.is_paused
        assert not instance.is_stopped()

    def test_resume_clears_pause(self, instance):
        instance.pause()
        instance.resume()

        assert not instance.is_paused
        assert instance.source.playing

    def test_stop_clears_pause(self, instance):
        """stop() takes precedence over an earlier pause()."""
        instance.pause()
        instance.stop()

        assert not instance.is_paused
        assert instance.is_stopped()

    def test_repr_shows_state(self, instance):
        assert "playing" in repr(instance)
        instance.pause()
        assert "paused" in repr(instance)
        instance.stop()
        assert "stopped" in repr(instance)


class TestSourceProperties:
    """Tests for pitch and loop, which live on the source."""

    def test_pitch(self, instance):
        instance.pitch = 0.5

        assert instance.pitch == 0.5
        assert instance.source.pitch == 0.5

    def test_invalid_pitch(self, instance):
        with pytest.raises(InvalidOptionError, match="pitch"):
            instance.pitch = 0

    def test_loop(self, instance):
        instance.loop = True

        assert instance.loop is True
        assert instance.source.looping is True


class TestVolumeSync:
    """Tests for volume pushes."""

    def test_own_volume_pushed(self, instance):
        instance.volume = 0.3

        assert instance.source.volume == pytest.approx(0.3)

    def test_tagging_pushes_volume_once(self, instance):
        """Tagging several tags pushes one volume update."""
        instance.source.reset()

        instance.tag(Tag("a", volume=0.5), Tag("b", volume=0.5))

        assert instance.source.count("set_volume") == 1
        assert instance.source.volume == pytest.approx(0.25)

    def test_zero_volume(self, instance):
        """A zero tag mutes the instance."""
        instance.tag(Tag("mute", volume=0))

        assert instance.source.volume == 0.0


class TestEffectSync:
    """Tests for effect diffs pushed to the source."""

    def test_enabled_effect_pushed(self, instance):
        """True is sent as set_effect(name)."""
        instance.set_effect("reverb")

        assert instance.source.count("set_effect", "reverb") == 1
        assert instance.applied_effects == {"reverb"}

    def test_parameters_pushed(self, instance):
        """Parameter mappings are passed to the source."""
        instance.set_effect("filter", {"type": "lowpass"})

        instance.source.assert_effect_enabled("filter", {"type": "lowpass"})

    def test_removing_override_disables_once(self, instance):
        """Removing the only setting sends exactly one disable."""
        instance.set_effect("reverb")
        instance.remove_effect("reverb")
        instance.volume = 0.5
        instance.set_effect("echo")

        assert instance.source.count("set_effect", "reverb", False) == 1
        assert "reverb" not in instance.applied_effects
        instance.source.assert_effect_disabled("reverb")

    def test_explicit_disable_of_inherited(self, sound):
        """False on the instance disables an effect its tag enables."""
        tag = Tag("t", effects={"echo": True})
        instance = sound.play(tags=[tag])
        instance.source.assert_effect_enabled("echo")

        instance.set_effect("echo", False)

        instance.source.assert_effect_disabled("echo")
        assert instance.get_all_effects()["echo"] is False
        assert instance.source.count("set_effect", "echo", False) == 1

    def test_disabled_effect_never_applied(self, instance):
        """A False setting with nothing to override sends nothing."""
        instance.set_effect("echo", False)

        assert instance.source.count("set_effect", "echo", False) == 0
        assert instance.applied_effects == frozenset()

    def test_inherited_effect_survives_override_removal(self, sound):
        """With a tag still enabling it, removing the override keeps the effect."""
        tag = Tag("t", effects={"reverb": {"decay": 1}})
        instance = sound.play(tags=[tag])
        instance.set_effect("reverb", {"decay": 5})

        instance.remove_effect("reverb")

        instance.source.assert_effect_enabled("reverb", {"decay": 1})
        assert instance.source.count("set_effect", "reverb", False) == 0

    def test_unknown_effect_names_pass_through(self, instance):
        """Effect names are opaque to tagmix."""
        instance.set_effect("some-vendor-effect", {"x": 1})

        assert "some-vendor-effect" in instance.source.effects


class TestOrphanedInstance:
    """Instances hold their sound weakly."""

    def test_dropping_sound_stops_instances(self):
        """Collecting a sound stops every instance it created."""
        sound = Sound(MockSource(), volume=0.5)
        first = sound.play()
        second = sound.play()
        paused = sound.play()
        paused.pause()

        del sound
        gc.collect()

        assert first.sound is None
        assert first.is_stopped()
        assert second.is_stopped()
        assert paused.is_stopped()
        assert not paused.is_paused

    def test_instance_outlives_sound(self, caplog):
        """Once the sound is gone, the instance uses its own and tag state."""
        sound = Sound(MockSource(), volume=0.5)
        instance = sound.play()
        assert instance.source.volume == pytest.approx(0.5)

        del sound
        gc.collect()
        assert instance.is_stopped()
        caplog.set_level(logging.WARNING, logger="tagmix.core.instance")

        instance.volume = 0.8

        assert instance.sound is None
        assert instance.source.volume == pytest.approx(0.8)
        assert any("lost its sound" in r.getMessage() for r in caplog.records)
