"""Tests for the exclusive-slot audio sequencer and the clip catalog."""

from unittest import mock

import pytest

from audio_system import (
    AudioSequencer, ClipCatalog, ClipRole, ClipUnavailableError, Language, MockAudioPlayer, STEP_ROLES
)


@pytest.fixture
def player(logger, clock):
    return MockAudioPlayer(
        logger, clock=clock,
        durations_ms={"short": 100, "long": 5000},
        missing_clips={"missing"},
        failing_clips={"broken"},
        reported_durations_ms={"stream": 0},
    )


@pytest.fixture
def sequencer(player, logger):
    return AudioSequencer(player, logger)


class TestPlayback:
    """Tests for play() / update()."""

    def test_returns_duration(self, sequencer):
        assert sequencer.play("long") == 5000
        assert sequencer.current_clip == "long"
        assert sequencer.is_playing()

    def test_unknown_duration_is_zero(self, sequencer):
        assert sequencer.play("stream") == 0
        assert sequencer.is_playing()

    def test_natural_completion_fires_once(self, sequencer, clock):
        done = []
        sequencer.play("short", on_complete=lambda: done.append(True))

        clock.advance(99)
        sequencer.update()
        assert done == []

        clock.advance(1)
        sequencer.update()
        sequencer.update()
        assert done == [True]
        assert not sequencer.is_playing()

    def test_play_stops_previous(self, sequencer, player):
        """Starting a clip stops the one in the slot; its completion never fires."""
        done = []
        sequencer.play("long", on_complete=lambda: done.append("long"))
        sequencer.play("short")

        assert player.stopped == ["long"]
        assert sequencer.current_clip == "short"
        assert done == []

    def test_stop_discards_completion(self, sequencer, clock):
        done = []
        sequencer.play("short", on_complete=lambda: done.append(True))
        sequencer.stop()
        sequencer.stop()

        clock.advance(1000)
        sequencer.update()
        assert done == []
        assert sequencer.current_clip is None


class TestFailureAsCompletion:
    """A clip that cannot play completes immediately."""

    def test_missing_clip(self, sequencer):
        done = []
        assert sequencer.play("missing", on_complete=lambda: done.append(True)) == 0
        assert done == [True]
        assert not sequencer.is_playing()

    def test_start_failure(self, sequencer, player):
        done = []
        assert sequencer.play("broken", on_complete=lambda: done.append(True)) == 0
        assert done == [True]
        assert not sequencer.is_playing()
        assert player.played == []

    def test_missing_clip_still_stops_previous(self, sequencer, player):
        sequencer.play("long")
        sequencer.play("missing")
        assert player.stopped == ["long"]

    def test_mock_open_raises(self, player):
        with pytest.raises(ClipUnavailableError) as exc_info:
            player.open("missing")
        assert exc_info.value.clip_id == "missing"


class TestClipCatalog:
    """Tests for the (language, role) → clip mapping."""

    def test_greeting_is_shared(self):
        catalog = ClipCatalog()
        assert catalog.clip_for(Language.HUNGARIAN, ClipRole.GREETING) == "i1all"
        assert catalog.clip_for(Language.ENGLISH, ClipRole.GREETING) == "i1all"

    def test_playlists(self):
        catalog = ClipCatalog()
        assert catalog.playlist(Language.HUNGARIAN) == ["i2hun", "i3hun", "i4hun"]
        assert catalog.playlist(Language.ENGLISH) == ["i2eng", "i3eng", "i4eng"]
        assert len(STEP_ROLES) == 3

    def test_closing_clips(self):
        catalog = ClipCatalog()
        assert catalog.clip_for(Language.HUNGARIAN, ClipRole.CLOSING) == "i5hun"
        assert catalog.clip_for(Language.ENGLISH, ClipRole.CLOSING) == "i5eng"

    def test_all_clip_ids(self):
        assert len(ClipCatalog().all_clip_ids()) == 9

    def test_incomplete_mapping_rejected(self):
        with pytest.raises(ValueError):
            ClipCatalog({(Language.ENGLISH, ClipRole.GREETING): "hello"})

    def test_language_toggle(self):
        assert Language.HUNGARIAN.toggled() is Language.ENGLISH
        assert Language.ENGLISH.toggled() is Language.HUNGARIAN


class TestMisbehavingPlayer:
    """Unexpected player errors are absorbed like clip failures."""

    def test_open_raises_unexpected_error(self, logger):
        player = mock.MagicMock()
        player.open.side_effect = OSError("device busy")
        sequencer = AudioSequencer(player, logger)

        done = []
        assert sequencer.play("i1all", on_complete=lambda: done.append(True)) == 0
        assert done == [True]

    def test_stop_errors_are_swallowed(self, logger):
        playable = mock.MagicMock()
        playable.duration_ms.return_value = 1000
        playable.stop.side_effect = RuntimeError("already closed")
        player = mock.MagicMock()
        player.open.return_value = playable
        sequencer = AudioSequencer(player, logger)

        sequencer.play("i1all")
        sequencer.stop()
        playable.release.assert_called_once()
        assert not sequencer.is_playing()

    def test_unreadable_duration_reports_zero(self, logger):
        playable = mock.MagicMock()
        playable.duration_ms.side_effect = RuntimeError("no metadata")
        player = mock.MagicMock()
        player.open.return_value = playable
        sequencer = AudioSequencer(player, logger)

        assert sequencer.play("i1all") == 0
        assert sequencer.is_playing()
