"""Tests for data models."""

import numpy as np
import pytest

from resynth.models.audio import AudioFormat, NoteEvent, PitchEvent, SampleStream, WindowAnalysis

FORMAT = AudioFormat(sample_rate=1000, channels=1, subtype="PCM_16", container="WAV")


def test_sample_stream_properties():
    """SampleStream derives its length and duration."""
    stream = SampleStream(samples=np.zeros(2500), audio_format=FORMAT)

    assert stream.num_samples == 2500
    assert stream.sample_rate == 1000
    assert stream.duration == 2.5


def test_sample_stream_is_immutable():
    """Samples cannot be modified in place and fields cannot be reassigned."""
    stream = SampleStream(samples=np.zeros(4), audio_format=FORMAT)

    with pytest.raises(ValueError):
        stream.samples[0] = 1.0
    with pytest.raises(AttributeError):
        stream.samples = np.ones(4)  # type: ignore[misc]


def test_sample_stream_requires_mono():
    """2-D sample arrays are rejected."""
    with pytest.raises(ValueError, match="mono"):
        SampleStream(samples=np.zeros((10, 2)), audio_format=FORMAT)


def test_window_frequency_mean():
    """Window frequency is the mean of retained frame frequencies."""
    window = WindowAnalysis(
        index=0, start=0.0, duration=1.0, num_samples=1000, frame_count=3,
        frequencies=[100.0, 200.0, 300.0],
    )
    empty = WindowAnalysis(index=1, start=1.0, duration=1.0, num_samples=1000, frame_count=3)

    assert window.frequency == 200.0
    assert empty.frequency is None


def test_note_names():
    """MIDI numbers map to scientific pitch names."""
    assert NoteEvent(midi_note=69, duration=1.0).note_name == "A4"
    assert NoteEvent(midi_note=60, duration=1.0).note_name == "C4"
    assert NoteEvent(midi_note=61, duration=1.0).note_name == "C#4"
    assert NoteEvent(midi_note=0, duration=1.0).note_name == "C-1"
    assert NoteEvent(midi_note=None, duration=1.0).note_name == "rest"


def test_rest_flags():
    """Rests are marked by a missing pitch."""
    assert PitchEvent(frequency=None, duration=1.0).is_rest
    assert not PitchEvent(frequency=440.0, duration=1.0).is_rest
    assert NoteEvent(midi_note=None, duration=1.0).is_rest
