"""Audio and note data models for resynth.

A recording moves through these types in order:
SampleStream -> WindowAnalysis -> PitchEvent -> NoteEvent.
"""

from dataclasses import dataclass, field

import numpy as np

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


@dataclass(frozen=True)
class AudioFormat:
    """Container descriptor of the source file, reused verbatim for output."""

    sample_rate: int  # Hz
    channels: int
    subtype: str  # libsndfile subtype, e.g. "PCM_16"
    container: str  # libsndfile major format, e.g. "WAV"


@dataclass(frozen=True)
class SampleStream:
    """Decoded mono samples in [-1.0, 1.0] plus the source format."""

    samples: np.ndarray
    audio_format: AudioFormat

    def __post_init__(self) -> None:
        samples = np.array(self.samples, dtype=np.float64)
        if samples.ndim != 1:
            raise ValueError(f"SampleStream expects mono samples, got shape {samples.shape}")
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    @property
    def sample_rate(self) -> int:
        return self.audio_format.sample_rate

    @property
    def num_samples(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration(self) -> float:
        """Length in seconds."""
        return self.num_samples / self.sample_rate


@dataclass
class WindowAnalysis:
    """Per-window result of the pitch aggregator."""

    index: int
    start: float  # seconds
    duration: float  # seconds
    num_samples: int
    frame_count: int
    frequencies: list[float] = field(default_factory=list)  # in-band frame maxima

    @property
    def frequency(self) -> float | None:
        """Mean of the retained frame frequencies, or None if none were retained."""
        if not self.frequencies:
            return None
        return sum(self.frequencies) / len(self.frequencies)


@dataclass
class PitchEvent:
    """A representative frequency held for one aggregate window."""

    frequency: float | None  # Hz, None marks a rest
    duration: float  # seconds
    start: float = 0.0  # seconds, position in the source recording

    @property
    def is_rest(self) -> bool:
        return self.frequency is None


@dataclass
class NoteEvent:
    """A quantized note ready for scheduling."""

    midi_note: int | None  # 0-127, None marks a rest
    duration: float  # seconds
    start: float = 0.0  # seconds, position in the source recording
    frequency: float | None = None  # estimate the note was quantized from

    @property
    def is_rest(self) -> bool:
        return self.midi_note is None

    @property
    def note_name(self) -> str:
        """Scientific pitch name (e.g. 'A4'), or 'rest'."""
        if self.midi_note is None:
            return "rest"
        octave = (self.midi_note // 12) - 1
        return f"{NOTE_NAMES[self.midi_note % 12]}{octave}"
