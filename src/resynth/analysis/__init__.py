"""Pitch transcription: spectral analysis, aggregation and quantization."""

from resynth.analysis.aggregate import (
    aggregate_pitches,
    analyze_windows,
    pitch_events_from_windows,
)
from resynth.analysis.quantize import frequency_to_midi, midi_to_frequency, quantize_pitches
from resynth.analysis.spectrum import dominant_frequency, magnitude_spectrum

__all__ = [
    "aggregate_pitches",
    "analyze_windows",
    "dominant_frequency",
    "frequency_to_midi",
    "magnitude_spectrum",
    "midi_to_frequency",
    "pitch_events_from_windows",
    "quantize_pitches",
]
