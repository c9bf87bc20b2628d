"""Data models for resynth."""

from resynth.models.audio import (
    AudioFormat,
    NoteEvent,
    PitchEvent,
    SampleStream,
    WindowAnalysis,
)
from resynth.models.pipeline import ProcessingContext, ProcessingResult, StageResult

__all__ = [
    "AudioFormat",
    "NoteEvent",
    "PitchEvent",
    "ProcessingContext",
    "ProcessingResult",
    "SampleStream",
    "StageResult",
    "WindowAnalysis",
]
