"""Pipeline processing models for resynth.

These models track state as a recording moves through the processing pipeline.
"""

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from resynth.models.audio import NoteEvent, PitchEvent, SampleStream, WindowAnalysis
from resynth.synthesis.engine import SynthEngine


@dataclass
class ProcessingContext:
    """Mutable state passed through pipeline stages."""

    # Input / output
    source_path: Path
    output_path: Path | None = None  # None for transcription-only runs

    # Decoded source (ingest)
    stream: SampleStream | None = None

    # Synthesis engine (load_instrument) - owned by this context only
    engine: SynthEngine | None = None

    # Analysis (pitch_analysis)
    windows: list[WindowAnalysis] = field(default_factory=list)
    pitch_events: list[PitchEvent] = field(default_factory=list)

    # Ordered note sequence (quantize)
    notes: list[NoteEvent] = field(default_factory=list)

    # Rendered mono audio (synthesis)
    rendered: np.ndarray | None = None


@dataclass
class StageResult:
    """Result of a pipeline stage execution."""

    success: bool
    stage_name: str
    duration_seconds: float
    error_message: str | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class ProcessingResult:
    """Final result of the complete pipeline execution."""

    success: bool
    output_path: Path | None = None
    notes: list[NoteEvent] = field(default_factory=list)
    stages_completed: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_duration: float = 0.0
