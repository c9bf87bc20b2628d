"""Quantize stage - pitch events to MIDI note events."""

from resynth.analysis.quantize import quantize_pitches
from resynth.config import Settings, get_settings
from resynth.models.pipeline import ProcessingContext, StageResult
from resynth.pipeline.base import PipelineStage


class QuantizeStage(PipelineStage):
    """Stage 4: Quantize.

    Maps each pitch event to the nearest equal-tempered MIDI note
    (A4 = 440 Hz = 69). Notes outside 0-127 are skipped with a warning.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "quantize"

    def execute(self, context: ProcessingContext) -> StageResult:
        """Execute note quantization."""
        notes, skipped = quantize_pitches(
            context.pitch_events, emit_rests=self.settings.emit_rests
        )
        context.notes = notes

        warnings = list(skipped)
        pitched = sum(1 for note in notes if not note.is_rest)
        warnings.append(f"{pitched} notes transcribed")

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=warnings,
        )
