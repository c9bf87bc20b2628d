"""Synthesis stage - renders the note sequence with the loaded instrument."""

from resynth.config import Settings, get_settings
from resynth.errors import SynthesisError
from resynth.models.pipeline import ProcessingContext, StageResult
from resynth.pipeline.base import PipelineStage
from resynth.synthesis.scheduler import render_notes


class SynthesisStage(PipelineStage):
    """Stage 5: Synthesis.

    Plays every note on a single channel for its transcribed duration and
    concatenates the result. The first engine error fails the stage; no
    partially rendered audio is kept.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "synthesis"

    def execute(self, context: ProcessingContext) -> StageResult:
        """Render the ordered note sequence."""
        if context.engine is None or context.stream is None:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message="Synthesis engine not loaded",
            )

        sample_rate = context.stream.sample_rate
        try:
            rendered = render_notes(
                context.notes,
                context.engine,
                sample_rate,
                velocity=self.settings.velocity,
                channel=self.settings.channel,
            )
        except SynthesisError as e:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=f"Synthesis failed: {e}",
            )

        context.rendered = rendered

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=[f"Rendered {rendered.shape[0] / sample_rate:.2f}s of audio"],
        )
