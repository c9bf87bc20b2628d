"""Export stage - writes the rendered audio in the source format."""

from resynth.audio_io import write_sample_stream
from resynth.models.pipeline import ProcessingContext, StageResult
from resynth.pipeline.base import PipelineStage


class ExportStage(PipelineStage):
    """Stage 6: Export.

    Encodes the rendered audio with the source file's container, subtype,
    sample rate and channel count.
    """

    @property
    def name(self) -> str:
        return "export"

    def execute(self, context: ProcessingContext) -> StageResult:
        """Write the rendered audio to context.output_path."""
        if context.output_path is None:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message="No output path set",
            )
        if context.rendered is None or context.stream is None:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message="No rendered audio to export",
            )

        try:
            write_sample_stream(
                context.output_path, context.rendered, context.stream.audio_format
            )
        except (OSError, RuntimeError) as e:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=f"Failed to write {context.output_path}: {e}",
            )

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=[f"Wrote {context.output_path}"],
        )
