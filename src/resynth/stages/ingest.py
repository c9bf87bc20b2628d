"""Ingest stage - decodes the source recording into a sample stream."""

from resynth.audio_io import SUPPORTED_SUBTYPES, read_sample_stream
from resynth.config import Settings, get_settings
from resynth.errors import InputError
from resynth.models.pipeline import ProcessingContext, StageResult
from resynth.pipeline.base import PipelineStage


class IngestStage(PipelineStage):
    """Stage 1: Ingest.

    - Validates the audio file exists and has a supported sample format
    - Decodes it to mono float samples in [-1.0, 1.0]
    - Records the container descriptor (rate, channels, subtype) for output
    - Checks the sample rate against settings.sample_rate, when one is set
    """

    SUPPORTED_SUBTYPES = SUPPORTED_SUBTYPES

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "ingest"

    def execute(self, context: ProcessingContext) -> StageResult:
        """Execute the ingest stage."""
        warnings: list[str] = []

        try:
            stream = read_sample_stream(context.source_path)
        except InputError as e:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=str(e),
            )

        expected_rate = self.settings.sample_rate
        if expected_rate is not None and stream.sample_rate != expected_rate:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=(
                    f"Unsupported sample rate: {stream.sample_rate} Hz "
                    f"(configured for {expected_rate} Hz)"
                ),
            )

        fmt = stream.audio_format
        if fmt.channels > 1:
            warnings.append(f"Mixed {fmt.channels} channels down to mono for analysis")
        if stream.num_samples == 0:
            warnings.append("Input contains no samples")

        context.stream = stream
        warnings.append(
            f"Loaded {stream.duration:.2f}s at {fmt.sample_rate} Hz "
            f"({fmt.container} {fmt.subtype}, {fmt.channels} ch)"
        )

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=warnings,
        )
