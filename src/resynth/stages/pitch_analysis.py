"""Pitch analysis stage - one pitch estimate per aggregate window."""

from resynth.analysis.aggregate import analyze_windows, pitch_events_from_windows
from resynth.config import Settings, get_settings
from resynth.models.pipeline import ProcessingContext, StageResult
from resynth.pipeline.base import PipelineStage


class PitchAnalysisStage(PipelineStage):
    """Stage 3: Pitch Analysis.

    Splits the recording into aggregate windows (settings.aggregate_size
    samples, one second when unset), takes the dominant FFT bin of every
    settings.fft_size frame and averages the in-band frequencies of each
    window into one pitch event.

    A window with no in-band frame frequency is not an error: it is reported
    as a warning and dropped, or kept as a rest when settings.emit_rests is on.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "pitch_analysis"

    def execute(self, context: ProcessingContext) -> StageResult:
        """Execute pitch analysis on the decoded stream."""
        warnings: list[str] = []

        if context.stream is None:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message="No decoded audio available for pitch analysis",
            )

        settings = self.settings
        windows = analyze_windows(
            context.stream.samples,
            context.stream.sample_rate,
            fft_size=settings.fft_size,
            aggregate_size=settings.aggregate_size or context.stream.sample_rate,
            min_frequency=settings.min_frequency,
            max_frequency=settings.max_frequency,
        )

        for window in windows:
            if window.frequency is None:
                action = "rest" if settings.emit_rests else "skipped"
                warnings.append(
                    f"Window {window.index} ({window.start:.2f}s-"
                    f"{window.start + window.duration:.2f}s): no frequency within "
                    f"{settings.min_frequency:g}-{settings.max_frequency:g} Hz, {action}"
                )

        context.windows = windows
        context.pitch_events = pitch_events_from_windows(
            windows, emit_rests=settings.emit_rests
        )

        pitched = sum(1 for event in context.pitch_events if not event.is_rest)
        warnings.append(f"{pitched} of {len(windows)} windows produced a pitch")

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=warnings,
        )
