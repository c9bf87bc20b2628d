"""Pipeline orchestrator for resynth."""

import time
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from resynth.config import Settings
from resynth.models.pipeline import ProcessingContext, ProcessingResult
from resynth.pipeline.base import PipelineStage
from resynth.synthesis.engine import EngineFactory

console = Console()


class Pipeline:
    """Orchestrates the execution of pipeline stages."""

    def __init__(self, stages: list[PipelineStage], settings: Settings) -> None:
        """Initialize the pipeline.

        Args:
            stages: Ordered list of stages to execute.
            settings: Application settings.
        """
        self.stages = stages
        self.settings = settings

    def run(self, source_path: Path, output_path: Path | None = None) -> ProcessingResult:
        """Run the pipeline on an audio file.

        Stops at the first failed stage. The synthesis engine, if one was
        opened, is closed before returning.

        Args:
            source_path: Path to the input audio file.
            output_path: Path of the rendered file (unused by transcription-only
                pipelines).

        Returns:
            ProcessingResult with success status and details.
        """
        start_time = time.time()

        context = ProcessingContext(source_path=source_path, output_path=output_path)
        result = ProcessingResult(success=True)

        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                TimeElapsedColumn(),
                console=console,
                transient=True,
            ) as progress:
                for stage in self.stages:
                    task = progress.add_task(f"[cyan]{stage.name}[/cyan]...", total=None)

                    stage_result = stage.run(context)

                    progress.remove_task(task)

                    if stage_result.success:
                        result.stages_completed.append(stage.name)
                        result.warnings.extend(stage_result.warnings)
                        console.print(
                            f"  [green]{stage.name}[/green] "
                            f"({stage_result.duration_seconds:.1f}s)"
                        )
                    else:
                        result.success = False
                        result.errors.append(
                            f"{stage.name}: {stage_result.error_message}"
                        )
                        console.print(
                            f"  [red]{stage.name}[/red] failed: "
                            f"{stage_result.error_message}"
                        )
                        break

            result.notes = list(context.notes)
            if result.success:
                result.output_path = context.output_path

        finally:
            if context.engine is not None:
                context.engine.close()
                context.engine = None

        result.total_duration = time.time() - start_time
        return result


def create_default_pipeline(
    settings: Settings,
    engine_factory: EngineFactory | None = None,
) -> Pipeline:
    """Create a pipeline that transcribes and re-renders a recording.

    Args:
        settings: Application settings.
        engine_factory: Builds the synthesis engine; defaults to FluidSynth.

    Returns:
        Configured Pipeline instance.
    """
    from resynth.stages import (
        ExportStage,
        IngestStage,
        LoadInstrumentStage,
        PitchAnalysisStage,
        QuantizeStage,
        SynthesisStage,
    )

    stages: list[PipelineStage] = [
        IngestStage(settings),
        LoadInstrumentStage(settings, engine_factory),
        PitchAnalysisStage(settings),
        QuantizeStage(settings),
        SynthesisStage(settings),
        ExportStage(),
    ]

    return Pipeline(stages, settings)


def create_transcription_pipeline(settings: Settings) -> Pipeline:
    """Create a pipeline that stops after quantization (no synthesis, no output file).

    Args:
        settings: Application settings.

    Returns:
        Configured Pipeline instance.
    """
    from resynth.stages import IngestStage, PitchAnalysisStage, QuantizeStage

    stages: list[PipelineStage] = [
        IngestStage(settings),
        PitchAnalysisStage(settings),
        QuantizeStage(settings),
    ]

    return Pipeline(stages, settings)
