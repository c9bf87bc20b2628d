"""Instrument stage - opens the synthesis engine and loads the SoundFont."""

from resynth.config import Settings, get_settings
from resynth.errors import ResynthError
from resynth.models.pipeline import ProcessingContext, StageResult
from resynth.pipeline.base import PipelineStage
from resynth.synthesis.engine import EngineFactory, FluidSynthEngine


class LoadInstrumentStage(PipelineStage):
    """Stage 2: Load Instrument.

    Creates the synthesis engine at the source sample rate, loads the
    configured SoundFont and optionally selects a bank/preset. Runs before any
    analysis so a bad patch fails the run early. The engine is stored on the
    context, which owns it until the pipeline closes it.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        engine_factory: EngineFactory | None = None,
    ) -> None:
        """Initialize the instrument stage.

        Args:
            settings: Application settings. Uses global settings if not provided.
            engine_factory: Callable building a SynthEngine from
                ``(sample_rate, gain=...)``. Defaults to FluidSynthEngine.
        """
        self.settings = settings or get_settings()
        self.engine_factory = engine_factory or FluidSynthEngine

    @property
    def name(self) -> str:
        return "load_instrument"

    def execute(self, context: ProcessingContext) -> StageResult:
        """Create the engine and load the instrument patch."""
        warnings: list[str] = []

        soundfont = self.settings.soundfont_path
        if soundfont is None:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message="No SoundFont configured (set --soundfont or RESYNTH_SOUNDFONT_PATH)",
            )
        if not soundfont.is_file():
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=f"SoundFont not found: {soundfont}",
            )

        if context.stream is None:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message="No decoded audio available to match the engine sample rate",
            )

        try:
            engine = self.engine_factory(
                context.stream.sample_rate, gain=self.settings.synth_gain
            )
        except ImportError as e:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=f"pyfluidsynth not installed or FluidSynth library missing: {e}",
            )

        context.engine = engine
        try:
            engine.load(soundfont)
            if self.settings.bank is not None or self.settings.preset is not None:
                bank = self.settings.bank or 0
                preset = self.settings.preset or 0
                engine.select_program(self.settings.channel, bank, preset)
                warnings.append(f"Selected bank {bank}, preset {preset}")
        except ResynthError as e:
            engine.close()
            context.engine = None
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=str(e),
            )
        except Exception:
            engine.close()
            context.engine = None
            raise

        warnings.append(f"Loaded SoundFont {soundfont.name}")

        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=warnings,
        )
