"""Tests for the LoadInstrumentStage."""

from pathlib import Path

import numpy as np

from resynth.config import Settings
from resynth.errors import ConfigurationError
from resynth.models.audio import AudioFormat, SampleStream
from resynth.models.pipeline import ProcessingContext
from resynth.stages.instrument import LoadInstrumentStage


def _context(tmp_path: Path, sample_rate: int = 22050) -> ProcessingContext:
    fmt = AudioFormat(sample_rate=sample_rate, channels=1, subtype="PCM_16", container="WAV")
    return ProcessingContext(
        source_path=tmp_path / "in.wav",
        stream=SampleStream(samples=np.zeros(10), audio_format=fmt),
    )


class TestLoadInstrumentStage:
    """Tests for LoadInstrumentStage."""

    def test_stage_name(self, settings: Settings):
        """Stage has correct name."""
        assert LoadInstrumentStage(settings).name == "load_instrument"

    def test_loads_soundfont(self, tmp_path: Path, settings: Settings, engine_factory):
        """Engine is built at the source rate and owns the loaded SoundFont."""
        context = _context(tmp_path, sample_rate=22050)

        result = LoadInstrumentStage(settings, engine_factory).execute(context)

        assert result.success is True
        engine = engine_factory.engines[0]
        assert context.engine is engine
        assert engine.sample_rate == 22050
        assert engine.gain == settings.synth_gain
        assert engine.calls == [("load", settings.soundfont_path)]

    def test_selects_program(self, tmp_path: Path, soundfont: Path, engine_factory):
        """Bank and preset are applied on the configured channel."""
        settings = Settings(soundfont_path=soundfont, preset=40, channel=2)

        result = LoadInstrumentStage(settings, engine_factory).execute(_context(tmp_path))

        assert result.success is True
        assert ("select_program", 2, 0, 40) in engine_factory.engines[0].calls

    def test_no_soundfont_configured(self, tmp_path: Path, engine_factory):
        """A missing setting fails before any engine is built."""
        settings = Settings(soundfont_path=None)

        result = LoadInstrumentStage(settings, engine_factory).execute(_context(tmp_path))

        assert result.success is False
        assert "no soundfont" in result.error_message.lower()
        assert engine_factory.engines == []

    def test_soundfont_not_found(self, tmp_path: Path, engine_factory):
        """A missing file fails before any engine is built."""
        settings = Settings(soundfont_path=tmp_path / "missing.sf2")

        result = LoadInstrumentStage(settings, engine_factory).execute(_context(tmp_path))

        assert result.success is False
        assert "not found" in result.error_message.lower()
        assert engine_factory.engines == []

    def test_load_failure_closes_engine(self, tmp_path: Path, settings: Settings, engine_factory):
        """A SoundFont the engine rejects fails the stage and frees the engine."""
        context = _context(tmp_path)

        def broken_factory(sample_rate, gain=0.2):
            engine = engine_factory(sample_rate, gain=gain)

            def load(path):
                raise ConfigurationError(f"FluidSynth could not load SoundFont: {path}")

            engine.load = load
            return engine

        result = LoadInstrumentStage(settings, broken_factory).execute(context)

        assert result.success is False
        assert "could not load" in result.error_message
        assert context.engine is None
        assert engine_factory.engines[0].closed

    def test_engine_unavailable(self, tmp_path: Path, settings: Settings):
        """An ImportError from the engine is reported, not raised."""

        def missing_factory(sample_rate, gain=0.2):
            raise ImportError("Couldn't find the FluidSynth library.")

        result = LoadInstrumentStage(settings, missing_factory).execute(_context(tmp_path))

        assert result.success is False
        assert "pyfluidsynth" in result.error_message

    def test_unexpected_load_error_closes_engine(
        self, tmp_path: Path, settings: Settings, engine_factory
    ):
        """An OSError from the engine fails the run and still frees the engine."""
        context = _context(tmp_path)

        def unreadable_factory(sample_rate, gain=0.2):
            engine = engine_factory(sample_rate, gain=gain)

            def load(path):
                raise OSError(f"bad sf2 read: {path}")

            engine.load = load
            return engine

        result = LoadInstrumentStage(settings, unreadable_factory).run(context)

        assert result.success is False
        assert "Unexpected error" in result.error_message
        assert "bad sf2 read" in result.error_message
        assert context.engine is None
        assert engine_factory.engines[0].closed

    def test_unexpected_program_error_closes_engine(
        self, tmp_path: Path, soundfont: Path, engine_factory
    ):
        """A failing program selection frees the engine that loaded the SoundFont."""
        settings = Settings(soundfont_path=soundfont, preset=40)
        context = _context(tmp_path)

        def factory(sample_rate, gain=0.2):
            engine = engine_factory(sample_rate, gain=gain)

            def select_program(channel, bank, preset):
                raise RuntimeError("program_select crashed")

            engine.select_program = select_program
            return engine

        result = LoadInstrumentStage(settings, factory).run(context)

        assert result.success is False
        assert "program_select crashed" in result.error_message
        assert context.engine is None
        assert engine_factory.engines[0].closed
