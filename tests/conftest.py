"""Pytest fixtures for resynth tests."""

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from resynth.config import Settings
from resynth.errors import SynthesisError
from resynth.synthesis.engine import SynthEngine


class FakeEngine(SynthEngine):
    """Deterministic SynthEngine that records every call.

    Renders a constant level derived from the sounding note so tests can
    tell notes apart in the output.
    """

    def __init__(self, sample_rate: int, gain: float = 0.2, fail_on: str | None = None) -> None:
        super().__init__(sample_rate)
        self.gain = gain
        self.fail_on = fail_on
        self.calls: list[tuple] = []
        self.sounding: set[int] = set()

    @property
    def closed(self) -> bool:
        return self._closed

    def _maybe_fail(self, operation: str) -> None:
        if self.fail_on == operation:
            raise SynthesisError(f"{operation} failed")

    def load(self, patch_path: Path) -> None:
        self.ensure_usable()
        self.calls.append(("load", Path(patch_path)))

    def select_program(self, channel: int, bank: int, preset: int) -> None:
        self.ensure_usable()
        self.calls.append(("select_program", channel, bank, preset))

    def note_on(self, channel: int, note: int, velocity: int) -> None:
        self.ensure_usable()
        self._maybe_fail("note_on")
        self.calls.append(("note_on", channel, note, velocity))
        self.sounding.add(note)

    def note_off(self, channel: int, note: int) -> None:
        self.ensure_usable()
        self._maybe_fail("note_off")
        self.calls.append(("note_off", channel, note))
        self.sounding.discard(note)

    def render(self, count: int) -> np.ndarray:
        self.ensure_usable()
        self._maybe_fail("render")
        self.calls.append(("render", count))
        level = sum(self.sounding) / 256.0
        return np.full(count, level, dtype=np.float32)


class FakeEngineFactory:
    """Engine factory that keeps every engine it builds."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.engines: list[FakeEngine] = []

    def __call__(self, sample_rate: int, gain: float = 0.2) -> FakeEngine:
        engine = FakeEngine(sample_rate, gain=gain, fail_on=self.fail_on)
        self.engines.append(engine)
        return engine


def make_sine(
    frequency: float,
    num_samples: int,
    sample_rate: int = 44100,
    amplitude: float = 0.5,
) -> np.ndarray:
    """A sine wave starting at phase zero."""
    t = np.arange(num_samples) / sample_rate
    return amplitude * np.sin(2 * np.pi * frequency * t)


@pytest.fixture
def sine():
    """Return the sine wave generator."""
    return make_sine


@pytest.fixture
def write_audio(tmp_path: Path):
    """Return a helper that writes samples to a file under tmp_path."""

    def _write(
        samples: np.ndarray,
        name: str = "input.wav",
        sample_rate: int = 44100,
        subtype: str = "PCM_16",
    ) -> Path:
        path = tmp_path / name
        sf.write(path, samples, sample_rate, subtype=subtype)
        return path

    return _write


@pytest.fixture
def soundfont(tmp_path: Path) -> Path:
    """Return a placeholder SoundFont path (the fake engine never parses it)."""
    path = tmp_path / "instrument.sf2"
    path.write_bytes(b"RIFF")
    return path


@pytest.fixture
def engine_factory() -> FakeEngineFactory:
    """Return a factory building deterministic fake engines."""
    return FakeEngineFactory()


@pytest.fixture
def failing_engine_factory():
    """Return a function building fake-engine factories that fail on one operation."""
    return FakeEngineFactory


@pytest.fixture
def settings(soundfont: Path) -> Settings:
    """Return settings with small windows suited to short test signals."""
    return Settings(
        soundfont_path=soundfont,
        fft_size=1024,
        aggregate_size=8192,
    )
