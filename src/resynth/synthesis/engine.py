"""Synthesis engine boundary and the FluidSynth implementation."""

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from types import TracebackType

import numpy as np

from resynth.errors import ConfigurationError, SynthesisError

# FluidSynth's C API reports failure as FLUID_FAILED (-1); pyfluidsynth's
# argument checks return False.
FLUID_FAILED = -1


class SynthEngine(ABC):
    """Abstract sound-generation engine driven one note at a time.

    An engine instance belongs to the thread that created it. Every operation
    checks this, so a handle cannot be shared across threads by accident.
    """

    def __init__(self, sample_rate: int) -> None:
        self.sample_rate = sample_rate
        self._owner_thread = threading.get_ident()
        self._closed = False

    def ensure_usable(self) -> None:
        """Raise SynthesisError unless called on the owning thread of an open engine."""
        if self._closed:
            raise SynthesisError("Synthesis engine is closed")
        if threading.get_ident() != self._owner_thread:
            raise SynthesisError("Synthesis engine used from a thread that does not own it")

    @abstractmethod
    def load(self, patch_path: Path) -> None:
        """Load an instrument patch (SoundFont)."""
        ...

    @abstractmethod
    def select_program(self, channel: int, bank: int, preset: int) -> None:
        """Select a bank/preset of the loaded patch on ``channel``."""
        ...

    @abstractmethod
    def note_on(self, channel: int, note: int, velocity: int) -> None:
        ...

    @abstractmethod
    def note_off(self, channel: int, note: int) -> None:
        ...

    @abstractmethod
    def render(self, count: int) -> np.ndarray:
        """Render ``count`` mono samples as normalized float32."""
        ...

    def close(self) -> None:
        """Release engine resources. Safe to call more than once."""
        self._closed = True

    def __enter__(self) -> "SynthEngine":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


# Builds an engine from (sample_rate, gain=...)
EngineFactory = Callable[..., SynthEngine]


def _failed(result: object) -> bool:
    return result is False or (isinstance(result, int) and result == FLUID_FAILED)


class FluidSynthEngine(SynthEngine):
    """SynthEngine backed by FluidSynth through pyfluidsynth."""

    def __init__(self, sample_rate: int, gain: float = 0.2) -> None:
        import fluidsynth

        super().__init__(sample_rate)
        self._synth = fluidsynth.Synth(gain=gain, samplerate=float(sample_rate))
        self._sfid: int | None = None

    def load(self, patch_path: Path) -> None:
        self.ensure_usable()
        # update_midi_preset=1 assigns the SoundFont's presets to all channels
        sfid = self._synth.sfload(str(patch_path), 1)
        if _failed(sfid):
            raise ConfigurationError(f"FluidSynth could not load SoundFont: {patch_path}")
        self._sfid = sfid

    def select_program(self, channel: int, bank: int, preset: int) -> None:
        self.ensure_usable()
        if self._sfid is None:
            raise ConfigurationError("No SoundFont loaded")
        if _failed(self._synth.program_select(channel, self._sfid, bank, preset)):
            raise ConfigurationError(
                f"SoundFont has no preset {preset} in bank {bank}"
            )

    def note_on(self, channel: int, note: int, velocity: int) -> None:
        self.ensure_usable()
        if _failed(self._synth.noteon(channel, note, velocity)):
            raise SynthesisError(f"Note {note} could not be played")

    def note_off(self, channel: int, note: int) -> None:
        self.ensure_usable()
        if _failed(self._synth.noteoff(channel, note)):
            raise SynthesisError(f"Note {note} could not be stopped")

    def render(self, count: int) -> np.ndarray:
        self.ensure_usable()
        if count <= 0:
            return np.zeros(0, dtype=np.float32)

        try:
            interleaved = self._synth.get_samples(count)
        except Exception as e:
            raise SynthesisError(f"Synth could not write to buffer: {e}") from e

        # get_samples returns interleaved stereo int16
        stereo = np.asarray(interleaved, dtype=np.float32).reshape(-1, 2) / 32768.0
        mono = stereo.mean(axis=1).astype(np.float32)
        if mono.shape[0] != count:
            raise SynthesisError(f"Synth rendered {mono.shape[0]} samples, expected {count}")
        return mono

    def close(self) -> None:
        if not self._closed:
            self._synth.delete()
        super().close()
