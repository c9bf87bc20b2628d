"""Note rendering through an external synthesis engine."""

from resynth.synthesis.engine import EngineFactory, FluidSynthEngine, SynthEngine
from resynth.synthesis.scheduler import note_sample_count, render_notes

__all__ = ["EngineFactory", "FluidSynthEngine", "SynthEngine", "note_sample_count", "render_notes"]
