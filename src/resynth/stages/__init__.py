"""Pipeline stages for resynth."""

from resynth.stages.export import ExportStage
from resynth.stages.ingest import IngestStage
from resynth.stages.instrument import LoadInstrumentStage
from resynth.stages.pitch_analysis import PitchAnalysisStage
from resynth.stages.quantize import QuantizeStage
from resynth.stages.synthesis import SynthesisStage

__all__ = [
    "ExportStage",
    "IngestStage",
    "LoadInstrumentStage",
    "PitchAnalysisStage",
    "QuantizeStage",
    "SynthesisStage",
]
