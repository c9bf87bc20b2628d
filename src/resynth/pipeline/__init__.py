"""Pipeline module for resynth."""

from resynth.pipeline.base import PipelineStage
from resynth.pipeline.orchestrator import (
    Pipeline,
    create_default_pipeline,
    create_transcription_pipeline,
)

__all__ = [
    "Pipeline",
    "PipelineStage",
    "create_default_pipeline",
    "create_transcription_pipeline",
]
