"""resynth - transcribe a monophonic recording into notes and re-render it."""

__version__ = "0.1.0"
