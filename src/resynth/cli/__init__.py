"""Command line interface for resynth."""
