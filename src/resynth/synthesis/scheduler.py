"""Note scheduler - drives the synthesis engine through a note sequence."""

import numpy as np

from resynth.models.audio import NoteEvent
from resynth.synthesis.engine import SynthEngine


def note_sample_count(duration: float, sample_rate: int) -> int:
    """Rendered length of a note, in whole samples."""
    return int(round(duration * sample_rate))


def render_notes(
    notes: list[NoteEvent],
    engine: SynthEngine,
    sample_rate: int,
    *,
    velocity: int = 100,
    channel: int = 0,
) -> np.ndarray:
    """Render every note in order and concatenate the audio.

    Each pitched note gets a note-on, exactly ``round(duration * sample_rate)``
    rendered samples, and a note-off. Rests render the same number of zero
    samples without touching the engine. Engine errors propagate immediately;
    nothing rendered so far is returned.

    Args:
        notes: Ordered note sequence.
        engine: Engine with an instrument already loaded.
        sample_rate: Output sample rate in Hz.
        velocity: Note-on velocity.
        channel: Engine channel used for every note.

    Returns:
        Mono float32 samples.
    """
    chunks: list[np.ndarray] = []

    for note in notes:
        count = note_sample_count(note.duration, sample_rate)

        if note.midi_note is None:
            chunks.append(np.zeros(count, dtype=np.float32))
            continue

        engine.note_on(channel, note.midi_note, velocity)
        chunks.append(np.asarray(engine.render(count), dtype=np.float32))
        engine.note_off(channel, note.midi_note)

    if not chunks:
        return np.zeros(0, dtype=np.float32)
    return np.concatenate(chunks)
