"""Note quantizer - equal-tempered MIDI note numbers from frequencies."""

import math

from resynth.models.audio import NoteEvent, PitchEvent

MIDI_MIN = 0
MIDI_MAX = 127

# A4
REFERENCE_NOTE = 69
REFERENCE_FREQUENCY = 440.0


def frequency_to_midi(frequency: float) -> int:
    """Nearest MIDI note number for ``frequency`` (Hz).

    The result is not range-checked; callers decide what to do with notes
    outside 0-127.

    Raises:
        ValueError: If ``frequency`` is not a positive finite number.
    """
    if not math.isfinite(frequency) or frequency <= 0:
        raise ValueError(f"Frequency must be positive and finite, got {frequency}")
    return round(REFERENCE_NOTE + 12 * math.log2(frequency / REFERENCE_FREQUENCY))


def midi_to_frequency(midi_note: int) -> float:
    """Equal-tempered frequency (Hz) of a MIDI note number."""
    return REFERENCE_FREQUENCY * 2 ** ((midi_note - REFERENCE_NOTE) / 12)


def quantize_pitches(
    pitch_events: list[PitchEvent],
    *,
    emit_rests: bool = False,
) -> tuple[list[NoteEvent], list[str]]:
    """Quantize pitch events into an ordered note sequence.

    Args:
        pitch_events: Events in time order. Rests pass through unchanged.
        emit_rests: Turn out-of-range notes into rests instead of dropping them.

    Returns:
        Tuple of (note events, diagnostics for every out-of-range event)
    """
    notes: list[NoteEvent] = []
    skipped: list[str] = []

    for event in pitch_events:
        if event.frequency is None:
            notes.append(NoteEvent(midi_note=None, duration=event.duration, start=event.start))
            continue

        midi_note = frequency_to_midi(event.frequency)
        if not MIDI_MIN <= midi_note <= MIDI_MAX:
            skipped.append(
                f"Skipping out-of-range frequency {event.frequency:.2f} Hz "
                f"at {event.start:.2f}s (MIDI {midi_note})"
            )
            if emit_rests:
                notes.append(
                    NoteEvent(
                        midi_note=None,
                        duration=event.duration,
                        start=event.start,
                        frequency=event.frequency,
                    )
                )
            continue

        notes.append(
            NoteEvent(
                midi_note=midi_note,
                duration=event.duration,
                start=event.start,
                frequency=event.frequency,
            )
        )

    return notes, skipped
