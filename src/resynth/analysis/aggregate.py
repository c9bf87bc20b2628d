"""Pitch aggregator - one stable frequency estimate per aggregate window."""

import numpy as np

from resynth.analysis.spectrum import dominant_frequency
from resynth.models.audio import PitchEvent, WindowAnalysis


def analyze_windows(
    samples: np.ndarray,
    sample_rate: int,
    *,
    fft_size: int,
    aggregate_size: int,
    min_frequency: float,
    max_frequency: float,
) -> list[WindowAnalysis]:
    """Split ``samples`` into aggregate windows and analyze each frame.

    Every window is cut into consecutive frames of ``fft_size`` samples (the
    last one may be shorter and is zero-padded). The dominant frequency of each
    frame is kept when it falls inside ``[min_frequency, max_frequency]``.

    Args:
        samples: Mono samples of the whole recording.
        sample_rate: Sample rate in Hz.
        fft_size: Analysis frame length.
        aggregate_size: Window length in samples; the last window may be shorter.
        min_frequency: Lowest accepted frame frequency (Hz, inclusive).
        max_frequency: Highest accepted frame frequency (Hz, inclusive).

    Returns:
        One WindowAnalysis per window, in time order.
    """
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    if fft_size <= 0 or aggregate_size <= 0:
        raise ValueError("fft_size and aggregate_size must be positive")

    samples = np.asarray(samples, dtype=np.float64)
    windows: list[WindowAnalysis] = []

    for index, window_start in enumerate(range(0, samples.shape[0], aggregate_size)):
        window = samples[window_start : window_start + aggregate_size]

        frequencies = []
        frame_count = 0
        for frame_start in range(0, window.shape[0], fft_size):
            frame = window[frame_start : frame_start + fft_size]
            frame_count += 1

            frequency = dominant_frequency(frame, sample_rate, fft_size)
            if min_frequency <= frequency <= max_frequency:
                frequencies.append(frequency)

        windows.append(
            WindowAnalysis(
                index=index,
                start=window_start / sample_rate,
                duration=window.shape[0] / sample_rate,
                num_samples=int(window.shape[0]),
                frame_count=frame_count,
                frequencies=frequencies,
            )
        )

    return windows


def pitch_events_from_windows(
    windows: list[WindowAnalysis],
    *,
    emit_rests: bool = False,
) -> list[PitchEvent]:
    """Reduce window analyses to pitch events.

    Windows without an in-band frequency are dropped, or become rests
    (``frequency=None``) when ``emit_rests`` is set.
    """
    events = []
    for window in windows:
        frequency = window.frequency
        if frequency is None and not emit_rests:
            continue
        events.append(
            PitchEvent(frequency=frequency, duration=window.duration, start=window.start)
        )
    return events


def aggregate_pitches(
    samples: np.ndarray,
    sample_rate: int,
    *,
    fft_size: int = 1024,
    aggregate_size: int | None = None,
    min_frequency: float = 20.0,
    max_frequency: float = 20000.0,
    emit_rests: bool = False,
) -> list[PitchEvent]:
    """Ordered pitch events for a whole recording.

    ``aggregate_size`` defaults to one second of audio (``sample_rate`` samples).
    """
    windows = analyze_windows(
        samples,
        sample_rate,
        fft_size=fft_size,
        aggregate_size=aggregate_size or sample_rate,
        min_frequency=min_frequency,
        max_frequency=max_frequency,
    )
    return pitch_events_from_windows(windows, emit_rests=emit_rests)
