"""Spectral analyzer - dominant frequency of a single analysis frame."""

import numpy as np


def magnitude_spectrum(frame: np.ndarray, fft_size: int) -> np.ndarray:
    """Magnitude of the FFT of ``frame`` zero-padded to ``fft_size`` bins.

    Args:
        frame: Real samples, at most ``fft_size`` long.
        fft_size: Transform length.

    Returns:
        Array of ``fft_size`` non-negative magnitudes, one per bin.
    """
    frame = np.asarray(frame, dtype=np.float64)
    if frame.ndim != 1:
        raise ValueError(f"Analysis frame must be 1-D, got shape {frame.shape}")
    if frame.shape[0] > fft_size:
        raise ValueError(
            f"Analysis frame has {frame.shape[0]} samples, more than fft_size={fft_size}"
        )

    buffer = np.zeros(fft_size, dtype=np.complex128)
    buffer[: frame.shape[0]] = frame

    return np.abs(np.fft.fft(buffer))


def dominant_frequency(frame: np.ndarray, sample_rate: int, fft_size: int) -> float:
    """Frequency (Hz) of the bin with the greatest magnitude.

    Ties resolve to the lowest bin. A silent frame reports 0 Hz, which the
    aggregator's band filter discards.
    """
    magnitudes = magnitude_spectrum(frame, fft_size)
    # Real input: bins above Nyquist mirror the lower half, so the first
    # maximum is always at or below fft_size // 2.
    peak_bin = int(np.argmax(magnitudes[: fft_size // 2 + 1]))
    return peak_bin * sample_rate / fft_size
