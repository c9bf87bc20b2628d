"""Tests for the spectral analyzer."""

import numpy as np
import pytest

from resynth.analysis.spectrum import dominant_frequency, magnitude_spectrum


class TestMagnitudeSpectrum:
    """Tests for magnitude_spectrum."""

    def test_length_matches_fft_size(self):
        """Spectrum has one magnitude per bin."""
        magnitudes = magnitude_spectrum(np.ones(100), 256)
        assert magnitudes.shape == (256,)
        assert np.all(magnitudes >= 0)

    def test_rejects_long_frame(self):
        """Frames longer than fft_size are rejected."""
        with pytest.raises(ValueError, match="fft_size"):
            magnitude_spectrum(np.zeros(2048), 1024)

    def test_rejects_multichannel_frame(self):
        """Frames must be 1-D."""
        with pytest.raises(ValueError, match="1-D"):
            magnitude_spectrum(np.zeros((512, 2)), 1024)


class TestDominantFrequency:
    """Tests for dominant_frequency."""

    def test_silence_is_zero_hz(self):
        """An all-zero frame reports the DC bin (0 Hz)."""
        assert dominant_frequency(np.zeros(1024), 44100, 1024) == 0.0

    def test_constant_signal_is_zero_hz(self):
        """A DC offset peaks at bin 0."""
        assert dominant_frequency(np.full(1024, 0.5), 44100, 1024) == 0.0

    def test_exact_bin_sine(self, sine):
        """A sine centered on a bin reports that bin's frequency exactly."""
        sample_rate = 8000
        frequency = 20 * sample_rate / 1024  # 156.25 Hz
        frame = sine(frequency, 1024, sample_rate)

        assert dominant_frequency(frame, sample_rate, 1024) == frequency

    def test_off_bin_sine_rounds_to_nearest_bin(self, sine):
        """440 Hz at 44.1 kHz falls closest to bin 10."""
        frame = sine(440.0, 1024, 44100)

        result = dominant_frequency(frame, 44100, 1024)

        assert result == 10 * 44100 / 1024
        assert abs(result - 440.0) < 44100 / 1024

    def test_short_frame_is_zero_padded(self, sine):
        """A partial frame is analyzed as if padded with zeros."""
        sample_rate = 8000
        frequency = 20 * sample_rate / 1024
        frame = sine(frequency, 512, sample_rate)

        assert dominant_frequency(frame, sample_rate, 1024) == frequency

    def test_never_reports_above_nyquist(self, sine):
        """Mirror bins above Nyquist are never chosen."""
        sample_rate = 8000
        for k in (1, 50, 300, 511):
            frame = sine(k * sample_rate / 1024, 1024, sample_rate)
            assert dominant_frequency(frame, sample_rate, 1024) <= sample_rate / 2

    def test_deterministic(self, sine):
        """Same frame, same answer."""
        frame = sine(523.25, 1024, 44100) + 0.1 * sine(1046.5, 1024, 44100)
        results = {dominant_frequency(frame, 44100, 1024) for _ in range(5)}
        assert len(results) == 1
