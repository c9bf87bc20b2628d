"""Reading and writing sample streams with soundfile."""

from pathlib import Path

import numpy as np
import soundfile as sf

from resynth.errors import InputError
from resynth.models.audio import AudioFormat, SampleStream

SUPPORTED_SUBTYPES = {"PCM_S8", "PCM_U8", "PCM_16", "PCM_24", "PCM_32", "FLOAT", "DOUBLE"}


def read_audio_format(path: Path) -> AudioFormat:
    """Read the container descriptor of an audio file without decoding it."""
    if not path.exists():
        raise InputError(f"File not found: {path}")

    try:
        info = sf.info(str(path))
    except RuntimeError as e:
        raise InputError(f"Could not read audio file {path}: {e}") from e

    if info.subtype not in SUPPORTED_SUBTYPES:
        raise InputError(
            f"Unsupported sample format: {info.subtype}. "
            f"Supported: {', '.join(sorted(SUPPORTED_SUBTYPES))}"
        )

    return AudioFormat(
        sample_rate=int(info.samplerate),
        channels=int(info.channels),
        subtype=info.subtype,
        container=info.format,
    )


def read_sample_stream(path: Path) -> SampleStream:
    """Decode an audio file into a mono SampleStream.

    Multi-channel files are averaged down to one channel for analysis; the
    original channel count is kept in the stream's format for output.

    Raises:
        InputError: If the file is missing, corrupt or in an unsupported format.
    """
    audio_format = read_audio_format(path)

    try:
        data, _ = sf.read(str(path), dtype="float64", always_2d=True)
    except RuntimeError as e:
        raise InputError(f"Could not decode audio file {path}: {e}") from e

    samples = data.mean(axis=1) if data.shape[1] > 1 else data[:, 0]
    return SampleStream(samples=samples, audio_format=audio_format)


def write_sample_stream(path: Path, samples: np.ndarray, audio_format: AudioFormat) -> None:
    """Encode mono ``samples`` using ``audio_format``.

    The mono signal is copied to every channel of the format and clipped to
    [-1.0, 1.0] before encoding.
    """
    mono = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    if audio_format.channels > 1:
        data = np.repeat(mono[:, np.newaxis], audio_format.channels, axis=1)
    else:
        data = mono

    path.parent.mkdir(parents=True, exist_ok=True)
    sf.write(
        str(path),
        data,
        audio_format.sample_rate,
        subtype=audio_format.subtype,
        format=audio_format.container,
    )
