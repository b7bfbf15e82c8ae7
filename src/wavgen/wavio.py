"""
WAV container codec — 16-bit PCM read/write via soundfile.

Float samples in [-1, 1] are quantized by scaling with the int16 maximum,
clamping and truncating toward zero. Reading reverses the scale.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import soundfile as sf

from wavgen.config import (
    PCM16_MAX,
    PCM16_MIN,
    WAV_BITS_PER_SAMPLE,
    WAV_HEADER_SIZE,
    WAV_SUBTYPE,
)
from wavgen.errors import WavFileError
from wavgen.models import ChannelMask
from wavgen.utils.naming import ensure_wav_name

logger = logging.getLogger(__name__)


@dataclass
class WavInfo:
    """Format of a WAV file on disk."""

    sample_rate: int
    channels: int


def quantize(samples: np.ndarray) -> np.ndarray:
    """Float [-1, 1] -> int16, truncating toward zero."""
    scaled = np.clip(np.asarray(samples, dtype=np.float64) * PCM16_MAX, PCM16_MIN, PCM16_MAX)
    return np.trunc(scaled).astype(np.int16)


def to_stereo(samples: np.ndarray, channels: ChannelMask) -> np.ndarray:
    """Duplicate a mono buffer into (n, 2) frames, silencing disabled channels."""
    left = samples if channels.enable_left else np.zeros_like(samples)
    right = samples if channels.enable_right else np.zeros_like(samples)
    return np.column_stack([left, right])


def estimate_size(n_frames: int, channels: int) -> int:
    """Approximate file size in bytes for 16-bit PCM."""
    return WAV_HEADER_SIZE + n_frames * channels * (WAV_BITS_PER_SAMPLE // 8)


def write_wav(path: Path, frames: np.ndarray, sample_rate: int) -> None:
    """
    Write float frames as a 16-bit PCM WAV file.

    Args:
        path: Destination (must end in .wav).
        frames: (n,) mono or (n, ch) multi-channel float samples.
        sample_rate: Sample rate in Hz.
    """
    ensure_wav_name(str(path))

    data = quantize(frames)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    sf.write(str(path), data, sample_rate, subtype=WAV_SUBTYPE)

    logger.info("Wrote %s (%d frames @ %d Hz)", path, len(data), sample_rate)


def read_wav(path: Path) -> tuple[np.ndarray, WavInfo]:
    """
    Read a WAV file as float frames.

    Returns:
        (frames, info) where frames has shape (n, ch) and values int16 / 32767.

    Raises:
        WavFileError: If the file is missing, not .wav, or unreadable.
    """
    ensure_wav_name(str(path))
    if not Path(path).exists():
        raise WavFileError(f"File [{path}] not found.")

    try:
        data, rate = sf.read(str(path), dtype="int16", always_2d=True)
    except RuntimeError as e:
        # soundfile raises LibsndfileError (a RuntimeError) for bad containers
        raise WavFileError(f"Cannot read [{path}]: {e}") from e

    frames = data.astype(np.float64) / PCM16_MAX
    return frames, WavInfo(sample_rate=int(rate), channels=data.shape[1])
