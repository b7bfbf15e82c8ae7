"""
Spectral primitive — forward/inverse DFT over power-of-two buffers.

Thin wrapper over numpy.fft. The inverse transform divides by N, so
inverse(forward(x)) == x up to floating-point error.
"""

import numpy as np

from wavgen.errors import InvalidParameterError


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


def _check_length(buffer: np.ndarray) -> None:
    if not is_power_of_two(len(buffer)):
        raise InvalidParameterError(
            f"Spectral buffers must have power-of-two length, got {len(buffer)}"
        )


def forward(buffer: np.ndarray) -> np.ndarray:
    """Unnormalized forward DFT of a (real or complex) buffer."""
    _check_length(buffer)
    return np.fft.fft(np.asarray(buffer, dtype=np.complex128))


def inverse(spectrum: np.ndarray) -> np.ndarray:
    """Inverse DFT, scaled by 1/N."""
    _check_length(spectrum)
    return np.fft.ifft(np.asarray(spectrum, dtype=np.complex128))


def normalize_peak(signal: np.ndarray, amplitude: float) -> np.ndarray:
    """Scale so the peak absolute value equals amplitude (silence stays silent)."""
    peak = np.max(np.abs(signal)) if len(signal) else 0.0
    if peak > 0:
        return signal / peak * amplitude
    return signal
