"""
Noise generators — white (uniform) and pink (1/f, shaped in frequency domain).

The random source is always passed in; nothing here touches global
random state, so tests can hand in a seeded numpy Generator.
"""

import numpy as np

from wavgen.audio import spectral
from wavgen.models import SignalSpec


def white_noise(spec: SignalSpec, rng: np.random.Generator) -> np.ndarray:
    """amplitude * U(-1, 1), i.i.d. per sample."""
    return spec.amplitude * rng.uniform(-1.0, 1.0, spec.sample_count)


def pink_scale(n_fft: int) -> np.ndarray:
    """
    Per-bin 1/sqrt(f) gains for an n_fft-point spectrum.

    Bin i and its mirror n_fft - i share the frequency index min(i, n_fft - i),
    so a conjugate-symmetric spectrum stays conjugate-symmetric. DC keeps gain 1.
    """
    bins = np.arange(n_fft)
    freq_index = np.minimum(bins, n_fft - bins)
    scale = np.ones(n_fft, dtype=np.float64)
    scale[1:] = 1.0 / np.sqrt(freq_index[1:])
    return scale


def pink_noise(spec: SignalSpec, rng: np.random.Generator) -> np.ndarray:
    """
    Pink noise via forward/inverse DFT with 1/sqrt(f) magnitude scaling.

    White noise is drawn at the next power-of-two length, transformed,
    scaled bin-by-bin, transformed back and truncated to sample_count.
    The DC bin is left untouched (1/sqrt(0) is undefined).
    """
    n = spec.sample_count
    if n == 0:
        return np.zeros(0, dtype=np.float64)

    n_fft = spectral.next_power_of_two(n)
    white = rng.uniform(-1.0, 1.0, n_fft)
    spectrum = spectral.forward(white)

    spectrum *= pink_scale(n_fft)

    pink = spectral.inverse(spectrum).real[:n]
    return spectral.normalize_peak(pink, spec.amplitude)

