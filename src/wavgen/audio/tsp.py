"""
Minimum-phase TSP (Time-Stretched Pulse) generator.

The pulse is specified in the frequency domain as a flat (linear) or 1/sqrt(k)
(log) magnitude with a quadratic or k·ln(k) phase ramp, then brought to
the time domain with one inverse DFT.

Pipeline (shared by both spectrum shapes):
1. N = next power of two >= 2 * sample_count, J = N / 2
2. Build bins 0..J with a spectrum strategy
3. Mirror bins 1..J-1 as complex conjugates into N-1..J+1
4. Inverse DFT, keep the real part
5. Normalize peak to amplitude
6. Rotate by round(0.75 N): right for up-chirp, left for down-chirp
7. Truncate to sample_count
"""

import logging
from typing import Callable

import numpy as np

from wavgen.audio import spectral
from wavgen.config import LOG_TSP_MIN_SAMPLES, TSP_ROTATION_FRACTION
from wavgen.errors import NumericalDegeneracyError
from wavgen.models import SignalSpec, Tsp
from wavgen.utils.units import round_half_up

logger = logging.getLogger(__name__)

# (n_fft, sign) -> bins 0..J of the half spectrum
SpectrumBuilder = Callable[[int, int], np.ndarray]


def working_length(sample_count: int) -> int:
    """Double-length power of two so the rotated pulse does not wrap."""
    return spectral.next_power_of_two(2 * sample_count)


def linear_spectrum(n_fft: int, sign: int) -> np.ndarray:
    """Flat magnitude, quadratic phase: exp(i·sign·2π·J·(k/N)²)."""
    j = n_fft // 2
    k = np.arange(j + 1, dtype=np.float64)
    return np.exp(1j * sign * 2 * np.pi * j * (k / n_fft) ** 2)


def log_spectrum(n_fft: int, sign: int) -> np.ndarray:
    """Magnitude 1/sqrt(k), phase sign·a·k·ln(k); bin 0 is 1."""
    j = n_fft // 2
    half = n_fft / 2
    if half <= 1:
        raise NumericalDegeneracyError(
            f"Log TSP needs N/2 > 1 for ln(N/2) to be non-zero, got N={n_fft}"
        )

    a = (j * np.pi) / (half * np.log(half))
    k = np.arange(1, j + 1, dtype=np.float64)

    bins = np.empty(j + 1, dtype=np.complex128)
    bins[0] = 1.0
    bins[1:] = np.exp(1j * sign * a * k * np.log(k)) / np.sqrt(k)
    return bins


SPECTRUM_BUILDERS: dict[str, SpectrumBuilder] = {
    "linear": linear_spectrum,
    "log": log_spectrum,
}


def tsp_pulse(
    sample_count: int,
    build_spectrum: SpectrumBuilder,
    sign: int,
    amplitude: float,
) -> np.ndarray:
    """
    Full working-length TSP after normalization and rotation.

    Returns a buffer of working_length(sample_count) samples; callers
    that need the requested length slice it (see generate_tsp).
    """
    n_fft = working_length(sample_count)
    j = n_fft // 2

    spectrum = np.zeros(n_fft, dtype=np.complex128)
    spectrum[: j + 1] = build_spectrum(n_fft, sign)

    # Conjugate symmetry -> real-valued time signal
    if j > 1:
        spectrum[n_fft - j + 1:] = np.conj(spectrum[1:j][::-1])

    pulse = spectral.inverse(spectrum).real
    pulse = spectral.normalize_peak(pulse, amplitude)

    shift = round_half_up(TSP_ROTATION_FRACTION * n_fft)
    if sign > 0:
        pulse = np.roll(pulse, shift)
    else:
        pulse = np.roll(pulse, -shift)

    return pulse


def generate_tsp(spec: SignalSpec, kind: Tsp) -> np.ndarray:
    """
    Generate a TSP of exactly spec.sample_count samples (untapered).

    Raises:
        NumericalDegeneracyError: For a log TSP shorter than LOG_TSP_MIN_SAMPLES.
    """
    n = spec.sample_count
    if n == 0:
        return np.zeros(0, dtype=np.float64)

    if kind.tsp_type == "log" and n < LOG_TSP_MIN_SAMPLES:
        raise NumericalDegeneracyError(
            f"Log TSP needs at least {LOG_TSP_MIN_SAMPLES} samples, got {n}"
        )

    builder = SPECTRUM_BUILDERS[kind.tsp_type]
    pulse = tsp_pulse(n, builder, kind.sign, spec.amplitude)

    logger.debug(
        "TSP %s/%s: %d samples from working length %d",
        kind.tsp_type, kind.direction, n, len(pulse),
    )
    return pulse[:n]
