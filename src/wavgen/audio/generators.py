"""
Elementary generators — closed-form per-sample synthesis.

Sine, linear/log frequency sweeps, PWM pulse trains and silence.
Each returns a mono float64 buffer of exactly spec.sample_count samples.
Parameters are assumed pre-clamped by the caller.
"""

import numpy as np

from wavgen.errors import InvalidParameterError, NumericalDegeneracyError
from wavgen.models import SignalSpec
from wavgen.utils.units import round_half_up


def _time_axis(spec: SignalSpec) -> np.ndarray:
    """t[n] = n / sample_rate."""
    return np.arange(spec.sample_count, dtype=np.float64) / spec.sample_rate


def sine_wave(spec: SignalSpec, frequency: float) -> np.ndarray:
    """amplitude * sin(2π f n / fs)."""
    t = _time_axis(spec)
    return spec.amplitude * np.sin(2 * np.pi * frequency * t)


def linear_sweep(spec: SignalSpec, start_freq: float, end_freq: float) -> np.ndarray:
    """Sine whose instantaneous frequency moves linearly from start to end."""
    t = _time_axis(spec)
    rate = (end_freq - start_freq) / (2.0 * spec.duration)
    phase = 2 * np.pi * (start_freq * t + rate * t * t)
    return spec.amplitude * np.sin(phase)


def log_sweep(spec: SignalSpec, start_freq: float, end_freq: float) -> np.ndarray:
    """
    Exponential sweep: frequency grows by a constant ratio per second.

    With k = ln(end/start) / duration the phase is 2π·start·(e^{kt} − 1)/k.

    Raises:
        NumericalDegeneracyError: If either frequency is not positive.
    """
    if start_freq <= 0 or end_freq <= 0:
        raise NumericalDegeneracyError(
            f"Log sweep needs positive frequencies, got {start_freq} -> {end_freq}"
        )

    t = _time_axis(spec)
    k = np.log(end_freq / start_freq) / spec.duration

    if k == 0.0:
        # start == end: the limit k -> 0 is a plain sine
        phase = 2 * np.pi * start_freq * t
    else:
        phase = 2 * np.pi * start_freq * np.expm1(k * t) / k

    return spec.amplitude * np.sin(phase)


def pwm_wave(spec: SignalSpec, frequency: float, duty_percent: float) -> np.ndarray:
    """
    Rectangular pulse train between 0 and amplitude.

    The period is sample_rate // frequency samples; the first
    round(period * duty / 100) of each period are high. The last
    partial period is truncated.
    """
    if frequency <= 0:
        raise InvalidParameterError(f"PWM frequency must be positive, got {frequency}")

    n = spec.sample_count
    period = max(int(spec.sample_rate // frequency), 1)
    high = min(round_half_up(period * duty_percent / 100.0), period)

    pattern = np.zeros(period, dtype=np.float64)
    pattern[:high] = spec.amplitude

    repeats = -(-n // period)  # ceil
    return np.tile(pattern, repeats)[:n]


def zeros(spec: SignalSpec) -> np.ndarray:
    """Silence."""
    return np.zeros(spec.sample_count, dtype=np.float64)
