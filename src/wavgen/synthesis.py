"""
Synthesis dispatcher — WaveformKind -> generator + taper policy.

Single entry point for the engine. Each waveform variant maps to one
generator function and one tapering policy in a fixed dispatch table.
"""

import logging
from enum import Enum
from typing import Callable, Optional

import numpy as np

from wavgen.audio.generators import linear_sweep, log_sweep, pwm_wave, sine_wave, zeros
from wavgen.audio.noise import pink_noise, white_noise
from wavgen.audio.taper import apply_taper
from wavgen.audio.tsp import generate_tsp
from wavgen.errors import InvalidParameterError, MissingTaperError
from wavgen.models import (
    Noise,
    Pwm,
    SignalSpec,
    Sine,
    Sweep,
    Tsp,
    WaveformKind,
    Zeros,
)

logger = logging.getLogger(__name__)


class TaperPolicy(str, Enum):
    """How the dispatcher tapers a generator's raw output."""

    BOTH = "both"                            # both edges, if a taper is given
    TRAILING = "trailing"                    # trailing edge, if a taper is given
    REQUIRED_TRAILING = "required_trailing"  # trailing edge, taper mandatory
    NONE = "none"                            # never taper


Generator = Callable[[WaveformKind, SignalSpec, np.random.Generator], np.ndarray]


def _gen_sine(kind: Sine, spec: SignalSpec, rng: np.random.Generator) -> np.ndarray:
    return sine_wave(spec, kind.frequency)


def _gen_noise(kind: Noise, spec: SignalSpec, rng: np.random.Generator) -> np.ndarray:
    if kind.color == "pink":
        return pink_noise(spec, rng)
    return white_noise(spec, rng)


def _gen_tsp(kind: Tsp, spec: SignalSpec, rng: np.random.Generator) -> np.ndarray:
    return generate_tsp(spec, kind)


def _gen_sweep(kind: Sweep, spec: SignalSpec, rng: np.random.Generator) -> np.ndarray:
    if kind.sweep_type == "log":
        return log_sweep(spec, kind.start_freq, kind.end_freq)
    return linear_sweep(spec, kind.start_freq, kind.end_freq)


def _gen_pwm(kind: Pwm, spec: SignalSpec, rng: np.random.Generator) -> np.ndarray:
    return pwm_wave(spec, kind.frequency, kind.duty_percent)


def _gen_zeros(kind: Zeros, spec: SignalSpec, rng: np.random.Generator) -> np.ndarray:
    return zeros(spec)


DISPATCH: dict[type, tuple[Generator, TaperPolicy]] = {
    Sine: (_gen_sine, TaperPolicy.BOTH),
    Noise: (_gen_noise, TaperPolicy.BOTH),
    Pwm: (_gen_pwm, TaperPolicy.BOTH),
    Sweep: (_gen_sweep, TaperPolicy.TRAILING),
    Tsp: (_gen_tsp, TaperPolicy.REQUIRED_TRAILING),
    Zeros: (_gen_zeros, TaperPolicy.NONE),
}


def taper_policy(kind: WaveformKind) -> TaperPolicy:
    """Look up the tapering policy for a waveform variant."""
    try:
        return DISPATCH[type(kind)][1]
    except KeyError:
        raise InvalidParameterError(f"Unknown waveform kind: {type(kind).__name__}") from None


def synthesize(
    kind: WaveformKind,
    spec: SignalSpec,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Generate one mono sample buffer.

    Args:
        kind: Waveform variant and its family-specific parameters.
        spec: Shared signal description (amplitude, rate, duration, taper).
        rng: Random source for noise; a fresh default_rng() if omitted.

    Returns:
        float64 array of exactly spec.sample_count samples in [-amplitude, amplitude].

    Raises:
        InvalidParameterError: Unknown variant or bad parameter.
        MissingTaperError: TSP requested without a taper.
        NumericalDegeneracyError: Log of a non-positive value / too-short log TSP.
        TaperError: Taper window does not fit the buffer.
    """
    try:
        generator, policy = DISPATCH[type(kind)]
    except KeyError:
        raise InvalidParameterError(f"Unknown waveform kind: {type(kind).__name__}") from None

    taper = spec.taper
    if policy == TaperPolicy.REQUIRED_TRAILING and (taper is None or taper.length == 0):
        raise MissingTaperError(
            f"{type(kind).__name__} requires a trailing taper; none was given"
        )

    if rng is None:
        rng = np.random.default_rng()

    samples = generator(kind, spec, rng)

    if taper is not None and policy != TaperPolicy.NONE:
        edges = "both" if policy == TaperPolicy.BOTH else "trailing"
        samples = apply_taper(samples, taper.shape, taper.length, edges)

    logger.debug(
        "Synthesized %s: %d samples @ %d Hz (taper=%s)",
        kind, len(samples), spec.sample_rate, policy.value,
    )
    return samples
