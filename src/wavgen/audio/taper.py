"""
Edge tapering — fade-in / fade-out windows to avoid clicks.

Ramps are built once per call with numpy and multiplied into a copy
of the buffer. Every weight lies in [0, 1], so tapering only attenuates.
"""

import logging
from typing import Literal

import numpy as np

from wavgen.errors import TaperError
from wavgen.models import TaperSpec, WindowShape

logger = logging.getLogger(__name__)

TaperEdges = Literal["both", "leading", "trailing"]


def fade_in_ramp(shape: WindowShape, length: int) -> np.ndarray:
    """Rising ramp w[i], i = 0..length-1, starting at 0."""
    x = np.arange(length, dtype=np.float64) / length

    if shape == WindowShape.LINEAR:
        ramp = x
    elif shape == WindowShape.HANN:
        ramp = 0.5 * (1.0 - np.cos(np.pi * x))
    elif shape == WindowShape.COSINE:
        ramp = np.sin(0.5 * np.pi * x)
    elif shape == WindowShape.BLACKMAN:
        ramp = 0.42 - 0.5 * np.cos(np.pi * x) + 0.08 * np.cos(2 * np.pi * x)
    else:
        raise TaperError(f"Unsupported window shape: {shape}")

    # Blackman dips a hair below zero at x=0 in floating point
    return np.clip(ramp, 0.0, 1.0)


def apply_taper(
    samples: np.ndarray,
    shape: WindowShape,
    length: int,
    edges: TaperEdges = "both",
) -> np.ndarray:
    """
    Apply an edge window to a mono buffer.

    Args:
        samples: Input buffer (not modified).
        shape: Ramp shape.
        length: Fade length in samples; 0 disables tapering.
        edges: 'both', 'leading' or 'trailing'.

    Returns:
        A new tapered buffer of the same length.

    Raises:
        TaperError: If the window does not fit in the buffer.
    """
    out = np.array(samples, dtype=np.float64, copy=True)
    n = len(out)

    if edges not in ("both", "leading", "trailing"):
        raise TaperError(f"Unknown taper edges: {edges}")
    if length < 0:
        raise TaperError(f"Taper length must be >= 0, got {length}")
    if length == 0:
        return out

    if edges == "both" and 2 * length > n:
        raise TaperError(
            f"Taper length {length} is longer than half the signal ({n} samples); "
            "fade-in and fade-out would overlap"
        )
    if length > n:
        raise TaperError(f"Taper length {length} is longer than the signal ({n} samples)")

    ramp = fade_in_ramp(shape, length)

    if edges in ("both", "leading"):
        out[:length] *= ramp
    if edges in ("both", "trailing"):
        out[n - length:] *= ramp[::-1]

    logger.debug("Applied %s taper (%d samples, %s edges)", shape.value, length, edges)
    return out


def taper_channels(frames: np.ndarray, taper: TaperSpec) -> np.ndarray:
    """Taper both edges of every channel of an (n, ch) frame array."""
    if frames.ndim == 1:
        return apply_taper(frames, taper.shape, taper.length, "both")

    columns = [
        apply_taper(frames[:, ch], taper.shape, taper.length, "both")
        for ch in range(frames.shape[1])
    ]
    return np.column_stack(columns)
