"""
Global configuration, constants and defaults.

All magic numbers and default values live here.
Generator and CLI code imports from config — never hardcodes.
"""

from typing import Final

# ──────────────────────────────────────────────
# Signal Defaults
# ──────────────────────────────────────────────

DEFAULT_AMPLITUDE: Final[float] = 0.45
DEFAULT_SAMPLE_RATE: Final[int] = 44_100       # Hz
DEFAULT_DURATION_LONG: Final[str] = "30"       # sec
DEFAULT_DURATION_SHORT: Final[str] = "5"       # sec

DEFAULT_FREQUENCY: Final[int] = 440            # Hz
DEFAULT_SWEEP_LOW_FREQ: Final[int] = 20        # Hz
DEFAULT_SWEEP_HIGH_FREQ: Final[int] = 16_000   # Hz
DEFAULT_PWM_FREQUENCY: Final[int] = 1_000      # Hz
DEFAULT_PWM_DUTY_PERCENT: Final[int] = 50

CHANNEL_CHOICES: Final[list[str]] = ["L", "R", "LR"]
NOISE_COLORS: Final[list[str]] = ["white", "pink"]
TSP_TYPES: Final[list[str]] = ["linear", "log"]
TSP_DIRECTIONS: Final[list[str]] = ["up", "down"]
SWEEP_TYPES: Final[list[str]] = ["linear", "log"]

# ──────────────────────────────────────────────
# Taper Defaults
# ──────────────────────────────────────────────

DEFAULT_TAPER_LENGTH: Final[int] = 4096        # points, 0 disables
DEFAULT_WINDOW_TYPE: Final[str] = "linear"
WINDOW_TYPES: Final[list[str]] = ["linear", "hann", "cos", "blackman"]

# ──────────────────────────────────────────────
# TSP
# ──────────────────────────────────────────────

TSP_ROTATION_FRACTION: Final[float] = 0.75
LOG_TSP_MIN_SAMPLES: Final[int] = 32

# ──────────────────────────────────────────────
# WAV Output
# ──────────────────────────────────────────────

WAV_CHANNELS: Final[int] = 2                   # always stereo
WAV_BITS_PER_SAMPLE: Final[int] = 16
WAV_SUBTYPE: Final[str] = "PCM_16"
WAV_HEADER_SIZE: Final[int] = 44               # bytes
PCM16_MAX: Final[int] = 32_767
PCM16_MIN: Final[int] = -32_768
FILESIZE_WARN_BYTES: Final[int] = 1_000_000_000

# ──────────────────────────────────────────────
# Concatenation grammar
# ──────────────────────────────────────────────

CAT_KEYWORD: Final[str] = "cat"
OUTPUT_KEYWORD: Final[str] = "output"
