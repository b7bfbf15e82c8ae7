"""
Signal data model — SignalSpec, TaperSpec and the WaveformKind variants.

A SignalSpec is shared by every waveform family; each WaveformKind variant
carries only the parameters specific to that family. All types are frozen:
a spec is built once per request and never mutated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Union

from wavgen.errors import InvalidParameterError
from wavgen.utils.units import round_half_up


class ChannelMask(str, Enum):
    """Which output channels carry the signal."""

    LEFT = "L"
    RIGHT = "R"
    BOTH = "LR"

    @property
    def enable_left(self) -> bool:
        return self in (ChannelMask.LEFT, ChannelMask.BOTH)

    @property
    def enable_right(self) -> bool:
        return self in (ChannelMask.RIGHT, ChannelMask.BOTH)


class WindowShape(str, Enum):
    """Fade ramp shapes understood by the taper."""

    LINEAR = "linear"
    HANN = "hann"
    COSINE = "cos"
    BLACKMAN = "blackman"

    @classmethod
    def parse(cls, name: str) -> "WindowShape":
        try:
            return cls(name.lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise InvalidParameterError(
                f"Unknown window type: {name}. Must be one of: {valid}"
            ) from None


@dataclass(frozen=True)
class TaperSpec:
    """Edge window descriptor: shape and length in samples."""

    shape: WindowShape = WindowShape.LINEAR
    length: int = 0

    def __post_init__(self) -> None:
        if self.length < 0:
            raise InvalidParameterError(f"Taper length must be >= 0, got {self.length}")


@dataclass(frozen=True)
class SignalSpec:
    """Complete numeric description of one synthesis request."""

    amplitude: float
    sample_rate: int
    duration: float                 # seconds
    channels: ChannelMask = ChannelMask.BOTH
    taper: Optional[TaperSpec] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.amplitude <= 1.0:
            raise InvalidParameterError(
                f"Amplitude must be within [0, 1], got {self.amplitude}"
            )
        if self.sample_rate <= 0:
            raise InvalidParameterError(
                f"Sample rate must be positive, got {self.sample_rate}"
            )
        if self.duration <= 0:
            raise InvalidParameterError(f"Duration must be positive, got {self.duration}")

    @property
    def sample_count(self) -> int:
        return round_half_up(self.duration * self.sample_rate)


# ──────────────────────────────────────────────
# Waveform variants
# ──────────────────────────────────────────────

NoiseColor = Literal["white", "pink"]
TspType = Literal["linear", "log"]
TspDirection = Literal["up", "down"]
SweepType = Literal["linear", "log"]


def _check_choice(label: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise InvalidParameterError(
            f"Unknown {label}: {value}. Must be one of: {', '.join(choices)}"
        )


@dataclass(frozen=True)
class Sine:
    frequency: float


@dataclass(frozen=True)
class Noise:
    color: NoiseColor = "white"

    def __post_init__(self) -> None:
        _check_choice("noise type", self.color, ("white", "pink"))


@dataclass(frozen=True)
class Tsp:
    tsp_type: TspType = "linear"
    direction: TspDirection = "up"

    def __post_init__(self) -> None:
        _check_choice("tsp type", self.tsp_type, ("linear", "log"))
        _check_choice("tsp direction", self.direction, ("up", "down"))

    @property
    def sign(self) -> int:
        """Phase sign: +1 for up-chirp, -1 for down-chirp."""
        return 1 if self.direction == "up" else -1


@dataclass(frozen=True)
class Sweep:
    sweep_type: SweepType = "linear"
    start_freq: float = 20.0
    end_freq: float = 16_000.0

    def __post_init__(self) -> None:
        _check_choice("sweep type", self.sweep_type, ("linear", "log"))


@dataclass(frozen=True)
class Pwm:
    frequency: float
    duty_percent: float = 50.0


@dataclass(frozen=True)
class Zeros:
    """Silence; carries no parameters."""


WaveformKind = Union[Sine, Noise, Tsp, Sweep, Pwm, Zeros]
