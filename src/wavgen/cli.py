"""
wavgen CLI — Click command groups.

Commands:
  gen    sine | noise | tsp | sweep | pwm | zeros  (write a test-signal WAV)
  taper  fade both edges of an existing WAV
  wav    concatenate WAV files with silence gaps (cat grammar)
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click
import numpy as np

from wavgen import __version__
from wavgen.config import (
    CHANNEL_CHOICES,
    DEFAULT_AMPLITUDE,
    DEFAULT_DURATION_LONG,
    DEFAULT_DURATION_SHORT,
    DEFAULT_FREQUENCY,
    DEFAULT_PWM_DUTY_PERCENT,
    DEFAULT_PWM_FREQUENCY,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_SWEEP_HIGH_FREQ,
    DEFAULT_SWEEP_LOW_FREQ,
    DEFAULT_TAPER_LENGTH,
    DEFAULT_WINDOW_TYPE,
    FILESIZE_WARN_BYTES,
    NOISE_COLORS,
    SWEEP_TYPES,
    TSP_DIRECTIONS,
    TSP_TYPES,
    WAV_CHANNELS,
    WINDOW_TYPES,
)
from wavgen.errors import WavGenError

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Main group
# ──────────────────────────────────────────────


@click.group()
@click.version_option(__version__, prog_name="wavgen")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """🔊 wavgen — Test-signal WAV generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ──────────────────────────────────────────────
# Shared helpers
# ──────────────────────────────────────────────


def _fail(e: Exception) -> None:
    click.secho(f"✗ {e}", fg="red")
    sys.exit(1)


def _clamped(label: str, value, lo, hi):
    """Clamp a user value, warning when it changes."""
    from wavgen.utils.units import clamp

    try:
        result = clamp(value, lo, hi)
    except WavGenError as e:
        _fail(e)
    if result != value:
        click.secho(f"⚠ {label} {value} out of range, using {result}", fg="yellow")
        logger.warning("%s clamped from %s to %s", label, value, result)
    return result


def _confirm_overwrite(filename: str) -> str:
    """Ask before replacing an existing file. Returns the status suffix."""
    if not Path(filename).exists():
        return ""
    if not click.confirm(f"Do you want to overwrite [{filename}]?", default=False):
        click.secho("✗ The operation was canceled by the user.", fg="red")
        sys.exit(1)
    return " (file override)"


def _confirm_size(n_frames: int, channels: int) -> None:
    """Ask before writing a file larger than FILESIZE_WARN_BYTES."""
    from wavgen.wavio import estimate_size

    size = estimate_size(n_frames, channels)
    if size <= FILESIZE_WARN_BYTES:
        return
    gb = size / 1024 / 1024 / 1024
    if not click.confirm(f"The output file size will be approximately {gb:.1f} GB. Proceed?", default=False):
        click.secho("✗ The operation was canceled by the user.", fg="red")
        sys.exit(1)


def _taper_from_options(length: int, window_type: str):
    from wavgen.models import TaperSpec, WindowShape

    if length <= 0:
        return None
    return TaperSpec(shape=WindowShape.parse(window_type), length=length)


# ──────────────────────────────────────────────
# Signal generation
# ──────────────────────────────────────────────


def _signal_options(default_duration: str) -> Callable:
    """Options shared by every `gen` waveform."""

    def decorator(f: Callable) -> Callable:
        options = [
            click.option("-d", "--duration", "duration_text", default=default_duration, show_default=True,
                         help="Duration: seconds, or with unit (500m, 2s, 1min, 1h)."),
            click.option("-a", "--amplitude", type=float, default=DEFAULT_AMPLITUDE, show_default=True,
                         help="Peak amplitude in [0, 1]."),
            click.option("-c", "--channels", type=click.Choice(CHANNEL_CHOICES), default="LR", show_default=True,
                         help="Which channels carry the signal."),
            click.option("-r", "--rate-of-sample", "sample_rate", type=int, default=DEFAULT_SAMPLE_RATE,
                         show_default=True, help="Sample rate in Hz."),
            click.option("-l", "--length-of-taper", "taper_length", type=int, default=DEFAULT_TAPER_LENGTH,
                         show_default=True, help="Taper length in samples (0 disables)."),
            click.option("-w", "--window-type", type=click.Choice(WINDOW_TYPES), default=DEFAULT_WINDOW_TYPE,
                         show_default=True, help="Taper window shape."),
            click.option("-o", "--output", "output_filename", default=None, help="Output filename (optional)."),
            click.option("--seed", type=int, default=None, help="Random seed (noise only)."),
        ]
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


def _generate(
    kind,
    sig_type: str,
    start_freq: int,
    end_freq: int,
    duration_text: str,
    amplitude: float,
    channels: str,
    sample_rate: int,
    taper_length: int,
    window_type: str,
    output_filename: Optional[str],
    seed: Optional[int],
) -> None:
    """Build the SignalSpec, synthesize, and write a stereo WAV."""
    from wavgen.models import ChannelMask, SignalSpec
    from wavgen.synthesis import synthesize
    from wavgen.utils.naming import ensure_wav_name, signal_file_name
    from wavgen.utils.units import parse_duration
    from wavgen.wavio import to_stereo, write_wav

    try:
        duration = parse_duration(duration_text)
        spec = SignalSpec(
            amplitude=_clamped("Amplitude", amplitude, 0.0, 1.0),
            sample_rate=sample_rate,
            duration=duration,
            channels=ChannelMask(channels),
            taper=_taper_from_options(taper_length, window_type),
        )

        filename = output_filename or signal_file_name(
            sig_type, start_freq, end_freq, duration_text, channels
        )
        ensure_wav_name(filename)
        override_msg = _confirm_overwrite(filename)
        _confirm_size(spec.sample_count, WAV_CHANNELS)

        samples = synthesize(kind, spec, np.random.default_rng(seed))
        write_wav(Path(filename), to_stereo(samples, spec.channels), spec.sample_rate)
    except WavGenError as e:
        _fail(e)
        return

    click.secho(f"✓ WAV file [{filename}] created successfully{override_msg}", fg="green")


@main.group()
def gen() -> None:
    """Generate a test-signal WAV file."""
    pass


@gen.command("sine")
@click.option("-f", "--frequency", type=int, default=DEFAULT_FREQUENCY, show_default=True,
              help="Frequency of the sine wave in Hz.")
@_signal_options(DEFAULT_DURATION_LONG)
def gen_sine(frequency: int, **opts) -> None:
    """Sine wave."""
    from wavgen.models import Sine

    frequency = _clamped("Frequency", frequency, 0, opts["sample_rate"] // 2)
    _generate(Sine(frequency=frequency), "sine", frequency, -1, **opts)


@gen.command("noise")
@click.option("-t", "--noise-type", type=click.Choice(NOISE_COLORS), default="white", show_default=True,
              help="Noise color.")
@_signal_options(DEFAULT_DURATION_LONG)
def gen_noise(noise_type: str, **opts) -> None:
    """White or pink noise."""
    from wavgen.models import Noise

    _generate(Noise(color=noise_type), f"{noise_type}_noise", -1, -1, **opts)


@gen.command("tsp")
@click.option("-t", "--tsp-type", type=click.Choice(TSP_TYPES), default="linear", show_default=True,
              help="Phase law of the pulse.")
@click.option("--direction", type=click.Choice(TSP_DIRECTIONS), default="up", show_default=True,
              help="Up-chirp or down-chirp.")
@_signal_options(DEFAULT_DURATION_SHORT)
def gen_tsp(tsp_type: str, direction: str, **opts) -> None:
    """TSP (Time-Stretched Pulse). Requires a taper."""
    from wavgen.models import Tsp

    _generate(Tsp(tsp_type=tsp_type, direction=direction), f"tsp_{tsp_type}_{direction}", -1, -1, **opts)


@gen.command("sweep")
@click.option("-t", "--type-of-sweep", "sweep_type", type=click.Choice(SWEEP_TYPES), default="linear",
              show_default=True, help="Frequency law of the sweep.")
@click.option("-s", "--startf", type=int, default=DEFAULT_SWEEP_LOW_FREQ, show_default=True,
              help="Start frequency in Hz.")
@click.option("-e", "--endf", type=int, default=DEFAULT_SWEEP_HIGH_FREQ, show_default=True,
              help="End frequency in Hz.")
@_signal_options(DEFAULT_DURATION_SHORT)
def gen_sweep(sweep_type: str, startf: int, endf: int, **opts) -> None:
    """Linear or logarithmic frequency sweep."""
    from wavgen.models import Sweep

    nyquist = opts["sample_rate"] // 2
    startf = _clamped("Start frequency", startf, 0, nyquist)
    endf = _clamped("End frequency", endf, 0, nyquist)
    kind = Sweep(sweep_type=sweep_type, start_freq=startf, end_freq=endf)
    _generate(kind, f"sweep_{sweep_type}", startf, endf, **opts)


@gen.command("pwm")
@click.option("-f", "--frequency", type=int, default=DEFAULT_PWM_FREQUENCY, show_default=True,
              help="Pulse frequency in Hz.")
@click.option("-p", "--percent-of-duty", "duty", type=int, default=DEFAULT_PWM_DUTY_PERCENT, show_default=True,
              help="Duty cycle in percent.")
@_signal_options(DEFAULT_DURATION_LONG)
def gen_pwm(frequency: int, duty: int, **opts) -> None:
    """PWM pulse train."""
    from wavgen.models import Pwm

    frequency = _clamped("Frequency", frequency, 1, opts["sample_rate"] // 2)
    duty = _clamped("Duty", duty, 0, 100)
    _generate(Pwm(frequency=frequency, duty_percent=duty), f"pwm_duty{duty}", frequency, -1, **opts)


@gen.command("zeros")
@_signal_options(DEFAULT_DURATION_SHORT)
def gen_zeros(**opts) -> None:
    """Silence."""
    from wavgen.models import Zeros

    _generate(Zeros(), "zeros", -1, -1, **opts)


# ──────────────────────────────────────────────
# Taper an existing file
# ──────────────────────────────────────────────


@main.command("taper")
@click.argument("input_file")
@click.option("-o", "--output", "output_filename", default=None,
              help="Output filename (default: <input>_tapered.wav).")
@click.option("--overwrite", is_flag=True, help="Write the result back over the input file.")
@click.option("-l", "--length-of-taper", "taper_length", type=int, default=DEFAULT_TAPER_LENGTH,
              show_default=True, help="Taper length in samples.")
@click.option("-w", "--window-type", type=click.Choice(WINDOW_TYPES), default=DEFAULT_WINDOW_TYPE,
              show_default=True, help="Taper window shape.")
def taper(
    input_file: str,
    output_filename: Optional[str],
    overwrite: bool,
    taper_length: int,
    window_type: str,
) -> None:
    """Apply fade-in and fade-out to every channel of a WAV file."""
    from wavgen.audio.taper import taper_channels
    from wavgen.models import TaperSpec, WindowShape
    from wavgen.utils.naming import ensure_wav_name, tapered_file_name
    from wavgen.wavio import read_wav, write_wav

    if overwrite and output_filename:
        _fail(click.UsageError("--output and --overwrite are mutually exclusive"))
        return
    if output_filename is not None and not output_filename:
        _fail(click.UsageError("The output filename is empty!"))
        return

    try:
        frames, info = read_wav(Path(input_file))

        if overwrite:
            filename = input_file
            if not click.confirm(f"Do you want to overwrite [{filename}]?", default=False):
                click.secho("✗ The operation was canceled by the user.", fg="red")
                sys.exit(1)
            override_msg = " (file override)"
        else:
            filename = output_filename or tapered_file_name(input_file)
            ensure_wav_name(filename)
            override_msg = _confirm_overwrite(filename)

        spec = TaperSpec(shape=WindowShape.parse(window_type), length=max(taper_length, 0))
        tapered = taper_channels(frames, spec)
        write_wav(Path(filename), tapered, info.sample_rate)
    except WavGenError as e:
        _fail(e)
        return

    click.secho(f"✓ WAV file [{filename}] created successfully{override_msg}", fg="green")


# ──────────────────────────────────────────────
# Concatenate files
# ──────────────────────────────────────────────


@main.command("wav", context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, required=True)
def wav(args: tuple[str, ...]) -> None:
    """
    Concatenate WAV files.

    \b
    wavgen wav a.wav b.wav cat output ab.wav
    wavgen wav a.wav b.wav cat 1 output ab_gap.wav
    wavgen wav x=a.wav y=b.wav cat x 500m y x output xyx.wav
    """
    from wavgen.concat import concatenate, parse_input_files, split_wav_args
    from wavgen.utils.naming import ensure_wav_name
    from wavgen.wavio import write_wav

    try:
        inputs, commands, output_filename = split_wav_args(list(args))
        files = parse_input_files(inputs)
        ensure_wav_name(output_filename)

        frames, info = concatenate(files, commands)

        override_msg = _confirm_overwrite(output_filename)
        _confirm_size(len(frames), info.channels)
        write_wav(Path(output_filename), frames, info.sample_rate)
    except WavGenError as e:
        _fail(e)
        return

    click.secho(f"✓ WAV file [{output_filename}] created successfully{override_msg}", fg="green")


if __name__ == "__main__":
    main()
