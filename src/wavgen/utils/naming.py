"""
Output filename derivation.

Generated files are named from their parameters, e.g.
``sine_440hz_30s.wav`` or ``sweep_log_20hz_to_16khz_5s_l_only.wav``.
"""

from pathlib import Path

from wavgen.errors import WavFileError


def ensure_wav_name(filename: str) -> str:
    """Reject names without a .wav extension."""
    if Path(filename).suffix != ".wav":
        raise WavFileError(f"The filename must have a .wav extension. [{filename}]")
    return filename


def freq_label(freq: int, prefix: str = "") -> str:
    """'_440hz', '_to_16khz'; empty for a negative (unused) frequency."""
    if freq < 0:
        return ""
    if freq < 1000:
        return f"_{prefix}{freq}hz"
    return f"_{prefix}{freq // 1000}khz"


def duration_label(duration_text: str) -> str:
    """'_30s', '_2min', '_1min30s' for whole seconds; '_<text>' otherwise."""
    try:
        seconds = int(duration_text)
    except ValueError:
        return f"_{duration_text}"

    if seconds >= 60:
        if seconds % 60 == 0:
            return f"_{seconds // 60}min"
        return f"_{seconds // 60}min{seconds % 60}s"
    return f"_{seconds}s"


def channel_label(channels: str) -> str:
    if channels == "L":
        return "_l_only"
    if channels == "R":
        return "_r_only"
    return ""


def signal_file_name(
    sig_type: str,
    start_freq: int,
    end_freq: int,
    duration_text: str,
    channels: str,
) -> str:
    """Build the default output name for a generated signal."""
    return (
        f"{sig_type}"
        f"{freq_label(start_freq)}"
        f"{freq_label(end_freq, 'to_')}"
        f"{duration_label(duration_text)}"
        f"{channel_label(channels)}.wav"
    )


def tapered_file_name(input_filename: str) -> str:
    """Default output name for `wavgen taper`: <stem>_tapered.wav."""
    return f"{Path(input_filename).stem}_tapered.wav"
