"""
WAV concatenation — the `wavgen wav ... cat ... output ...` grammar.

    wavgen wav a.wav b.wav cat 1.5 output joined.wav
    wavgen wav intro=a.wav body=b.wav cat intro 500m body intro output out.wav

Inputs are either existing .wav paths (keyed by position) or key=path
pairs. With no cat commands the files are joined back to back. A command
starting with a digit is a silence gap (any duration accepted by
parse_duration); anything else is a file key. If no command is a key,
numeric commands interleave positionally: file i, then gap i, and any
remaining files follow at the end.
"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np

from wavgen.config import CAT_KEYWORD, OUTPUT_KEYWORD
from wavgen.errors import ConcatError, WavFileError
from wavgen.utils.naming import ensure_wav_name
from wavgen.utils.units import parse_duration, round_half_up
from wavgen.wavio import WavInfo, read_wav

logger = logging.getLogger(__name__)


def split_wav_args(args: list[str]) -> tuple[list[str], Optional[list[str]], str]:
    """
    Split raw arguments into (inputs, cat commands or None, output filename).

    Raises:
        ConcatError: If 'cat', 'output' or the output filename is missing.
    """
    try:
        cat_idx = args.index(CAT_KEYWORD)
    except ValueError:
        raise ConcatError("cat command not given") from None

    inputs = args[:cat_idx]
    rest = args[cat_idx + 1:]

    try:
        out_idx = rest.index(OUTPUT_KEYWORD)
    except ValueError:
        raise ConcatError("output command not given") from None

    commands = rest[:out_idx]
    if out_idx + 1 >= len(rest):
        raise ConcatError("output filename is not given.")

    return inputs, (commands or None), rest[out_idx + 1]


def parse_input_files(inputs: list[str]) -> dict[str, Path]:
    """
    Map keys to input paths, preserving order.

    An existing path is keyed by its position ('0', '1', ...);
    otherwise the argument must be key=path.
    """
    if not inputs:
        raise ConcatError("input filename is not given")

    files: dict[str, Path] = {}
    for i, arg in enumerate(inputs):
        if Path(arg).exists():
            ensure_wav_name(arg)
            files[str(i)] = Path(arg)
        elif "=" in arg:
            key, filename = arg.split("=", 1)
            ensure_wav_name(filename)
            if not Path(filename).exists():
                raise WavFileError(f"File [{filename}] not found.")
            files[key] = Path(filename)
        else:
            raise ConcatError(f"File not found [{arg}]")

    return files


def _is_gap(command: str) -> bool:
    return command[:1].isdigit()


class _Assembler:
    """Accumulates file and silence segments sharing one format."""

    def __init__(self, files: dict[str, Path]) -> None:
        self.files = files
        self.info: Optional[WavInfo] = None
        self.segments: list[np.ndarray] = []

    def _check_format(self, path: Path, info: WavInfo) -> None:
        if self.info is None:
            self.info = info
            return
        if info.sample_rate != self.info.sample_rate:
            raise ConcatError(
                f"[{path}] has sample rate {info.sample_rate} Hz, "
                f"expected {self.info.sample_rate} Hz"
            )
        if info.channels != self.info.channels:
            raise ConcatError(
                f"[{path}] has {info.channels} channels, expected {self.info.channels}"
            )

    def add_file(self, path: Path) -> None:
        frames, info = read_wav(path)
        self._check_format(path, info)
        self.segments.append(frames)
        logger.debug("cat: + %s (%d frames)", path, len(frames))

    def add_silence(self, seconds: float) -> None:
        if self.info is None:
            # Format comes from the first input even if nothing is appended yet
            first = next(iter(self.files.values()))
            _, self.info = read_wav(first)
        n = round_half_up(seconds * self.info.sample_rate)
        self.segments.append(np.zeros((n, self.info.channels), dtype=np.float64))
        logger.debug("cat: + %.3fs silence (%d frames)", seconds, n)

    def result(self) -> tuple[np.ndarray, WavInfo]:
        if self.info is None:
            raise ConcatError("nothing to concatenate")
        return np.concatenate(self.segments, axis=0), self.info


def concatenate(
    files: dict[str, Path],
    commands: Optional[list[str]] = None,
) -> tuple[np.ndarray, WavInfo]:
    """
    Join input files and silence gaps per the cat commands.

    Returns:
        (frames, info): float frames of shape (n, ch) and the shared format.
    """
    if not files:
        raise ConcatError("input filename is not given")

    asm = _Assembler(files)
    paths = list(files.values())

    if not commands:
        for path in paths:
            asm.add_file(path)
        return asm.result()

    key_mode = any(not _is_gap(cmd) for cmd in commands)

    for i, cmd in enumerate(commands):
        if _is_gap(cmd):
            gap = parse_duration(cmd)
            if not key_mode and i < len(paths):
                asm.add_file(paths[i])
            asm.add_silence(gap)
        else:
            if cmd not in files:
                raise ConcatError(f"key: [{cmd}] is not found")
            asm.add_file(files[cmd])

    if not key_mode:
        for path in paths[len(commands):]:
            asm.add_file(path)

    return asm.result()
