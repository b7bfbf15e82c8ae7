"""Tests for WAV concatenation (cat grammar)."""

import numpy as np
import pytest

from wavgen.concat import concatenate, parse_input_files, split_wav_args
from wavgen.errors import ConcatError, WavFileError

HALF = 16383 / 32767  # 0.5 after a PCM16 round trip


class TestSplitArgs:
    def test_without_commands(self) -> None:
        assert split_wav_args(["a.wav", "b.wav", "cat", "output", "o.wav"]) == (
            ["a.wav", "b.wav"],
            None,
            "o.wav",
        )

    def test_with_commands(self) -> None:
        inputs, commands, out = split_wav_args(["a.wav", "cat", "1", "500m", "output", "o.wav"])
        assert inputs == ["a.wav"]
        assert commands == ["1", "500m"]
        assert out == "o.wav"

    def test_missing_cat(self) -> None:
        with pytest.raises(ConcatError, match="cat command not given"):
            split_wav_args(["a.wav", "output", "o.wav"])

    def test_missing_output(self) -> None:
        with pytest.raises(ConcatError, match="output command not given"):
            split_wav_args(["a.wav", "cat", "1"])

    def test_missing_output_name(self) -> None:
        with pytest.raises(ConcatError, match="output filename is not given"):
            split_wav_args(["a.wav", "cat", "output"])


class TestParseInputFiles:
    def test_positional_and_keyed(self, make_wav) -> None:
        a = make_wav("a.wav", 10)
        b = make_wav("b.wav", 10)
        files = parse_input_files([str(a), f"intro={b}"])
        assert list(files) == ["0", "intro"]
        assert files["intro"] == b

    def test_empty(self) -> None:
        with pytest.raises(ConcatError):
            parse_input_files([])

    def test_unknown_plain_name(self, tmp_path) -> None:
        with pytest.raises(ConcatError, match="File not found"):
            parse_input_files([str(tmp_path / "nope.wav")])

    def test_keyed_missing_file(self, tmp_path) -> None:
        with pytest.raises(WavFileError, match="not found"):
            parse_input_files([f"k={tmp_path / 'nope.wav'}"])

    def test_keyed_wrong_extension(self, tmp_path) -> None:
        with pytest.raises(WavFileError, match=".wav extension"):
            parse_input_files([f"k={tmp_path / 'a.mp3'}"])


class TestConcatenate:
    def test_back_to_back(self, make_wav) -> None:
        files = parse_input_files([str(make_wav("a.wav", 100)), str(make_wav("b.wav", 50, value=-0.5))])
        frames, info = concatenate(files)
        assert frames.shape == (150, 2)
        assert info.sample_rate == 8000
        np.testing.assert_allclose(frames[:100], HALF)
        np.testing.assert_allclose(frames[100:], -HALF)

    def test_positional_gap(self, make_wav) -> None:
        files = parse_input_files([str(make_wav("a.wav", 100)), str(make_wav("b.wav", 50))])
        frames, _ = concatenate(files, ["1"])
        assert len(frames) == 100 + 8000 + 50
        assert not np.any(frames[100:8100])
        np.testing.assert_allclose(frames[8100:], HALF)

    def test_positional_multiple_gaps(self, make_wav) -> None:
        files = parse_input_files([
            str(make_wav("a.wav", 10)),
            str(make_wav("b.wav", 20)),
            str(make_wav("c.wav", 30)),
        ])
        frames, _ = concatenate(files, ["500m", "250m"])
        assert len(frames) == 10 + 4000 + 20 + 2000 + 30

    def test_positional_trailing_gap(self, make_wav) -> None:
        files = parse_input_files([str(make_wav("a.wav", 10))])
        frames, _ = concatenate(files, ["100m", "100m"])
        # a, 800 zeros, then a gap with no file left
        assert len(frames) == 10 + 800 + 800

    def test_key_mode(self, make_wav) -> None:
        a = make_wav("a.wav", 100)
        b = make_wav("b.wav", 50, value=-0.5)
        files = parse_input_files([f"x={a}", f"y={b}"])
        frames, _ = concatenate(files, ["y", "500m", "x"])
        assert len(frames) == 50 + 4000 + 100
        np.testing.assert_allclose(frames[:50], -HALF)
        assert not np.any(frames[50:4050])
        np.testing.assert_allclose(frames[4050:], HALF)

    def test_key_mode_repeats(self, make_wav) -> None:
        files = parse_input_files([f"x={make_wav('a.wav', 10)}"])
        frames, _ = concatenate(files, ["x", "x", "x"])
        assert len(frames) == 30

    def test_unknown_key(self, make_wav) -> None:
        files = parse_input_files([f"x={make_wav('a.wav', 10)}"])
        with pytest.raises(ConcatError, match="key: \\[z\\] is not found"):
            concatenate(files, ["z"])

    def test_sample_rate_mismatch(self, make_wav) -> None:
        files = parse_input_files([
            str(make_wav("a.wav", 10, sample_rate=8000)),
            str(make_wav("b.wav", 10, sample_rate=16000)),
        ])
        with pytest.raises(ConcatError, match="sample rate"):
            concatenate(files)

    def test_channel_mismatch(self, make_wav) -> None:
        files = parse_input_files([
            str(make_wav("a.wav", 10, channels=2)),
            str(make_wav("b.wav", 10, channels=1)),
        ])
        with pytest.raises(ConcatError, match="channels"):
            concatenate(files)
