"""Shared test fixtures for wavgen."""

import sys
from pathlib import Path

import numpy as np
import pytest
from click.testing import CliRunner

# Fix ModuleNotFoundError when running locally without editable install
sys.path.insert(0, str(Path(__file__).parents[1] / "src"))

from wavgen.models import SignalSpec, TaperSpec, WindowShape  # noqa: E402
from wavgen.wavio import write_wav  # noqa: E402


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source so noise tests are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def base_spec() -> SignalSpec:
    """One second at 8 kHz, full scale, no taper."""
    return SignalSpec(amplitude=1.0, sample_rate=8000, duration=1.0)


@pytest.fixture
def short_taper() -> TaperSpec:
    return TaperSpec(shape=WindowShape.HANN, length=256)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Run each CLI test inside a temp directory.

    Generated filenames are relative, so this keeps tests off the real cwd.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_wav(tmp_path: Path):
    """Factory writing a constant-valued stereo WAV and returning its path."""

    def _make(name: str, n_frames: int, value: float = 0.5, sample_rate: int = 8000, channels: int = 2) -> Path:
        path = tmp_path / name
        frames = np.full((n_frames, channels), value, dtype=np.float64)
        write_wav(path, frames, sample_rate)
        return path

    return _make
