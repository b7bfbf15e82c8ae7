"""Tests for the minimum-phase TSP generator."""

import numpy as np
import pytest

from wavgen.audio.tsp import (
    generate_tsp,
    linear_spectrum,
    log_spectrum,
    tsp_pulse,
    working_length,
)
from wavgen.errors import NumericalDegeneracyError
from wavgen.models import SignalSpec, TaperSpec, Tsp, WindowShape
from wavgen.synthesis import synthesize


def _peak_to_sidelobe(x: np.ndarray) -> float:
    """Ratio of the largest |value| to the next largest."""
    mags = np.sort(np.abs(x))
    return mags[-1] / max(mags[-2], 1e-300)


def _circular_convolve(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.fft.ifft(np.fft.fft(a) * np.fft.fft(b)).real


def _peak_to_rms(x: np.ndarray) -> float:
    return np.max(np.abs(x)) / np.sqrt(np.mean(x ** 2))


class TestWorkingLength:
    @pytest.mark.parametrize("count, n_fft", [(1, 2), (1000, 2048), (1024, 2048), (1025, 4096)])
    def test_double_length_power_of_two(self, count: int, n_fft: int) -> None:
        assert working_length(count) == n_fft


class TestSpectrumBuilders:
    def test_linear_is_flat(self) -> None:
        bins = linear_spectrum(1024, 1)
        assert len(bins) == 513
        np.testing.assert_allclose(np.abs(bins), 1.0)
        assert bins[0] == 1.0

    def test_log_magnitude(self) -> None:
        bins = log_spectrum(1024, 1)
        assert bins[0] == 1.0
        k = np.arange(1, 513)
        np.testing.assert_allclose(np.abs(bins[1:]), 1.0 / np.sqrt(k))

    def test_direction_is_conjugate(self) -> None:
        np.testing.assert_allclose(linear_spectrum(256, -1), np.conj(linear_spectrum(256, 1)))
        np.testing.assert_allclose(log_spectrum(256, -1), np.conj(log_spectrum(256, 1)))

    def test_log_rejects_tiny_working_length(self) -> None:
        with pytest.raises(NumericalDegeneracyError):
            log_spectrum(2, 1)


class TestTspPulse:
    def test_peak_is_amplitude(self) -> None:
        pulse = tsp_pulse(1000, linear_spectrum, 1, 0.6)
        assert len(pulse) == 2048
        assert np.max(np.abs(pulse)) == pytest.approx(0.6)

    @pytest.mark.parametrize("builder", [linear_spectrum, log_spectrum])
    def test_down_is_time_reversed_up(self, builder) -> None:
        up = tsp_pulse(1000, builder, 1, 1.0)
        down = tsp_pulse(1000, builder, -1, 1.0)
        # down[n] == up[-n mod N]
        np.testing.assert_allclose(down, np.roll(up[::-1], 1), atol=1e-12)

    def test_up_down_pair_collapses_to_impulse(self, rng: np.random.Generator) -> None:
        up = tsp_pulse(1000, linear_spectrum, 1, 1.0)
        down = tsp_pulse(1000, linear_spectrum, -1, 1.0)
        response = _circular_convolve(up, down)

        assert np.argmax(np.abs(response)) == 0
        tsp_ratio = _peak_to_sidelobe(response)

        noise_a = rng.uniform(-1, 1, len(up))
        noise_b = rng.uniform(-1, 1, len(up))
        noise_ratio = _peak_to_sidelobe(_circular_convolve(noise_a, noise_b))

        assert tsp_ratio > 1e6
        assert tsp_ratio > 100 * noise_ratio

    def test_log_pair_is_zero_phase(self) -> None:
        """The log pair cancels its phase; what remains is the 1/k magnitude, peaking at lag 0."""
        up = tsp_pulse(1000, log_spectrum, 1, 1.0)
        down = tsp_pulse(1000, log_spectrum, -1, 1.0)
        response = _circular_convolve(up, down)

        assert np.argmax(np.abs(response)) == 0
        spectrum = np.fft.fft(response)
        assert np.max(np.abs(spectrum.imag)) < 1e-9
        assert np.min(spectrum.real) > -1e-9


class TestGenerateTsp:
    @pytest.mark.parametrize("duration", [0.125, 0.3, 1.0])
    @pytest.mark.parametrize("tsp_type", ["linear", "log"])
    @pytest.mark.parametrize("direction", ["up", "down"])
    def test_length_and_bounds(self, duration: float, tsp_type: str, direction: str) -> None:
        spec = SignalSpec(amplitude=0.5, sample_rate=8000, duration=duration)
        sig = generate_tsp(spec, Tsp(tsp_type=tsp_type, direction=direction))
        assert len(sig) == spec.sample_count
        assert np.all(np.isfinite(sig))
        assert np.max(np.abs(sig)) <= 0.5 + 1e-12

    def test_is_prefix_of_pulse(self) -> None:
        spec = SignalSpec(amplitude=1.0, sample_rate=8000, duration=0.125)
        sig = generate_tsp(spec, Tsp("linear", "up"))
        pulse = tsp_pulse(1000, linear_spectrum, 1, 1.0)
        np.testing.assert_array_equal(sig, pulse[:1000])

    def test_log_too_short_rejected(self) -> None:
        spec = SignalSpec(amplitude=1.0, sample_rate=1000, duration=0.02)  # 20 samples
        with pytest.raises(NumericalDegeneracyError, match="at least"):
            generate_tsp(spec, Tsp("log", "up"))

    def test_linear_short_is_fine(self) -> None:
        spec = SignalSpec(amplitude=1.0, sample_rate=1000, duration=0.002)  # 2 samples
        assert len(generate_tsp(spec, Tsp("linear", "up"))) == 2

    def test_empty_request(self) -> None:
        spec = SignalSpec(amplitude=1.0, sample_rate=1000, duration=0.0001)
        assert spec.sample_count == 0
        assert len(generate_tsp(spec, Tsp("linear", "up"))) == 0


class TestSynthesizedPair:
    """Pairs as returned to callers: truncated to sample_count and trailing-tapered."""

    def test_linear_pair_beats_noise(self, rng: np.random.Generator) -> None:
        spec = SignalSpec(
            amplitude=1.0,
            sample_rate=8000,
            duration=0.5,
            taper=TaperSpec(shape=WindowShape.HANN, length=64),
        )
        up = synthesize(Tsp("linear", "up"), spec)
        down = synthesize(Tsp("linear", "down"), spec)
        assert len(up) == len(down) == 4000
        tsp_ratio = _peak_to_rms(np.convolve(up, down))

        noise_a = rng.uniform(-1, 1, len(up))
        noise_b = rng.uniform(-1, 1, len(up))
        noise_ratio = _peak_to_rms(np.convolve(noise_a, noise_b))

        assert tsp_ratio > 1.5 * noise_ratio
