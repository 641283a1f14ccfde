"""Tests for PCM and delta modulation."""

import numpy as np
import pytest

from signal_scope.simulator.adc import delta_modulation, pcm, sample_times
from signal_scope.simulator.types import DeltaModulationConfig, PCMConfig


def _ys(points) -> np.ndarray:
  return np.array([p.y for p in points])


def _xs(points) -> np.ndarray:
  return np.array([p.x for p in points])


class TestSampleTimes:
  """Tests for converter tick generation."""

  def test_includes_duration_when_on_grid(self) -> None:
    """Test that a tick landing on the end time is kept."""
    ticks = sample_times(4.0, 2.0)
    np.testing.assert_array_equal(ticks, np.arange(9) * 0.25)

  def test_stops_before_duration(self) -> None:
    """Test that ticks past the end are dropped."""
    ticks = sample_times(10.0, 1.99)
    expected_ticks = 20
    assert len(ticks) == expected_ticks
    assert ticks[-1] == 1.9

  def test_slow_rate(self) -> None:
    """Test a rate slower than one tick per window."""
    np.testing.assert_array_equal(sample_times(0.1, 1.99), [0.0])


class TestPCM:
  """Tests for pulse-code modulation."""

  def test_two_levels_reconstruct_to_peaks(self) -> None:
    """Test that a 1-bit quantizer only outputs +amplitude or -amplitude."""
    amplitude = 2.5
    result = pcm(3.0, amplitude, PCMConfig(sampling_rate=37.0, quantization_levels=2))
    assert result.ok
    assert set(_ys(result.output)) <= {amplitude, -amplitude}

  def test_midpoint_rounds_up(self) -> None:
    """Test that a sample exactly between two levels takes the upper one."""
    amplitude = 1.5
    result = pcm(1.0, amplitude, PCMConfig(sampling_rate=4.0, quantization_levels=2))
    # sin(0) normalizes to 0.5, halfway between index 0 and index 1.
    assert result.transmitted[0] == (0.0, 1.0)
    assert result.output[0] == (0.0, amplitude)

  def test_indices_are_levels(self) -> None:
    """Test that transmitted values are integer level indices."""
    levels = 8
    result = pcm(2.0, 1.0, PCMConfig(sampling_rate=50.0, quantization_levels=levels))
    indices = _ys(result.transmitted)
    np.testing.assert_array_equal(indices, np.round(indices))
    assert indices.min() >= 0
    assert indices.max() <= levels - 1

  def test_known_quantization(self) -> None:
    """Test a 3-level quantizer on quarter-period ticks of a 1 Hz tone."""
    result = pcm(1.0, 1.0, PCMConfig(sampling_rate=4.0, quantization_levels=3))
    np.testing.assert_array_equal(
      _xs(result.transmitted), [0.0, 0.25, 0.5, 0.75, 1.0, 1.25, 1.5, 1.75]
    )
    np.testing.assert_array_equal(
      _ys(result.transmitted), [1.0, 2.0, 1.0, 0.0, 1.0, 2.0, 1.0, 0.0]
    )
    np.testing.assert_allclose(
      _ys(result.output), [0.0, 1.0, 0.0, -1.0, 0.0, 1.0, 0.0, -1.0]
    )

  def test_tick_count_and_times(self) -> None:
    """Test that ticks cover the base signal and share times with output."""
    result = pcm(1.0, 1.0, PCMConfig(sampling_rate=100.0, quantization_levels=16))
    expected_ticks = 200
    assert len(result.input) == expected_ticks
    assert len(result.transmitted) == expected_ticks
    np.testing.assert_array_equal(_xs(result.transmitted), _xs(result.output))
    assert np.all(np.diff(_xs(result.output)) > 0)

  def test_reconstruction_error_bounded(self) -> None:
    """Test that reconstruction is within half a quantization step."""
    levels, amplitude = 16, 1.0
    config = PCMConfig(sampling_rate=100.0, quantization_levels=levels)
    result = pcm(1.0, amplitude, config)
    step = 2 * amplitude / (levels - 1)
    error = np.abs(_ys(result.output) - _ys(result.input))
    assert np.all(error <= step / 2 + 1e-9)

  @pytest.mark.parametrize(
    ("frequency", "amplitude", "rate", "levels"),
    [
      (0.0, 1.0, 10.0, 4),
      (1.0, 0.0, 10.0, 4),
      (1.0, 1.0, 0.0, 4),
      (1.0, 1.0, -5.0, 4),
      (1.0, 1.0, 10.0, 1),
      (1.0, 1.0, 10.0, 0),
      (np.nan, 1.0, 10.0, 4),
      (1.0, np.inf, 10.0, 4),
      (1.0, 1.0, np.nan, 4),
      (1.0, 1.0, np.inf, 4),
    ],
  )
  def test_invalid_parameters(
    self, frequency: float, amplitude: float, rate: float, levels: int
  ) -> None:
    """Test that invalid tones or configurations yield the empty result."""
    config = PCMConfig(sampling_rate=rate, quantization_levels=levels)
    result = pcm(frequency, amplitude, config)
    assert result.is_empty
    assert not result.ok

  def test_deterministic(self) -> None:
    """Test that repeated calls give identical sequences."""
    config = PCMConfig(sampling_rate=33.0, quantization_levels=5)
    first = pcm(1.3, 0.7, config)
    second = pcm(1.3, 0.7, config)
    assert first.transmitted == second.transmitted
    assert first.output == second.output


class TestDeltaModulation:
  """Tests for delta modulation."""

  def test_bits_and_tick_count(self) -> None:
    """Test one bit per tick."""
    result = delta_modulation(
      1.0, 1.0, DeltaModulationConfig(sampling_rate=10.0, delta_step_size=0.2)
    )
    assert result.ok
    expected_ticks = 20
    assert len(result.transmitted) == expected_ticks
    assert set(_ys(result.transmitted)) <= {0.0, 1.0}

  def test_first_tick(self) -> None:
    """Test that the first bit is 0 since sin(0) does not exceed 0."""
    result = delta_modulation(
      1.0, 1.0, DeltaModulationConfig(sampling_rate=10.0, delta_step_size=0.5)
    )
    assert result.transmitted[0] == (0.0, 0.0)
    assert result.output[0] == (0.0, 0.0)
    assert result.output[2] == (0.0, -0.5)

  def test_staircase_shape(self) -> None:
    """Test hold points, step points and the final extension."""
    config = DeltaModulationConfig(sampling_rate=10.0, delta_step_size=0.2)
    result = delta_modulation(1.0, 1.0, config)
    ticks = len(result.transmitted)
    assert len(result.output) == 1 + 2 * ticks + 1

    for k in range(1, ticks):
      hold = result.output[1 + 2 * k]
      step = result.output[2 + 2 * k]
      assert np.isclose(hold.x, step.x - 0.001)
      assert hold.y == result.output[2 * k].y

    last = result.output[-1]
    assert np.isclose(last.x, 1.99)
    assert last.y == result.output[-2].y

  def test_trace_is_ordered(self) -> None:
    """Test that output times never decrease or go negative."""
    config = DeltaModulationConfig(sampling_rate=1000.0, delta_step_size=0.05)
    result = delta_modulation(2.0, 1.0, config)
    xs = _xs(result.output)
    assert xs.min() >= 0.0
    assert np.all(np.diff(xs) >= 0)

  def test_approximation_clamped(self) -> None:
    """Test that large steps saturate at 1.5 times the amplitude."""
    amplitude = 2.0
    config = DeltaModulationConfig(sampling_rate=100.0, delta_step_size=0.8)
    result = delta_modulation(1.0, amplitude, config)
    ys = _ys(result.output)
    assert np.max(np.abs(ys)) <= 1.5 * amplitude
    assert np.isclose(np.max(ys), 1.5 * amplitude)

  @pytest.mark.parametrize("step", [0.01, 0.1, 0.5, 1.0])
  @pytest.mark.parametrize("rate", [3.0, 20.0, 250.0])
  def test_approximation_bounded(self, step: float, rate: float) -> None:
    """Test the clamp across step sizes and rates."""
    amplitude = 1.3
    config = DeltaModulationConfig(sampling_rate=rate, delta_step_size=step)
    result = delta_modulation(4.0, amplitude, config)
    assert np.max(np.abs(_ys(result.output))) <= 1.5 * amplitude

  def test_tracks_input(self) -> None:
    """Test that a fine staircase follows a slow tone."""
    config = DeltaModulationConfig(sampling_rate=1000.0, delta_step_size=0.05)
    result = delta_modulation(0.5, 1.0, config)
    steps = result.output[2::2][:-1]
    times = np.array([p.x for p in steps])
    approximation = np.array([p.y for p in steps])
    assert np.max(np.abs(approximation - np.sin(2 * np.pi * 0.5 * times))) < 0.15

  @pytest.mark.parametrize(
    ("frequency", "amplitude", "rate", "step"),
    [
      (0.0, 1.0, 10.0, 0.1),
      (1.0, -1.0, 10.0, 0.1),
      (1.0, 1.0, 0.0, 0.1),
      (1.0, 1.0, 10.0, 0.0),
      (1.0, 1.0, 10.0, -0.1),
      (1.0, 1.0, 10.0, 1.5),
      (np.inf, 1.0, 10.0, 0.1),
      (1.0, np.nan, 10.0, 0.1),
      (1.0, 1.0, np.nan, 0.1),
      (1.0, 1.0, np.inf, 0.1),
      (1.0, 1.0, 10.0, np.nan),
    ],
  )
  def test_invalid_parameters(
    self, frequency: float, amplitude: float, rate: float, step: float
  ) -> None:
    """Test that invalid tones or configurations yield the empty result."""
    config = DeltaModulationConfig(sampling_rate=rate, delta_step_size=step)
    result = delta_modulation(frequency, amplitude, config)
    assert result.is_empty
    assert result.output == []

  def test_step_size_of_one_accepted(self) -> None:
    """Test the inclusive upper bound of the step size."""
    config = DeltaModulationConfig(sampling_rate=10.0, delta_step_size=1.0)
    assert delta_modulation(1.0, 1.0, config).ok

  def test_deterministic(self) -> None:
    """Test that no state carries over between calls."""
    config = DeltaModulationConfig(sampling_rate=40.0, delta_step_size=0.3)
    first = delta_modulation(1.0, 1.0, config)
    delta_modulation(3.0, 2.0, config)
    second = delta_modulation(1.0, 1.0, config)
    assert first.transmitted == second.transmitted
    assert first.output == second.output
