"""Tests for the throughput benchmark."""

import json

import numpy as np

from signal_scope.simulator.benchmark import (
  BenchmarkCategory,
  BenchmarkResult,
  estimate_memory,
  random_bits,
  run_benchmarks,
)
from signal_scope.simulator.line_coding import digital_to_digital
from signal_scope.simulator.types import LineCoding


class TestBenchmark:
  """Tests for run_benchmarks and its helpers."""

  def test_random_bits(self) -> None:
    """Test length and alphabet of generated bit strings."""
    bits = random_bits(64, np.random.default_rng(7))
    expected_length = 64
    assert len(bits) == expected_length
    assert set(bits) <= {"0", "1"}

  def test_random_bits_seeded(self) -> None:
    """Test that the same seed draws the same bits."""
    first = random_bits(32, np.random.default_rng(3))
    second = random_bits(32, np.random.default_rng(3))
    assert first == second

  def test_estimate_memory(self) -> None:
    """Test that the estimate is the JSON payload size."""
    result = digital_to_digital("10", LineCoding.NRZ_L)
    payload = json.dumps(
      {
        "input": result.input,
        "transmitted": result.transmitted,
        "output": result.output,
      }
    )
    assert estimate_memory(result) == len(payload)

  def test_cases_cover_every_scheme(self) -> None:
    """Test the number and order of cases."""
    seen: list[BenchmarkResult] = []
    results = run_benchmarks(seed=1, sizes=(8, 16), on_result=seen.append)
    expected_cases = 2 * 8 + 2 * 3 + 2 * 3
    assert len(results) == expected_cases
    assert seen == results
    assert results[0].category == BenchmarkCategory.DIGITAL_TO_DIGITAL
    assert results[0].algorithm == "NRZ_L"
    assert results[-1].category == BenchmarkCategory.ANALOG_TO_ANALOG
    assert results[-1].algorithm == "PM"

  def test_point_counts(self) -> None:
    """Test that output sizes follow the input size."""
    results = run_benchmarks(seed=1, sizes=(10,))
    by_name = {case.algorithm: case for case in results}
    expected_bit_trace = 20
    expected_analog = 400
    assert by_name["NRZ_L"].data_points_count == expected_bit_trace
    assert by_name["ASK"].data_points_count == expected_bit_trace
    assert by_name["AM"].data_points_count == expected_analog
    assert all(case.time_ms >= 0 for case in results)
    assert all(case.memory_used_bytes > 0 for case in results)
