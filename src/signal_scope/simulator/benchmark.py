"""Throughput benchmark across schemes and input sizes.

Line codes and keying schemes run on random bit strings of each size. The
analog schemes have a fixed-size output, so they run once per size with a
5 Hz unit tone and the size is nominal.
"""

import json
import logging
from collections.abc import Callable, Sequence
from enum import StrEnum

import numpy as np
from pydantic import BaseModel

from signal_scope.simulator.analog import analog_to_analog
from signal_scope.simulator.keying import digital_to_analog
from signal_scope.simulator.line_coding import digital_to_digital
from signal_scope.simulator.types import (
  AnalogModulation,
  DigitalModulation,
  LineCoding,
  SignalResult,
)

logger = logging.getLogger(__name__)

INPUT_SIZES = (100, 500, 1000, 5000, 10000)
ANALOG_FREQUENCY_HZ = 5.0
ANALOG_AMPLITUDE = 1.0


class BenchmarkCategory(StrEnum):
  """Transform families covered by the benchmark."""

  DIGITAL_TO_DIGITAL = "Digital-to-Digital"
  DIGITAL_TO_ANALOG = "Digital-to-Analog"
  ANALOG_TO_ANALOG = "Analog-to-Analog"


class BenchmarkResult(BaseModel):
  """Timing and size of one benchmark case.

  Attributes:
    algorithm: Scheme name.
    category: Transform family.
    input_size: Number of input bits (nominal for analog schemes).
    time_ms: Transform duration as reported by the result.
    memory_used_bytes: Size of the JSON-encoded result.
    data_points_count: Number of output points.
  """

  algorithm: str
  category: BenchmarkCategory
  input_size: int
  time_ms: float
  memory_used_bytes: int
  data_points_count: int

  model_config = {"frozen": True}


def random_bits(size: int, rng: np.random.Generator) -> str:
  """Draw a uniformly random bit string."""
  return "".join(rng.integers(0, 2, size=size).astype(str))


def estimate_memory(result: SignalResult) -> int:
  """Size in bytes of the result's point sequences encoded as JSON."""
  payload = {
    "input": result.input,
    "transmitted": result.transmitted,
    "output": result.output,
  }
  return len(json.dumps(payload).encode("utf-8"))


def _measure(
  result: SignalResult, algorithm: str, category: BenchmarkCategory, size: int
) -> BenchmarkResult:
  return BenchmarkResult(
    algorithm=str(algorithm),
    category=category,
    input_size=size,
    time_ms=result.calculation_time_ms,
    memory_used_bytes=estimate_memory(result),
    data_points_count=len(result.output),
  )


def run_benchmarks(
  seed: int | None = None,
  sizes: Sequence[int] = INPUT_SIZES,
  on_result: Callable[[BenchmarkResult], None] | None = None,
) -> list[BenchmarkResult]:
  """Time every scheme at every input size.

  Args:
    seed: Seed for the random bit strings.
    sizes: Input sizes in bits.
    on_result: Called with each case as soon as it is measured.

  Returns:
    All cases in run order: line codes, then keying, then analog.
  """
  rng = np.random.default_rng(seed)
  results: list[BenchmarkResult] = []

  def record(benchmark: BenchmarkResult) -> None:
    results.append(benchmark)
    if on_result is not None:
      on_result(benchmark)

  for size in sizes:
    bits = random_bits(size, rng)
    for coding in LineCoding:
      logger.debug(f"Testing {coding} with {size} bits...")
      result = digital_to_digital(bits, coding)
      record(_measure(result, coding, BenchmarkCategory.DIGITAL_TO_DIGITAL, size))

  for size in sizes:
    bits = random_bits(size, rng)
    for modulation in DigitalModulation:
      logger.debug(f"Testing {modulation} with {size} bits...")
      result = digital_to_analog(bits, modulation)
      record(_measure(result, modulation, BenchmarkCategory.DIGITAL_TO_ANALOG, size))

  for size in sizes:
    for analog in AnalogModulation:
      logger.debug(f"Testing {analog} with {size} factor...")
      result = analog_to_analog(ANALOG_FREQUENCY_HZ, ANALOG_AMPLITUDE, analog)
      record(_measure(result, analog, BenchmarkCategory.ANALOG_TO_ANALOG, size))

  logger.info(f"Benchmark complete: {len(results)} cases")
  return results
