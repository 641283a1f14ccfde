"""Waveform synthesis engine for modulation and line-coding schemes."""

from signal_scope.simulator.adc import delta_modulation, pcm
from signal_scope.simulator.analog import analog_to_analog
from signal_scope.simulator.benchmark import BenchmarkResult, run_benchmarks
from signal_scope.simulator.keying import digital_to_analog
from signal_scope.simulator.line_coding import digital_to_digital
from signal_scope.simulator.types import (
  AnalogModulation,
  DeltaModulationConfig,
  DigitalModulation,
  LineCoding,
  PCMConfig,
  Point,
  SignalResult,
)
from signal_scope.simulator.waveforms import interpolate

__all__ = [
  # Data model
  "AnalogModulation",
  "DeltaModulationConfig",
  "DigitalModulation",
  "LineCoding",
  "PCMConfig",
  "Point",
  "SignalResult",
  # Transforms
  "analog_to_analog",
  "delta_modulation",
  "digital_to_analog",
  "digital_to_digital",
  "interpolate",
  "pcm",
  # Benchmark
  "BenchmarkResult",
  "run_benchmarks",
]
