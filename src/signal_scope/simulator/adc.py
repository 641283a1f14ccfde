"""Analog-to-digital conversion: PCM and delta modulation.

Both converters sample a 100 samples/second sine base signal at their own
rate by interpolating between base samples. Tick i falls at
`i / sampling_rate`, snapped to microsecond precision, for as long as it does
not pass the last base sample.
"""

import numpy as np

from signal_scope.simulator.timing import timed
from signal_scope.simulator.types import (
  DeltaModulationConfig,
  PCMConfig,
  Point,
  SignalResult,
)
from signal_scope.simulator.waveforms import (
  ADC_SAMPLES_PER_SECOND,
  FloatArray,
  interpolate,
  round_half_away,
  round_time,
  sine_wave,
  to_points,
  validate_tone,
)

MIN_QUANTIZATION_LEVELS = 2
APPROXIMATION_LIMIT = 1.5  # times the amplitude
HOLD_OFFSET = 0.001  # seconds before a step where the staircase holds


def sample_times(sampling_rate: float, duration: float) -> FloatArray:
  """Tick times `i / sampling_rate` up to and including `duration`.

  The cutoff is applied to the raw tick before rounding.
  """
  interval = 1.0 / sampling_rate
  i = np.arange(int(duration * sampling_rate) + 2, dtype=np.float64)
  raw = i * interval
  return round_time(raw[raw <= duration])


def _validate_pcm(frequency: float, amplitude: float, config: PCMConfig) -> str | None:
  reason = validate_tone(frequency, amplitude)
  if reason is not None:
    return reason
  if not np.isfinite(config.sampling_rate) or config.sampling_rate <= 0:
    return f"sampling_rate must be positive and finite, got {config.sampling_rate}"
  if config.quantization_levels < MIN_QUANTIZATION_LEVELS:
    return (
      f"quantization_levels must be at least {MIN_QUANTIZATION_LEVELS}, "
      f"got {config.quantization_levels}"
    )
  return None


def _validate_delta(
  frequency: float, amplitude: float, config: DeltaModulationConfig
) -> str | None:
  reason = validate_tone(frequency, amplitude)
  if reason is not None:
    return reason
  if not np.isfinite(config.sampling_rate) or config.sampling_rate <= 0:
    return f"sampling_rate must be positive and finite, got {config.sampling_rate}"
  if not (np.isfinite(config.delta_step_size) and 0 < config.delta_step_size <= 1):
    return f"delta_step_size must be in (0, 1], got {config.delta_step_size}"
  return None


@timed
def pcm(frequency: float, amplitude: float, config: PCMConfig) -> SignalResult:
  """Uniformly quantize a sampled sine tone.

  Each tick maps the sample onto `quantization_levels - 1` equal steps across
  [-amplitude, amplitude].

  Args:
    frequency: Tone frequency in Hz.
    amplitude: Tone peak amplitude.
    config: Sampling rate and number of levels.

  Returns:
    transmitted holds the quantization index per tick, output the
    reconstructed amplitude.
  """
  reason = _validate_pcm(frequency, amplitude, config)
  if reason is not None:
    return SignalResult.failure(reason)

  t_base, y_base = sine_wave(frequency, amplitude, ADC_SAMPLES_PER_SECOND)
  ticks = sample_times(config.sampling_rate, t_base[-1])
  values = interpolate(t_base, y_base, ticks)

  inv_amplitude = 1.0 / amplitude
  quant_range = float(config.quantization_levels - 1)
  inv_quant_range = 1.0 / quant_range

  normalized = (values * inv_amplitude + 1) * 0.5
  quantized = round_half_away(normalized * quant_range)
  reconstructed = (quantized * inv_quant_range * 2 - 1) * amplitude

  return SignalResult(
    input=to_points(t_base, y_base),
    transmitted=to_points(ticks, quantized),
    output=to_points(ticks, reconstructed),
  )


@timed
def delta_modulation(
  frequency: float, amplitude: float, config: DeltaModulationConfig
) -> SignalResult:
  """Track a sampled sine tone with a one-bit staircase.

  The approximation starts at 0 and moves by `amplitude * delta_step_size`
  toward the input at every tick, clamped to +-1.5 times the amplitude.

  Args:
    frequency: Tone frequency in Hz.
    amplitude: Tone peak amplitude.
    config: Sampling rate and relative step size.

  Returns:
    transmitted holds one bit per tick (1 when the input was above the
    approximation). output is the staircase: each step is preceded by a point
    1 ms earlier holding the previous level, and the last level is extended to
    the end of the base signal.
  """
  reason = _validate_delta(frequency, amplitude, config)
  if reason is not None:
    return SignalResult.failure(reason)

  t_base, y_base = sine_wave(frequency, amplitude, ADC_SAMPLES_PER_SECOND)
  ticks = sample_times(config.sampling_rate, t_base[-1])
  values = interpolate(t_base, y_base, ticks)

  delta = amplitude * config.delta_step_size
  min_approximation = -amplitude * APPROXIMATION_LIMIT
  max_approximation = amplitude * APPROXIMATION_LIMIT
  approximation = 0.0

  transmitted: list[Point] = []
  output = [Point(0.0, approximation)]

  for t, value in zip(ticks.tolist(), values.tolist(), strict=True):
    bit = 1.0 if value > approximation else 0.0
    transmitted.append(Point(t, bit))

    approximation += delta if bit == 1.0 else -delta
    approximation = max(min_approximation, min(max_approximation, approximation))

    # Hold point is floored at the previous x so the trace never runs backwards
    previous = output[-1]
    output.append(Point(max(t - HOLD_OFFSET, previous.x), previous.y))
    output.append(Point(t, approximation))

  output.append(Point(float(t_base[-1]), output[-1].y))

  return SignalResult(
    input=to_points(t_base, y_base),
    transmitted=transmitted,
    output=output,
  )
