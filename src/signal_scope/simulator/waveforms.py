"""Base signal builders and the piecewise-linear interpolator.

Two base shapes feed every transform:
- a single-tone sine sampled over a fixed 2 second window (analog paths)
- a stair-step trace holding each bit's value for one bit interval (digital
  paths)
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from signal_scope.simulator.types import Point

SIGNAL_DURATION = 2.0  # seconds
ANALOG_SAMPLES_PER_SECOND = 200
ADC_SAMPLES_PER_SECOND = 100
BIT_DURATION = 1.0  # seconds
TIME_SCALE = 1_000_000  # ticks per second for time rounding

FloatArray = npt.NDArray[np.float64]


def round_half_away(values: npt.ArrayLike) -> FloatArray:
  """Round to the nearest integer, breaking ties away from zero.

  np.round breaks ties to even; quantization indices must round .5 up in
  magnitude.
  """
  values = np.asarray(values, dtype=np.float64)
  rounded = np.round(values)
  truncated = np.trunc(values)
  ties = np.abs(values - truncated) == 0.5
  return np.where(ties, truncated + np.sign(values), rounded)


def round_time(t: npt.ArrayLike) -> FloatArray:
  """Snap sample times to microsecond precision.

  Accumulated floating error would otherwise make ticks that should land on
  a sample boundary fall just short of it.
  """
  t = np.asarray(t, dtype=np.float64)
  return round_half_away(t * TIME_SCALE) / TIME_SCALE


def interpolate(
  xs: npt.ArrayLike, ys: npt.ArrayLike, t: npt.ArrayLike
) -> float | FloatArray:
  """Sample a piecewise-linear signal at one or more times.

  Times before the first sample or after the last one hold the end values.
  Inside the signal the bracketing pair is located by binary search (the first
  sample at or after t and its predecessor). A zero-width bracket, as found at
  the instantaneous edges of a stair-step, returns the left value.

  Args:
    xs: Sample times, non-decreasing.
    ys: Sample values, same length as xs.
    t: Query time or array of query times.

  Returns:
    Interpolated value(s); a float for a scalar query.
  """
  xs = np.asarray(xs, dtype=np.float64)
  ys = np.asarray(ys, dtype=np.float64)
  t = np.asarray(t, dtype=np.float64)

  if xs.size == 0:
    values = np.zeros_like(t)
  elif xs.size == 1:
    values = np.full_like(t, ys[0])
  else:
    idx = np.clip(np.searchsorted(xs, t, side="left"), 1, xs.size - 1)
    x1, x2 = xs[idx - 1], xs[idx]
    y1, y2 = ys[idx - 1], ys[idx]
    span = x2 - x1
    with np.errstate(divide="ignore", invalid="ignore"):
      values = y1 + (t - x1) / span * (y2 - y1)
    values = np.where(span == 0, y1, values)
    values = np.where(t <= xs[0], ys[0], values)
    values = np.where(t >= xs[-1], ys[-1], values)

  if values.ndim == 0:
    return float(values)
  return values


def validate_tone(frequency: float, amplitude: float) -> str | None:
  """Return the reason a tone is unusable, or None."""
  if not np.isfinite(frequency) or frequency <= 0:
    return f"frequency must be positive and finite, got {frequency}"
  if not np.isfinite(amplitude) or amplitude <= 0:
    return f"amplitude must be positive and finite, got {amplitude}"
  return None


def validate_bits(bits: str) -> str | None:
  """Return the reason a bit string is unusable, or None."""
  if not bits:
    return "bit string must not be empty"
  invalid = set(bits) - {"0", "1"}
  if invalid:
    return f"bit string may only contain '0' and '1', got {sorted(invalid)}"
  return None


def sine_wave(
  frequency: float, amplitude: float, samples_per_second: int
) -> tuple[FloatArray, FloatArray]:
  """Sample `amplitude * sin(2*pi*frequency*t)` over SIGNAL_DURATION.

  The window is half-open: the last sample sits one step before the end.

  Returns:
    Sample times and values.
  """
  total_samples = int(SIGNAL_DURATION * samples_per_second)
  t = np.arange(total_samples, dtype=np.float64) * (1.0 / samples_per_second)
  y = amplitude * np.sin(2 * np.pi * frequency * t)
  return t, y


def bit_levels(bits: str) -> FloatArray:
  """Convert a validated bit string to an array of 0.0 / 1.0."""
  codes = np.frombuffer(bits.encode("ascii"), dtype=np.uint8)
  return (codes - ord("0")).astype(np.float64)


def stair_step(
  levels: Sequence[float] | FloatArray, width: float = BIT_DURATION
) -> tuple[FloatArray, FloatArray]:
  """Render levels as consecutive flat segments of equal width.

  Segment k is drawn as two points, (k*width, level) and ((k+1)*width, level),
  so adjacent segments meet in a repeated-x pair that plots as a vertical edge.
  """
  levels = np.asarray(levels, dtype=np.float64)
  k = np.arange(levels.size, dtype=np.float64)
  t = np.column_stack((k * width, (k + 1) * width)).ravel()
  return t, np.repeat(levels, 2)


def bit_signal(bits: str) -> tuple[FloatArray, FloatArray]:
  """Build the reference stair-step trace for a validated bit string."""
  return stair_step(bit_levels(bits), BIT_DURATION)


def to_points(t: npt.ArrayLike, y: npt.ArrayLike) -> list[Point]:
  """Zip sample times and values into Points."""
  return [
    Point(x, v)
    for x, v in zip(np.asarray(t).tolist(), np.asarray(y).tolist(), strict=True)
  ]
