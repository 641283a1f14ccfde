"""Digital-to-analog modulation: ASK, FSK and PSK keying of a sine carrier.

Each bit lasts one second and is drawn with 101 points (both bit edges
included), so adjacent bits share an x at their boundary.
"""

from collections.abc import Callable

import numpy as np

from signal_scope.simulator.timing import timed
from signal_scope.simulator.types import DigitalModulation, SignalResult
from signal_scope.simulator.waveforms import (
  BIT_DURATION,
  FloatArray,
  bit_levels,
  bit_signal,
  to_points,
  validate_bits,
)

SAMPLES_PER_BIT = 100

ASK_CARRIER_HZ = 5.0
ASK_MARK_AMPLITUDE = 1.0
ASK_SPACE_AMPLITUDE = 0.2

FSK_MARK_HZ = 7.0
FSK_SPACE_HZ = 3.0

PSK_CARRIER_HZ = 5.0
PSK_MARK_PHASE = 0.0
PSK_SPACE_PHASE = np.pi

Keyer = Callable[[FloatArray, FloatArray], FloatArray]


def bit_times(num_bits: int) -> FloatArray:
  """Sample grid of shape (num_bits, SAMPLES_PER_BIT + 1)."""
  time_step = BIT_DURATION / SAMPLES_PER_BIT
  base = np.arange(num_bits, dtype=np.float64) * BIT_DURATION
  steps = np.arange(SAMPLES_PER_BIT + 1, dtype=np.float64) * time_step
  return base[:, np.newaxis] + steps[np.newaxis, :]


def amplitude_shift_key(t: FloatArray, marks: FloatArray) -> FloatArray:
  amplitude = np.where(marks == 1.0, ASK_MARK_AMPLITUDE, ASK_SPACE_AMPLITUDE)
  return amplitude[:, np.newaxis] * np.sin(2 * np.pi * ASK_CARRIER_HZ * t)


def frequency_shift_key(t: FloatArray, marks: FloatArray) -> FloatArray:
  two_pi_freq = 2 * np.pi * np.where(marks == 1.0, FSK_MARK_HZ, FSK_SPACE_HZ)
  return np.sin(two_pi_freq[:, np.newaxis] * t)


def phase_shift_key(t: FloatArray, marks: FloatArray) -> FloatArray:
  phase = np.where(marks == 1.0, PSK_MARK_PHASE, PSK_SPACE_PHASE)
  return np.sin(2 * np.pi * PSK_CARRIER_HZ * t + phase[:, np.newaxis])


KEYERS: dict[DigitalModulation, Keyer] = {
  DigitalModulation.ASK: amplitude_shift_key,
  DigitalModulation.FSK: frequency_shift_key,
  DigitalModulation.PSK: phase_shift_key,
}


@timed
def digital_to_analog(bits: str, scheme: DigitalModulation) -> SignalResult:
  """Key a sine carrier with a bit string.

  Args:
    bits: String of '0' and '1' characters.
    scheme: Which keying to apply.

  Returns:
    The bit trace as input and output and the keyed carrier as transmitted.
    A failure result for an empty or non-binary bit string.
  """
  reason = validate_bits(bits)
  if reason is not None:
    return SignalResult.failure(reason)

  t = bit_times(len(bits))
  transmitted = KEYERS[DigitalModulation(scheme)](t, bit_levels(bits))

  input_points = to_points(*bit_signal(bits))
  return SignalResult(
    input=input_points,
    transmitted=to_points(t.ravel(), transmitted.ravel()),
    output=input_points,
  )
