"""Analog-to-analog modulation: AM, FM and PM of a sine carrier.

The carrier runs at five times the message frequency with unit amplitude. The
message is normalized to [-1, 1] before it drives the carrier, and the ideal
receiver hands the message back unchanged.
"""

from collections.abc import Callable

import numpy as np

from signal_scope.simulator.timing import timed
from signal_scope.simulator.types import AnalogModulation, SignalResult
from signal_scope.simulator.waveforms import (
  ANALOG_SAMPLES_PER_SECOND,
  FloatArray,
  sine_wave,
  to_points,
  validate_tone,
)

CARRIER_FREQUENCY_RATIO = 5.0
CARRIER_AMPLITUDE = 1.0
AM_MODULATION_INDEX = 0.8
FM_DEVIATION_RATIO = 0.5  # of the carrier frequency
PM_PHASE_DEVIATION = np.pi / 2

Modulator = Callable[[FloatArray, FloatArray, float], FloatArray]


def amplitude_modulate(
  t: FloatArray, message: FloatArray, message_frequency: float
) -> FloatArray:
  """Scale the carrier envelope by `1 + 0.8 * message`."""
  two_pi_carrier = 2 * np.pi * (message_frequency * CARRIER_FREQUENCY_RATIO)
  carrier = np.sin(two_pi_carrier * t)
  return CARRIER_AMPLITUDE * (1 + AM_MODULATION_INDEX * message) * carrier


def frequency_modulate(
  t: FloatArray, message: FloatArray, message_frequency: float
) -> FloatArray:
  """Shift the carrier phase by `2*pi*deviation * message * t / f_m`.

  The deviation term scales with t rather than integrating the message.
  """
  carrier_frequency = message_frequency * CARRIER_FREQUENCY_RATIO
  two_pi_carrier = 2 * np.pi * carrier_frequency
  two_pi_deviation = 2 * np.pi * (carrier_frequency * FM_DEVIATION_RATIO)
  inv_message_frequency = 1.0 / message_frequency
  phase = two_pi_carrier * t + two_pi_deviation * message * t * inv_message_frequency
  return CARRIER_AMPLITUDE * np.sin(phase)


def phase_modulate(
  t: FloatArray, message: FloatArray, message_frequency: float
) -> FloatArray:
  """Shift the carrier phase by up to +-pi/2."""
  two_pi_carrier = 2 * np.pi * (message_frequency * CARRIER_FREQUENCY_RATIO)
  phase = two_pi_carrier * t + PM_PHASE_DEVIATION * message
  return CARRIER_AMPLITUDE * np.sin(phase)


MODULATORS: dict[AnalogModulation, Modulator] = {
  AnalogModulation.AM: amplitude_modulate,
  AnalogModulation.FM: frequency_modulate,
  AnalogModulation.PM: phase_modulate,
}


@timed
def analog_to_analog(
  message_frequency: float, message_amplitude: float, scheme: AnalogModulation
) -> SignalResult:
  """Modulate a sine carrier with a single-tone message.

  Args:
    message_frequency: Message tone frequency in Hz.
    message_amplitude: Message tone peak amplitude.
    scheme: Which modulation to apply.

  Returns:
    400 input and transmitted points over the 2 second window; output repeats
    input. A failure result for a non-positive frequency or amplitude.
  """
  reason = validate_tone(message_frequency, message_amplitude)
  if reason is not None:
    return SignalResult.failure(reason)

  t, y = sine_wave(message_frequency, message_amplitude, ANALOG_SAMPLES_PER_SECOND)
  message = y * (1.0 / message_amplitude)
  transmitted = MODULATORS[AnalogModulation(scheme)](t, message, message_frequency)

  input_points = to_points(t, y)
  return SignalResult(
    input=input_points,
    transmitted=to_points(t, transmitted),
    output=input_points,
  )
