"""Digital-to-digital line coding.

Every coder walks the bit string once, left to right, and returns the voltage
level of each segment. Most codes hold one level per bit; the Manchester
family returns two half-bit levels per bit and so produces an edge at the
middle of every bit. B8ZS and HDB3 look ahead from the cursor and, on a run
of zeros long enough to substitute, emit the whole substitution pattern and
jump the cursor past it.

Polarity conventions:
- '+1' / '-1' are the mark voltages, 0 is the idle line
- alternate mark inversion starts from a seed of -1, so the first mark is +1
"""

from collections.abc import Callable

from signal_scope.simulator.timing import timed
from signal_scope.simulator.types import LineCoding, SignalResult
from signal_scope.simulator.waveforms import (
  BIT_DURATION,
  bit_signal,
  stair_step,
  to_points,
  validate_bits,
)

HIGH = 1.0
LOW = -1.0
ZERO = 0.0
POLARITY_SEED = -1.0

B8ZS_RUN = "0" * 8
HDB3_RUN = "0" * 4

LineCoder = Callable[[str], list[float]]


def nrz_l(bits: str) -> list[float]:
  """'0' is high, '1' is low."""
  return [HIGH if bit == "0" else LOW for bit in bits]


def nrz_i(bits: str) -> list[float]:
  """Invert the level on every '1', starting high."""
  level = HIGH
  levels = []
  for bit in bits:
    if bit == "1":
      level = -level
    levels.append(level)
  return levels


def manchester(bits: str) -> list[float]:
  """'0' falls high->low at mid-bit, '1' rises low->high."""
  levels = []
  for bit in bits:
    levels.extend((HIGH, LOW) if bit == "0" else (LOW, HIGH))
  return levels


def differential_manchester(bits: str) -> list[float]:
  """Always invert at mid-bit; a '0' also inverts at the start of the bit."""
  level = HIGH
  levels = []
  for bit in bits:
    if bit == "0":
      level = -level
    levels.append(level)
    level = -level
    levels.append(level)
  return levels


def _alternate_marks(bits: str, mark: str) -> list[float]:
  polarity = POLARITY_SEED
  levels = []
  for bit in bits:
    if bit == mark:
      polarity = -polarity
      levels.append(polarity)
    else:
      levels.append(ZERO)
  return levels


def ami(bits: str) -> list[float]:
  """'0' idles at 0 V; each '1' takes the opposite polarity of the last."""
  return _alternate_marks(bits, mark="1")


def pseudoternary(bits: str) -> list[float]:
  """'1' idles at 0 V; each '0' takes the opposite polarity of the last."""
  return _alternate_marks(bits, mark="0")


def b8zs(bits: str) -> list[float]:
  """AMI with every run of eight zeros replaced by 000VB0VB.

  V repeats the polarity of the preceding mark (a bipolar violation) and B
  restores alternation; the substitution leaves the polarity at B.
  """
  polarity = POLARITY_SEED
  levels: list[float] = []
  i = 0
  while i < len(bits):
    if bits.startswith(B8ZS_RUN, i):
      v, b = polarity, -polarity
      levels.extend((ZERO, ZERO, ZERO, v, b, ZERO, v, b))
      polarity = b
      i += len(B8ZS_RUN)
      continue

    if bits[i] == "1":
      polarity = -polarity
      levels.append(polarity)
    else:
      levels.append(ZERO)
    i += 1
  return levels


def hdb3(bits: str) -> list[float]:
  """AMI with every run of four zeros replaced by 000V or B00V.

  The choice depends on the number of marks sent since the last substitution:
  even gives 000V with V repeating the last polarity, odd gives B00V with both
  B and V taking the opposite polarity. The mark count resets after each
  substitution.
  """
  polarity = POLARITY_SEED
  marks = 0
  levels: list[float] = []
  i = 0
  while i < len(bits):
    if bits.startswith(HDB3_RUN, i):
      if marks % 2 == 0:
        v = polarity
        levels.extend((ZERO, ZERO, ZERO, v))
      else:
        b = v = -polarity
        levels.extend((b, ZERO, ZERO, v))
      polarity = v
      marks = 0
      i += len(HDB3_RUN)
      continue

    if bits[i] == "1":
      polarity = -polarity
      levels.append(polarity)
      marks += 1
    else:
      levels.append(ZERO)
    i += 1
  return levels


LINE_CODERS: dict[LineCoding, LineCoder] = {
  LineCoding.NRZ_L: nrz_l,
  LineCoding.NRZ_I: nrz_i,
  LineCoding.MANCHESTER: manchester,
  LineCoding.DIFFERENTIAL_MANCHESTER: differential_manchester,
  LineCoding.AMI: ami,
  LineCoding.PSEUDOTERNARY: pseudoternary,
  LineCoding.B8ZS: b8zs,
  LineCoding.HDB3: hdb3,
}


@timed
def digital_to_digital(bits: str, scheme: LineCoding) -> SignalResult:
  """Line-code a bit string into a baseband voltage trace.

  Args:
    bits: String of '0' and '1' characters.
    scheme: Which line code to apply.

  Returns:
    The bit trace as input and output and the voltage stair-step as
    transmitted. A failure result for an empty or non-binary bit string.
  """
  reason = validate_bits(bits)
  if reason is not None:
    return SignalResult.failure(reason)

  levels = LINE_CODERS[LineCoding(scheme)](bits)
  segments_per_bit = len(levels) // len(bits)

  input_points = to_points(*bit_signal(bits))
  return SignalResult(
    input=input_points,
    transmitted=to_points(*stair_step(levels, BIT_DURATION / segments_per_bit)),
    output=input_points,
  )
