"""Shared data types for the waveform synthesis engine.

Every transform returns a SignalResult holding three time-ordered point
sequences:
- input: the base signal the transform consumed
- transmitted: the modulated, quantized, or line-coded signal
- output: what an ideal receiver reconstructs
"""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple, TypeVar

from pydantic import BaseModel, Field

SchemeT = TypeVar("SchemeT", bound=StrEnum)


class Point(NamedTuple):
  """A single sample: time in seconds and amplitude, level or bit value."""

  x: float
  y: float


class AnalogModulation(StrEnum):
  """Continuous carrier modulation schemes."""

  AM = "AM"
  FM = "FM"
  PM = "PM"


class DigitalModulation(StrEnum):
  """Carrier keying schemes for bit strings."""

  ASK = "ASK"
  FSK = "FSK"
  PSK = "PSK"


class LineCoding(StrEnum):
  """Baseband bit-to-voltage mappings."""

  NRZ_L = "NRZ_L"
  NRZ_I = "NRZ_I"
  MANCHESTER = "MANCHESTER"
  DIFFERENTIAL_MANCHESTER = "DIFFERENTIAL_MANCHESTER"
  AMI = "AMI"
  PSEUDOTERNARY = "PSEUDOTERNARY"
  B8ZS = "B8ZS"
  HDB3 = "HDB3"


def scheme_from_name(scheme_type: type[SchemeT], name: str) -> SchemeT:
  """Look up a scheme by name, accepting display spellings like "NRZ-L".

  The name is upper-cased and dashes and spaces become underscores.

  Raises:
    ValueError: If the name is not a member of scheme_type.
  """
  return scheme_type(name.strip().upper().replace("-", "_").replace(" ", "_"))


class PCMConfig(BaseModel):
  """Pulse-code modulation settings.

  Range checks happen in the converter so that an invalid configuration is
  reported through the result instead of raising.

  Attributes:
    sampling_rate: Sampling ticks per second.
    quantization_levels: Number of uniform quantization levels.
  """

  sampling_rate: float
  quantization_levels: int

  model_config = {"frozen": True}


class DeltaModulationConfig(BaseModel):
  """Delta modulation settings.

  Attributes:
    sampling_rate: Sampling ticks per second.
    delta_step_size: Step size as a fraction of the message amplitude.
  """

  sampling_rate: float
  delta_step_size: float

  model_config = {"frozen": True}


class SignalResult(BaseModel):
  """Result bundle returned by every transform.

  A failed result has `error` set and all three sequences empty; callers that
  only test for empty `input` and `transmitted` see the same condition.
  """

  input: list[Point] = Field(default_factory=list)
  transmitted: list[Point] = Field(default_factory=list)
  output: list[Point] = Field(default_factory=list)
  calculation_time_ms: float = 0.0
  error: str | None = None

  model_config = {"frozen": True}

  @classmethod
  def failure(cls, reason: str) -> SignalResult:
    """Build the invalid-parameters result."""
    return cls(error=reason)

  @property
  def ok(self) -> bool:
    """Whether the transform produced a signal."""
    return self.error is None

  @property
  def is_empty(self) -> bool:
    """Whether both input and transmitted are empty."""
    return not self.input and not self.transmitted
