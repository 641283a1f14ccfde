#!/usr/bin/env python3
"""Command line entry point for signal_scope.

Commands:
- serve: run the HTTP transport
- generate: run one transform and print the result as JSON
- benchmark: time every scheme across input sizes
"""

import logging
from enum import StrEnum
from typing import Annotated

import typer
from pydantic import ValidationError

from signal_scope.config import ServerConfig
from signal_scope.server import create_app
from signal_scope.setup_logging import setup_logging
from signal_scope.simulator import (
  AnalogModulation,
  DeltaModulationConfig,
  DigitalModulation,
  LineCoding,
  PCMConfig,
  SignalResult,
  analog_to_analog,
  delta_modulation,
  digital_to_analog,
  digital_to_digital,
  pcm,
  run_benchmarks,
)
from signal_scope.simulator.benchmark import INPUT_SIZES, BenchmarkResult
from signal_scope.simulator.types import SchemeT, scheme_from_name

logger = logging.getLogger(__name__)

app = typer.Typer(help="Waveform synthesis for modulation and line coding.")

# Default sampling rates follow the tone: 4x for PCM, 8x for delta modulation.
PCM_RATE_FACTOR = 4.0
DELTA_RATE_FACTOR = 8.0


class SimulationMode(StrEnum):
  """Transform families."""

  ANALOG_TO_ANALOG = "analog-to-analog"
  ANALOG_TO_DIGITAL = "analog-to-digital"
  DIGITAL_TO_ANALOG = "digital-to-analog"
  DIGITAL_TO_DIGITAL = "digital-to-digital"


class Converter(StrEnum):
  """Analog-to-digital converters."""

  PCM = "PCM"
  DELTA = "DELTA"


def _parse(scheme_type: type[SchemeT], name: str) -> SchemeT:
  try:
    return scheme_from_name(scheme_type, name)
  except ValueError:
    choices = ", ".join(member.value for member in scheme_type)
    logger.error(f"Unknown algorithm: {name}")
    logger.error(f"Available algorithms: {choices}")
    raise typer.Exit(code=1) from None


def _convert(
  converter: Converter,
  frequency: float,
  amplitude: float,
  sampling_rate: float | None,
  quantization_levels: int,
  delta_step_size: float,
) -> SignalResult:
  if converter == Converter.PCM:
    if sampling_rate is None:
      sampling_rate = frequency * PCM_RATE_FACTOR
    config = PCMConfig(
      sampling_rate=sampling_rate, quantization_levels=quantization_levels
    )
    return pcm(frequency, amplitude, config)

  if sampling_rate is None:
    sampling_rate = frequency * DELTA_RATE_FACTOR
  dm_config = DeltaModulationConfig(
    sampling_rate=sampling_rate, delta_step_size=delta_step_size
  )
  return delta_modulation(frequency, amplitude, dm_config)


@app.callback()
def main(
  ctx: typer.Context,
  log_level: Annotated[
    str, typer.Option("--log-level", "-l", help="Logging level.")
  ] = "INFO",
) -> None:
  """Configure logging before any command runs."""
  ctx.obj = log_level.upper()
  setup_logging(level=ctx.obj)


@app.command()
def serve(
  ctx: typer.Context,
  host: Annotated[str, typer.Option(help="Interface to bind to.")] = "127.0.0.1",
  port: Annotated[int, typer.Option("--port", "-p", help="TCP port.")] = 50051,
  debug: Annotated[bool, typer.Option(help="Run Flask in debug mode.")] = False,
) -> None:
  """Serve the signal endpoints over HTTP."""
  try:
    config = ServerConfig(host=host, port=port, log_level=ctx.obj, debug=debug)
  except ValidationError as e:
    logger.error(f"Invalid server configuration: {e}")
    raise typer.Exit(code=1) from e

  logging.getLogger("werkzeug").setLevel(config.log_level)
  logger.info(f"Server listening on {config.host}:{config.port}")
  create_app().run(host=config.host, port=config.port, debug=config.debug)


@app.command()
def generate(
  mode: Annotated[SimulationMode, typer.Argument(help="Transform family.")],
  algorithm: Annotated[
    str, typer.Argument(help="Scheme name, e.g. AM, PCM, DELTA, ASK, B8ZS.")
  ],
  frequency: Annotated[
    float, typer.Option("--frequency", "-f", help="Tone frequency in Hz.")
  ] = 2.0,
  amplitude: Annotated[
    float, typer.Option("--amplitude", "-a", help="Tone peak amplitude.")
  ] = 1.0,
  bits: Annotated[
    str, typer.Option("--bits", "-b", help="Bit string for digital inputs.")
  ] = "10110010",
  sampling_rate: Annotated[
    float | None,
    typer.Option(help="ADC sampling rate in Hz (default scales with the tone)."),
  ] = None,
  quantization_levels: Annotated[int, typer.Option(help="PCM levels.")] = 8,
  delta_step_size: Annotated[
    float, typer.Option(help="Delta step as a fraction of the amplitude.")
  ] = 0.1,
) -> None:
  """Run one transform and print its result as JSON."""
  if mode == SimulationMode.ANALOG_TO_ANALOG:
    result = analog_to_analog(
      frequency, amplitude, _parse(AnalogModulation, algorithm)
    )
  elif mode == SimulationMode.ANALOG_TO_DIGITAL:
    result = _convert(
      _parse(Converter, algorithm),
      frequency,
      amplitude,
      sampling_rate,
      quantization_levels,
      delta_step_size,
    )
  elif mode == SimulationMode.DIGITAL_TO_ANALOG:
    result = digital_to_analog(bits, _parse(DigitalModulation, algorithm))
  else:
    result = digital_to_digital(bits, _parse(LineCoding, algorithm))

  if not result.ok:
    logger.error(f"Invalid parameters: {result.error}")
    raise typer.Exit(code=1)

  logger.info(
    f"{mode} {algorithm}: {len(result.transmitted)} transmitted points "
    f"in {result.calculation_time_ms:.3f} ms"
  )
  typer.echo(result.model_dump_json(exclude={"error"}))


@app.command()
def benchmark(
  seed: Annotated[
    int | None, typer.Option(help="Seed for the random bit strings.")
  ] = None,
  sizes: Annotated[
    list[int] | None, typer.Option("--size", "-s", help="Input size in bits.")
  ] = None,
) -> None:
  """Time every scheme across input sizes."""

  def report(case: BenchmarkResult) -> None:
    logger.info(
      f"{case.category:<18} {case.algorithm:<24} {case.input_size:>6} bits "
      f"{case.time_ms:9.3f} ms {case.memory_used_bytes:>10} B "
      f"{case.data_points_count:>8} points"
    )

  run_benchmarks(seed=seed, sizes=sizes or INPUT_SIZES, on_result=report)


if __name__ == "__main__":
  app()
