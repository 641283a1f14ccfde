"""HTTP/JSON transport for the waveform synthesis engine.

Each endpoint validates its JSON body, calls the matching transform and
copies the three point sequences into the reply. Failures map to status
codes the same way for every endpoint:
- malformed body or rejected parameters: 400 INVALID_ARGUMENT
- algorithm name outside the known schemes: 501 UNIMPLEMENTED
"""

import logging
from http import HTTPStatus
from typing import Any, TypeVar

from flask import Flask, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from signal_scope.simulator.adc import delta_modulation, pcm
from signal_scope.simulator.analog import analog_to_analog
from signal_scope.simulator.keying import digital_to_analog
from signal_scope.simulator.line_coding import digital_to_digital
from signal_scope.simulator.types import (
  AnalogModulation,
  DeltaModulationConfig,
  DigitalModulation,
  LineCoding,
  PCMConfig,
  Point,
  SchemeT,
  SignalResult,
  scheme_from_name,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestError(Exception):
  """A request the transport refuses, with the reply it maps to."""

  def __init__(self, status: HTTPStatus, code: str, message: str) -> None:
    super().__init__(message)
    self.status = status
    self.code = code
    self.message = message


class AnalogToAnalogRequest(BaseModel):
  message_frequency: float
  message_amplitude: float
  algorithm: str

  model_config = {"allow_inf_nan": False}


class AnalogToDigitalRequest(BaseModel):
  """Exactly one of pcm / delta_modulation is expected; pcm wins if both are set."""

  frequency: float
  amplitude: float
  pcm: PCMConfig | None = None
  delta_modulation: DeltaModulationConfig | None = None

  model_config = {"allow_inf_nan": False}


class DigitalRequest(BaseModel):
  binary_input: str
  algorithm: str


def parse_scheme(scheme_type: type[SchemeT], name: str) -> SchemeT:
  """Resolve an algorithm name from a request body.

  Raises:
    RequestError: 501 when the name is not a member of scheme_type.
  """
  try:
    return scheme_from_name(scheme_type, name)
  except ValueError:
    raise RequestError(
      HTTPStatus.NOT_IMPLEMENTED, "UNIMPLEMENTED", "Algorithm not implemented"
    ) from None


def _parse_body(model: type[ModelT]) -> ModelT:
  body: Any = request.get_json(silent=True)
  if body is None:
    body = {}
  try:
    return model.model_validate(body)
  except ValidationError as e:
    raise RequestError(HTTPStatus.BAD_REQUEST, "INVALID_ARGUMENT", str(e)) from e


def _points(points: list[Point]) -> list[dict[str, float]]:
  return [{"x": p.x, "y": p.y} for p in points]


def _reply(result: SignalResult, message: str = "Invalid parameters") -> Response:
  if result.is_empty:
    reason = f"{message}: {result.error}" if result.error else message
    raise RequestError(HTTPStatus.BAD_REQUEST, "INVALID_ARGUMENT", reason)

  return jsonify(
    input=_points(result.input),
    transmitted=_points(result.transmitted),
    output=_points(result.output),
    calculation_time_ms=result.calculation_time_ms,
  )


def create_app() -> Flask:
  """Build the Flask application with all signal endpoints registered."""
  app = Flask(__name__)

  @app.errorhandler(RequestError)
  def handle_request_error(error: RequestError) -> tuple[Response, int]:
    logger.warning(f"{request.path} -> {error.code}: {error.message}")
    return jsonify(code=error.code, error=error.message), error.status

  @app.route("/health", methods=["GET"])
  def health() -> Response:
    return jsonify(status="ok")

  @app.route("/signal/analog-to-analog", methods=["POST"])
  def analog_to_analog_endpoint() -> Response:
    body = _parse_body(AnalogToAnalogRequest)
    scheme = parse_scheme(AnalogModulation, body.algorithm)
    result = analog_to_analog(body.message_frequency, body.message_amplitude, scheme)
    return _reply(result)

  @app.route("/signal/analog-to-digital", methods=["POST"])
  def analog_to_digital_endpoint() -> Response:
    body = _parse_body(AnalogToDigitalRequest)
    if body.pcm is not None:
      result = pcm(body.frequency, body.amplitude, body.pcm)
    elif body.delta_modulation is not None:
      result = delta_modulation(body.frequency, body.amplitude, body.delta_modulation)
    else:
      raise RequestError(
        HTTPStatus.BAD_REQUEST, "INVALID_ARGUMENT", "Missing configuration"
      )
    return _reply(result, "Invalid parameters or result")

  @app.route("/signal/digital-to-analog", methods=["POST"])
  def digital_to_analog_endpoint() -> Response:
    body = _parse_body(DigitalRequest)
    scheme = parse_scheme(DigitalModulation, body.algorithm)
    return _reply(digital_to_analog(body.binary_input, scheme))

  @app.route("/signal/digital-to-digital", methods=["POST"])
  def digital_to_digital_endpoint() -> Response:
    body = _parse_body(DigitalRequest)
    scheme = parse_scheme(LineCoding, body.algorithm)
    return _reply(digital_to_digital(body.binary_input, scheme))

  return app
