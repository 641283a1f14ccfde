"""Wall-clock timing for transforms."""

import functools
import logging
import time
from collections.abc import Callable
from typing import ParamSpec

from signal_scope.simulator.types import SignalResult

logger = logging.getLogger(__name__)

P = ParamSpec("P")


def timed(func: Callable[P, SignalResult]) -> Callable[P, SignalResult]:
  """Record the transform's duration in `calculation_time_ms`.

  Rejected parameters are logged at DEBUG and the failure result is returned
  untouched.
  """

  @functools.wraps(func)
  def wrapper(*args: P.args, **kwargs: P.kwargs) -> SignalResult:
    start = time.perf_counter()
    result = func(*args, **kwargs)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    if not result.ok:
      logger.debug(f"{func.__name__} rejected parameters: {result.error}")
      return result

    return result.model_copy(update={"calculation_time_ms": elapsed_ms})

  return wrapper
