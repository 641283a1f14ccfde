"""Logging configuration for the signal_scope package."""

import coloredlogs


def setup_logging(level: str = "INFO") -> None:
  """Install colored console logging on the root logger.

  Called once by the signal-scope CLI callback, before serve, generate or
  benchmark run. The HTTP server logs through the same root handler; its
  werkzeug request log is set to the same level by the serve command.

  Args:
    level: Logging level (e.g., "INFO", "DEBUG", "WARNING").
  """
  log_format = "%(asctime)s | %(levelname)-8s | %(module)s | %(message)s"
  coloredlogs.install(
    level=level,
    fmt=log_format,
    datefmt="%H:%M:%S",
    is_system_wide=True,
  )
