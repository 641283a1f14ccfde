"""Configuration module for the signal_scope service."""

from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
  """Configuration for the HTTP transport.

  Attributes:
    host: Interface the listener binds to.
    port: TCP port the listener binds to.
    log_level: Root logging level passed to setup_logging.
    debug: Whether to run Flask in debug mode.
  """

  host: str = Field("127.0.0.1", description="Interface to bind to.")
  port: int = Field(50051, description="TCP port to bind to.", gt=0, lt=65536)
  log_level: str = Field("INFO", description="Logging level.")
  debug: bool = Field(False, description="Run Flask in debug mode.")

  model_config = {"frozen": True}
