"""HTTP transport for the waveform synthesis engine."""

from signal_scope.server.app import RequestError, create_app

__all__ = ["RequestError", "create_app"]
