"""Waveform synthesis for modulation and line-coding demonstrations."""

__version__ = "0.1.0"
