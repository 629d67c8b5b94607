"""Utility modules for imports, logging, and helpers."""

from .imports import load_pyaudio, with_suppressed_audio_warnings
from .logging import setup_logging

__all__ = ["load_pyaudio", "with_suppressed_audio_warnings", "setup_logging"]
