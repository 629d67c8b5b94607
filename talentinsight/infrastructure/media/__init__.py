"""
Media capture, file selection and transport encoding.

- capture: microphone recorder backend and the recording state machine
- files: user-selected media/résumé files and transport payloads
- processing: chunk assembly into WAV and base64 conversion
"""

from .capture import (
    PyAudioRecorder, RecordingSession, RecordingState, RecordedAudio, format_elapsed,
)
from .files import MediaFile, MediaPayload, ensure_within_limit, guess_mime_type
from .processing import assemble_wav, encode_base64, decode_base64

__all__ = [
    "PyAudioRecorder",
    "RecordingSession",
    "RecordingState",
    "RecordedAudio",
    "format_elapsed",
    "MediaFile",
    "MediaPayload",
    "ensure_within_limit",
    "guess_mime_type",
    "assemble_wav",
    "encode_base64",
    "decode_base64",
]
