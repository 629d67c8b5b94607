"""
Audio assembly and transport encoding.

Recorded chunks are joined into a single mono 16 kHz PCM16 WAV container, and
binary payloads are converted to base64 text for the analysis request.
"""
import io
import wave
import base64
import binascii
from math import gcd
from typing import Iterable

import numpy as np
from scipy.signal import resample_poly

from ...config import SAMPLE_RATE_TARGET
from ...errors import PayloadEncodingError


def stereo_to_mono(x: np.ndarray) -> np.ndarray:
    """Convert interleaved multi-channel audio to mono by averaging channels."""
    return np.mean(x, axis=1)


def remove_dc(x: np.ndarray) -> np.ndarray:
    """Remove DC offset from audio signal."""
    if x.size == 0:
        return x
    return x - np.mean(x)


def resample(mono: np.ndarray, sr_from: int, sr_to: int) -> np.ndarray:
    """Resample mono audio between integer sample rates."""
    if sr_from == sr_to or mono.size == 0:
        return mono.astype(np.float32)
    g = gcd(sr_from, sr_to)
    return resample_poly(mono, up=sr_to // g, down=sr_from // g).astype(np.float32)


def pcm16_wav_bytes(pcm16: np.ndarray, sr: int, channels: int = 1) -> bytes:
    """Write PCM16 audio data into an in-memory WAV container."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(2)
        wf.setframerate(sr)
        wf.writeframes(pcm16.astype(np.int16).tobytes())
    return buf.getvalue()


def assemble_wav(chunks: Iterable[bytes],
                 sr_capture: int,
                 channels: int = 1,
                 sr_target: int = SAMPLE_RATE_TARGET) -> bytes:
    """
    Concatenate raw PCM16 chunks into one mono WAV at the target rate.

    Args:
        chunks: Raw little-endian int16 frames in capture order
        sr_capture: Sample rate the chunks were captured at
        channels: Interleaved channel count of the chunks
        sr_target: Output sample rate

    Returns:
        WAV file bytes
    """
    raw = b"".join(chunks)
    # Drop a trailing partial frame, if any
    frame_bytes = 2 * channels
    raw = raw[:len(raw) - (len(raw) % frame_bytes)]

    data = np.frombuffer(raw, dtype=np.int16).astype(np.float32) / 32768.0
    if channels > 1:
        data = stereo_to_mono(data.reshape(-1, channels))
    mono = remove_dc(data)
    y = resample(mono, sr_capture, sr_target)

    pcm16 = np.clip(y * 32767, -32768, 32767).astype(np.int16)
    return pcm16_wav_bytes(pcm16, sr_target, channels=1)


def wav_duration_seconds(wav_bytes: bytes) -> float:
    with wave.open(io.BytesIO(wav_bytes), "rb") as wf:
        rate = wf.getframerate()
        return wf.getnframes() / rate if rate else 0.0


def encode_base64(data: bytes) -> str:
    """
    Convert a binary payload to transport-safe base64 text.

    Raises:
        PayloadEncodingError: If the payload is not bytes-like
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise PayloadEncodingError(f"Payload tidak dapat dibaca: {type(data).__name__}")
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_base64(text: str) -> bytes:
    """Inverse of encode_base64."""
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise PayloadEncodingError(f"Teks base64 tidak valid: {e}") from e
