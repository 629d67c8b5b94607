import io
import wave

import numpy as np
import pytest

from talentinsight.errors import MediaTooLargeError, PayloadEncodingError
from talentinsight.infrastructure.media import (
    MediaFile, assemble_wav, decode_base64, encode_base64, ensure_within_limit, guess_mime_type,
)


def _read_wav(data):
    with wave.open(io.BytesIO(data), "rb") as wf:
        return wf.getnchannels(), wf.getframerate(), wf.getnframes()


def test_base64_preserves_bytes():
    payload = bytes(range(256)) * 4
    assert decode_base64(encode_base64(payload)) == payload


def test_encode_rejects_non_bytes():
    with pytest.raises(PayloadEncodingError):
        encode_base64("not bytes")


def test_decode_rejects_garbage():
    with pytest.raises(PayloadEncodingError):
        decode_base64("###")


def test_assemble_wav_resamples_to_target_rate():
    tone = (np.sin(np.linspace(0, 2 * np.pi * 440, 48000)) * 10000).astype(np.int16)
    chunks = [tone[i:i + 4800].tobytes() for i in range(0, len(tone), 4800)]

    channels, rate, frames = _read_wav(assemble_wav(chunks, sr_capture=48000))

    assert (channels, rate) == (1, 16000)
    assert frames == 16000


def test_assemble_wav_with_no_audio_is_still_a_wav():
    data = assemble_wav([], sr_capture=48000)
    assert data[:4] == b"RIFF"
    assert _read_wav(data)[2] == 0


def test_assemble_wav_drops_partial_frame():
    data = assemble_wav([b"\x01\x00\x02\x00\x03"], sr_capture=16000)
    assert _read_wav(data)[2] == 2


@pytest.mark.parametrize("filename,expected", [
    ("wawancara.mp3", "audio/mpeg"),
    ("wawancara.m4a", "audio/mp4"),
    ("wawancara.mp4", "video/mp4"),
    ("cv.pdf", "application/pdf"),
    ("cv.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    ("unknown.zzz", "application/octet-stream"),
])
def test_guess_mime_type(filename, expected):
    assert guess_mime_type(filename) == expected


def test_media_file_from_path(tmp_path):
    path = tmp_path / "rekaman.wav"
    path.write_bytes(b"RIFF" + b"\x00" * 100)

    media = MediaFile.from_path(str(path))

    assert media.filename == "rekaman.wav"
    assert media.size_bytes == 104
    assert media.mime_type in ("audio/wav", "audio/x-wav")
    assert media.read_bytes()[:4] == b"RIFF"


def test_unreadable_file_is_an_encoding_error(tmp_path):
    path = tmp_path / "gone.mp3"
    path.write_bytes(b"x")
    media = MediaFile.from_path(str(path))
    path.unlink()
    with pytest.raises(PayloadEncodingError):
        media.read_bytes()


def test_ensure_within_limit():
    media = MediaFile(path="/tmp/x.mp4", filename="x.mp4", size_bytes=11, mime_type="video/mp4")
    ensure_within_limit(media, 11, "too big")
    with pytest.raises(MediaTooLargeError) as excinfo:
        ensure_within_limit(media, 10, "too big")
    assert excinfo.value.message == "too big"
    assert excinfo.value.limit_bytes == 10
