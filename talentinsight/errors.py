"""
Error taxonomy for TalentInsight.

Capture and validation errors are handled where they occur and never reach the
network layer. Analysis and generation errors propagate up to the workflow that
started the request.
"""
from typing import Optional


class TalentInsightError(Exception):
    """Base class for all TalentInsight errors."""

    default_message = "Terjadi kesalahan."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# =============================================================================
# CAPTURE ERRORS
# =============================================================================

class CaptureError(TalentInsightError):
    """Microphone capture failed for an unclassified reason."""
    default_message = "Gagal mengakses mikrofon."


class CaptureUnsupportedError(CaptureError):
    default_message = (
        "Perangkat ini tidak mendukung perekaman audio. "
        "Silakan gunakan fitur unggah file."
    )


class PermissionDeniedError(CaptureError):
    default_message = (
        "Izin mikrofon ditolak. Harap izinkan akses mikrofon "
        "di pengaturan sistem Anda."
    )


class DeviceNotFoundError(CaptureError):
    default_message = (
        "Mikrofon tidak ditemukan. Pastikan perangkat Anda "
        "memiliki mikrofon yang terhubung."
    )


class DeviceBusyError(CaptureError):
    default_message = (
        "Mikrofon sedang digunakan oleh aplikasi lain atau mengalami kesalahan."
    )


class RecordingStateError(TalentInsightError):
    """Raised on an illegal recording transition (e.g. start while recording)."""
    default_message = "Perekaman sedang berlangsung. Hentikan atau hapus rekaman terlebih dahulu."


# PortAudio host error codes surfaced by pyaudio as OSError(errno, ...)
PA_INVALID_DEVICE = -9996
PA_DEVICE_UNAVAILABLE = -9985
PA_INVALID_CHANNEL_COUNT = -9998


def classify_capture_error(exc: BaseException) -> CaptureError:
    """
    Map a recorder backend exception onto the capture error taxonomy.

    Args:
        exc: Exception raised while opening or starting the input stream

    Returns:
        CaptureError subclass instance carrying a human-readable message
    """
    if isinstance(exc, CaptureError):
        return exc
    if isinstance(exc, ImportError):
        return CaptureUnsupportedError()
    if isinstance(exc, PermissionError):
        return PermissionDeniedError()

    code = getattr(exc, "errno", None)
    if code is None and exc.args and isinstance(exc.args[0], int):
        code = exc.args[0]
    text = str(exc).lower()

    if code in (PA_INVALID_DEVICE, PA_INVALID_CHANNEL_COUNT) or "device not found" in text \
            or "no input device" in text or "invalid device" in text:
        return DeviceNotFoundError()
    if code == PA_DEVICE_UNAVAILABLE or "unavailable" in text or "busy" in text:
        return DeviceBusyError()
    if "permission" in text or "not allowed" in text:
        return PermissionDeniedError()

    detail = str(exc).strip()
    return CaptureError(detail or None)


# =============================================================================
# VALIDATION / ENCODING ERRORS
# =============================================================================

class MediaValidationError(TalentInsightError):
    default_message = "Media tidak valid."


class MediaTooLargeError(MediaValidationError):
    """A selected file exceeds its size ceiling."""

    def __init__(self, message: str, size_bytes: int = 0, limit_bytes: int = 0):
        super().__init__(message)
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class MissingMediaError(MediaValidationError):
    default_message = "Harap unggah atau rekam wawancara terlebih dahulu."


class PayloadEncodingError(TalentInsightError):
    default_message = "Gagal mengonversi file untuk dikirim. Silakan coba lagi."


# =============================================================================
# ANALYSIS / GENERATION ERRORS
# =============================================================================

class AnalysisError(TalentInsightError):
    """Any failure of the external analysis call; never retried automatically."""
    default_message = (
        "Terjadi kesalahan saat analisis AI. Silakan periksa API Key atau coba lagi."
    )


class TransportError(AnalysisError):
    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(AnalysisError):
    default_message = "Tidak ada respons dari AI."


class AnalysisParseError(AnalysisError):
    """Response text was not JSON or did not conform to the declared schema."""
    default_message = "Respons AI tidak sesuai dengan format yang diharapkan."


class GenerationError(TalentInsightError):
    default_message = "Gagal membuat pertanyaan. Silakan coba lagi."


# =============================================================================
# STORE ERRORS
# =============================================================================

class DuplicateCandidateError(TalentInsightError):
    default_message = "Kandidat dengan ID tersebut sudah ada."


class InvalidStatusTransitionError(TalentInsightError):
    default_message = "Perubahan status tidak diizinkan."
