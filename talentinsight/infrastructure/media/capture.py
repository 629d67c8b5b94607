"""
Microphone capture and the recording state machine.

The recorder backend owns the hardware stream; RecordingSession owns the
Idle -> Recording -> Recorded lifecycle, the elapsed-time counter, chunk
buffering and the playback file of a finished recording.
"""
import os
import tempfile
import threading
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ...config import (
    CHANNELS, SAMPLE_RATE_CAPTURE, SAMPLE_RATE_TARGET, FRAME_MS,
    RECORDING_MIME_TYPE, RECORDING_FILENAME, TICK_SECONDS,
)
from ...errors import CaptureError, DeviceNotFoundError, RecordingStateError, classify_capture_error
from ...utils import load_pyaudio, with_suppressed_audio_warnings
from .processing import assemble_wav, wav_duration_seconds

logger = logging.getLogger("audio_capture")

ChunkCallback = Callable[[bytes], None]


def find_input_device(pa) -> tuple:
    """
    Pick the microphone to record from.
    Returns (device_index, channels, sample_rate).

    Raises:
        DeviceNotFoundError: If the host has no input-capable device
    """
    try:
        info = pa.get_default_input_device_info()
    except (IOError, OSError):
        info = None

    if info is None or int(info.get("maxInputChannels", 0)) <= 0:
        info = None
        for i in range(pa.get_device_count()):
            candidate = pa.get_device_info_by_index(i)
            if int(candidate.get("maxInputChannels", 0)) > 0:
                info = candidate
                break

    if info is None:
        raise DeviceNotFoundError()

    channels = min(CHANNELS, int(info["maxInputChannels"])) or 1
    sample_rate = int(info.get("defaultSampleRate") or SAMPLE_RATE_CAPTURE)
    logger.info(f"Using input device {info['index']}: {info.get('name', '?')} "
                f"({channels} ch @ {sample_rate} Hz)")
    return int(info["index"]), channels, sample_rate


class PyAudioRecorder:
    """Recorder backend streaming PCM16 chunks from a PortAudio input device."""

    def __init__(self,
                 input_device: Optional[int] = None,
                 num_channels: int = CHANNELS,
                 sr_capture: int = SAMPLE_RATE_CAPTURE,
                 frame_ms: int = FRAME_MS):
        self.input_device = input_device
        self.channels = num_channels
        self.sample_rate = sr_capture
        self.frame_ms = frame_ms
        self._pa = None
        self._stream = None

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    @with_suppressed_audio_warnings
    def open(self, on_chunk: ChunkCallback) -> None:
        """
        Acquire the microphone and start streaming chunks to on_chunk.

        Raises:
            CaptureError: Classified failure (unsupported, denied, not found, busy, generic)
        """
        try:
            pyaudio = load_pyaudio()
            self._pa = pyaudio.PyAudio()

            if self.input_device is None:
                self.input_device, self.channels, self.sample_rate = find_input_device(self._pa)

            frames_per_buffer = max(1, int(self.sample_rate * self.frame_ms / 1000))

            def _callback(in_data, frame_count, time_info, status):
                if in_data:
                    on_chunk(in_data)
                return (None, pyaudio.paContinue)

            self._stream = self._pa.open(
                format=pyaudio.paInt16,
                channels=self.channels,
                rate=self.sample_rate,
                input=True,
                input_device_index=self.input_device,
                frames_per_buffer=frames_per_buffer,
                stream_callback=_callback,
            )
            self._stream.start_stream()
            logger.info("Microphone opened successfully")
        except Exception as e:
            self.close()
            error = classify_capture_error(e)
            logger.error("Failed to open microphone: %s (%s)", e, type(error).__name__)
            raise error from e

    def close(self) -> None:
        """Stop the stream and release the device. Safe to call more than once."""
        stream, pa = self._stream, self._pa
        self._stream, self._pa = None, None
        try:
            if stream is not None:
                try:
                    stream.stop_stream()
                finally:
                    stream.close()
        finally:
            if pa is not None:
                pa.terminate()
                logger.info("Microphone released")


class RecordingState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    RECORDED = "recorded"


@dataclass
class RecordedAudio:
    """A finished recording: one WAV payload plus its local playback file."""
    data: bytes
    mime_type: str = RECORDING_MIME_TYPE
    filename: str = RECORDING_FILENAME
    elapsed_seconds: int = 0
    playback_path: Optional[str] = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def duration_seconds(self) -> float:
        return wav_duration_seconds(self.data)


def format_elapsed(seconds: int) -> str:
    """Format elapsed seconds as m:ss."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


class RecordingSession:
    """
    Idle -> Recording -> Recorded state machine around one recorder backend.

    Only one session can record at a time; start() is only legal from Idle.
    The microphone is released on every exit path from Recording, and the
    playback file of a finished recording is removed when it is replaced,
    deleted or the session is closed.
    """

    def __init__(self,
                 recorder_factory: Callable[[], object] = PyAudioRecorder,
                 auto_tick: bool = True,
                 tick_seconds: float = TICK_SECONDS,
                 workdir: Optional[str] = None,
                 sr_target: int = SAMPLE_RATE_TARGET):
        self.recorder_factory = recorder_factory
        self.auto_tick = auto_tick
        self.tick_seconds = tick_seconds
        self.workdir = workdir
        self.sr_target = sr_target

        self.state = RecordingState.IDLE
        self.elapsed_seconds = 0
        self.recording: Optional[RecordedAudio] = None

        self._recorder = None
        self._chunks: List[bytes] = []
        self._lock = threading.Lock()
        self._ticker: Optional[threading.Thread] = None
        self._ticker_stop = threading.Event()

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    @property
    def is_recording(self) -> bool:
        return self.state == RecordingState.RECORDING

    @property
    def has_recording(self) -> bool:
        return self.state == RecordingState.RECORDED and self.recording is not None

    @property
    def elapsed_display(self) -> str:
        return format_elapsed(self.elapsed_seconds)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> None:
        """
        Idle -> Recording: acquire the microphone, reset the counter, buffer chunks.

        Raises:
            RecordingStateError: If not Idle
            CaptureError: If the microphone could not be acquired (state stays Idle)
        """
        if self.state == RecordingState.RECORDING:
            raise RecordingStateError()
        if self.state == RecordingState.RECORDED:
            raise RecordingStateError("Hapus rekaman yang ada sebelum merekam ulang.")

        with self._lock:
            self._chunks = []
        recorder = self.recorder_factory()
        recorder.open(self._on_chunk)

        self._recorder = recorder
        self.elapsed_seconds = 0
        self.state = RecordingState.RECORDING
        if self.auto_tick:
            self._start_ticker()
        logger.info("Recording started")

    def tick(self) -> None:
        """Advance the elapsed counter by one second while recording."""
        if self.state == RecordingState.RECORDING:
            self.elapsed_seconds += 1

    def stop(self) -> Optional[RecordedAudio]:
        """
        Recording -> Recorded. No-op (returns None) when not recording.

        Returns:
            The finished RecordedAudio

        Raises:
            CaptureError: If the device could not be released; the audio
                captured so far is still kept as the recording
        """
        if self.state != RecordingState.RECORDING:
            return None

        recorder = self._recorder
        self._stop_ticker()
        try:
            self._release_recorder()
        finally:
            with self._lock:
                chunks, self._chunks = self._chunks, []
            sample_rate = getattr(recorder, "sample_rate", self.sr_target)
            channels = getattr(recorder, "channels", 1)
            wav = assemble_wav(chunks, sample_rate, channels, self.sr_target)

            self._release_playback()
            self.recording = RecordedAudio(
                data=wav,
                elapsed_seconds=self.elapsed_seconds,
                playback_path=self._write_playback(wav),
            )
            self.state = RecordingState.RECORDED
            logger.info("Recording stopped after %ss (%d bytes, %d chunks)",
                        self.elapsed_seconds, len(wav), len(chunks))
        return self.recording

    def delete(self) -> None:
        """Discard any recording (stopping an active one) and return to Idle."""
        if self.state == RecordingState.RECORDING:
            self._stop_ticker()
            try:
                self._release_recorder()
            except CaptureError as e:
                logger.warning("Discarding recording after release failure: %s", e)
            with self._lock:
                self._chunks = []
            logger.info("Active recording discarded")
        self._release_playback()
        self.recording = None
        self.elapsed_seconds = 0
        self.state = RecordingState.IDLE

    def close(self) -> None:
        """Tear down the session, releasing the device and playback file."""
        self.delete()

    def __enter__(self) -> "RecordingSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_chunk(self, data: bytes) -> None:
        if data:
            with self._lock:
                self._chunks.append(bytes(data))

    def _release_recorder(self) -> None:
        recorder, self._recorder = self._recorder, None
        if recorder is None:
            return
        try:
            recorder.close()
        except Exception as e:
            error = classify_capture_error(e)
            logger.error("Failed to release microphone: %s (%s)", e, type(error).__name__)
            raise error from e

    def _start_ticker(self) -> None:
        self._ticker_stop.clear()

        def _run():
            while not self._ticker_stop.wait(self.tick_seconds):
                self.tick()

        self._ticker = threading.Thread(target=_run, name="recording-ticker", daemon=True)
        self._ticker.start()

    def _stop_ticker(self) -> None:
        self._ticker_stop.set()
        ticker, self._ticker = self._ticker, None
        if ticker is not None and ticker is not threading.current_thread():
            ticker.join(timeout=self.tick_seconds * 2)

    def _write_playback(self, wav: bytes) -> Optional[str]:
        if self.workdir:
            os.makedirs(self.workdir, exist_ok=True)
        try:
            fd, path = tempfile.mkstemp(prefix="recording-", suffix=".wav", dir=self.workdir)
            with os.fdopen(fd, "wb") as f:
                f.write(wav)
            return path
        except OSError as e:
            logger.warning("Could not write playback file: %s", e)
            return None

    def _release_playback(self) -> None:
        if self.recording is not None and self.recording.playback_path:
            try:
                os.remove(self.recording.playback_path)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not remove playback file %s: %s", self.recording.playback_path, e)
            self.recording.playback_path = None
