"""
New-interview submission workflow.

Owns the form data, the single active media source (uploaded file or fresh
recording), the optional résumé, and the submission that turns them into a
stored, analysed Candidate.
"""
import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .events import (
    EventBus, EventType, WorkflowEvent, AnalysisStartedEvent, AnalysisCompletedEvent,
    AnalysisFailedEvent, ErrorOccurredEvent, create_event_bus,
)
from .models import Candidate, CandidateStatus
from .services import InterviewAnalysisService
from ..config import MAX_MEDIA_BYTES, MAX_CV_BYTES
from ..errors import (
    CaptureError, MediaTooLargeError, MissingMediaError, RecordingStateError,
    TalentInsightError,
)
from ..infrastructure.data import CandidateStore, new_candidate_id
from ..infrastructure.media import (
    MediaFile, MediaPayload, RecordedAudio, RecordingSession,
    encode_base64, ensure_within_limit,
)
from ..infrastructure.media.files import format_megabytes

logger = logging.getLogger("workflow")

EXPERIENCE_LEVELS = ["Intern", "Junior", "Mid-Level", "Senior", "Executive"]


@dataclass
class InterviewForm:
    """Candidate details entered with a new interview."""
    name: str = ""
    position: str = ""
    email: str = ""
    phone: str = ""
    experience_level: str = "Junior"

    def missing_fields(self) -> list:
        required = {"name": self.name, "position": self.position, "email": self.email}
        return [field_name for field_name, value in required.items() if not value.strip()]


class NewInterviewWorkflow:
    """
    Media capture and submission for one new interview.

    At most one media source is active: selecting a file discards any
    recording, and starting a recording clears the selected file. Errors are
    caught here and exposed as a human-readable `error` message.
    """

    def __init__(self,
                 store: CandidateStore,
                 analysis_service: InterviewAnalysisService,
                 recording_session: Optional[RecordingSession] = None,
                 event_bus: Optional[EventBus] = None,
                 max_media_bytes: int = MAX_MEDIA_BYTES,
                 max_cv_bytes: int = MAX_CV_BYTES):
        self.store = store
        self.analysis_service = analysis_service
        self.recording_session = recording_session or RecordingSession()
        self.event_bus = event_bus or create_event_bus()
        self.max_media_bytes = max_media_bytes
        self.max_cv_bytes = max_cv_bytes

        self.form = InterviewForm()
        self.media_file: Optional[MediaFile] = None
        self.cv_file: Optional[MediaFile] = None
        self.error: Optional[str] = None
        self.is_processing = False
        self.provisional_candidate: Optional[Candidate] = None

    # ------------------------------------------------------------------
    # Media selection
    # ------------------------------------------------------------------

    @property
    def recorded_audio(self) -> Optional[RecordedAudio]:
        return self.recording_session.recording if self.recording_session.has_recording else None

    @property
    def has_media(self) -> bool:
        return self.media_file is not None or self.recorded_audio is not None

    @property
    def can_submit(self) -> bool:
        return not self.is_processing and self.has_media

    def select_media_file(self, source: Union[str, MediaFile]) -> bool:
        """
        Make a local file the interview media, replacing any recording.

        Returns:
            True if the file became the active payload
        """
        media = self._describe(source)
        if media is None:
            return False
        try:
            ensure_within_limit(
                media, self.max_media_bytes,
                "Ukuran file media terlalu besar. Untuk demo ini, harap gunakan file di bawah "
                f"{format_megabytes(self.max_media_bytes)}.",
            )
        except MediaTooLargeError as e:
            self.media_file = None
            self._fail("media", e)
            return False

        if self.recording_session.is_recording or self.recording_session.has_recording:
            self.recording_session.delete()
        self.media_file = media
        self.error = None
        self.event_bus.emit(WorkflowEvent(EventType.MEDIA_SELECTED, media.filename,
                                          {"size_bytes": media.size_bytes, "mime_type": media.mime_type}))
        return True

    def select_cv_file(self, source: Union[str, MediaFile]) -> bool:
        """Attach a résumé. Returns True if accepted."""
        media = self._describe(source)
        if media is None:
            return False
        try:
            ensure_within_limit(
                media, self.max_cv_bytes,
                f"Ukuran CV terlalu besar. Maksimal {format_megabytes(self.max_cv_bytes)}.",
            )
        except MediaTooLargeError as e:
            self.cv_file = None
            self._fail("cv", e)
            return False
        self.cv_file = media
        self.error = None
        return True

    def clear_cv_file(self) -> None:
        self.cv_file = None

    def _describe(self, source: Union[str, MediaFile]) -> Optional[MediaFile]:
        if isinstance(source, MediaFile):
            return source
        try:
            return MediaFile.from_path(source)
        except OSError as e:
            logger.warning("Cannot open %s: %s", source, e)
            self.error = f"File tidak dapat dibuka: {source}"
            return None

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def start_recording(self) -> bool:
        """Start recording; clears a selected file on success."""
        self.error = None
        try:
            self.recording_session.start()
        except (CaptureError, RecordingStateError) as e:
            self._fail("recording", e)
            return False
        self.media_file = None
        self.event_bus.emit(WorkflowEvent(EventType.RECORDING_STARTED, "recording"))
        return True

    def stop_recording(self) -> Optional[RecordedAudio]:
        """Stop recording. Returns None (with `error` set) if the device failed to release."""
        try:
            recorded = self.recording_session.stop()
        except CaptureError as e:
            self._fail("recording", e)
            return None
        if recorded is not None:
            self.event_bus.emit(WorkflowEvent(
                EventType.RECORDING_STOPPED, "recording",
                {"elapsed_seconds": recorded.elapsed_seconds, "size_bytes": recorded.size_bytes},
            ))
        return recorded

    def delete_recording(self) -> None:
        self.recording_session.delete()
        self.event_bus.emit(WorkflowEvent(EventType.RECORDING_DELETED, "recording"))

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self) -> Optional[Candidate]:
        """
        Encode the payloads, run the analysis and store the resulting candidate.

        The candidate is shown as Analyzing (provisional_candidate) while the
        call is in flight; it only reaches the store once the analysis succeeded.

        Returns:
            The stored Interviewed candidate, or None with `error` set
        """
        missing = self.form.missing_fields()
        if missing:
            self.error = f"Harap lengkapi data kandidat: {', '.join(missing)}."
            return None
        if self.recording_session.is_recording:
            self.error = "Hentikan perekaman terlebih dahulu."
            return None
        if not self.has_media:
            self._fail("submit", MissingMediaError())
            return None

        self.is_processing = True
        self.error = None
        try:
            media = self._encode_media()
            cv = self._encode_cv()

            self.provisional_candidate = Candidate(
                id=new_candidate_id(),
                name=self.form.name.strip(),
                position=self.form.position.strip(),
                email=self.form.email.strip(),
                phone=self.form.phone.strip(),
                experience_level=self.form.experience_level,
                status=CandidateStatus.ANALYZING,
                cv_file_name=self.cv_file.filename if self.cv_file else None,
            )
            self.event_bus.emit(AnalysisStartedEvent(self.provisional_candidate.name, media.mime_type, cv is not None))

            result = self.analysis_service.analyze(
                self.provisional_candidate.name, self.provisional_candidate.position, media, cv
            )
            candidate = dataclasses.replace(
                self.provisional_candidate, status=CandidateStatus.INTERVIEWED, analysis=result
            )
            self.store.add(candidate)
            self.event_bus.emit(AnalysisCompletedEvent(
                candidate.id, candidate.name, result.match_score, result.risk_level.value
            ))
            return candidate

        except TalentInsightError as e:
            logger.error("Submission failed: %s", e)
            self.error = e.message
            self.event_bus.emit(AnalysisFailedEvent(self.form.name, type(e).__name__, e.message))
            return None
        finally:
            self.is_processing = False
            self.provisional_candidate = None

    def _encode_media(self) -> MediaPayload:
        if self.media_file is not None:
            return MediaPayload(
                data_base64=encode_base64(self.media_file.read_bytes()),
                mime_type=self.media_file.mime_type,
                filename=self.media_file.filename,
            )
        recorded = self.recorded_audio
        if recorded is None:
            raise MissingMediaError()
        return MediaPayload(
            data_base64=encode_base64(recorded.data),
            mime_type=recorded.mime_type,
            filename=recorded.filename,
        )

    def _encode_cv(self) -> Optional[MediaPayload]:
        if self.cv_file is None:
            return None
        return MediaPayload(
            data_base64=encode_base64(self.cv_file.read_bytes()),
            mime_type=self.cv_file.mime_type,
            filename=self.cv_file.filename,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _fail(self, component: str, error: TalentInsightError) -> None:
        self.error = error.message
        logger.info("%s error: %s", component, error.message)
        self.event_bus.emit(ErrorOccurredEvent(component, type(error).__name__, error.message))

    def reset(self) -> None:
        """Clear the form, media and résumé for the next interview."""
        self.recording_session.delete()
        self.form = InterviewForm()
        self.media_file = None
        self.cv_file = None
        self.error = None

    def close(self) -> None:
        """Release the microphone and any playback file."""
        self.recording_session.close()

    def __enter__(self) -> "NewInterviewWorkflow":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
