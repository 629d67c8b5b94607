"""
Testing infrastructure with mock services for the interview review system.
"""
import json
import copy
from typing import Any, Callable, Dict, List, Optional

from .events import EventBus, SessionMetrics, create_event_bus
from .models import AnalysisResult
from .schemas import parse_analysis_result
from .question_tool import QuestionGeneratorTool
from .services import InterviewAnalysisService, QuestionGenerationService
from .workflow import NewInterviewWorkflow
from ..infrastructure.data import CandidateStore
from ..infrastructure.media import RecordingSession


def sample_analysis_data(**overrides: Any) -> Dict[str, Any]:
    """A schema-conforming analysis response as the model would return it (camelCase)."""
    data = {
        "summary": "Kandidat menunjukkan pemahaman teknis yang kuat dan komunikasi yang jelas.",
        "transcription": [
            {"speaker": "Interviewer", "text": "Ceritakan proyek terakhir Anda."},
            {"speaker": "Candidate", "text": "Saya memimpin migrasi layanan pembayaran ke arsitektur baru."},
        ],
        "keySkills": ["Python", "System Design", "Komunikasi"],
        "redFlags": ["Kurang detail saat membahas kegagalan proyek"],
        "personality": {
            "type": "Analytical",
            "leadership": 7,
            "problemSolving": 8,
            "emotionalControl": 7,
            "confidence": 8,
        },
        "discProfile": {
            "dominantType": "C",
            "dScore": 45,
            "iScore": 30,
            "sScore": 55,
            "cScore": 80,
            "analysis": "Teliti dan terstruktur dalam menjawab.",
        },
        "emotionAnalysis": {
            "nervousness": 3,
            "confidence": 8,
            "eyeContact": "Good",
            "defensiveness": "None",
            "behavioralCues": ["Menjawab dengan tenang"],
        },
        "matchScore": 85,
        "recommendation": "Lanjutkan ke tahap wawancara teknis.",
        "riskLevel": "Low",
        "suggestedFollowUpQuestions": ["Bagaimana Anda menangani konflik dalam tim?"],
    }
    data.update(overrides)
    return data


def sample_analysis_json(**overrides: Any) -> str:
    return json.dumps(sample_analysis_data(**overrides))


def sample_questions_json(count: int = 5) -> str:
    return json.dumps([
        {"question": f"Pertanyaan {i}: ceritakan pengalaman Anda.", "intent": f"Menguji kompetensi {i}"}
        for i in range(1, count + 1)
    ])


def sample_follow_up_json() -> str:
    return json.dumps({
        "followUpQuestion": "Apa hasil terukur dari pendekatan tersebut?",
        "explanation": "Jawaban belum menyebutkan dampak yang konkret.",
    })


def sample_analysis_result(**overrides: Any) -> AnalysisResult:
    return parse_analysis_result(sample_analysis_json(**overrides))


class MockLLMClient:
    """Mock LLM client for testing; replays canned responses in order."""

    def __init__(self, mock_responses: List[Any]):
        self.mock_responses = list(mock_responses)
        self.current_response_idx = 0
        self.request_history: List[Dict[str, Any]] = []

    def generate_content(self, parts: List[Dict[str, Any]], **kwargs) -> str:
        """Return the next canned response; exception instances are raised."""
        self.request_history.append({"parts": copy.deepcopy(parts), "kwargs": kwargs})

        if self.current_response_idx >= len(self.mock_responses):
            return ""
        response = self.mock_responses[self.current_response_idx]
        self.current_response_idx += 1
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def call_count(self) -> int:
        return len(self.request_history)


class FakeRecorder:
    """
    Recorder stand-in for RecordingSession.

    Delivers its configured chunks when closed, as a real stream would have
    done while recording, and records how often it was opened and released.
    `open_error` and `close_error` simulate device failures.
    """

    def __init__(self,
                 chunks: Optional[List[bytes]] = None,
                 open_error: Optional[BaseException] = None,
                 close_error: Optional[BaseException] = None,
                 sample_rate: int = 16000,
                 channels: int = 1):
        self.chunks = list(chunks) if chunks is not None else [b"\x01\x00" * 1600] * 10
        self.open_error = open_error
        self.close_error = close_error
        self.sample_rate = sample_rate
        self.channels = channels
        self.open_count = 0
        self.close_count = 0
        self._on_chunk: Optional[Callable[[bytes], None]] = None

    @property
    def is_open(self) -> bool:
        return self._on_chunk is not None

    def open(self, on_chunk: Callable[[bytes], None]) -> None:
        self.open_count += 1
        if self.open_error is not None:
            raise self.open_error
        self._on_chunk = on_chunk

    def close(self) -> None:
        if self._on_chunk is None:
            return
        for chunk in self.chunks:
            self._on_chunk(chunk)
        self._on_chunk = None
        self.close_count += 1
        if self.close_error is not None:
            raise self.close_error


def fake_recording_session(workdir: Optional[str] = None, **recorder_kwargs) -> RecordingSession:
    """RecordingSession driven by FakeRecorder with manual ticks."""
    return RecordingSession(
        recorder_factory=lambda: FakeRecorder(**recorder_kwargs),
        auto_tick=False,
        workdir=workdir,
    )


def create_mock_review_setup(mock_responses: Optional[List[Any]] = None,
                             workdir: Optional[str] = None,
                             event_bus: Optional[EventBus] = None) -> Dict[str, Any]:
    """Wire store, services, workflow and question tool around a MockLLMClient."""
    metrics = SessionMetrics()
    bus = event_bus or create_event_bus(metrics)
    llm_client = MockLLMClient(mock_responses if mock_responses is not None else [sample_analysis_json()])
    store = CandidateStore()
    workflow = NewInterviewWorkflow(
        store=store,
        analysis_service=InterviewAnalysisService(llm_client),
        recording_session=fake_recording_session(workdir),
        event_bus=bus,
    )
    question_tool = QuestionGeneratorTool(QuestionGenerationService(llm_client), event_bus=bus)
    return {
        "llm_client": llm_client,
        "store": store,
        "workflow": workflow,
        "question_tool": question_tool,
        "event_bus": bus,
        "metrics": metrics,
    }
