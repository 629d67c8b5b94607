import pytest

from talentinsight.infrastructure.data import CandidateStore
from talentinsight.infrastructure.media import RecordingSession
from talentinsight.interview.events import SessionMetrics, create_event_bus
from talentinsight.interview.services import InterviewAnalysisService
from talentinsight.interview.testing import FakeRecorder, MockLLMClient, sample_analysis_json
from talentinsight.interview.workflow import InterviewForm, NewInterviewWorkflow


class RecorderFactory:
    """Hands out FakeRecorders and keeps them for inspection."""

    def __init__(self, **recorder_kwargs):
        self.recorder_kwargs = recorder_kwargs
        self.recorders = []

    def __call__(self):
        recorder = FakeRecorder(**self.recorder_kwargs)
        self.recorders.append(recorder)
        return recorder

    @property
    def last(self):
        return self.recorders[-1]


@pytest.fixture
def recorder_factory():
    return RecorderFactory()


@pytest.fixture
def session(recorder_factory, tmp_path):
    s = RecordingSession(recorder_factory=recorder_factory, auto_tick=False, workdir=str(tmp_path / "rec"))
    yield s
    s.close()


@pytest.fixture
def media_file(tmp_path):
    path = tmp_path / "interview.mp3"
    path.write_bytes(b"ID3" + b"\x00" * 1024)
    return str(path)


@pytest.fixture
def cv_file(tmp_path):
    path = tmp_path / "cv.pdf"
    path.write_bytes(b"%PDF-1.4\n" + b"0" * 512)
    return str(path)


@pytest.fixture
def sparse_file(tmp_path):
    """Create a file of the given apparent size without writing its contents."""
    def _make(name, size_bytes):
        path = tmp_path / name
        with open(path, "wb") as f:
            f.truncate(size_bytes)
        return str(path)
    return _make


@pytest.fixture
def metrics():
    return SessionMetrics()


@pytest.fixture
def llm_client():
    return MockLLMClient([sample_analysis_json()])


@pytest.fixture
def store():
    return CandidateStore()


@pytest.fixture
def workflow(store, llm_client, session, metrics):
    wf = NewInterviewWorkflow(
        store=store,
        analysis_service=InterviewAnalysisService(llm_client),
        recording_session=session,
        event_bus=create_event_bus(metrics),
    )
    wf.form = InterviewForm(name="Budi Santoso", position="Backend Engineer", email="budi@example.com")
    yield wf
    wf.close()
