import pytest

from talentinsight.config import ANALYSIS_THINKING_BUDGET, QUESTION_THINKING_BUDGET
from talentinsight.errors import AnalysisError, EmptyResponseError, GenerationError, TransportError
from talentinsight.infrastructure.media import MediaPayload
from talentinsight.interview.services import (
    AnalysisRequestBuilder, InterviewAnalysisService, QuestionGenerationService,
)
from talentinsight.interview.testing import (
    MockLLMClient, sample_analysis_json, sample_follow_up_json, sample_questions_json,
)

MEDIA = MediaPayload(data_base64="AAAA", mime_type="video/mp4", filename="wawancara.mp4")
CV = MediaPayload(data_base64="JVBERg==", mime_type="application/pdf", filename="cv.pdf")


class TestAnalysisRequestBuilder:

    def test_parts_without_cv(self):
        request = AnalysisRequestBuilder().build("Budi", "Data Analyst", MEDIA)
        parts = request.parts()

        assert parts[0] == {"inlineData": {"mimeType": "video/mp4", "data": "AAAA"}}
        assert "text" in parts[1]
        assert len(parts) == 2
        assert "Budi" in request.prompt and "Data Analyst" in request.prompt
        assert request.thinking_budget == ANALYSIS_THINKING_BUDGET

    def test_cv_precedes_media(self):
        parts = AnalysisRequestBuilder().build("Budi", "Data Analyst", MEDIA, cv=CV).parts()
        assert [p.get("inlineData", {}).get("mimeType") for p in parts] == ["application/pdf", "video/mp4", None]

    def test_output_language_is_threaded_through(self):
        request = AnalysisRequestBuilder(language="English").build("Budi", "Data Analyst", MEDIA)
        assert "**English**" in request.prompt
        assert "English" in request.response_schema["properties"]["recommendation"]["description"]


class TestInterviewAnalysisService:

    def test_returns_validated_result(self):
        client = MockLLMClient([sample_analysis_json()])
        result = InterviewAnalysisService(client).analyze("Budi", "Data Analyst", MEDIA)

        assert result.match_score == 85
        kwargs = client.request_history[0]["kwargs"]
        assert kwargs["response_schema"]["type"] == "OBJECT"
        assert kwargs["thinking_budget"] == ANALYSIS_THINKING_BUDGET

    def test_empty_text_raises_empty_response(self):
        with pytest.raises(EmptyResponseError):
            InterviewAnalysisService(MockLLMClient([""])).analyze("Budi", "Data Analyst", MEDIA)

    def test_transport_error_propagates(self):
        client = MockLLMClient([TransportError("down", status_code=503)])
        with pytest.raises(TransportError) as excinfo:
            InterviewAnalysisService(client).analyze("Budi", "Data Analyst", MEDIA)
        assert excinfo.value.status_code == 503

    def test_unexpected_error_is_wrapped(self):
        client = MockLLMClient([RuntimeError("boom")])
        with pytest.raises(AnalysisError):
            InterviewAnalysisService(client).analyze("Budi", "Data Analyst", MEDIA)

    def test_no_retry_on_failure(self):
        client = MockLLMClient(["", sample_analysis_json()])
        with pytest.raises(AnalysisError):
            InterviewAnalysisService(client).analyze("Budi", "Data Analyst", MEDIA)
        assert client.call_count == 1


class TestQuestionGenerationService:

    def test_generates_five_questions(self):
        client = MockLLMClient([sample_questions_json(5)])
        questions = QuestionGenerationService(client).generate_questions("Backend Engineer", "Senior", "Go, SQL")

        assert len(questions) == 5
        kwargs = client.request_history[0]["kwargs"]
        assert kwargs["thinking_budget"] == QUESTION_THINKING_BUDGET
        assert kwargs["response_schema"]["type"] == "ARRAY"
        prompt = client.request_history[0]["parts"][0]["text"]
        assert "Backend Engineer" in prompt and "Go, SQL" in prompt and "Senior" in prompt

    def test_extra_questions_are_truncated(self):
        client = MockLLMClient([sample_questions_json(7)])
        assert len(QuestionGenerationService(client).generate_questions("PM", "Junior", "Roadmap")) == 5

    def test_short_list_is_accepted(self):
        client = MockLLMClient([sample_questions_json(3)])
        assert len(QuestionGenerationService(client).generate_questions("PM", "Junior", "Roadmap")) == 3

    def test_empty_list_is_a_failure(self):
        with pytest.raises(GenerationError):
            QuestionGenerationService(MockLLMClient(["[]"])).generate_questions("PM", "Junior", "Roadmap")

    def test_any_failure_becomes_generation_error(self):
        with pytest.raises(GenerationError) as excinfo:
            QuestionGenerationService(MockLLMClient(["not json"])).generate_questions("PM", "Junior", "Roadmap")
        assert excinfo.value.message == "Gagal membuat pertanyaan. Silakan coba lagi."

    def test_follow_up(self):
        client = MockLLMClient([sample_follow_up_json()])
        suggestion = QuestionGenerationService(client).generate_follow_up("Ceritakan proyek Anda", "Saya memimpin tim")

        assert suggestion.explanation
        prompt = client.request_history[0]["parts"][0]["text"]
        assert "Ceritakan proyek Anda" in prompt and "Saya memimpin tim" in prompt

    def test_follow_up_failure(self):
        with pytest.raises(GenerationError) as excinfo:
            QuestionGenerationService(MockLLMClient([""])).generate_follow_up("Q", "Jawaban panjang")
        assert excinfo.value.message == "Gagal membuat pertanyaan lanjutan."
