"""
Service classes for the interview review system.

AnalysisRequestBuilder composes the outbound multimodal request,
InterviewAnalysisService executes it and validates the response, and
QuestionGenerationService drives the question generator tools.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .models import AnalysisResult, FollowUpSuggestion, GeneratedQuestion
from .prompts import InterviewPrompts
from .schemas import (
    analysis_response_schema, follow_up_response_schema, questions_response_schema,
    parse_analysis_result, parse_follow_up, parse_generated_questions,
)
from ..config import (
    OUTPUT_LANGUAGE, QUESTION_COUNT, ANALYSIS_THINKING_BUDGET, QUESTION_THINKING_BUDGET,
    ANALYSIS_TEMPERATURE, QUESTION_TEMPERATURE,
)
from ..errors import AnalysisError, GenerationError
from ..infrastructure.llm import inline_data_part, text_part
from ..infrastructure.media import MediaPayload

logger = logging.getLogger("services")


@dataclass(frozen=True)
class AnalysisRequest:
    """One outbound analysis request: instruction, attachments and output schema."""
    prompt: str
    media: MediaPayload
    response_schema: Dict[str, Any]
    cv: Optional[MediaPayload] = None
    temperature: float = ANALYSIS_TEMPERATURE
    thinking_budget: int = ANALYSIS_THINKING_BUDGET

    def parts(self) -> List[Dict[str, Any]]:
        """Content parts: optional résumé, then the interview media, then the instruction."""
        parts = []
        if self.cv is not None:
            parts.append(inline_data_part(self.cv.mime_type, self.cv.data_base64))
        parts.append(inline_data_part(self.media.mime_type, self.media.data_base64))
        parts.append(text_part(self.prompt))
        return parts


class AnalysisRequestBuilder:
    """Turns candidate metadata and encoded payloads into an AnalysisRequest."""

    def __init__(self, language: str = OUTPUT_LANGUAGE, thinking_budget: int = ANALYSIS_THINKING_BUDGET):
        self.language = language
        self.thinking_budget = thinking_budget

    def build(self,
              candidate_name: str,
              position: str,
              media: MediaPayload,
              cv: Optional[MediaPayload] = None) -> AnalysisRequest:
        prompt = InterviewPrompts.analysis_prompt(
            candidate_name=candidate_name,
            position=position,
            language=self.language,
            has_cv=cv is not None,
        )
        return AnalysisRequest(
            prompt=prompt,
            media=media,
            cv=cv,
            response_schema=analysis_response_schema(self.language),
            thinking_budget=self.thinking_budget,
        )


class InterviewAnalysisService:
    """Executes analysis requests against the external model."""

    def __init__(self, llm_client, request_builder: Optional[AnalysisRequestBuilder] = None):
        self.llm_client = llm_client
        self.request_builder = request_builder or AnalysisRequestBuilder()

    def analyze(self,
                candidate_name: str,
                position: str,
                media: MediaPayload,
                cv: Optional[MediaPayload] = None) -> AnalysisResult:
        """
        Run one analysis call. Failures are not retried.

        Returns:
            Validated AnalysisResult

        Raises:
            AnalysisError: Transport failure, empty response, or non-conforming response
        """
        request = self.request_builder.build(candidate_name, position, media, cv)
        logger.info("Analyzing interview for %s (%s, cv=%s)", candidate_name, media.mime_type, cv is not None)
        logger.debug("Analysis prompt: %s", request.prompt)

        try:
            text = self.llm_client.generate_content(
                request.parts(),
                response_schema=request.response_schema,
                temperature=request.temperature,
                thinking_budget=request.thinking_budget,
            )
            result = parse_analysis_result(text)
        except AnalysisError as e:
            logger.error("Gemini analysis error (%s): %s", type(e).__name__, e)
            raise
        except Exception as e:
            logger.error("Gemini analysis error: %s", e)
            raise AnalysisError(str(e) or None) from e

        logger.info("Analysis complete for %s: match=%s risk=%s disc=%s", candidate_name,
                    result.match_score, result.risk_level.value, result.disc_profile.dominant_type.value)
        return result


class QuestionGenerationService:
    """Drafts interview questions and simulates follow-up probing."""

    def __init__(self,
                 llm_client,
                 language: str = OUTPUT_LANGUAGE,
                 question_count: int = QUESTION_COUNT,
                 thinking_budget: int = QUESTION_THINKING_BUDGET):
        self.llm_client = llm_client
        self.language = language
        self.question_count = question_count
        self.thinking_budget = thinking_budget

    def generate_questions(self, position: str, experience_level: str, skills: str) -> List[GeneratedQuestion]:
        """
        Draft question_count questions for a position.

        Raises:
            GenerationError: On any failure, including an empty question list
        """
        prompt = InterviewPrompts.questions_prompt(
            position, experience_level, skills, self.language, self.question_count
        )
        try:
            text = self.llm_client.generate_content(
                [text_part(prompt)],
                response_schema=questions_response_schema(self.language),
                temperature=QUESTION_TEMPERATURE,
                thinking_budget=self.thinking_budget,
            )
            questions = parse_generated_questions(text)
        except Exception as e:
            logger.error("Question generation error: %s", e)
            raise GenerationError() from e

        if not questions:
            logger.error("Question generation returned no questions")
            raise GenerationError()
        if len(questions) != self.question_count:
            logger.warning("Expected %d questions, model returned %d", self.question_count, len(questions))
        return questions[:self.question_count]

    def generate_follow_up(self, original_question: str, candidate_answer: str) -> FollowUpSuggestion:
        """
        Suggest one probing follow-up for a simulated answer.

        Raises:
            GenerationError: On any failure
        """
        prompt = InterviewPrompts.follow_up_prompt(original_question, candidate_answer, self.language)
        try:
            text = self.llm_client.generate_content(
                [text_part(prompt)],
                response_schema=follow_up_response_schema(self.language),
                temperature=QUESTION_TEMPERATURE,
                thinking_budget=self.thinking_budget,
            )
            return parse_follow_up(text)
        except Exception as e:
            logger.error("Follow-up generation error: %s", e)
            raise GenerationError("Gagal membuat pertanyaan lanjutan.") from e
