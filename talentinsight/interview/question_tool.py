"""
Interview question generator with a follow-up simulator.

Drafts questions for a role, lets the recruiter type a simulated candidate
answer under each one, and asks the model for a probing follow-up.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .events import EventBus, EventType, WorkflowEvent, ErrorOccurredEvent, create_event_bus
from .models import FollowUpSuggestion, GeneratedQuestion
from .services import QuestionGenerationService
from ..config import MIN_FOLLOW_UP_ANSWER_CHARS
from ..errors import GenerationError

logger = logging.getLogger("question_tool")

QUESTION_LEVELS = ["Intern", "Junior", "Mid-Level", "Senior", "Lead/Manager"]
DEFAULT_QUESTION_LEVEL = "Mid-Level"


@dataclass
class QuestionRequest:
    position: str = ""
    experience_level: str = DEFAULT_QUESTION_LEVEL
    skills: str = ""


class QuestionGeneratorTool:
    """State of one question-generation session."""

    def __init__(self,
                 service: QuestionGenerationService,
                 event_bus: Optional[EventBus] = None,
                 min_answer_chars: int = MIN_FOLLOW_UP_ANSWER_CHARS):
        self.service = service
        self.event_bus = event_bus or create_event_bus()
        self.min_answer_chars = min_answer_chars

        self.request = QuestionRequest()
        self.questions: List[GeneratedQuestion] = []
        self.answers: Dict[int, str] = {}
        self.follow_ups: Dict[int, FollowUpSuggestion] = {}
        self.follow_up_errors: Dict[int, str] = {}
        self.error: Optional[str] = None
        self.is_generating = False

    def generate(self, position: str, experience_level: str = DEFAULT_QUESTION_LEVEL, skills: str = "") -> bool:
        """
        Draft a fresh question set, discarding earlier answers and follow-ups.

        Returns:
            True on success; on failure `error` is set and the list stays empty
        """
        self.request = QuestionRequest(position.strip(), experience_level, skills.strip())
        if not self.request.position or not self.request.skills:
            self.error = "Harap isi posisi dan keahlian yang dibutuhkan."
            return False

        self.questions = []
        self.answers = {}
        self.follow_ups = {}
        self.follow_up_errors = {}
        self.error = None
        self.is_generating = True
        try:
            self.questions = self.service.generate_questions(
                self.request.position, self.request.experience_level, self.request.skills
            )
        except GenerationError as e:
            self.error = e.message
            self.event_bus.emit(ErrorOccurredEvent("questions", type(e).__name__, e.message))
            return False
        finally:
            self.is_generating = False

        self.event_bus.emit(WorkflowEvent(EventType.QUESTIONS_GENERATED, self.request.position,
                                          {"count": len(self.questions)}))
        return True

    def _question_at(self, index: int) -> GeneratedQuestion:
        if not 0 <= index < len(self.questions):
            raise IndexError(f"No question at index {index}")
        return self.questions[index]

    def set_answer(self, index: int, text: str) -> None:
        """Record the simulated answer under question `index`."""
        self._question_at(index)
        self.answers[index] = text

    def can_generate_follow_up(self, index: int) -> bool:
        """A follow-up needs an answer of at least min_answer_chars after trimming."""
        return len(self.answers.get(index, "").strip()) >= self.min_answer_chars

    def generate_follow_up(self, index: int) -> Optional[FollowUpSuggestion]:
        """
        Ask for a probing follow-up to the simulated answer of question `index`.

        Returns:
            The suggestion, or None when the answer is too short or the call failed
        """
        question = self._question_at(index)
        if not self.can_generate_follow_up(index):
            logger.debug("Follow-up skipped for question %d: answer too short", index)
            return None

        self.follow_up_errors.pop(index, None)
        try:
            suggestion = self.service.generate_follow_up(question.question, self.answers[index].strip())
        except GenerationError as e:
            self.follow_up_errors[index] = e.message
            self.event_bus.emit(ErrorOccurredEvent("follow_up", type(e).__name__, e.message))
            return None

        self.follow_ups[index] = suggestion
        self.event_bus.emit(WorkflowEvent(EventType.FOLLOW_UP_GENERATED, question.question))
        return suggestion
