"""Interview review components.

This module contains the business logic for reviewing recorded interviews:
data models, response schemas, prompts, the analysis and question services,
and workflow events. The stateful workflows live in `workflow` and
`question_tool` and are imported from there directly.
"""

# Data models (imported first; the candidate store depends on them)
from .models import (
    CandidateStatus, Speaker, DiscType, EyeContact, Defensiveness, RiskLevel,
    TranscriptionTurn, PersonalityTraits, DiscProfile, EmotionAnalysis, AnalysisResult,
    Candidate, GeneratedQuestion, FollowUpSuggestion, DashboardStats,
)

# Structured schemas and parsers
from .schemas import (
    AnalysisResultSchema, analysis_response_schema, questions_response_schema,
    follow_up_response_schema, parse_analysis_result, parse_generated_questions,
    parse_follow_up,
)

from .prompts import InterviewPrompts

# Service classes
from .services import (
    AnalysisRequest, AnalysisRequestBuilder, InterviewAnalysisService, QuestionGenerationService,
)

# Event system
from .events import (
    EventBus, EventLogger, SessionMetrics, EventType, WorkflowEvent,
    AnalysisStartedEvent, AnalysisCompletedEvent, AnalysisFailedEvent,
    ErrorOccurredEvent, create_event_bus,
)

__all__ = [
    # Data models
    "CandidateStatus", "Speaker", "DiscType", "EyeContact", "Defensiveness", "RiskLevel",
    "TranscriptionTurn", "PersonalityTraits", "DiscProfile", "EmotionAnalysis", "AnalysisResult",
    "Candidate", "GeneratedQuestion", "FollowUpSuggestion", "DashboardStats",

    # Schemas
    "AnalysisResultSchema", "analysis_response_schema", "questions_response_schema",
    "follow_up_response_schema", "parse_analysis_result", "parse_generated_questions",
    "parse_follow_up",

    # Prompts and services
    "InterviewPrompts",
    "AnalysisRequest", "AnalysisRequestBuilder", "InterviewAnalysisService", "QuestionGenerationService",

    # Events
    "EventBus", "EventLogger", "SessionMetrics", "EventType", "WorkflowEvent",
    "AnalysisStartedEvent", "AnalysisCompletedEvent", "AnalysisFailedEvent",
    "ErrorOccurredEvent", "create_event_bus",
]
