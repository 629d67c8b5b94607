"""
Structured output schemas for the external model and validators for its responses.

Each response is checked against an explicit pydantic schema before it is
treated as a domain object. Any mismatch raises a typed parse error instead of
being partially accepted.
"""
import json
import logging
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictStr, ValidationError
from pydantic.alias_generators import to_camel

from .models import (
    AnalysisResult, DiscProfile, DiscType, EmotionAnalysis, EyeContact,
    Defensiveness, FollowUpSuggestion, GeneratedQuestion, PersonalityTraits,
    RiskLevel, Speaker, TranscriptionTurn,
)
from ..errors import AnalysisParseError, EmptyResponseError

logger = logging.getLogger("schemas")


# =============================================================================
# RESPONSE VALIDATORS
# =============================================================================

class _WireModel(BaseModel):
    """Base for response models: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# Scores and texts must arrive with their JSON types; "85" or true is not a score
Score = StrictFloat
Text = StrictStr


class TranscriptionTurnSchema(_WireModel):
    speaker: Speaker
    text: Text


class PersonalitySchema(_WireModel):
    type: Text
    leadership: Score
    problem_solving: Score
    emotional_control: Score
    confidence: Score


class DiscProfileSchema(_WireModel):
    dominant_type: DiscType
    d_score: Score
    i_score: Score
    s_score: Score
    c_score: Score
    analysis: Text


class EmotionAnalysisSchema(_WireModel):
    nervousness: Score
    confidence: Score
    eye_contact: EyeContact
    defensiveness: Defensiveness
    behavioral_cues: List[Text]


class AnalysisResultSchema(_WireModel):
    summary: Text
    transcription: List[TranscriptionTurnSchema]
    key_skills: List[Text]
    red_flags: List[Text]
    personality: PersonalitySchema
    disc_profile: DiscProfileSchema
    emotion_analysis: EmotionAnalysisSchema
    match_score: Score
    recommendation: Text
    risk_level: RiskLevel
    suggested_follow_up_questions: List[Text]

    def to_domain(self) -> AnalysisResult:
        p, d, e = self.personality, self.disc_profile, self.emotion_analysis
        return AnalysisResult(
            summary=self.summary,
            transcription=[TranscriptionTurn(speaker=t.speaker, text=t.text) for t in self.transcription],
            key_skills=list(self.key_skills),
            red_flags=list(self.red_flags),
            personality=PersonalityTraits(
                type=p.type,
                leadership=p.leadership,
                problem_solving=p.problem_solving,
                emotional_control=p.emotional_control,
                confidence=p.confidence,
            ),
            disc_profile=DiscProfile(
                dominant_type=d.dominant_type,
                d_score=d.d_score,
                i_score=d.i_score,
                s_score=d.s_score,
                c_score=d.c_score,
                analysis=d.analysis,
            ),
            emotion_analysis=EmotionAnalysis(
                nervousness=e.nervousness,
                confidence=e.confidence,
                eye_contact=e.eye_contact,
                defensiveness=e.defensiveness,
                behavioral_cues=list(e.behavioral_cues),
            ),
            match_score=self.match_score,
            recommendation=self.recommendation,
            risk_level=self.risk_level,
            suggested_follow_up_questions=list(self.suggested_follow_up_questions),
        )


class GeneratedQuestionSchema(_WireModel):
    question: Text
    intent: Text


class FollowUpSchema(_WireModel):
    follow_up_question: Text
    explanation: Text


# =============================================================================
# DECLARED OUTPUT SCHEMAS (Gemini responseSchema, OpenAPI subset)
# =============================================================================

def analysis_response_schema(language: str) -> Dict[str, Any]:
    """Output schema for the interview analysis request."""
    return {
        "type": "OBJECT",
        "properties": {
            "summary": {"type": "STRING", "description": f"Candidate performance summary in {language}."},
            "transcription": {
                "type": "ARRAY",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "speaker": {"type": "STRING", "enum": [s.value for s in Speaker]},
                        "text": {"type": "STRING"},
                    },
                    "required": ["speaker", "text"],
                },
                "description": "Transcript or summary of the key dialogue, in conversational order.",
            },
            "keySkills": {"type": "ARRAY", "items": {"type": "STRING"}},
            "redFlags": {"type": "ARRAY", "items": {"type": "STRING"}},
            "personality": {
                "type": "OBJECT",
                "properties": {
                    "type": {"type": "STRING", "description": f"e.g. Analytical, Dominant, Expressive (in {language})"},
                    "leadership": {"type": "NUMBER", "description": "Score 1-10"},
                    "problemSolving": {"type": "NUMBER", "description": "Score 1-10"},
                    "emotionalControl": {"type": "NUMBER", "description": "Score 1-10"},
                    "confidence": {"type": "NUMBER", "description": "Score 1-10"},
                },
                "required": ["type", "leadership", "problemSolving", "emotionalControl", "confidence"],
            },
            "discProfile": {
                "type": "OBJECT",
                "properties": {
                    "dominantType": {"type": "STRING", "enum": [t.value for t in DiscType]},
                    "dScore": {"type": "NUMBER", "description": "Dominance score 0-100"},
                    "iScore": {"type": "NUMBER", "description": "Influence score 0-100"},
                    "sScore": {"type": "NUMBER", "description": "Steadiness score 0-100"},
                    "cScore": {"type": "NUMBER", "description": "Compliance score 0-100"},
                    "analysis": {"type": "STRING", "description": f"Short DISC profile analysis in {language}."},
                },
                "required": ["dominantType", "dScore", "iScore", "sScore", "cScore", "analysis"],
            },
            "emotionAnalysis": {
                "type": "OBJECT",
                "properties": {
                    "nervousness": {"type": "NUMBER", "description": "Score 1-10 (10 = very nervous)"},
                    "confidence": {"type": "NUMBER", "description": "Score 1-10 from visual/audio cues"},
                    "eyeContact": {"type": "STRING", "enum": [e.value for e in EyeContact]},
                    "defensiveness": {"type": "STRING", "enum": [d.value for d in Defensiveness]},
                    "behavioralCues": {
                        "type": "ARRAY",
                        "items": {"type": "STRING"},
                        "description": f"Specific observations in {language}",
                    },
                },
                "required": ["nervousness", "confidence", "eyeContact", "defensiveness", "behavioralCues"],
            },
            "matchScore": {"type": "NUMBER", "description": "Match percentage 0-100"},
            "recommendation": {"type": "STRING", "description": f"Final hiring recommendation in {language}"},
            "riskLevel": {"type": "STRING", "enum": [r.value for r in RiskLevel]},
            "suggestedFollowUpQuestions": {
                "type": "ARRAY",
                "items": {"type": "STRING"},
                "description": f"3-5 follow-up questions in {language} the interviewer should have asked.",
            },
        },
        "required": [
            "summary", "transcription", "keySkills", "redFlags", "personality",
            "discProfile", "emotionAnalysis", "matchScore", "recommendation",
            "riskLevel", "suggestedFollowUpQuestions",
        ],
    }


def questions_response_schema(language: str) -> Dict[str, Any]:
    """Output schema for the question generator."""
    return {
        "type": "ARRAY",
        "items": {
            "type": "OBJECT",
            "properties": {
                "question": {"type": "STRING", "description": f"Interview question in {language}"},
                "intent": {"type": "STRING", "description": f"Purpose of this question in {language}"},
            },
            "required": ["question", "intent"],
        },
    }


def follow_up_response_schema(language: str) -> Dict[str, Any]:
    """Output schema for the follow-up simulator."""
    return {
        "type": "OBJECT",
        "properties": {
            "followUpQuestion": {"type": "STRING", "description": f"Follow-up question in {language}"},
            "explanation": {"type": "STRING", "description": f"Why it should be asked, in {language}"},
        },
        "required": ["followUpQuestion", "explanation"],
    }


# =============================================================================
# PARSERS
# =============================================================================

def load_json_text(raw_response: str) -> Any:
    """
    Decode response text as JSON.

    Args:
        raw_response: Raw text returned by the model

    Returns:
        Decoded JSON value

    Raises:
        EmptyResponseError: If the text is missing or blank
        AnalysisParseError: If no JSON document can be decoded
    """
    if raw_response is None or not raw_response.strip():
        raise EmptyResponseError()

    text = raw_response.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("json.loads failed: %s", e)

    # Models occasionally wrap JSON in code fences or prose; try the outermost bracket first
    pairs = sorted((("{", "}"), ("[", "]")), key=lambda p: (text.find(p[0]) == -1, text.find(p[0])))
    for open_ch, close_ch in pairs:
        start = text.find(open_ch)
        end = text.rfind(close_ch)
        if start != -1 and end > start:
            try:
                return json.loads(text[start:end + 1])
            except json.JSONDecodeError:
                continue

    raise AnalysisParseError(f"Respons AI bukan JSON yang valid: {text[:200]}")


def _validation_message(prefix: str, error: ValidationError) -> str:
    fields = sorted({".".join(str(p) for p in err["loc"]) or "<root>" for err in error.errors()})
    return f"{prefix}: {', '.join(fields)}"


def parse_analysis_result(raw_response: str) -> AnalysisResult:
    """
    Parse an analysis response into an AnalysisResult.

    Raises:
        EmptyResponseError: If the response is empty
        AnalysisParseError: If the response is malformed or misses required fields
    """
    data = load_json_text(raw_response)
    if not isinstance(data, dict):
        raise AnalysisParseError("Respons analisis harus berupa objek JSON.")
    try:
        return AnalysisResultSchema.model_validate(data).to_domain()
    except ValidationError as e:
        raise AnalysisParseError(_validation_message("Respons analisis tidak sesuai skema", e)) from e


def parse_generated_questions(raw_response: str) -> List[GeneratedQuestion]:
    """Parse a question-generator response into an ordered list of questions."""
    data = load_json_text(raw_response)
    if not isinstance(data, list):
        raise AnalysisParseError("Respons pertanyaan harus berupa array JSON.")
    try:
        items = [GeneratedQuestionSchema.model_validate(item) for item in data]
    except ValidationError as e:
        raise AnalysisParseError(_validation_message("Pertanyaan tidak sesuai skema", e)) from e
    return [GeneratedQuestion(question=i.question, intent=i.intent) for i in items]


def parse_follow_up(raw_response: str) -> FollowUpSuggestion:
    """Parse a follow-up response."""
    data = load_json_text(raw_response)
    if not isinstance(data, dict):
        raise AnalysisParseError("Respons follow-up harus berupa objek JSON.")
    try:
        item = FollowUpSchema.model_validate(data)
    except ValidationError as e:
        raise AnalysisParseError(_validation_message("Follow-up tidak sesuai skema", e)) from e
    return FollowUpSuggestion(follow_up_question=item.follow_up_question, explanation=item.explanation)
