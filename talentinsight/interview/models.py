"""
Data models for the interview review system.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional


class CandidateStatus(str, Enum):
    """Lifecycle states of a candidate."""
    PENDING = "Pending"
    ANALYZING = "Analyzing"
    INTERVIEWED = "Interviewed"
    HIRED = "Hired"
    REJECTED = "Rejected"


class Speaker(str, Enum):
    INTERVIEWER = "Interviewer"
    CANDIDATE = "Candidate"


class DiscType(str, Enum):
    """DISC dimensions: Dominance, Influence, Steadiness, Compliance."""
    D = "D"
    I = "I"  # noqa: E741
    S = "S"
    C = "C"


class EyeContact(str, Enum):
    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"
    NOT_VISIBLE = "Not Visible"


class Defensiveness(str, Enum):
    NONE = "None"
    LOW = "Low"
    HIGH = "High"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class TranscriptionTurn:
    """One utterance of the interview, in conversational order."""
    speaker: Speaker
    text: str


@dataclass(frozen=True)
class PersonalityTraits:
    """Four 1-10 traits plus a free-text type label."""
    type: str
    leadership: float
    problem_solving: float
    emotional_control: float
    confidence: float


@dataclass(frozen=True)
class DiscProfile:
    """DISC scores (0-100 each, not required to sum to 100)."""
    dominant_type: DiscType
    d_score: float
    i_score: float
    s_score: float
    c_score: float
    analysis: str

    def scores(self) -> Dict[DiscType, float]:
        return {
            DiscType.D: self.d_score,
            DiscType.I: self.i_score,
            DiscType.S: self.s_score,
            DiscType.C: self.c_score,
        }


@dataclass(frozen=True)
class EmotionAnalysis:
    nervousness: float
    confidence: float
    eye_contact: EyeContact
    defensiveness: Defensiveness
    behavioral_cues: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Structured output of one external analysis call."""
    summary: str
    transcription: List[TranscriptionTurn]
    key_skills: List[str]
    red_flags: List[str]
    personality: PersonalityTraits
    disc_profile: DiscProfile
    emotion_analysis: EmotionAnalysis
    match_score: float
    recommendation: str
    risk_level: RiskLevel
    suggested_follow_up_questions: List[str]


@dataclass
class Candidate:
    """One person under review."""
    id: str
    name: str
    position: str
    email: str = ""
    phone: str = ""
    experience_level: str = ""
    status: CandidateStatus = CandidateStatus.PENDING
    applied_date: str = field(default_factory=lambda: date.today().isoformat())
    cv_file_name: Optional[str] = None
    analysis: Optional[AnalysisResult] = None

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else self.name

    @property
    def has_analysis(self) -> bool:
        return self.analysis is not None


@dataclass(frozen=True)
class GeneratedQuestion:
    """Interview question drafted by the question generator."""
    question: str
    intent: str


@dataclass(frozen=True)
class FollowUpSuggestion:
    """Follow-up question suggested for a simulated answer."""
    follow_up_question: str
    explanation: str


@dataclass
class DashboardStats:
    """Aggregated dashboard figures."""
    total_candidates: int = 0
    interviewed: int = 0
    hired: int = 0
    rejected: int = 0
    avg_score: int = 0
