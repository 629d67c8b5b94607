"""
TalentInsight: AI-assisted review of recorded job interviews.

Recruiters upload or record an interview, a multimodal Gemini model turns it
into a structured assessment (summary, transcript, DISC profile, emotion cues,
match score, risk), and the results are browsed on a console dashboard.
"""

__version__ = "1.0.0"

# Main entry points
from .interview.models import Candidate, CandidateStatus, AnalysisResult
from .infrastructure.data import CandidateStore

__all__ = ["Candidate", "CandidateStatus", "AnalysisResult", "CandidateStore"]
