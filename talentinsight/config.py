"""
TalentInsight Configuration System
==================================

This file contains ALL configuration for the TalentInsight interview review system.
- User settings at the top (things users might want to change)
- Internal constants at the bottom (technical defaults)
"""
import os
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# USER SETTINGS - Edit these to customize TalentInsight's behavior
# =============================================================================

# REQUIRED: either a Gemini API key or a Google Cloud project (Vertex AI)
GEMINI_API_KEY = None  # Or set GEMINI_API_KEY in the environment
GOOGLE_CLOUD_PROJECT = "your-project-id"  # Only used when no API key is set
GOOGLE_APPLICATION_CREDENTIALS = None  # Optional: path to credentials JSON

# Model and output language
MODEL_NAME = "gemini-2.5-flash"
OUTPUT_LANGUAGE = "Bahasa Indonesia"

# Logging
WORKDIR = "./_talentinsight"
LOG_FILE = "./_talentinsight/talentinsight.log"
LOG_LEVEL = "INFO"


# =============================================================================
# INTERNAL CONSTANTS - Don't change these unless you know what you're doing
# =============================================================================

# Upload ceilings
MAX_MEDIA_BYTES = 20 * 1024 * 1024
MAX_CV_BYTES = 5 * 1024 * 1024

# Recording
SAMPLE_RATE_CAPTURE = 48000
SAMPLE_RATE_TARGET = 16000
CHANNELS = 1
FRAME_MS = 100
RECORDING_MIME_TYPE = "audio/wav"
RECORDING_FILENAME = "rekaman-wawancara.wav"
TICK_SECONDS = 1.0

# Question generator
QUESTION_COUNT = 5
MIN_FOLLOW_UP_ANSWER_CHARS = 5

# LLM
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
VERTEX_LOCATION = "us-central1"
LLM_TIMEOUT = 180
ANALYSIS_THINKING_BUDGET = 4096
QUESTION_THINKING_BUDGET = 1024
ANALYSIS_TEMPERATURE = 0.2
QUESTION_TEMPERATURE = 0.7


# =============================================================================
# MAIN CONFIG OBJECT
# =============================================================================

@dataclass
class Config:
    """Main configuration object."""
    api_key: Optional[str] = None
    google_cloud_project: Optional[str] = None
    google_application_credentials: Optional[str] = None
    vertex_location: str = VERTEX_LOCATION
    model_name: str = MODEL_NAME
    output_language: str = OUTPUT_LANGUAGE
    workdir: str = WORKDIR
    log_file: str = LOG_FILE
    log_level: str = LOG_LEVEL
    llm_timeout: int = LLM_TIMEOUT
    max_media_bytes: int = MAX_MEDIA_BYTES
    max_cv_bytes: int = MAX_CV_BYTES

    @property
    def uses_vertex(self) -> bool:
        """True when requests go through Vertex AI instead of the Gemini API."""
        return not self.api_key


def get_config() -> Config:
    """Load configuration, letting environment variables override module settings."""
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or GEMINI_API_KEY
    project = os.getenv("GOOGLE_CLOUD_PROJECT") or GOOGLE_CLOUD_PROJECT
    credentials = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or GOOGLE_APPLICATION_CREDENTIALS

    if not api_key and (not project or project == "your-project-id"):
        raise ValueError(
            "Please set GEMINI_API_KEY, or GOOGLE_CLOUD_PROJECT for Vertex AI, "
            "in config.py or as environment variable"
        )

    return Config(
        api_key=api_key,
        google_cloud_project=None if api_key else project,
        google_application_credentials=credentials,
        vertex_location=os.getenv("VERTEX_LOCATION") or VERTEX_LOCATION,
        model_name=os.getenv("TALENTINSIGHT_MODEL") or MODEL_NAME,
        output_language=os.getenv("TALENTINSIGHT_LANGUAGE") or OUTPUT_LANGUAGE,
        log_file=os.getenv("TALENTINSIGHT_LOG_FILE") or LOG_FILE,
        log_level=os.getenv("TALENTINSIGHT_LOG_LEVEL") or LOG_LEVEL,
    )
