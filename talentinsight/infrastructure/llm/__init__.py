"""LLM client for the external analysis service."""

from .client import GeminiRestClient, inline_data_part, text_part

__all__ = ["GeminiRestClient", "inline_data_part", "text_part"]
