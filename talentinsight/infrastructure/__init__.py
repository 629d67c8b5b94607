"""Infrastructure components for the TalentInsight system.

This module contains low-level technical components that provide
foundational capabilities for the review workflows: media capture and
encoding (`media`), the Gemini REST client (`llm`) and the in-memory
candidate store (`data`). Import them from their subpackages.
"""
