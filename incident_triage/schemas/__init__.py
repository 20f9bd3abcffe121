"""
Schemas - Structured Output Models for LLM Responses

Defines Pydantic models used for structured LLM outputs, ensuring
predictable and parseable results from the SummarizerService.
"""

from incident_triage.schemas.verdicts import VerdictSummary

__all__ = [
    "VerdictSummary",
]
