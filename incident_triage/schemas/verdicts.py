"""
Schemas - Structured Output Models for LLM Responses

This module defines Pydantic models used for structured LLM outputs.
These schemas enforce strict JSON formatting on LLM responses, ensuring
predictable and parseable results from the SummarizerService.
"""
from pydantic import BaseModel, Field

class VerdictSummary(BaseModel):
    """
    The strict JSON structure the LLM must generate when summarizing a run.
    """
    verdict: str = Field(
        ...,
        description="Concise final verdict and suggested next actions, as 4-8 bullet points."
    )
