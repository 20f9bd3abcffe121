"""
Summarizer Service.

Turns an incident and the logs of a run into a short human-readable verdict
using an LLM. The verdict text is not interpreted, only returned to the
caller (who may store it through the incident-update store).
"""

import logging
from typing import Optional, Sequence

from ..exceptions import SummarizerUnavailableError
from ..llm.interface import LLMProvider
from ..schemas.verdicts import VerdictSummary
from ..state.models import Incident
from .prompts import Template, render

logger = logging.getLogger(__name__)

# Only the tail of the log is sent to the model
SUMMARY_LOG_LINES = 60


class SummarizerService:
    def __init__(self, llm_provider: Optional[LLMProvider], temperature: float = 0.2):
        """
        Args:
            llm_provider: The LLM to use. None means summarization is not
                configured (e.g. no API key); summarize() then raises
                SummarizerUnavailableError.
            temperature: Sampling temperature for the verdict.
        """
        self.llm = llm_provider
        self.temperature = temperature

    @property
    def available(self) -> bool:
        return self.llm is not None

    def build_messages(self, incident: Incident, logs: Sequence[str]) -> list[dict]:
        tail = list(logs)[-SUMMARY_LOG_LINES:]
        return [
            {"role": "system", "content": render(Template.SUMMARIZE_SYSTEM)},
            {"role": "user", "content": render(
                Template.SUMMARIZE_INCIDENT, incident=incident, logs=tail, max_lines=SUMMARY_LOG_LINES
            )},
        ]

    async def summarize(self, incident: Incident, logs: Sequence[str]) -> str:
        if self.llm is None:
            raise SummarizerUnavailableError("Missing OPENAI_API_KEY")

        messages = self.build_messages(incident, logs)
        summary = await self.llm.generate_structured_output(
            messages=messages,
            response_model=VerdictSummary,
            temperature=self.temperature,
        )
        verdict = (summary.verdict if summary else "").strip()
        logger.info(f"Generated verdict for incident {incident.id} ({len(verdict)} chars)")
        return verdict
