"""
Narrative Annotator

Best-effort prose decoration for a finished AnalysisResult. Runs after every
numeric field is final and never touches them: any failure is replaced with
a fixed fallback string.
"""

import logging
from typing import Optional

from pricehub.schemas.analysis import AnalysisResult
from pricehub.services.base import NarrativeError
from pricehub.services.llm.client import LLMClient
from pricehub.services.llm.prompts import (
    NARRATIVE_SYSTEM_PROMPT,
    SUMMARY_FAILED,
    SUMMARY_UNAVAILABLE,
    format_narrative_prompt,
)

logger = logging.getLogger(__name__)


class NarrativeAnnotator:
    """Adds krypto_summary to an AnalysisResult."""

    def __init__(self, llm_client: LLMClient):
        self._llm_client = llm_client

    @property
    def name(self) -> str:
        return "NarrativeAnnotator"

    async def annotate(self, result: AnalysisResult) -> AnalysisResult:
        """Return a copy of result with krypto_summary set. Never raises."""
        try:
            text = await self._generate(result)
        except NarrativeError as e:
            logger.warning(f"Narrative failed for {result.symbol}: {e.message}")
            text = SUMMARY_FAILED
        return result.model_copy(update={"krypto_summary": text})

    async def _generate(self, result: AnalysisResult) -> str:
        try:
            response = await self._llm_client.generate(
                system_prompt=NARRATIVE_SYSTEM_PROMPT,
                user_prompt=format_narrative_prompt(result),
            )
        except Exception as e:
            raise NarrativeError(str(e)) from e

        content = (response.content or "").strip()
        return content or SUMMARY_UNAVAILABLE


def build_annotator(llm_client: Optional[LLMClient]) -> Optional[NarrativeAnnotator]:
    """Annotator only when some provider key is configured."""
    if llm_client is None or not llm_client.is_configured:
        return None
    return NarrativeAnnotator(llm_client)
