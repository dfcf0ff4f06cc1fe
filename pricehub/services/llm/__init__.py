"""
LLM Narrative Service

CONTRACT:
    Input:  AnalysisResult (numeric fields final)
    Output: same AnalysisResult with krypto_summary

CRITICAL RULES:
    - LLM does NO math - all numbers come from the Indicator Engine
    - Failure never affects numeric fields; a fallback string is used

FALLBACK BEHAVIOR:
    - Without API keys the annotator is not built and results carry no
      krypto_summary
"""

from pricehub.services.llm.client import (
    LLMClient,
    LLMConfig,
    LLMProvider,
    LLMResponse,
)
from pricehub.services.llm.narrative import NarrativeAnnotator, build_annotator

__all__ = [
    "LLMClient",
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "NarrativeAnnotator",
    "build_annotator",
]
