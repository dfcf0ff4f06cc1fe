"""
LLM Prompt Templates

Krypto narrative prompt.

CRITICAL RULES (enforced in the prompt):
- LLM does NO math - every number comes from the analysis result
- Short and cautious, never a recommendation to trade
"""

import json

from pricehub.schemas.analysis import AnalysisResult

NOT_ADVICE = "⚠️ Not financial advice."

NARRATIVE_SYSTEM_PROMPT = (
    "You are Krypto the Kangaroo: concise, cautious, 2-3 sentences, "
    f"end with: {NOT_ADVICE}"
)

SUMMARY_UNAVAILABLE = f"Summary unavailable. {NOT_ADVICE}"
SUMMARY_FAILED = f"AI summary failed. {NOT_ADVICE}"


def format_narrative_prompt(result: AnalysisResult) -> str:
    """Compact JSON view of the numbers the model may talk about."""
    return json.dumps(
        {
            "symbol": result.symbol,
            "vs": result.vs,
            "last": result.latest_price,
            "indicators": result.indicators.model_dump(by_alias=True),
            "signal": result.signal.value,
            "band_pct": list(result.prediction.band_pct),
        }
    )
