"""
Analysis module.

LLM providers and the land rate oracle built on them.
"""

from tvmrealty.analysis.llm_providers import (
    BaseLLMProvider,
    GeminiProvider,
    GroqProvider,
    LLMResponse,
    get_llm_provider,
)
from tvmrealty.analysis.rate_oracle import (
    OracleReport,
    RateOracle,
    decode_report,
    extract_json_block,
)

__all__ = [
    "BaseLLMProvider",
    "GeminiProvider",
    "GroqProvider",
    "LLMResponse",
    "get_llm_provider",
    "OracleReport",
    "RateOracle",
    "decode_report",
    "extract_json_block",
]
