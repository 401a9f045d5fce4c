"""
LLM provider abstraction.

Lets the rate oracle switch between providers (Gemini, Groq)
without touching the oracle itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import structlog

from tvmrealty.config import get_settings
from tvmrealty.errors import ConfigurationError

logger = structlog.get_logger()


@dataclass
class LLMResponse:
    """Normalized response of any LLM."""
    text: str
    model: str
    provider: str
    tokens_used: Optional[int] = None


class BaseLLMProvider(ABC):
    """Base class for LLM providers."""

    provider_name: str = "base"

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        json_output: bool = False,
    ) -> LLMResponse:
        """
        Generate a completion.

        Args:
            system_prompt: System instructions
            user_prompt: User prompt
            temperature: Sampling temperature (0.0-1.0)
            max_tokens: Maximum tokens to generate
            json_output: Ask the provider for a JSON-only response

        Returns:
            LLMResponse with the generated text
        """
        pass


class GeminiProvider(BaseLLMProvider):
    """Google Gemini provider."""

    provider_name = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        from google import genai

        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model

        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY not configured")

        self.client = genai.Client(api_key=self.api_key)
        logger.info("GeminiProvider initialized", model=self.model)

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        json_output: bool = False,
    ) -> LLMResponse:
        from google.genai import types

        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=user_prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                temperature=temperature,
                top_k=1,
                seed=42,
                max_output_tokens=max_tokens,
                response_mime_type="application/json" if json_output else None,
            ),
        )

        usage = response.usage_metadata
        return LLMResponse(
            text=(response.text or "").strip(),
            model=self.model,
            provider=self.provider_name,
            tokens_used=usage.total_token_count if usage else None,
        )


class GroqProvider(BaseLLMProvider):
    """
    Groq provider (LPU inference).

    Models:
    - llama-3.1-8b-instant: fast and cheap
    - llama-3.3-70b-versatile: more capable, better at following the JSON schema

    Docs: https://console.groq.com/docs/models
    """

    provider_name = "groq"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        from groq import AsyncGroq

        settings = get_settings()
        self.api_key = api_key or settings.groq_api_key
        self.model = model or settings.groq_model

        if not self.api_key:
            raise ConfigurationError("GROQ_API_KEY not configured")

        self.client = AsyncGroq(api_key=self.api_key)
        logger.info("GroqProvider initialized", model=self.model)

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        json_output: bool = False,
    ) -> LLMResponse:
        extra = {"response_format": {"type": "json_object"}} if json_output else {}
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
            **extra,
        )

        text = response.choices[0].message.content or ""
        tokens = response.usage.total_tokens if response.usage else None

        return LLMResponse(
            text=text.strip(),
            model=self.model,
            provider=self.provider_name,
            tokens_used=tokens,
        )


def get_llm_provider(
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> BaseLLMProvider:
    """
    Factory for the configured LLM provider.

    Args:
        provider: 'gemini' or 'groq' (default: settings.llm_provider)
        api_key: API key (default: from settings for that provider)
        model: Model (default: from settings for that provider)

    Raises:
        ConfigurationError: Unknown provider or missing API key
    """
    settings = get_settings()
    provider = provider or settings.llm_provider

    if provider.lower() == "groq":
        return GroqProvider(api_key=api_key, model=model)
    elif provider.lower() == "gemini":
        return GeminiProvider(api_key=api_key, model=model)
    else:
        raise ConfigurationError(f"Unsupported LLM provider: {provider}. Use 'gemini' or 'groq'")
