"""
Narrative LLM Clients

Thin async wrappers over the OpenAI and Anthropic SDKs, used only to word
the Krypto summary of an already finished analysis.

The configured provider goes first; the other one is a fallback when its
key is present.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

import anthropic
import openai

from pricehub.core.config import Settings

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass
class LLMConfig:
    """Provider keys, models and limits for the narrative call."""

    provider: LLMProvider
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-3-haiku-20240307"
    max_tokens: int = 256
    temperature: float = 0.3
    timeout: float = 20.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMConfig":
        return cls(
            provider=LLMProvider(settings.llm_provider.lower()),
            openai_api_key=settings.openai_api_key,
            anthropic_api_key=settings.anthropic_api_key,
            openai_model=settings.llm_model,
            anthropic_model=settings.anthropic_model,
            max_tokens=settings.narrative_max_tokens,
            timeout=settings.narrative_timeout_seconds,
        )


@dataclass
class LLMResponse:
    """Text of one completion and where it came from."""

    content: str
    model: str
    provider: LLMProvider


class BaseLLMClient(ABC):
    """One provider."""

    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Complete one system+user prompt pair."""
        pass


class OpenAIClient(BaseLLMClient):
    """OpenAI chat completions client."""

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client: Optional[openai.AsyncOpenAI] = None

    def _get_client(self) -> openai.AsyncOpenAI:
        """SDK client is built on first use."""
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self.config.openai_api_key,
                timeout=self.config.timeout,
            )
        return self._client

    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Single chat completion."""
        client = self._get_client()
        model = self.config.openai_model

        try:
            response = await client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI narrative call failed: {e}")
            raise

        content = response.choices[0].message.content if response.choices else None
        return LLMResponse(content=content or "", model=model, provider=LLMProvider.OPENAI)


class AnthropicClient(BaseLLMClient):
    """Anthropic Claude client."""

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client: Optional[anthropic.AsyncAnthropic] = None

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """SDK client is built on first use."""
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self.config.anthropic_api_key,
                timeout=self.config.timeout,
            )
        return self._client

    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Single messages call; text blocks are concatenated."""
        client = self._get_client()
        model = self.config.anthropic_model

        try:
            response = await client.messages.create(
                model=model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.AnthropicError as e:
            logger.error(f"Anthropic narrative call failed: {e}")
            raise

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return LLMResponse(content=text, model=model, provider=LLMProvider.ANTHROPIC)


class LLMClient:
    """
    Primary/fallback pair over the configured providers.

    The primary is tried first.
    Any primary failure moves on to the fallback when one exists.
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._primary: Optional[BaseLLMClient] = None
        self._fallback: Optional[BaseLLMClient] = None
        self._setup_clients()

    def _setup_clients(self):
        """Only providers with a key get a client."""
        openai_client = OpenAIClient(self.config) if self.config.openai_api_key else None
        anthropic_client = (
            AnthropicClient(self.config) if self.config.anthropic_api_key else None
        )

        if self.config.provider == LLMProvider.ANTHROPIC:
            self._primary, self._fallback = anthropic_client, openai_client
        else:
            self._primary, self._fallback = openai_client, anthropic_client

        if self._primary is None and self._fallback is None:
            logger.warning("No LLM API keys configured. Narrative disabled.")

    @property
    def is_configured(self) -> bool:
        return self._primary is not None or self._fallback is not None

    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """
        Complete a prompt, falling back to the secondary provider.

        Raises whatever the last provider tried raised.
        """
        if not self.is_configured:
            raise RuntimeError("No LLM providers configured")

        if self._primary:
            try:
                return await self._primary.generate(system_prompt, user_prompt)
            except Exception as e:
                logger.warning(f"Primary narrative provider failed ({e}); trying fallback")
                if self._fallback is None:
                    raise

        return await self._fallback.generate(system_prompt, user_prompt)
