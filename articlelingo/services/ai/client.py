"""
Text-generation backend interface and OpenAI implementation.

The engine only talks to ``TextGenerationBackend``; provider exceptions are
translated into ``BackendError`` here so nothing above this module imports
the provider SDK.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel

from articlelingo.config import Settings, get_settings

logger = logging.getLogger(__name__)


class GenerationRequest(BaseModel):
    system_prompt: str
    user_prompt: str
    model: str
    temperature: float = 0.3
    max_output_tokens: int = 1024


class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class GenerationResponse(BaseModel):
    text: str
    usage: TokenUsage = TokenUsage()
    model: str = ""


class BackendError(Exception):
    """
    A backend call failed.

    ``status_code`` is the HTTP status when the provider returned one;
    429 marks backpressure.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_rate_limit(self) -> bool:
        return self.status_code == 429


class TextGenerationBackend(ABC):
    """Prompt in, text plus token usage out."""

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """
        Run one completion.

        Raises:
            BackendError: On any provider or transport failure.
        """
        pass


class OpenAIBackend(TextGenerationBackend):
    """Chat completions through ``openai.AsyncOpenAI``."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load OpenAI client."""
        if self._client is None:
            if not self.settings.openai_api_key:
                raise ValueError("ARTICLELINGO_OPENAI_API_KEY not set")
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                base_url=self.settings.openai_base_url or None,
                timeout=self.settings.request_timeout,
                max_retries=0,  # 429s are retried per language by the orchestrator
            )
        return self._client

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        try:
            completion = await self.client.chat.completions.create(
                model=request.model,
                messages=[
                    {"role": "system", "content": request.system_prompt},
                    {"role": "user", "content": request.user_prompt},
                ],
                temperature=request.temperature,
                max_tokens=request.max_output_tokens,
            )
        except openai.RateLimitError as e:
            logger.warning(f"OpenAI rate limit hit for {request.model}")
            raise BackendError(str(e), status_code=429) from e
        except openai.APIStatusError as e:
            raise BackendError(str(e), status_code=e.status_code) from e
        except openai.APIError as e:
            raise BackendError(str(e)) from e

        choice = completion.choices[0] if completion.choices else None
        text = (choice.message.content or "") if choice else ""
        usage = completion.usage

        return GenerationResponse(
            text=text,
            usage=TokenUsage(
                prompt_tokens=usage.prompt_tokens if usage else 0,
                completion_tokens=usage.completion_tokens if usage else 0,
            ),
            model=completion.model or request.model,
        )
