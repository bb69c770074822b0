"""
Text-generation backends.

The OpenAI chat completions backend is the default; anything implementing
TextGenerationBackend can be passed to the engine instead.
"""

from articlelingo.services.ai.client import (
    BackendError,
    GenerationRequest,
    GenerationResponse,
    OpenAIBackend,
    TextGenerationBackend,
    TokenUsage,
)

__all__ = [
    "BackendError",
    "GenerationRequest",
    "GenerationResponse",
    "OpenAIBackend",
    "TextGenerationBackend",
    "TokenUsage",
]
