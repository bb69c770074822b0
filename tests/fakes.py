"""
Scripted text-generation backend for tests.
"""

from __future__ import annotations

import re
from typing import Callable

from articlelingo.i18n.languages import LANGUAGE_NAMES
from articlelingo.services.ai.client import (
    BackendError,
    GenerationRequest,
    GenerationResponse,
    TextGenerationBackend,
    TokenUsage,
)

_TARGET_RE = re.compile(r"into (.+?), preserving")
_CODES_BY_NAME = {name: code for code, name in LANGUAGE_NAMES.items()}
_BODY_PREFIX = "Translate the following HTML content"


def target_of(request: GenerationRequest) -> str:
    """Target language code a request asks for."""
    return _CODES_BY_NAME[_TARGET_RE.search(request.system_prompt).group(1)]


def source_text_of(request: GenerationRequest) -> str:
    """The text being translated, without the body instruction wrapper."""
    if request.user_prompt.startswith(_BODY_PREFIX):
        return request.user_prompt.split(":\n\n", 1)[1]
    return request.user_prompt


def tag_translation(request: GenerationRequest) -> str:
    """Default fake translation: the text prefixed with the target code."""
    return f"[{target_of(request)}] {source_text_of(request)}"


class FakeBackend(TextGenerationBackend):
    """
    Scripted backend.

    ``fail`` maps a request to an exception to raise (or None);
    ``errors`` is a queue of exceptions raised by the next calls, in order.
    """

    def __init__(
        self,
        respond: Callable[[GenerationRequest], str] = tag_translation,
        fail: Callable[[GenerationRequest], Exception | None] | None = None,
        errors: list[Exception] | None = None,
    ):
        self.respond = respond
        self.fail = fail
        self.errors = list(errors or [])
        self.calls: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.calls.append(request)
        if self.errors:
            raise self.errors.pop(0)
        if self.fail is not None:
            error = self.fail(request)
            if error is not None:
                raise error
        text = self.respond(request)
        return GenerationResponse(
            text=text,
            usage=TokenUsage(
                prompt_tokens=len(request.user_prompt.split()) + 50,
                completion_tokens=len(text.split()),
            ),
            model=request.model,
        )

    def targets(self) -> list[str]:
        return [target_of(r) for r in self.calls]


def rate_limited() -> BackendError:
    return BackendError("Too Many Requests", status_code=429)


def server_error() -> BackendError:
    return BackendError("Internal Server Error", status_code=500)
