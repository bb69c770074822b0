"""
Prompt construction for field translation.

Each text field is translated under a FieldContext that selects the
system-instruction variant (tone, length limits).
"""

from __future__ import annotations

from enum import Enum

from articlelingo.i18n.languages import get_language_name


class FieldContext(str, Enum):
    """Semantic role of a translated field."""

    TITLE = "title"
    EXCERPT = "excerpt"
    META_TITLE = "meta_title"
    META_DESCRIPTION = "meta_description"
    FAQ_QUESTION = "faq_question"
    FAQ_ANSWER = "faq_answer"
    ALT_TEXT = "alt_text"
    BODY = "body"


META_TITLE_MAX_CHARS = 60
META_DESCRIPTION_MAX_CHARS = 160


BASE_INSTRUCTION = (
    "You are an expert professional translator specialised in web content. "
    "Translate from {source} into {target}, preserving tone, style and any HTML "
    "structure present. Return only the translation, without commentary."
)


def context_instruction(context: FieldContext) -> str:
    """Context-specific constraints appended to the base instruction."""
    match context:
        case FieldContext.TITLE:
            return "This is a title: keep it concise and impactful, and adapt idioms."
        case FieldContext.EXCERPT:
            return (
                "This is an excerpt: stay informative and engaging, "
                f"at most {META_DESCRIPTION_MAX_CHARS} characters if possible."
            )
        case FieldContext.META_TITLE:
            return (
                "This is an SEO meta title: optimise it for search engines, "
                f"at most {META_TITLE_MAX_CHARS} characters."
            )
        case FieldContext.META_DESCRIPTION:
            return (
                "This is an SEO meta description: be persuasive and include a call to action, "
                f"at most {META_DESCRIPTION_MAX_CHARS} characters."
            )
        case FieldContext.FAQ_QUESTION:
            return "This is an FAQ question: phrase it the way a native speaker would ask it."
        case FieldContext.FAQ_ANSWER:
            return "This is an FAQ answer: keep the tone informative and reassuring."
        case FieldContext.ALT_TEXT:
            return "This is image alt text: keep it descriptive and accessible."
        case FieldContext.BODY:
            return (
                "Preserve every HTML tag, attribute, link and the document structure exactly. "
                "Adapt cultural references where needed."
            )
    raise ValueError(f"Unhandled field context: {context!r}")


def build_system_prompt(source: str, target: str, context: FieldContext) -> str:
    base = BASE_INSTRUCTION.format(
        source=get_language_name(source),
        target=get_language_name(target),
    )
    return f"{base} {context_instruction(context)}"


def build_user_prompt(text: str, context: FieldContext) -> str:
    if context is FieldContext.BODY:
        return (
            "Translate the following HTML content, preserving all markup exactly "
            f"(every tag and the structure):\n\n{text}"
        )
    return text
