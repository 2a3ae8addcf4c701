import logging
import os
from typing import Iterable, List, Optional

from controller.feedback.clients import get_openai_client, openai_request_with_retries
from controller.feedback.prompts import (
    FEEDBACK_SYSTEM_PROMPT,
    build_feedback_prompt,
    build_translation_prompt,
    flagged_words,
)
from schemas.pronunciation import FeedbackResult, WordDetail, WordStatus

logger = logging.getLogger(__name__)

DEFAULT_TRANSLATION_LANGUAGE = "Vietnamese"


def heuristic_feedback(details: Iterable[WordDetail]) -> FeedbackResult:
    flagged = flagged_words(details)
    practice_words: List[str] = []
    for detail in flagged:
        if detail.word not in practice_words:
            practice_words.append(detail.word)
    if not practice_words:
        return FeedbackResult(
            feedback="Great job! Every word came through clearly. Keep practicing at this pace.",
            practice_words=None,
            provider="heuristic",
        )

    missed = [d.word for d in flagged if d.status == WordStatus.incorrect]
    lines = [f"- Practice: {', '.join(practice_words[:5])}"]
    if missed:
        lines.append(f"- Say every word clearly, especially: {', '.join(missed[:3])}")
    else:
        lines.append("- You're close: slow down slightly and finish each sound.")
    lines.append("- Keep going, you're improving!")
    return FeedbackResult(
        feedback="\n".join(lines),
        practice_words=practice_words[:6],
        provider="heuristic",
    )


async def _chat_completion(system_prompt: Optional[str], user_prompt: str, model_name: str, label: str) -> Optional[str]:
    client = get_openai_client()
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": user_prompt})
    response = await openai_request_with_retries(
        lambda: client.chat.completions.create(
            model=model_name,
            messages=messages,
            temperature=0.3,
        ),
        endpoint_label=label,
    )
    content = (
        response.choices[0].message.content
        if getattr(response, "choices", None)
        else None
    )
    return content.strip() if content else None


async def generate_speech_feedback(
    text: str,
    details: Iterable[WordDetail],
    language: Optional[str] = None,
) -> FeedbackResult:
    details = list(details)
    model_name = os.getenv("OPENAI_FEEDBACK_MODEL", os.getenv("OPENAI_MODEL", "gpt-4o-mini"))
    language = language or os.getenv("FEEDBACK_LANGUAGE", "English")
    prompt = build_feedback_prompt(text, details, language=language)
    try:
        content = await _chat_completion(FEEDBACK_SYSTEM_PROMPT, prompt, model_name, "feedback")
    except Exception as exc:
        logger.error("OpenAI feedback unexpected error: %s", exc)
        content = None
    if not content:
        return heuristic_feedback(details)

    practice_words = [d.word for d in flagged_words(details)]
    return FeedbackResult(
        feedback=content,
        practice_words=practice_words[:6] or None,
        provider=model_name,
    )


async def translate_text(text: Optional[str], target_language: Optional[str] = None) -> str:
    if not text or not text.strip():
        return ""
    target_language = target_language or os.getenv(
        "TRANSLATION_TARGET_LANGUAGE", DEFAULT_TRANSLATION_LANGUAGE
    )
    model_name = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    try:
        content = await _chat_completion(
            None, build_translation_prompt(text, target_language), model_name, "translation"
        )
    except Exception as exc:
        logger.error("OpenAI translation unexpected error: %s", exc)
        return f"AI Error: {str(exc) or 'Unknown connection error'}"
    return content or ""
