from typing import Iterable, List

from schemas.pronunciation import WordDetail, WordStatus


FEEDBACK_SYSTEM_PROMPT = (
    "You are a concise English pronunciation coach. Reply in short bullet points. "
    "Mention grammar only if the sentence has an error, give one pronunciation tip "
    "per listed word, and finish with one short sentence of encouragement. "
    "No tables, no long paragraphs."
)


def flagged_words(details: Iterable[WordDetail]) -> List[WordDetail]:
    return [d for d in details if d.status != WordStatus.correct]


def format_flagged_words(details: Iterable[WordDetail]) -> str:
    return ", ".join(f"{d.word} ({d.status.value})" for d in flagged_words(details))


def build_feedback_prompt(text: str, details: Iterable[WordDetail], language: str = "English") -> str:
    flagged = format_flagged_words(details) or "none"
    return (
        f'Analyze this spoken English sentence: "{text}".\n'
        f"Words not pronounced clearly: {flagged}\n\n"
        f"Write the feedback in {language}."
    )


def build_translation_prompt(text: str, target_language: str) -> str:
    return (
        f"Translate the following English text to {target_language}. "
        "Return ONLY the translation, no extra comments:\n\n"
        f"{text}"
    )
