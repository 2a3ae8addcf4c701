import re
from typing import Dict, List, Optional

from controller.grading.scoring import round_half_up
from schemas.text_review import TextAnalysis, TextIssue


_NON_LETTER_RE = re.compile(r"[^a-z]")
_VOWEL_START_RE = re.compile(r"^[aeiou]")

COMMON_MISSPELLINGS: Dict[str, str] = {
    "recieve": "receive",
    "seperate": "separate",
    "occured": "occurred",
    "teh": "the",
    "adn": "and",
}


def _clean(word: str) -> str:
    return _NON_LETTER_RE.sub("", word.lower())


def check_grammar(text: Optional[str]) -> List[TextIssue]:
    if not text or not text.strip():
        return []
    words = text.split()
    errors: List[TextIssue] = []
    for i in range(len(words) - 1):
        current = _clean(words[i])
        following = _clean(words[i + 1])
        if current == "a" and _VOWEL_START_RE.match(following):
            errors.append(
                TextIssue(
                    type="article",
                    message="Use 'an' instead of 'a' before words starting with a vowel",
                    offset=i,
                    length=1,
                    suggestion="an",
                )
            )
    return errors


def check_spelling(text: Optional[str]) -> List[TextIssue]:
    if not text or not text.strip():
        return []
    errors: List[TextIssue] = []
    offset = 0
    for word in text.split():
        suggestion = COMMON_MISSPELLINGS.get(_clean(word))
        if suggestion:
            errors.append(
                TextIssue(
                    type="spelling",
                    message=f"Spelling error: '{word}'",
                    offset=offset,
                    length=len(word),
                    suggestion=suggestion,
                )
            )
        offset += len(word) + 1
    return errors


def analyze_text(text: Optional[str]) -> TextAnalysis:
    grammar_errors = check_grammar(text)
    spelling_errors = check_spelling(text)
    word_count = len((text or "").split())
    total_errors = len(grammar_errors) + len(spelling_errors)
    error_rate = total_errors / word_count if word_count else 0.0
    quality = max(0.0, min(1.0, 1 - error_rate * 2))
    return TextAnalysis(
        grammar_errors=grammar_errors,
        spelling_errors=spelling_errors,
        grammar_error_count=len(grammar_errors),
        spelling_error_count=len(spelling_errors),
        word_count=word_count,
        quality_score=round_half_up(quality),
    )
