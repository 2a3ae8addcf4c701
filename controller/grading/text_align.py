import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from schemas.pronunciation import WordDetail, WordStatus


_NON_LETTER_RE = re.compile(r"[^a-z\s]")

NEAR_MATCH_MIN_LENGTH = 3
NEAR_MATCH_MAX_DISTANCE = 1


def tokenize(text: Optional[str]) -> List[str]:
    if not text or not text.strip():
        return []
    cleaned = _NON_LETTER_RE.sub(" ", text.lower())
    return [token for token in cleaned.split() if token]


def edit_distance(a: Sequence, b: Sequence) -> int:
    rows = len(a) + 1
    cols = len(b) + 1
    dp = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        dp[i][0] = i
    for j in range(cols):
        dp[0][j] = j
    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost,
            )
    return dp[-1][-1]


def is_near_match(
    word1: str,
    word2: str,
    min_length: int = NEAR_MATCH_MIN_LENGTH,
    max_distance: int = NEAR_MATCH_MAX_DISTANCE,
) -> bool:
    # "a" vs "an" style pairs are never fuzzy matches
    if len(word1) < min_length or len(word2) < min_length:
        return False
    return edit_distance(word1, word2) <= max_distance


@dataclass
class AlignmentResult:
    match_count: int
    details: Tuple[WordDetail, ...]
    # candidate index claimed by each expected word, None when incorrect
    positions: List[Optional[int]] = field(default_factory=list)


def _scan_after(cursor: int, actual: List[str], predicate) -> Optional[int]:
    for i in range(cursor + 1, len(actual)):
        if predicate(actual[i]):
            return i
    return None


def align_words(
    expected: List[str],
    actual: List[str],
    min_length: int = NEAR_MATCH_MIN_LENGTH,
    max_distance: int = NEAR_MATCH_MAX_DISTANCE,
) -> AlignmentResult:
    """Greedy, order-preserving alignment of expected words onto a transcript.

    Each expected word claims the first exact match after the last claimed
    position, then the first near match. Claims are never revisited, so a
    transposed or repeated word can cost later words their match.
    """
    details: List[WordDetail] = []
    positions: List[Optional[int]] = []
    match_count = 0
    cursor = -1

    for word in expected:
        position = _scan_after(cursor, actual, lambda candidate: candidate == word)
        status = WordStatus.correct
        if position is None:
            position = _scan_after(
                cursor,
                actual,
                lambda candidate: is_near_match(word, candidate, min_length, max_distance),
            )
            status = WordStatus.fair
        if position is None:
            details.append(WordDetail(word=word, status=WordStatus.incorrect))
            positions.append(None)
            continue

        cursor = position
        match_count += 1
        details.append(WordDetail(word=word, status=status))
        positions.append(position)

    return AlignmentResult(match_count, tuple(details), positions)
