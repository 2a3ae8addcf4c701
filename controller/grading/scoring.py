import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from controller.grading.config import DEFAULT_CONFIG, AnalyzerConfig


ZERO = Decimal("0")
ONE = Decimal("1")


def _to_decimal(value: Union[Decimal, float, int]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest float repr, so 0.125 stays 0.125
    return Decimal(str(value))


def round_half_up(value: Union[Decimal, float, int], digits: int = 2) -> Decimal:
    exponent = Decimal(1).scaleb(-digits)
    return _to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def clamp_score(value: Decimal, minimum: Decimal = ZERO, maximum: Decimal = ONE) -> Decimal:
    return max(minimum, min(maximum, value))


def compute_score(match_count: int, expected_count: int, digits: int = 2) -> Decimal:
    if expected_count <= 0:
        raise ValueError("expected_count must be positive; empty references are scored upstream")
    if match_count < 0 or match_count > expected_count:
        raise ValueError(
            f"match_count {match_count} outside [0, {expected_count}]"
        )
    return round_half_up(Decimal(match_count) / Decimal(expected_count), digits)


def mock_score(
    text: Optional[str],
    rng: Optional[random.Random] = None,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> Decimal:
    """Placeholder score for when no transcript exists.

    This is a length heuristic with random jitter, not a pronunciation
    judgment. Short prompts get a small bonus and long ones a small penalty;
    the result is clamped to [0, 1].
    """
    if not text or not text.strip():
        return round_half_up(ZERO, config.score_digits)
    rng = rng or random.Random()

    score = _to_decimal(config.mock_base_score)
    adjustment = _to_decimal(config.mock_length_adjustment)
    length = len(text)
    if length < config.mock_short_text_length:
        score += adjustment
    elif length > config.mock_long_text_length:
        score -= adjustment

    score += _to_decimal(rng.uniform(-config.mock_jitter, config.mock_jitter))
    return round_half_up(clamp_score(score), config.score_digits)
