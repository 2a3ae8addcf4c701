import os
from dataclasses import dataclass
from typing import Optional


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


@dataclass(frozen=True)
class AnalyzerConfig:
    near_match_min_length: int = 3
    near_match_max_distance: int = 1
    score_digits: int = 2
    mock_base_score: float = 0.7
    mock_length_adjustment: float = 0.1
    mock_short_text_length: int = 20
    mock_long_text_length: int = 50
    mock_jitter: float = 0.1
    random_seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "AnalyzerConfig":
        seed = os.getenv("PRONUNCIATION_RANDOM_SEED")
        return cls(
            near_match_min_length=_env_int("PRONUNCIATION_NEAR_MATCH_MIN_LENGTH", 3),
            near_match_max_distance=_env_int("PRONUNCIATION_NEAR_MATCH_MAX_DISTANCE", 1),
            score_digits=_env_int("PRONUNCIATION_SCORE_DIGITS", 2),
            mock_base_score=_env_float("PRONUNCIATION_MOCK_BASE_SCORE", 0.7),
            mock_length_adjustment=_env_float("PRONUNCIATION_MOCK_LENGTH_ADJUSTMENT", 0.1),
            mock_short_text_length=_env_int("PRONUNCIATION_MOCK_SHORT_TEXT_LENGTH", 20),
            mock_long_text_length=_env_int("PRONUNCIATION_MOCK_LONG_TEXT_LENGTH", 50),
            mock_jitter=_env_float("PRONUNCIATION_MOCK_JITTER", 0.1),
            random_seed=int(seed) if seed else None,
        )


DEFAULT_CONFIG = AnalyzerConfig()
