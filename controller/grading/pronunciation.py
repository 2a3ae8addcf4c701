import logging
import random
from decimal import Decimal
from typing import Awaitable, Callable, Optional

from controller.grading.config import AnalyzerConfig
from controller.grading.scoring import compute_score, mock_score, round_half_up
from controller.grading.text_align import align_words, tokenize
from schemas.pronunciation import PronunciationAnalysis

logger = logging.getLogger(__name__)


class PronunciationAnalyzer:
    """Scores a recognized transcript against the sentence the learner was asked to say.

    Holds configuration and its own random source only, so separately
    configured analyzers can be used side by side from any thread.
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or AnalyzerConfig()
        self.rng = rng or random.Random(self.config.random_seed)

    def mock_score(self, text: str) -> Decimal:
        return mock_score(text, rng=self.rng, config=self.config)

    def analyze(
        self,
        expected_text: Optional[str],
        recognized_text: Optional[str] = None,
        *,
        audio_present: Optional[bool] = None,
    ) -> PronunciationAnalysis:
        expected_text = (expected_text or "").strip()
        if audio_present is None:
            audio_present = recognized_text is not None
        has_transcript = bool(recognized_text and recognized_text.strip())

        expected_tokens = tokenize(expected_text)
        if not expected_tokens:
            return PronunciationAnalysis(
                score=round_half_up(1, self.config.score_digits),
                expected_text=expected_text,
                recognized_text=recognized_text or "",
                details=(),
            )

        if not has_transcript and not audio_present:
            return self._fallback(expected_text)
        if not has_transcript:
            logger.warning("Empty transcript for recorded audio; using degraded score.")
            return self._degraded(expected_text)

        alignment = align_words(
            expected_tokens,
            tokenize(recognized_text),
            min_length=self.config.near_match_min_length,
            max_distance=self.config.near_match_max_distance,
        )
        score = compute_score(
            alignment.match_count, len(expected_tokens), self.config.score_digits
        )
        return PronunciationAnalysis(
            score=score,
            expected_text=expected_text,
            recognized_text=recognized_text,
            details=alignment.details,
        )

    def analyze_transcription(
        self,
        expected_text: Optional[str],
        transcribe: Callable[[], Optional[str]],
    ) -> PronunciationAnalysis:
        try:
            recognized_text = transcribe()
        except Exception as exc:
            logger.warning("Speech recognition failed: %s", exc)
            return self._degraded((expected_text or "").strip())
        return self.analyze(expected_text, recognized_text or "", audio_present=True)

    async def analyze_transcription_async(
        self,
        expected_text: Optional[str],
        transcribe: Callable[[], Awaitable[Optional[str]]],
    ) -> PronunciationAnalysis:
        try:
            recognized_text = await transcribe()
        except Exception as exc:
            logger.warning("Speech recognition failed: %s", exc)
            return self._degraded((expected_text or "").strip())
        return self.analyze(expected_text, recognized_text or "", audio_present=True)

    def _fallback(self, expected_text: str) -> PronunciationAnalysis:
        # no recording at all: assume the learner read the prompt as written
        return PronunciationAnalysis(
            score=self.mock_score(expected_text),
            expected_text=expected_text,
            recognized_text=expected_text,
            details=(),
            source="fallback",
        )

    def _degraded(self, expected_text: str) -> PronunciationAnalysis:
        if not tokenize(expected_text):
            return self.analyze(expected_text, "")
        return PronunciationAnalysis(
            score=self.mock_score(expected_text),
            expected_text=expected_text,
            recognized_text="",
            details=(),
            source="degraded",
        )
