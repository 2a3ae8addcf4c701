from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field, computed_field, field_serializer


class WordStatus(str, Enum):
    correct = "correct"
    fair = "fair"
    incorrect = "incorrect"


class WordDetail(BaseModel):
    word: str
    status: WordStatus

    model_config = {"frozen": True}


AnalysisSource = Literal["analysis", "fallback", "degraded"]


class PronunciationAnalysis(BaseModel):
    score: Decimal = Field(ge=0, le=1)
    expected_text: str = Field(
        validation_alias=AliasChoices("expected_text", "expectedText"),
        serialization_alias="expectedText",
    )
    recognized_text: str = Field(
        validation_alias=AliasChoices("recognized_text", "recognizedText"),
        serialization_alias="recognizedText",
    )
    details: Tuple[WordDetail, ...] = ()
    source: AnalysisSource = "analysis"

    model_config = {"frozen": True, "populate_by_name": True}

    @computed_field(alias="mispronouncedWords")
    @property
    def mispronounced_words(self) -> List[str]:
        return [d.word for d in self.details if d.status != WordStatus.correct]

    @field_serializer("score", when_used="json")
    def serialize_score(self, value: Decimal) -> float:
        return float(value)


class AnalyzeRequest(BaseModel):
    expected_text: str = Field(
        validation_alias=AliasChoices("expected_text", "expectedText", "text"),
        serialization_alias="expectedText",
    )
    recognized_text: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("recognized_text", "recognizedText", "transcript"),
        serialization_alias="recognizedText",
    )
    audio_present: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("audio_present", "audioPresent"),
        serialization_alias="audioPresent",
    )

    model_config = {"populate_by_name": True}


class FeedbackRequest(BaseModel):
    text: str
    details: List[WordDetail] = Field(default_factory=list)


class FeedbackResult(BaseModel):
    feedback: str
    practice_words: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("practice_words", "practiceWords"),
        serialization_alias="practiceWords",
    )
    provider: str = "heuristic"

    model_config = {"populate_by_name": True}
