from __future__ import annotations

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_serializer


class TextIssue(BaseModel):
    type: Literal["article", "spelling"]
    message: str
    offset: int
    length: int
    suggestion: str


class TextAnalysis(BaseModel):
    grammar_errors: List[TextIssue] = Field(
        default_factory=list,
        validation_alias=AliasChoices("grammar_errors", "grammarErrors"),
        serialization_alias="grammarErrors",
    )
    spelling_errors: List[TextIssue] = Field(
        default_factory=list,
        validation_alias=AliasChoices("spelling_errors", "spellingErrors"),
        serialization_alias="spellingErrors",
    )
    grammar_error_count: int = Field(
        default=0,
        validation_alias=AliasChoices("grammar_error_count", "grammarErrorCount"),
        serialization_alias="grammarErrorCount",
    )
    spelling_error_count: int = Field(
        default=0,
        validation_alias=AliasChoices("spelling_error_count", "spellingErrorCount"),
        serialization_alias="spellingErrorCount",
    )
    word_count: int = Field(
        default=0,
        validation_alias=AliasChoices("word_count", "wordCount"),
        serialization_alias="wordCount",
    )
    quality_score: Decimal = Field(
        validation_alias=AliasChoices("quality_score", "qualityScore"),
        serialization_alias="qualityScore",
    )

    model_config = {"populate_by_name": True}

    @field_serializer("quality_score", when_used="json")
    def serialize_quality_score(self, value: Decimal) -> float:
        return float(value)


class TextRequest(BaseModel):
    text: str


class TranslationRequest(BaseModel):
    text: str
    target_language: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("target_language", "targetLanguage"),
        serialization_alias="targetLanguage",
    )

    model_config = {"populate_by_name": True}
