from fastapi import HTTPException, status

from controller.feedback.generate import translate_text
from controller.grading.text_review import analyze_text
from schemas.text_review import TextAnalysis, TextRequest, TranslationRequest


def review_text(payload: TextRequest) -> TextAnalysis:
    if not payload.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text is required for analysis.",
        )
    return analyze_text(payload.text)


async def translate(payload: TranslationRequest) -> dict:
    translation = await translate_text(payload.text, payload.target_language)
    return {"translation": translation}
