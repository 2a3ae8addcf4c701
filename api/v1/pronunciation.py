from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from controller.grading.pronunciation import PronunciationAnalyzer
from schemas.pronunciation import (
    AnalyzeRequest,
    FeedbackRequest,
    FeedbackResult,
    PronunciationAnalysis,
)
from schemas.response_schema import APIResponse
from services.pronunciation_service import (
    analyze_audio_upload,
    analyze_pronunciation,
    build_speech_feedback,
)

router = APIRouter(prefix="/pronunciation", tags=["Pronunciation"])


def get_pronunciation_analyzer(request: Request) -> PronunciationAnalyzer:
    analyzer = getattr(request.app.state, "pronunciation_analyzer", None)
    if analyzer is None:
        analyzer = PronunciationAnalyzer()
        request.app.state.pronunciation_analyzer = analyzer
    return analyzer


# ------------------------------
# Score a transcript against the expected sentence
# ------------------------------
@router.post("/analyze", response_model=APIResponse[PronunciationAnalysis], status_code=status.HTTP_200_OK)
async def analyze(
    payload: AnalyzeRequest,
    analyzer: PronunciationAnalyzer = Depends(get_pronunciation_analyzer),
):
    """
    Aligns the recognized transcript with the expected sentence.
    Without a transcript a placeholder score is returned and `details` is empty.
    """
    analysis = analyze_pronunciation(analyzer, payload)
    return APIResponse(status_code=200, data=analysis, detail="Pronunciation analyzed")


# ------------------------------
# Transcribe an uploaded recording, then score it
# ------------------------------
@router.post("/analyze-audio", response_model=APIResponse[PronunciationAnalysis])
async def analyze_audio(
    expected_text: str = Form(..., description="Sentence the learner was asked to say"),
    audio: Optional[UploadFile] = File(None),
    analyzer: PronunciationAnalyzer = Depends(get_pronunciation_analyzer),
):
    analysis = await analyze_audio_upload(analyzer, expected_text, audio)
    return APIResponse(status_code=200, data=analysis, detail="Pronunciation analyzed")


# ------------------------------
# Coaching feedback for flagged words
# ------------------------------
@router.post("/feedback", response_model=APIResponse[FeedbackResult])
async def feedback(payload: FeedbackRequest):
    result = await build_speech_feedback(payload)
    return APIResponse(status_code=200, data=result, detail="Feedback generated")
