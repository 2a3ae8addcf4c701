from typing import Optional, Union

from fastapi import HTTPException, UploadFile, status

from controller.feedback.generate import generate_speech_feedback
from controller.grading.pronunciation import PronunciationAnalyzer
from controller.speech.transcription import audio_to_bytes, transcribe_audio
from schemas.pronunciation import (
    AnalyzeRequest,
    FeedbackRequest,
    FeedbackResult,
    PronunciationAnalysis,
)


def analyze_pronunciation(
    analyzer: PronunciationAnalyzer,
    payload: AnalyzeRequest,
) -> PronunciationAnalysis:
    return analyzer.analyze(
        payload.expected_text,
        payload.recognized_text,
        audio_present=payload.audio_present,
    )


async def analyze_audio_upload(
    analyzer: PronunciationAnalyzer,
    expected_text: str,
    audio: Optional[Union[bytes, UploadFile]],
) -> PronunciationAnalysis:
    if audio is None:
        return analyzer.analyze(expected_text, None)

    audio_bytes = await audio_to_bytes(audio)
    if not audio_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Audio upload is empty.",
        )
    filename = getattr(audio, "filename", None) or "user_audio.webm"

    return await analyzer.analyze_transcription_async(
        expected_text,
        lambda: transcribe_audio(audio_bytes, filename=filename),
    )


async def build_speech_feedback(payload: FeedbackRequest) -> FeedbackResult:
    if not payload.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text is required for feedback.",
        )
    return await generate_speech_feedback(payload.text, payload.details)
