import io
import os
from typing import Union

from fastapi import UploadFile

from controller.feedback.clients import get_openai_client, openai_request_with_retries


async def audio_to_bytes(audio: Union[bytes, UploadFile]) -> bytes:
    if isinstance(audio, (bytes, bytearray)):
        return bytes(audio)
    return await audio.read()


def _audio_stream(audio_bytes: bytes, filename: str) -> io.BytesIO:
    audio_file = io.BytesIO(audio_bytes)
    audio_file.name = filename
    return audio_file


async def transcribe_audio(audio_bytes: bytes, filename: str = "user_audio.webm") -> str:
    client = get_openai_client()
    model_name = os.getenv("OPENAI_ASR_MODEL", "gpt-4o-mini-transcribe")
    # each retry needs an unread stream
    response = await openai_request_with_retries(
        lambda: client.audio.transcriptions.create(
            model=model_name,
            file=_audio_stream(audio_bytes, filename),
            response_format="json",
        ),
        endpoint_label="transcription",
    )
    transcript = getattr(response, "text", None)
    if not transcript and isinstance(response, dict):
        transcript = response.get("text")
    return str(transcript or "").strip()
