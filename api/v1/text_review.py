from fastapi import APIRouter

from schemas.response_schema import APIResponse
from schemas.text_review import TextAnalysis, TextRequest, TranslationRequest
from services.text_review_service import review_text, translate

router = APIRouter(prefix="/text", tags=["Text"])


@router.post("/analyze", response_model=APIResponse[TextAnalysis])
async def analyze(payload: TextRequest):
    """
    Static grammar and spelling checks for a written sentence.
    """
    result = review_text(payload)
    return APIResponse(status_code=200, data=result, detail="Text analyzed")


@router.post("/translate", response_model=APIResponse[dict])
async def translate_route(payload: TranslationRequest):
    result = await translate(payload)
    return APIResponse(status_code=200, data=result, detail="Text translated")
