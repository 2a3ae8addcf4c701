from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging
import os
import time

from api.v1.pronunciation import router as pronunciation_router
from api.v1.text_review import router as text_review_router
from controller.grading.config import AnalyzerConfig
from controller.grading.pronunciation import PronunciationAnalyzer
from schemas.response_schema import APIResponse

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = AnalyzerConfig.from_env()
    app.state.pronunciation_analyzer = PronunciationAnalyzer(config)
    logger.info("Pronunciation analyzer ready (seed=%s)", config.random_seed)
    yield


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time

        response.headers['X-Process-Time'] = str(process_time)

        logger.info("Request to %s took %.6f seconds", request.url, process_time)

        return response


app = FastAPI(
    lifespan=lifespan,
    title="Speech Scoring API",
)
app.add_middleware(RequestTimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=APIResponse(
            status_code=exc.status_code,
            data=None,
            detail=exc.detail,
        ).model_dump()
    )


@app.get("/health", tags=["Health"])
async def health_check():
    analyzer = getattr(app.state, "pronunciation_analyzer", None)
    data = {
        "status": "healthy" if analyzer is not None else "starting",
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime()),
        "openai_configured": bool(os.getenv("OPENAI_API_KEY")),
    }
    return APIResponse(status_code=200, detail="Health check completed", data=data)


app.include_router(pronunciation_router, prefix="/v1")
app.include_router(text_review_router, prefix="/v1")
