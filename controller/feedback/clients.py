import asyncio
import logging
import os
import random
from typing import Optional

from openai import APIError, AsyncOpenAI, RateLimitError

logger = logging.getLogger(__name__)

_openai_client: Optional[AsyncOpenAI] = None
_openai_semaphore: Optional[asyncio.Semaphore] = None


def get_openai_client() -> AsyncOpenAI:
    global _openai_client
    if _openai_client is None:
        _openai_client = AsyncOpenAI()
    return _openai_client


def get_openai_semaphore() -> asyncio.Semaphore:
    global _openai_semaphore
    if _openai_semaphore is None:
        max_concurrency = int(os.getenv("OPENAI_MAX_CONCURRENCY", "1"))
        _openai_semaphore = asyncio.Semaphore(max(1, max_concurrency))
    return _openai_semaphore


def _retry_delay(exc: Exception, attempt: int, base_delay: float, max_delay: float) -> float:
    retry_after = None
    response = getattr(exc, "response", None)
    if response is not None:
        retry_after = response.headers.get("retry-after")
    delay = float(retry_after) if retry_after else min(
        max_delay, base_delay * (2 ** (attempt - 1))
    )
    return delay + random.uniform(0, 0.25)


async def openai_request_with_retries(coro_factory, endpoint_label: str = "request"):
    max_retries = int(os.getenv("OPENAI_MAX_RETRIES", "5"))
    base_delay = float(os.getenv("OPENAI_RETRY_BASE_DELAY", "0.8"))
    max_delay = float(os.getenv("OPENAI_RETRY_MAX_DELAY", "10"))
    attempt = 0
    while True:
        try:
            async with get_openai_semaphore():
                return await coro_factory()
        except RateLimitError as exc:
            attempt += 1
            if attempt > max_retries:
                logger.error("OpenAI %s rate limit after retries.", endpoint_label)
                raise
            delay = _retry_delay(exc, attempt, base_delay, max_delay)
        except APIError as exc:
            if getattr(exc, "status_code", None) != 429:
                logger.error("OpenAI %s APIError: %s", endpoint_label, exc)
                raise
            attempt += 1
            if attempt > max_retries:
                logger.error("OpenAI %s rate limit after retries.", endpoint_label)
                raise
            delay = _retry_delay(exc, attempt, base_delay, max_delay)
        logger.warning(
            "OpenAI %s rate limited (attempt %s/%s). Retrying in %.2fs.",
            endpoint_label,
            attempt,
            max_retries,
            delay,
        )
        await asyncio.sleep(delay)
