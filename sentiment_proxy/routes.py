"""HTTP handlers for the analysis endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from sentiment_proxy.config import Settings, get_settings
from sentiment_proxy.dependencies import get_sentiment_service
from sentiment_proxy.exceptions import InvalidRequestError, ServiceError
from sentiment_proxy.models import AnalyzeRequest, ErrorResponse
from sentiment_proxy.services.sentiment_service import SentimentService

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze"

router = APIRouter()


@router.options(ANALYZE_PATH)
async def analyze_preflight() -> Response:
    """Answer CORS preflight requests; headers are added by middleware."""

    return Response(status_code=status.HTTP_200_OK)


@router.post(ANALYZE_PATH)
async def analyze(
    request: Request,
    service: Annotated[SentimentService, Depends(get_sentiment_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Response:
    """Forward text to the inference endpoint and relay its classification."""

    try:
        text = await _read_text(request, settings)
        payload = await service.analyze(text)
        return JSONResponse(status_code=status.HTTP_200_OK, content=payload)
    except ServiceError as exc:
        return error_response(exc.status_code, exc.message)
    except Exception:
        logger.exception("Unhandled error while analyzing text")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error"
        )


def error_response(status_code: int, message: str) -> JSONResponse:
    """Render the ``{"error": ...}`` body used for every failure."""

    body = ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _read_text(request: Request, settings: Settings) -> str:
    raw = await request.body()
    try:
        payload = AnalyzeRequest.model_validate_json(raw or b"{}")
    except ValueError as exc:
        raise InvalidRequestError("Invalid JSON payload") from exc

    text = payload.text or ""
    if not text.strip():
        raise InvalidRequestError("Text is required")

    if len(text) > settings.max_text_length:
        raise InvalidRequestError(
            f"Text length exceeds limit of {settings.max_text_length} characters"
        )

    return text
