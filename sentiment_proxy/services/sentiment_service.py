"""Adapter for the Hugging Face sentiment classification endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx

from sentiment_proxy.config import Settings
from sentiment_proxy.exceptions import ServiceError, UpstreamExhaustedError
from sentiment_proxy.services.classification import (
    UpstreamResult,
    classify_body,
    classify_transport_error,
)

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

EXHAUSTED_MESSAGE = "service unavailable after multiple attempts"


class SentimentService:
    """Wrapper around the hosted inference endpoint with cold-start retries.

    Each call to :meth:`analyze` runs its own attempt loop. An attempt either
    succeeds, fails for good, or reports a retryable condition (the model is
    still loading, or the request never completed). Retryable attempts are
    separated by a fixed ``retry_delay`` and bounded by ``max_retries``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._settings = settings
        self._sleep = sleep

    @property
    def max_retries(self) -> int:
        return self._settings.max_retries

    @property
    def retry_delay(self) -> float:
        return self._settings.retry_delay

    async def analyze(self, text: str) -> Any:
        """Classify ``text`` and return the upstream payload unchanged."""

        last_error: ServiceError | None = None

        for attempt in range(1, self.max_retries + 1):
            logger.info(
                "Calling inference endpoint",
                extra={"attempt": attempt, "max_retries": self.max_retries},
            )
            result = await self._attempt(text)

            if result.ok:
                logger.info("Inference succeeded", extra={"attempt": attempt})
                return result.payload

            error = result.to_error()
            if not result.retryable:
                logger.info(
                    "Inference failed",
                    extra={"attempt": attempt, "outcome": result.outcome.value},
                )
                raise error

            last_error = error
            if attempt < self.max_retries:
                logger.warning(
                    "Retryable inference condition; retrying",
                    extra={
                        "attempt": attempt,
                        "outcome": result.outcome.value,
                        "reason": result.message,
                        "estimated_time": result.estimated_time,
                        "retry_delay": self.retry_delay,
                    },
                )
                await self._sleep(self.retry_delay)

        logger.error(
            "Inference endpoint unavailable after retries",
            extra={"attempts": self.max_retries},
        )
        raise UpstreamExhaustedError(EXHAUSTED_MESSAGE) from last_error

    async def _attempt(self, text: str) -> UpstreamResult:
        headers = {
            "Authorization": f"Bearer {self._settings.hugging_face_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                self._settings.model_url,
                headers=headers,
                json={"inputs": text},
                timeout=self._settings.upstream_timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("Inference request timed out", exc_info=exc)
            return classify_transport_error(exc)
        except httpx.HTTPError as exc:
            logger.warning("Inference request failed", exc_info=exc)
            return classify_transport_error(exc)

        body = response.text
        result = classify_body(body)
        if not result.ok and not result.retryable:
            logger.error(
                "Inference endpoint returned a non-retryable response",
                extra={"status_code": response.status_code, "response_text": body},
            )
        return result
