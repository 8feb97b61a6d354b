"""Classification of raw inference endpoint responses.

The Hugging Face Inference API does not document its error bodies. The
patterns below are what it has been observed to return:

* a JSON object ``{"error": "Model ... is currently loading", "estimated_time": 20.0}``
  while a model instance cold-starts;
* a JSON object ``{"error": "..."}`` for any other failure;
* a plain-text ``Not Found`` body when the model path does not exist;
* a JSON array of arrays of ``{"label", "score"}`` objects on success.

Only bodies that fail to parse as JSON are checked for ``Not Found``.
``NaN`` and ``Infinity`` tokens are not JSON and are treated as unparseable.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any

from sentiment_proxy.exceptions import (
    ServiceError,
    UpstreamFatalError,
    UpstreamRetryableError,
)

LOADING_MARKER = "loading"
NOT_FOUND_MARKER = "Not Found"
UNEXPECTED_RESPONSE_MARKER = "Unexpected response"


class UpstreamOutcome(str, enum.Enum):
    """Closed set of recognized upstream responses."""

    SUCCESS = "success"
    MODEL_LOADING = "model_loading"
    TRANSPORT_ERROR = "transport_error"
    MODEL_NOT_FOUND = "model_not_found"
    UNEXPECTED_RESPONSE = "unexpected_response"
    UPSTREAM_ERROR = "upstream_error"
    UNEXPECTED_FORMAT = "unexpected_format"

    @property
    def retryable(self) -> bool:
        return self in _RETRYABLE


_RETRYABLE = frozenset({UpstreamOutcome.MODEL_LOADING, UpstreamOutcome.TRANSPORT_ERROR})


@dataclass(frozen=True)
class UpstreamResult:
    """Outcome of a single upstream attempt."""

    outcome: UpstreamOutcome
    payload: Any = None
    message: str = ""
    estimated_time: float | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is UpstreamOutcome.SUCCESS

    @property
    def retryable(self) -> bool:
        return self.outcome.retryable

    def to_error(self) -> ServiceError:
        """Build the exception matching a failed outcome."""

        if self.ok:
            raise ValueError("A successful result has no error")
        error_cls = UpstreamRetryableError if self.retryable else UpstreamFatalError
        return error_cls(self.message, code=self.outcome.value)


def classify_body(body: str) -> UpstreamResult:
    """Classify a raw response body read from the inference endpoint."""

    try:
        data = json.loads(body, parse_constant=_reject_constant)
    except ValueError:
        if NOT_FOUND_MARKER in body:
            return UpstreamResult(UpstreamOutcome.MODEL_NOT_FOUND, message="model not found")
        return UpstreamResult(
            UpstreamOutcome.UNEXPECTED_RESPONSE, message="unexpected response format"
        )

    if isinstance(data, dict) and data.get("error"):
        error = str(data["error"])
        if LOADING_MARKER in error:
            return UpstreamResult(
                UpstreamOutcome.MODEL_LOADING,
                message=error,
                estimated_time=_as_float(data.get("estimated_time")),
            )
        return UpstreamResult(UpstreamOutcome.UPSTREAM_ERROR, message=f"upstream error: {error}")

    if not _is_array_of_arrays(data):
        return UpstreamResult(UpstreamOutcome.UNEXPECTED_FORMAT, message="unexpected data format")

    return UpstreamResult(UpstreamOutcome.SUCCESS, payload=data)


def classify_transport_error(exc: Exception) -> UpstreamResult:
    """Classify an exception raised while talking to the inference endpoint."""

    text = str(exc)
    if NOT_FOUND_MARKER in text:
        return UpstreamResult(UpstreamOutcome.MODEL_NOT_FOUND, message="model not found")
    if UNEXPECTED_RESPONSE_MARKER in text:
        return UpstreamResult(
            UpstreamOutcome.UNEXPECTED_RESPONSE, message="unexpected response format"
        )
    return UpstreamResult(
        UpstreamOutcome.TRANSPORT_ERROR,
        message=f"{type(exc).__name__}: {text}" if text else type(exc).__name__,
    )


def _is_array_of_arrays(data: Any) -> bool:
    return isinstance(data, list) and len(data) > 0 and isinstance(data[0], list)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {token}")


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
