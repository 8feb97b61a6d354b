"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from sentiment_proxy.config import Settings, get_settings
from sentiment_proxy.services.sentiment_service import SentimentService


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_sentiment_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> SentimentService:
    """Dependency provider for SentimentService."""

    return SentimentService(client=client, settings=settings)
