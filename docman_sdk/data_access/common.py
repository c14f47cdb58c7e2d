# docman_sdk/data_access/common.py
import contextlib
import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from starlette.requests import Request

from docman_sdk.config import ListingSettings

logger = logging.getLogger("docman_sdk.data_access.common")


def build_http_client(settings: ListingSettings) -> httpx.AsyncClient:
    timeouts = httpx.Timeout(
        settings.HTTP_TIMEOUT,
        connect=settings.HTTP_CONNECT_TIMEOUT,
        read=settings.HTTP_TIMEOUT,
        write=settings.HTTP_TIMEOUT,
    )
    limits = httpx.Limits(
        max_connections=settings.HTTP_MAX_CONNECTIONS,
        max_keepalive_connections=settings.HTTP_MAX_KEEPALIVE,
    )
    return httpx.AsyncClient(timeout=timeouts, limits=limits)


@contextlib.asynccontextmanager
async def app_http_client_lifespan(app: FastAPI, settings: ListingSettings):
    """
    Manages the lifecycle of an httpx.AsyncClient instance stored in app.state.
    Intended to be used as part of a FastAPI lifespan context manager.
    """
    logger.info("SDK: Initializing HTTP client in app.state...")
    client = None
    try:
        client = build_http_client(settings)
        app.state.http_client = client
        logger.info("SDK: HTTP client initialized successfully in app.state.")
        yield client
    finally:
        if client:
            logger.info("SDK: Closing HTTP client from app.state...")
            await client.aclose()
            logger.info("SDK: HTTP client closed successfully.")
        app.state.http_client = None


async def get_http_client_from_state(request: Request) -> Optional[httpx.AsyncClient]:
    """
    FastAPI dependency to get the httpx.AsyncClient from app.state.
    """
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        logger.warning("SDK Dependency: HTTP client not found in app.state.")
    return client
