"""API routes implementation."""

import json
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    URLStatsResponse,
    HealthResponse,
    ErrorResponse,
)
from ...lib.common.url_builder import short_url_for_request
from ...lib.errors import URLValidationError

router = APIRouter()

NOT_FOUND_MESSAGE = "Short URL not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _read_payload(request: Request) -> Any:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError:
        raise URLValidationError("Invalid JSON body")


def _extract_url(payload: Any) -> str:
    """Pull ``url`` out of the request body, enforcing presence and type."""
    if not isinstance(payload, dict):
        raise URLValidationError("Invalid JSON body")

    url = payload.get("url")
    if url is None:
        raise URLValidationError("URL is required")
    if not isinstance(url, str):
        raise URLValidationError("URL must be a string")
    if not url.strip():
        raise URLValidationError("URL cannot be empty")
    return url


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description=(
        "Create a shortened URL. Submitting a URL that was already shortened "
        "returns the existing mapping with its current click count."
    ),
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ShortenRequest.model_json_schema()}},
        }
    },
)
async def shorten_url(request: Request):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config
    logger = request.app.state.logger

    try:
        url = _extract_url(await _read_payload(request))
        mapping, created = await service.create_short_url(url)
    except URLValidationError as e:
        logger.debug(f"Shorten request rejected: {e.message}")
        return error_response(status.HTTP_400_BAD_REQUEST, e.message)
    except Exception:
        logger.exception("Failed to create short URL")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    short_url = short_url_for_request(
        short_code=mapping.short_code,
        headers=request.headers,
        override_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
        path_prefix=config.path_prefix,
    )

    return ShortenResponse(
        short_url=short_url,
        original_url=mapping.original_url,
        short_code=mapping.short_code,
        click_count=mapping.click_count,
    )


@router.get(
    "/stats/{short_code}",
    response_model=URLStatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Get URL statistics",
    description="Get the original URL, click count and creation time of a short code.",
)
async def get_url_stats(request: Request, short_code: str):
    """Get usage information about a shortened URL."""
    service = request.app.state.service
    logger = request.app.state.logger

    try:
        mapping = await service.get_url_info(short_code)
    except Exception:
        logger.exception(f"Failed to load stats for {short_code}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    if mapping is None:
        return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)

    return URLStatsResponse(
        original_url=mapping.original_url,
        short_code=mapping.short_code,
        click_count=mapping.click_count,
        created_at=mapping.created_at,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its database are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
