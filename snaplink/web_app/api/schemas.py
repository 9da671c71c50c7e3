"""Pydantic schemas for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(CamelModel):
    """Request to shorten a URL (documentation only; the body is checked by hand
    so type errors map to the service's own 400 messages)."""

    url: str = Field(..., description="The URL to shorten")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [{"url": "https://example.com/very/long/path/to/resource"}]
        },
    )


class ShortenResponse(CamelModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")
    short_code: str = Field(..., description="The short code")
    click_count: int = Field(..., description="Clicks so far; non-zero when an existing mapping was reused")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shortUrl": "https://sn.ap/aB3_x9-Q",
                    "originalUrl": "https://example.com/very/long/path",
                    "shortCode": "aB3_x9-Q",
                    "clickCount": 0,
                }
            ]
        },
    )


class URLStatsResponse(CamelModel):
    """Usage information for one short code."""

    original_url: str
    short_code: str
    click_count: int
    created_at: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
