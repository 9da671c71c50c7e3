"""Redirect route for short links."""

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from ...lib.shortcode import ShortCodeGenerator

router = APIRouter()

NOT_FOUND_TEXT = "Short URL not found"
INTERNAL_ERROR_TEXT = "Internal server error"


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL and count the click.

    Errors are plain text since the caller is usually a browser following a link.
    """
    service = request.app.state.service
    logger = request.app.state.logger

    # Codes outside the alphabet can never have been issued
    if not ShortCodeGenerator.is_valid_format(short_code):
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)

    try:
        mapping = await service.resolve(short_code)
    except Exception:
        logger.exception(f"Lookup failed for short code {short_code}")
        return PlainTextResponse(INTERNAL_ERROR_TEXT, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if mapping is None:
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)

    # 302 (temporary) so repeat visits keep coming through for click tracking
    return RedirectResponse(url=mapping.original_url, status_code=status.HTTP_302_FOUND)
