"""Response helpers shared by the page and asset routes."""

from fastapi import Response, status
from fastapi.responses import HTMLResponse, PlainTextResponse

# Asset URLs embed a content digest, so a response never changes
ASSET_CACHE_CONTROL = "public, max-age=31536000, immutable"


def html_response(html: str, status_code: int = status.HTTP_200_OK) -> HTMLResponse:
    return HTMLResponse(content=html, status_code=status_code)


def css_cached_response(source: str) -> Response:
    return Response(
        content=source,
        media_type="text/css; charset=utf-8",
        headers={"Cache-Control": ASSET_CACHE_CONTROL},
    )


def plain_text_response(text: str, status_code: int = status.HTTP_200_OK) -> PlainTextResponse:
    return PlainTextResponse(content=text, status_code=status_code)


def raw_file_response(content: bytes, media_type: str) -> Response:
    """Repository file passed through unmodified."""
    return Response(content=content, media_type=media_type)
