"""
Static asset endpoints.

Stylesheets are served under /assets/<name>/<digest>; anything after the
name is ignored, it only exists to bust caches.
"""

from fastapi import APIRouter, Request, Response, status

from app.core.responses import css_cached_response, plain_text_response
from app.services.assets import load_assets, lookup_asset

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("/{name}")
@router.get("/{name}/{suffix:path}")
async def get_asset(name: str, request: Request) -> Response:
    """Serve a bundled stylesheet."""
    load_assets()
    asset = lookup_asset(name)
    if asset is None:
        return plain_text_response(
            f"Asset not found: {request.url.path}", status.HTTP_404_NOT_FOUND
        )
    return css_cached_response(asset.source)
