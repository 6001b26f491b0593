"""
Bundled static assets (stylesheets).

Assets are read from app/static/ once by `load_assets()` and looked up by
name afterwards. Every asset URL carries a digest of its contents, so
responses can be cached forever and a deploy with new CSS gets a new URL.
"""

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

# Linked from every page, in this order
PAGE_STYLESHEETS: tuple[str, ...] = ("tailwindcssbase", "site")

_assets: dict[str, "StaticAsset"] | None = None


@dataclass(frozen=True)
class StaticAsset:
    """A stylesheet ready to be served."""

    name: str
    source: str
    digest: str

    @property
    def url(self) -> str:
        return f"/assets/{self.name}/{self.digest}"


def load_assets(directory: Path = STATIC_DIR) -> None:
    """Read every bundled stylesheet. Later calls are no-ops."""
    global _assets
    if _assets is not None:
        return

    loaded: dict[str, StaticAsset] = {}
    for path in sorted(directory.glob("*.css")):
        source = path.read_text(encoding="utf-8")
        digest = hashlib.sha256(source.encode()).hexdigest()[:12]
        loaded[path.stem] = StaticAsset(name=path.stem, source=source, digest=digest)

    _assets = loaded
    logger.info(f"Loaded {len(loaded)} static assets: {', '.join(loaded)}")


def lookup_asset(name: str) -> StaticAsset | None:
    """
    Find a loaded asset by name.

    Raises:
        RuntimeError: If load_assets() has not run yet
    """
    if _assets is None:
        raise RuntimeError("Static assets not loaded; call load_assets() first")
    return _assets.get(name)


def stylesheet_urls() -> list[str]:
    """URLs of the stylesheets every page links to."""
    urls = []
    for name in PAGE_STYLESHEETS:
        asset = lookup_asset(name)
        if asset is not None:
            urls.append(asset.url)
    return urls


def reset_assets() -> None:
    """Forget loaded assets. Useful for testing."""
    global _assets
    _assets = None
