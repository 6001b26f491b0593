# Services package

from app.services.site import SiteRenderer

__all__ = [
    # Request pipeline
    "SiteRenderer",
]
