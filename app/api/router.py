from fastapi import APIRouter

from app.api import assets, site

api_router = APIRouter()

# Order matters: the site router ends in a catch-all route
api_router.include_router(assets.router)
api_router.include_router(site.router)
