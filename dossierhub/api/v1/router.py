"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from dossierhub.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from dossierhub.api.v1.endpoints import dossiers, health, requests, templates, uploads

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(dossiers.router, prefix="/dossiers", tags=["dossiers"])
api_router.include_router(requests.router, prefix="/requests", tags=["requests"])
api_router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
