"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from apiassist.api.routes import activity, health, pipeline, settings, status

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(pipeline.router)
api_router.include_router(activity.router)
api_router.include_router(status.router)
api_router.include_router(settings.router)
