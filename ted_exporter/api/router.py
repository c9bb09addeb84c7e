from fastapi import APIRouter

from ted_exporter.api.routes import ted5000

api_router = APIRouter()
api_router.include_router(ted5000.router, tags=["ted5000"])
