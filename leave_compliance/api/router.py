"""
Main API router
"""
from fastapi import APIRouter

from leave_compliance.api.v1 import (
    health,
    version,
    compliance,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(compliance.router, prefix="/compliance", tags=["compliance"])
