"""
Health Routes

Liveness check for load balancers. Never touches the database.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}


@router.get("/api/health", response_class=PlainTextResponse)
async def health_check() -> PlainTextResponse:
    return PlainTextResponse("OK", headers=NO_CACHE_HEADERS)
