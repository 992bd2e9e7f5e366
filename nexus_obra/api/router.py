"""Router aggregation.

Resource routers share the general API rate limit; health probes are exempt.
"""

from fastapi import APIRouter, Depends

from nexus_obra.api.endpoints import clients, health, obras, uploads, users
from nexus_obra.core.limiter import limit_api

api_router = APIRouter()

_limited = [Depends(limit_api)]

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"], dependencies=_limited)
api_router.include_router(
    clients.router, prefix="/clients", tags=["clients"], dependencies=_limited
)
api_router.include_router(obras.router, prefix="/obras", tags=["obras"], dependencies=_limited)
api_router.include_router(
    uploads.router, prefix="/uploads", tags=["uploads"], dependencies=_limited
)
