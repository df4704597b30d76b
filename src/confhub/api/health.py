"""Health check endpoints for confhub.

- GET /health: database check, 200 when healthy, 503 when degraded
- GET /health/live: liveness, 200 while the process serves requests
- GET /health/ready: readiness, 200 once the database answers

These paths are excluded from token authentication.
"""

from collections.abc import Sequence

import structlog
from litestar import Controller, Response, get
from litestar.di import NamedDependency
from litestar.status_codes import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from .schemas import HealthCheckResponse, LivenessResponse, ReadinessResponse

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)  # pyright: ignore[reportAny]


class HealthController(Controller):
    """Health probes for monitoring and orchestration."""

    path: str = "/health"
    tags: Sequence[str] | None = ["Health"]

    @get("/", include_in_schema=False, cache=False, summary="Overall health check")
    async def health_check(
        self,
        session: NamedDependency[AsyncSession],
    ) -> Response[HealthCheckResponse]:
        """Report aggregated dependency status.

        Returns:
            HTTP 200 with status "healthy" when every check passes,
            HTTP 503 with status "degraded" otherwise.
        """
        checks = {"database": await _database_reachable(session)}
        all_healthy = all(checks.values())

        return Response(
            HealthCheckResponse(
                status="healthy" if all_healthy else "degraded",
                checks=checks,
            ),
            status_code=HTTP_200_OK if all_healthy else HTTP_503_SERVICE_UNAVAILABLE,
        )

    @get("/live", include_in_schema=False, cache=False, summary="Liveness probe")
    async def liveness(self) -> LivenessResponse:
        return LivenessResponse(status="alive")

    @get("/ready", include_in_schema=False, cache=False, summary="Readiness probe")
    async def readiness(
        self,
        session: NamedDependency[AsyncSession],
    ) -> Response[ReadinessResponse]:
        if await _database_reachable(session):
            return Response(ReadinessResponse(status="ready"), status_code=HTTP_200_OK)
        return Response(
            ReadinessResponse(status="not ready"),
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
        )


async def _database_reachable(session: AsyncSession) -> bool:
    """Run ``SELECT 1`` and report whether it succeeded."""
    try:
        _ = await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("database_check_failed", error=str(e))
        return False
    return True
