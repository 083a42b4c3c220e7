"""Dashboard Routes - summary counts over both collections.

Invariants:
    - Counts are derived from fresh list reads on every request
    - Best-effort: a store failure yields zeroed counts with degraded=true,
      never an error response
"""

import logging

from fastapi import APIRouter, Depends

from folio.api.dependencies import get_experience_api, get_portfolio_api
from folio.core.aggregates import compute_dashboard_stats, empty_dashboard_stats
from folio.core.errors import FolioError
from folio.schemas.dashboard import DashboardStatsResponse
from folio.services.resource_api import ExperienceAPI, PortfolioAPI

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    portfolio_api: PortfolioAPI = Depends(get_portfolio_api),
    experience_api: ExperienceAPI = Depends(get_experience_api),
):
    try:
        portfolios = await portfolio_api.list_all()
        experiences = await experience_api.list_all()
    except FolioError as e:
        logger.warning(
            f"Dashboard stats degraded: {e.code}",
            extra={"error_code": e.code, "operation": e.context.operation},
        )
        return DashboardStatsResponse(**empty_dashboard_stats(), degraded=True)
    return DashboardStatsResponse(**compute_dashboard_stats(portfolios, experiences))
