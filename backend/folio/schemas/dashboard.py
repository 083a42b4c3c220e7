"""Dashboard Schemas - summary counts derived from both collections."""

from folio.schemas.common import CamelModel


class DashboardStatsResponse(CamelModel):
    """Derived aggregates; degraded=True means the store could not be read."""
    total_projects: int
    featured_projects: int
    featured_percentage: int
    total_experiences: int
    current_jobs: int
    distinct_technologies: int
    degraded: bool = False
