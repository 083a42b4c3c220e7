"""FastAPI dependencies - per-request API objects over the shared store handle."""

from fastapi import Depends

from folio.infrastructure.database import DatabaseSessionManager, get_db_manager
from folio.services.resource_api import ExperienceAPI, PortfolioAPI
from folio.services.resource_store import ExperienceStore, PortfolioStore


def get_portfolio_api(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> PortfolioAPI:
    return PortfolioAPI(PortfolioStore(db))


def get_experience_api(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> ExperienceAPI:
    return ExperienceAPI(ExperienceStore(db))
