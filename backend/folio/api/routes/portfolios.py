"""Portfolio Routes - list/get/create/update/delete for portfolio projects.

Invariants:
    - One route per OPERATIONS entry of kind portfolio
    - Errors propagate as FolioError and are rendered by api/error_handlers.py
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from folio.api.dependencies import get_portfolio_api
from folio.schemas.common import DeleteResponse
from folio.schemas.portfolio import PortfolioInput, PortfolioResponse
from folio.services.resource_api import PortfolioAPI, error_responses

router = APIRouter(prefix="/api/v1/portfolios", tags=["portfolios"])


@router.get(
    "", response_model=list[PortfolioResponse],
    responses=error_responses("listPortfolios"),
)
async def list_portfolios(api: PortfolioAPI = Depends(get_portfolio_api)):
    """All portfolio projects, newest first."""
    return await api.list_all()


@router.get(
    "/{portfolio_id}", response_model=PortfolioResponse,
    responses=error_responses("getPortfolio"),
)
async def get_portfolio(
    portfolio_id: UUID, api: PortfolioAPI = Depends(get_portfolio_api),
):
    return await api.get(portfolio_id)


@router.post(
    "", response_model=PortfolioResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses("createPortfolio"),
)
async def create_portfolio(
    body: PortfolioInput, api: PortfolioAPI = Depends(get_portfolio_api),
):
    return await api.create(body)


@router.put(
    "/{portfolio_id}", response_model=PortfolioResponse,
    responses=error_responses("updatePortfolio"),
)
async def update_portfolio(
    portfolio_id: UUID,
    body: PortfolioInput,
    api: PortfolioAPI = Depends(get_portfolio_api),
):
    """Full replacement of a portfolio project."""
    return await api.update(portfolio_id, body)


@router.delete(
    "/{portfolio_id}", response_model=DeleteResponse,
    responses=error_responses("deletePortfolio"),
)
async def delete_portfolio(
    portfolio_id: UUID, api: PortfolioAPI = Depends(get_portfolio_api),
):
    """Hard delete. A second delete of the same id returns 404."""
    return await api.delete(portfolio_id)
