"""Portfolio analysis endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends

from portfolio_tracker.api.deps import get_portfolio_service
from portfolio_tracker.api.schemas import (
    HoldingResponse,
    PortfolioSummaryResponse,
    PerformancePointResponse,
    PerformanceResponse,
    AllocationItemResponse,
    AllocationResponse,
)
from portfolio_tracker.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/summary", response_model=PortfolioSummaryResponse)
def get_summary(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioSummaryResponse:
    """Current holdings valued at current prices, with totals."""
    summary = portfolio.get_summary()
    return PortfolioSummaryResponse(
        holdings=[
            HoldingResponse(
                ticker=h.ticker,
                quantity=h.quantity,
                avg_cost_basis=h.avg_cost_basis,
                current_price=h.current_price,
                market_value=h.market_value,
                total_cost=h.total_cost,
                gain_loss=h.gain_loss,
                gain_loss_percent=h.gain_loss_percent,
            )
            for h in summary.holdings
        ],
        total_value=summary.total_value,
        total_cost=summary.total_cost,
        total_gain_loss=summary.total_gain_loss,
        total_gain_loss_percent=summary.total_gain_loss_percent,
        price_errors=summary.price_errors,
        as_of=summary.as_of,
    )


@router.get("/performance", response_model=PerformanceResponse)
def get_performance(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PerformanceResponse:
    """Daily portfolio value vs. invested amount since the first transaction."""
    points = portfolio.get_performance()
    return PerformanceResponse(
        performance=[
            PerformancePointResponse(date=p.date, value=p.value, invested=p.invested)
            for p in points
        ],
        count=len(points),
    )


@router.get("/allocation", response_model=AllocationResponse)
def get_allocation(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> AllocationResponse:
    """Share of total market value per holding."""
    items = portfolio.get_allocation()
    return AllocationResponse(
        allocation=[
            AllocationItemResponse(
                ticker=item.ticker,
                market_value=item.market_value,
                quantity=item.quantity,
                percentage=item.percentage,
            )
            for item in items
        ],
        total_value=sum((item.market_value for item in items), Decimal("0")),
    )
