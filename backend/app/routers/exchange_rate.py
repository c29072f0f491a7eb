"""
Exchange rate router for the reference JPY/BRL rate.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.database.connections import get_mongo_client
from app.database.databases import pricing_db
from app.dependencies.auth import CurrentUser
from app.schemas.exchange_rate import (
    HistoryEntryResponse,
    LiveRateResponse,
    ReferenceRateResponse,
    ReferenceRateUpdate,
)
from app.services.exchange_rate_service import ExchangeRateProvider, ExchangeRateService

router = APIRouter(prefix="/exchange-rate", tags=["Exchange Rate"])

_provider: Optional[ExchangeRateProvider] = None


def get_rate_provider() -> ExchangeRateProvider:
    """Shared provider so the HTTP connection pool is reused."""
    global _provider
    if _provider is None:
        _provider = ExchangeRateProvider()
    return _provider


async def close_rate_provider() -> None:
    global _provider
    if _provider is not None:
        await _provider.close()
        _provider = None


async def get_exchange_rate_service(
    provider: ExchangeRateProvider = Depends(get_rate_provider),
) -> ExchangeRateService:
    """Dependency to get ExchangeRateService instance."""
    client = await get_mongo_client()
    return ExchangeRateService(client[pricing_db.DB_NAME], provider)


@router.get(
    "/reference",
    response_model=Optional[ReferenceRateResponse],
    summary="Get the reference rate",
)
async def get_reference_rate(
    current_user: CurrentUser,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """Current reference rate, or `null` if it was never set."""
    return await service.get_reference_rate()


@router.put(
    "/reference",
    response_model=ReferenceRateResponse,
    summary="Set the reference rate",
)
async def update_reference_rate(
    body: ReferenceRateUpdate,
    current_user: CurrentUser,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """
    Set the rate used to price machines and record it in the history.

    - **rate**: BRL per JPY, must be greater than zero
    """
    try:
        return await service.update_reference_rate(current_user, body.rate)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )


@router.get(
    "/history",
    response_model=list[HistoryEntryResponse],
    summary="Reference rate history",
)
async def get_history(
    current_user: CurrentUser,
    limit: int = Query(20, ge=1, le=100),
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """Latest reference rate changes, newest first."""
    return await service.get_history(limit)


@router.get(
    "/live",
    response_model=LiveRateResponse,
    summary="Current market rate",
)
async def get_live_rate(
    current_user: CurrentUser,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """
    Market JPY/BRL rate compared with the reference rate.

    Returns 503 if the rate provider cannot be reached.
    """
    return await service.get_live_rate()
