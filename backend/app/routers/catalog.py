"""
Catalog router for machine models, prices and supplies.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies.auth import CurrentUser
from app.routers.exchange_rate import get_exchange_rate_service
from app.schemas.catalog import MachineQuote, ProductTypeResponse, SupplyItem
from app.services.catalog_service import CatalogService
from app.services.exchange_rate_service import ExchangeRateService

router = APIRouter(prefix="/catalog", tags=["Catalog"])


def get_catalog_service() -> CatalogService:
    """Dependency to get CatalogService instance."""
    return CatalogService()


async def get_reference_rate(
    rates: ExchangeRateService = Depends(get_exchange_rate_service),
) -> float | None:
    """Dependency returning the reference JPY/BRL rate, if set."""
    return await rates.get_reference_value()


@router.get(
    "/machines",
    response_model=list[str],
    summary="List product types",
)
async def list_product_types(
    current_user: CurrentUser,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Product types in catalog order (01 Cabeça, 02 Cabeças, ...)."""
    return catalog.product_types()


@router.get(
    "/machines/{product_type}",
    response_model=ProductTypeResponse,
    summary="Models of a product type",
)
async def list_models(
    product_type: str,
    current_user: CurrentUser,
    catalog: CatalogService = Depends(get_catalog_service),
    reference_rate: float | None = Depends(get_reference_rate),
):
    """
    Models of a product type with prices.

    Machines with a yen price are quoted in reais with the reference rate,
    or show "Defina a taxa" while no rate is set.
    """
    result = catalog.models_for_type(product_type, reference_rate)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product type not found",
        )
    return result


@router.get(
    "/machines/{product_type}/{model_name}",
    response_model=MachineQuote,
    summary="Get one model",
)
async def get_model(
    product_type: str,
    model_name: str,
    current_user: CurrentUser,
    catalog: CatalogService = Depends(get_catalog_service),
    reference_rate: float | None = Depends(get_reference_rate),
):
    """Details and price of a single model."""
    quote = catalog.get_model(product_type, model_name, reference_rate)
    if quote is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Model not found",
        )
    return quote


@router.get(
    "/supplies",
    response_model=list[SupplyItem],
    summary="List supplies",
)
async def list_supplies(
    current_user: CurrentUser,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Supplies grid with fixed prices and images."""
    return catalog.list_supplies()
