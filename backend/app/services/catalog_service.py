"""
Catalog service: static machine data priced with the reference rate.
"""
from typing import Optional

from app.catalog_data import MACHINES, SUPPLIES
from app.schemas.catalog import MachineQuote, PriceStatus, ProductTypeResponse, SupplyItem

RATE_MISSING_TEXT = "Defina a taxa"


def format_brl(value: float) -> str:
    """
    Format a number as Brazilian reais, e.g. ``R$ 2.560.000,00``.
    """
    text = f"{value:,.2f}"
    # 1,234.56 -> 1.234,56
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


def quote_machine(machine: dict, reference_rate: Optional[float]) -> MachineQuote:
    """Price a catalog machine for the given reference rate."""
    jpy_price = machine.get("jpy_price")

    if jpy_price and reference_rate and reference_rate > 0:
        brl_price = round(jpy_price * reference_rate, 2)
        price = format_brl(brl_price)
        status = PriceStatus.CALCULATED
    elif jpy_price:
        brl_price = None
        price = RATE_MISSING_TEXT
        status = PriceStatus.RATE_MISSING
    else:
        brl_price = None
        price = machine["price"]
        status = PriceStatus.STATIC

    return MachineQuote(
        name=machine["name"],
        type=machine["type"],
        description=machine["description"],
        jpy_price=jpy_price,
        price=price,
        price_status=status,
        brl_price=brl_price,
    )


class CatalogService:
    """Read access to the catalog tables."""

    def __init__(self, machines: Optional[dict[str, list[dict]]] = None,
                 supplies: Optional[list[dict]] = None):
        self.machines = machines if machines is not None else MACHINES
        self.supplies = supplies if supplies is not None else SUPPLIES

    def product_types(self) -> list[str]:
        return list(self.machines)

    def models_for_type(
        self, product_type: str, reference_rate: Optional[float]
    ) -> Optional[ProductTypeResponse]:
        """Models of a product type with quotes, or None for an unknown type."""
        machines = self.machines.get(product_type)
        if machines is None:
            return None
        return ProductTypeResponse(
            product_type=product_type,
            reference_rate=reference_rate,
            models=[quote_machine(m, reference_rate) for m in machines],
        )

    def get_model(
        self, product_type: str, model_name: str, reference_rate: Optional[float]
    ) -> Optional[MachineQuote]:
        for machine in self.machines.get(product_type, []):
            if machine["name"] == model_name:
                return quote_machine(machine, reference_rate)
        return None

    def list_supplies(self) -> list[SupplyItem]:
        return [SupplyItem(**item) for item in self.supplies]
