"""
Service layer for business logic.
"""
from app.services.auth_service import AuthService
from app.services.order_service import OrderService
from app.services.board_service import BoardService
from app.services.exchange_rate_service import ExchangeRateService, ExchangeRateProvider
from app.services.assistant_service import AssistantService
from app.services.catalog_service import CatalogService

__all__ = [
    "AuthService",
    "OrderService",
    "BoardService",
    "ExchangeRateService",
    "ExchangeRateProvider",
    "AssistantService",
    "CatalogService",
]
