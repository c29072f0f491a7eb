"""
Request and response schemas for API endpoints.
"""
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    TokenRefreshResponse,
    UserInfoResponse,
)
from app.schemas.order import (
    OrderCreate,
    OrderResponse,
    OrderNumberResponse,
    DeleteAllOrdersResponse,
)
from app.schemas.board import BoardMessageCreate, BoardMessageResponse
from app.schemas.exchange_rate import (
    ReferenceRateUpdate,
    ReferenceRateResponse,
    HistoryEntryResponse,
    RateComparison,
    RateComparisonStatus,
    LiveRateResponse,
)
from app.schemas.catalog import MachineQuote, PriceStatus, ProductTypeResponse, SupplyItem
from app.schemas.assistant import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    CuriosityRequest,
    MessageSender,
)

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "TokenRefreshResponse",
    "UserInfoResponse",
    # Orders
    "OrderCreate",
    "OrderResponse",
    "OrderNumberResponse",
    "DeleteAllOrdersResponse",
    # Board
    "BoardMessageCreate",
    "BoardMessageResponse",
    # Exchange rate
    "ReferenceRateUpdate",
    "ReferenceRateResponse",
    "HistoryEntryResponse",
    "RateComparison",
    "RateComparisonStatus",
    "LiveRateResponse",
    # Catalog
    "MachineQuote",
    "PriceStatus",
    "ProductTypeResponse",
    "SupplyItem",
    # Assistant
    "ChatMessage",
    "ChatReply",
    "ChatRequest",
    "CuriosityRequest",
    "MessageSender",
]
