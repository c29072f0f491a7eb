"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with backend-specific helpers
for testing FastAPI routes, services, and database operations.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def mock_rate_provider():
    """
    Create a fully mocked ExchangeRateProvider.

        mock_rate_provider.get_jpy_brl_rate.return_value = 0.0375
    """
    provider = MagicMock()
    provider.get_jpy_brl_rate = AsyncMock()
    provider.close = AsyncMock()
    return provider


@pytest.fixture
def mock_genai():
    """
    Mocked google.generativeai module.

    The chat session returned by GenerativeModel().start_chat() answers
    with ``mock_genai.reply.text``.
    """
    genai = MagicMock()
    reply = MagicMock()
    reply.text = "Olá! Sou o Barudex."
    session = MagicMock()
    session.send_message_async = AsyncMock(return_value=reply)
    genai.GenerativeModel.return_value.start_chat.return_value = session
    genai.reply = reply
    genai.session = session
    return genai


@pytest.fixture
def order_payload() -> dict:
    """A filled order form."""
    return {
        "order_number": "",
        "order_date": "2026-03-10",
        "seller_name": "Carlos",
        "sale_type": "Venda direta",
        "client_company_name": "Bordados Silva Ltda.",
        "client_cnpj": "12.345.678/0001-90",
        "client_state_registration": "254.123.456",
        "client_address": "Rua das Linhas, 100",
        "client_district": "Centro",
        "client_zip_code": "88350-000",
        "client_city": "Brusque",
        "client_state": "SC",
        "client_phone": "(47) 3333-4444",
        "client_email": "compras@bordadossilva.com.br",
        "client_contact": "Marina",
        "carrier": "Transportadora Sul",
        "product_quantity": "1",
        "product_description": "Bordadeira 06 Cabeças BEKT-S906CII",
        "total_value": "R$ 180.000,00",
        "notes": "Entregar com kit de bastidores.\nTreinamento incluso.",
    }


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None, error: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in str(data["detail"]).lower()
        if error:
            assert data["error"] == error
    return _assert
