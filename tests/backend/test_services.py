"""
Tests for the backend services against mongomock-motor and fakeredis.

These tests cover:
- Password hashing and sign-in with automatic account creation
- Sequential order numbers and the counter reset
- Board window and ordering
- Reference rate updates, history and the live comparison
- Catalog pricing from the reference rate
- Assistant history mapping and Gemini error handling
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from google.api_core.exceptions import GoogleAPIError


# =============================================================================
# Auth
# =============================================================================

class TestPasswordHashing:
    """Tests for bcrypt helpers."""

    def test_hash_is_not_plain_text_and_verifies(self):
        from app.core.security import hash_password, verify_password

        hashed = hash_password("senha123")

        assert hashed != "senha123"
        assert verify_password("senha123", hashed)
        assert not verify_password("outra", hashed)


class TestAuthService:
    """Tests for AuthService."""

    @pytest.mark.asyncio
    async def test_sign_in_creates_account_on_first_use(self, mock_auth_db):
        from app.schemas.auth import LoginRequest
        from app.services.auth_service import AuthService

        service = AuthService(mock_auth_db)
        response = await service.sign_in(
            LoginRequest(email="novo@barudan.com.br", password="senha123")
        )

        assert response.created is True
        assert response.access_token
        assert await mock_auth_db.users.count_documents({"email": "novo@barudan.com.br"}) == 1

    @pytest.mark.asyncio
    async def test_sign_in_existing_account_checks_password(self, mock_auth_db):
        from app.schemas.auth import LoginRequest
        from app.services.auth_service import AuthService

        service = AuthService(mock_auth_db)
        await service.sign_in(LoginRequest(email="novo@barudan.com.br", password="senha123"))

        again = await service.sign_in(LoginRequest(email="novo@barudan.com.br", password="senha123"))
        assert again.created is False

        with pytest.raises(ValueError, match="Invalid email or password"):
            await service.sign_in(LoginRequest(email="novo@barudan.com.br", password="errada1"))

        assert await mock_auth_db.users.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_login_unknown_email_raises(self, mock_auth_db):
        from app.schemas.auth import LoginRequest
        from app.services.auth_service import AuthService

        with pytest.raises(ValueError):
            await AuthService(mock_auth_db).login(
                LoginRequest(email="ninguem@barudan.com.br", password="senha123")
            )

    @pytest.mark.asyncio
    async def test_register_rejects_mismatched_passwords(self, mock_auth_db):
        from app.schemas.auth import RegisterRequest
        from app.services.auth_service import AuthService

        request = RegisterRequest(
            email="novo@barudan.com.br",
            password="senha123",
            password_confirm="senha321",
        )

        with pytest.raises(ValueError, match="do not match"):
            await AuthService(mock_auth_db).register_user(request)

    @pytest.mark.asyncio
    async def test_repeated_failures_lock_the_account(self, mock_auth_db):
        from app.config import get_settings
        from app.schemas.auth import LoginRequest
        from app.services.auth_service import AuthService

        service = AuthService(mock_auth_db)
        await service.sign_in(LoginRequest(email="novo@barudan.com.br", password="senha123"))

        for _ in range(get_settings().user_lockout_threshold):
            with pytest.raises(ValueError):
                await service.login(LoginRequest(email="novo@barudan.com.br", password="errada1"))

        with pytest.raises(ValueError, match="locked"):
            await service.login(LoginRequest(email="novo@barudan.com.br", password="senha123"))

    @pytest.mark.asyncio
    async def test_get_user_from_token(self, mock_auth_db):
        from app.core.security import create_access_token
        from app.schemas.auth import LoginRequest
        from app.services.auth_service import AuthService

        service = AuthService(mock_auth_db)
        signed_in = await service.sign_in(LoginRequest(email="novo@barudan.com.br", password="senha123"))
        expired = create_access_token(
            signed_in.user_id, signed_in.email, ["user"], expires_delta=timedelta(minutes=-1)
        )

        user = await service.get_user_from_token(signed_in.access_token)

        assert user.email == "novo@barudan.com.br"
        assert await service.get_user_from_token(expired) is None
        assert await service.get_user_from_token("garbage") is None

    @pytest.mark.asyncio
    async def test_get_user_by_id_with_malformed_id_returns_none(self, mock_auth_db):
        from app.services.auth_service import AuthService

        assert await AuthService(mock_auth_db).get_user_by_id("not-an-object-id") is None


# =============================================================================
# Orders
# =============================================================================

class TestComputeNextOrderNumber:
    """Tests for the counter arithmetic."""

    def test_missing_counter_starts_at_1387(self):
        from app.services.order_service import compute_next_order_number

        assert compute_next_order_number(None) == 1387
        assert compute_next_order_number(0) == 1387

    def test_counter_below_start_is_raised_to_start(self):
        from app.services.order_service import compute_next_order_number

        assert compute_next_order_number(10) == 1387

    def test_counter_increments(self):
        from app.services.order_service import compute_next_order_number

        assert compute_next_order_number(1386) == 1387
        assert compute_next_order_number(5000) == 5001


class TestOrderNumbers:
    """Tests for OrderService.next_order_number and reset_counter."""

    @pytest.mark.asyncio
    async def test_numbers_are_sequential_from_1387(self, mock_sales_db):
        from app.services.order_service import OrderService

        service = OrderService(mock_sales_db)

        numbers = [await service.next_order_number() for _ in range(3)]

        assert numbers == ["1387", "1388", "1389"]

    @pytest.mark.asyncio
    async def test_existing_counter_continues(self, mock_sales_db):
        from app.database.databases import sales_db
        from app.services.order_service import OrderService

        await mock_sales_db.counters.insert_one(
            {"_id": sales_db.ORDER_COUNTER_ID, "last_order_number": 5000}
        )

        assert await OrderService(mock_sales_db).next_order_number() == "5001"

    @pytest.mark.asyncio
    async def test_zero_counter_restarts_at_1387(self, mock_sales_db):
        from app.database.databases import sales_db
        from app.services.order_service import OrderService

        await mock_sales_db.counters.insert_one(
            {"_id": sales_db.ORDER_COUNTER_ID, "last_order_number": 0}
        )

        assert await OrderService(mock_sales_db).next_order_number() == "1387"

    @pytest.mark.asyncio
    async def test_concurrent_allocations_are_unique(self, mock_sales_db):
        from app.services.order_service import OrderService

        service = OrderService(mock_sales_db)

        numbers = await asyncio.gather(*[service.next_order_number() for _ in range(5)])

        assert sorted(numbers) == ["1387", "1388", "1389", "1390", "1391"]

    @pytest.mark.asyncio
    async def test_reset_makes_next_number_1387(self, mock_sales_db):
        from app.services.order_service import OrderService

        service = OrderService(mock_sales_db)
        await service.next_order_number()
        await service.next_order_number()

        assert await service.reset_counter() == "1387"
        assert await service.next_order_number() == "1387"

    @pytest.mark.asyncio
    async def test_contended_counter_gives_up(self, mock_sales_db):
        from app.core.exceptions import OrderNumberError
        from app.services.order_service import OrderService

        service = OrderService(mock_sales_db)
        service.counters = MagicMock()
        service.counters.find_one = AsyncMock(
            return_value={"_id": "order_counter", "last_order_number": 1400}
        )
        service.counters.update_one = AsyncMock(return_value=MagicMock(matched_count=0))

        with pytest.raises(OrderNumberError):
            await service.next_order_number()

    @pytest.mark.asyncio
    async def test_database_failure_raises_order_number_error(self, mock_sales_db):
        from pymongo.errors import ServerSelectionTimeoutError

        from app.core.exceptions import OrderNumberError
        from app.services.order_service import OrderService

        service = OrderService(mock_sales_db)
        service.counters = MagicMock()
        service.counters.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))

        with pytest.raises(OrderNumberError):
            await service.next_order_number()


class TestOrderService:
    """Tests for order CRUD."""

    @pytest.mark.asyncio
    async def test_create_order_with_blank_number_allocates_one(
        self, mock_sales_db, mock_current_user, order_payload
    ):
        from app.schemas.order import OrderCreate
        from app.services.order_service import OrderService

        order = await OrderService(mock_sales_db).create_order(
            mock_current_user, OrderCreate(**order_payload)
        )

        assert order.order_number == "1387"
        assert order.user_id == mock_current_user.id
        assert order.client_company_name == "Bordados Silva Ltda."

    @pytest.mark.asyncio
    async def test_create_order_keeps_given_number(
        self, mock_sales_db, mock_current_user, order_payload
    ):
        from app.schemas.order import OrderCreate
        from app.services.order_service import OrderService

        order = await OrderService(mock_sales_db).create_order(
            mock_current_user, OrderCreate(**{**order_payload, "order_number": "2001"})
        )

        assert order.order_number == "2001"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("placeholder", ["Carregando...", "ERRO!"])
    async def test_create_order_rejects_placeholder_numbers(
        self, mock_sales_db, mock_current_user, order_payload, placeholder
    ):
        from app.schemas.order import OrderCreate
        from app.services.order_service import OrderService

        with pytest.raises(ValueError):
            await OrderService(mock_sales_db).create_order(
                mock_current_user, OrderCreate(**{**order_payload, "order_number": placeholder})
            )

        assert await mock_sales_db.orders.count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_orders_are_scoped_to_their_owner(
        self, mock_sales_db, mock_current_user, order_payload
    ):
        from app.schemas.order import OrderCreate
        from app.services.order_service import OrderService

        service = OrderService(mock_sales_db)
        order = await service.create_order(mock_current_user, OrderCreate(**order_payload))

        assert await service.get_order(order.id, "someone-else") is None
        assert await service.delete_order(order.id, "someone-else") is False
        assert await service.list_orders("someone-else") == []

        assert (await service.get_order(order.id, mock_current_user.id)).id == order.id
        assert await service.delete_order(order.id, mock_current_user.id) is True
        assert await service.list_orders(mock_current_user.id) == []

    @pytest.mark.asyncio
    async def test_get_order_with_malformed_id_returns_none(self, mock_sales_db, mock_current_user):
        from app.services.order_service import OrderService

        assert await OrderService(mock_sales_db).get_order("bad-id", mock_current_user.id) is None

    @pytest.mark.asyncio
    async def test_delete_all_removes_orders_and_restarts_numbering(
        self, mock_sales_db, mock_current_user, order_payload
    ):
        from app.schemas.order import OrderCreate
        from app.services.order_service import OrderService

        service = OrderService(mock_sales_db)
        for _ in range(3):
            await service.create_order(mock_current_user, OrderCreate(**order_payload))

        result = await service.delete_all_and_reset_counter(mock_current_user.id)

        assert result.deleted == 3
        assert result.next_order_number == "1387"
        assert await service.next_order_number() == "1387"

    @pytest.mark.asyncio
    async def test_create_order_publishes_private_event(
        self, mock_sales_db, mock_current_user, order_payload
    ):
        from app.schemas.order import OrderCreate
        from app.services.order_service import OrderService

        with patch("app.services.order_service.publish_event", new_callable=AsyncMock) as publish:
            await OrderService(mock_sales_db).create_order(
                mock_current_user, OrderCreate(**order_payload)
            )

        topic, data = publish.await_args.args
        assert topic == "orders"
        assert data["action"] == "created"
        assert publish.await_args.kwargs["user_id"] == mock_current_user.id


# =============================================================================
# Board
# =============================================================================

class TestBoardService:
    """Tests for BoardService."""

    @pytest.mark.asyncio
    async def test_post_message_strips_text_and_records_author(self, mock_board_db, mock_current_user):
        from app.schemas.board import BoardMessageCreate
        from app.services.board_service import BoardService

        message = await BoardService(mock_board_db).post_message(
            mock_current_user, BoardMessageCreate(text="  Bom dia, equipe!  ")
        )

        assert message.text == "Bom dia, equipe!"
        assert message.user_email == mock_current_user.email

    @pytest.mark.asyncio
    async def test_recent_messages_keeps_last_100_oldest_first(self, mock_board_db):
        from app.services.board_service import BoardService

        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        await mock_board_db.messages.insert_many([
            {
                "text": f"msg {i}",
                "user_id": "u1",
                "user_email": "vendedor@barudan.com.br",
                "created_at": base + timedelta(seconds=i),
            }
            for i in range(105)
        ])

        messages = await BoardService(mock_board_db).recent_messages()

        assert len(messages) == 100
        assert messages[0].text == "msg 5"
        assert messages[-1].text == "msg 104"

    @pytest.mark.asyncio
    async def test_recent_messages_honours_limit(self, mock_board_db):
        from app.services.board_service import BoardService

        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        await mock_board_db.messages.insert_many([
            {"text": f"msg {i}", "user_id": "u1", "user_email": "a@barudan.com.br",
             "created_at": base + timedelta(seconds=i)}
            for i in range(3)
        ])

        messages = await BoardService(mock_board_db).recent_messages(limit=2)

        assert [m.text for m in messages] == ["msg 1", "msg 2"]

    def test_blank_message_is_rejected(self):
        from pydantic import ValidationError

        from app.schemas.board import BoardMessageCreate

        with pytest.raises(ValidationError):
            BoardMessageCreate(text="   ")


# =============================================================================
# Exchange rate
# =============================================================================

class TestCompareRates:
    """Tests for compare_rates."""

    def test_equal_rates(self):
        from app.services.exchange_rate_service import compare_rates

        comparison = compare_rates(0.036, 0.036)

        assert comparison.status == "equal"
        assert comparison.message == "A taxa atual é igual à sua referência."

    def test_rate_above_reference(self):
        from app.services.exchange_rate_service import compare_rates

        comparison = compare_rates(0.0375, 0.0375 / 1.05)

        assert comparison.status == "above"
        assert comparison.message == "A taxa atual está 5.00% acima da sua referência."

    def test_rate_below_reference(self):
        from app.services.exchange_rate_service import compare_rates

        comparison = compare_rates(0.03, 0.04)

        assert comparison.status == "below"
        assert comparison.message == "A taxa atual está 25.00% abaixo da sua referência."

    def test_missing_reference_has_no_comparison(self):
        from app.services.exchange_rate_service import compare_rates

        assert compare_rates(0.036, None) is None
        assert compare_rates(0.036, 0) is None


class TestExchangeRateProvider:
    """Tests for the HTTP rate provider."""

    def _provider(self, handler):
        from app.services.exchange_rate_service import ExchangeRateProvider

        provider = ExchangeRateProvider(base_url="https://rates.test/latest/JPY", timeout=1)
        provider._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return provider

    @pytest.mark.asyncio
    async def test_reads_brl_rate(self):
        provider = self._provider(
            lambda request: httpx.Response(200, json={"result": "success", "rates": {"BRL": 0.0371}})
        )

        assert await provider.get_jpy_brl_rate() == pytest.approx(0.0371)
        await provider.close()

    @pytest.mark.asyncio
    async def test_http_error_raises_unavailable(self):
        from app.core.exceptions import ExchangeRateUnavailableError

        provider = self._provider(lambda request: httpx.Response(502))

        with pytest.raises(ExchangeRateUnavailableError):
            await provider.get_jpy_brl_rate()
        await provider.close()

    @pytest.mark.asyncio
    async def test_missing_brl_rate_raises_unavailable(self):
        from app.core.exceptions import ExchangeRateUnavailableError

        provider = self._provider(lambda request: httpx.Response(200, json={"rates": {"USD": 0.0067}}))

        with pytest.raises(ExchangeRateUnavailableError):
            await provider.get_jpy_brl_rate()
        await provider.close()

    @pytest.mark.asyncio
    async def test_non_positive_rate_raises_unavailable(self):
        from app.core.exceptions import ExchangeRateUnavailableError

        provider = self._provider(lambda request: httpx.Response(200, json={"rates": {"BRL": 0}}))

        with pytest.raises(ExchangeRateUnavailableError):
            await provider.get_jpy_brl_rate()
        await provider.close()


class TestExchangeRateService:
    """Tests for ExchangeRateService."""

    @pytest.mark.asyncio
    async def test_reference_rate_is_none_until_set(self, mock_pricing_db, mock_rate_provider):
        from app.services.exchange_rate_service import ExchangeRateService

        service = ExchangeRateService(mock_pricing_db, mock_rate_provider)

        assert await service.get_reference_rate() is None
        assert await service.get_reference_value() is None

    @pytest.mark.asyncio
    async def test_update_writes_config_and_history(
        self, mock_pricing_db, mock_rate_provider, mock_current_user
    ):
        from app.services.exchange_rate_service import ExchangeRateService

        service = ExchangeRateService(mock_pricing_db, mock_rate_provider)
        await service.update_reference_rate(mock_current_user, 0.036)

        reference = await service.get_reference_rate()
        assert reference.current_rate == 0.036
        assert reference.last_updated_by == mock_current_user.email

        history = await service.get_history()
        assert [entry.rate for entry in history] == [0.036]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rate", [0, -0.5])
    async def test_update_rejects_non_positive_rate(
        self, mock_pricing_db, mock_rate_provider, mock_current_user, rate
    ):
        from app.services.exchange_rate_service import ExchangeRateService

        service = ExchangeRateService(mock_pricing_db, mock_rate_provider)

        with pytest.raises(ValueError):
            await service.update_reference_rate(mock_current_user, rate)
        assert await mock_pricing_db.exchange_rate_history.count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_history_is_newest_first(self, mock_pricing_db, mock_rate_provider):
        from app.services.exchange_rate_service import ExchangeRateService

        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        await mock_pricing_db.exchange_rate_history.insert_many([
            {"rate": 0.030 + i / 1000, "updated_by": "a@barudan.com.br",
             "updated_at": base + timedelta(days=i)}
            for i in range(3)
        ])

        history = await ExchangeRateService(mock_pricing_db, mock_rate_provider).get_history(limit=2)

        assert [entry.rate for entry in history] == [pytest.approx(0.032), pytest.approx(0.031)]

    @pytest.mark.asyncio
    async def test_live_rate_is_compared_with_reference(
        self, mock_pricing_db, mock_rate_provider, mock_current_user
    ):
        from app.services.exchange_rate_service import ExchangeRateService

        mock_rate_provider.get_jpy_brl_rate.return_value = 0.03
        service = ExchangeRateService(mock_pricing_db, mock_rate_provider)
        await service.update_reference_rate(mock_current_user, 0.04)

        live = await service.get_live_rate()

        assert live.rate == 0.03
        assert live.reference_rate == 0.04
        assert live.comparison.status == "below"

    @pytest.mark.asyncio
    async def test_live_rate_without_reference_has_no_comparison(
        self, mock_pricing_db, mock_rate_provider
    ):
        from app.services.exchange_rate_service import ExchangeRateService

        mock_rate_provider.get_jpy_brl_rate.return_value = 0.0371

        live = await ExchangeRateService(mock_pricing_db, mock_rate_provider).get_live_rate()

        assert live.reference_rate is None
        assert live.comparison is None


# =============================================================================
# Catalog
# =============================================================================

class TestCatalogPricing:
    """Tests for catalog quoting."""

    def test_format_brl_uses_pt_br_separators(self):
        from app.services.catalog_service import format_brl

        assert format_brl(1234.5) == "R$ 1.234,50"
        assert format_brl(2560000) == "R$ 2.560.000,00"
        assert format_brl(0) == "R$ 0,00"

    def test_yen_priced_machine_with_rate_is_calculated(self):
        from app.services.catalog_service import quote_machine

        quote = quote_machine(
            {"name": "M", "type": "Industrial", "description": "", "price": "Consulte-nos",
             "jpy_price": 2560000},
            0.036,
        )

        assert quote.price_status == "calculated"
        assert quote.brl_price == 92160.0
        assert quote.price == "R$ 92.160,00"

    def test_yen_priced_machine_without_rate_asks_for_it(self):
        from app.services.catalog_service import RATE_MISSING_TEXT, quote_machine

        quote = quote_machine(
            {"name": "M", "type": "Industrial", "description": "", "price": "Consulte-nos",
             "jpy_price": 2560000},
            None,
        )

        assert quote.price_status == "rate_missing"
        assert quote.price == RATE_MISSING_TEXT
        assert quote.brl_price is None

    def test_static_machine_keeps_its_price(self):
        from app.services.catalog_service import quote_machine

        quote = quote_machine(
            {"name": "Modelo 2C-A", "type": "Industrial", "description": "", "price": "R$ 25.000,00"},
            0.036,
        )

        assert quote.price_status == "static"
        assert quote.price == "R$ 25.000,00"

    def test_product_types_keep_catalog_order(self):
        from app.services.catalog_service import CatalogService

        types = CatalogService().product_types()

        assert types[0] == "01 Cabeça"
        assert types[-1] == "Acessórios"
        assert "Drop-Table" in types

    def test_unknown_product_type_and_model(self):
        from app.services.catalog_service import CatalogService

        service = CatalogService()

        assert service.models_for_type("99 Cabeças", 0.036) is None
        assert service.get_model("01 Cabeça", "Inexistente", 0.036) is None

    def test_supplies_list(self):
        from app.services.catalog_service import CatalogService

        supplies = CatalogService().list_supplies()

        assert len(supplies) == 6
        assert all(item.image.startswith("https://") for item in supplies)


# =============================================================================
# Assistant
# =============================================================================

class TestMapHistory:
    """Tests for map_history."""

    def test_greeting_and_errors_are_dropped(self):
        from app.schemas.assistant import ChatMessage
        from app.services.assistant_service import map_history

        history = map_history([
            ChatMessage(sender="ai", text="Olá! Eu sou Barudex."),
            ChatMessage(sender="user", text="O que é lantejoula?"),
            ChatMessage(sender="error", text="Falha"),
            ChatMessage(sender="ai", text="Um enfeite brilhante."),
        ])

        assert history == [
            {"role": "user", "parts": ["O que é lantejoula?"]},
            {"role": "model", "parts": ["Um enfeite brilhante."]},
        ]

    def test_history_without_user_message_is_empty(self):
        from app.schemas.assistant import ChatMessage
        from app.services.assistant_service import map_history

        assert map_history([ChatMessage(sender="ai", text="Olá!")]) == []


class TestAssistantService:
    """Tests for AssistantService with a mocked Gemini client."""

    @pytest.mark.asyncio
    async def test_chat_returns_model_answer(self, mock_genai):
        from app.schemas.assistant import ChatMessage
        from app.services.assistant_service import SYSTEM_INSTRUCTION, AssistantService

        with patch("app.services.assistant_service.genai", mock_genai):
            service = AssistantService(api_key="test-key", model_name="gemini-test")
            reply = await service.chat(
                "E agora?",
                [ChatMessage(sender="user", text="Oi"), ChatMessage(sender="ai", text="Olá")],
            )

        assert reply.sender == "ai"
        assert reply.text == "Olá! Sou o Barudex."
        mock_genai.configure.assert_called_once_with(api_key="test-key")
        mock_genai.GenerativeModel.assert_called_once_with(
            model_name="gemini-test", system_instruction=SYSTEM_INSTRUCTION
        )
        history = mock_genai.GenerativeModel.return_value.start_chat.call_args.kwargs["history"]
        assert [turn["role"] for turn in history] == ["user", "model"]
        mock_genai.session.send_message_async.assert_awaited_once_with("E agora?")

    @pytest.mark.asyncio
    async def test_curiosity_sends_fixed_prompt(self, mock_genai):
        from app.services.assistant_service import CURIOSITY_PROMPT, AssistantService

        with patch("app.services.assistant_service.genai", mock_genai):
            await AssistantService(api_key="test-key").curiosity([])

        mock_genai.session.send_message_async.assert_awaited_once_with(CURIOSITY_PROMPT)

    @pytest.mark.asyncio
    async def test_missing_api_key_raises_unavailable(self, mock_genai):
        from app.core.exceptions import LLMUnavailableError
        from app.services.assistant_service import AssistantService

        service = AssistantService(api_key="test-key")
        service.api_key = None

        with patch("app.services.assistant_service.genai", mock_genai):
            with pytest.raises(LLMUnavailableError):
                await service.chat("Oi", [])
        mock_genai.GenerativeModel.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [GoogleAPIError("quota exceeded"), ValueError("blocked")])
    async def test_gemini_failure_raises_unavailable(self, mock_genai, error):
        from app.core.exceptions import LLMUnavailableError
        from app.services.assistant_service import AssistantService

        mock_genai.session.send_message_async.side_effect = error

        with patch("app.services.assistant_service.genai", mock_genai):
            with pytest.raises(LLMUnavailableError) as exc_info:
                await AssistantService(api_key="test-key").chat("Oi", [])

        assert exc_info.value.status_code == 503

    def test_greeting(self):
        from app.services.assistant_service import GREETING, AssistantService

        assert AssistantService(api_key="test-key").greeting().text == GREETING


# =============================================================================
# Transactional writes
# =============================================================================

def session_recorder(session):
    """Stand-in for run_in_transaction that hands ``session`` to the callback."""
    async def run(callback):
        return await callback(session)
    return run


class TestTransactionalWrites:
    """Paired writes share one transaction session, and failures propagate."""

    @pytest.mark.asyncio
    async def test_rate_update_writes_config_and_history_in_one_session(
        self, mock_pricing_db, mock_rate_provider, mock_current_user
    ):
        from app.services.exchange_rate_service import ExchangeRateService

        session = object()
        service = ExchangeRateService(mock_pricing_db, mock_rate_provider)
        service.config = MagicMock(update_one=AsyncMock())
        service.history = MagicMock(insert_one=AsyncMock())

        with patch(
            "app.services.exchange_rate_service.run_in_transaction", session_recorder(session)
        ):
            await service.update_reference_rate(mock_current_user, 0.036)

        assert service.config.update_one.await_args.kwargs["session"] is session
        assert service.history.insert_one.await_args.kwargs["session"] is session

    @pytest.mark.asyncio
    async def test_failed_rate_transaction_propagates_without_event(
        self, mock_pricing_db, mock_rate_provider, mock_current_user
    ):
        from pymongo.errors import OperationFailure

        from app.services.exchange_rate_service import ExchangeRateService

        service = ExchangeRateService(mock_pricing_db, mock_rate_provider)

        with patch(
            "app.services.exchange_rate_service.run_in_transaction",
            AsyncMock(side_effect=OperationFailure("transaction aborted")),
        ), patch(
            "app.services.exchange_rate_service.publish_event", new_callable=AsyncMock
        ) as publish:
            with pytest.raises(OperationFailure):
                await service.update_reference_rate(mock_current_user, 0.036)

        publish.assert_not_awaited()
        assert await service.get_reference_rate() is None

    @pytest.mark.asyncio
    async def test_delete_all_and_counter_reset_share_one_session(self, mock_sales_db):
        from app.services.order_service import OrderService

        session = object()
        service = OrderService(mock_sales_db)
        service.orders = MagicMock(delete_many=AsyncMock(return_value=MagicMock(deleted_count=2)))
        service.counters = MagicMock(update_one=AsyncMock())

        with patch("app.services.order_service.run_in_transaction", session_recorder(session)):
            result = await service.delete_all_and_reset_counter("user1")

        assert result.deleted == 2
        assert result.next_order_number == "1387"
        assert service.orders.delete_many.await_args.kwargs["session"] is session
        assert service.counters.update_one.await_args.kwargs["session"] is session

    @pytest.mark.asyncio
    async def test_failed_delete_all_transaction_propagates(
        self, mock_sales_db, mock_current_user, order_payload
    ):
        from pymongo.errors import OperationFailure

        from app.schemas.order import OrderCreate
        from app.services.order_service import OrderService

        service = OrderService(mock_sales_db)
        await service.create_order(mock_current_user, OrderCreate(**order_payload))

        with patch(
            "app.services.order_service.run_in_transaction",
            AsyncMock(side_effect=OperationFailure("transaction aborted")),
        ):
            with pytest.raises(OperationFailure):
                await service.delete_all_and_reset_counter(mock_current_user.id)

        assert len(await service.list_orders(mock_current_user.id)) == 1
