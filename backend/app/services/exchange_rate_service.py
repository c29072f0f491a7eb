"""
Exchange rate service.

The reference JPY/BRL rate is set by hand and prices every machine that has
a yen price. The live market rate is only shown next to it for comparison.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from app.config import get_settings
from app.core.exceptions import ExchangeRateUnavailableError
from app.database.connections import run_in_transaction
from app.database.databases import pricing_db
from app.models.common import as_utc, stringify_id
from app.models.user import User
from app.schemas.exchange_rate import (
    HistoryEntryResponse,
    LiveRateResponse,
    RateComparison,
    RateComparisonStatus,
    ReferenceRateResponse,
)
from app.services.events import Topics, publish_event

logger = logging.getLogger(__name__)

# Differences smaller than this percentage count as equal
EQUAL_THRESHOLD_PERCENT = 0.01


def compare_rates(current_rate: float, reference_rate: Optional[float]) -> Optional[RateComparison]:
    """
    Compare the market rate with the reference rate.

    Returns:
        The comparison, or None when there is no usable reference rate
    """
    if not reference_rate or reference_rate <= 0:
        return None

    diff = (current_rate - reference_rate) / reference_rate * 100

    if abs(diff) < EQUAL_THRESHOLD_PERCENT:
        status = RateComparisonStatus.EQUAL
        message = "A taxa atual é igual à sua referência."
    elif diff > 0:
        status = RateComparisonStatus.ABOVE
        message = f"A taxa atual está {diff:.2f}% acima da sua referência."
    else:
        status = RateComparisonStatus.BELOW
        message = f"A taxa atual está {abs(diff):.2f}% abaixo da sua referência."

    return RateComparison(status=status, percentage_diff=diff, message=message)


class ExchangeRateProvider:
    """
    Async client for the public JPY-based rates API.

    Expected response shape: ``{"result": "success", "rates": {"BRL": 0.036, ...}}``
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.base_url = base_url or settings.exchange_rate_api_url
        self.timeout = timeout or settings.exchange_rate_timeout_seconds
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def get_jpy_brl_rate(self) -> float:
        """
        Fetch how many BRL one JPY buys right now.

        Raises:
            ExchangeRateUnavailableError: On network errors or an unexpected payload
        """
        client = await self._get_client()
        try:
            response = await client.get(self.base_url)
            response.raise_for_status()
            payload: dict[str, Any] = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Exchange rate request failed: %s", e)
            raise ExchangeRateUnavailableError() from e

        try:
            rate = float(payload["rates"]["BRL"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Unexpected exchange rate payload: %s", payload)
            raise ExchangeRateUnavailableError() from e

        if rate <= 0:
            logger.error("Exchange rate provider returned %s", rate)
            raise ExchangeRateUnavailableError()
        return rate


class ExchangeRateService:
    """Service for the reference rate, its history and the live comparison."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        provider: Optional[ExchangeRateProvider] = None,
    ):
        """Initialize with pricing database and an optional rate provider."""
        self.db = db
        self.config = db[pricing_db.Collections.APP_CONFIG]
        self.history = db[pricing_db.Collections.EXCHANGE_RATE_HISTORY]
        self.provider = provider or ExchangeRateProvider()

    async def get_reference_rate(self) -> Optional[ReferenceRateResponse]:
        """Current reference rate, or None if it was never set."""
        doc = await self.config.find_one({"_id": pricing_db.EXCHANGE_RATE_CONFIG_ID})
        if not doc or doc.get("current_rate") is None:
            return None
        return ReferenceRateResponse(
            current_rate=doc["current_rate"],
            last_updated_by=doc.get("last_updated_by", ""),
            last_updated_at=as_utc(doc.get("last_updated_at")),
        )

    async def get_reference_value(self) -> Optional[float]:
        """Reference rate as a number, or None."""
        reference = await self.get_reference_rate()
        return reference.current_rate if reference else None

    async def update_reference_rate(self, user: User, rate: float) -> ReferenceRateResponse:
        """
        Set a new reference rate.

        The config document and its history entry are written in one
        transaction, so the history never disagrees with the current rate.

        Raises:
            ValueError: If the rate is not positive
            PyMongoError: If the transaction failed
        """
        if rate <= 0:
            raise ValueError("Rate must be greater than zero")

        now = datetime.now(timezone.utc)

        async def write_rate(session: AsyncIOMotorClientSession) -> None:
            await self.config.update_one(
                {"_id": pricing_db.EXCHANGE_RATE_CONFIG_ID},
                {"$set": {
                    "current_rate": rate,
                    "last_updated_by": user.email,
                    "last_updated_at": now,
                }},
                upsert=True,
                session=session,
            )
            await self.history.insert_one({
                "rate": rate,
                "updated_by": user.email,
                "updated_at": now,
            }, session=session)

        try:
            await run_in_transaction(write_rate)
        except PyMongoError as e:
            logger.error("Reference rate update to %s failed: %s", rate, e)
            raise

        logger.info("Reference rate set to %s by %s", rate, user.email)
        response = ReferenceRateResponse(
            current_rate=rate,
            last_updated_by=user.email,
            last_updated_at=now,
        )
        await publish_event(Topics.EXCHANGE_RATE, response.model_dump())
        return response

    async def get_history(self, limit: int = 20) -> list[HistoryEntryResponse]:
        """Reference rate changes, newest first."""
        cursor = self.history.find().sort("updated_at", DESCENDING).limit(limit)
        docs = await cursor.to_list(length=limit)
        return [
            HistoryEntryResponse(
                id=doc["_id"],
                rate=doc["rate"],
                updated_by=doc.get("updated_by", ""),
                updated_at=as_utc(doc.get("updated_at")),
            )
            for doc in map(stringify_id, docs)
        ]

    async def get_live_rate(self) -> LiveRateResponse:
        """
        Fetch the market rate and compare it with the reference.

        Raises:
            ExchangeRateUnavailableError: If the provider cannot be reached
        """
        current = await self.provider.get_jpy_brl_rate()
        reference = await self.get_reference_value()
        return LiveRateResponse(
            rate=current,
            fetched_at=datetime.now(timezone.utc),
            reference_rate=reference,
            comparison=compare_rates(current, reference),
        )
