"""
Barudan Sales Portal Backend - FastAPI Application

Catalog, Barudex assistant, message board, exchange rate tool and orders for
the Barudan do Brasil sales team.
"""
import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.config import get_settings
from app.core.exceptions import PortalError
from app.core.logging_config import setup_logging
from app.database.connections import get_mongo_client, close_connections
from app.database.registry import sync_registry, create_indexes
from app.routers import assistant, auth, board, catalog, exchange_rate, health, orders, ws

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Sync database registry and create indexes
    - Start the live event relay

    Shutdown:
    - Stop the relay, close HTTP and database connections
    """
    logger.info("Starting up Barudan Sales Portal backend...")

    try:
        client = await get_mongo_client()
        await sync_registry(client)
        await create_indexes(client)
        logger.info("Database registry synced and indexes created")
    except PyMongoError as e:
        logger.warning("Database initialization warning: %s", e)

    relay_task = asyncio.create_task(ws.relay_events())

    yield

    logger.info("Shutting down Barudan Sales Portal backend...")
    relay_task.cancel()
    with suppress(asyncio.CancelledError):
        await relay_task
    await exchange_rate.close_rate_provider()
    await close_connections()
    logger.info("Connections closed")


setup_logging()

# Create FastAPI application
app = FastAPI(
    title="Barudan Sales Portal API",
    description="""
## Barudan Sales Portal API

Internal portal for the Barudan do Brasil sales team.

### Features
- **Catalog**: Embroidery machine models priced from the reference JPY/BRL rate
- **Assistant**: Barudex, a Gemini-backed chat assistant
- **Board**: Team message board with live updates
- **Exchange rate**: Reference rate, its history and the live market rate
- **Orders**: Sequential order numbers, saved orders and PDF export

### Authentication
All protected endpoints require a JWT token passed as a query parameter:
```
GET /orders?token=your_jwt_token
```

Obtain a token via `POST /auth/sign-in` or `POST /auth/login`.

### WebSocket
Connect to `/ws/live?token=xxx` and subscribe to `board`, `exchange_rate`
or `orders` for live updates.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    """Render service failures as ``{"detail", "error"}``."""
    logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(catalog.router)
app.include_router(assistant.router)
app.include_router(board.router)
app.include_router(exchange_rate.router)
app.include_router(orders.router)
app.include_router(ws.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Barudan Sales Portal API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
