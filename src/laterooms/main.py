import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from laterooms.api.v1 import admin, auth, regions, rooms, secret_hotels, ws
from laterooms.backend import BackendClient
from laterooms.core.config import settings
from laterooms.core.database import async_session_maker, engine
from laterooms.core.logging import setup_logging
from laterooms.middleware.metrics import PrometheusMiddleware, metrics_endpoint
from laterooms.services.countdown_ticker import CountdownTicker

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the backend client and countdown ticker; tear them down on exit."""
    logger.info("Starting application...")
    app.state.backend = BackendClient(async_session_maker)
    app.state.ticker = CountdownTicker()

    yield

    logger.info("Stopping countdown ticker")
    await app.state.ticker.shutdown()
    await engine.dispose()


app = FastAPI(
    title="Late Rooms",
    version="1.0.0",
    description="Last-minute hotel room auctions and secret hotel deals",
    lifespan=lifespan,
)

# Prometheus Metrics Middleware (must be first to capture all requests)
app.add_middleware(PrometheusMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(rooms.router, prefix="/api/v1/rooms", tags=["rooms"])
app.include_router(secret_hotels.router, prefix="/api/v1/secret-hotels", tags=["secret-hotels"])
app.include_router(regions.router, prefix="/api/v1/regions", tags=["regions"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["admin"])

# WebSocket router (no prefix, endpoint is /ws/rooms/{listing_id})
app.include_router(ws.router, tags=["websocket"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.add_route("/metrics", metrics_endpoint)
