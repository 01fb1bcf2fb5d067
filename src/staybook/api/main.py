"""FastAPI application for the Staybook reservation API.

Every request passes through:
- CorrelationIdMiddleware: tags logs with X-Correlation-ID
- IdentityMiddleware: restores the caller from the `token` cookie

Protected routes then apply the guards from staybook.api.guards, and
AccessError is turned into JSON by the registered exception handler.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from staybook.api.dependencies import get_auth_settings, get_identity_resolver
from staybook.api.exceptions import register_exception_handlers
from staybook.api.middleware import CorrelationIdMiddleware, IdentityMiddleware
from staybook.api.routes.bookings import router as bookings_router
from staybook.api.routes.listings import router as listings_router
from staybook.api.routes.reviews import router as reviews_router
from staybook.api.routes.session import router as session_router
from staybook.utils.logging import configure_logging

logger = logging.getLogger(__name__)
configure_logging(logging.INFO)

app = FastAPI(
    title="Staybook API",
    description="Reservation API with cookie sessions and ownership checks",
    version="0.1.0",
)

# Configure CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last added runs first: correlation ID is set before identity is resolved
app.add_middleware(
    IdentityMiddleware,
    resolver_factory=get_identity_resolver,
    settings_factory=get_auth_settings,
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

app.include_router(session_router, prefix="/api")
app.include_router(listings_router, prefix="/api")
app.include_router(reviews_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "staybook-api",
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server with uvicorn.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run("staybook.api.main:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
