"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.orm import sessionmaker
from starlette.responses import Response

from solar_quotes.api.middleware import RequestIDMiddleware, MetricsMiddleware
from solar_quotes.api.v1 import quotes
from solar_quotes.infrastructure.database.session import create_db_engine, create_session_factory
from solar_quotes.infrastructure.observability.logging import setup_logging
from solar_quotes.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app(session_factory: sessionmaker | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    The session factory is held on app.state and handed to each request;
    when omitted one is built from settings.database_url.
    """
    app = FastAPI(
        title="Solar Quotes",
        description="Solar installation financing quotes",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if session_factory is None:
        session_factory = create_session_factory(create_db_engine(settings.database_url))
    app.state.session_factory = session_factory

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(quotes.router, prefix="/v1", tags=["quotes"])

    return app


app = create_app()
