"""
Main FastAPI application for the Bookshelf API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.tokens import TokenIssuer, create_token_issuer
from ..config import settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store import Store, create_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    store: Store = app.state.store
    logger.info("Starting Bookshelf API...", store=type(store).__name__)

    engine = getattr(store, "engine", None)
    if engine is not None:
        from ..database.connection import check_database_connection

        ok, error = await check_database_connection(engine)
        if ok:
            logger.info("Database connection verified")
        else:
            logger.error("Database connection check failed", error=error)

    yield

    logger.info("Shutting down Bookshelf API...")
    await store.close()


def create_app(store: Store | None = None, token_issuer: TokenIssuer | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Store handle shared by all requests (built from settings if omitted)
        token_issuer: Token issuer shared by all requests (built from settings if omitted)
    """
    configure_logging(settings.log_level, debug=settings.debug)

    if store is None:
        store = create_store(settings)
    if token_issuer is None:
        token_issuer = create_token_issuer(settings)

    app = FastAPI(
        title="Bookshelf API",
        description="User accounts and saved-book lists over GraphQL",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.store = store
    app.state.token_issuer = token_issuer

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    logger.info("Validating GraphQL schema...")
    validate_schema()

    graphql_router = create_graphql_router(store, token_issuer, graphiql=settings.debug)
    app.include_router(graphql_router, prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app
