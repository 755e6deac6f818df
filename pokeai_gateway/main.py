"""
Gateway Service - FastAPI application.

Serves the GraphQL API at /graphql (GraphiQL on GET) and a few plain
endpoints for health, version and call statistics. Every response is
CORS-open.
"""
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Response
from strawberry.fastapi import GraphQLRouter

from .config import GatewayConfig, Settings, get_settings
from .schema import GatewayContext, schema
from .stats import get_llm_stats

CORS_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings):
    """Configure logging with file and console handlers."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # Console handler (always)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler (if configured)
    if settings.log_path:
        try:
            log_path = Path(settings.log_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_path)
        except OSError as e:
            root_logger.error("Failed to set up file logging: %s", e)

    return logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Create the gateway application.

    Args:
        settings: Service settings, defaults to the cached environment settings
        http_client: Shared client for all upstream calls. When omitted one is
                     created on startup and closed on shutdown.
    """
    settings = settings or get_settings()
    config = GatewayConfig.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Gateway starting up (environment=%s)", config.environment or "unset")
        logger.info(
            "Credentials: openai=%s, deepseek=%s",
            "configured" if config.has_openai else "missing",
            "configured" if config.has_deepseek else "missing",
        )
        if not (config.has_openai or config.has_deepseek):
            logger.warning("No LLM credentials configured - AI queries will fail")

        owns_client = app.state.http_client is None
        if owns_client:
            app.state.http_client = httpx.AsyncClient(timeout=settings.upstream_timeout)

        yield

        logger.info("Gateway shutting down")
        if owns_client:
            await app.state.http_client.aclose()
            app.state.http_client = None

    app = FastAPI(
        title="PokeAI Gateway",
        description="GraphQL gateway over OpenAI, DeepSeek and PokeAPI",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.http_client = http_client

    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_PREFLIGHT_HEADERS)
        response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    async def get_context(request: Request) -> GatewayContext:
        return GatewayContext(
            config=request.app.state.config,
            http=request.app.state.http_client,
        )

    graphql_app = GraphQLRouter(schema, context_getter=get_context, graphql_ide="graphiql")
    app.include_router(graphql_app, prefix="/graphql")

    @app.get("/health")
    async def health():
        """Report whether each provider has a credential."""
        providers = {
            "openai": config.has_openai,
            "deepseek": config.has_deepseek,
        }
        return {
            "status": "ok" if any(providers.values()) else "degraded",
            "providers": providers,
        }

    @app.get("/version")
    async def version():
        """Return version information for this service."""
        return {
            "service": "pokeai-gateway",
            "version": settings.version,
            "environment": config.environment,
            "default_model": config.default_model,
        }

    @app.get("/stats")
    async def llm_stats():
        """Return provider call statistics."""
        return get_llm_stats().get_summary()

    return app


def run():
    """Console entry point: configure logging and serve with uvicorn."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    logger.info("Server will be available at: http://%s:%d/graphql", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
