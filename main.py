"""
FastAPI Application Entry Point

Integrates:
  - LINE webhook receiver
  - Admin endpoints for paid users
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --host 0.0.0.0 --port 3000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from config import LOG_LEVELS, Config, get_config
from infra.bootstrap import RelayServices
from relay.admin import router as admin_router
from relay.messages import LIVENESS_TEXT
from transport.line.webhook import router as line_router

# Setup logging (a bad LOG_LEVEL is reported by Config.validate() at startup)
_log_level = get_config().log_level
logging.basicConfig(
    level=_log_level if _log_level in LOG_LEVELS else "INFO",
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(services: Optional[RelayServices] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        services: Pre-built services (tests). When omitted they are built at
            startup from the environment, which fails fast on bad config.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        if getattr(app.state, "services", None) is None:
            config = Config.from_env().validate()
            app.state.services = RelayServices.from_config(config)

        config = app.state.services.config
        logger.info("=" * 60)
        logger.info("LINE fortune relay starting up...")
        logger.info(f"Environment: {config.environment}")
        logger.info(f"LLM Backend: {config.llm_backend} ({config.openai_model})")
        if not config.admin_token:
            logger.warning("ADMIN_TOKEN not set: admin endpoints are unauthenticated")
        logger.info("=" * 60)

        yield

        # Shutdown
        logger.info("LINE fortune relay shutting down...")

    app = FastAPI(
        title="LINE Fortune Relay",
        description="Relays paid users' LINE messages to a fortune-telling model",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.services = services

    # Middleware for logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.error(f"Request error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal server error"},
            )

    # Include routers
    app.include_router(line_router)
    app.include_router(admin_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness text for the hosting platform."""
        return LIVENESS_TEXT

    @app.get("/health/live")
    async def health_live():
        """Live health check (Kubernetes liveness probe)."""
        return {"status": "alive"}

    @app.get("/health/ready")
    async def health_ready(request: Request):
        """Readiness health check (Kubernetes readiness probe)."""
        try:
            services = request.app.state.services
            if services is None:
                raise RuntimeError("services not initialised")
            services.config.validate()
            return {"status": "ready"}
        except Exception as e:
            return {"status": "not_ready", "reason": str(e)}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=config.port,
    )
