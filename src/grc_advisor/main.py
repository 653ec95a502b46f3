"""GRC Maturity Advisor service entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from grc_advisor import __version__
from grc_advisor.adapters.ollama_generator import OllamaReportGenerator
from grc_advisor.api.router import router
from grc_advisor.observability import configure_logging, get_logger
from grc_advisor.settings import Settings

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Optional settings; read from the environment when omitted.

    Returns:
        Configured FastAPI application with the API mounted under /api/v1.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Configure logging and own the Ollama client for the app lifetime.

        Args:
            app: The FastAPI application instance.

        Yields:
            None
        """
        configure_logging(settings)
        app.state.text_generator = OllamaReportGenerator(settings)
        logger.info(
            "Service started",
            service=settings.service_name,
            ollama_base_url=settings.ollama_base_url,
            ollama_model=settings.ollama_model,
        )
        yield
        await app.state.text_generator.aclose()
        logger.info("Service stopped", service=settings.service_name)

    app = FastAPI(title=settings.service_name, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.include_router(router, prefix="/api/v1")
    return app


app: FastAPI = create_app()
