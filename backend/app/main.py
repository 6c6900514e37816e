"""Senyas Backend Application.

Relay between the Senyas chat frontend and the Gemini API.

Modules:
    - chat: /api/chat, routes text/voice/video messages to the generation client
    - uploads: /api/upload, stores voice/video files under the public directory
    - generation: external generation API client
    - config: environment / YAML settings

Run with ``uvicorn app.main:app`` or the ``senyas-backend`` console script.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.chat.router import router as chat_router
from app.config import AppConfig, get_config
from app.errors import register_exception_handlers
from app.generation import GenerationClient, build_generation_client
from app.uploads.router import router as uploads_router
from app.uploads.store import UploadStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# httpx/httpcore/urllib3 log every connection made by the Gemini SDK.
for _noisy in (
    "urllib3",
    "httpx",
    "httpcore",
    "google",
    "google_genai",
):
    logging.getLogger(_noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    client: Optional[GenerationClient] = None,
    store: Optional[UploadStore] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Settings; defaults to ``get_config()``.
        client: Generation client; built from *config* at startup if omitted.
        store: Upload store; created over ``config.storage.upload_dir`` at
            startup if omitted.
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configured_level = getattr(logging, config.logging.level.upper(), None)
        if isinstance(configured_level, int):
            logging.getLogger().setLevel(configured_level)
            logger.info("Root logger level set to %s", config.logging.level.upper())

        if app.state.generation_client is None:
            app.state.generation_client = build_generation_client(config)
        if app.state.upload_store is None:
            app.state.upload_store = UploadStore(
                config.storage.upload_dir, url_prefix=config.storage.url_prefix
            )

        logger.info(
            "Senyas backend ready on http://%s:%s (env=%s, cors origin=%s)",
            config.server.host,
            config.server.port,
            config.server.environment,
            config.allowed_origin,
        )
        yield
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="Senyas Backend API",
        description="Chat relay to the Gemini API with file uploads",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.generation_client = client
    app.state.upload_store = store

    origin = config.allowed_origin
    if not origin:
        logger.warning("Production mode without FRONTEND_URL; all cross-origin requests will be rejected")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin] if origin else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(chat_router)
    app.include_router(uploads_router)

    @app.get("/")
    async def root() -> dict:
        """Static status message."""
        return {"message": "Senyas Backend API is running"}

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint.

        Returns:
            dict: Status object indicating the server is running.
        """
        return {"status": "ok"}

    # Mounted last so API routes take precedence; serves /uploads/<name> too.
    app.mount(
        "/",
        StaticFiles(directory=config.storage.public_dir, check_dir=False),
        name="public",
    )
    return app


app = create_app()


def run() -> None:
    """Start the server with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "app.main:app",
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level,
    )


if __name__ == "__main__":
    run()
