from fastapi import Depends, FastAPI, Request
from contextlib import asynccontextmanager
from uuid import uuid4

import httpx
import uvicorn
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import get_logger, request_id_var, setup_logging
from app.core.db.base import init_models
from app.core.db_services import FlashcardStore
from app.apis.deps import get_store
from app.apis.errors import register_exception_handlers
from app.apis.users.main import router as users_router
from app.apis.flashcards.main import router as flashcards_router
from app.modules.flashcards.client import OpenRouterClient


setup_logging(settings.app.log_level)
logger = get_logger("flashcards")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Environment check - DB URL exists: {bool(settings.database.url)}, "
        f"API key exists: {bool(settings.generation.api_key)}"
    )
    if settings.database.create_tables:
        await init_models()
        logger.info("Database tables ensured")

    async with httpx.AsyncClient(timeout=settings.generation.timeout_seconds) as http:
        app.state.generation_client = OpenRouterClient.from_settings(http_client=http)
        yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = uuid4().hex[:12]
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    app.include_router(users_router)
    app.include_router(flashcards_router)

    @app.get("/")
    async def root(store: FlashcardStore = Depends(get_store)):
        connected = await store.ping()
        return {
            "status": "running",
            "database": "connected" if connected else "unavailable",
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        logger.error(f"An error occurred when starting the server: {e}.")
