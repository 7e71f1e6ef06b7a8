import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend_fastapi.api.errors import register_exception_handlers
from backend_fastapi.api.routes.tasks import router as tasks_router
from core.domain.ports.task_repository import TaskRepository
from infrastructure.container import build_task_repository

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

_APP_LOGGERS = ("core", "infrastructure", "backend_fastapi")


def configure_logging(level: str | None = None) -> None:
    """Nivel tomado de LOG_LEVEL; uvicorn solo configura sus propios loggers."""
    level_name = (level or os.getenv("LOG_LEVEL", "info")).upper()
    logging.basicConfig(
        level=level_name,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    for name in _APP_LOGGERS:
        logging.getLogger(name).setLevel(level_name)


configure_logging()


def _cors_origins() -> list[str]:
    cors_origins = os.getenv("CORS_ORIGINS", "*")
    if cors_origins == "*":
        return ["*"]
    return [origin.strip() for origin in cors_origins.split(",")]


def create_app(repository: TaskRepository | None = None) -> FastAPI:
    """
    Construye la aplicación.

    El repositorio se abre al arrancar (el inyectado o el que indique ORM)
    y se cierra al apagar.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.task_repository = (
            repository if repository is not None else build_task_repository()
        )
        logger.info(f"✅ Repositorio {type(app.state.task_repository).__name__} abierto")
        try:
            yield
        finally:
            app.state.task_repository.close()
            logger.info("Repositorio cerrado")

    app = FastAPI(title="Task Tracker API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() == "true",
        allow_methods=os.getenv("CORS_ALLOW_METHODS", "*").split(","),
        allow_headers=os.getenv("CORS_ALLOW_HEADERS", "*").split(","),
    )

    register_exception_handlers(app)
    app.include_router(tasks_router)
    return app


app = create_app()
