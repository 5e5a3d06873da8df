"""tasklist - a small to-do list backend."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core.config import constants, settings
from src.core.db_client import Database, DatabaseError
from src.core.errors import ErrorResponse
from src.core.logging import SERVICE_VERSION, configure_logfire, instrument_fastapi
from src.core.schema import init_db
from src.interface.task_router import router as task_router


logger = logging.getLogger(__name__)


async def open_database() -> Database:
    """Open the store and make sure the schema and indexes exist.

    Raises:
        DatabaseError: If the store cannot be opened or the schema cannot be created
    """
    database = await Database.connect(settings.database_path)
    try:
        await init_db(database)
    except DatabaseError:
        await database.close()
        raise
    return database


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    # Configure logging first so startup logs are captured
    configure_logfire()

    try:
        app.state.db = await open_database()
    except DatabaseError as e:
        logger.error("startup_failed", extra={"service": "database", "error": str(e)})
        print(f"\n❌ Startup failed: {e}\n", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    logger.info("Database initialized", extra={"db_path": app.state.db.path})
    logger.info("tasklist is live", extra={"host": settings.host, "port": settings.port})
    yield
    # Shutdown
    await app.state.db.close()


app = FastAPI(
    title="tasklist",
    description="To-do list backend",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(task_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer unparseable requests with the API's {message} error shape."""
    logger.warning("request_validation_failed", extra={"path": request.url.path, "errors": str(exc.errors())})
    body = ErrorResponse(message="Invalid request payload")
    return JSONResponse(content=body.model_dump(), status_code=constants.HTTP_SERVER_ERROR)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=constants.HTTP_OK)


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run("src.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
