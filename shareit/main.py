"""ShareIt: FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shareit.api.v1.bookings import router as bookings_router
from shareit.api.v1.items import router as items_router
from shareit.api.v1.users import router as users_router
from shareit.config import settings
from shareit.exceptions import ErrorKind, ShareItError
from shareit.schemas.error import ErrorResponse

# Configure root logger so all shareit.* loggers output to stderr (captured by Docker).
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SELF_BOOKING_FORBIDDEN: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    yield
    # Shutdown: dispose engine connections
    from shareit.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Item-sharing marketplace: list items, book them, approve bookings.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


@app.exception_handler(ShareItError)
async def shareit_error_handler(request: Request, exc: ShareItError) -> JSONResponse:
    """Translate a business-rule rejection into its HTTP status."""
    status_code = STATUS_BY_KIND[exc.kind]
    logger.info(
        "%s %s rejected: %s/%s (%s)",
        request.method,
        request.url.path,
        exc.kind.value,
        exc.reason.value,
        exc.message,
    )
    body = ErrorResponse(error=exc.kind.value, reason=exc.reason.value, message=exc.message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# Routers
app.include_router(users_router)
app.include_router(items_router)
app.include_router(bookings_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
