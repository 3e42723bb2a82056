"""
FastAPI application entry point.
"""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from markupsafe import escape
from starlette.exceptions import HTTPException as StarletteHTTPException

from notesapp.config import settings
from notesapp.api.routes import router
from notesapp.api.templating import render
from notesapp.core.exceptions import (
    AlreadyAuthenticatedError,
    NotAuthenticatedError,
    NoteNotFoundError,
    ValidationFailed,
)
from notesapp.db.database import init_db
from notesapp.services.auth_service import AuthService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down...")


def error_page(
    request: Request,
    status_code: int,
    message: str,
    exc: Optional[BaseException] = None,
):
    """Render the error view, falling back to inline HTML if that fails."""
    detail = None
    if exc is not None and settings.debug:
        detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    try:
        return render(
            request,
            "error.html",
            {
                "title": f"Error {status_code}",
                "status_code": status_code,
                "message": message,
                "detail": detail,
            },
            status_code=status_code,
        )
    except Exception:
        logger.exception("Failed to render error page")
        return HTMLResponse(
            f"<h1>Error {status_code}</h1>"
            f"<p>{escape(message)}</p>"
            f'<a href="/">Back to the home page</a>',
            status_code=status_code,
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Map application errors to redirects and error pages."""

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
        return RedirectResponse("/login", status_code=status.HTTP_302_FOUND)

    @app.exception_handler(AlreadyAuthenticatedError)
    async def already_authenticated_handler(request: Request, exc: AlreadyAuthenticatedError):
        return RedirectResponse("/dashboard", status_code=status.HTTP_302_FOUND)

    @app.exception_handler(NoteNotFoundError)
    async def note_not_found_handler(request: Request, exc: NoteNotFoundError):
        return error_page(request, status.HTTP_404_NOT_FOUND, exc.user_message)

    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(request: Request, exc: ValidationFailed):
        return error_page(request, status.HTTP_400_BAD_REQUEST, exc.user_message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = "Page not found." if exc.status_code == 404 else str(exc.detail)
        return error_page(request, exc.status_code, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error (status=500, method={request.method}, "
            f"path={request.url.path}): {exc}",
            exc_info=exc,
        )
        return error_page(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Something went wrong. Please try again.",
            exc,
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Personal notes with Markdown, trash and plain-text export.",
        lifespan=lifespan,
    )

    app.state.auth_service = AuthService(settings)

    register_exception_handlers(app)

    app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "notesapp.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
