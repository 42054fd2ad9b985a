"""
Exception handlers mapping breach-check errors onto HTTP responses.

Request routing is left to the hosting application; it registers these
handlers so that typed lookup errors reach clients as ``{"error": ...}``
bodies with the mapped status code.
"""
from typing import Any, Callable, Dict, Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import logging

from ..core.exceptions import BreachCheckError, create_error_response, get_http_status_code

logger = logging.getLogger(__name__)

ResponseFormatter = Callable[[BreachCheckError], Dict[str, Any]]


class ExceptionHandlerRegistry:
    """Registers breach-check exception handlers on a FastAPI app."""

    def __init__(
        self,
        response_formatter: Optional[ResponseFormatter] = None,
        is_production: bool = True
    ):
        """
        Initialize exception handler registry.

        Args:
            response_formatter: Function turning an exception into a body
            is_production: Hide unexpected error messages from clients
        """
        self.response_formatter = response_formatter or create_error_response
        self.is_production = is_production

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(BreachCheckError)
        async def breach_check_error_handler(request: Request, exc: BreachCheckError):
            """Handle typed lookup errors."""
            status_code = get_http_status_code(exc)
            if status_code >= 500:
                logger.error(f"{request.method} {request.url.path} failed: {exc.error_code}: {exc.message}")
            return JSONResponse(
                status_code=status_code,
                content=self.response_formatter(exc)
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle unexpected exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)

            if self.is_production:
                message = "An unexpected error occurred"
            else:
                message = str(exc)

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": message}
            )


def register_exception_handlers(
    app: FastAPI,
    response_formatter: Optional[ResponseFormatter] = None,
    is_production: bool = True
) -> None:
    """
    Register breach-check exception handlers on a FastAPI application.

    Args:
        app: FastAPI application instance
        response_formatter: Custom response formatter function
        is_production: Whether running in production mode
    """
    registry = ExceptionHandlerRegistry(response_formatter, is_production)
    registry.register_handlers(app)
