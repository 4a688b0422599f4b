"""
Error handling for API responses.
"""
import logging

from django.http import JsonResponse

from orders.domain.errors import OrderDeskError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Error handler for API responses."""

    ERROR_CODES = {
        "VALIDATION_ERROR": 400,
        "UNAUTHENTICATED": 401,
        "NOT_FOUND": 404,
        "GATEWAY_ERROR": 502,
        "INTERNAL_ERROR": 500,
    }

    @classmethod
    def error_payload(cls, error: OrderDeskError) -> dict:
        """Envelope used by mutation results and HTTP error bodies."""
        return {
            "success": False,
            "code": error.code,
            "message": error.message,
        }

    @classmethod
    def handle_error(cls, error: Exception) -> JsonResponse:
        """Handle error and return JSON response."""
        if isinstance(error, OrderDeskError):
            status_code = cls.ERROR_CODES.get(error.code, 400)
            return JsonResponse(
                {
                    "error": {
                        "code": error.code,
                        "message": error.message,
                    }
                },
                status=status_code,
            )

        # Log unexpected errors
        logger.error(
            "unexpected_error",
            extra={
                "error_type": type(error).__name__,
                "error": str(error),
            },
            exc_info=True,
        )

        return JsonResponse(
            {
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                }
            },
            status=500,
        )
