"""
GraphQL view with bearer token passthrough and logging support.
"""
import json
import logging
from uuid import uuid4

from ariadne import graphql_sync
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from orders.api.middleware import ErrorHandler
from orders.api.schema import schema
from orders.domain.errors import AuthenticationError
from orders.infra.gateway import OrdersGateway
from orders.services import OrderService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class OrdersGraphQLView:
    """GraphQL view with structured logging."""

    def dispatch(self, request, *args, **kwargs):
        """Handle GraphQL request."""
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        token = self._extract_token(request)

        # JsonFormatter masks the token
        log_data = {
            "request_id": request_id,
            "token": token,
            "operation": "graphql",
        }
        logger.info("graphql_request", extra=log_data)

        try:
            response = self._process_graphql_request(request, token)
        except Exception as e:
            response = ErrorHandler.handle_error(e)
            logger.error(
                "graphql_error",
                extra={
                    "request_id": request_id,
                    "error": str(e),
                }
            )

        logger.info(
            "graphql_response",
            extra={
                "request_id": request_id,
                "status": response.status_code,
            }
        )

        return response

    def _extract_token(self, request) -> str | None:
        """Opaque bearer credential from the caller's session, if any."""
        header = request.headers.get("Authorization", "")
        if header.startswith(BEARER_PREFIX):
            return header[len(BEARER_PREFIX):].strip() or None
        return None

    def _process_graphql_request(self, request, token):
        """Process GraphQL request."""
        if request.method == "GET":
            return JsonResponse({"message": "GraphQL endpoint. Use POST for queries."})

        # Every query and mutation acts with the caller's credential
        if not token:
            return ErrorHandler.handle_error(AuthenticationError("Bearer token required"))

        try:
            data = json.loads(request.body)
        except json.JSONDecodeError:
            return JsonResponse(
                {"error": {"message": "Invalid JSON"}},
                status=400
            )

        service = OrderService(gateway=OrdersGateway.from_settings(token=token))
        success, result = graphql_sync(
            schema,
            data,
            context_value={"request": request, "service": service},
        )

        status_code = 200 if success else 400
        return JsonResponse(result, status=status_code)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def graphql_view(request):
    """GraphQL endpoint."""
    view = OrdersGraphQLView()
    return view.dispatch(request)
