"""Inbound WebHook routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from src.shared.exceptions import error_response
from src.shared.logging import bind_request_context
from src.webhooks.api.dependencies import get_receiver_registry
from src.webhooks.application.services import ReceiverRegistry
from src.webhooks.domain.exceptions import ReceiverNotFoundError

# Non-GET/POST methods are routed too so the receiver can answer 405 itself
WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

router = APIRouter(
    tags=["webhooks"],
    include_in_schema=False,  # Hide webhook endpoints from public API docs
)


async def _receive(receiver_name: str, webhook_id: str, request: Request, registry: ReceiverRegistry) -> Response:
    bind_request_context(receiver=receiver_name, webhook_id=webhook_id)
    receiver = registry.get(receiver_name)
    if receiver is None:
        raise ReceiverNotFoundError(f"No WebHook receiver is registered with the name '{receiver_name}'.")

    result = await receiver.receive(webhook_id, request)
    if result.is_failure():
        return error_response(request, result.error)

    response = result.value
    return JSONResponse(status_code=response.status_code, content=response.content, headers=response.headers or None)


@router.api_route("/{receiver_name}", methods=WEBHOOK_METHODS)
async def receive_default(
    receiver_name: str,
    request: Request,
    registry: ReceiverRegistry = Depends(get_receiver_registry),
):
    """WebHook endpoint using the receiver's default secret."""
    return await _receive(receiver_name, "", request, registry)


@router.api_route("/{receiver_name}/{webhook_id}", methods=WEBHOOK_METHODS)
async def receive(
    receiver_name: str,
    webhook_id: str,
    request: Request,
    registry: ReceiverRegistry = Depends(get_receiver_registry),
):
    """
    WebHook endpoint for a specific configured instance.

    GET answers the subscription handshake, POST accepts signed notifications.
    """
    return await _receive(receiver_name, webhook_id, request, registry)
