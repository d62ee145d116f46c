"""Dependency injection for the webhooks module."""
from fastapi import Request

from src.webhooks.application.services import ReceiverRegistry


def get_receiver_registry(request: Request) -> ReceiverRegistry:
    """Receiver registry built by the app factory and kept on app.state."""
    return request.app.state.receivers
