from .facebook_receiver import FacebookWebhookReceiver
from .receiver_registry import ReceiverRegistry

__all__ = ["FacebookWebhookReceiver", "ReceiverRegistry"]
