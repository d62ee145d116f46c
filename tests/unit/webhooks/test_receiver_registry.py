import pytest

from src.webhooks.application.services import FacebookWebhookReceiver, ReceiverRegistry


def test_lookup_is_case_insensitive(resolver, dispatcher):
    receiver = FacebookWebhookReceiver(resolver, dispatcher)
    registry = ReceiverRegistry(receiver)

    assert registry.get("facebook") is receiver
    assert registry.get("FaceBook") is receiver
    assert registry.get("github") is None
    assert registry.names() == ["facebook"]


def test_duplicate_names_are_rejected(resolver, dispatcher):
    registry = ReceiverRegistry(FacebookWebhookReceiver(resolver, dispatcher))
    with pytest.raises(ValueError):
        registry.register(FacebookWebhookReceiver(resolver, dispatcher))
