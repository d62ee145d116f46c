import pytest

from src.webhooks.domain.value_objects import WebhookResponse
from src.webhooks.infrastructure import HandlerDispatcher, LoggingWebhookHandler, WebhookHandlerContext


class RecordingHandler:
    def __init__(self, name, log, receiver=None, order=50, response=None, error=None):
        self.name = name
        self.log = log
        self.receiver = receiver
        self.order = order
        self.response = response
        self.error = error

    async def execute(self, receiver, context: WebhookHandlerContext):
        self.log.append((self.name, receiver, context.id, context.data))
        if self.error is not None:
            raise self.error
        if self.response is not None:
            context.response = self.response


async def test_handlers_run_in_ascending_order():
    log = []
    dispatcher = HandlerDispatcher([
        RecordingHandler("late", log, order=90),
        RecordingHandler("early", log, order=10),
        RecordingHandler("middle", log),
    ])
    response = await dispatcher.dispatch("facebook", "page1", None, [], {"object": "page"})

    assert [entry[0] for entry in log] == ["early", "middle", "late"]
    assert log[0][1:] == ("facebook", "page1", {"object": "page"})
    assert response == WebhookResponse.ok({"ok": True})


async def test_equal_order_keeps_registration_order():
    log = []
    dispatcher = HandlerDispatcher()
    dispatcher.add_handler(RecordingHandler("first", log))
    dispatcher.add_handler(RecordingHandler("second", log))
    await dispatcher.dispatch("facebook", "", None, [], {})
    assert [entry[0] for entry in log] == ["first", "second"]


async def test_first_response_stops_the_chain():
    log = []
    custom = WebhookResponse(status_code=202, content={"queued": True})
    dispatcher = HandlerDispatcher([
        RecordingHandler("answers", log, order=1, response=custom),
        RecordingHandler("skipped", log, order=2),
    ])
    response = await dispatcher.dispatch("facebook", "", None, [], {})

    assert response is custom
    assert [entry[0] for entry in log] == ["answers"]


async def test_handlers_filter_on_receiver_name():
    log = []
    dispatcher = HandlerDispatcher([
        RecordingHandler("github-only", log, receiver="github"),
        RecordingHandler("facebook-only", log, receiver="Facebook"),
        RecordingHandler("any", log),
    ])
    await dispatcher.dispatch("facebook", "", None, [], {})
    assert [entry[0] for entry in log] == ["facebook-only", "any"]


async def test_handler_errors_propagate():
    log = []
    dispatcher = HandlerDispatcher([
        RecordingHandler("boom", log, order=1, error=RuntimeError("handler failed")),
        RecordingHandler("never", log, order=2),
    ])
    with pytest.raises(RuntimeError):
        await dispatcher.dispatch("facebook", "", None, [], {})
    assert [entry[0] for entry in log] == ["boom"]


async def test_logging_handler_never_answers():
    dispatcher = HandlerDispatcher([LoggingWebhookHandler()])
    response = await dispatcher.dispatch("facebook", "", None, ["changed"], {"object": "page", "entry": []})
    assert response.status_code == 200
    assert response.content == {"ok": True}
