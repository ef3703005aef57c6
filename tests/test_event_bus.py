import logging

from colorlines.events.bus import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_emit_without_subscribers_is_noop():
    bus = EventBus()
    bus.emit("nobody_listens", value=1)


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    calls = []

    def handler(sender, **kwargs):
        calls.append(kwargs)

    bus.subscribe("ping", handler)
    bus.emit("ping", n=1)
    bus.unsubscribe("ping", handler)
    bus.emit("ping", n=2)
    bus.unsubscribe("never_registered", handler)

    assert calls == [{"n": 1}]


def test_sender_is_the_bus():
    bus = EventBus()
    senders = []
    bus.subscribe("ping", lambda sender, **kwargs: senders.append(sender))
    bus.emit("ping")
    assert senders == [bus]


def test_failing_subscriber_does_not_block_others(caplog):
    bus = EventBus()
    calls = []

    def broken(sender, **kwargs):
        raise RuntimeError("renderer failed")

    bus.subscribe("ping", broken)
    bus.subscribe("ping", lambda sender, **kwargs: calls.append(kwargs))

    with caplog.at_level(logging.ERROR):
        bus.emit("ping", n=1)

    assert calls == [{"n": 1}]
    assert "renderer failed" in caplog.text
