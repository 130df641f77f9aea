import asyncio

import pytest
from typeguard import TypeCheckError

from main import App
from meter import MeterState


@pytest.fixture
def app() -> App:
    return App(pub_queue=asyncio.Queue())


def test_fan_out_to_subscribers(app):
    first, second, other = asyncio.Queue(), asyncio.Queue(), asyncio.Queue()
    app.registerSub(["telemetry/line"], first)
    app.registerSub(["telemetry/line", "meter/message"], second)
    app.registerSub("command/line", other)

    app.dispatch({"topic": "telemetry/line", "payload": "ADC:1,Voltage:0.0129,Voltage_mV:12.94,Frequency:55"})

    assert first.qsize() == 1
    assert second.qsize() == 1
    assert other.empty()


def test_duplicate_subscription_is_ignored(app):
    queue = asyncio.Queue()
    app.registerSub(["meter/message"], queue)
    app.registerSub(["meter/message"], queue)
    app.dispatch({"topic": "meter/message", "payload": "LCD off"})
    assert queue.qsize() == 1


def test_subscribe_and_unsubscribe_messages(app):
    queue = asyncio.Queue()
    app.dispatch(
        {"topic": "subscribe", "payload": {"topics": ["meter/message"], "sub_queue": queue}}
    )
    app.dispatch({"topic": "meter/message", "payload": "Tone on"})
    app.dispatch({"topic": "unsubscribe", "payload": queue})
    app.dispatch({"topic": "meter/message", "payload": "Tone off"})
    assert queue.qsize() == 1
    assert queue.get_nowait()["payload"] == "Tone on"


def test_last_status_replayed_to_new_subscriber(app):
    status = MeterState(gain=2.0).getStatus()
    app.dispatch({"topic": "meter/status", "payload": status})

    late = asyncio.Queue()
    app.registerSub(["meter/status"], late)
    assert late.get_nowait() == {"topic": "meter/status", "payload": status}


def test_invalid_messages_are_rejected(app):
    with pytest.raises(TypeCheckError):
        app.dispatch({"payload": "no topic"})
    with pytest.raises(TypeCheckError):
        app.dispatch({"topic": "command/line", "payload": 42})
    with pytest.raises(TypeCheckError):
        app.dispatch({"topic": "meter/status", "payload": {"gain": 1.0}})


def test_broker_survives_bad_message(app):
    queue = asyncio.Queue()
    app.registerSub(["command/line"], queue)

    async def go():
        task = asyncio.create_task(app.broker())
        await app.pub_queue.put({"topic": "command/line", "payload": 7})
        await app.pub_queue.put({"topic": "command/line", "payload": "toggleTone"})
        item = await asyncio.wait_for(queue.get(), timeout=1)
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        return item

    assert asyncio.run(go())["payload"] == "toggleTone"


def test_full_subscriber_queue_drops_without_blocking_others(app):
    bounded, open_ended = asyncio.Queue(maxsize=2), asyncio.Queue()
    app.registerSub(["telemetry/line"], bounded)
    app.registerSub(["telemetry/line"], open_ended)

    for n in range(5):
        app.dispatch(
            {"topic": "telemetry/line", "payload": f"ADC:{n},Voltage:0.0000,Voltage_mV:0.00,Frequency:50"}
        )

    assert bounded.qsize() == 2
    assert open_ended.qsize() == 5
    assert bounded.get_nowait()["payload"].startswith("ADC:0,")
