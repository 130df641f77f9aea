import asyncio
import logging
import sys
from collections import defaultdict
from typeguard import check_type, TypeCheckError

from adc import ADCComponent, VirtualADCComponent, ConverterNotFoundError
from app_interface import AppComponent
from lcd import LCDComponent, VirtualLCDComponent
from meter import MeterComponent
from meter.meter_config import (
    USE_VIRTUAL_HARDWARE,
    WS_HOST,
    WS_PORT,
    SERIAL_PORT,
    SERIAL_BAUDRATE,
    SERIAL_QUEUE_SIZE,
)
from tone import ToneComponent, VirtualToneComponent
from ws import WebSocketComponent
from type_defs import Message, MeterStatus

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        *deps: AppComponent,
        pub_queue: asyncio.Queue,
    ) -> None:
        self.deps = deps
        self.pub_queue = pub_queue
        self.subs: dict[str, list[asyncio.Queue]] = defaultdict(lambda: [])
        self.meter_status: MeterStatus | None = None

    def registerSub(self, topics: list[str] | str, sub_queue: asyncio.Queue) -> None:
        if isinstance(topics, str):
            topics = [topics]
        for topic in topics:
            if sub_queue not in self.subs[topic]:
                self.subs[topic].append(sub_queue)
                if self.meter_status is not None and topic == "meter/status":
                    sub_queue.put_nowait(
                        {"topic": "meter/status", "payload": self.meter_status}
                    )
            else:
                logger.warning(
                    f"This queue is already subscribed to {topic}: {sub_queue}"
                )
        logger.info(f"added subscriber to topics: {topics}")

    def deleteSub(self, sub_queue: asyncio.Queue):
        deletedTopics = []
        for topic in self.subs.keys():
            if sub_queue in self.subs[topic]:
                deletedTopics.append(topic)
                self.subs[topic].remove(sub_queue)
        logger.info(f"Removed subscriber from topics: {deletedTopics}")

    def fan_out(self, data) -> None:
        for queue in self.subs.get(data["topic"], []):
            try:
                queue.put_nowait(data)
            except asyncio.QueueFull:
                # Bounded subscriber that is not draining, drop instead of blocking
                logger.debug(f"subscriber queue full, dropped {data['topic']}")

    def dispatch(self, data) -> None:
        check_type(data, Message)

        match data["topic"]:
            case "subscribe":
                self.registerSub(
                    data["payload"]["topics"], data["payload"]["sub_queue"]
                )
            case "unsubscribe":
                self.deleteSub(data["payload"])
            case "meter/status":
                check_type(data["payload"], MeterStatus)
                self.meter_status = data["payload"]
                self.fan_out(data)
            case "command/line" | "telemetry/line" | "meter/message":
                check_type(data["payload"], str)
                self.fan_out(data)
            case _:
                self.fan_out(data)

    async def broker(self) -> None:
        while True:
            data = await self.pub_queue.get()
            try:
                self.dispatch(data)
            except TypeCheckError as e:
                logger.warning(f"Invalid message format: {data} -> {e}")
            except Exception as e:
                logger.error(f"There was an unexpected error in broker: {e}")

    async def run(self) -> None:
        await asyncio.gather(*[dep.run() for dep in self.deps], self.broker())


def build_app() -> App:
    # === Initialize App queues ===
    app_pub_queue = asyncio.Queue()

    # === Initialize hardware ===
    if USE_VIRTUAL_HARDWARE:
        adc = VirtualADCComponent()
        lcd = VirtualLCDComponent()
        tone = VirtualToneComponent()
    else:
        adc = ADCComponent()
        lcd = LCDComponent()
        tone = ToneComponent()

    # === Initialize meter loop ===
    meter_sub_queue = asyncio.Queue()
    meter = MeterComponent(
        pub_queue=app_pub_queue, sub_queue=meter_sub_queue, adc=adc, lcd=lcd, tone=tone
    )

    # === Initialize WS server ===
    ws_sub_queue = asyncio.Queue()
    ws = WebSocketComponent(
        pub_queue=app_pub_queue, sub_queue=ws_sub_queue, host=WS_HOST, port=WS_PORT
    )

    components: list[AppComponent] = [meter, ws]

    # === Initialize serial link (optional) ===
    serial_sub_queue = None
    if SERIAL_PORT is not None:
        from serial_link import SerialLineComponent, SERIAL_TOPICS

        serial_sub_queue = asyncio.Queue(maxsize=SERIAL_QUEUE_SIZE)
        components.append(
            SerialLineComponent(
                pub_queue=app_pub_queue,
                sub_queue=serial_sub_queue,
                port=SERIAL_PORT,
                baudrate=SERIAL_BAUDRATE,
            )
        )

    # === Initialize the app ===
    app = App(*components, pub_queue=app_pub_queue)

    # === Add queue subscriptions ===
    app.registerSub(["command/line"], meter_sub_queue)
    if serial_sub_queue is not None:
        app.registerSub(SERIAL_TOPICS, serial_sub_queue)

    return app


async def main() -> None:
    app = build_app()
    logger.info("starting app")
    await app.run()


if __name__ == "__main__":
    # === Logging settings ===
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)-35s %(message)s",
    )

    try:
        asyncio.run(main())
    except ConverterNotFoundError as e:
        logger.error(f"fatal: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("stopped")
