import asyncio
import json
import logging

import serial

from app_interface import AppComponent

logger = logging.getLogger(__name__)

SERIAL_TOPICS = ["telemetry/line", "meter/message"]


class SerialLineComponent(AppComponent):
    def __init__(
        self,
        pub_queue: asyncio.Queue,
        sub_queue: asyncio.Queue,
        port: str,
        baudrate: int = 9600,
        timeout: float = 0.1,
        reconnect_initial: float = 0.5,
        reconnect_max: float = 8.0,
    ):
        """
        Line-oriented serial transport. Incoming lines are published as commands,
        telemetry and reports received on sub_queue are written back one per line.

        Args:
            pub_queue (asyncio.Queue): Queue for publishing command lines.
            sub_queue (asyncio.Queue): Queue receiving telemetry/report messages.
            port (str): Serial device path.
            baudrate (int, optional): Line speed. Defaults to 9600.
            timeout (float, optional): readline() timeout in seconds.
            reconnect_initial (float, optional): First delay before reopening the port.
            reconnect_max (float, optional): Upper bound of the reopen backoff.
        """
        self.pub_queue = pub_queue
        self.sub_queue = sub_queue
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.reconnect_initial = reconnect_initial
        self.reconnect_max = reconnect_max
        self.handle = None

    def open(self):
        return serial.Serial(port=self.port, baudrate=self.baudrate, timeout=self.timeout)

    async def read_lines(self) -> None:
        buffer = ""
        while True:
            raw = await asyncio.to_thread(self.handle.readline)
            if not raw:
                await asyncio.sleep(0)
                continue
            buffer += raw.decode("ascii", errors="ignore")
            if not buffer.endswith("\n"):
                continue  # readline() timed out mid-line
            line, buffer = buffer.strip(), ""
            if line:
                await self.pub_queue.put({"topic": "command/line", "payload": line})

    def encode(self, data) -> bytes | None:
        payload = data["payload"]
        try:
            text = payload if isinstance(payload, str) else json.dumps(payload)
        except (TypeError, ValueError) as e:
            logger.warning(f"dropping unserializable message on {data['topic']}: {e}")
            return None
        return f"{text}\n".encode("ascii", errors="replace")

    def discard_pending(self) -> int:
        """Drops messages queued while the port was closed"""
        dropped = 0
        while not self.sub_queue.empty():
            self.sub_queue.get_nowait()
            dropped += 1
        if dropped:
            logger.info(f"discarded {dropped} stale messages for {self.port}")
        return dropped

    async def write_lines(self) -> None:
        while True:
            data = await self.sub_queue.get()
            line = self.encode(data)
            if line is not None:
                await asyncio.to_thread(self.handle.write, line)

    async def run(self) -> None:
        logger.info(f"starting serial link on {self.port} @ {self.baudrate}")
        backoff = self.reconnect_initial
        while True:
            read_task = write_task = None
            try:
                self.handle = await asyncio.to_thread(self.open)
                logger.info(f"serial connected-> port={self.port}")
                self.discard_pending()
                backoff = self.reconnect_initial
                read_task = asyncio.create_task(self.read_lines())
                write_task = asyncio.create_task(self.write_lines())
                await asyncio.gather(read_task, write_task)
            except serial.SerialException as e:
                logger.warning(f"serial error ({self.port}): {e}")
            finally:
                for task in (read_task, write_task):
                    if task is not None:
                        task.cancel()
                if self.handle is not None:
                    self.handle.close()
                    self.handle = None

            logger.info(f"reopening {self.port} in {backoff:.1f}s")
            await asyncio.sleep(backoff)
            backoff = min(backoff * 2, self.reconnect_max)
