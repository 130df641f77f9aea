from __future__ import annotations

import asyncio

import pytest

from adc import BaseADCComponent, READ_FAILED
from lcd import BaseLCDComponent
from meter import MeterComponent, MeterState
from tone import BaseToneComponent


class FakeADC(BaseADCComponent):
    def __init__(self, samples: list[int], present: bool = True):
        super().__init__(addr=0x48, channel=0)
        self.samples = list(samples)
        self.present = present
        self.reads = 0

    def probe(self) -> bool:
        return self.present

    def read(self, channel: int) -> int:
        self.reads += 1
        if not self.samples:
            return READ_FAILED
        return self.samples.pop(0)


class FakeLCD(BaseLCDComponent):
    def __init__(self):
        super().__init__()
        self.frames: list[tuple[str, str]] = []

    async def write_lines(self, line0: str, line1: str) -> None:
        self.frames.append((line0.rstrip(), line1.rstrip()))

    @property
    def last(self) -> tuple[str, str] | None:
        return self.frames[-1] if self.frames else None


class FakeTone(BaseToneComponent):
    def __init__(self):
        super().__init__()
        self.events: list[tuple[str, int | None]] = []

    def start_output(self, freq: int) -> None:
        self.events.append(("start", freq))

    def change_output(self, freq: int) -> None:
        self.events.append(("change", freq))

    def stop_output(self) -> None:
        self.events.append(("stop", None))


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_meter(clock):
    def factory(samples: list[int], **kwargs) -> MeterComponent:
        adc = kwargs.pop("adc", None) or FakeADC(samples)
        return MeterComponent(
            pub_queue=asyncio.Queue(),
            sub_queue=asyncio.Queue(),
            adc=adc,
            lcd=FakeLCD(),
            tone=FakeTone(),
            state=kwargs.pop("state", None) or MeterState(),
            cycle_interval=0,
            banner_time=0,
            clock=clock,
            **kwargs,
        )

    return factory


def drain(queue: asyncio.Queue) -> list[dict]:
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


def payloads(queue: asyncio.Queue, topic: str) -> list:
    return [item["payload"] for item in drain(queue) if item["topic"] == topic]
