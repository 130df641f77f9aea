import asyncio
import logging
import time

from app_interface import AppComponent
from adc import BaseADCComponent, ConverterNotFoundError, READ_FAILED
from calculation import compute_voltage, map_frequency
from command import CommandInterpreter
from lcd import BaseLCDComponent
from lcd.display import Reading, advance_auto_cycle, render_view
from lcd.lcd_config import (
    BANNER,
    CALIBRATION_PROMPT,
    NOT_FOUND_MESSAGE,
    READ_ERROR_MESSAGE,
)
from tone import BaseToneComponent
from .meter_config import CYCLE_INTERVAL, BANNER_TIME, CALIBRATION_TIMEOUT
from .meter_state import MeterState
from .telemetry import format_telemetry

logger = logging.getLogger(__name__)


class MeterComponent(AppComponent):
    def __init__(
        self,
        pub_queue: asyncio.Queue,
        sub_queue: asyncio.Queue,
        adc: BaseADCComponent,
        lcd: BaseLCDComponent,
        tone: BaseToneComponent,
        state: MeterState | None = None,
        cycle_interval: float = CYCLE_INTERVAL,
        banner_time: float = BANNER_TIME,
        calibration_timeout: float | None = CALIBRATION_TIMEOUT,
        clock=time.monotonic,
    ):
        """
        The sampling control loop: one command, one sample, one round of outputs per cycle.

        Args:
            pub_queue (asyncio.Queue): Queue for publishing telemetry, reports and status.
            sub_queue (asyncio.Queue): Queue receiving "command/line" messages.
            adc (BaseADCComponent): Converter sampled every cycle.
            lcd (BaseLCDComponent): Character display.
            tone (BaseToneComponent): Tone output.
            state (MeterState, optional): Initial state. Defaults to a fresh MeterState.
            cycle_interval (float, optional): Minimum pause between cycles in seconds.
            banner_time (float, optional): Seconds the startup banner is shown.
            calibration_timeout (float | None, optional): Seconds before an unanswered
                calibration prompt is abandoned. None waits forever.
            clock (optional): Monotonic time source in seconds.
        """
        self.pub_queue = pub_queue
        self.sub_queue = sub_queue
        self.adc = adc
        self.lcd = lcd
        self.tone = tone
        self.state = state if state is not None else MeterState()
        self.cycle_interval = cycle_interval
        self.banner_time = banner_time
        self.calibration_timeout = calibration_timeout
        self.clock = clock

        self.interpreter = CommandInterpreter(
            self.state,
            lcd=self.lcd,
            tone=self.tone,
            report=self.report,
            on_change=self.publish_status,
            clock=self.clock,
        )

    def report(self, text: str) -> None:
        logger.info(f"report: {text}")
        self.pub_queue.put_nowait({"topic": "meter/message", "payload": text})

    def publish_status(self) -> None:
        self.pub_queue.put_nowait(
            {"topic": "meter/status", "payload": self.state.getStatus()}
        )

    def send_telemetry(self, line: str) -> None:
        logger.debug(f"telemetry: {line}")
        self.pub_queue.put_nowait({"topic": "telemetry/line", "payload": line})

    def next_line(self) -> str | None:
        """Takes at most one pending command line, leaving the rest for later cycles"""
        try:
            data = self.sub_queue.get_nowait()
        except asyncio.QueueEmpty:
            return None
        if data["topic"] != "command/line":
            logger.warning(f"unknown topic received: {data['topic']}")
            return None
        return data["payload"]

    async def startup(self) -> None:
        await self.lcd.render(*BANNER)
        await asyncio.sleep(self.banner_time)

        if not self.adc.probe():
            await self.lcd.show_message(NOT_FOUND_MESSAGE)
            self.report(f"Error: {NOT_FOUND_MESSAGE}")
            raise ConverterNotFoundError(
                f"no converter at addr={self.adc.addr}, halting"
            )
        await self.lcd.clear()

    async def calibration_step(self, line: str | None) -> None:
        if line is not None:
            await self.interpreter.calibration_input(line)
        elif (
            self.calibration_timeout is not None
            and self.clock() - self.state.calibration_started
            >= self.calibration_timeout
        ):
            self.interpreter.abandon_calibration()

        if self.state.calibrating and self.state.lcd_enabled:
            await self.lcd.render(*CALIBRATION_PROMPT)

    async def cycle(self) -> Reading | None:
        """
        Runs one pass of the pipeline.

        Returns:
            Reading | None: The measurement, or None when the cycle was skipped by a
                read failure or a pending calibration.
        """
        line = self.next_line()

        # Sampling is suspended until the calibration prompt is answered
        if self.state.calibrating:
            await self.calibration_step(line)
            return None
        if line is not None:
            await self.interpreter.interpret(line)
            if self.state.calibrating:
                await self.calibration_step(None)
                return None

        sample = self.adc.read_sample()
        if sample == READ_FAILED:
            self.report("Error: failed to read ADC")
            if self.state.lcd_enabled:
                await self.lcd.show_message(READ_ERROR_MESSAGE)
            return None

        if self.state.smoothing_enabled:
            sample = int(self.state.history.smooth(sample))
        self.state.last_sample = sample

        volts = compute_voltage(self.state, sample)
        frequency = map_frequency(self.state, sample)
        self.state.frequency = frequency
        reading = Reading(sample=sample, volts=volts, frequency=frequency)

        if self.state.tone_enabled:
            self.tone.play(frequency)

        if advance_auto_cycle(self.state, self.clock()):
            self.publish_status()
        if self.state.lcd_enabled:
            await self.lcd.render(*render_view(self.state, reading))

        self.send_telemetry(format_telemetry(sample, volts, frequency))
        return reading

    async def wait_next_cycle(self) -> None:
        # Not compensated for the time spent in cycle()
        await asyncio.sleep(self.cycle_interval)

    async def run(self) -> None:
        logger.info("starting meter")
        await self.startup()
        self.publish_status()
        try:
            while True:
                await self.cycle()
                await self.wait_next_cycle()
        finally:
            self.tone.cleanup()
