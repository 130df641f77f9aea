import logging
import math
import time
from collections.abc import Callable

from calculation import CalibrationError, calibration_scale_for, check_sample
from lcd import BaseLCDComponent
from lcd.display import NUM_DISPLAYS, select_display, toggle_auto_cycle
from tone import BaseToneComponent

logger = logging.getLogger(__name__)

CANCEL_WORDS = ("cancel", "abort")


def on_off(flag: bool) -> str:
    return "on" if flag else "off"


class CommandInterpreter:
    def __init__(
        self,
        state,
        lcd: BaseLCDComponent,
        tone: BaseToneComponent,
        report: Callable[[str], None],
        on_change: Callable[[], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Applies single-line text commands to the meter state.

        Rejected commands are reported through `report` and leave the state as it
        was. Nothing is raised back to the caller.

        Args:
            state (MeterState): State owned by the control loop.
            lcd (BaseLCDComponent): Display, cleared when the LCD is switched off.
            tone (BaseToneComponent): Tone output, started/stopped by toggleTone.
            report (Callable[[str], None]): Sink for operator-facing messages.
            on_change (Callable[[], None], optional): Called after every accepted change.
            clock (Callable[[], float], optional): Monotonic time source in seconds.
        """
        self.state = state
        self.lcd = lcd
        self.tone = tone
        self.report = report
        self.on_change = on_change
        self.clock = clock

    def changed(self, message: str) -> None:
        self.report(message)
        if self.on_change is not None:
            self.on_change()

    async def interpret(self, line: str) -> None:
        line = line.strip()
        if not line:
            return
        logger.info(f"command: {line}")

        command, _, args = line.partition(" ")
        args = args.strip()
        match command:
            case "setRange":
                self.set_range(args)
            case "setGain":
                self.set_gain(args)
            case "toggleLCD":
                await self.toggle_lcd()
            case "toggleLowpass":
                self.state.smoothing_enabled = not self.state.smoothing_enabled
                self.changed(f"Lowpass filter {on_off(self.state.smoothing_enabled)}")
            case "toggleTone":
                self.toggle_tone()
            case "calibrate":
                self.calibrate()
            case "autoCycle":
                toggle_auto_cycle(self.state, self.clock())
                self.changed(f"Auto-cycle {on_off(self.state.auto_cycle)}")
            case "display":
                self.display(args)
            case _:
                self.report(f"Unknown command: {line}")

    def set_range(self, args: str) -> None:
        try:
            low, high = (int(part) for part in args.split(","))
        except ValueError:
            self.report("Error: usage setRange <min>,<max>")
            return
        if low <= 0 or high <= low:
            self.report("Error: invalid range, need 0 < min < max")
            return
        self.state.freq_min, self.state.freq_max = low, high
        self.changed(f"Range set: {low}-{high} Hz")

    def set_gain(self, args: str) -> None:
        try:
            gain = float(args)
        except ValueError:
            self.report("Error: usage setGain <gain>")
            return
        if not math.isfinite(gain) or gain <= 0:
            self.report("Error: gain must be > 0")
            return
        self.state.gain = gain
        self.changed(f"Gain set: {gain}")

    async def toggle_lcd(self) -> None:
        self.state.lcd_enabled = not self.state.lcd_enabled
        if not self.state.lcd_enabled:
            await self.lcd.clear()
        self.changed(f"LCD {on_off(self.state.lcd_enabled)}")

    def toggle_tone(self) -> None:
        self.state.tone_enabled = not self.state.tone_enabled
        if self.state.tone_enabled:
            self.tone.play(self.state.frequency)
        else:
            self.tone.stop()
        self.changed(f"Tone {on_off(self.state.tone_enabled)}")

    def display(self, args: str) -> None:
        try:
            index = int(args)
        except ValueError:
            self.report("Error: usage display <index>")
            return
        if not select_display(self.state, index):
            self.report(f"Error: display index must be 0-{NUM_DISPLAYS - 1}")
            return
        self.changed(f"Display set: {index}")

    def calibrate(self) -> None:
        try:
            check_sample(self.state.last_sample)
        except CalibrationError as e:
            self.report(f"Error: cannot calibrate, {e}")
            return
        self.state.calibration_started = self.clock()
        self.changed("Calibration: enter reference voltage in mV (or cancel)")

    async def calibration_input(self, line: str) -> None:
        """
        Handles one line while the meter waits for a calibration reference.

        A number completes calibration, a cancel word abandons it, anything else is
        reported and the meter keeps waiting.
        """
        line = line.strip()
        if not line:
            return
        if line.lower() in CANCEL_WORDS:
            self.state.calibration_started = None
            self.changed("Calibration cancelled")
            return
        try:
            reference_mv = float(line)
        except ValueError:
            self.report(f"Error: expected reference voltage in mV, got '{line}'")
            return

        self.state.calibration_started = None
        try:
            scale = calibration_scale_for(reference_mv, self.state.last_sample)
        except CalibrationError as e:
            self.changed(f"Error: calibration failed, {e}")
            return
        self.state.calibration_scale = scale
        self.changed(f"Calibrated: scale={scale:.4f}")

    def abandon_calibration(self) -> None:
        self.state.calibration_started = None
        self.changed("Error: calibration timed out")
