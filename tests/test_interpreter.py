import asyncio

import pytest

from command import CommandInterpreter
from meter import MeterState
from type_defs import DisplayMode
from conftest import FakeClock, FakeLCD, FakeTone


class Harness:
    def __init__(self, state: MeterState | None = None):
        self.state = state or MeterState()
        self.lcd = FakeLCD()
        self.tone = FakeTone()
        self.reports: list[str] = []
        self.changes = 0
        self.clock = FakeClock(50.0)
        self.interpreter = CommandInterpreter(
            self.state,
            lcd=self.lcd,
            tone=self.tone,
            report=self.reports.append,
            on_change=self.count_change,
            clock=self.clock,
        )

    def count_change(self) -> None:
        self.changes += 1

    def run(self, *lines: str) -> None:
        async def feed():
            for line in lines:
                await self.interpreter.interpret(line)

        asyncio.run(feed())

    def calibrate_with(self, line: str) -> None:
        asyncio.run(self.interpreter.calibration_input(line))


@pytest.fixture
def harness() -> Harness:
    return Harness()


def test_set_range_accepts_valid_range(harness):
    harness.run("setRange 100,200")
    assert (harness.state.freq_min, harness.state.freq_max) == (100, 200)
    assert harness.reports == ["Range set: 100-200 Hz"]
    assert harness.changes == 1


@pytest.mark.parametrize(
    "line", ["setRange 0,100", "setRange -5,100", "setRange 200,100", "setRange 100,100"]
)
def test_set_range_rejects_invalid_range(harness, line):
    harness.run(line)
    assert (harness.state.freq_min, harness.state.freq_max) == (50, 1400)
    assert harness.reports[0].startswith("Error")
    assert harness.changes == 0


@pytest.mark.parametrize("line", ["setRange", "setRange 5", "setRange a,b", "setRange 1,2,3"])
def test_set_range_rejects_malformed_arguments(harness, line):
    harness.run(line)
    assert (harness.state.freq_min, harness.state.freq_max) == (50, 1400)
    assert harness.reports == ["Error: usage setRange <min>,<max>"]


def test_set_gain(harness):
    harness.run("setGain 2.5")
    assert harness.state.gain == 2.5
    assert harness.reports == ["Gain set: 2.5"]


@pytest.mark.parametrize("line", ["setGain -1", "setGain 0", "setGain nan", "setGain inf"])
def test_set_gain_rejects_non_positive(harness, line):
    harness.run("setGain 3", line)
    assert harness.state.gain == 3.0
    assert harness.reports[-1] == "Error: gain must be > 0"


def test_set_gain_rejects_garbage(harness):
    harness.run("setGain lots")
    assert harness.state.gain == 1.0
    assert harness.reports == ["Error: usage setGain <gain>"]


def test_toggle_lcd_clears_display_when_turned_off(harness):
    harness.run("toggleLCD")
    assert harness.state.lcd_enabled is False
    assert harness.lcd.last == ("", "")
    harness.run("toggleLCD")
    assert harness.state.lcd_enabled is True
    assert harness.reports == ["LCD off", "LCD on"]


def test_toggle_lowpass(harness):
    harness.run("toggleLowpass")
    assert harness.state.smoothing_enabled is True
    harness.run("toggleLowpass")
    assert harness.state.smoothing_enabled is False


def test_toggle_tone_starts_and_stops_immediately(harness):
    harness.state.frequency = 440
    harness.run("toggleTone")
    assert harness.state.tone_enabled is True
    assert harness.tone.playing
    assert harness.tone.events == [("start", 440)]

    harness.run("toggleTone")
    assert harness.state.tone_enabled is False
    assert not harness.tone.playing
    assert harness.tone.events[-1] == ("stop", None)


def test_auto_cycle_keeps_mode(harness):
    harness.state.display_mode = DisplayMode.FREQUENCY
    harness.run("autoCycle")
    assert harness.state.auto_cycle is True
    assert harness.state.display_mode == DisplayMode.FREQUENCY
    assert harness.state.last_rotation == 50.0


@pytest.mark.parametrize("index", range(6))
def test_display_selects_view(harness, index):
    harness.state.auto_cycle = True
    harness.run(f"display {index}")
    assert harness.state.display_mode == index
    assert harness.state.auto_cycle is False


@pytest.mark.parametrize("line", ["display 6", "display -1", "display x", "display"])
def test_display_rejects_bad_index(harness, line):
    harness.state.auto_cycle = True
    harness.run(line)
    assert harness.state.display_mode == DisplayMode.RAW_SAMPLE
    assert harness.state.auto_cycle is True
    assert harness.reports[0].startswith("Error")


def test_unknown_command(harness):
    harness.run("explode now")
    assert harness.reports == ["Unknown command: explode now"]
    assert harness.changes == 0


def test_blank_line_is_ignored(harness):
    harness.run("", "   ", "\r\n")
    assert harness.reports == []


def test_commands_are_whitespace_tolerant(harness):
    harness.run("  setGain 4  \r\n")
    assert harness.state.gain == 4.0


def test_calibrate_needs_a_sample(harness):
    harness.run("calibrate")
    assert not harness.state.calibrating
    assert harness.reports == ["Error: cannot calibrate, no sample has been read yet"]


def test_calibrate_then_reference(harness):
    harness.state.last_sample = 100
    harness.run("calibrate")
    assert harness.state.calibrating
    assert harness.state.calibration_started == 50.0

    harness.calibrate_with("1200")
    assert not harness.state.calibrating
    assert harness.state.calibration_scale == pytest.approx(1200 / (100 / 255 * 3300))
    assert harness.reports[-1].startswith("Calibrated: scale=")


def test_calibration_keeps_waiting_on_garbage(harness):
    harness.state.last_sample = 100
    harness.run("calibrate")
    harness.calibrate_with("setGain 2")
    assert harness.state.calibrating
    assert harness.state.gain == 1.0
    assert harness.reports[-1].startswith("Error: expected reference voltage")


def test_calibration_cancel(harness):
    harness.state.last_sample = 100
    harness.run("calibrate")
    harness.calibrate_with("cancel")
    assert not harness.state.calibrating
    assert harness.state.calibration_scale == 1.0
    assert harness.reports[-1] == "Calibration cancelled"


def test_calibration_rejects_non_positive_reference(harness):
    harness.state.last_sample = 100
    harness.run("calibrate")
    harness.calibrate_with("-300")
    assert not harness.state.calibrating
    assert harness.state.calibration_scale == 1.0
    assert harness.reports[-1].startswith("Error: calibration failed")
