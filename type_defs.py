from enum import IntEnum
from typing import Literal, TypedDict, Any

DisplayName = Literal[
    "raw", "voltage", "millivolts", "frequency", "voltage_bar", "frequency_bar"
]


class MeterStatus(TypedDict):
    freq_min: int
    freq_max: int
    gain: float
    calibration_scale: float
    lcd_enabled: bool
    tone_enabled: bool
    smoothing_enabled: bool
    auto_cycle: bool
    display: DisplayName
    calibrating: bool


class LineMessage(TypedDict):
    topic: str
    payload: str


class StatusMessage(TypedDict):
    topic: str
    payload: MeterStatus


class GenericMessage(TypedDict):
    topic: str
    payload: Any


Message = LineMessage | StatusMessage | GenericMessage


class DisplayMode(IntEnum):
    RAW_SAMPLE = 0
    VOLTAGE_VOLTS = 1
    VOLTAGE_MILLIVOLTS = 2
    FREQUENCY = 3
    VOLTAGE_BAR = 4
    FREQUENCY_BAR = 5


DISPLAY_NAMES: dict[DisplayMode, DisplayName] = {
    DisplayMode.RAW_SAMPLE: "raw",
    DisplayMode.VOLTAGE_VOLTS: "voltage",
    DisplayMode.VOLTAGE_MILLIVOLTS: "millivolts",
    DisplayMode.FREQUENCY: "frequency",
    DisplayMode.VOLTAGE_BAR: "voltage_bar",
    DisplayMode.FREQUENCY_BAR: "frequency_bar",
}
