from dataclasses import dataclass, field

from calculation import MovingAverage
from calculation.calculation_config import DEFAULT_FREQ_MIN, DEFAULT_FREQ_MAX
from type_defs import DisplayMode, MeterStatus, DISPLAY_NAMES


@dataclass
class MeterState:
    """
    Everything the control loop mutates between cycles.

    Owned by MeterComponent and handed to each stage by reference.
    """

    calibration_scale: float = 1.0
    gain: float = 1.0
    freq_min: int = DEFAULT_FREQ_MIN
    freq_max: int = DEFAULT_FREQ_MAX
    history: MovingAverage = field(default_factory=MovingAverage)

    display_mode: DisplayMode = DisplayMode.RAW_SAMPLE
    auto_cycle: bool = False
    last_rotation: float = 0.0

    lcd_enabled: bool = True
    tone_enabled: bool = False
    smoothing_enabled: bool = False

    last_sample: int | None = None
    frequency: int = DEFAULT_FREQ_MIN
    calibration_started: float | None = None  # set while waiting for a reference

    @property
    def calibrating(self) -> bool:
        return self.calibration_started is not None

    def getStatus(self) -> MeterStatus:
        return {
            "freq_min": self.freq_min,
            "freq_max": self.freq_max,
            "gain": self.gain,
            "calibration_scale": self.calibration_scale,
            "lcd_enabled": self.lcd_enabled,
            "tone_enabled": self.tone_enabled,
            "smoothing_enabled": self.smoothing_enabled,
            "auto_cycle": self.auto_cycle,
            "display": DISPLAY_NAMES[self.display_mode],
            "calibrating": self.calibrating,
        }
