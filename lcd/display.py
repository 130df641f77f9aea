import logging
from dataclasses import dataclass

from calculation import map_range
from calculation.calculation_config import REFERENCE_MILLIVOLTS
from type_defs import DisplayMode
from .lcd_config import LCD_WIDTH, AUTO_CYCLE_INTERVAL, BAR_CHAR

logger = logging.getLogger(__name__)

NUM_DISPLAYS = len(DisplayMode)


@dataclass
class Reading:
    sample: int
    volts: float
    frequency: int

    @property
    def millivolts(self) -> float:
        return self.volts * 1000


def select_display(state, index: int) -> bool:
    """
    Manually selects a view. Turns auto-cycle off.

    Returns:
        bool: False if `index` is not a valid view, in which case state is unchanged.
    """
    if not 0 <= index < NUM_DISPLAYS:
        return False
    state.display_mode = DisplayMode(index)
    state.auto_cycle = False
    logger.info(f"display set to {state.display_mode.name}")
    return True


def toggle_auto_cycle(state, now: float) -> None:
    state.auto_cycle = not state.auto_cycle
    if state.auto_cycle:
        state.last_rotation = now  # next rotation is a full interval away
    logger.info(f"auto-cycle {'on' if state.auto_cycle else 'off'}")


def advance_auto_cycle(
    state, now: float, interval: float = AUTO_CYCLE_INTERVAL
) -> bool:
    if not state.auto_cycle or now - state.last_rotation < interval:
        return False
    state.display_mode = DisplayMode((state.display_mode + 1) % NUM_DISPLAYS)
    state.last_rotation = now
    logger.debug(f"auto-cycle -> {state.display_mode.name}")
    return True


def bar(cells: int) -> str:
    return BAR_CHAR * max(cells, 0)


def render_view(state, reading: Reading) -> tuple[str, str]:
    """
    Builds the two display rows for the current view.

    Bars are not clamped: an over-range reading yields more than LCD_WIDTH cells
    and is cut by the display.
    """
    match state.display_mode:
        case DisplayMode.RAW_SAMPLE:
            return "ADC Value:", f"{reading.sample}"
        case DisplayMode.VOLTAGE_VOLTS:
            return "Voltage:", f"{reading.volts:.4f} V"
        case DisplayMode.VOLTAGE_MILLIVOLTS:
            return "Voltage:", f"{reading.millivolts:.2f} mV"
        case DisplayMode.FREQUENCY:
            return "Frequency:", f"{reading.frequency} Hz"
        case DisplayMode.VOLTAGE_BAR:
            cells = map_range(
                int(reading.millivolts), 0, REFERENCE_MILLIVOLTS, 0, LCD_WIDTH
            )
            return f"V: {reading.volts:.2f}V", bar(cells)
        case DisplayMode.FREQUENCY_BAR:
            cells = map_range(
                reading.frequency, state.freq_min, state.freq_max, 0, LCD_WIDTH
            )
            return f"F: {reading.frequency}Hz", bar(cells)


def split_message(text: str, width: int = LCD_WIDTH) -> tuple[str, str]:
    return text[:width], text[width : width * 2]
