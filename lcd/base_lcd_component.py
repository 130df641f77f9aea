import logging
from abc import ABC, abstractmethod

from .display import split_message
from .lcd_config import LCD_WIDTH, LCD_HEIGHT, I2C_EXPANDER, I2C_ADDR, I2C_BUS

logger = logging.getLogger(__name__)


class BaseLCDComponent(ABC):
    def __init__(self, lcd_config=None):
        """
        Two-row character display.

        Args:
            lcd_config (dict, optional): CharLCD settings. Defaults to a 16x2 PCF8574
                backpack at 0x27 on bus 1.
        """
        self.lcd_config = lcd_config
        if lcd_config is None:
            self.lcd_config = {
                "i2c_expander": I2C_EXPANDER,
                "address": I2C_ADDR,
                "port": I2C_BUS,
                "cols": LCD_WIDTH,
                "rows": LCD_HEIGHT,
                "dotsize": 8,
            }
        self.cols = self.lcd_config["cols"]

    async def render(self, line0: str, line1: str) -> None:
        """Writes both rows, padded and cut to the display width"""
        line0 = line0.ljust(self.cols)[: self.cols]
        line1 = line1.ljust(self.cols)[: self.cols]
        try:
            await self.write_lines(line0, line1)
        except Exception as e:
            logger.error(f"Display update failed: {e}")

    async def show_message(self, text: str) -> None:
        await self.render(*split_message(text, self.cols))

    async def clear(self) -> None:
        await self.render("", "")

    @abstractmethod
    async def write_lines(self, line0: str, line1: str) -> None: ...
