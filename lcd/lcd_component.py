from . import BaseLCDComponent
import logging

logger = logging.getLogger(__name__)


class LCDComponent(BaseLCDComponent):
    def __init__(self, lcd_config=None):
        super().__init__(lcd_config)

        from RPLCD.i2c import CharLCD

        self.lcd = CharLCD(**self.lcd_config)
        self.lcd.clear()
        logger.info(f"LCD initialized-> addr={hex(self.lcd_config['address'])}")

    async def write_lines(self, line0: str, line1: str) -> None:
        self.lcd.cursor_pos = (0, 0)  # First line, first position
        self.lcd.write_string(line0)
        self.lcd.cursor_pos = (1, 0)  # Second line, first position
        self.lcd.write_string(line1)
