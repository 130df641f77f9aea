from . import BaseLCDComponent
import aiofiles
import logging

logger = logging.getLogger(__name__)


class VirtualLCDComponent(BaseLCDComponent):
    def __init__(self, lcd_config=None, path: str = "virtual_lcd.txt"):
        super().__init__(lcd_config)
        self.path = path
        self.lines = ("", "")

    async def write_lines(self, line0: str, line1: str) -> None:
        if (line0, line1) == self.lines:
            return
        self.lines = (line0, line1)
        logger.debug(f"LCD: [{line0}] [{line1}]")
        async with aiofiles.open(self.path, "w") as f:
            await f.write(f"{line0}\n")
            await f.write(line1)
