from .base_lcd_component import BaseLCDComponent
from .lcd_component import LCDComponent
from .virtual_lcd_component import VirtualLCDComponent
