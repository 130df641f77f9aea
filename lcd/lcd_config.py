# LCD Display Configuration
LCD_WIDTH = 16  # Characters per line
LCD_HEIGHT = 2  # Number of lines

# I2C Configuration
I2C_EXPANDER = "PCF8574"
I2C_ADDR = 0x27  # Standard I2C address for most 16x2 LCDs
I2C_BUS = 1  # RPi default I2C bus

# Views
AUTO_CYCLE_INTERVAL = 2.0  # seconds between automatic view changes
BAR_CHAR = "#"

# Fixed messages
BANNER = ("ADC Tone Meter", "Starting...")
READ_ERROR_MESSAGE = "ADC read error"
NOT_FOUND_MESSAGE = "ADC not found"
CALIBRATION_PROMPT = ("Calibrating...", "Ref mV or cancel")
