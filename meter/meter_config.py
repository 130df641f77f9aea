# Hardware selection
USE_VIRTUAL_HARDWARE = True  # Set False on the Pi with the ADCplate, LCD and buzzer

# Control loop timing
CYCLE_INTERVAL = 0.2  # seconds waited after each cycle
BANNER_TIME = 3.0  # seconds the startup banner stays up
CALIBRATION_TIMEOUT = None  # seconds, None waits for the operator indefinitely

# Command/telemetry transports
WS_HOST = "0.0.0.0"
WS_PORT = 44444
SERIAL_PORT = None  # e.g. "/dev/ttyUSB0", None disables the serial link
SERIAL_BAUDRATE = 9600
SERIAL_QUEUE_SIZE = 50  # messages held for the serial link, newer ones are dropped when full
