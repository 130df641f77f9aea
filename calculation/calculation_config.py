# Converter resolution (8-bit)
ADC_MIN = 0
ADC_MAX = 255

# Nominal reference of the converter
REFERENCE_VOLTAGE = 3.3  # volts
REFERENCE_MILLIVOLTS = 3300

# Moving average
HISTORY_SIZE = 10  # samples

# Default tone range
DEFAULT_FREQ_MIN = 50  # Hz
DEFAULT_FREQ_MAX = 1400  # Hz
