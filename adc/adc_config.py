# Pi-Plates ADCplate board
ADC_ADDR = 0  # Board address set by the address jumpers
ADC_CHANNEL = 0  # Single-ended input S0
FULL_SCALE = 5.12  # volts mapped onto the top code

# Sentinel returned by read() when the converter did not answer
READ_FAILED = -1

# Virtual converter signal
VIRTUAL_SIGNAL_FREQ = 0.1  # Hz
VIRTUAL_NOISE_LEVEL = 2.0  # codes (std deviation)
