from .calibration import (
    CalibrationError,
    check_sample,
    compute_voltage,
    calibration_scale_for,
)
from .mapping import map_range, map_frequency
from .smoothing import MovingAverage
