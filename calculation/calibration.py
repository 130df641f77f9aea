import math

from .calculation_config import ADC_MAX, REFERENCE_VOLTAGE, REFERENCE_MILLIVOLTS


class CalibrationError(ValueError):
    pass


def compute_voltage(state, sample: float) -> float:
    """
    Converts a sample into volts using the calibration scale and gain held in state.

    Args:
        state (MeterState): Current meter configuration.
        sample (float): Converter reading in [0, 255].

    Returns:
        float: Calibrated voltage.
    """
    return (sample / ADC_MAX) * REFERENCE_VOLTAGE * state.calibration_scale * state.gain


def check_sample(sample: int | None) -> None:
    if sample is None:
        raise CalibrationError("no sample has been read yet")
    if sample <= 0:
        raise CalibrationError("last sample is 0, apply a reference voltage first")


def calibration_scale_for(reference_mv: float, sample: int | None) -> float:
    """
    Computes the calibration scale that makes `sample` read as `reference_mv`.

    Args:
        reference_mv (float): Voltage measured with a trusted instrument, in millivolts.
        sample (int | None): Last successful converter reading.

    Raises:
        CalibrationError: If there is no usable sample or the reference is not a
            positive finite number.
    """
    check_sample(sample)
    if not math.isfinite(reference_mv) or reference_mv <= 0:
        raise CalibrationError(f"invalid reference voltage: {reference_mv}")

    nominal_mv = (sample / ADC_MAX) * REFERENCE_MILLIVOLTS
    return reference_mv / nominal_mv
