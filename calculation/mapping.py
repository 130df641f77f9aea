from .calculation_config import ADC_MIN, ADC_MAX


def map_range(x: int, in_min: int, in_max: int, out_min: int, out_max: int) -> int:
    """
    Linearly maps an integer from one range onto another.

    The division truncates toward zero and the result is not clamped, so inputs
    outside [in_min, in_max] map outside [out_min, out_max].
    """
    numerator = (x - in_min) * (out_max - out_min)
    span = in_max - in_min
    quotient = abs(numerator) // abs(span)
    if (numerator < 0) != (span < 0):
        quotient = -quotient
    return quotient + out_min


def map_frequency(state, sample: int) -> int:
    return map_range(sample, ADC_MIN, ADC_MAX, state.freq_min, state.freq_max)
