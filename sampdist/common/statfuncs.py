''' Summary statistics of raw (ungrouped) observations

    Each function takes a flat sequence of numbers (list or array) and reduces
    it to a single value. These are the "reduce functions" applied to every
    random sample when building a sampling distribution. The input sequence
    is never modified.
'''
from typing import Callable, Optional, Sequence
import math
import numpy as np


def _asarray(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def mean(values: Sequence[float]) -> float:
    ''' Arithmetic mean. Empty input gives nan. '''
    values = _asarray(values)
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.float64(values.sum()) / len(values)


def median(values: Sequence[float]) -> float:
    ''' Median of the values. Average of the two middle values for even length. '''
    values = np.sort(_asarray(values))  # sorted copy
    if len(values) == 0:
        return np.nan
    midpoint = len(values) // 2
    if len(values) % 2:
        return values[midpoint]
    return (values[midpoint-1] + values[midpoint]) / 2.0


def datarange(values: Sequence[float]) -> float:
    ''' Range (max - min) of the values. Zero for fewer than 2 values. '''
    if len(values) < 2:
        return 0.
    vmin, vmax = min(values[0], values[1]), max(values[0], values[1])
    for value in values[2:]:
        if value < vmin:
            vmin = value
        if value > vmax:
            vmax = value
    return vmax - vmin


def variance(values: Sequence[float]) -> float:
    ''' Population variance (divide by N), computed in a single pass '''
    values = _asarray(values)
    n = len(values)
    total = values.sum()
    sumsquares = (values*values).sum()
    with np.errstate(divide='ignore', invalid='ignore'):
        return (sumsquares - total*total / np.float64(n)) / n


def std(values: Sequence[float]) -> float:
    ''' Population standard deviation '''
    return np.sqrt(np.maximum(variance(values), 0.))


def variance_unbiased(values: Sequence[float]) -> float:
    ''' Bessel-corrected variance (divide by N-1). Gives nan when N <= 1. '''
    n = len(values)
    with np.errstate(divide='ignore', invalid='ignore'):
        return variance(values) * n / np.float64(n - 1)


def mean_abs_deviation(values: Sequence[float]) -> float:
    ''' Mean absolute deviation from the mean '''
    values = _asarray(values)
    return mean(np.abs(values - mean(values)))


STATISTICS = {
    'mean': mean,
    'median': median,
    'standardDeviation': std,
    'variance': variance,
    'varianceUnbiased': variance_unbiased,
    'meanAbsoluteDeviation': mean_abs_deviation,
    'range': datarange,
}


def statistic_names() -> list[str]:
    ''' Identifiers accepted by function_by_name '''
    return list(STATISTICS.keys())


def function_by_name(name: str) -> Optional[Callable[[Sequence[float]], float]]:
    ''' Get the reduce function with the given identifier

        Args:
            name: One of the identifiers in STATISTICS, such as
                "mean" or "varianceUnbiased"

        Returns:
            The function, or None if the name is not recognized.
    '''
    return STATISTICS.get(name)


def zprob(z: float) -> float:
    ''' Standard normal cumulative probability P(Z <= z)

        Uses a fixed 12-term damped sine series for the tail mass beyond |z|.
        Values of z beyond +/-7 are clamped to exactly 0 or 1.
    '''
    if z < -7:
        return 0.0
    if z > 7:
        return 1.0

    negative = z < 0.0
    z = abs(z)
    b = 0.0
    s = math.sqrt(2) / 3 * z
    hh = .5
    for _ in range(12):
        b += math.exp(-hh * hh / 9) * math.sin(hh * s) / hh
        hh += 1.0
    p = .5 - b / math.pi   # Upper tail, P(Z > |z|)
    if not negative:
        p = 1.0 - p
    # Truncation ripple of the series is ~1e-9 past |z| = 6, where it
    # exceeds the true tail mass. Rounding keeps the result monotonic.
    return min(max(round(p, 8), 0.0), 1.0)


def format_value(value: Optional[float]) -> str:
    ''' Format a statistic for display with two decimals. None gives an empty string. '''
    if value is None:
        return ''
    return f'{value:.2f}'
