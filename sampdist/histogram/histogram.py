''' Empirical distribution stored as a frequency table (histogram)

The data set is two parallel arrays: bin values (equally spaced bin centers)
and frequencies, so values[i] appears in the data set frequencies[i] times.
The sum and sum of squares of the data are cached, so the mean and standard
deviation can be computed without scanning the bins. When a distribution is
built from raw data points, those sums come from the raw points and are as
accurate as the data itself, independent of bin width.
'''
from typing import Optional, Sequence, Union
import logging
import math
import numpy as np

from ..common import statfuncs
from .results import StatisticsResult


class ShapeMismatchError(ValueError):
    ''' Two histograms do not share the same bins '''


class BinCountMismatchError(ShapeMismatchError):
    ''' Two histograms have a different number of bins '''


class BinValueMismatchError(ShapeMismatchError):
    ''' Two histograms have the same number of bins but different bin values '''


def _round_half_up(x):
    ''' Round to nearest integer with halves rounding toward +infinity '''
    return np.floor(np.asarray(x, dtype=float) + 0.5)


def _finite_points(datapoints):
    ''' Flatten data points and drop any that are nan or infinite '''
    datapoints = np.asarray(datapoints, dtype=float).ravel()
    finite = np.isfinite(datapoints)
    if not finite.all():
        logging.warning('Ignoring %s non-finite data points', np.count_nonzero(~finite))
        datapoints = datapoints[finite]
    return datapoints


def bin_index(datapoint: Union[float, Sequence[float]], binvalues: Sequence[float]):
    ''' Find the bin index for an arbitrary data point.

        Points beyond either end of the histogram are clamped to the first
        or last bin.

        Args:
            datapoint: A single data point, or array of points
            binvalues: The bin center values

        Returns:
            Index of the bin the point belongs to (int array if
            datapoint is an array)
    '''
    step = binvalues[1] - binvalues[0]
    index = _round_half_up((np.asarray(datapoint, dtype=float) - binvalues[0]) / step)
    index = np.clip(index, 0, len(binvalues)-1).astype(int)
    if index.ndim == 0:
        return int(index)
    return index


class EmpiricalDistribution:
    ''' Frequency-table representation of a data set

        Args:
            values: The bin center values. At least two, equally spaced,
                strictly increasing.
            frequencies: Number of observations (or weight) at each bin value
            sum: Precomputed sum of all observations
            sumsquares: Precomputed sum of squares of all observations

        If sum or sumsquares is not given, both are computed from the bins.
    '''
    def __init__(self, values: Sequence[float], frequencies: Sequence[float],
                 sum: Optional[float] = None, sumsquares: Optional[float] = None):
        self.values = np.asarray(values, dtype=float)
        self.frequencies = np.array(frequencies, dtype=float)
        if len(self.values) < 2:
            raise ValueError('Distribution must have at least 2 bins')
        if len(self.frequencies) != len(self.values):
            raise ValueError(f'Got {len(self.frequencies)} frequencies for {len(self.values)} bins')
        steps = np.diff(self.values)
        if not (steps > 0).all():
            raise ValueError('Bin values must be strictly increasing')
        if not np.allclose(steps, steps[0]):
            raise ValueError('Bin values must be equally spaced')
        if (self.frequencies < 0).any():
            raise ValueError('Frequencies must be non-negative')

        if sum is None or sumsquares is None:
            self.recompute_sums()
        else:
            self.sum = float(sum)
            self.sumsquares = float(sumsquares)

    def __repr__(self):
        return (f'<EmpiricalDistribution: {self.numbins} bins, '
                f'{self.numobservations():g} observations>')

    def __add__(self, other):
        return EmpiricalDistribution.combine(self, other)

    @classmethod
    def from_datapoints(cls, datapoints: Sequence[float], binvalues: Sequence[float]):
        ''' Create a histogram from raw data points and bin values.

            Args:
                datapoints: The data set
                binvalues: The midpoint values of the histogram bins

            Points that are nan or infinite, such as the unbiased variance
            of a single value, are dropped with a warning.
        '''
        binvalues = np.asarray(binvalues, dtype=float)
        datapoints = _finite_points(datapoints)
        frequencies = np.zeros(len(binvalues))
        if len(datapoints) > 0:
            np.add.at(frequencies, bin_index(datapoints, binvalues), 1)
        return cls(binvalues, frequencies,
                   sum=datapoints.sum(),
                   sumsquares=(datapoints*datapoints).sum())

    @classmethod
    def empty(cls, binvalues: Sequence[float]):
        ''' Create a histogram with no observations on the given bins '''
        return cls(binvalues, np.zeros(len(binvalues)), sum=0, sumsquares=0)

    @classmethod
    def combine(cls, hist1: 'EmpiricalDistribution', hist2: 'EmpiricalDistribution'):
        ''' Create a histogram containing the observations of two others.

            Raises:
                BinCountMismatchError: The histograms have different numbers of bins
                BinValueMismatchError: The histograms have different bin values
        '''
        if hist1.numbins != hist2.numbins:
            raise BinCountMismatchError(
                f'Attempt to merge histograms of different size ({hist1.numbins} and {hist2.numbins} bins)')
        if not np.array_equal(hist1.values, hist2.values):
            raise BinValueMismatchError('Attempt to merge histograms of different scale')

        return cls(hist1.values.copy(),
                   hist1.frequencies + hist2.frequencies,
                   sum=hist1.sum + hist2.sum,
                   sumsquares=hist1.sumsquares + hist2.sumsquares)

    def copy(self):
        ''' Copy of this histogram that can be edited independently '''
        return EmpiricalDistribution(self.values.copy(), self.frequencies.copy(),
                                     sum=self.sum, sumsquares=self.sumsquares)

    def recompute_sums(self):
        ''' Recompute the cached sums from the bins. Call after changing frequencies directly. '''
        self.sum = float(np.dot(self.values, self.frequencies))
        self.sumsquares = float(np.dot(self.values*self.values, self.frequencies))

    def set_frequency(self, index: int, frequency: float):
        ''' Set the frequency of one bin and update the cached sums.
            Out-of-range indexes and negative frequencies are ignored.
        '''
        if index < 0 or index >= self.numbins:
            logging.warning('Bin index %s out of range', index)
            return
        if frequency < 0:
            logging.warning('Negative frequency %s ignored', frequency)
            return
        self.frequencies[index] = frequency
        self.recompute_sums()

    def add_datapoints(self, datapoints: Sequence[float]):
        ''' Add raw data points to the existing bins, one observation each '''
        datapoints = _finite_points(datapoints)
        if len(datapoints) == 0:
            return
        np.add.at(self.frequencies, bin_index(datapoints, self.values), 1)
        self.sum += float(datapoints.sum())
        self.sumsquares += float((datapoints*datapoints).sum())

    @property
    def numbins(self) -> int:
        ''' Number of bins '''
        return len(self.values)

    def numobservations(self) -> float:
        ''' Total number of observations in the data set '''
        return float(self.frequencies.sum())

    def step(self) -> float:
        ''' Interval between one bin and the next '''
        return float(self.values[1] - self.values[0])

    def mean(self) -> float:
        ''' Mean of the data set. nan when there are no observations. '''
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(self.sum) / self.numobservations())

    def median(self) -> float:
        ''' Median of the data set, for grouped data

            Uses rank R = (N+1)/2. When the cumulative count lands exactly on
            floor(R), the median is interpolated toward the next bin by the
            fractional part of R.
        '''
        n = self.numobservations()
        R = 0.5 * (n + 1)
        IR = math.floor(R)
        nc = 0
        for i, freq in enumerate(self.frequencies):
            nc += freq
            if nc == IR:
                if i + 1 < self.numbins:
                    return float(self.values[i] + (R-IR) * (self.values[i+1] - self.values[i]))
                return float(self.values[i])
            elif nc > IR:
                return float(self.values[i])
        return 0.

    def std(self) -> float:
        ''' Population standard deviation. nan when there are no observations. '''
        n = self.numobservations()
        if n == 1:
            return 0.
        with np.errstate(divide='ignore', invalid='ignore'):
            var = (self.sumsquares - self.sum * self.sum / np.float64(n)) / n
        return float(np.sqrt(np.maximum(var, 0.)))

    def _moment(self, order: int, mean: Optional[float], sd: Optional[float]) -> Optional[float]:
        ''' Standardized central moment, or None if undefined '''
        n = self.numobservations()
        if mean is None:
            mean = self.mean()
        if sd is None:
            sd = self.std()
        if sd == 0 or n < 2 or not np.isfinite(sd):
            return None
        sq = np.dot((self.values - mean)**order, self.frequencies)
        return float((sq / n) / sd**order)

    def skew(self, mean: Optional[float] = None, sd: Optional[float] = None) -> float:
        ''' Skewness (third standardized moment). Zero when sd is zero or fewer than 2 observations.

            Args:
                mean: Precomputed mean, to avoid recalculating
                sd: Precomputed standard deviation
        '''
        skew = self._moment(3, mean, sd)
        return 0. if skew is None else skew

    def kurtosis(self, mean: Optional[float] = None, sd: Optional[float] = None) -> float:
        ''' Excess kurtosis (fourth standardized moment - 3). Zero when sd is zero
            or fewer than 2 observations.
        '''
        kurt = self._moment(4, mean, sd)
        return 0. if kurt is None else kurt - 3

    def min_value(self) -> float:
        ''' Lowest bin value with any observations, 0 if the histogram is empty '''
        nonzero = np.flatnonzero(self.frequencies > 0)
        return float(self.values[nonzero[0]]) if len(nonzero) else 0.

    def max_value(self) -> float:
        ''' Highest bin value with any observations, 0 if the histogram is empty '''
        nonzero = np.flatnonzero(self.frequencies > 0)
        return float(self.values[nonzero[-1]]) if len(nonzero) else 0.

    def range(self) -> float:
        ''' Range of the data set. Zero with fewer than 2 observations. '''
        if self.numobservations() < 2:
            return 0.
        return self.max_value() - self.min_value()

    def statistics(self):
        ''' Summary statistics of the distribution

            Returns:
                StatisticsResult
        '''
        mean = self.mean()
        sd = self.std()
        return StatisticsResult(
            numobservations=self.numobservations(),
            mean=mean,
            median=self.median(),
            std=sd,
            range=self.range(),
            skew=self.skew(mean, sd),
            kurtosis=self.kurtosis(mean, sd),
            variance=sd*sd)

    def normal_fit(self, xvalues: Optional[Sequence[float]] = None) -> Optional[np.ndarray]:
        ''' Best-fit normal curve, scaled to the histogram frequencies

            The curve is scaled so the expected count in a bin centered on the
            mean matches a normal distribution with this mean and standard
            deviation.

            Args:
                xvalues: Values at which to evaluate the curve. Defaults to
                    the bin values.

            Returns:
                Curve heights, or None if there are fewer than 3 observations
                or the standard deviation is zero.
        '''
        n = self.numobservations()
        if n < 3:
            return None
        mean = self.mean()
        sd = self.std()
        if sd == 0:
            return None
        if xvalues is None:
            xvalues = self.values

        z = self.step() / 2 / sd   # SDs from mean to edge of the middle bin
        p = (statfuncs.zprob(z) - 0.5) * 2.0 * n
        scale = math.sqrt(1.0/(2.0 * math.pi)) * p / .3989
        x = (np.asarray(xvalues, dtype=float) - mean) / sd
        return scale * np.exp(-x*x/2)

    def get_config(self):
        ''' Configuration dictionary (values and frequencies) '''
        return {'values': self.values.tolist(),
                'frequencies': self.frequencies.tolist()}

    @classmethod
    def from_config(cls, config):
        ''' Create histogram from a configuration dictionary '''
        return cls(config['values'], config['frequencies'],
                   sum=config.get('sum'), sumsquares=config.get('sumsquares'))
