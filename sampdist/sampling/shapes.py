''' Named parent populations for the sampling explorer

Each shape is a frequency table on 33 equally spaced bins. Shapes take a
parameter set number (1, 2 or 3) selecting one of the preset tables.
'''
from dataclasses import dataclass
import logging
import numpy as np

from ..histogram import EmpiricalDistribution


NUMBER_OF_BINS = 33
SHAPES = ['normal', 'binomial', 'poisson', 'skewed', 'uniform', 'custom']
CONTINUOUS_SHAPES = ['normal']

_NORMAL = [2, 3, 3, 6, 8, 14, 19, 32, 45, 60, 78, 97, 116, 133, 147, 156, 160,
           156, 147, 133, 116, 97, 78, 60, 45, 32, 19, 14, 8, 6, 3, 3, 2]

_BINOMIAL = {
    1: [10] + [0]*31 + [10],
    2: [4, 0, 0, 0, 31, 0, 0, 0, 109, 0, 0, 0, 219, 0, 0, 0, 273,
        0, 0, 0, 219, 0, 0, 0, 109, 0, 0, 0, 31, 0, 0, 0, 4],
    3: [334, 0, 0, 0, 672, 0, 0, 0, 588, 0, 0, 0, 294, 0, 0, 0, 92,
        0, 0, 0, 18, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 0],
}

_POISSON = {
    1: [2000, 2000, 1000, 334, 84, 16, 2] + [0]*26,
    2: [14, 68, 168, 280, 350, 350, 292, 208, 130, 72, 36, 16, 6, 2] + [0]*19,
    3: [0, 0, 4, 16, 38, 76, 126, 180, 226, 250, 250, 228, 190, 146, 104, 70, 44,
        26, 14, 8, 4, 2] + [0]*11,
}

LABELS = {
    'normal': {1: 'mean=0;SD=1', 2: 'mean=16;SD=5', 3: 'mean=-16;SD=5'},
    'binomial': {1: 'n=1;p=0.5', 2: 'n=8;p=0.5', 3: 'n=8;p=0.2'},
    'poisson': {1: 'Lambda=1', 2: 'Lambda=5', 3: 'Lambda=10'},
    'uniform': {1: 'Uniform(0,1)', 2: 'Uniform(-1,1)', 3: 'Uniform'},
    'skewed': {1: 'Skewed'},
    'custom': {1: 'Custom'},
}

# Bin interval for sampling distributions of variance, by parent shape and sample size
_VARIANCE_INTERVALS = {
    'custom': {},
    'normal': {2: 6, 4: 4, 8: 3, 16: 3, 32: 2},
    'skewed': {2: 8, 4: 8, 8: 6, 16: 6, 32: 5},
}
_VARIANCE_DEFAULT = {'custom': 8, 'normal': 1, 'skewed': 1}
VARIANCE_STATS = ['variance', 'varianceUnbiased']


@dataclass
class Shape:
    ''' A named parent population

        Attributes:
            name: Shape name, such as "normal"
            para: Parameter set number
            distribution: The parent population histogram
            interval: Bin interval of the histogram
            continuous: Sampled values should be jittered within their bin
            label: Description of the parameters
    '''
    name: str
    para: int
    distribution: EmpiricalDistribution
    interval: float
    continuous: bool
    label: str


def values_with_interval(interval, numbins=NUMBER_OF_BINS):
    ''' Bin values 0, interval, 2*interval, ... '''
    return np.arange(numbins) * interval


def integer_values(numbins=NUMBER_OF_BINS):
    ''' Bin values 0, 1, 2, ... '''
    return values_with_interval(1, numbins)


def normal_frequencies(para=1):
    ''' Frequencies of the discretized normal shape (same table for every parameter set) '''
    return np.array(_NORMAL, dtype=float)


def binomial_frequencies(para=1):
    ''' Frequencies of the binomial shape for parameter set para '''
    return np.array(_BINOMIAL.get(para, []), dtype=float)


def poisson_frequencies(para=1):
    ''' Frequencies of the Poisson shape for parameter set para '''
    return np.array(_POISSON.get(para, []), dtype=float)


def skewed_frequencies(values):
    ''' Right-skewed frequencies, quadratic decay from the lowest bin.
        The first three bins are mirrored from bins 4-6 so the peak sits at bin 3.
    '''
    values = np.asarray(values, dtype=float)
    skewmax = values[-1]**2
    freqs = np.floor(values[::-1]**2 / skewmax * 5000 + 0.5)
    freqs[0] = freqs[6]
    freqs[1] = freqs[5]
    freqs[2] = freqs[4]
    return freqs


def uniform_frequencies(constant, numbins=NUMBER_OF_BINS):
    ''' Equal frequency in every bin '''
    return np.full(numbins, constant, dtype=float)


def _check_para(name, para, valid):
    if para not in valid:
        logging.warning('Unknown parameter set %s for %s shape. Using 1.', para, name)
        return 1
    return para


def make_shape(name, para=1, interval=None):
    ''' Build a named parent population

        Args:
            name: One of normal, binomial, poisson, skewed, uniform, custom
            para: Parameter set number (1, 2, or 3)
            interval: Bin interval for the custom shape. Defaults to the
                interval of the normal shape.

        Returns:
            Shape
    '''
    name = name.lower()
    if name not in SHAPES:
        raise ValueError(f'Unknown distribution shape {name}. Must be one of {", ".join(SHAPES)}.')

    if name in ('skewed', 'custom'):
        para = 1  # No parameter sets
    else:
        para = _check_para(name, para, LABELS[name])

    if name == 'normal':
        if para == 1:
            interval = .2
            values = np.round(np.arange(-16, 17) * interval, 1)
        elif para == 2:
            interval = 1
            values = integer_values()
        else:
            interval = 1
            values = integer_values() - 32
        freqs = normal_frequencies(para)

    elif name == 'binomial':
        interval = 1/32 if para == 1 else 8/32
        values = values_with_interval(interval)
        freqs = binomial_frequencies(para)

    elif name == 'poisson':
        interval = 1
        values = integer_values()
        freqs = poisson_frequencies(para)

    elif name == 'skewed':
        interval = 1
        values = integer_values()
        freqs = skewed_frequencies(values)

    elif name == 'uniform':
        if para == 1:
            interval = 1/32
            freqs = uniform_frequencies(1)
        elif para == 2:
            interval = 2/32
            freqs = uniform_frequencies(1)
        else:
            interval = 1
            freqs = uniform_frequencies(15)
        values = values_with_interval(interval)

    else:  # custom
        interval = .2 if interval is None else interval
        values = values_with_interval(interval)
        freqs = uniform_frequencies(0)

    return Shape(name=name,
                 para=para,
                 distribution=EmpiricalDistribution(values, freqs),
                 interval=interval,
                 continuous=name in CONTINUOUS_SHAPES,
                 label=LABELS[name].get(para, name.title()))


def interval_for_stat(shapename, stat, samplesize, current):
    ''' Bin interval to use for the sampling distribution of a statistic

        Args:
            shapename: Name of the parent shape
            stat: Statistic identifier
            samplesize: Number of values in each sample
            current: Bin interval of the parent population

        Variances spread far beyond the parent's bins, so they get wider
        bins for normal, skewed and custom parents.
    '''
    shapename = shapename.lower()
    if stat in VARIANCE_STATS and shapename in _VARIANCE_INTERVALS:
        return _VARIANCE_INTERVALS[shapename].get(samplesize, _VARIANCE_DEFAULT[shapename])
    return current


def bins_for_stat(shapename, stat, samplesize, parentvalues):
    ''' Bin values to use for the sampling distribution of a statistic

        Args:
            shapename: Name of the parent shape
            stat: Statistic identifier
            samplesize: Number of values in each sample
            parentvalues: Bin values of the parent population
    '''
    shapename = shapename.lower()
    if stat in VARIANCE_STATS and shapename in _VARIANCE_INTERVALS:
        return values_with_interval(interval_for_stat(shapename, stat, samplesize, None))
    return np.asarray(parentvalues, dtype=float)
