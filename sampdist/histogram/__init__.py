''' Frequency-table (histogram) representation of empirical distributions,
    and summary statistics computed from the grouped data.
'''

from .histogram import (EmpiricalDistribution, bin_index, ShapeMismatchError,
                        BinCountMismatchError, BinValueMismatchError)
from .results import StatisticsResult

__all__ = ['EmpiricalDistribution', 'bin_index', 'StatisticsResult', 'ShapeMismatchError',
           'BinCountMismatchError', 'BinValueMismatchError']
