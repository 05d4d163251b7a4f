''' Summary statistics of a data set, as an immutable result '''
from typing import Optional, Sequence
from dataclasses import dataclass
import numpy as np
from scipy import stats

from ..common import reporter, statfuncs
from .report.histogram import ReportStatistics


@reporter.reporter(ReportStatistics)
@dataclass(frozen=True)
class StatisticsResult:
    ''' Summary statistics of a data set

        Attributes:
            numobservations: Number of observations
            mean: Mean value
            median: Median value
            std: Population standard deviation
            range: Range (max - min)
            skew: Skewness (third standardized moment)
            kurtosis: Excess kurtosis (fourth standardized moment - 3)
            variance: Population variance
            mad: Mean absolute deviation. Only available for raw observations.
            variance_unbiased: Variance with Bessel correction. Only available
                for raw observations.
            report (Report): Generate formatted reports of the results
    '''
    numobservations: float
    mean: float
    median: float
    std: float
    range: float
    skew: float
    kurtosis: float
    variance: Optional[float] = None
    mad: Optional[float] = None
    variance_unbiased: Optional[float] = None

    @classmethod
    def from_observations(cls, values: Sequence[float]):
        ''' Compute statistics from raw (ungrouped) observations '''
        values = np.asarray(values, dtype=float)
        n = len(values)
        sd = float(statfuncs.std(values))
        if n < 2 or sd == 0 or not np.isfinite(sd):
            skew = kurtosis = 0.
        else:
            skew = float(stats.skew(values, bias=True))
            kurtosis = float(stats.kurtosis(values, fisher=True, bias=True))

        return cls(numobservations=n,
                   mean=float(statfuncs.mean(values)),
                   median=float(statfuncs.median(values)),
                   std=sd,
                   range=float(statfuncs.datarange(values)),
                   skew=skew,
                   kurtosis=kurtosis,
                   variance=float(statfuncs.variance(values)),
                   mad=float(statfuncs.mean_abs_deviation(values)),
                   variance_unbiased=float(statfuncs.variance_unbiased(values)))

    @staticmethod
    def format_value(value: Optional[float]) -> str:
        ''' Format a value for display with two decimals '''
        return statfuncs.format_value(value)

    def formatted(self) -> dict:
        ''' Dictionary of display strings for each statistic '''
        return {'numobservations': f'{self.numobservations:.0f}',
                'mean': self.format_value(self.mean),
                'median': self.format_value(self.median),
                'std': self.format_value(self.std),
                'range': self.format_value(self.range),
                'skew': self.format_value(self.skew),
                'kurtosis': self.format_value(self.kurtosis),
                'variance': self.format_value(self.variance),
                'mad': self.format_value(self.mad),
                'variance_unbiased': self.format_value(self.variance_unbiased)}
