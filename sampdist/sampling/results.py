''' Results of a sampling distribution calculation '''
from dataclasses import dataclass
import numpy as np

from ..common import reporter
from ..histogram import EmpiricalDistribution, StatisticsResult
from .report.sampling import ReportSampling


@reporter.reporter(ReportSampling)
@dataclass
class SamplingResults:
    ''' Sampling distribution of a statistic

        Attributes:
            shape: Name of the parent population shape
            label: Description of the parent shape parameters
            stat: Statistic identifier
            samplesize: Number of values in each sample
            numsamples: Number of samples in the sampling distribution
            continuous: Values were jittered within their bins
            parent: Parent population histogram
            samplingdist: Histogram of the statistic over all samples
            samplevalues: Every raw value drawn from the parent
            report (Report): Generate formatted reports of the results
    '''
    shape: str
    label: str
    stat: str
    samplesize: int
    numsamples: int
    continuous: bool
    parent: EmpiricalDistribution
    samplingdist: EmpiricalDistribution
    samplevalues: np.ndarray

    @property
    def parent_statistics(self) -> StatisticsResult:
        ''' Statistics of the parent population '''
        return self.parent.statistics()

    @property
    def sampling_statistics(self) -> StatisticsResult:
        ''' Statistics of the sampling distribution '''
        return self.samplingdist.statistics()

    @property
    def samplelog_statistics(self) -> StatisticsResult:
        ''' Statistics of the raw sampled values '''
        return StatisticsResult.from_observations(self.samplevalues)

    def standard_error(self):
        ''' Theoretical standard deviation of the sample mean, sigma/sqrt(n).
            None unless the statistic is the mean.
        '''
        if self.stat != 'mean':
            return None
        return self.parent.std() / np.sqrt(self.samplesize)
