'''
Sampdist - Sampling Distribution Explorer

Histogram-based empirical distributions, summary statistics, and Monte Carlo
sampling distributions of a statistic drawn from a parent population.
'''

from .version import __version__, __date__

from .common import statfuncs
from .histogram import EmpiricalDistribution, StatisticsResult
from .sampling import Sampler, SamplingSession, SamplingResults
from .project import ProjectSampling

__all__ = ['__version__', '__date__', 'statfuncs', 'EmpiricalDistribution', 'StatisticsResult',
           'Sampler', 'SamplingSession', 'SamplingResults', 'ProjectSampling']
