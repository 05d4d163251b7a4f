''' Monte Carlo resampling of a parent population to build the sampling
    distribution of a statistic. Mostly for educational/training purposes.
'''

from .sampling import Sampler, SamplingSession, make_rng
from .shapes import make_shape, Shape
from .results import SamplingResults

__all__ = ['Sampler', 'SamplingSession', 'SamplingResults', 'Shape', 'make_shape', 'make_rng']
