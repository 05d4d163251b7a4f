''' Monte Carlo resampling of empirical distributions

Sampler draws random samples from a histogram by inverse-CDF lookup on its
cumulative frequency table, and builds the sampling distribution of a
statistic by reducing many samples to one value each.

SamplingSession holds the state of one exploration: the parent population,
its bin interval, the log of sampled values and the running sampling
distributions. Separate sessions share nothing.
'''
import logging
import numpy as np

from ..common import statfuncs
from ..histogram import EmpiricalDistribution, StatisticsResult
from . import shapes
from .results import SamplingResults


def make_rng(seed=None):
    ''' Get a numpy random Generator from a seed, or pass through an existing Generator '''
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def get_reducefunc(stat):
    ''' Get reduce function from a callable or statistic identifier '''
    if callable(stat):
        return stat
    func = statfuncs.function_by_name(stat)
    if func is None:
        raise ValueError(f'Unknown statistic {stat}. Must be one of {", ".join(statfuncs.statistic_names())}.')
    return func


class Sampler:
    ''' Draws random samples from an EmpiricalDistribution

        Args:
            seed (int or np.random.Generator): Random number seed, or
                Generator to draw from

        Attributes:
            samplevalues (list): Every raw value drawn by sample_many
    '''
    def __init__(self, seed=None):
        self.rng = make_rng(seed)
        self.samplevalues = []

    def reset(self):
        ''' Clear the log of sampled values '''
        self.samplevalues = []

    def _draw(self, dist, totals, samplesize):
        ''' Draw samplesize bin values using cumulative frequency table totals '''
        total = totals[-1]
        # Inclusive of total, so the last bin is slightly favored
        r = np.floor(self.rng.random(samplesize) * total + 0.5)
        index = np.searchsorted(totals, r, side='left')
        index = np.minimum(index, dist.numbins-1)
        return dist.values[index]

    def _totals(self, dist):
        totals = np.cumsum(dist.frequencies)
        if totals[-1] <= 0:
            logging.warning('Sampling a distribution with no observations')
        return totals

    def sample(self, dist, samplesize):
        ''' Draw one random sample, with replacement, from the distribution

            Args:
                dist (EmpiricalDistribution): Distribution to sample
                samplesize (int): Number of values in the sample

            Returns:
                Array of samplesize bin values
        '''
        return self._draw(dist, self._totals(dist), samplesize)

    def sample_many(self, dist, samplesize, numsamples, reducefunc, continuous=False):
        ''' Sample the distribution repeatedly, reducing each sample to one value

            Args:
                dist (EmpiricalDistribution): Distribution to sample
                samplesize (int): Number of values in each sample
                numsamples (int): Number of samples to draw
                reducefunc (callable or str): Function reducing an array to
                    a single value, or identifier of a statistic
                continuous (bool): Jitter each value uniformly within half a
                    bin width of the bin center

            Returns:
                Array of numsamples reduced values
        '''
        reducefunc = get_reducefunc(reducefunc)
        totals = self._totals(dist)
        step2 = dist.step() / 2
        results = np.empty(numsamples)
        for i in range(numsamples):
            sampledata = self._draw(dist, totals, samplesize)
            if continuous:
                sampledata = sampledata + (self.rng.random(samplesize) - 0.5) * step2
            sampledata = np.round(sampledata, 2)
            self.samplevalues.extend(sampledata.tolist())
            results[i] = reducefunc(sampledata)
        return results

    def sampling_distribution(self, dist, samplesize, numsamples, stat,
                              binvalues=None, existing=None, continuous=False):
        ''' Build (or add to) the sampling distribution of a statistic

            Args:
                dist (EmpiricalDistribution): Parent distribution to sample
                samplesize (int): Number of values in each sample
                numsamples (int): Number of samples to draw
                stat (callable or str): Statistic to compute on each sample
                binvalues (array): Bins for the sampling distribution.
                    Defaults to the bins of dist, or of existing if provided.
                existing (EmpiricalDistribution): Previous sampling distribution
                    to combine the new samples into
                continuous (bool): Jitter values within their bins

            Returns:
                EmpiricalDistribution of the statistic
        '''
        if binvalues is None:
            binvalues = dist.values if existing is None else existing.values
        points = self.sample_many(dist, samplesize, numsamples, stat, continuous=continuous)
        newdist = EmpiricalDistribution.from_datapoints(points, binvalues)
        if existing is None:
            return newdist

        combined = EmpiricalDistribution.combine(existing, newdist)
        if combined.numobservations() != existing.numobservations() + newdist.numobservations():
            logging.error('Combined sampling distribution has %s observations, expected %s',
                          combined.numobservations(),
                          existing.numobservations() + newdist.numobservations())
        return combined


class SamplingSession:
    ''' Sampling distribution explorer session

        Args:
            shape (str): Name of the parent population shape
            para (int): Parameter set of the shape
            seed (int or np.random.Generator): Random number seed

        Attributes:
            parent: Parent population histogram
            samplehist: Histogram of the values in the latest samples
            statdists: Running sampling distributions, keyed by
                (statistic, sample size)
    '''
    def __init__(self, shape='normal', para=1, seed=None):
        self.sampler = Sampler(seed)
        self.shapename = 'custom'
        self.para = 1
        self.label = ''
        self.interval = .2
        self.continuous = False
        self.parent = None
        self.samplehist = None
        self.statdists = {}
        self.select_shape(shape, para)

    @property
    def samplevalues(self):
        ''' Log of every value sampled so far '''
        return self.sampler.samplevalues

    def select_shape(self, name, para=1):
        ''' Change the parent population to a named shape. Resets the samples. '''
        shape = shapes.make_shape(name, para, interval=self.interval)
        self.shapename = shape.name
        self.para = shape.para
        self.label = shape.label
        self.interval = shape.interval
        self.continuous = shape.continuous
        self.parent = shape.distribution
        self.reset_samples()

    def set_parent(self, dist, continuous=False):
        ''' Use a custom parent population. Resets the samples. '''
        self.shapename = 'custom'
        self.para = 1
        self.label = 'Custom'
        self.interval = dist.step()
        self.continuous = continuous
        self.parent = dist
        self.reset_samples()

    def set_frequency(self, index, frequency):
        ''' Edit one bin of the parent population. Resets the samples. '''
        self.parent.set_frequency(index, frequency)
        self.reset_samples()

    def reset_samples(self):
        ''' Clear the sample log, sample histogram, and sampling distributions '''
        self.sampler.reset()
        self.samplehist = EmpiricalDistribution.empty(self.parent.values)
        self.statdists = {}

    def interval_for_stat(self, stat, samplesize):
        ''' Bin interval for the sampling distribution of stat '''
        return shapes.interval_for_stat(self.shapename, stat, samplesize, self.interval)

    def bins_for_stat(self, stat, samplesize):
        ''' Bin values for the sampling distribution of stat '''
        return shapes.bins_for_stat(self.shapename, stat, samplesize, self.parent.values)

    def update_chart(self, existing, samplesize, numsamples, stat):
        ''' Add numsamples values of stat to the existing histogram

            Args:
                existing (EmpiricalDistribution): Histogram to add to, or None
                samplesize (int): Number of values in each sample
                numsamples (int): Number of samples
                stat (str): Statistic identifier, or "none" for an empty histogram

            Returns:
                New EmpiricalDistribution
        '''
        if stat == 'none':
            return EmpiricalDistribution.empty(self.parent.values)
        binvalues = self.bins_for_stat(stat, samplesize) if existing is None else existing.values
        return self.sampler.sampling_distribution(
            self.parent, samplesize, numsamples, stat,
            binvalues=binvalues, existing=existing, continuous=self.continuous)

    def sample(self, numsamples):
        ''' Draw numsamples single values from the parent into the sample histogram

            Returns:
                StatisticsResult of all values sampled so far
        '''
        self.samplehist = self.update_chart(self.samplehist, 1, numsamples, 'mean')
        return self.samplelog_statistics()

    def accumulate(self, stat, samplesize, numsamples):
        ''' Add numsamples values to the running sampling distribution of stat

            Returns:
                EmpiricalDistribution of the statistic
        '''
        key = (stat, samplesize)
        self.statdists[key] = self.update_chart(self.statdists.get(key), samplesize, numsamples, stat)
        return self.statdists[key]

    def step(self, stat, samplesize):
        ''' Draw a single sample and add its statistic to the running distribution.
            The sample histogram is replaced by the new sample.

            Returns:
                Tuple of (sample values, statistic value)
        '''
        reducefunc = get_reducefunc(stat)
        sampledata = self.sampler.sample(self.parent, samplesize)
        self.samplehist = EmpiricalDistribution.empty(self.parent.values)
        self.samplehist.add_datapoints(sampledata)
        datapoint = reducefunc(sampledata)

        key = (stat, samplesize)
        if key not in self.statdists:
            self.statdists[key] = EmpiricalDistribution.empty(self.bins_for_stat(stat, samplesize))
        self.statdists[key].add_datapoints([datapoint])
        return sampledata, datapoint

    def samplelog_statistics(self):
        ''' Statistics of every value sampled so far '''
        return StatisticsResult.from_observations(self.samplevalues)

    @staticmethod
    def visible_statistics(hist):
        ''' Statistics of a histogram, or None when it has too few observations to show '''
        if hist.numobservations() > 1:
            return hist.statistics()
        return None

    def results(self, stat, samplesize):
        ''' Get SamplingResults for the running distribution of stat '''
        key = (stat, samplesize)
        dist = self.statdists.get(key)
        if dist is None:
            dist = EmpiricalDistribution.empty(self.bins_for_stat(stat, samplesize))
        return SamplingResults(
            shape=self.shapename,
            label=self.label,
            stat=stat,
            samplesize=samplesize,
            numsamples=int(dist.numobservations()),
            continuous=self.continuous,
            parent=self.parent,
            samplingdist=dist,
            samplevalues=np.asarray(self.samplevalues, dtype=float))
