''' Test Monte Carlo sampling of empirical distributions '''
import pytest
import numpy as np

from sampdist.common import statfuncs
from sampdist.histogram import EmpiricalDistribution, ShapeMismatchError
from sampdist.sampling import Sampler, SamplingSession, make_rng, shapes
from sampdist.sampling.sampling import get_reducefunc


def test_rng():
    rng = np.random.default_rng(1)
    assert make_rng(rng) is rng
    assert Sampler(rng).rng is rng
    assert make_rng(10).random() == make_rng(10).random()


def test_reducefunc():
    assert get_reducefunc('mean') is statfuncs.mean
    assert get_reducefunc(np.max) is np.max
    with pytest.raises(ValueError):
        get_reducefunc('mode')


def test_sample():
    dist = EmpiricalDistribution([0, 1, 2, 3], [5, 1, 0, 4])
    sampler = Sampler(seed=1234)
    data = sampler.sample(dist, 50)
    assert len(data) == 50
    assert all(x in dist.values for x in data)
    assert sampler.samplevalues == []   # Single samples are not logged

    data2 = Sampler(seed=1234).sample(dist, 50)
    assert np.array_equal(data, data2)


def test_sample_onebin():
    dist = EmpiricalDistribution([0, 1, 2], [10, 0, 0])
    data = Sampler(seed=1).sample(dist, 20)
    assert (data == 0).all()


def test_sample_mean():
    # Symmetric parent population around 0
    dist = EmpiricalDistribution([-2, -1, 0, 1, 2], [1, 4, 6, 4, 1])
    data = Sampler(seed=8888).sample(dist, 2000)
    assert abs(statfuncs.mean(data)) < 0.5


def test_sample_many():
    dist = shapes.make_shape('normal').distribution
    sampler = Sampler(seed=2024)
    means = sampler.sample_many(dist, 4, 100, 'mean')
    assert len(means) == 100
    assert len(sampler.samplevalues) == 400
    assert all(np.isclose(x, dist.values).any() for x in sampler.samplevalues)

    sampler.reset()
    assert sampler.samplevalues == []
    ranges = sampler.sample_many(dist, 4, 10, statfuncs.datarange)
    assert (ranges >= 0).all()


def test_sample_continuous():
    dist = shapes.make_shape('normal').distribution
    sampler = Sampler(seed=99)
    sampler.sample_many(dist, 10, 20, 'mean', continuous=True)
    values = np.array(sampler.samplevalues)
    assert len(values) == 200
    # Jitter is at most a quarter bin (0.05) from a bin value
    offset = np.abs(values[:, None] - dist.values[None, :]).min(axis=1)
    assert (offset <= .0551).all()
    assert (offset > 0).any()
    assert np.allclose(values, np.round(values, 2))


def test_sampling_distribution():
    dist = shapes.make_shape('normal').distribution
    sampler = Sampler(seed=4321)
    sdist = sampler.sampling_distribution(dist, 5, 200, 'mean')
    assert sdist.numobservations() == 200
    assert np.array_equal(sdist.values, dist.values)

    # Add to an existing distribution
    sdist2 = sampler.sampling_distribution(dist, 5, 300, 'mean', existing=sdist)
    assert sdist2.numobservations() == 500
    assert sdist.numobservations() == 200

    # Sampling distribution of the mean is narrower than the parent
    assert sdist2.std() < dist.std()
    assert np.isclose(sdist2.std(), dist.std() / np.sqrt(5), rtol=.2)

    with pytest.raises(ShapeMismatchError):
        sampler.sampling_distribution(dist, 5, 10, 'mean', binvalues=np.arange(33),
                                      existing=sdist)


def test_session_accumulate():
    session = SamplingSession('normal', 1, seed=55)
    dist = session.accumulate('mean', 5, 100)
    assert dist.numobservations() == 100
    dist = session.accumulate('mean', 5, 150)
    assert dist.numobservations() == 250
    assert len(session.samplevalues) == 250 * 5

    # Separate running distribution for each statistic and sample size
    dist = session.accumulate('mean', 10, 20)
    assert dist.numobservations() == 20
    assert session.statdists[('mean', 5)].numobservations() == 250

    # Variance gets wider bins
    dist = session.accumulate('variance', 4, 50)
    assert np.isclose(dist.step(), 4)
    assert dist.numobservations() == 50


def test_session_reset():
    session = SamplingSession('poisson', 2, seed=1)
    session.accumulate('median', 5, 20)
    session.select_shape('uniform', 3)
    assert session.statdists == {}
    assert session.samplevalues == []
    assert session.shapename == 'uniform'
    assert session.samplehist.numobservations() == 0

    session.accumulate('mean', 2, 10)
    session.set_frequency(0, 100)
    assert session.parent.frequencies[0] == 100
    assert session.statdists == {}


def test_session_custom():
    parent = EmpiricalDistribution(np.arange(10) * .5, [0, 1, 2, 3, 4, 4, 3, 2, 1, 0])
    session = SamplingSession(seed=12)
    session.set_parent(parent, continuous=True)
    assert session.shapename == 'custom'
    assert session.continuous
    assert np.isclose(session.interval, .5)
    dist = session.accumulate('range', 3, 40)
    assert dist.numobservations() == 40
    assert np.array_equal(dist.values, parent.values)


def test_session_sample():
    session = SamplingSession('binomial', 2, seed=31)
    stats = session.sample(25)
    assert stats.numobservations == 25
    assert session.samplehist.numobservations() == 25
    stats = session.sample(25)
    assert stats.numobservations == 50
    assert session.samplehist.numobservations() == 50


def test_session_step():
    session = SamplingSession('skewed', seed=77)
    data, value = session.step('median', 7)
    assert len(data) == 7
    assert np.isclose(value, statfuncs.median(data))
    assert session.samplehist.numobservations() == 7
    data, value = session.step('median', 7)
    assert session.samplehist.numobservations() == 7
    assert session.statdists[('median', 7)].numobservations() == 2


def test_update_chart():
    session = SamplingSession(seed=3)
    hist = session.update_chart(None, 5, 10, 'none')
    assert hist.numobservations() == 0
    hist = session.update_chart(None, 5, 10, 'standardDeviation')
    assert hist.numobservations() == 10
    hist = session.update_chart(hist, 5, 10, 'standardDeviation')
    assert hist.numobservations() == 20


def test_visible_statistics():
    assert SamplingSession.visible_statistics(EmpiricalDistribution([0, 1], [1, 0])) is None
    stats = SamplingSession.visible_statistics(EmpiricalDistribution([0, 1], [1, 1]))
    assert np.isclose(stats.mean, .5)


def test_results():
    session = SamplingSession('normal', 2, seed=606)
    session.accumulate('mean', 4, 500)
    result = session.results('mean', 4)
    assert result.numsamples == 500
    assert result.stat == 'mean'
    assert len(result.samplevalues) == 2000
    assert np.isclose(result.standard_error(), session.parent.std() / 2)
    assert np.isclose(result.sampling_statistics.mean, result.parent_statistics.mean, atol=.5)
    assert result.samplelog_statistics.numobservations == 2000

    result = session.results('variance', 4)   # Nothing sampled yet
    assert result.numsamples == 0
    assert result.standard_error() is None


class ZeroRandom:
    ''' Random source that always returns 0 '''
    def random(self, size=None):
        return np.zeros(size)


def test_draw_inclusive_zero():
    # r = round(0 * total) = 0 lands on the first bin even when it is empty
    sampler = Sampler(seed=1)
    sampler.rng = ZeroRandom()
    data = sampler.sample(EmpiricalDistribution([0, 1, 2], [0, 3, 0]), 4)
    assert np.array_equal(data, [0, 0, 0, 0])


def test_nan_statistic():
    # Unbiased variance of one value is nan and is left out of the sampling distribution
    dist = EmpiricalDistribution([0, 1, 2, 3], [1, 2, 3, 4])
    sdist = Sampler(seed=1).sampling_distribution(dist, 1, 10, 'varianceUnbiased')
    assert sdist.numobservations() == 0
    assert sdist.sum == 0

    session = SamplingSession('poisson', 2, seed=5)
    dist = session.accumulate('varianceUnbiased', 1, 20)
    assert dist.numobservations() == 0
    assert len(session.samplevalues) == 20
    data, value = session.step('varianceUnbiased', 1)
    assert not np.isfinite(value)
    assert session.statdists[('varianceUnbiased', 1)].numobservations() == 0
