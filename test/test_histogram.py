''' Test EmpiricalDistribution histograms '''
import pytest
import numpy as np

from sampdist.histogram import (EmpiricalDistribution, StatisticsResult, bin_index,
                                BinCountMismatchError, BinValueMismatchError)


def test_construct():
    with pytest.raises(ValueError):
        EmpiricalDistribution([1], [1])
    with pytest.raises(ValueError):
        EmpiricalDistribution([0, 1, 2], [1, 1])
    with pytest.raises(ValueError):
        EmpiricalDistribution([0, 2, 1], [1, 1, 1])   # Not increasing
    with pytest.raises(ValueError):
        EmpiricalDistribution([0, 1, 3], [1, 1, 1])   # Not equally spaced
    with pytest.raises(ValueError):
        EmpiricalDistribution([0, 1, 2], [1, -1, 1])

    hist = EmpiricalDistribution([0, 1, 2], [1, 2, 1])
    assert hist.numbins == 3
    assert hist.numobservations() == 4
    assert np.isclose(hist.sum, 4)
    assert np.isclose(hist.sumsquares, 6)
    assert np.isclose(hist.step(), 1)

    # Precomputed sums are kept, not recomputed from bins
    hist = EmpiricalDistribution([0, 1, 2], [1, 2, 1], sum=4.4, sumsquares=7)
    assert hist.sum == 4.4
    assert np.isclose(hist.mean(), 1.1)


def test_bin_index():
    bins = [0, 1, 2, 3]
    assert bin_index(-5, bins) == 0
    assert bin_index(50, bins) == 3
    assert bin_index(1.4, bins) == 1
    assert bin_index(1.5, bins) == 2   # Halves round up
    assert bin_index(0, bins) == 0
    assert np.array_equal(bin_index([-1, .6, 2.2, 9], bins), [0, 1, 2, 3])

    bins = np.round(np.arange(-16, 17) * .2, 1)
    assert bin_index(0, bins) == 16
    assert bin_index(-3.2, bins) == 0


def test_from_datapoints():
    hist = EmpiricalDistribution.from_datapoints([0, 1, 1, 2, 1.1], [0, 1, 2])
    assert np.array_equal(hist.frequencies, [1, 3, 1])
    # Sums come from the raw points, not the bins
    assert np.isclose(hist.sum, 5.1)
    assert np.isclose(hist.sumsquares, 0 + 1 + 1 + 4 + 1.21)

    empty = EmpiricalDistribution.from_datapoints([], [0, 1, 2])
    assert empty.numobservations() == 0
    assert empty.sum == 0


def test_combine():
    h1 = EmpiricalDistribution([0, 1, 2], [1, 2, 3])
    h2 = EmpiricalDistribution([0, 1, 2], [4, 0, 1])
    c1 = EmpiricalDistribution.combine(h1, h2)
    c2 = h2 + h1
    assert c1.numobservations() == h1.numobservations() + h2.numobservations()
    assert np.array_equal(c1.frequencies, c2.frequencies)
    assert np.isclose(c1.sum, c2.sum)
    assert np.isclose(c1.sumsquares, h1.sumsquares + h2.sumsquares)
    assert np.array_equal(h1.frequencies, [1, 2, 3])   # Inputs unchanged


def test_combine_mismatch():
    with pytest.raises(BinCountMismatchError):
        EmpiricalDistribution.combine(EmpiricalDistribution([0, 1, 2], [1, 1, 1]),
                                      EmpiricalDistribution([0, 1, 2, 3], [1, 1, 1, 1]))
    with pytest.raises(BinValueMismatchError):
        EmpiricalDistribution.combine(EmpiricalDistribution([0, 1, 2], [1, 1, 1]),
                                      EmpiricalDistribution([.5, 1.5, 2.5], [1, 1, 1]))
    with pytest.raises(ValueError):
        EmpiricalDistribution([0, 1], [1, 1]) + EmpiricalDistribution([0, 2], [1, 1])


def test_stats():
    hist = EmpiricalDistribution([1, 2, 3, 4], [1, 1, 1, 1])
    assert np.isclose(hist.mean(), 2.5)
    assert np.isclose(hist.median(), 2.5)
    assert np.isclose(hist.std(), np.std([1, 2, 3, 4]))
    assert np.isclose(hist.skew(), 0)
    assert hist.range() == 3

    hist = EmpiricalDistribution([0, 1, 2], [1, 1, 1])
    assert np.isclose(hist.median(), 1)

    # Two equal spikes: kurtosis 1 - 3
    hist = EmpiricalDistribution([0, 1], [1, 1])
    assert np.isclose(hist.kurtosis(), -2)


def test_single_value():
    hist = EmpiricalDistribution([0, 1, 2], [0, 5, 0])
    assert hist.std() == 0
    assert hist.skew() == 0
    assert hist.kurtosis() == 0
    assert hist.range() == 0

    hist = EmpiricalDistribution([0, 1, 2], [0, 1, 0])
    assert hist.std() == 0
    assert hist.mean() == 1


def test_empty():
    hist = EmpiricalDistribution.empty([0, 1, 2])
    assert hist.numobservations() == 0
    assert not np.isfinite(hist.mean())
    assert hist.range() == 0
    assert hist.skew() == 0
    assert hist.normal_fit() is None


def test_range():
    hist = EmpiricalDistribution([0, 1, 2, 3], [0, 3, 0, 2])
    assert hist.min_value() == 1
    assert hist.max_value() == 3
    assert hist.range() == 2


def test_skewed():
    hist = EmpiricalDistribution([0, 1, 2, 3, 4], [8, 4, 2, 1, 1])
    assert hist.skew() > 0
    assert np.isclose(hist.skew(), hist.skew(hist.mean(), hist.std()))


def test_set_frequency():
    hist = EmpiricalDistribution([0, 1, 2], [1, 1, 1])
    hist.set_frequency(2, 5)
    assert np.array_equal(hist.frequencies, [1, 1, 5])
    assert np.isclose(hist.sum, 11)
    assert np.isclose(hist.sumsquares, 21)

    hist.set_frequency(3, 100)    # Out of range, ignored
    hist.set_frequency(-1, 100)
    assert np.array_equal(hist.frequencies, [1, 1, 5])


def test_add_copy():
    hist = EmpiricalDistribution.empty([0, 1, 2])
    hist.add_datapoints([.9, 1.2, 5])
    assert np.array_equal(hist.frequencies, [0, 2, 1])
    assert np.isclose(hist.sum, 7.1)

    hist2 = hist.copy()
    hist2.set_frequency(0, 4)
    assert hist.frequencies[0] == 0


def test_statistics():
    hist = EmpiricalDistribution([0, 1, 2, 3], [2, 3, 4, 1])
    result = hist.statistics()
    assert isinstance(result, StatisticsResult)
    assert result.numobservations == 10
    assert np.isclose(result.mean, hist.mean())
    assert np.isclose(result.variance, result.std**2)
    assert result.mad is None
    assert result.formatted()['mean'] == f'{hist.mean():.2f}'
    assert result.formatted()['mad'] == ''


def test_from_observations():
    data = [1, 2, 2, 3, 7]
    result = StatisticsResult.from_observations(data)
    assert result.numobservations == 5
    assert np.isclose(result.mean, 3)
    assert np.isclose(result.median, 2)
    assert np.isclose(result.range, 6)
    assert np.isclose(result.variance_unbiased, np.var(data, ddof=1))
    assert result.skew > 0

    result = StatisticsResult.from_observations([4, 4, 4])
    assert result.std == 0
    assert result.skew == 0


def test_normal_fit():
    bins = np.arange(-5, 6)
    hist = EmpiricalDistribution(bins, [1, 4, 10, 30, 60, 80, 60, 30, 10, 4, 1])
    fit = hist.normal_fit()
    assert len(fit) == len(bins)
    assert np.argmax(fit) == 5
    assert np.allclose(fit, fit[::-1])
    # Total area close to the number of observations
    assert np.isclose(fit.sum(), hist.numobservations(), rtol=.05)

    xx = np.linspace(-5, 5, 101)
    assert len(hist.normal_fit(xx)) == 101

    assert EmpiricalDistribution([0, 1, 2], [1, 1, 0]).normal_fit() is None
    assert EmpiricalDistribution([0, 1, 2], [0, 8, 0]).normal_fit() is None


def test_config():
    hist = EmpiricalDistribution([0, .5, 1], [3, 1, 2])
    hist2 = EmpiricalDistribution.from_config(hist.get_config())
    assert np.array_equal(hist.values, hist2.values)
    assert np.array_equal(hist.frequencies, hist2.frequencies)
    assert np.isclose(hist.mean(), hist2.mean())


def test_nonfinite_points():
    hist = EmpiricalDistribution.from_datapoints([1, np.nan, 2, np.inf], [0, 1, 2])
    assert np.array_equal(hist.frequencies, [0, 1, 1])
    assert np.isclose(hist.sum, 3)
    assert np.isclose(hist.sumsquares, 5)

    hist.add_datapoints([np.nan])
    assert hist.numobservations() == 2
    assert np.isclose(hist.mean(), 1.5)


def test_combine_associative():
    a = EmpiricalDistribution([0, 1, 2], [1, 2, 3])
    b = EmpiricalDistribution([0, 1, 2], [0, 4, 1])
    c = EmpiricalDistribution([0, 1, 2], [7, 0, 2])
    left = (a + b) + c
    right = a + (b + c)
    assert left.numobservations() == right.numobservations() == 20
    assert np.array_equal(left.frequencies, right.frequencies)
    assert np.isclose(left.sum, right.sum)


def test_median_lastbin():
    # Cumulative count reaches the rank in the last bin: no next bin to interpolate toward
    assert EmpiricalDistribution([0, 1, 2], [0, 0, 1]).median() == 2
    assert EmpiricalDistribution([0, 1, 2], [0, 0, 3]).median() == 2


def test_set_negative():
    hist = EmpiricalDistribution([0, 1, 2], [1, 1, 1])
    hist.set_frequency(1, -4)
    assert np.array_equal(hist.frequencies, [1, 1, 1])
