import pytest

from binner import HistogramBuilder, InvalidNumberOfBinEdgesError


ONE_TO_TEN_EDGES = [1.0, 2.8, 4.6, 6.4, 8.2, 10.0]


def counts(buckets):
    return [b.count for b in buckets]


def test_one_to_ten(one_to_ten):
    buckets = HistogramBuilder().build(ONE_TO_TEN_EDGES, one_to_ten)

    assert [b.kind for b in buckets] == ['underflow'] + ['data'] * 5 + ['overflow']
    assert counts(buckets) == [0, 2, 2, 2, 2, 1, 1]

    underflow, first, *_, last, overflow = buckets
    assert underflow.min is None and underflow.max is None
    assert (first.min, first.max) == (1.0, 2.0)
    assert (last.min, last.max) == (9.0, 9.0)
    assert (overflow.min, overflow.max) == (10.0, 10.0)


def test_value_on_internal_edge_goes_to_upper_bin():
    buckets = HistogramBuilder().build([0, 10, 20], [10.0])

    assert counts(buckets) == [0, 0, 1, 0]
    assert (buckets[2].lower, buckets[2].upper) == (10.0, 20.0)


def test_out_of_range_values():
    buckets = HistogramBuilder().build([0, 10, 20], [-5, -1, 0, 19.99, 20, 25])

    assert counts(buckets) == [2, 1, 1, 2]
    assert (buckets[0].min, buckets[0].max) == (-5.0, -1.0)
    assert (buckets[-1].min, buckets[-1].max) == (20.0, 25.0)


def test_nulls_are_dropped_by_default():
    buckets = HistogramBuilder().build([0, 10], [1, None, float('nan'), 2])

    assert counts(buckets) == [0, 2, 0]
    assert all(b.kind != 'null' for b in buckets)


def test_null_bucket_comes_last():
    buckets = HistogramBuilder(include_null_bin=True).build(
        [0, 10], [1, None, float('nan'), float('-inf'), 2]
    )

    assert [b.kind for b in buckets] == ['underflow', 'data', 'overflow', 'null']
    assert buckets[-1].count == 3
    assert buckets[-1].lower is None and buckets[-1].min is None
    assert sum(counts(buckets[:-1])) == 2


def test_null_bucket_without_nulls():
    buckets = HistogramBuilder(include_null_bin=True).build([0, 10], [1, 2])

    assert buckets[-1].kind == 'null'
    assert buckets[-1].count == 0


def test_collapsed_edges_route_everything_to_overflow():
    buckets = HistogramBuilder().build([3.0, 3.0, 3.0], [3.0, 3.0])

    assert counts(buckets) == [0, 0, 0, 2]


def test_every_value_lands_in_exactly_one_bucket(skewed_values):
    edges = [10, 12, 15, 20, 40, 80]
    buckets = HistogramBuilder().build(edges, skewed_values)

    assert sum(counts(buckets)) == len(skewed_values)
    for b in buckets:
        if b.kind == 'data' and b.count:
            assert b.lower <= b.min <= b.max < b.upper


def test_requires_two_edges():
    with pytest.raises(InvalidNumberOfBinEdgesError):
        HistogramBuilder().build([1.0], [1.0, 2.0])
