import pytest

from metrickit.kind import MetricKind, MetricKindMask


def test_matching():
    cmask = MetricKindMask.COUNTER
    gmask = MetricKindMask.GAUGE
    hmask = MetricKindMask.HISTOGRAM
    nmask = MetricKindMask.NONE
    amask = MetricKindMask.ALL

    assert cmask.matches(MetricKind.COUNTER)
    assert not cmask.matches(MetricKind.GAUGE)
    assert not cmask.matches(MetricKind.HISTOGRAM)

    assert not gmask.matches(MetricKind.COUNTER)
    assert gmask.matches(MetricKind.GAUGE)
    assert not gmask.matches(MetricKind.HISTOGRAM)

    assert not hmask.matches(MetricKind.COUNTER)
    assert not hmask.matches(MetricKind.GAUGE)
    assert hmask.matches(MetricKind.HISTOGRAM)

    assert amask.matches(MetricKind.COUNTER)
    assert amask.matches(MetricKind.GAUGE)
    assert amask.matches(MetricKind.HISTOGRAM)

    assert not nmask.matches(MetricKind.COUNTER)
    assert not nmask.matches(MetricKind.GAUGE)
    assert not nmask.matches(MetricKind.HISTOGRAM)


def test_or_combines_masks():
    mask = MetricKindMask.COUNTER.__or__(MetricKindMask.HISTOGRAM)
    assert not mask.matches(MetricKind.GAUGE)
    assert mask.matches(MetricKind.COUNTER)
    assert mask.matches(MetricKind.HISTOGRAM)


def test_or_of_all_kinds_is_all():
    combined = MetricKindMask.COUNTER.__or__(MetricKindMask.GAUGE).__or__(
        MetricKindMask.HISTOGRAM
    )
    assert combined == MetricKindMask.ALL
    assert all(combined.matches(kind) for kind in MetricKind)


def test_or_with_non_mask_raises():
    mask = MetricKindMask.COUNTER
    with pytest.raises(TypeError):
        mask | 3
    assert mask.matches(MetricKind.COUNTER)
    assert not mask.matches(MetricKind.GAUGE)


def test_kind_ordering():
    kinds = sorted([MetricKind.HISTOGRAM, MetricKind.COUNTER, MetricKind.GAUGE])
    assert kinds == [MetricKind.COUNTER, MetricKind.GAUGE, MetricKind.HISTOGRAM]
    assert [MetricKindMask.GAUGE.matches(kind) for kind in kinds] == [False, True, False]