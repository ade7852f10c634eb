import pytest

from metrickit.quantile import Quantile, parse_quantiles


@pytest.mark.parametrize(
    "raw, value, label",
    [
        (0.0, 0.0, "min"),
        (1.0, 1.0, "max"),
        (0.99, 0.99, "p99"),
        (0.999, 0.999, "p999"),
        (0.9999, 0.9999, "p9999"),
        (-1.0, 0.0, "min"),
        (1.2, 1.0, "max"),
    ],
)
def test_quantiles(raw, value, label):
    q = Quantile(raw)
    assert q.value == value
    assert q.label == label


def test_half_label():
    assert Quantile(0.5).label == "p50"


def test_nan_is_min():
    q = Quantile(float("nan"))
    assert q.value == 0.0
    assert q.label == "min"


def test_parse_quantiles_empty():
    assert parse_quantiles([]) == []


def test_parse_quantiles():
    result = parse_quantiles([0.0, 0.5, 0.99, 0.999, 1.0])
    assert len(result) == 5
    assert result[0] == Quantile(0.0)
    assert result[1] == Quantile(0.5)
    assert result[2] == Quantile(0.99)
    assert result[3] == Quantile(0.999)
    assert result[4] == Quantile(1.0)