import pytest

from utils.monitoring import MetricsCollector


def test_timer_and_counters_are_summarised():
    metrics = MetricsCollector("req-1")
    with metrics.timer("upstream"):
        metrics.count("upstream_attempts")
        metrics.count("upstream_attempts")
    metrics.record("items_returned", 2)

    summary = metrics.summary()

    assert summary["upstream_attempts"] == 2
    assert summary["items_returned"] == 2
    assert summary["upstream_time"] >= 0
    assert summary["total_elapsed"] >= 0


def test_timer_records_even_when_operation_fails():
    metrics = MetricsCollector()
    with pytest.raises(RuntimeError):
        with metrics.timer("upstream"):
            raise RuntimeError("network down")
    assert "upstream_time" in metrics.summary()
    assert metrics.request_id == "local"
