import pytest

from shapedrift.interactive.runtime.monitor import MonitorSnapshot, RuntimeMonitor, format_fps


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (1.0 / 60.0, "FPS:60.00"),
        (0.5, "FPS:2.00"),
        (0.032, "FPS:31.25"),
        (0.0, "FPS:--"),
    ],
)
def test_format_fps(delta: float, expected: str):
    assert format_fps(delta) == expected


def test_snapshot_stats_text():
    snap = MonitorSnapshot(fps=60.0, cpu_percent=12.345, rss_mb=80.0, vertices=1300, lines=50)
    assert snap.stats_text() == "CPU:12.3% RSS:80.0MB V:1300 L:50"


def test_runtime_monitor_records_draw_counts():
    pytest.importorskip("psutil")
    monitor = RuntimeMonitor()
    monitor.set_draw_counts(vertices=1300, lines=50)
    monitor.tick_frame()
    snap = monitor.snapshot()
    assert snap.vertices == 1300
    assert snap.lines == 50
    assert snap.rss_mb > 0.0
