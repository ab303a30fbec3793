"""Tests for the live progress panel."""
from etymograph.progress_display import ProgressDisplay, format_elapsed


def test_format_elapsed():
    assert format_elapsed(5) == "00:05"
    assert format_elapsed(125.9) == "02:05"
    assert format_elapsed(3725) == "01:02:05"


def test_disabled_display_tracks_metrics():
    with ProgressDisplay("Scanning", update_interval=2, enabled=False) as progress:
        progress.update(pages=1, relations=0)
        progress.update(pages=2, relations=3)
    assert progress.live is None
    assert progress.metrics == {"pages": 2, "relations": 3}
    assert progress.calls == 2


def test_render_panel_title():
    display = ProgressDisplay("Scanning", enabled=False)
    with display:
        display.update(pages=10)
        panel = display._render()
    assert panel.title == "Scanning"
