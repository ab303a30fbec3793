"""
Live progress panel for dump scans.

Shows running counters in a Rich Live panel that redraws in place rather
than scrolling. When disabled (``--quiet`` or output not a terminal) every
call is a no-op so the scan loop does not need to branch.
"""

import time
from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ProgressDisplay:
    """
    Context manager showing live scan metrics.

    Usage:
        with ProgressDisplay("Scanning dump") as progress:
            for page in pages:
                progress.update(pages=n, relations=m)
    """

    def __init__(self, title: str = "Progress", update_interval: int = 1000, enabled: Optional[bool] = None):
        self.title = title
        self.update_interval = update_interval
        self.console = Console(stderr=True)
        self.enabled = self.console.is_terminal if enabled is None else enabled

        self.metrics: Dict[str, Any] = {}
        self.live: Optional[Live] = None
        self.start_time = 0.0
        self.calls = 0
        # First metric passed to update() drives the rate
        self._rate_metric: Optional[str] = None

    def __enter__(self):
        self.start_time = time.time()
        if self.enabled:
            self.live = Live(self._render(), console=self.console, refresh_per_second=4)
            self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.live:
            self.live.update(self._render())
            self.live.__exit__(exc_type, exc_val, exc_tb)
            self.live = None
        return False

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time

    def update(self, **metrics):
        """Record metrics; redraw every ``update_interval`` calls."""
        self.calls += 1
        self.metrics.update(metrics)
        if self._rate_metric is None and metrics:
            self._rate_metric = next(iter(metrics))

        if self.live and self.calls % self.update_interval == 0:
            self.live.update(self._render())

    def _render(self) -> Panel:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="left", no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)

        rows = dict(self.metrics)
        elapsed = self.elapsed
        rows["elapsed"] = format_elapsed(elapsed)
        count = rows.get(self._rate_metric) if self._rate_metric else None
        if isinstance(count, int) and elapsed > 0:
            rows["rate"] = f"{count / elapsed:,.1f}/s"

        for key, value in rows.items():
            shown = f"{value:,}" if isinstance(value, int) else str(value)
            grid.add_row(Text(f"{key}:", style="bold grey50"), Text(shown, style="bright_cyan"))

        return Panel(grid, title=self.title, box=box.SIMPLE, border_style="bright_black")


def format_elapsed(seconds: float) -> str:
    """Format seconds as MM:SS, or HH:MM:SS past an hour."""
    seconds = int(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
