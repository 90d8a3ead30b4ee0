# src/tasktree/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .engine import TaskTree
from .models import StatusFilter


@dataclass
class AppState:
    """
    Everything a presentation layer needs between two user actions.

    The engine owns the tasks; page number and filter are view state and are
    passed to the engine as query parameters.
    """

    # Settings are kept untyped so tests can pass a SimpleNamespace.
    settings: object
    engine: TaskTree

    page: int = 1
    status_filter: StatusFilter = StatusFilter.ALL

    @property
    def page_size(self) -> int:
        return int(getattr(self.settings, "page_size", 20))

    def clamp_page(self) -> None:
        """Keep `page` inside 1..total_pages (1 when there is nothing to show)."""
        total = self.engine.total_pages(self.page_size)
        self.page = max(1, min(self.page, total or 1))
