"""Rich progress bar for upload batches.

Only the coordinating thread touches an UploadProgress; workers report back
through the dispatcher's result queue.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)


class UploadProgress:
    """Single progress bar: |bar| percentage | done/total Files | current file."""

    def __init__(
        self,
        total: int,
        *,
        enabled: bool = True,
        console: Optional[Console] = None,
    ) -> None:
        self._total = total
        self._progress = Progress(
            TextColumn("Progress"),
            BarColumn(),
            TaskProgressColumn(),
            MofNCompleteColumn(),
            TextColumn("Files"),
            TimeElapsedColumn(),
            TextColumn("{task.fields[current_file]}"),
            console=console,
            disable=not enabled,
            transient=False,
        )
        self._task: Optional[TaskID] = None

    def __enter__(self) -> "UploadProgress":
        self._progress.start()
        self._task = self._progress.add_task(
            "upload",
            total=self._total,
            current_file="Starting...",
        )
        return self

    def __exit__(self, *exc_info) -> None:
        self._progress.stop()

    def update(self, completed: int, label: str) -> None:
        """Advance to `completed` files; `label` is shown verbatim, never as markup."""
        if self._task is None:
            return
        self._progress.update(self._task, completed=completed, current_file=escape(label))
