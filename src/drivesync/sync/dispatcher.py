"""Bounded pool of upload worker threads fed from a task queue."""

from __future__ import annotations

import logging
import os
import queue
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from rich.console import Console

from drivesync.auth import AuthToken
from drivesync.errors import InvalidStateError
from drivesync.models import LocalFile, UploadResult
from drivesync.progress import UploadProgress

from .resolver import FolderCache, ensure_path

logger = logging.getLogger(__name__)

ClientFactory = Callable[[AuthToken], Any]

MAX_WORKERS: int = 4

_POLL_INTERVAL_SEC: float = 0.5

_STOP = object()


@dataclass(slots=True, frozen=True)
class WorkItem:
    """One file upload request sent to a worker."""

    seq: int
    file: LocalFile
    folder_path: str
    target_folder_id: str


def default_worker_count(cpu_count: Optional[int] = None) -> int:
    """One less than the CPU count, capped at MAX_WORKERS, never below one."""
    cpus = cpu_count if cpu_count is not None else (os.cpu_count() or 1)
    return max(1, min(cpus - 1, MAX_WORKERS))


def _default_client_factory(token: AuthToken) -> Any:
    from drivesync.controller import GoogleDriveController

    return GoogleDriveController.from_token(token)


class UploadDispatcher:
    """
    Fixed set of long-lived upload threads shared by every batch of a run.

    Usage:
        with UploadDispatcher(token, max_workers=2) as dispatcher:
            results = dispatcher.dispatch(files, target_folder_id)

    Workers pull WorkItems from a bounded FIFO queue, so a slow upload never
    holds back files queued behind it on other workers. Each worker rebuilds
    its own Drive client from the AuthToken it was started with. Results
    travel back on a second queue; only the thread calling dispatch() counts
    completions and drives the progress bar.
    """

    def __init__(
        self,
        token: AuthToken,
        *,
        max_workers: Optional[int] = None,
        client_factory: Optional[ClientFactory] = None,
        folder_cache: Optional[FolderCache] = None,
        dedupe_folders: bool = True,
        show_progress: bool = True,
        console: Optional[Console] = None,
    ) -> None:
        workers = max_workers if max_workers is not None else default_worker_count()
        if workers < 1:
            raise ValueError("max_workers must be at least 1")

        self._token = token
        self._max_workers = workers
        self._client_factory = client_factory or _default_client_factory
        if folder_cache is None and dedupe_folders:
            folder_cache = FolderCache()
        self._folder_cache = folder_cache
        self._show_progress = show_progress
        self._console = console

        self._tasks: queue.Queue[Any] = queue.Queue(maxsize=workers * 2)
        self._results: queue.Queue[tuple[int, UploadResult]] = queue.Queue()
        self._threads: list[threading.Thread] = []

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def __enter__(self) -> "UploadDispatcher":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def start(self) -> None:
        if self._threads:
            raise InvalidStateError("UploadDispatcher is already started")
        logger.debug("Starting %d upload workers", self._max_workers)
        for index in range(self._max_workers):
            thread = threading.Thread(
                target=self._worker_loop,
                name=f"drivesync-upload-{index}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)

    def close(self) -> None:
        for thread in self._threads:
            if thread.is_alive():
                self._tasks.put(_STOP)
        for thread in self._threads:
            thread.join()
        self._threads = []

    def dispatch(
        self,
        files: Sequence[LocalFile],
        target_folder_id: str,
    ) -> list[UploadResult]:
        """
        Upload `files` below `target_folder_id` and wait for every outcome.

        Each file goes to the folder named by its relative path minus the last
        segment. Failures are logged and returned, never raised, and do not
        stop the remaining uploads.

        Returns:
            One UploadResult per file, in completion order.

        Raises:
            InvalidStateError: if the worker threads are not running.
        """
        if not self._threads:
            raise InvalidStateError("UploadDispatcher is not started")

        pending = deque(
            WorkItem(
                seq=seq,
                file=f,
                folder_path=f.folder_path,
                target_folder_id=target_folder_id,
            )
            for seq, f in enumerate(files)
        )
        outstanding: dict[int, WorkItem] = {}
        results: list[UploadResult] = []

        with UploadProgress(
            len(pending),
            enabled=self._show_progress,
            console=self._console,
        ) as progress:
            while pending or outstanding:
                while pending:
                    try:
                        self._tasks.put_nowait(pending[0])
                    except queue.Full:
                        break
                    item = pending.popleft()
                    outstanding[item.seq] = item

                try:
                    seq, result = self._results.get(timeout=_POLL_INTERVAL_SEC)
                except queue.Empty:
                    if not self._any_worker_alive():
                        lost = list(outstanding.values()) + list(pending)
                        outstanding.clear()
                        pending.clear()
                        for item in lost:
                            failed = UploadResult(
                                file=item.file,
                                success=False,
                                error="Upload worker exited before finishing",
                            )
                            self._record(failed, results, progress)
                    continue

                outstanding.pop(seq, None)
                self._record(result, results, progress)

        return results

    # ----------------------------
    # Internals
    # ----------------------------
    def _record(
        self,
        result: UploadResult,
        results: list[UploadResult],
        progress: UploadProgress,
    ) -> None:
        results.append(result)
        path = result.file.relative_path
        if result.success:
            label = f"Copied: {path}"
        else:
            label = f"Failed: {path}"
            logger.error("Error uploading %s: %s", path, result.error)
        progress.update(len(results), label)

    def _any_worker_alive(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def _worker_loop(self) -> None:
        client = None
        build_error: Optional[str] = None
        try:
            client = self._client_factory(self._token)
        except Exception as exc:
            build_error = f"Could not build Drive client: {exc}"
            logger.error(build_error)

        while True:
            item = self._tasks.get()
            if item is _STOP:
                return

            try:
                if client is None:
                    result = UploadResult(file=item.file, success=False, error=build_error)
                else:
                    result = self._upload_one(client, item)
            except Exception as exc:
                result = UploadResult(
                    file=item.file,
                    success=False,
                    error=str(exc) or exc.__class__.__name__,
                )
            except BaseException:
                self._results.put(
                    (
                        item.seq,
                        UploadResult(
                            file=item.file,
                            success=False,
                            error="Upload worker terminated abnormally",
                        ),
                    )
                )
                raise
            self._results.put((item.seq, result))

    def _upload_one(self, client: Any, item: WorkItem) -> UploadResult:
        folder_id = ensure_path(
            client,
            item.folder_path,
            item.target_folder_id,
            cache=self._folder_cache,
        )
        info = client.upload_file(item.file.absolute_path, folder_id, name=item.file.name)
        logger.debug("Uploaded %s -> %s", item.file.relative_path, info.file_id)
        return UploadResult(file=item.file, success=True, file_id=info.file_id)
