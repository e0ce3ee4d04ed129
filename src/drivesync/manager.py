"""DriveSyncManager: scans, reconciles and uploads one local tree per run."""

from __future__ import annotations

import logging
from contextlib import nullcontext
from enum import Enum
from typing import Any, Optional, Sequence

from drivesync.auth import DEFAULT_SCOPES, AuthInfo, AuthToken, OAuthClient
from drivesync.config import SyncConfig
from drivesync.controller import GoogleDriveController
from drivesync.local import list_files, list_subfolders, walk_folders
from drivesync.models import LocalFolder, SyncStats, UploadResult
from drivesync.sync import UploadDispatcher, find_path, reconcile
from drivesync.sync.dispatcher import ClientFactory

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """Stages of a run. A run only ever moves forward through these."""

    AUTHENTICATING = "authenticating"
    SCANNING_SUBFOLDERS = "scanning_subfolders"
    SYNCING_ROOT = "syncing_root"
    SYNCING_SUBFOLDER = "syncing_subfolder"
    SUMMARIZING = "summarizing"
    DONE = "done"


class DriveSyncManager:
    """One-way upload of a local folder tree into a Drive folder."""

    def __init__(
        self,
        config: SyncConfig,
        *,
        scopes: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Authenticate once and prepare the coordinator-side Drive client.

        Raises:
            AuthError: if credentials cannot be loaded, refreshed or obtained.
                Authentication failures abort the run.
        """
        self._config = config
        self.state = RunState.AUTHENTICATING

        use_scopes = list(scopes) if scopes is not None else list(DEFAULT_SCOPES)
        auth_info = AuthInfo(
            client_secrets_file=config.credentials_file,
            token_file=config.token_file,
        )
        self._token = OAuthClient(auth_info).issue_token(use_scopes)
        self._controller: Any = GoogleDriveController.from_token(self._token)
        self._client_factory: Optional[ClientFactory] = None

    @classmethod
    def from_controller(
        cls,
        controller: Any,
        token: AuthToken,
        config: SyncConfig,
        *,
        client_factory: Optional[ClientFactory] = None,
    ) -> "DriveSyncManager":
        """Create manager with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._config = config
        obj.state = RunState.AUTHENTICATING
        obj._token = token
        obj._controller = controller
        obj._client_factory = client_factory
        return obj

    @property
    def config(self) -> SyncConfig:
        return self._config

    def run(self) -> SyncStats:
        """
        Sync the root folder, then each subfolder in listing order.

        Folders are processed one after another; uploads inside a folder run
        on the shared worker pool. A folder that fails unexpectedly
        contributes zero to the totals and the run moves on.
        """
        config = self._config
        root = config.local_folder_path

        self.state = RunState.SCANNING_SUBFOLDERS
        logger.info("Scanning for subfolders...")
        subfolders = self._collect_subfolders()
        logger.info("Found %d subfolders", len(subfolders))

        total = SyncStats()
        # Dry runs never upload, so no worker threads are started.
        pool: Any = nullcontext(None) if config.dry_run else self._make_dispatcher()
        with pool as dispatcher:
            self.state = RunState.SYNCING_ROOT
            logger.info("Processing root folder...")
            total += self.sync_folder(dispatcher, root, "", config.target_folder_id)

            self.state = RunState.SYNCING_SUBFOLDER
            for folder in subfolders:
                logger.info("Processing subfolder: %s", folder.relative_path)
                total += self.sync_folder(
                    dispatcher,
                    folder.path,
                    folder.relative_path,
                    config.target_folder_id,
                )

        self.state = RunState.SUMMARIZING
        logger.info(
            "Sync finished: %d copied, %d skipped, %d failed, %d total",
            total.copied,
            total.skipped,
            total.failed,
            total.total,
        )
        self.state = RunState.DONE
        return total

    def sync_folder(
        self,
        dispatcher: Optional[UploadDispatcher],
        folder_path: str,
        base_path: str,
        target_folder_id: str,
    ) -> SyncStats:
        """Scan one local folder, skip names already on Drive, upload the rest."""
        try:
            return self._sync_folder(dispatcher, folder_path, base_path, target_folder_id)
        except Exception:
            logger.exception("Error syncing folder %s", folder_path)
            return SyncStats()

    # ----------------------------
    # Internals
    # ----------------------------
    def _sync_folder(
        self,
        dispatcher: Optional[UploadDispatcher],
        folder_path: str,
        base_path: str,
        target_folder_id: str,
    ) -> SyncStats:
        config = self._config
        local_files = list_files(folder_path, base_path, config.skip_patterns)
        logger.info("Found %d local files in %s", len(local_files), folder_path)
        if not local_files:
            return SyncStats()

        compare_id: Optional[str] = target_folder_id
        if config.match_in_destination and base_path:
            compare_id = find_path(self._controller, base_path, target_folder_id)

        if compare_id is None:
            logger.debug("Destination for %s does not exist yet", base_path)
            to_sync, to_skip = list(local_files), []
        else:
            logger.debug("Checking Drive folder %s for existing files", compare_id)
            partition = reconcile(self._controller, local_files, compare_id)
            to_sync, to_skip = partition.to_sync, partition.to_skip

        for skipped in to_skip:
            logger.info("Skipping existing file: %s (%.2f MB)", skipped.relative_path, skipped.size_mb)

        if not to_sync:
            return SyncStats(skipped=len(to_skip), total=len(local_files))

        if config.dry_run or dispatcher is None:
            for pending in to_sync:
                logger.info("Would upload: %s (%.2f MB)", pending.relative_path, pending.size_mb)
            return SyncStats(copied=len(to_sync), skipped=len(to_skip), total=len(local_files))

        logger.info("Uploading %d files", len(to_sync))
        results = dispatcher.dispatch(to_sync, target_folder_id)
        return _stats_from_results(results, skipped=len(to_skip), total=len(local_files))

    def _collect_subfolders(self) -> list[LocalFolder]:
        config = self._config
        if config.recursive:
            return list(walk_folders(config.local_folder_path, config.skip_patterns))
        return list_subfolders(config.local_folder_path, config.skip_patterns)

    def _make_dispatcher(self) -> UploadDispatcher:
        config = self._config
        return UploadDispatcher(
            self._token,
            max_workers=config.max_workers,
            client_factory=self._client_factory,
            dedupe_folders=config.dedupe_folders,
            show_progress=config.show_progress,
        )


def _stats_from_results(
    results: list[UploadResult],
    *,
    skipped: int,
    total: int,
) -> SyncStats:
    copied = sum(1 for r in results if r.success)
    return SyncStats(
        copied=copied,
        skipped=skipped,
        failed=len(results) - copied,
        total=total,
    )


def format_summary(stats: SyncStats, *, dry_run: bool = False) -> str:
    """Render the end-of-run summary printed by the CLI."""
    lines = ["", "Dry run summary:" if dry_run else "Sync Summary:"]
    lines.append(f"- Files {'to copy' if dry_run else 'copied'}: {stats.copied}")
    lines.append(f"- Files skipped: {stats.skipped}")
    if stats.failed:
        lines.append(f"- Files failed: {stats.failed}")
    lines.append(f"- Total files processed: {stats.total}")
    lines.append("")
    if dry_run:
        lines.append("Dry run completed, nothing was uploaded.")
    elif stats.failed:
        lines.append("Sync completed with errors.")
    else:
        lines.append("Sync completed successfully!")
    return "\n".join(lines)
