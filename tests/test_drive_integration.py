import argparse
import os
import tempfile
import unittest
import uuid
from pathlib import Path

from drivesync import AuthInfo, DriveSyncManager, OAuthClient, SyncConfig, SyncStats
from drivesync.controller import GoogleDriveController

_REQUIRED_ENV = (
    "DRIVESYNC_CLIENT_SECRETS",
    "DRIVESYNC_TOKEN_FILE",
    "DRIVESYNC_TEST_ROOT_ID",
)


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


@unittest.skipUnless(
    all(_env(name) for name in _REQUIRED_ENV),
    "Set DRIVESYNC_CLIENT_SECRETS, DRIVESYNC_TOKEN_FILE and DRIVESYNC_TEST_ROOT_ID to run",
)
class TestGoogleDriveIntegration(unittest.TestCase):
    """
    Integration test with real Google Drive.

    Required env vars:
        - DRIVESYNC_CLIENT_SECRETS: path to OAuth client secrets json
        - DRIVESYNC_TOKEN_FILE: path to token json (will be created/updated)
        - DRIVESYNC_TEST_ROOT_ID: Drive folder ID used as test root (safe sandbox)

    Every run creates a fresh drivesync_it_<hex> folder under the test root
    and leaves it there for inspection.
    """

    @classmethod
    def setUpClass(cls) -> None:
        cls.client_secrets = _env("DRIVESYNC_CLIENT_SECRETS")
        cls.token_file = _env("DRIVESYNC_TOKEN_FILE")
        cls.root_id = _env("DRIVESYNC_TEST_ROOT_ID")

        auth_info = AuthInfo(client_secrets_file=cls.client_secrets, token_file=cls.token_file)
        token = OAuthClient(auth_info).issue_token()
        cls.controller = GoogleDriveController.from_token(token)

    def test_sync_twice_skips_second_time(self) -> None:
        sandbox = self.controller.create_folder(f"drivesync_it_{uuid.uuid4().hex[:8]}", self.root_id)

        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            (tmp_path / "hello.txt").write_text("hello from drivesync\n", encoding="utf-8")
            (tmp_path / "docs").mkdir()
            (tmp_path / "docs" / "nested.txt").write_text("nested\n", encoding="utf-8")
            (tmp_path / "node_modules").mkdir()
            (tmp_path / "node_modules" / "ignored.js").write_text("x", encoding="utf-8")

            config = SyncConfig(
                local_folder_path=str(tmp_path),
                target_folder_id=sandbox.file_id,
                skip_patterns=("node_modules/*",),
                credentials_file=self.client_secrets,
                token_file=self.token_file,
                max_workers=2,
                show_progress=False,
            )

            first = DriveSyncManager(config).run()
            self.assertEqual(first, SyncStats(copied=2, skipped=0, failed=0, total=2))

            children = self.controller.list_children(sandbox.file_id)
            self.assertEqual(sorted(c.name for c in children), ["docs", "hello.txt"])

            # nested.txt lives under docs/, so only hello.txt matches at the root.
            second = DriveSyncManager(config).run()
            self.assertEqual(second.skipped, 1)
            self.assertEqual(second.total, 2)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose unittest output",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    unittest.main(verbosity=2 if args.verbose else 1)
