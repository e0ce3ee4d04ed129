import json
import os
import tempfile
import unittest
from unittest.mock import Mock

from drivesync.controller.drive_controller import (
    GoogleDriveController,
    _file_dict_to_file_info,
    escape_query_value,
)
from drivesync.errors import NetworkError, NotFoundError, RateLimitError
from drivesync.util.mime import FOLDER_MIME


def _http_error(status: int, reason: str, body=None):
    from googleapiclient.errors import HttpError

    resp = Mock()
    resp.status = status
    resp.reason = reason
    content = json.dumps(body).encode("utf-8") if body is not None else b"{}"
    return HttpError(resp=resp, content=content)


class TestDriveControllerHelpers(unittest.TestCase):
    def test_file_dict_to_file_info_parses_size(self) -> None:
        data = {
            "id": "F1",
            "name": "n",
            "mimeType": "text/plain",
            "parents": ["P1"],
            "size": "123",
        }
        info = _file_dict_to_file_info(data)
        self.assertEqual(info.file_id, "F1")
        self.assertEqual(info.parents, ["P1"])
        self.assertEqual(info.size, 123)

    def test_file_dict_to_file_info_folder_has_no_size(self) -> None:
        info = _file_dict_to_file_info({"id": "D1", "name": "docs", "mimeType": FOLDER_MIME})
        self.assertIsNone(info.size)
        self.assertEqual(info.parents, [])

    def test_escape_query_value(self) -> None:
        self.assertEqual(escape_query_value("it's"), "it\\'s")
        self.assertEqual(escape_query_value("a\\b"), "a\\\\b")
        self.assertEqual(escape_query_value("plain"), "plain")


class TestDriveControllerMocked(unittest.TestCase):
    def _mock_service_with_pages(self, *pages):
        service = Mock()
        files_resource = Mock()
        request = Mock()

        service.files.return_value = files_resource
        request.execute.side_effect = list(pages)
        files_resource.list.return_value = request
        return service, files_resource, request

    def test_list_children_includes_supports_all_drives_kwargs(self) -> None:
        service, files_resource, _ = self._mock_service_with_pages({"files": []})
        controller = GoogleDriveController.from_service(service, supports_all_drives=True)

        controller.list_children("P1")

        kwargs = files_resource.list.call_args.kwargs
        self.assertTrue(kwargs.get("supportsAllDrives"))
        self.assertTrue(kwargs.get("includeItemsFromAllDrives"))
        self.assertIn("'P1' in parents", kwargs["q"])
        self.assertIn("trashed = false", kwargs["q"])
        self.assertEqual(kwargs["pageSize"], 1000)

    def test_list_children_follows_pages(self) -> None:
        service, files_resource, request = self._mock_service_with_pages(
            {"files": [{"id": "A", "name": "a.txt", "mimeType": "text/plain"}], "nextPageToken": "T2"},
            {"files": [{"id": "B", "name": "b.txt", "mimeType": "text/plain"}]},
        )
        controller = GoogleDriveController.from_service(service)

        children = controller.list_children("P1")

        self.assertEqual([c.name for c in children], ["a.txt", "b.txt"])
        self.assertEqual(request.execute.call_count, 2)
        self.assertEqual(files_resource.list.call_args.kwargs["pageToken"], "T2")

    def test_find_child_folders_query(self) -> None:
        service, files_resource, _ = self._mock_service_with_pages({"files": []})
        controller = GoogleDriveController.from_service(service, supports_all_drives=False)

        controller.find_child_folders("P1", "bob's")

        kwargs = files_resource.list.call_args.kwargs
        self.assertIn("name = 'bob\\'s'", kwargs["q"])
        self.assertIn(f"mimeType = '{FOLDER_MIME}'", kwargs["q"])
        self.assertNotIn("supportsAllDrives", kwargs)

    def test_create_folder_body(self) -> None:
        service = Mock()
        files_resource = Mock()
        service.files.return_value = files_resource
        files_resource.create.return_value.execute.return_value = {
            "id": "D1",
            "name": "docs",
            "mimeType": FOLDER_MIME,
            "parents": ["P1"],
        }
        controller = GoogleDriveController.from_service(service)

        info = controller.create_folder("docs", "P1")

        body = files_resource.create.call_args.kwargs["body"]
        self.assertEqual(body, {"name": "docs", "mimeType": FOLDER_MIME, "parents": ["P1"]})
        self.assertEqual(info.file_id, "D1")

    def test_upload_file_sends_media(self) -> None:
        service = Mock()
        files_resource = Mock()
        service.files.return_value = files_resource
        files_resource.create.return_value.execute.return_value = {
            "id": "F9",
            "name": "notes.txt",
            "mimeType": "text/plain",
            "parents": ["P1"],
        }
        controller = GoogleDriveController.from_service(service)

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "notes.txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write("hello")
            info = controller.upload_file(path, "P1")

        kwargs = files_resource.create.call_args.kwargs
        self.assertEqual(kwargs["body"], {"name": "notes.txt", "parents": ["P1"]})
        self.assertEqual(kwargs["media_body"].mimetype(), "text/plain")
        self.assertFalse(kwargs["media_body"].resumable())
        self.assertEqual(info.file_id, "F9")

    def test_upload_missing_file_raises_os_error(self) -> None:
        controller = GoogleDriveController.from_service(Mock())
        with self.assertRaises(OSError):
            controller.upload_file("/nonexistent/file.bin", "P1")

    def test_list_maps_http_404_to_not_found(self) -> None:
        service, _, _ = self._mock_service_with_pages(_http_error(404, "Not Found"))
        controller = GoogleDriveController.from_service(service)

        with self.assertRaises(NotFoundError):
            controller.list_children("X")

    def test_429_is_not_retried(self) -> None:
        err_body = {
            "error": {
                "message": "rate limited",
                "errors": [{"reason": "rateLimitExceeded"}],
            }
        }
        service, _, request = self._mock_service_with_pages(
            _http_error(429, "Too Many Requests", err_body),
            {"files": []},
        )
        controller = GoogleDriveController.from_service(service)

        with self.assertRaises(RateLimitError) as ctx:
            controller.list_children("X")

        self.assertEqual(request.execute.call_count, 1)
        self.assertEqual(str(ctx.exception), "rate limited")

    def test_403_rate_limit_reason_maps_to_rate_limit(self) -> None:
        err_body = {"error": {"message": "slow down", "errors": [{"reason": "userRateLimitExceeded"}]}}
        service, _, _ = self._mock_service_with_pages(_http_error(403, "Forbidden", err_body))
        controller = GoogleDriveController.from_service(service)

        with self.assertRaises(RateLimitError):
            controller.list_children("X")

    def test_socket_error_maps_to_network_error(self) -> None:
        service, _, _ = self._mock_service_with_pages(ConnectionResetError("reset"))
        controller = GoogleDriveController.from_service(service)

        with self.assertRaises(NetworkError):
            controller.list_children("X")


if __name__ == "__main__":
    unittest.main()
