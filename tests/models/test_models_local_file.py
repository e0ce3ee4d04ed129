import unittest

from drivesync.models import FileInfo, LocalFile, LocalFolder


class TestLocalFile(unittest.TestCase):
    def test_folder_path_of_root_file_is_empty(self) -> None:
        f = LocalFile(name="a.txt", relative_path="a.txt", absolute_path="/r/a.txt", size=10)
        self.assertEqual(f.folder_path, "")

    def test_folder_path_of_nested_file(self) -> None:
        f = LocalFile(name="c.txt", relative_path="docs/sub/c.txt", absolute_path="/r/docs/sub/c.txt", size=0)
        self.assertEqual(f.folder_path, "docs/sub")

    def test_size_mb(self) -> None:
        f = LocalFile(name="big", relative_path="big", absolute_path="/r/big", size=3 * 1024 * 1024)
        self.assertAlmostEqual(f.size_mb, 3.0)

    def test_local_folder_defaults(self) -> None:
        folder = LocalFolder(name="docs", path="/r/docs")
        self.assertEqual(folder.relative_path, "")


class TestFileInfo(unittest.TestCase):
    def test_file_info_defaults(self) -> None:
        info = FileInfo(file_id="F1", name="n", mime_type="text/plain")
        self.assertEqual(info.parents, [])
        self.assertIsNone(info.size)


if __name__ == "__main__":
    unittest.main()
