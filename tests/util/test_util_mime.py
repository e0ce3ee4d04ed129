import unittest

from drivesync import util
from drivesync.util.mime import DEFAULT_MIME, guess_mime_type


class TestUtilMime(unittest.TestCase):
    def test_exports(self) -> None:
        self.assertEqual(sorted(util.__all__), ["DEFAULT_MIME", "FOLDER_MIME", "guess_mime_type"])

    def test_guess_mime_type(self) -> None:
        self.assertEqual(guess_mime_type("notes.txt"), "text/plain")
        self.assertEqual(guess_mime_type("dir/report.pdf"), "application/pdf")

    def test_guess_mime_type_unknown_extension(self) -> None:
        self.assertEqual(guess_mime_type("archive.zzunknown"), DEFAULT_MIME)
        self.assertEqual(guess_mime_type("Makefile"), DEFAULT_MIME)


if __name__ == "__main__":
    unittest.main()
