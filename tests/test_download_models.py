"""
Test cases for the model download helper, with HTTP mocked out.
"""
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

from handnav import download_models
from handnav.download_models import MODELS, download_model

INFO = MODELS["hand_landmarker.task"]


def _response(chunks, status_error=None):
    response = mock.MagicMock()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.headers = {"content-length": str(sum(len(c) for c in chunks))}
    response.iter_content.return_value = iter(chunks)
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


class TestDownloadModel(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.out = Path(self.tmp.name)
        patcher = mock.patch("handnav.download_models.requests.get")
        self.get = patcher.start()
        self.addCleanup(patcher.stop)

    def test_downloads_to_target(self):
        self.get.return_value = _response([b"abc", b"def"])
        self.assertTrue(download_model("hand_landmarker.task", INFO, self.out))

        self.assertEqual((self.out / "hand_landmarker.task").read_bytes(), b"abcdef")
        self.assertFalse((self.out / "hand_landmarker.task.tmp").exists())
        self.assertEqual(self.get.call_args[0][0], INFO["url"])

    def test_existing_file_skipped(self):
        (self.out / "hand_landmarker.task").write_bytes(b"old")
        self.assertTrue(download_model("hand_landmarker.task", INFO, self.out))
        self.get.assert_not_called()

        self.get.return_value = _response([b"new"])
        self.assertTrue(download_model("hand_landmarker.task", INFO, self.out, force=True))
        self.assertEqual((self.out / "hand_landmarker.task").read_bytes(), b"new")

    def test_http_error_leaves_nothing_behind(self):
        self.get.return_value = _response([], status_error=requests.HTTPError("404"))
        self.assertFalse(download_model("hand_landmarker.task", INFO, self.out))
        self.assertEqual(list(self.out.iterdir()), [])

    def test_main_exit_code(self):
        self.get.side_effect = requests.ConnectionError("offline")
        self.assertEqual(download_models.main(["--output-dir", str(self.out / "models")]), 1)
        self.assertEqual(download_models.main(["--list"]), 0)


if __name__ == '__main__':
    unittest.main()
