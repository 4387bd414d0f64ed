"""
Test cases for the application loop with a scripted frame source.
"""
import asyncio
import unittest

import numpy as np

from handnav.main import GestureNavigationApp
from handnav.types import GestureLabel

from tests.synthetic import make_frame, wave_frames


class ScriptedSource:
    """Replays queued (frame_bgr, landmarks) reads, then keeps returning an empty read."""

    def __init__(self, landmarks):
        self.reads = [(np.zeros((4, 4, 3), dtype=np.uint8), lm) if lm is not None else (None, None)
                      for lm in landmarks]
        self.read_count = 0
        self.closed = 0

    def read(self, timestamp):
        self.read_count += 1
        if self.reads:
            return self.reads.pop(0)
        return None, None

    def close(self):
        self.closed += 1


class TestAppLoop(unittest.TestCase):
    """Drive GestureNavigationApp.run() without a camera or window."""

    def setUp(self):
        self.app = GestureNavigationApp(use_mock=True, show_preview=False)
        self.app.controller.verbose = False

    def start(self, source, ticks):
        self.app.source = source
        self.app.session.enable(source=source)
        asyncio.run(self.app.run(max_ticks=ticks))

    def test_failed_reads_clear_stale_label(self):
        source = ScriptedSource([make_frame(pinch=0.02)] + [None] * 5)
        self.start(source, ticks=6)

        self.assertEqual(len(self.app.controller.activations), 1)
        self.assertIs(self.app.overlay.label, GestureLabel.NONE)
        self.assertEqual(self.app.controller.labels[-1], GestureLabel.NONE)

    def test_camera_lost_after_consecutive_failures(self):
        self.app.config.camera.max_failed_reads = 3
        source = ScriptedSource([make_frame(pinch=0.02)] + [None] * 200)
        self.start(source, ticks=20)

        self.assertIs(self.app.overlay.label, GestureLabel.UNAVAILABLE)
        self.assertFalse(self.app.session.enabled)
        self.assertIsNone(self.app.source)
        self.assertEqual(source.closed, 1)
        # One good read plus three failures; nothing is read after the camera is dropped
        self.assertEqual(source.read_count, 4)

    def test_good_read_resets_failure_count(self):
        self.app.config.camera.max_failed_reads = 3
        source = ScriptedSource([None, None, make_frame(t=0.1), None, None, make_frame(t=0.2)])
        self.start(source, ticks=6)

        self.assertIsNot(self.app.overlay.label, GestureLabel.UNAVAILABLE)
        self.assertIs(self.app.overlay.label, GestureLabel.POINTER)
        self.assertEqual(self.app.failed_reads, 0)

    def test_navigation_shows_active_view(self):
        self.assertEqual(self.app.overlay.active_view, self.app.controller.active_view)
        before = self.app.controller.active_view

        source = ScriptedSource(wave_frames(0.3, 0.8))
        self.start(source, ticks=8)

        self.assertNotEqual(self.app.controller.active_view, before)
        self.assertEqual(self.app.overlay.active_view, self.app.controller.active_view)


if __name__ == '__main__':
    unittest.main()
