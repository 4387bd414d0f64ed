"""
Main application for hand-gesture navigation.
"""
import argparse
import asyncio
import logging
import time
from typing import Optional

import cv2
import numpy as np

from .config import load_config
from .controller_mock import MockController
from .dispatcher import ActionDispatcher, GestureSession
from .hands import CameraSource, DetectorUnavailableError, HandsTracker
from .overlay import PreviewOverlay
from .types import GestureLabel
from .views import ViewRegistry

logger = logging.getLogger(__name__)


class GestureNavigationApp:
    """Camera loop that drives a GestureSession once per captured frame."""

    def __init__(self, config_path: Optional[str] = None, use_mock: bool = False,
                 show_preview: Optional[bool] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.screen_wh = (self.config.screen.width, self.config.screen.height)
        self.show_preview = self.config.display.show_preview if show_preview is None else show_preview
        self.overlay = PreviewOverlay(self.config.display, self.screen_wh)
        self.source: Optional[CameraSource] = None
        self.failed_reads = 0

        nav = self.config.navigation
        if use_mock:
            self.controller = MockController(views=nav.views, initial_view=nav.initial_view)
            self.controller.registry.on_change = self.overlay.show_view
            self.overlay.show_view(self.controller.active_view)
            cursors, activation, navigation = [self.controller, self.overlay], self.controller, self.controller
        else:
            from .pointer import SystemPointer, in_regions
            pointer = SystemPointer(self.screen_wh, opt_out=in_regions(self.config.screen.ignore_regions))
            navigation = ViewRegistry(nav.views, initial=nav.initial_view, on_change=self.overlay.show_view)
            self.overlay.show_view(navigation.active)
            cursors, activation = [pointer, self.overlay], pointer

        dispatcher = ActionDispatcher(
            cursors=cursors,
            activation=activation,
            navigation=navigation,
            feedback=self.overlay,
            ripple=self.overlay,
        )
        self.session = GestureSession(self.config.gestures, self.screen_wh, dispatcher)

    def enable_gestures(self) -> bool:
        """Open the camera and detector and start a fresh session."""
        try:
            tracker = HandsTracker(self.config.mediapipe)
            cam = self.config.camera
            self.source = CameraSource(cam.index, cam.width, cam.height, cam.fps, tracker)
        except DetectorUnavailableError as e:
            self.source = None
            self.session.report_unavailable(str(e))
            return False

        self.failed_reads = 0
        self.session.enable(source=self.source)
        return True

    def disable_gestures(self) -> None:
        self.session.disable()
        self.source = None

    def toggle_gestures(self) -> None:
        if self.session.enabled:
            self.disable_gestures()
        else:
            self.enable_gestures()

    def poll(self):
        """
        Read and process one camera tick.

        An empty read counts as a tick with no hand. After
        ``camera.max_failed_reads`` empty reads in a row the camera is
        treated as lost and the session ends with an unavailable status.

        Returns:
            (frame_bgr, landmarks) for the preview; both None on a failed read
        """
        if self.source is None:
            return None, None

        frame, landmarks = self.source.read(time.monotonic())
        if frame is not None:
            self.failed_reads = 0
            self.session.process(landmarks)
            return frame, landmarks

        self.failed_reads += 1
        if self.failed_reads == 1:
            logger.warning("Failed to read frame from camera")
        if self.failed_reads >= self.config.camera.max_failed_reads:
            self.session.report_unavailable(f"camera returned no frames {self.failed_reads} times in a row")
            self.source = None
        else:
            self.session.process(None)
        return None, None

    async def run(self, max_ticks: Optional[int] = None):
        """
        Run the main application loop.

        Args:
            max_ticks: Stop after this many loop iterations (None runs until 'q')
        """
        print(f"Starting {self.config.display.window_name}")
        print("🎯 Gesture Recognition:")
        print("  - Index fingertip = Cursor")
        print("  - Pinch = Click")
        print("  - Open Palm + Wave = Previous / Next view")
        print("  - Fist = Pause")
        print("Press 'g' to toggle gestures, 'q' to quit")

        if self.config.gestures.enabled and not self.session.enabled:
            self.enable_gestures()

        ticks = 0
        try:
            while max_ticks is None or ticks < max_ticks:
                ticks += 1
                frame, landmarks = self.poll()

                if self.show_preview:
                    if frame is None:
                        frame = np.zeros((self.config.camera.height, self.config.camera.width, 3), dtype=np.uint8)
                    status = "Gestures on" if self.session.enabled else "Gestures off"
                    cv2.imshow(self.config.display.window_name, self.overlay.render(frame, landmarks, status))

                key = cv2.waitKey(1) & 0xFF if self.show_preview else 0xFF
                if key == ord('q'):
                    break
                if key == ord('g'):
                    self.toggle_gestures()

                if self.source is None:
                    # Nothing to poll; don't spin while gestures are off
                    await asyncio.sleep(0.05)
                else:
                    await asyncio.sleep(0)
        finally:
            self.disable_gestures()
            if self.show_preview:
                cv2.destroyAllWindows()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hands-free cursor, click and view navigation")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--mock", action="store_true", help="Print actions instead of moving the OS pointer")
    parser.add_argument("--no-preview", action="store_true", help="Run without the camera preview window")
    return parser.parse_args(argv)


async def main(argv=None):
    """Entry point for the application."""
    args = parse_args(argv)
    app = GestureNavigationApp(
        config_path=args.config,
        use_mock=args.mock,
        show_preview=False if args.no_preview else None,
    )
    try:
        await app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
    if app.overlay.label is GestureLabel.UNAVAILABLE:
        return 1
    return 0


def cli():
    logging.basicConfig(level=logging.INFO)
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
