"""
MediaPipe hand landmark detector wrapper.
"""
import logging
from pathlib import Path
from typing import Optional, Tuple

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks.python import BaseOptions
from mediapipe.tasks.python import vision

from .config import MediaPipeConfig
from .landmarks import adapt_result
from .types import LandmarkFrame

logger = logging.getLogger(__name__)


class DetectorUnavailableError(RuntimeError):
    """The camera or the landmark model could not be brought up."""


class HandsTracker:
    """Hand landmark tracker using the MediaPipe HandLandmarker task."""

    def __init__(self, cfg: MediaPipeConfig):
        """
        Initialize the hands tracker.

        Args:
            cfg: MediaPipe settings, including the path to the .task model bundle

        Raises:
            DetectorUnavailableError: if the model is missing or fails to load
        """
        model_path = Path(cfg.model_path)
        if not model_path.exists():
            raise DetectorUnavailableError(
                f"Hand landmark model not found: {model_path}. "
                "Run `handnav-download-models` to fetch it into models/"
            )

        options = vision.HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=cfg.max_num_hands,
            min_hand_detection_confidence=cfg.min_detection_confidence,
            min_hand_presence_confidence=cfg.min_presence_confidence,
            min_tracking_confidence=cfg.min_tracking_confidence,
        )
        try:
            self._landmarker = vision.HandLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as e:
            raise DetectorUnavailableError(f"Failed to load hand landmark model: {e}") from e
        self._last_timestamp_ms = -1

    def detect(self, frame_bgr: np.ndarray, timestamp: float) -> Optional[LandmarkFrame]:
        """
        Run the detector on one camera frame.

        A detector fault on a single tick is logged and treated as "no hand",
        so one bad frame never stops the loop.

        Args:
            frame_bgr: Input frame in BGR format
            timestamp: Monotonic capture time in seconds

        Returns:
            LandmarkFrame for the first detected hand, or None
        """
        if self._landmarker is None:
            return None

        # detect_for_video requires strictly increasing timestamps
        timestamp_ms = max(int(timestamp * 1000), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms

        try:
            frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
            mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
            result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        except Exception as e:
            logger.debug(f"Detection failed for tick at {timestamp:.3f}s: {e}")
            return None

        return adapt_result(result, timestamp)

    def close(self) -> None:
        """Release the underlying landmarker."""
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None


class CameraSource:
    """Webcam plus landmark detector, yielding one LandmarkFrame (or None) per read."""

    def __init__(self, camera_index: int, width: int, height: int, fps: int, tracker: HandsTracker):
        self.tracker = tracker
        self.cap = cv2.VideoCapture(camera_index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        self.cap.set(cv2.CAP_PROP_FPS, fps)

        if not self.cap.isOpened():
            self.tracker.close()
            raise DetectorUnavailableError(f"Failed to open camera {camera_index}")

    def read(self, timestamp: float) -> Tuple[Optional[np.ndarray], Optional[LandmarkFrame]]:
        """
        Grab one camera frame and detect a hand in it.

        Returns:
            (frame_bgr, landmarks); frame_bgr is None when the camera returned nothing
        """
        ret, frame = self.cap.read()
        if not ret:
            return None, None
        return frame, self.tracker.detect(frame, timestamp)

    def close(self) -> None:
        """Release the camera and the detector."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        self.tracker.close()
