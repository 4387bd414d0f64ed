"""
Camera preview overlay: cursor indicator, activation ripples and gesture label.
"""
import time
from typing import List, Optional, Tuple

import cv2
import numpy as np

from .config import DisplayConfig
from .types import GestureLabel, LandmarkFrame


def draw_landmarks(frame: np.ndarray, landmarks: LandmarkFrame) -> np.ndarray:
    """
    Draw hand landmarks on the frame.

    Args:
        frame: Input frame
        landmarks: Landmark frame in [0..1] coordinates

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for i, (x, y, _) in enumerate(landmarks.points):
        px = int(x * width)
        py = int(y * height)
        cv2.circle(frame, (px, py), 3, (0, 255, 0), -1)
        cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)

    return frame


class PreviewOverlay:
    """
    Cursor, ripple and feedback surface rendered onto the preview frame.

    Positions arrive in screen pixels and are scaled to the preview size at
    render time.
    """

    def __init__(self, cfg: DisplayConfig, screen_wh: Tuple[int, int]):
        self.cfg = cfg
        self.screen_wh = screen_wh
        self.cursor_px: Optional[Tuple[float, float]] = None
        self.label: GestureLabel = GestureLabel.IDLE
        self.active_view: Optional[str] = None
        self._ripples: List[Tuple[float, float, float]] = []  # x, y, expires_at

    def move_cursor(self, x_px: float, y_px: float) -> None:
        self.cursor_px = (x_px, y_px)

    def ripple(self, x_px: float, y_px: float) -> None:
        self._ripples.append((x_px, y_px, time.monotonic() + self.cfg.ripple_ms / 1000.0))

    def show_label(self, label: GestureLabel) -> None:
        self.label = label

    def show_view(self, view_id: str) -> None:
        self.active_view = view_id

    def active_ripples(self, t_now: float) -> List[Tuple[float, float]]:
        self._ripples = [r for r in self._ripples if r[2] > t_now]
        return [(x, y) for x, y, _ in self._ripples]

    def _to_preview(self, pos: Tuple[float, float], frame_wh: Tuple[int, int]) -> Tuple[int, int]:
        screen_w, screen_h = self.screen_wh
        frame_w, frame_h = frame_wh
        return (int(pos[0] * frame_w / screen_w), int(pos[1] * frame_h / screen_h))

    def render(self, frame: np.ndarray, landmarks: Optional[LandmarkFrame] = None,
               status: str = "") -> np.ndarray:
        """
        Draw the overlay onto a camera frame.

        Landmarks are drawn in camera space before the optional mirror flip;
        cursor and ripples are already mirrored screen positions.
        """
        if landmarks is not None and self.cfg.show_landmarks:
            frame = draw_landmarks(frame, landmarks)
        if self.cfg.mirror_preview:
            frame = cv2.flip(frame, 1)

        height, width = frame.shape[:2]
        for pos in self.active_ripples(time.monotonic()):
            cv2.circle(frame, self._to_preview(pos, (width, height)), 16, (255, 255, 255), 2)

        if self.cursor_px is not None:
            center = self._to_preview(self.cursor_px, (width, height))
            cv2.circle(frame, center, 10, (241, 102, 99), 2)
            cv2.circle(frame, center, 2, (255, 255, 255), -1)

        label_text = "" if self.label in (GestureLabel.IDLE, GestureLabel.NONE) else self.label.value
        color = (0, 0, 255) if self.label is GestureLabel.UNAVAILABLE else (0, 255, 0)
        cv2.putText(frame, label_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.8, color, 2)
        if self.active_view is not None:
            cv2.putText(frame, f"View: {self.active_view}", (width - 220, 30),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 0), 2)
        if status:
            cv2.putText(frame, status, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

        cv2.putText(frame, "Pinch = Click | Open palm wave = Prev/Next | Fist = Pause",
                    (10, height - 40), cv2.FONT_HERSHEY_SIMPLEX, 0.45, (255, 255, 255), 1)
        cv2.putText(frame, "Press 'g' to toggle gestures, 'q' to quit",
                    (10, height - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.45, (255, 255, 255), 1)
        return frame
