"""
Landmark frame adaptation and geometric feature extraction.
"""
import math
from typing import Any, Optional, Sequence, Tuple

from .config import GesturesConfig
from .types import (
    FeatureSet, LandmarkFrame, NUM_LANDMARKS,
    WRIST, THUMB_TIP, INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP,
)

FINGER_TIPS = (INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP)


def _coords(point: Any) -> Tuple[float, float, float]:
    if hasattr(point, "x"):
        return (float(point.x), float(point.y), float(getattr(point, "z", 0.0)))
    if len(point) == 2:
        return (float(point[0]), float(point[1]), 0.0)
    return (float(point[0]), float(point[1]), float(point[2]))


def to_frame(points: Optional[Sequence[Any]], timestamp: float) -> Optional[LandmarkFrame]:
    """
    Normalize one hand's keypoints into a LandmarkFrame.

    Accepts MediaPipe landmark objects (with .x/.y/.z) or plain (x, y[, z])
    tuples. Anything other than exactly 21 points is treated as absent.
    """
    if points is None or len(points) != NUM_LANDMARKS:
        return None
    try:
        coords = tuple(_coords(p) for p in points)
    except (TypeError, ValueError, IndexError):
        return None
    return LandmarkFrame(points=coords, timestamp=timestamp)


def adapt_result(result: Any, timestamp: float) -> Optional[LandmarkFrame]:
    """
    Convert a raw detector result into a LandmarkFrame for the first hand.

    Handles both the HandLandmarker task result (``hand_landmarks``) and the
    legacy solutions result (``multi_hand_landmarks``).
    """
    if result is None:
        return None

    hands = getattr(result, "hand_landmarks", None)
    if hands:
        return to_frame(hands[0], timestamp)

    legacy = getattr(result, "multi_hand_landmarks", None)
    if legacy:
        return to_frame(legacy[0].landmark, timestamp)

    return None


def _distance_2d(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def pinch_distance(frame: LandmarkFrame) -> float:
    """Thumb tip to index tip distance in the image plane."""
    return _distance_2d(frame.points[THUMB_TIP], frame.points[INDEX_TIP])


def extended_finger_count(frame: LandmarkFrame, threshold: float = 0.2) -> int:
    """
    Count extended fingers, thumb excluded.

    A finger is extended when its tip is farther than ``threshold`` from the wrist.
    """
    wrist = frame.points[WRIST]
    return sum(1 for tip in FINGER_TIPS if _distance_2d(frame.points[tip], wrist) > threshold)


def cursor_screen_pos(frame: LandmarkFrame, screen_wh: Tuple[int, int]) -> Tuple[float, float]:
    """
    Project the index fingertip to screen pixels.

    The x axis is mirrored so the cursor follows the hand from the user's
    point of view.
    """
    screen_width, screen_height = screen_wh
    x_norm, y_norm, _ = frame.points[INDEX_TIP]
    return ((1.0 - x_norm) * screen_width, y_norm * screen_height)


def extract_features(frame: LandmarkFrame, screen_wh: Tuple[int, int],
                     cfg: Optional[GesturesConfig] = None) -> FeatureSet:
    """
    Compute the per-frame feature set.

    Args:
        frame: A present landmark frame
        screen_wh: Screen size (width, height) in pixels
        cfg: Gesture thresholds; defaults are used when omitted

    Returns:
        FeatureSet with pinch distance, extended finger count and cursor position
    """
    cfg = cfg or GesturesConfig()
    cursor_x, cursor_y = cursor_screen_pos(frame, screen_wh)
    return FeatureSet(
        pinch_distance=pinch_distance(frame),
        extended_finger_count=extended_finger_count(frame, cfg.extension_threshold),
        cursor_x_px=cursor_x,
        cursor_y_px=cursor_y,
        wrist_x=frame.points[WRIST][0],
    )
