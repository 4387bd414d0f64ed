"""
Type definitions for the hand navigation gesture engine.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Protocol, Tuple, runtime_checkable


# MediaPipe hand keypoint indices
WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_TIP = 12
RING_TIP = 16
PINKY_TIP = 20

NUM_LANDMARKS = 21

Point3 = Tuple[float, float, float]


@dataclass(frozen=True)
class LandmarkFrame:
    """One detected hand: 21 normalized (x, y, z) keypoints at one instant."""
    points: Tuple[Point3, ...]
    timestamp: float  # monotonic seconds

    def __post_init__(self):
        if len(self.points) != NUM_LANDMARKS:
            raise ValueError(f"Landmark frame needs {NUM_LANDMARKS} points, got {len(self.points)}")

    @property
    def wrist(self) -> Point3:
        return self.points[WRIST]

    @property
    def thumb_tip(self) -> Point3:
        return self.points[THUMB_TIP]

    @property
    def index_tip(self) -> Point3:
        return self.points[INDEX_TIP]


@dataclass(frozen=True)
class FeatureSet:
    """Geometric features derived from a single landmark frame."""
    pinch_distance: float
    extended_finger_count: int  # 0..4, thumb excluded
    cursor_x_px: float
    cursor_y_px: float
    wrist_x: float  # normalized, used by the wave window

    @property
    def cursor_px(self) -> Tuple[float, float]:
        return (self.cursor_x_px, self.cursor_y_px)


class GestureLabel(Enum):
    """Frame-level classification exposed to the feedback surface."""
    IDLE = "Idle"
    PAUSED = "Paused"
    POINTER = "Pointer"
    CLICK = "Click"
    OPEN_PALM = "Open palm"
    WAVE_LEFT = "Wave left"
    WAVE_RIGHT = "Wave right"
    NONE = "None"
    UNAVAILABLE = "Unavailable"


@dataclass(frozen=True)
class ActivateCommand:
    """Synthetic primary click at a screen position."""
    x_px: float
    y_px: float


@dataclass(frozen=True)
class NavigateCommand:
    """Step the active view backward or forward."""
    direction: Literal["previous", "next"]


@dataclass(frozen=True)
class FrameResult:
    """Outcome of processing one frame (or one absent tick)."""
    label: GestureLabel
    cursor_px: Optional[Tuple[float, float]]  # None when no hand was present
    commands: Tuple[object, ...] = ()


@runtime_checkable
class CursorSurface(Protocol):
    """Renders the on-screen gesture cursor."""

    def move_cursor(self, x_px: float, y_px: float) -> None:
        ...


@runtime_checkable
class ActivationSurface(Protocol):
    """Delivers a synthetic activation at a screen position."""

    def activate_at(self, x_px: float, y_px: float) -> bool:
        """Return True if an eligible target received the activation."""
        ...


@runtime_checkable
class NavigationSurface(Protocol):
    """Cyclic selection over a fixed, ordered set of views."""

    def select_previous(self) -> str:
        ...

    def select_next(self) -> str:
        ...


@runtime_checkable
class FeedbackSurface(Protocol):
    """Displays the last gesture label. Never read back by the engine."""

    def show_label(self, label: GestureLabel) -> None:
        ...


@runtime_checkable
class RippleSurface(Protocol):
    """Optional cosmetic effect shown where an activation landed."""

    def ripple(self, x_px: float, y_px: float) -> None:
        ...
