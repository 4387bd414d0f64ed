"""
Hand Gesture Navigation

Turns a stream of MediaPipe hand landmarks into debounced user intents:
cursor movement, pinch-to-click, open-palm waves for previous/next view,
and a closed fist to pause.
"""

__version__ = "0.1.0"

from .types import (
    LandmarkFrame, FeatureSet, GestureLabel, ActivateCommand, NavigateCommand, FrameResult,
    CursorSurface, ActivationSurface, NavigationSurface, FeedbackSurface,
)
from .config import load_config, Cfg, GesturesConfig
from .landmarks import to_frame, adapt_result, extract_features
from .gestures import GestureState, GestureTracker, classify, transition
from .dispatcher import ActionDispatcher, GestureSession
from .views import ViewRegistry, UITree, UIElement
from .controller_mock import MockController

__all__ = [
    "LandmarkFrame",
    "FeatureSet",
    "GestureLabel",
    "ActivateCommand",
    "NavigateCommand",
    "FrameResult",
    "CursorSurface",
    "ActivationSurface",
    "NavigationSurface",
    "FeedbackSurface",
    "load_config",
    "Cfg",
    "GesturesConfig",
    "to_frame",
    "adapt_result",
    "extract_features",
    "GestureState",
    "GestureTracker",
    "classify",
    "transition",
    "ActionDispatcher",
    "GestureSession",
    "ViewRegistry",
    "UITree",
    "UIElement",
    "MockController",
]
