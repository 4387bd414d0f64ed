"""
Action dispatch and the gesture session lifecycle.
"""
import logging
from typing import Callable, Optional, Sequence, Tuple

from .config import GesturesConfig
from .gestures import GestureTracker
from .types import (
    ActivateCommand, ActivationSurface, CursorSurface, FeedbackSurface, FrameResult,
    GestureLabel, LandmarkFrame, NavigateCommand, NavigationSurface, RippleSurface,
)

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Applies a FrameResult to the application's output surfaces."""

    def __init__(self, cursors: Sequence[CursorSurface], activation: ActivationSurface,
                 navigation: NavigationSurface, feedback: Optional[FeedbackSurface] = None,
                 ripple: Optional[RippleSurface] = None):
        self.cursors = list(cursors)
        self.activation = activation
        self.navigation = navigation
        self.feedback = feedback
        self.ripple = ripple

    def dispatch(self, result: FrameResult, is_active: Callable[[], bool] = lambda: True) -> None:
        """
        Apply cursor movement, commands and feedback for one frame.

        ``is_active`` is checked before every side effect so a session
        disabled by one of these callbacks stops firing immediately.
        """
        if result.cursor_px is not None:
            for cursor in self.cursors:
                if not is_active():
                    return
                cursor.move_cursor(*result.cursor_px)

        for command in result.commands:
            if not is_active():
                return
            if isinstance(command, ActivateCommand):
                self._activate(command)
            elif isinstance(command, NavigateCommand):
                self._navigate(command)
            else:
                raise TypeError(f"Unknown gesture command: {command!r}")

        if self.feedback is not None and is_active():
            self.feedback.show_label(result.label)

    def _activate(self, command: ActivateCommand) -> None:
        # No eligible target is normal control flow, not an error
        if not self.activation.activate_at(command.x_px, command.y_px):
            logger.debug(f"No activation target at ({command.x_px:.0f}, {command.y_px:.0f})")
            return

        logger.info(f"👆 Activate at ({command.x_px:.0f}, {command.y_px:.0f})")
        if self.ripple is not None:
            self.ripple.ripple(command.x_px, command.y_px)

    def _navigate(self, command: NavigateCommand) -> None:
        if command.direction == "previous":
            view = self.navigation.select_previous()
        else:
            view = self.navigation.select_next()
        logger.info(f"✋ Navigate {command.direction} -> {view}")


class GestureSession:
    """
    One enable/disable span of gesture input.

    Enabling builds a fresh GestureTracker; disabling discards it, closes the
    frame source handed to ``enable`` and stops all dispatch. Re-enabling
    never resumes stale gesture history.
    """

    def __init__(self, cfg: GesturesConfig, screen_wh: Tuple[int, int], dispatcher: ActionDispatcher):
        self.cfg = cfg
        self.screen_wh = screen_wh
        self.dispatcher = dispatcher
        self._tracker: Optional[GestureTracker] = None
        self._source = None

    @property
    def enabled(self) -> bool:
        return self._tracker is not None

    @property
    def tracker(self) -> Optional[GestureTracker]:
        return self._tracker

    @property
    def label(self) -> GestureLabel:
        """Last classified label, for display only."""
        return self._tracker.label if self._tracker is not None else GestureLabel.IDLE

    def enable(self, source=None) -> None:
        """
        Start a session with fresh gesture state.

        Args:
            source: Optional frame source; its ``close()`` is called on disable
        """
        if self.enabled:
            self.disable()
        self._tracker = GestureTracker(self.cfg, self.screen_wh)
        self._source = source
        logger.info("✅ Gesture input enabled")

    def disable(self) -> None:
        """Discard gesture state and release the frame source. Safe to call twice."""
        was_enabled = self.enabled
        self._tracker = None

        source, self._source = self._source, None
        if source is not None and hasattr(source, "close"):
            source.close()

        if was_enabled:
            logger.info("⏹️  Gesture input disabled")

    def report_unavailable(self, reason: str) -> None:
        """Terminal detector failure: disable and surface it once on the feedback surface."""
        logger.error(f"❌ Gesture input unavailable: {reason}")
        self.disable()
        if self.dispatcher.feedback is not None:
            self.dispatcher.feedback.show_label(GestureLabel.UNAVAILABLE)

    def process(self, frame: Optional[LandmarkFrame], t_now: Optional[float] = None) -> Optional[FrameResult]:
        """
        Run one tick through the tracker and dispatch its effects.

        Returns:
            The FrameResult, or None if the session is disabled
        """
        tracker = self._tracker
        if tracker is None:
            return None

        result = tracker.update(frame, t_now)
        # A disable that raced this frame keeps the tracker update but suppresses dispatch
        self.dispatcher.dispatch(result, is_active=lambda: self._tracker is tracker)
        return result
