"""
Test cases for action dispatch and the gesture session lifecycle.
"""
import unittest

from handnav.config import GesturesConfig
from handnav.controller_mock import MockController
from handnav.dispatcher import ActionDispatcher, GestureSession
from handnav.types import (
    ActivateCommand, CursorSurface, FeedbackSurface, FrameResult, GestureLabel, NavigateCommand,
)

from tests.synthetic import make_frame, expected_cursor, wave_frames, SCREEN_WH


class FakeSource:
    def __init__(self):
        self.closed = 0

    def close(self):
        self.closed += 1


def _dispatcher(controller):
    return ActionDispatcher(cursors=[controller], activation=controller, navigation=controller,
                            feedback=controller, ripple=controller)


class TestActionDispatcher(unittest.TestCase):
    """Test how frame results become side effects."""

    def setUp(self):
        self.controller = MockController(verbose=False)
        self.dispatcher = _dispatcher(self.controller)

    def test_cursor_moves_every_frame_with_hand(self):
        self.dispatcher.dispatch(FrameResult(GestureLabel.PAUSED, (10.0, 20.0)))
        self.dispatcher.dispatch(FrameResult(GestureLabel.POINTER, (11.0, 21.0)))
        self.assertEqual(self.controller.cursor_moves, [(10.0, 20.0), (11.0, 21.0)])

    def test_absent_frame_does_not_move_cursor(self):
        self.dispatcher.dispatch(FrameResult(GestureLabel.NONE, None))
        self.assertEqual(self.controller.cursor_moves, [])
        self.assertEqual(self.controller.labels, [GestureLabel.NONE])

    def test_activation_with_ripple(self):
        self.dispatcher.dispatch(FrameResult(GestureLabel.CLICK, (5.0, 6.0), (ActivateCommand(5.0, 6.0),)))
        self.assertEqual(self.controller.activations, [(5.0, 6.0)])
        self.assertEqual(self.controller.ripples, [(5.0, 6.0)])

    def test_activation_without_target_is_noop(self):
        self.controller.accept_activations = False
        self.dispatcher.dispatch(FrameResult(GestureLabel.CLICK, (5.0, 6.0), (ActivateCommand(5.0, 6.0),)))
        self.assertEqual(self.controller.activations, [])
        self.assertEqual(self.controller.ripples, [])

    def test_navigation_wraps(self):
        previous = FrameResult(GestureLabel.WAVE_LEFT, (0.0, 0.0), (NavigateCommand("previous"),))
        self.dispatcher.dispatch(previous)
        self.assertEqual(self.controller.active_view, "settings")

        following = FrameResult(GestureLabel.WAVE_RIGHT, (0.0, 0.0), (NavigateCommand("next"),))
        self.dispatcher.dispatch(following)
        self.dispatcher.dispatch(following)
        self.assertEqual(self.controller.active_view, "tasks")

    def test_inactive_dispatch_does_nothing(self):
        result = FrameResult(GestureLabel.CLICK, (5.0, 6.0), (ActivateCommand(5.0, 6.0),))
        self.dispatcher.dispatch(result, is_active=lambda: False)
        self.assertEqual(self.controller.cursor_moves, [])
        self.assertEqual(self.controller.activations, [])
        self.assertEqual(self.controller.labels, [])

    def test_unknown_command(self):
        with self.assertRaises(TypeError):
            self.dispatcher.dispatch(FrameResult(GestureLabel.NONE, None, ("jump",)))

    def test_mock_satisfies_protocols(self):
        self.assertIsInstance(self.controller, CursorSurface)
        self.assertIsInstance(self.controller, FeedbackSurface)


class TestGestureSession(unittest.TestCase):
    """Test enable/disable boundaries and end-to-end frame processing."""

    def setUp(self):
        self.controller = MockController(verbose=False)
        self.session = GestureSession(GesturesConfig(), SCREEN_WH, _dispatcher(self.controller))

    def test_disabled_session_ignores_frames(self):
        self.assertIsNone(self.session.process(make_frame(pinch=0.02)))
        self.assertEqual(self.controller.activations, [])
        self.assertEqual(self.controller.cursor_moves, [])

    def test_pinch_clicks_at_cursor(self):
        self.session.enable()
        frame = make_frame(pinch=0.02, index_xy=(0.3, 0.4))
        self.session.process(frame)
        self.session.process(make_frame(pinch=0.02, index_xy=(0.3, 0.4), t=0.03))

        self.assertEqual(self.controller.activations, [expected_cursor(frame)])
        self.assertIs(self.session.label, GestureLabel.CLICK)

    def test_wave_switches_view(self):
        self.session.enable()
        for frame in wave_frames(0.3, 0.8):
            self.session.process(frame)
        self.assertEqual(self.controller.active_view, "tasks")

    def test_reenable_starts_fresh(self):
        self.session.enable()
        for frame in wave_frames(0.8, 0.75, samples=5):
            self.session.process(frame)
        self.session.process(make_frame(pinch=0.02, t=0.5))
        self.assertTrue(self.session.tracker.state.pinch_held)

        self.session.disable()
        self.assertFalse(self.session.enabled)
        self.assertIs(self.session.label, GestureLabel.IDLE)

        self.session.enable()
        state = self.session.tracker.state
        self.assertFalse(state.pinch_held)
        self.assertEqual(state.wave_history, ())
        self.assertIsNone(state.last_trigger_time)

        # A fresh latch means the held pinch fires again
        self.session.process(make_frame(pinch=0.02, t=0.6))
        self.assertEqual(len(self.controller.activations), 2)

    def test_disable_releases_source(self):
        source = FakeSource()
        self.session.enable(source=source)
        self.session.disable()
        self.session.disable()
        self.assertEqual(source.closed, 1)

    def test_enable_twice_releases_previous_source(self):
        first, second = FakeSource(), FakeSource()
        self.session.enable(source=first)
        self.session.enable(source=second)
        self.assertEqual((first.closed, second.closed), (1, 0))

    def test_disable_mid_frame_stops_dispatch(self):
        # Navigating disables gestures before the frame's feedback is shown
        self.controller.registry.on_change = lambda view: self.session.disable()
        self.session.enable()
        self.controller.reset_counters()

        results = [self.session.process(frame) for frame in wave_frames(0.3, 0.8)]

        self.assertEqual(results[-1].commands, (NavigateCommand("next"),))
        self.assertFalse(self.session.enabled)
        self.assertEqual(len(self.controller.labels), 7)
        self.assertIsNone(self.session.process(make_frame(pinch=0.02, t=1.0)))
        self.assertEqual(self.controller.activations, [])

    def test_report_unavailable(self):
        source = FakeSource()
        self.session.enable(source=source)
        self.session.report_unavailable("camera permission denied")

        self.assertFalse(self.session.enabled)
        self.assertEqual(source.closed, 1)
        self.assertEqual(self.controller.labels[-1], GestureLabel.UNAVAILABLE)


if __name__ == '__main__':
    unittest.main()
