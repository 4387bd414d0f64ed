"""
Gesture classification and the cross-frame gesture state machine.

The classifier is a pure function of one frame's features. All memory
(pinch latch, wave window, wave cooldown) lives in an immutable
``GestureState`` that ``transition`` maps to a new state plus the
commands that frame produced.
"""
import time
from dataclasses import dataclass, replace
from typing import List, Literal, Optional, Tuple

from .config import GesturesConfig
from .landmarks import extract_features
from .types import (
    ActivateCommand, FeatureSet, FrameResult, GestureLabel, LandmarkFrame, NavigateCommand,
)


@dataclass(frozen=True)
class GestureState:
    """Memory carried from one frame to the next."""
    pinch_held: bool = False
    wave_history: Tuple[float, ...] = ()  # wrist x, oldest first
    last_trigger_time: Optional[float] = None  # seconds, last wave navigation
    label: GestureLabel = GestureLabel.IDLE


def classify(features: FeatureSet, cfg: GesturesConfig) -> GestureLabel:
    """
    Map one frame's features to a gesture label.

    First match wins: fist, pinch, open palm, pointer. Wave direction is
    refined later by the tracker since it depends on history.
    """
    fingers = features.extended_finger_count

    if fingers == 0:
        return GestureLabel.PAUSED
    if features.pinch_distance < cfg.pinch_threshold:
        return GestureLabel.CLICK
    if fingers == 4 and features.pinch_distance > cfg.open_palm_min_pinch:
        return GestureLabel.OPEN_PALM
    if fingers == 1:
        return GestureLabel.POINTER
    return GestureLabel.NONE


def push_wave_sample(history: Tuple[float, ...], wrist_x: float, capacity: int) -> Tuple[float, ...]:
    """Append a wrist-x sample, evicting the oldest past ``capacity``."""
    return (history + (wrist_x,))[-capacity:]


def wave_direction(history: Tuple[float, ...],
                   cfg: GesturesConfig) -> Optional[Literal["previous", "next"]]:
    """
    Direction of a completed wave, or None.

    Only a full window is considered. Wrist x falling by more than the
    threshold reads as "previous", rising reads as "next".
    """
    if len(history) < cfg.wave_window:
        return None

    diff = history[0] - history[-1]
    if diff > cfg.wave_threshold:
        return "previous"
    if diff < -cfg.wave_threshold:
        return "next"
    return None


def cooldown_elapsed(last_trigger_time: Optional[float], t_now: float, cfg: GesturesConfig) -> bool:
    """Compared in whole milliseconds so exactly-on-the-boundary gaps behave the same at any clock value."""
    if last_trigger_time is None:
        return True
    return round((t_now - last_trigger_time) * 1000.0) > cfg.wave_cooldown_ms


def transition(state: GestureState, features: Optional[FeatureSet], t_now: float,
               cfg: GesturesConfig) -> Tuple[GestureState, FrameResult]:
    """
    Advance the gesture state machine by one frame.

    Args:
        state: State after the previous frame
        features: Features of the current frame, or None when no hand is visible
        t_now: Frame time in seconds (monotonic)
        cfg: Gesture thresholds

    Returns:
        (new_state, result) where result carries the label, the cursor
        position (None when absent) and the commands to dispatch
    """
    # Dropout: keep pinch latch and wave window so tracking hiccups don't reset gestures
    if features is None:
        return replace(state, label=GestureLabel.NONE), FrameResult(GestureLabel.NONE, None)

    cursor = features.cursor_px
    label = classify(features, cfg)

    if label is GestureLabel.PAUSED:
        return replace(state, label=label), FrameResult(label, cursor)

    commands: List[object] = []

    # Edge-triggered click: one activation per uninterrupted pinch
    pinch_held = state.pinch_held
    if label is GestureLabel.CLICK:
        if not pinch_held:
            pinch_held = True
            commands.append(ActivateCommand(x_px=cursor[0], y_px=cursor[1]))
    else:
        pinch_held = False

    history = state.wave_history
    last_trigger_time = state.last_trigger_time
    if label is GestureLabel.OPEN_PALM:
        history = push_wave_sample(history, features.wrist_x, cfg.wave_window)
        direction = wave_direction(history, cfg)
        if direction is not None and cooldown_elapsed(last_trigger_time, t_now, cfg):
            commands.append(NavigateCommand(direction=direction))
            last_trigger_time = t_now
            label = GestureLabel.WAVE_LEFT if direction == "previous" else GestureLabel.WAVE_RIGHT

    new_state = GestureState(
        pinch_held=pinch_held,
        wave_history=history,
        last_trigger_time=last_trigger_time,
        label=label,
    )
    return new_state, FrameResult(label, cursor, tuple(commands))


class GestureTracker:
    """
    Owns the gesture state for one session and feeds frames through it.

    Frames must be fed in arrival order; each call fully applies one frame
    before returning.
    """

    def __init__(self, cfg: GesturesConfig, screen_wh: Tuple[int, int]):
        self.cfg = cfg
        self.screen_wh = screen_wh
        self._state = GestureState()

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def label(self) -> GestureLabel:
        return self._state.label

    def update(self, frame: Optional[LandmarkFrame], t_now: Optional[float] = None) -> FrameResult:
        """
        Process one detector tick.

        Args:
            frame: Landmark frame, or None if no hand was detected
            t_now: Override for the frame time; defaults to the frame's
                timestamp, or the monotonic clock for absent ticks

        Returns:
            FrameResult for this tick
        """
        if t_now is None:
            t_now = frame.timestamp if frame is not None else time.monotonic()

        features = extract_features(frame, self.screen_wh, self.cfg) if frame is not None else None
        self._state, result = transition(self._state, features, t_now, self.cfg)
        return result

    def reset(self) -> None:
        self._state = GestureState()
