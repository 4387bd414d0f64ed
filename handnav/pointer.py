"""
Operating-system pointer surface driven by synthetic mouse events.
"""
from typing import Callable, Optional, Sequence, Tuple

from pynput.mouse import Button, Controller

Rect = Tuple[float, float, float, float]  # x, y, width, height


def in_regions(regions: Sequence[Rect]) -> Callable[[float, float], bool]:
    """Opt-out predicate that rejects points inside any of ``regions``."""
    def predicate(x_px: float, y_px: float) -> bool:
        return any(x <= x_px < x + w and y <= y_px < y + h for x, y, w, h in regions)
    return predicate


class SystemPointer:
    """Moves the real mouse cursor and clicks where a pinch lands."""

    def __init__(self, screen_wh: Tuple[int, int],
                 opt_out: Optional[Callable[[float, float], bool]] = None):
        self.screen_wh = screen_wh
        self.opt_out = opt_out
        self.mouse = Controller()

    def _clamp(self, x_px: float, y_px: float) -> Tuple[int, int]:
        width, height = self.screen_wh
        return (int(min(max(x_px, 0), width - 1)), int(min(max(y_px, 0), height - 1)))

    def move_cursor(self, x_px: float, y_px: float) -> None:
        self.mouse.position = self._clamp(x_px, y_px)

    def activate_at(self, x_px: float, y_px: float) -> bool:
        if self.opt_out is not None and self.opt_out(x_px, y_px):
            return False
        self.mouse.position = self._clamp(x_px, y_px)
        self.mouse.click(Button.left, 1)
        return True
