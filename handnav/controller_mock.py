"""
Mock surfaces that print and record gesture actions instead of executing them.
"""
from typing import List, Optional, Sequence, Tuple

from .types import GestureLabel
from .views import ViewRegistry


class MockController:
    """Mock cursor, activation, navigation and feedback surface."""

    def __init__(self, views: Sequence[str] = ("dashboard", "tasks", "calendar", "routines", "settings"),
                 initial_view: Optional[str] = None, accept_activations: bool = True, verbose: bool = True):
        """Initialize the mock controller."""
        self.registry = ViewRegistry(views, initial=initial_view)
        self.accept_activations = accept_activations
        self.verbose = verbose
        self.cursor_moves: List[Tuple[float, float]] = []
        self.activations: List[Tuple[float, float]] = []
        self.ripples: List[Tuple[float, float]] = []
        self.labels: List[GestureLabel] = []

    def _print(self, message: str) -> None:
        if self.verbose:
            print(f"[MockController] {message}")

    @property
    def active_view(self) -> str:
        return self.registry.active

    def move_cursor(self, x_px: float, y_px: float) -> None:
        self.cursor_moves.append((x_px, y_px))

    def activate_at(self, x_px: float, y_px: float) -> bool:
        """Record an activation; returns False when configured to find no target."""
        if not self.accept_activations:
            self._print(f"Activate: no target at ({x_px:.0f}, {y_px:.0f})")
            return False
        self.activations.append((x_px, y_px))
        self._print(f"Activate: ({x_px:.0f}, {y_px:.0f}) (call #{len(self.activations)})")
        return True

    def select_previous(self) -> str:
        view = self.registry.select_previous()
        self._print(f"Navigate previous -> {view}")
        return view

    def select_next(self) -> str:
        view = self.registry.select_next()
        self._print(f"Navigate next -> {view}")
        return view

    def ripple(self, x_px: float, y_px: float) -> None:
        self.ripples.append((x_px, y_px))

    def show_label(self, label: GestureLabel) -> None:
        self.labels.append(label)

    def reset_counters(self) -> None:
        """Reset recorded actions for testing."""
        self.cursor_moves.clear()
        self.activations.clear()
        self.ripples.clear()
        self.labels.clear()
