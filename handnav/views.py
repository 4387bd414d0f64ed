"""
In-process navigation and activation surfaces.

``ViewRegistry`` is the ordered, cyclic list of views that wave gestures
step through. ``UITree`` is a minimal hit-testing tree of interactive
elements that pinch activations are delivered to.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)


class ViewRegistry:
    """Ordered view identifiers with a wrapping active selection."""

    def __init__(self, views: Sequence[str], initial: Optional[str] = None,
                 on_change: Optional[Callable[[str], None]] = None):
        if not views:
            raise ValueError("ViewRegistry needs at least one view")
        if len(set(views)) != len(views):
            raise ValueError(f"Duplicate view ids: {list(views)}")

        self._views = list(views)
        self._index = self._views.index(initial) if initial is not None else 0
        self.on_change = on_change

    @property
    def views(self) -> List[str]:
        return list(self._views)

    @property
    def active(self) -> str:
        return self._views[self._index]

    def select(self, view_id: str) -> str:
        """Make ``view_id`` active. Raises ValueError for unknown ids."""
        self._set_index(self._views.index(view_id))
        return self.active

    def select_previous(self) -> str:
        self._set_index((self._index - 1) % len(self._views))
        return self.active

    def select_next(self) -> str:
        self._set_index((self._index + 1) % len(self._views))
        return self.active

    def _set_index(self, index: int) -> None:
        self._index = index
        logger.info(f"🧭 Active view: {self.active}")
        if self.on_change is not None:
            self.on_change(self.active)


@dataclass(eq=False)
class UIElement:
    """A rectangular interactive element in screen pixels."""
    element_id: str
    x: float
    y: float
    width: float
    height: float
    on_activate: Optional[Callable[[float, float], None]] = None
    ignore_gestures: bool = False
    parent: Optional["UIElement"] = None
    z_index: int = 0

    def contains(self, x_px: float, y_px: float) -> bool:
        return (self.x <= x_px < self.x + self.width and
                self.y <= y_px < self.y + self.height)


def is_gesture_ignored(element: UIElement) -> bool:
    """True if the element or any ancestor opts out of gesture activation."""
    node: Optional[UIElement] = element
    while node is not None:
        if node.ignore_gestures:
            return True
        node = node.parent
    return False


@dataclass
class UITree:
    """
    Hit-testing tree that receives synthetic activations.

    The topmost element under the point is the one with the highest
    ``z_index``; ties go to the element added last. If that element opts
    out (see ``opt_out``) the activation is dropped rather than passed to
    whatever lies beneath it.
    """
    elements: List[UIElement] = field(default_factory=list)
    opt_out: Callable[[UIElement], bool] = is_gesture_ignored

    def add(self, element: UIElement) -> UIElement:
        self.elements.append(element)
        return element

    def remove(self, element: UIElement) -> None:
        self.elements.remove(element)

    def element_at(self, x_px: float, y_px: float) -> Optional[UIElement]:
        hits = [(el.z_index, order, el) for order, el in enumerate(self.elements)
                if el.contains(x_px, y_px)]
        if not hits:
            return None
        return max(hits, key=lambda hit: (hit[0], hit[1]))[2]

    def activate_at(self, x_px: float, y_px: float) -> bool:
        element = self.element_at(x_px, y_px)
        if element is None or self.opt_out(element):
            return False

        if element.on_activate is not None:
            element.on_activate(x_px, y_px)
        return True
