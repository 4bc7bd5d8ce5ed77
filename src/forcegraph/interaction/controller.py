"""
Interaction Controller
======================
Finite-state machine that interprets raw pointer input.

States:
    Idle           -> hovering, nothing pressed
    DraggingNode   -> a node was hit on press and follows the pointer
    PanningCanvas  -> empty canvas was hit on press, the view follows the pointer

The controller mutates the GraphModel (node position, pin state) and the
ViewportTransform (offset, scale). Observers subscribe through Qt signals.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Union, TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from forcegraph.config import CLICK_SLOP, WHEEL_ZOOM_IN, WHEEL_ZOOM_OUT

if TYPE_CHECKING:
    from forcegraph.model.graph import GraphModel
    from forcegraph.view.viewport import ViewportTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class DraggingNode:
    node_id: str
    start_pointer: tuple[float, float]


@dataclass(frozen=True)
class PanningCanvas:
    origin_offset: tuple[float, float]
    origin_pointer: tuple[float, float]


InteractionState = Union[Idle, DraggingNode, PanningCanvas]


class InteractionController(QObject):
    """Pointer-event state machine for the graph canvas."""
    node_selected = Signal(str)
    node_double_clicked = Signal(str)
    selection_changed = Signal(object)  # str | None
    hover_changed = Signal(object)  # str | None
    redraw_requested = Signal()

    def __init__(
        self,
        model: GraphModel,
        viewport: ViewportTransform,
        node_radius: float,
        click_slop: float = CLICK_SLOP,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.model = model
        self.viewport = viewport
        self.node_radius = node_radius
        self.click_slop = click_slop

        self._state: InteractionState = Idle()
        self.hovered_node_id: Optional[str] = None
        self.selected_node_id: Optional[str] = None

        # press bookkeeping for click detection
        self._press_pointer: Optional[tuple[float, float]] = None
        self._press_node_id: Optional[str] = None
        self._press_click_count: int = 1
        self._moved: bool = False

    @property
    def state(self) -> InteractionState:
        return self._state

    # ------------------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------------------

    def pointer_down(self, x: float, y: float, click_count: int = 1) -> None:
        """
        Press of the primary button.

        Args:
            x, y: Pointer position in screen pixels.
            click_count: 1 for a single press, 2 for the second press of a
                double click, as reported by the host.
        """
        if not isinstance(self._state, Idle):
            return

        node_id = self.hit_test(x, y)
        self._press_pointer = (x, y)
        self._press_node_id = node_id
        self._press_click_count = click_count
        self._moved = False

        if node_id is not None:
            self.model.pin(node_id)
            self._state = DraggingNode(node_id, (x, y))
            logger.debug(f"Start dragging node '{node_id}'.")
        else:
            self._state = PanningCanvas(self.viewport.offset, (x, y))

    def pointer_move(self, x: float, y: float) -> None:
        self._track_movement(x, y)
        state = self._state

        if isinstance(state, DraggingNode):
            wx, wy = self.viewport.screen_to_world(x, y)
            self.model.set_position(state.node_id, wx, wy)
            self.redraw_requested.emit()
        elif isinstance(state, PanningCanvas):
            ox, oy = state.origin_offset
            px, py = state.origin_pointer
            self.viewport.set_offset(ox + (x - px), oy + (y - py))
            self.redraw_requested.emit()
        else:
            self._update_hover(x, y)

    def pointer_up(self, x: float, y: float) -> None:
        state = self._state
        if isinstance(state, Idle):
            return

        self._track_movement(x, y)
        if isinstance(state, DraggingNode):
            self.model.unpin(state.node_id)
        self._state = Idle()

        if not self._moved:
            self._handle_click(self._press_node_id, self._press_click_count)

        self._press_pointer = None
        self._press_node_id = None
        self._press_click_count = 1
        self._moved = False

    def wheel(self, x: float, y: float, delta: float) -> None:
        """Zoom around the pointer; the interaction state is left alone."""
        factor = WHEEL_ZOOM_IN if delta > 0 else WHEEL_ZOOM_OUT
        self.viewport.zoom_at_point(x, y, factor)
        self.redraw_requested.emit()

    # ------------------------------------------------------------------------------
    # Selection & hit testing
    # ------------------------------------------------------------------------------

    def hit_test(self, sx: float, sy: float) -> Optional[str]:
        """Id of the node under the screen point, or None."""
        wx, wy = self.viewport.screen_to_world(sx, sy)
        return self.model.node_at(wx, wy, self.node_radius)

    def select(self, node_id: Optional[str]) -> None:
        """Set the selection without notifying ``node_selected``."""
        if node_id == self.selected_node_id:
            return
        self.selected_node_id = node_id
        self.selection_changed.emit(node_id)
        self.redraw_requested.emit()

    def reset(self) -> None:
        """Drop any gesture in progress and forget hover and selection."""
        if isinstance(self._state, DraggingNode):
            self.model.unpin(self._state.node_id)
        self._state = Idle()
        self._press_pointer = None
        self._press_node_id = None
        self._moved = False
        if self.hovered_node_id is not None:
            self.hovered_node_id = None
            self.hover_changed.emit(None)
            self.redraw_requested.emit()
        self.select(None)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _track_movement(self, x: float, y: float) -> None:
        if self._press_pointer is None or self._moved:
            return
        px, py = self._press_pointer
        if math.hypot(x - px, y - py) > self.click_slop:
            self._moved = True

    def _update_hover(self, x: float, y: float) -> None:
        node_id = self.hit_test(x, y)
        if node_id == self.hovered_node_id:
            return
        self.hovered_node_id = node_id
        self.hover_changed.emit(node_id)
        self.redraw_requested.emit()

    def _handle_click(self, node_id: Optional[str], click_count: int) -> None:
        if node_id is None:
            self.select(None)
            return

        if click_count >= 2:
            logger.debug(f"Node '{node_id}' double-clicked.")
            self.node_double_clicked.emit(node_id)
            return

        logger.debug(f"Node '{node_id}' selected.")
        self.select(node_id)
        self.node_selected.emit(node_id)
