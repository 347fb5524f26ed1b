"""
Pointer interaction.

:py:class:`InteractionController` is a two-state machine (idle, dragging)
that turns normalized pointer events into position changes of a
:py:class:`~layer_composer.api.transform.TransformModel`.

Pointer events carry screen coordinates. They are converted to surface space
by subtracting the origin of :py:attr:`InteractionController.bounds`, the
on-screen rectangle of the surface.

Example::

    controller = InteractionController(transform, lambda: (200, 100), redraw)
    controller.bounds = Rect(40, 80, 600, 400)
    controller.handle(PointerEvent(PointerEventKind.DOWN, 150, 200))
    controller.handle(PointerEvent(PointerEventKind.MOVE, 170, 230))
    controller.handle(PointerEvent(PointerEventKind.UP, 170, 230))

.. note:: Hit-testing uses the unrotated footprint. With a rotated component
   the grabbable region does not follow the visible outline.
"""

import logging
from typing import Callable, Optional, Union

from attrs import define, field

from layer_composer.api.geometry import Rect
from layer_composer.api.transform import TransformModel
from layer_composer.constants import Cursor, DragState, PointerEventKind

logger = logging.getLogger(__name__)


@define(frozen=True)
class PointerEvent:
    """Pointer event in screen coordinates."""

    kind: PointerEventKind = field(converter=PointerEventKind)
    x: float = field(default=0.0)
    y: float = field(default=0.0)


@define
class DragSession:
    """Offset between the grab point and the footprint's top-left corner."""

    grab_x: float
    grab_y: float


class InteractionController(object):
    """
    Drag-to-move state machine.

    :param transform: model whose position is updated while dragging.
    :param component_size: callable returning the intrinsic ``(width,
        height)`` of the component raster, or ``None`` when none is loaded.
    :param on_change: called after every position change, typically a
        re-render.
    """

    def __init__(
        self,
        transform: TransformModel,
        component_size: Callable[[], Optional[tuple[int, int]]],
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._transform = transform
        self._component_size = component_size
        self._on_change = on_change
        self._session: Optional[DragSession] = None
        self.bounds = Rect()
        self.cursor = Cursor.MOVE

    @property
    def state(self) -> DragState:
        return DragState.IDLE if self._session is None else DragState.DRAGGING

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    def handle(self, event: Union[PointerEvent, tuple]) -> bool:
        """
        Feed one pointer event.

        :param event: :py:class:`PointerEvent` or ``(kind, x, y)`` tuple.
        :return: `True` if the transform was changed.
        """
        if not isinstance(event, PointerEvent):
            event = PointerEvent(*event)

        if self._session is None:
            if event.kind == PointerEventKind.DOWN:
                self._begin(event)
            return False

        if event.kind == PointerEventKind.MOVE:
            return self._move(self._session, event)
        if event.kind in (PointerEventKind.UP, PointerEventKind.LEAVE):
            self.cancel()
        return False

    def cancel(self) -> None:
        """End the current drag session, if any."""
        if self._session is not None:
            logger.debug("Drag ended at %r", self._transform.position)
        self._session = None
        self.cursor = Cursor.MOVE

    def hit_test(self, x: float, y: float) -> bool:
        """Whether the surface-space point lies on the component footprint."""
        size = self._component_size()
        if size is None:
            return False
        return self._transform.footprint(*size).contains(x, y)

    def _begin(self, event: PointerEvent) -> None:
        size = self._component_size()
        if size is None:
            logger.debug("No component to drag")
            return
        x, y = self.bounds.to_local(event.x, event.y)
        footprint = self._transform.footprint(*size)
        if not footprint.contains(x, y):
            return
        self._session = DragSession(x - footprint.left, y - footprint.top)
        self.cursor = Cursor.GRABBING
        logger.debug("Drag started with %r", self._session)

    def _move(self, session: DragSession, event: PointerEvent) -> bool:
        x, y = self.bounds.to_local(event.x, event.y)
        self._transform.position = (
            x - session.grab_x,
            y - session.grab_y,
        )
        if self._on_change is not None:
            self._on_change()
        return True
