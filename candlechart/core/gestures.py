from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from .models import PointerState

DOUBLE_TAP_TIMEOUT_MS = 300
DOUBLE_TAP_SLOP = 100.0
TAP_SLOP = 16.0


class PointerAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerEvent:
    action: PointerAction
    x: float
    y: float
    timestamp_ms: int = 0
    pressed: bool = False


@dataclass(frozen=True)
class DragTo:
    x: float
    y: float


@dataclass(frozen=True)
class DoubleTap:
    x: float
    y: float


Gesture = Union[DragTo, DoubleTap]


class GestureClassifier:
    """
    Turns raw pointer events into drag and double-tap gestures.

    A double tap is a DOWN that follows an UP within `timeout_ms`, landing within
    `slop` pixels of the previous DOWN. A press that moved more than `tap_slop`
    is a drag and never counts as the first tap.
    """

    def __init__(
        self,
        timeout_ms: int = DOUBLE_TAP_TIMEOUT_MS,
        slop: float = DOUBLE_TAP_SLOP,
        tap_slop: float = TAP_SLOP,
    ) -> None:
        self.timeout_ms = timeout_ms
        self.slop = slop
        self.tap_slop = tap_slop
        self._last_down: Optional[PointerEvent] = None
        self._last_up_ms: Optional[int] = None
        self._pressed = False

    def reset(self) -> None:
        self._last_down = None
        self._last_up_ms = None
        self._pressed = False

    def feed(self, event: PointerEvent) -> List[Gesture]:
        out: List[Gesture] = []
        if event.action is PointerAction.DOWN:
            if self._is_second_tap(event):
                out.append(DoubleTap(event.x, event.y))
                # A third tap starts a fresh sequence.
                self._last_down = None
            else:
                self._last_down = event
            self._last_up_ms = None
            self._pressed = True
        elif event.action is PointerAction.MOVE:
            if self._pressed or event.pressed:
                out.append(DragTo(event.x, event.y))
                first = self._last_down
                if first is not None and math.hypot(event.x - first.x, event.y - first.y) > self.tap_slop:
                    self._last_down = None
        elif event.action is PointerAction.UP:
            self._pressed = False
            if self._last_down is not None:
                self._last_up_ms = event.timestamp_ms
        elif event.action is PointerAction.CANCEL:
            self.reset()
        return out

    def _is_second_tap(self, event: PointerEvent) -> bool:
        first = self._last_down
        if first is None or self._last_up_ms is None:
            return False
        if event.timestamp_ms - self._last_up_ms > self.timeout_ms:
            return False
        return math.hypot(event.x - first.x, event.y - first.y) <= self.slop


class ChartInput:
    """
    Pointer and zoom state owned by a chart view.

    `handle` returns True when the event is fully consumed. Drags return False so
    the classifier still sees the sequence for double-tap detection.
    """

    def __init__(
        self,
        request_redraw: Optional[Callable[[], None]] = None,
        classifier: Optional[GestureClassifier] = None,
    ) -> None:
        self.pointer: Optional[PointerState] = None
        self.is_zoomed = False
        self._request_redraw = request_redraw
        self.classifier = classifier or GestureClassifier()

    def handle(self, event: PointerEvent) -> bool:
        consumed = False
        for gesture in self.classifier.feed(event):
            if isinstance(gesture, DoubleTap):
                self.on_double_tap()
                consumed = True
            elif isinstance(gesture, DragTo):
                self.on_drag(gesture.x, gesture.y)
                return False
        if consumed:
            return True
        return event.action is PointerAction.DOWN

    def on_drag(self, x: float, y: float) -> None:
        if self.pointer is None:
            self.pointer = PointerState(x, y)
        else:
            self.pointer.last_touch_x = x
            self.pointer.last_touch_y = y
        self._redraw()

    def on_double_tap(self) -> None:
        self.is_zoomed = not self.is_zoomed
        self._redraw()

    def _redraw(self) -> None:
        if self._request_redraw is not None:
            self._request_redraw()
