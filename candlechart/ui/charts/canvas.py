from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from ...core.style import Color


class Canvas(Protocol):
    """Drawing surface the renderer talks to. Coordinates are in the current (translated) frame."""

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: Color, width: float) -> None: ...

    def draw_rect(
        self,
        left: float,
        top: float,
        right: float,
        bottom: float,
        color: Color,
        width: float = 0.0,
        fill: bool = True,
    ) -> None: ...

    def draw_text(self, x: float, y: float, text: str, color: Color, size: float) -> None: ...


@dataclass(frozen=True)
class Primitive:
    kind: str
    coords: Tuple[float, ...]
    color: Color
    width: float = 0.0
    fill: bool = False
    text: Optional[str] = None


class RecordingCanvas:
    """
    Canvas that records primitives in view coordinates.

    Used for headless checks of what a paint would draw; translations are folded
    into the recorded coordinates.
    """

    def __init__(self) -> None:
        self.primitives: List[Primitive] = []
        self._dx = 0.0
        self._dy = 0.0
        self._stack: List[Tuple[float, float]] = []

    def save(self) -> None:
        self._stack.append((self._dx, self._dy))

    def restore(self) -> None:
        self._dx, self._dy = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        self._dx += dx
        self._dy += dy

    def draw_line(self, x1, y1, x2, y2, color, width) -> None:
        coords = (x1 + self._dx, y1 + self._dy, x2 + self._dx, y2 + self._dy)
        self.primitives.append(Primitive('line', coords, color, width))

    def draw_rect(self, left, top, right, bottom, color, width=0.0, fill=True) -> None:
        coords = (left + self._dx, top + self._dy, right + self._dx, bottom + self._dy)
        self.primitives.append(Primitive('rect', coords, color, width, fill))

    def draw_text(self, x, y, text, color, size) -> None:
        self.primitives.append(Primitive('text', (x + self._dx, y + self._dy), color, size, text=text))

    def of_kind(self, kind: str) -> List[Primitive]:
        return [p for p in self.primitives if p.kind == kind]

    def clear(self) -> None:
        self.primitives = []
        self._dx = 0.0
        self._dy = 0.0
        self._stack = []
