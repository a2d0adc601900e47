from typing import Iterable, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QApplication, QSizePolicy, QWidget

from ..core.chart_state import ChartState
from ..core.gestures import ChartInput, GestureClassifier, PointerAction, PointerEvent
from ..core.models import Candle
from ..core.style import ChartStyle
from .charts.qt_canvas import QPainterCanvas
from .charts.renderer import CandlestickRenderer


class CandlestickChartView(QWidget):
    def __init__(self, style: Optional[ChartStyle] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName('CandlestickChartView')
        self.chart_style = style or ChartStyle()
        self.state = ChartState()
        self.renderer = CandlestickRenderer(self.chart_style)
        classifier = GestureClassifier(timeout_ms=QApplication.styleHints().mouseDoubleClickInterval())
        self.input = ChartInput(request_redraw=self.update, classifier=classifier)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(200, 150)
        # Moves only arrive while a button is held; that is the drag.
        self.setMouseTracking(False)
        self.setCursor(Qt.CursorShape.CrossCursor)

    @property
    def is_zoomed(self) -> bool:
        return self.input.is_zoomed

    @is_zoomed.setter
    def is_zoomed(self, value: bool) -> None:
        self.input.is_zoomed = bool(value)
        self.update()

    def set_candles(self, candles: Iterable[Candle]) -> None:
        self.state.set_candles(candles)
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), self.palette().base())
            canvas = QPainterCanvas(painter)
            self.renderer.draw(
                canvas,
                self.state,
                self.width(),
                self.height(),
                pointer=self.input.pointer,
                zoomed=self.input.is_zoomed,
            )
        finally:
            painter.end()

    def _pointer_event(self, action: PointerAction, event) -> PointerEvent:
        pos = event.position()
        return PointerEvent(
            action=action,
            x=float(pos.x()),
            y=float(pos.y()),
            timestamp_ms=int(event.timestamp()),
            pressed=event.buttons() != Qt.MouseButton.NoButton,
        )

    def mousePressEvent(self, event) -> None:
        if self.input.handle(self._pointer_event(PointerAction.DOWN, event)):
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event) -> None:
        # Qt replaces the second press with a double-click; the classifier decides on its own.
        if self.input.handle(self._pointer_event(PointerAction.DOWN, event)):
            event.accept()
            return
        super().mouseDoubleClickEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if not self.input.handle(self._pointer_event(PointerAction.MOVE, event)):
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        self.input.handle(self._pointer_event(PointerAction.UP, event))
        super().mouseReleaseEvent(event)

    def export_png(self, path: str) -> bool:
        pixmap = self.grab()
        return pixmap.save(path, 'PNG')
