from __future__ import annotations

from typing import Dict, Tuple

import pyqtgraph as pg
from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QFont, QFontMetricsF, QPainter

from ...core.style import Color


class QPainterCanvas:
    """Canvas backed by an active QPainter. Pens and brushes are cached per color/width."""

    def __init__(self, painter: QPainter) -> None:
        self.painter = painter
        self.painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self._pen_cache: Dict[Tuple, pg.QtGui.QPen] = {}
        self._brush_cache: Dict[Tuple, pg.QtGui.QBrush] = {}
        self._font_cache: Dict[float, QFont] = {}

    def _color_key(self, color: Color) -> Tuple:
        try:
            return pg.mkColor(color).getRgb()
        except Exception:
            return (str(color),)

    def _get_pen(self, color: Color, width: float) -> pg.QtGui.QPen:
        key = (self._color_key(color), float(width))
        pen = self._pen_cache.get(key)
        if pen is None:
            pen = pg.mkPen(pg.mkColor(color), width=width)
            self._pen_cache[key] = pen
        return pen

    def _get_brush(self, color: Color) -> pg.QtGui.QBrush:
        key = self._color_key(color)
        brush = self._brush_cache.get(key)
        if brush is None:
            brush = pg.mkBrush(pg.mkColor(color))
            self._brush_cache[key] = brush
        return brush

    def _get_font(self, size: float) -> QFont:
        font = self._font_cache.get(size)
        if font is None:
            font = QFont()
            # Text sizes are given in pixels, like the rest of the geometry.
            font.setPixelSize(max(1, int(round(size))))
            self._font_cache[size] = font
        return font

    def save(self) -> None:
        self.painter.save()

    def restore(self) -> None:
        self.painter.restore()

    def translate(self, dx: float, dy: float) -> None:
        self.painter.translate(dx, dy)

    def draw_line(self, x1, y1, x2, y2, color, width) -> None:
        self.painter.setPen(self._get_pen(color, width))
        self.painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

    def draw_rect(self, left, top, right, bottom, color, width=0.0, fill=True) -> None:
        rect = QRectF(QPointF(left, top), QPointF(right, bottom)).normalized()
        if fill:
            self.painter.setPen(Qt.PenStyle.NoPen)
            self.painter.setBrush(self._get_brush(color))
        else:
            self.painter.setPen(self._get_pen(color, width))
            self.painter.setBrush(Qt.BrushStyle.NoBrush)
        self.painter.drawRect(rect)

    def draw_text(self, x, y, text, color, size) -> None:
        # Text is centered horizontally on x with its baseline at y.
        font = self._get_font(size)
        metrics = QFontMetricsF(font)
        self.painter.setFont(font)
        self.painter.setPen(pg.mkColor(color))
        self.painter.drawText(QPointF(x - metrics.horizontalAdvance(text) / 2.0, y), text)
