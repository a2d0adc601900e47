from datetime import date
from typing import List, Optional

from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QFileDialog, QMainWindow
from PyQt6.QtGui import QAction

from ..core.models import Candle
from ..core.style import ChartStyle
from .chart_view import CandlestickChartView


def sample_candles() -> List[Candle]:
    return [
        Candle(date(2021, 6, 10), 100.0, 150.0, 188.0, 100.0),
        Candle(date(2021, 6, 23), 100.0, 50.0, 200.0, 30.0),
        Candle(date(2021, 3, 5), 200.0, 5.0, 10.0, 0.0),
        Candle(date(2021, 8, 23), 133.0, 10.0, 220.0, 5.0),
    ]


def load_chart_style(settings: QSettings) -> ChartStyle:
    settings.beginGroup('chart')
    try:
        values = {key: settings.value(key) for key in settings.childKeys()}
    finally:
        settings.endGroup()
    return ChartStyle.from_settings(values)


class MainWindow(QMainWindow):
    def __init__(self, settings: Optional[QSettings] = None) -> None:
        super().__init__()
        self.setWindowTitle('Candlestick Chart')
        self._settings = settings or QSettings('CandleChart', 'CandleChart')
        self.chart_view = CandlestickChartView(load_chart_style(self._settings))
        self.chart_view.set_candles(sample_candles())
        self.setCentralWidget(self.chart_view)
        self._setup_menu()
        self._restore_layout()

    def _setup_menu(self) -> None:
        file_menu = self.menuBar().addMenu('File')
        export_action = QAction('Export PNG...', self)
        export_action.triggered.connect(self._export_png)
        file_menu.addAction(export_action)
        file_menu.addSeparator()
        exit_action = QAction('Exit', self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    def _export_png(self) -> None:
        path, _ = QFileDialog.getSaveFileName(self, 'Export Chart', 'chart.png', 'PNG Files (*.png)')
        if path:
            self.chart_view.export_png(path)

    def _restore_layout(self) -> None:
        geometry = self._settings.value('window/geometry')
        if geometry is not None:
            self.restoreGeometry(geometry)
        else:
            self.resize(1000, 1000)
        zoomed = self._settings.value('chart_view/zoomed', False, type=bool)
        self.chart_view.is_zoomed = zoomed

    def _save_layout(self) -> None:
        self._settings.setValue('window/geometry', self.saveGeometry())
        self._settings.setValue('chart_view/zoomed', self.chart_view.is_zoomed)

    def closeEvent(self, event) -> None:
        self._save_layout()
        super().closeEvent(event)
