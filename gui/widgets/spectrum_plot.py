"""Виджет графика спектра скользящего ДПФ на основе pyqtgraph."""
from __future__ import annotations

import numpy as np
import pyqtgraph as pg
from PyQt5 import QtWidgets
from scipy.signal import find_peaks


class SpectrumPlot(QtWidgets.QWidget):
    """Виджет с текущим спектром, огибающей пиков и минимальным уровнем."""

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QtWidgets.QVBoxLayout(self)
        self.plot = pg.PlotWidget()
        layout.addWidget(self.plot)
        self.curve = self.plot.plot(pen=pg.mkPen("y"))
        self.peak_curve = self.plot.plot(pen=pg.mkPen("r", width=2))
        self.baseline_curve = self.plot.plot(pen=pg.mkPen("g"))
        self.v_line = pg.InfiniteLine(angle=90, movable=False, pen=pg.mkPen("#aaa"))
        self.h_line = pg.InfiniteLine(angle=0, movable=False, pen=pg.mkPen("#aaa"))
        self.plot.addItem(self.v_line, ignoreBounds=True)
        self.plot.addItem(self.h_line, ignoreBounds=True)
        self.label = pg.TextItem(color="w")
        self.plot.addItem(self.label)
        self.plot.scene().sigMouseMoved.connect(self._mouse_moved)
        self.plot.setLabel("left", "Мощность", units="дБ")
        self.plot.setLabel("bottom", "Частота", units="Гц")
        self._baseline: np.ndarray | None = None

    def update_spectrum(self, freqs: np.ndarray, power: np.ndarray) -> None:
        """Отрисовать новый спектр в дБ.

        Красная кривая проходит через локальные максимумы, зелёная
        хранит минимальный уровень по всем кадрам.
        """
        self.curve.setData(freqs, power)

        peaks, _ = find_peaks(power)
        if peaks.size > 1:
            envelope = np.interp(np.arange(len(power)), peaks, power[peaks])
            self.peak_curve.setData(freqs, envelope)
        else:
            self.peak_curve.setData(freqs[peaks], power[peaks])

        if self._baseline is None or self._baseline.shape != power.shape:
            self._baseline = power.copy()
        else:
            self._baseline = np.minimum(self._baseline, power)
        self.baseline_curve.setData(freqs, self._baseline)

    def _mouse_moved(self, pos) -> None:  # pragma: no cover - UI callback
        if not self.plot.sceneBoundingRect().contains(pos):
            return
        mouse_point = self.plot.plotItem.vb.mapSceneToView(pos)
        x = mouse_point.x()
        y = mouse_point.y()
        self.v_line.setPos(x)
        self.h_line.setPos(y)
        self.label.setText(f"{x:.1f} Гц\n{y:.1f} дБ")
        self.label.setPos(x, y)

    def set_levels(self, vmin: float, vmax: float) -> None:
        """Установить диапазон уровней по оси Y."""
        self.plot.setYRange(vmin, vmax, padding=0)

    def reset_view(self) -> None:
        """Очистить график и сбросить масштаб."""
        self.plot.enableAutoRange(True, True)
        self.curve.clear()
        self.peak_curve.clear()
        self.baseline_curve.clear()
        self._baseline = None
