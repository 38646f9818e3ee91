"""Главное окно приложения."""
from __future__ import annotations

import sys
from pathlib import Path

from PyQt5 import QtCore, QtGui, QtWidgets
import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter

from sdft import SlidingDFT, SpectrumProcessor, ToneSource
from gui.widgets.spectrum_plot import SpectrumPlot
from utils import config
from utils import logging as dlogging


class MainWindow(QtWidgets.QMainWindow):  # pragma: no cover - GUI
    """Живой спектр тестового тона, посчитанный скользящим ДПФ."""

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Скользящее ДПФ")
        self.cfg = config.load_config()

        self.plot = SpectrumPlot()
        self.setCentralWidget(self.plot)
        self.plot.set_levels(self.cfg["level_min"], self.cfg["level_max"])

        # настройки тона
        self.settings_dock = QtWidgets.QDockWidget("Сигнал", self)
        form = QtWidgets.QFormLayout()
        w = QtWidgets.QWidget()
        w.setLayout(form)
        self.tone_spin = QtWidgets.QDoubleSpinBox()
        self.tone_spin.setRange(0, self.cfg["sample_rate"] / 2)
        self.tone_spin.setValue(self.cfg["tone_hz"])
        self.tone_spin.valueChanged.connect(self._set_tone)
        self.noise_spin = QtWidgets.QDoubleSpinBox()
        self.noise_spin.setRange(0, 10)
        self.noise_spin.setSingleStep(0.01)
        self.noise_spin.setValue(self.cfg["noise"])
        self.noise_spin.valueChanged.connect(self._set_noise)
        form.addRow("Тон, Гц", self.tone_spin)
        form.addRow("Шум", self.noise_spin)
        self.settings_dock.setWidget(w)
        self.addDockWidget(QtCore.Qt.RightDockWidgetArea, self.settings_dock)

        self.toolbar = self.addToolBar("Главная")
        style = self.style()
        self.start_action = self.toolbar.addAction(
            style.standardIcon(QtWidgets.QStyle.SP_MediaPlay), "Старт", self.start
        )
        self.stop_action = self.toolbar.addAction(
            style.standardIcon(QtWidgets.QStyle.SP_MediaStop), "Стоп", self.stop
        )
        self.reset_action = self.toolbar.addAction(
            style.standardIcon(QtWidgets.QStyle.SP_BrowserReload), "Сброс", self.plot.reset_view
        )
        self.stop_action.setEnabled(False)

        file_menu = self.menuBar().addMenu("Файл")
        file_menu.addAction("Экспорт спектра", self.export_spectrum)
        file_menu.addAction("Сохранить CSV", self.save_csv)

        self.status = self.statusBar()
        self.status.showMessage("Готов")

        self.source = ToneSource(
            self.cfg["sample_rate"], self.cfg["tone_hz"], self.cfg["amplitude"], self.cfg["noise"]
        )
        self.engine: SlidingDFT | None = None
        self.processor = SpectrumProcessor(self.cfg["sample_rate"], self.cfg["avg_window"])
        self.timer = QtCore.QTimer(self)
        self.timer.timeout.connect(self._tick)

    def start(self) -> None:
        """Создать новый движок и начать подачу сэмплов."""
        self.engine = SlidingDFT(int(self.cfg["size"]), config.resolve_dtype(self.cfg["dtype"]))
        self.processor.reset()
        interval = 1000 * self.cfg["block_size"] / self.cfg["sample_rate"]
        self.timer.start(max(1, int(interval)))
        self.start_action.setEnabled(False)
        self.stop_action.setEnabled(True)
        self.status.showMessage("Прогрев...")

    def stop(self) -> None:
        self.timer.stop()
        self.start_action.setEnabled(True)
        self.stop_action.setEnabled(False)
        self.status.showMessage("Остановлено")

    def _tick(self) -> None:
        spectrum = self.engine.update_many(self.source.read_samples(int(self.cfg["block_size"])))
        if spectrum is None:
            return
        freqs, power = self.processor.process(spectrum)
        self.plot.update_spectrum(freqs, power)
        self.status.showMessage(f"Бинов: {self.engine.size} | Тон: {self.source.freq:.1f} Гц")

    def _set_tone(self, value: float) -> None:
        self.source.freq = value
        self.cfg["tone_hz"] = value
        config.save_config(self.cfg)

    def _set_noise(self, value: float) -> None:
        self.source.noise = value
        self.cfg["noise"] = value
        config.save_config(self.cfg)

    def export_spectrum(self) -> None:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Экспорт спектра", filter="Файлы PNG (*.png)")
        if path:
            exporter = ImageExporter(self.plot.plot.plotItem)
            exporter.export(path)

    def save_csv(self) -> None:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Сохранить CSV", filter="Файлы CSV (*.csv)")
        if path and getattr(self.plot.curve, "xData", None) is not None:
            dlogging.save_csv(Path(path), self.plot.curve.xData, self.plot.curve.yData)


def run() -> None:  # pragma: no cover - GUI
    app = QtWidgets.QApplication(sys.argv)
    app.setStyle("Fusion")
    palette = QtGui.QPalette()
    palette.setColor(QtGui.QPalette.Window, QtGui.QColor("#232629"))
    palette.setColor(QtGui.QPalette.WindowText, QtCore.Qt.white)
    palette.setColor(QtGui.QPalette.Base, QtGui.QColor("#1e1e1e"))
    palette.setColor(QtGui.QPalette.Text, QtCore.Qt.white)
    palette.setColor(QtGui.QPalette.Button, QtGui.QColor("#2b2b2b"))
    palette.setColor(QtGui.QPalette.ButtonText, QtCore.Qt.white)
    app.setPalette(palette)
    pg.setConfigOptions(background="#1e1e1e", foreground="w", antialias=True)
    win = MainWindow()
    win.show()
    sys.exit(app.exec_())


if __name__ == "__main__":  # pragma: no cover
    run()
