"""Постобработка спектров скользящего ДПФ."""
from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Tuple

import numpy as np
from scipy.signal import find_peaks


def power_db(spectrum: np.ndarray) -> np.ndarray:
    """Перевести комплексный спектр в мощность в дБ."""
    return 20 * np.log10(np.abs(spectrum) + 1e-12)


def bin_frequencies(size: int, sample_rate: float) -> np.ndarray:
    """Частоты бинов ``k * sample_rate / size`` для k = 0..size-1."""
    return np.arange(size) * (sample_rate / size)


def find_peak_bins(
    spectrum: np.ndarray, height_db: Optional[float] = None, distance: int = 1
) -> np.ndarray:
    """Найти номера бинов с локальными максимумами мощности.

    Для вещественного сигнала спектр симметричен, поэтому поиск ведётся
    только по бинам ``0..N//2``. Крайние бины тоже могут быть пиками:
    массив дополняется значением ``-inf`` с обеих сторон.

    Args:
        spectrum: комплексный спектр длины N.
        height_db: минимальный уровень пика в дБ.
        distance: минимальное расстояние между пиками в бинах.

    Returns:
        Номера бинов, отсортированные по возрастанию.
    """
    half = power_db(spectrum[: len(spectrum) // 2 + 1])
    padded = np.concatenate(([-np.inf], half, [-np.inf]))
    peaks, _ = find_peaks(padded, height=height_db, distance=max(1, distance))
    return peaks - 1


class SpectrumProcessor:
    """Усреднение и удержание спектров, выдаваемых :class:`SlidingDFT`.

    Хранит внутреннее состояние для скользящего усреднения, режимов
    минимального/максимального удержания и персистентности. Метод
    :meth:`process` принимает комплексный спектр и возвращает частоты и
    мощность в дБ для неотрицательной половины бинов.

    Атрибуты:
        sample_rate: частота дискретизации входного сигнала в Гц.
        avg_window: размер окна для скользящего усреднения.
    """

    def __init__(self, sample_rate: float, avg_window: int = 1) -> None:
        self.sample_rate = sample_rate
        self.avg_window = max(1, avg_window)
        self._avg_buffer: Deque[np.ndarray] = deque(maxlen=self.avg_window)
        self._min_hold: Optional[np.ndarray] = None
        self._max_hold: Optional[np.ndarray] = None
        self._persistence: Optional[np.ndarray] = None

    def process(self, spectrum: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Вернуть частоты и усреднённую мощность в дБ.

        Args:
            spectrum: комплексный спектр длины N.

        Returns:
            Кортеж (частоты, мощности_дБ) длины ``N//2 + 1``.
        """
        size = len(spectrum)
        power = power_db(spectrum[: size // 2 + 1])
        freqs = bin_frequencies(size, self.sample_rate)[: size // 2 + 1]

        if self._avg_buffer and self._avg_buffer[-1].shape != power.shape:
            self.reset()

        # Average filter
        self._avg_buffer.append(power)
        avg_power = np.mean(np.vstack(self._avg_buffer), axis=0)

        # Min/Max hold
        self._min_hold = power if self._min_hold is None else np.minimum(self._min_hold, power)
        self._max_hold = power if self._max_hold is None else np.maximum(self._max_hold, power)

        # Persistence (decays old values)
        if self._persistence is None:
            self._persistence = power
        else:
            self._persistence = 0.9 * self._persistence + 0.1 * power

        return freqs, avg_power

    def current_min_max(self) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        """Вернуть массивы минимального и максимального удержания."""
        return self._min_hold, self._max_hold

    def current_persistence(self) -> Optional[np.ndarray]:
        """Вернуть массив персистентности."""
        return self._persistence

    def reset(self) -> None:
        """Сбросить накопленное состояние."""
        self._avg_buffer.clear()
        self._min_hold = None
        self._max_hold = None
        self._persistence = None
