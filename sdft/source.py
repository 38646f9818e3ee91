"""Источники сэмплов для скользящего ДПФ."""
from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional, Tuple

import numpy as np
from scipy.io import wavfile

from .engine import SlidingDFT


class SampleSource:
    """Базовый источник вещественных сэмплов."""

    sample_rate: float

    def read_samples(self, num_samples: int) -> np.ndarray:
        """Считать до ``num_samples`` следующих сэмплов."""
        raise NotImplementedError


class ToneSource(SampleSource):
    """Синусоида с непрерывной фазой и необязательным белым шумом.

    Используется для тестов и демонстрации вместо реального входа.
    """

    def __init__(
        self,
        sample_rate: float,
        freq: float,
        amplitude: float = 1.0,
        noise: float = 0.0,
        seed: Optional[int] = None,
    ) -> None:
        self.sample_rate = sample_rate
        self.freq = freq
        self.amplitude = amplitude
        self.noise = noise
        self._rng = np.random.default_rng(seed)
        self._n = 0

    def read_samples(self, num_samples: int) -> np.ndarray:
        t = (self._n + np.arange(num_samples)) / self.sample_rate
        self._n += num_samples
        signal = self.amplitude * np.sin(2 * np.pi * self.freq * t)
        if self.noise:
            signal = signal + self._rng.standard_normal(num_samples) * self.noise
        return signal


class WavSource(SampleSource):
    """Последовательное чтение WAV-файла блоками.

    Многоканальный звук сводится в моно, целочисленный PCM нормируется
    в диапазон [-1, 1). В конце файла возвращается неполный блок, после
    него пустой массив.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        rate, data = wavfile.read(self.path)
        self.sample_rate = float(rate)
        self._data = self._normalize(data)
        self._pos = 0

    @staticmethod
    def _normalize(data: np.ndarray) -> np.ndarray:
        if data.dtype == np.uint8:
            out = (data.astype(np.float64) - 128) / 128.0
        elif np.issubdtype(data.dtype, np.integer):
            out = data.astype(np.float64) / float(-np.iinfo(data.dtype).min)
        else:
            out = data.astype(np.float64)
        if out.ndim > 1:
            out = out.mean(axis=1)
        return out

    def __len__(self) -> int:
        return len(self._data)

    def read_samples(self, num_samples: int) -> np.ndarray:
        block = self._data[self._pos : self._pos + num_samples]
        self._pos += len(block)
        return block


def stream_spectra(
    engine: SlidingDFT, source: SampleSource, block_size: int, blocks: Optional[int] = None
) -> Iterator[Tuple[int, np.ndarray]]:
    """Прогонять блоки источника через движок и выдавать готовые спектры.

    После каждого блока, если прогрев закончен, выдаётся пара
    (число обработанных сэмплов, копия спектра). Генератор завершается
    после ``blocks`` блоков или когда источник вернул пустой блок.
    """
    seen = 0
    count = 0
    while blocks is None or count < blocks:
        samples = source.read_samples(block_size)
        if len(samples) == 0:
            return
        spectrum = engine.update_many(samples)
        seen += len(samples)
        count += 1
        if spectrum is not None:
            yield seen, spectrum.copy()
