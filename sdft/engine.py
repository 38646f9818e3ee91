"""Скользящее ДПФ с затуханием и сглаживанием окном Ханна."""
from __future__ import annotations

import logging
import math
import numbers
from typing import Iterable, Optional

import numpy as np

logger = logging.getLogger(__name__)


class SlidingDFT:
    """Рекурсивное (скользящее) ДПФ потока вещественных сэмплов.

    После каждого нового сэмпла все ``size`` бинов обновляются за O(N)
    без пересчёта полного преобразования. Выход сглаживается трёхточечной
    свёрткой по оси бинов, что эквивалентно окну Ханна во временной
    области.

    Пока не накоплено ``size`` сэмплов, выход не отдаётся: :meth:`update`
    и :meth:`output` возвращают ``None``. Это отличается от спектра из
    одних нулей, который вполне возможен после прогрева.

    Атрибуты:
        size: количество бинов и длина кольцевого буфера.
        dtype: вещественный тип numpy, в котором ведутся вычисления.

    Объект не потокобезопасен, вызовы должны идти в порядке поступления
    сэмплов.
    """

    def __init__(self, size: int, dtype: np.dtype | type = np.float64) -> None:
        if isinstance(size, bool) or not isinstance(size, numbers.Integral):
            raise TypeError(f"size must be an integer, got {type(size).__name__}")
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        dtype = np.dtype(dtype)
        if not np.issubdtype(dtype, np.floating):
            raise TypeError(f"dtype must be a real floating type, got {dtype}")

        self._size = int(size)
        self._dtype = dtype
        self._cdtype = np.result_type(dtype, np.complex64)
        real = dtype.type

        # r чуть меньше единицы гасит накопленную ошибку округления
        self._r = real(1) - np.finfo(dtype).eps
        self._r_pow_n = real(self._r ** self._size)
        self._half = real(0.5)
        self._fourth = real(0.25)

        tau = real(math.radians(360))
        angle = tau * np.arange(self._size, dtype=dtype) / real(self._size)
        twiddle = np.empty(self._size, dtype=self._cdtype)
        twiddle.real = np.cos(angle)
        twiddle.imag = np.sin(angle)
        twiddle.flags.writeable = False
        self._twiddle = twiddle

        self._samples = np.zeros(self._size, dtype=dtype)
        self._raw = np.zeros(self._size, dtype=self._cdtype)
        self._output = np.zeros(self._size, dtype=self._cdtype)
        self._scratch = np.zeros(self._size, dtype=self._cdtype)

        bins = np.arange(self._size)
        self._prev_bin = (bins - 1) % self._size
        self._next_bin = (bins + 1) % self._size

        self._view = self._output.view()
        self._view.flags.writeable = False

        self._i = 0
        self._valid = False
        logger.debug("SlidingDFT created: size=%d dtype=%s", self._size, dtype)

    @property
    def size(self) -> int:
        return self._size

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def complex_dtype(self) -> np.dtype:
        return self._cdtype

    @property
    def index(self) -> int:
        """Позиция следующей перезаписи (там лежит самый старый сэмпл)."""
        return self._i

    @property
    def is_valid(self) -> bool:
        return self._valid

    @property
    def damping(self) -> np.floating:
        return self._r

    @property
    def twiddle(self) -> np.ndarray:
        """Таблица поворотных множителей ``exp(i*2*pi*k/N)`` (только чтение)."""
        return self._twiddle

    def output(self) -> Optional[np.ndarray]:
        """Вернуть сглаженный спектр или ``None``, если прогрев не закончен.

        Возвращается представление внутреннего буфера только для чтения,
        оно меняется при следующем :meth:`update`. Для сохранения снимка
        используйте ``.copy()``.
        """
        if not self._valid:
            return None
        return self._view

    def update(self, sample: float) -> Optional[np.ndarray]:
        """Добавить сэмпл и вернуть текущий спектр (см. :meth:`output`)."""
        x = self._dtype.type(sample)
        prev = self._samples[self._i]
        self._samples[self._i] = x

        raw = self._raw
        raw *= self._r
        raw -= self._r_pow_n * prev
        raw += x
        raw *= self._twiddle

        # Hanning window
        out = self._output
        np.take(raw, self._prev_bin, out=out)
        np.take(raw, self._next_bin, out=self._scratch)
        out += self._scratch
        out *= -self._fourth
        np.multiply(raw, self._half, out=self._scratch)
        out += self._scratch

        self._i += 1
        if self._i >= self._size:
            self._i = 0
            if not self._valid:
                self._valid = True
                logger.debug("SlidingDFT warmed up after %d samples", self._size)

        return self.output()

    def update_many(self, samples: Iterable[float]) -> Optional[np.ndarray]:
        """Пропустить последовательность сэмплов по порядку через :meth:`update`."""
        for sample in samples:
            self.update(sample)
        return self.output()
