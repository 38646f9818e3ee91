"""Скользящее ДПФ для анализа спектра потокового сигнала в реальном времени."""

from .engine import SlidingDFT
from .analysis import SpectrumProcessor, bin_frequencies, find_peak_bins, power_db
from .source import SampleSource, ToneSource, WavSource, stream_spectra

__all__ = [
    "SlidingDFT",
    "SpectrumProcessor",
    "bin_frequencies",
    "find_peak_bins",
    "power_db",
    "SampleSource",
    "ToneSource",
    "WavSource",
    "stream_spectra",
]

__version__ = "0.1"
