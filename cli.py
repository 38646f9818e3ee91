"""Точки входа командной строки."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import sdft
from sdft import SlidingDFT, SpectrumProcessor, ToneSource, WavSource, find_peak_bins, stream_spectra
from utils import config
from utils import logging as dlogging


def sdft_gui() -> None:
    """Запустить графический интерфейс."""
    from gui.main_window import run

    run()


def sdft_info() -> None:
    """Вывести информацию о программе."""
    print(f"Скользящее ДПФ v{sdft.__version__} — анализатор спектра потокового сигнала")


def sdft_stream(argv: Optional[List[str]] = None) -> None:
    """Прогнать сигнал через скользящее ДПФ и вывести пики в консоль."""
    parser = argparse.ArgumentParser(description="Sliding DFT spectrum stream")
    parser.add_argument("--config", type=Path, default=config.CONFIG_FILE,
                        help="путь к JSON-файлу настроек")
    parser.add_argument("--wav", type=Path, default=None,
                        help="WAV-файл вместо тестового тона")
    parser.add_argument("--blocks", type=int, default=16,
                        help="сколько блоков обработать")
    parser.add_argument("--csv", type=Path, default=None,
                        help="сохранить последний спектр в CSV")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    dlogging.setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    cfg = config.load_config(args.config)

    if args.wav is not None:
        source = WavSource(args.wav)
    else:
        source = ToneSource(cfg["sample_rate"], cfg["tone_hz"], cfg["amplitude"], cfg["noise"])

    engine = SlidingDFT(int(cfg["size"]), config.resolve_dtype(cfg["dtype"]))
    processor = SpectrumProcessor(source.sample_rate, int(cfg["avg_window"]))

    last = None
    for seen, spectrum in stream_spectra(engine, source, int(cfg["block_size"]), args.blocks):
        freqs, power = processor.process(spectrum)
        peaks = find_peak_bins(spectrum, height_db=cfg["peak_height_db"])
        listed = ", ".join(f"{freqs[k]:.1f} Гц ({power[k]:.1f} дБ)" for k in peaks)
        print(f"{seen}: {listed or 'пиков нет'}")
        last = freqs, power

    if last is None:
        print("Недостаточно сэмплов для прогрева")
        return
    if args.csv is not None:
        dlogging.save_csv(args.csv, *last)
