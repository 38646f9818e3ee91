"""Data and diagnostic logging utilities."""
from __future__ import annotations

import datetime as _dt
import logging
import sys
import numpy as np
from pathlib import Path
from typing import Iterable, Optional

try:
    import h5py  # type: ignore
except Exception:  # pragma: no cover
    h5py = None

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> logging.Logger:
    """Настроить корневой логгер: консоль и, при необходимости, файл."""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def save_csv(path: Path, freqs: np.ndarray, power: np.ndarray) -> None:
    """Save spectrum as a single CSV line.

    ``date, time, hz_low, hz_high, hz_bin_width, num_bins, dB...``
    """
    now = _dt.datetime.now()
    date_str = now.strftime("%Y-%m-%d")
    time_str = now.strftime("%H:%M:%S.%f")
    hz_low = float(freqs[0]) if len(freqs) else 0.0
    hz_high = float(freqs[-1]) if len(freqs) else 0.0
    bin_width = float(freqs[1] - freqs[0]) if len(freqs) > 1 else 0.0
    header = f"{date_str}, {time_str}, {hz_low:.0f}, {hz_high:.0f}, {bin_width:.0f}, {len(freqs)}"
    power_str = ", ".join(f"{p:.2f}" for p in power)
    with open(path, "w", encoding="utf-8") as f:
        f.write(header)
        if power_str:
            f.write(", " + power_str)
        f.write("\n")


def save_hdf5(path: Path, spectra: Iterable[np.ndarray]) -> None:
    """Save a sequence of complex spectra to an HDF5 file."""
    if h5py is None:  # pragma: no cover
        raise RuntimeError("h5py not installed")
    with h5py.File(path, "w") as h5:
        for i, spec in enumerate(spectra):
            h5.create_dataset(f"spec_{i}", data=np.asarray(spec))
