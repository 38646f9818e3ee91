"""Простой помощник по работе с конфигурацией в формате JSON."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "size": 256,
    "dtype": "float64",
    "sample_rate": 8000.0,
    "tone_hz": 1000.0,
    "amplitude": 1.0,
    "noise": 0.01,
    "block_size": 64,
    "avg_window": 4,
    "peak_height_db": 0.0,
    "level_min": -80.0,
    "level_max": 60.0,
}

CONFIG_FILE = Path("config.json")


def load_config(path: Path = CONFIG_FILE) -> Dict[str, Any]:
    """Загрузить конфигурацию из JSON-файла.

    Отсутствующие ключи дополняются значениями по умолчанию,
    чтобы избежать ошибок доступа по ключу. Повреждённый файл
    игнорируется с предупреждением в лог.
    """
    cfg = DEFAULT_CONFIG.copy()
    path = Path(path)
    if path.exists():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
            cfg.update(loaded)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring malformed config %s: %s", path, exc)
    return cfg


def save_config(cfg: Dict[str, Any], path: Path = CONFIG_FILE) -> None:
    """Сохранить конфигурацию в JSON-файл."""
    Path(path).write_text(json.dumps(cfg, indent=2, ensure_ascii=False), encoding="utf-8")


def resolve_dtype(name: str) -> np.dtype:
    """Преобразовать имя типа из конфигурации в вещественный dtype numpy."""
    try:
        dtype = np.dtype(name)
    except TypeError:
        raise ValueError(f"Unknown dtype: {name!r}") from None
    if not np.issubdtype(dtype, np.floating):
        raise ValueError(f"dtype must be a floating type, got {name!r}")
    return dtype
