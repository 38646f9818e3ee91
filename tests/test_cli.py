import json
import logging

import numpy as np
from scipy.io import wavfile

import cli


def _restore_root_logger():
    root = logging.getLogger()
    return root.handlers[:], root.level


def test_sdft_info(capsys):
    cli.sdft_info()
    assert "v0.1" in capsys.readouterr().out


def test_sdft_stream_tone(tmp_path, capsys):
    saved = _restore_root_logger()
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({
        "size": 64, "sample_rate": 6400.0, "tone_hz": 800.0,
        "noise": 0.0, "block_size": 32, "avg_window": 1,
    }))
    csv_path = tmp_path / "last.csv"
    try:
        cli.sdft_stream(["--config", str(cfg_path), "--blocks", "4", "--csv", str(csv_path)])
    finally:
        logging.getLogger().handlers, level = saved
        logging.getLogger().setLevel(level)
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("64:")
    assert all("800.0" in line for line in lines)
    assert csv_path.exists()


def test_sdft_stream_wav_too_short(tmp_path, capsys):
    saved = _restore_root_logger()
    wav = tmp_path / "short.wav"
    wavfile.write(wav, 8000, np.zeros(10, dtype=np.int16))
    try:
        cli.sdft_stream(["--config", str(tmp_path / "missing.json"), "--wav", str(wav)])
    finally:
        logging.getLogger().handlers, level = saved
        logging.getLogger().setLevel(level)
    assert "Недостаточно" in capsys.readouterr().out
