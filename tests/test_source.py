import numpy as np
import pytest
from scipy.io import wavfile

from sdft import SampleSource, SlidingDFT, ToneSource, WavSource, find_peak_bins, stream_spectra


def test_base_source_not_implemented():
    with pytest.raises(NotImplementedError):
        SampleSource().read_samples(4)


def test_tone_source_phase_continuity():
    src = ToneSource(sample_rate=1000.0, freq=50.0)
    first = src.read_samples(30)
    second = src.read_samples(30)
    t = np.arange(60) / 1000.0
    np.testing.assert_allclose(np.concatenate([first, second]), np.sin(2 * np.pi * 50.0 * t), atol=1e-12)


def test_tone_source_noise_is_seeded():
    a = ToneSource(1000.0, 50.0, noise=0.1, seed=3).read_samples(16)
    b = ToneSource(1000.0, 50.0, noise=0.1, seed=3).read_samples(16)
    clean = ToneSource(1000.0, 50.0).read_samples(16)
    np.testing.assert_array_equal(a, b)
    assert not np.allclose(a, clean)


def test_wav_source_int16_stereo(tmp_path):
    path = tmp_path / "tone.wav"
    data = np.array([[16384, -16384], [32767, 32767], [-32768, -32768]], dtype=np.int16)
    wavfile.write(path, 8000, data)
    src = WavSource(path)
    assert src.sample_rate == 8000.0
    assert len(src) == 3
    block = src.read_samples(2)
    np.testing.assert_allclose(block, [0.0, 32767 / 32768])
    np.testing.assert_allclose(src.read_samples(2), [-1.0])
    assert src.read_samples(2).size == 0


def test_wav_source_uint8(tmp_path):
    path = tmp_path / "u8.wav"
    wavfile.write(path, 4000, np.array([128, 255, 0], dtype=np.uint8))
    np.testing.assert_allclose(WavSource(path).read_samples(3), [0.0, 127 / 128, -1.0])


def test_stream_spectra_waits_for_warm_up():
    engine = SlidingDFT(64)
    src = ToneSource(sample_rate=6400.0, freq=800.0)
    results = list(stream_spectra(engine, src, block_size=16, blocks=8))
    assert [seen for seen, _ in results] == [64, 80, 96, 112, 128]
    seen, spectrum = results[-1]
    assert list(find_peak_bins(spectrum, height_db=0.0)) == [8]


def test_stream_spectra_returns_copies():
    engine = SlidingDFT(8)
    src = ToneSource(sample_rate=80.0, freq=10.0)
    (_, a), (_, b) = list(stream_spectra(engine, src, block_size=8, blocks=2))
    assert not np.shares_memory(a, b)
    assert a.flags.writeable
    assert not np.shares_memory(a, engine.output())


def test_stream_spectra_stops_at_end_of_source(tmp_path):
    path = tmp_path / "short.wav"
    wavfile.write(path, 1000, np.zeros(20, dtype=np.float32))
    engine = SlidingDFT(8)
    results = list(stream_spectra(engine, WavSource(path), block_size=8))
    assert [seen for seen, _ in results] == [8, 16, 20]
