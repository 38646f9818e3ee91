import numpy as np

from sdft import SlidingDFT, SpectrumProcessor, bin_frequencies, find_peak_bins, power_db


def _tone_spectrum(n=64, k0=8, samples=None, amplitude=1.0):
    t = np.arange(samples or 4 * n)
    dft = SlidingDFT(n)
    return dft.update_many(amplitude * np.sin(2 * np.pi * k0 * t / n)).copy()


def test_power_db_floor():
    power = power_db(np.array([0j, 1 + 0j, 10j]))
    np.testing.assert_allclose(power, [-240.0, 0.0, 20.0], atol=1e-6)


def test_bin_frequencies():
    freqs = bin_frequencies(8, 8000.0)
    np.testing.assert_allclose(freqs, np.arange(8) * 1000.0)


def test_find_peak_bins_tone():
    spectrum = _tone_spectrum()
    peaks = find_peak_bins(spectrum, height_db=0.0)
    assert list(peaks) == [8]


def test_find_peak_bins_edges():
    spectrum = np.zeros(8, dtype=complex)
    spectrum[0] = 10
    spectrum[4] = 5
    assert list(find_peak_bins(spectrum)) == [0, 4]


def test_find_peak_bins_none_above_threshold():
    spectrum = _tone_spectrum(amplitude=1e-3)
    assert find_peak_bins(spectrum, height_db=20.0).size == 0


def test_processor_peak_frequency():
    sr = 8000.0
    spectrum = _tone_spectrum(n=64, k0=8)
    proc = SpectrumProcessor(sample_rate=sr)
    freqs, power = proc.process(spectrum)
    assert freqs.shape == power.shape == (33,)
    assert abs(freqs[np.argmax(power)] - 1000.0) < 1.0


def test_processor_amplitude_in_db():
    proc = SpectrumProcessor(sample_rate=1e3)
    _, power1 = proc.process(_tone_spectrum(amplitude=1.0))
    proc.reset()
    _, power2 = proc.process(_tone_spectrum(amplitude=0.5))
    # разница между амплитудами 1 и 0.5 должна быть около 6 дБ
    assert abs((power1.max() - power2.max()) - 6.0) < 0.1


def test_processor_holds_and_average():
    proc = SpectrumProcessor(sample_rate=1e3, avg_window=2)
    loud = np.full(8, 10 + 0j)
    quiet = np.full(8, 1 + 0j)
    proc.process(loud)
    _, avg = proc.process(quiet)
    np.testing.assert_allclose(avg, 10.0)
    lo, hi = proc.current_min_max()
    np.testing.assert_allclose(lo, 0.0, atol=1e-9)
    np.testing.assert_allclose(hi, 20.0, atol=1e-9)
    np.testing.assert_allclose(proc.current_persistence(), 18.0, atol=1e-9)


def test_processor_reset_on_size_change():
    proc = SpectrumProcessor(sample_rate=1e3, avg_window=4)
    proc.process(np.ones(8, dtype=complex))
    freqs, avg = proc.process(np.ones(16, dtype=complex))
    assert freqs.shape == avg.shape == (9,)
    assert proc.current_min_max()[0].shape == (9,)
