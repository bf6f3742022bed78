# -*- coding: utf-8 -*-
"""
Spectral Analysis Tests - 2D DFT, windows and apodization stages.

Dependencies
------------
pytest
scipy

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

import numpy as np
import pytest

from sarsim.config import RadarConfig
from sarsim.exceptions import StageOrderError, ValidationError
from sarsim.image_processing import (
    Apodization,
    SpectralAnalysis,
    apodize_image,
    apodize_spectrum,
    fft2,
    ifft2,
    spectral_analysis,
    window_2d,
)
from sarsim.image_processing.apodization import window_1d
from sarsim.store import BufferStore
from sarsim.vocabulary import WindowType


@pytest.fixture
def image(rng):
    return rng.standard_normal((24, 40)) + 1j * rng.standard_normal((24, 40))


class TestFFT:

    def test_matches_numpy(self, image):
        np.testing.assert_allclose(fft2(image), np.fft.fft2(image),
                                   atol=1e-9)

    def test_unshifted_dc(self):
        x = np.ones((8, 8))
        spectrum = fft2(x)
        assert spectrum[0, 0] == pytest.approx(64.0)
        assert np.count_nonzero(np.abs(spectrum) > 1e-9) == 1

    def test_inverse_recovers_image(self, image):
        np.testing.assert_allclose(ifft2(fft2(image)), image, atol=1e-12)

    def test_parseval(self, image):
        spectrum = fft2(image)
        assert np.sum(np.abs(spectrum) ** 2) == pytest.approx(
            image.size * np.sum(np.abs(image) ** 2))

    def test_rejects_vector(self):
        with pytest.raises(ValidationError):
            fft2(np.ones(8))

    def test_transform_direction(self, image):
        forward = SpectralAnalysis().apply(image)
        back = SpectralAnalysis(inverse=True).apply(forward)
        np.testing.assert_allclose(back, image, atol=1e-12)


class TestWindows:

    def test_uniform_is_ones(self):
        np.testing.assert_array_equal(window_2d((5, 7), 'uniform'),
                                      np.ones((5, 7)))
        np.testing.assert_array_equal(window_2d((5, 7), None),
                                      np.ones((5, 7)))

    def test_separable(self):
        w = window_2d((9, 7), WindowType.HAMMING)
        np.testing.assert_allclose(w, np.outer(np.hamming(9), np.hamming(7)))

    def test_centred_on_dc(self):
        w = window_2d((9, 7), 'hanning', centered_on_dc=True)
        assert np.unravel_index(np.argmax(w), w.shape) == (0, 0)

    def test_taylor_normalised(self):
        w = window_1d(65, 'taylor')
        assert w.max() == pytest.approx(1.0)
        assert w[0] < 1.0

    def test_callable_window(self):
        w = window_1d(4, lambda n: np.arange(n, dtype=float))
        np.testing.assert_array_equal(w, [0.0, 1.0, 2.0, 3.0])

    def test_unknown_window(self):
        with pytest.raises(ValidationError, match="kaiser"):
            Apodization('kaiser')

    def test_apodization_rejects_3d(self):
        with pytest.raises(ValidationError):
            Apodization('hamming').apply(np.ones((2, 2, 2)))

    def test_apodization_keeps_shape(self, image):
        out = Apodization('taylor').apply(image)
        assert out.shape == image.shape
        assert np.sum(np.abs(out)) < np.sum(np.abs(image))


class TestApodizationStages:

    def _store(self, image):
        store = BufferStore()
        store.append('gbp', image)
        return store

    def test_image_apodization_feeds_spectrum(self, image):
        config = RadarConfig(apodization='hamming')
        store = self._store(image)
        apodized = apodize_image(store, config)
        spectrum = spectral_analysis(store, config)
        assert apodize_spectrum(store, config) is None
        assert store.names() == ['metadata', 'gbp', 'gbp_apodized',
                                 'gbp_fft']
        np.testing.assert_allclose(spectrum, np.fft.fft2(apodized),
                                   atol=1e-9)

    def test_spectrum_apodization_after_fft(self, image):
        config = RadarConfig(apodization='taylor', apodize_spectrum=True)
        store = self._store(image)
        assert apodize_image(store, config) is None
        spectrum = spectral_analysis(store, config)
        apodized = apodize_spectrum(store, config)
        assert store.names() == ['metadata', 'gbp', 'gbp_fft',
                                 'gbp_fft_apodized']
        np.testing.assert_allclose(spectrum, np.fft.fft2(image), atol=1e-9)
        assert abs(apodized[0, 0]) == pytest.approx(
            abs(spectrum[0, 0]) * window_2d(image.shape, 'taylor',
                                            centered_on_dc=True)[0, 0])

    def test_no_apodization(self, image):
        config = RadarConfig()
        store = self._store(image)
        assert apodize_image(store, config) is None
        spectral_analysis(store, config)
        assert apodize_spectrum(store, config) is None
        assert store.names() == ['metadata', 'gbp', 'gbp_fft']

    def test_spectrum_requires_image(self):
        with pytest.raises(StageOrderError):
            spectral_analysis(BufferStore(), RadarConfig())
