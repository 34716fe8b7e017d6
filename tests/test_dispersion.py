"""Unit tests for the air/glass blended dispersion model."""

import logging
import math

import numpy as np
import pytest

from bending_light import dispersion
from bending_light.dispersion import (
    DispersionFunction,
    WAVELENGTH_RED,
    air_index,
    dispersion_table,
    sellmeier_index,
)
from bending_light.errors import DegenerateDispersionError, WavelengthOutOfRangeError

logger = logging.getLogger(__name__)


class TestReferenceCurves:
    """Tests for the glass (Sellmeier) and air curves."""

    def test_sellmeier_matches_bk7_d_line(self):
        """The coefficients are those of N-BK7, n_d = 1.5168 at 587.6 nm."""
        assert abs(sellmeier_index(587.6e-9) - 1.5168) < 1e-4

    def test_air_index_at_red(self):
        assert abs(air_index(650e-9) - 1.000276) < 1e-6

    def test_glass_has_normal_dispersion(self):
        """Blue light sees a higher index than red in glass and air."""
        assert sellmeier_index(400e-9) > sellmeier_index(700e-9)
        assert air_index(400e-9) > air_index(700e-9)

    def test_array_input_returns_array(self):
        wavelengths = np.array([400e-9, 500e-9, 600e-9])
        n = sellmeier_index(wavelengths)
        assert isinstance(n, np.ndarray)
        assert n.shape == (3,)
        assert n[1] == pytest.approx(sellmeier_index(500e-9))

    def test_scalar_input_returns_float(self):
        assert isinstance(air_index(500e-9), float)
        assert isinstance(sellmeier_index(500e-9), float)

    @pytest.mark.parametrize("wavelength", [0.0, -650e-9, math.inf, math.nan])
    def test_invalid_wavelength_raises(self, wavelength):
        with pytest.raises(WavelengthOutOfRangeError):
            sellmeier_index(wavelength)
        with pytest.raises(WavelengthOutOfRangeError):
            air_index(wavelength)

    def test_negative_radicand_raises(self):
        """Just below the second Sellmeier pole n² goes negative."""
        with pytest.raises(WavelengthOutOfRangeError):
            sellmeier_index(137.84e-9)

    def test_beside_air_pole_returns_finite_value(self):
        """Near 64.8 nm the air formula is extreme but still finite."""
        n = air_index(64.8e-9)
        assert math.isfinite(n)
        assert n < 1.0

    def test_air_pole_raises(self, monkeypatch):
        """A vanishing denominator in the air formula is reported."""
        wavelength = 650e-9
        pole = float((np.asarray(wavelength, dtype=np.float64) * 1e6) ** -2)
        monkeypatch.setattr(dispersion, "AIR_TERMS", ((5792105e-8, pole),))
        with pytest.raises(WavelengthOutOfRangeError):
            air_index(wavelength)


class TestDispersionFunction:
    """Tests for DispersionFunction."""

    @pytest.mark.parametrize("reference_index", [1.001, 1.2, 1.333, 1.5, 1.8, 2.419, 2.5])
    @pytest.mark.parametrize("reference_wavelength", [250e-9, 450e-9, 650e-9, 1064e-9, 1900e-9])
    def test_calibration_at_reference_wavelength(self, reference_index, reference_wavelength):
        """n(λ_ref) reproduces the reference index."""
        f = DispersionFunction(reference_index, reference_wavelength)
        n = f.index_of_refraction(reference_wavelength)
        assert math.isclose(n, reference_index, rel_tol=1e-9)

    def test_weight_is_monotonic_and_non_negative(self):
        indices = np.linspace(0.9, 2.5, 50)
        weights = [DispersionFunction(n, WAVELENGTH_RED).weight for n in indices]
        assert all(w >= 0 for w in weights)
        assert all(b >= a for a, b in zip(weights, weights[1:]))
        # Strictly increasing once above the air reference
        above_air = [w for n, w in zip(indices, weights) if n > air_index(WAVELENGTH_RED)]
        assert all(b > a for a, b in zip(above_air, above_air[1:]))

    def test_air_sample(self):
        f = DispersionFunction(1.000293, 650e-9)
        assert abs(f.index_of_refraction(650e-9) - 1.000293) < 1e-12
        assert abs(f.index_of_refraction(650e-9) - air_index(650e-9)) < 1e-4
        assert 0 < f.weight < 1e-3

    def test_glass_sample(self):
        f = DispersionFunction(1.5, 650e-9)
        assert 0 < f.weight < 1
        assert abs(f.index_of_refraction(650e-9) - sellmeier_index(650e-9)) < 0.02
        logger.info("Glass weight at 650 nm: %.6f", f.weight)

    def test_denser_than_glass_extrapolates(self):
        """No upper clamp: diamond lies beyond the glass curve."""
        f = DispersionFunction(2.419)
        assert f.weight > 1
        assert f.index_of_refraction(450e-9) > f.index_of_refraction(650e-9)

    def test_below_air_clamps_to_air_curve(self):
        f = DispersionFunction(1.0, 650e-9)
        assert f.weight == 0.0
        assert f.index_of_refraction(500e-9) == pytest.approx(air_index(500e-9))

    def test_index_for_red(self):
        f = DispersionFunction(1.4, 450e-9)
        assert f.index_of_refraction_for_red() == f.index_of_refraction(650e-9)

    def test_vectorized_index(self):
        f = DispersionFunction(1.333)
        wavelengths = np.linspace(400e-9, 700e-9, 7)
        n = f.index_of_refraction(wavelengths)
        assert n.shape == (7,)
        assert np.all(np.diff(n) < 0)

    def test_degenerate_configuration_raises(self, monkeypatch):
        """Coinciding reference curves make the weight undefined."""
        monkeypatch.setattr(dispersion, "sellmeier_index", dispersion.air_index)
        with pytest.raises(DegenerateDispersionError):
            DispersionFunction(1.5, 650e-9)

    def test_non_finite_reference_index_raises(self):
        with pytest.raises(ValueError):
            DispersionFunction(math.nan)

    def test_invalid_reference_wavelength_raises(self):
        with pytest.raises(WavelengthOutOfRangeError):
            DispersionFunction(1.5, 0.0)

    def test_equality_and_hash(self):
        a = DispersionFunction(1.333)
        b = DispersionFunction(1.333, 650e-9)
        c = DispersionFunction(1.333, 500e-9)
        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_repr(self):
        assert "650.0 nm" in repr(DispersionFunction(1.5))


class TestDispersionTable:
    """Tests for dispersion_table."""

    def test_table_shape_and_columns(self):
        functions = [DispersionFunction(1.000293), DispersionFunction(1.5)]
        wavelengths, table = dispersion_table(functions)
        assert wavelengths.shape == (101,)
        assert table.shape == (101, 2)
        assert wavelengths[0] == pytest.approx(350e-9)
        assert wavelengths[-1] == pytest.approx(800e-9)
        assert table[-1, 1] == pytest.approx(functions[1].index_of_refraction(800e-9))

    def test_custom_range(self):
        wavelengths, table = dispersion_table([DispersionFunction(1.333)], 400e-9, 500e-9, 4)
        assert len(wavelengths) == 5
        assert wavelengths[2] == pytest.approx(450e-9)

    def test_invalid_steps_raises(self):
        with pytest.raises(ValueError):
            dispersion_table([DispersionFunction(1.5)], num_steps=0)

    def test_invalid_range_raises(self):
        with pytest.raises(WavelengthOutOfRangeError):
            dispersion_table([DispersionFunction(1.5)], 0.0, 500e-9)
