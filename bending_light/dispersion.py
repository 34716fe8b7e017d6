"""
dispersion.py - Wavelength-dependent index of refraction

A material is characterized by a single calibration point: the index of
refraction it has at a reference wavelength. Its full dispersion curve is a
linear blend of two real curves,

    n(λ) = x * G(λ) + (1 - x) * A(λ)

where G is the Sellmeier equation for glass, A is the empirical formula for
air and 0 <= x < inf says how glass-like the material is. x is chosen so
that n(λ_ref) equals the reference index exactly. x = 0 gives air, x = 1
gives glass, and x > 1 extrapolates to materials denser than the glass.

Wavelengths are in meters throughout.

Project: Bending Light Optics Core
"""

import logging

import numpy as np
from typing import Sequence, Tuple

from .errors import DegenerateDispersionError, WavelengthOutOfRangeError

logger = logging.getLogger(__name__)

# Reference wavelength for named materials (red laser)
WAVELENGTH_RED = 650e-9

# Sellmeier coefficients for glass (C in m^2)
# See http://en.wikipedia.org/wiki/Sellmeier_equation
SELLMEIER_B = (1.03961212, 0.231792344, 1.01046945)
SELLMEIER_C = (6.00069867e-3 * 1e-12, 2.00179144e-2 * 1e-12, 1.03560653e2 * 1e-12)

# Air dispersion terms, wavelength in micrometers
# See http://refractiveindex.info/?group=GASES&material=Air
AIR_TERMS = ((5792105e-8, 238.0185), (167917e-8, 57.362))


def _check_wavelength(wavelength) -> np.ndarray:
    lam = np.asarray(wavelength, dtype=np.float64)
    if np.any(~np.isfinite(lam)) or np.any(lam <= 0):
        raise WavelengthOutOfRangeError(
            f"Wavelength must be positive and finite, got {wavelength!r} m"
        )
    return lam


def _finite(value: np.ndarray, wavelength, curve: str):
    if np.any(~np.isfinite(value)):
        raise WavelengthOutOfRangeError(
            f"{curve} index is not finite at wavelength {wavelength!r} m"
        )
    return float(value) if value.ndim == 0 else value


def sellmeier_index(wavelength):
    """
    Index of refraction of the reference glass.

    n² = 1 + Σ Bᵢλ²/(λ² - Cᵢ)

    Parameters
    ----------
    wavelength : float or np.ndarray
        Wavelength in meters

    Returns
    -------
    float or np.ndarray
        Index of refraction, same shape as the input

    Raises
    ------
    WavelengthOutOfRangeError
        If the wavelength is not positive or hits a pole of the equation
    """
    lam = _check_wavelength(wavelength)
    l2 = lam * lam
    with np.errstate(divide="ignore", invalid="ignore"):
        n2 = 1.0
        for b, c in zip(SELLMEIER_B, SELLMEIER_C):
            n2 = n2 + b * l2 / (l2 - c)
        n = np.sqrt(n2)
    return _finite(np.asarray(n), wavelength, "Glass")


def air_index(wavelength):
    """
    Index of refraction of air.

    Parameters
    ----------
    wavelength : float or np.ndarray
        Wavelength in meters

    Returns
    -------
    float or np.ndarray
        Index of refraction, same shape as the input

    Raises
    ------
    WavelengthOutOfRangeError
        If the wavelength is not positive or hits a pole of the formula
    """
    lam = _check_wavelength(wavelength)
    inv_um2 = (lam * 1e6) ** -2
    with np.errstate(divide="ignore", invalid="ignore"):
        n = 1.0
        for numerator, pole in AIR_TERMS:
            n = n + numerator / (pole - inv_um2)
    return _finite(np.asarray(n), wavelength, "Air")


class DispersionFunction:
    """
    Dispersion curve of a material calibrated at one wavelength.

    Attributes
    ----------
    reference_index_of_refraction : float
        Index of refraction at the reference wavelength
    reference_wavelength : float
        Calibration wavelength in meters
    weight : float
        Interpolation weight between the air (0) and glass (1) curves

    Examples
    --------
    >>> water = DispersionFunction(1.333)
    >>> round(water.index_of_refraction(650e-9), 6)
    1.333
    """

    def __init__(self, reference_index_of_refraction: float,
                 reference_wavelength: float = WAVELENGTH_RED):
        self._reference_index_of_refraction = float(reference_index_of_refraction)
        self._reference_wavelength = float(reference_wavelength)
        if not np.isfinite(self._reference_index_of_refraction):
            raise ValueError(
                f"Reference index of refraction must be finite, got {reference_index_of_refraction!r}"
            )

        n_air_reference = air_index(self._reference_wavelength)
        n_glass_reference = sellmeier_index(self._reference_wavelength)

        with np.errstate(divide="ignore", invalid="ignore"):
            x = np.float64(self._reference_index_of_refraction - n_air_reference) / \
                np.float64(n_glass_reference - n_air_reference)
        if not np.isfinite(x):
            raise DegenerateDispersionError(
                f"Air and glass curves coincide at {self._reference_wavelength} m "
                f"(n_air={n_air_reference}, n_glass={n_glass_reference})"
            )
        if x < 0:
            logger.debug(
                "Clamping dispersion weight %.6g to 0 for n=%s at %s m",
                x, self._reference_index_of_refraction, self._reference_wavelength
            )
            x = 0.0
        self._weight = float(x)

    @property
    def reference_index_of_refraction(self) -> float:
        """Index of refraction at the reference wavelength."""
        return self._reference_index_of_refraction

    @property
    def reference_wavelength(self) -> float:
        """Calibration wavelength in meters."""
        return self._reference_wavelength

    @property
    def weight(self) -> float:
        """Interpolation weight, 0 for air and 1 for the reference glass."""
        return self._weight

    def index_of_refraction(self, wavelength):
        """
        Index of refraction at the given wavelength.

        Parameters
        ----------
        wavelength : float or np.ndarray
            Wavelength in meters

        Returns
        -------
        float or np.ndarray
            Blended index of refraction
        """
        x = self._weight
        return x * sellmeier_index(wavelength) + (1 - x) * air_index(wavelength)

    def index_of_refraction_for_red(self) -> float:
        """Index of refraction at 650 nm."""
        return self.index_of_refraction(WAVELENGTH_RED)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DispersionFunction):
            return NotImplemented
        return (self._reference_index_of_refraction == other._reference_index_of_refraction
                and self._reference_wavelength == other._reference_wavelength)

    def __hash__(self) -> int:
        return hash((self._reference_index_of_refraction, self._reference_wavelength))

    def __repr__(self) -> str:
        return (
            f"DispersionFunction(n={self._reference_index_of_refraction}, "
            f"λ={self._reference_wavelength * 1e9:.1f} nm, weight={self._weight:.4f})"
        )


def dispersion_table(
    states: Sequence,
    min_wavelength: float = 350e-9,
    max_wavelength: float = 800e-9,
    num_steps: int = 100
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Tabulate n(λ) for several materials.

    Parameters
    ----------
    states : sequence
        Objects with an ``index_of_refraction(wavelength)`` method, such as
        DispersionFunction or MediumState
    min_wavelength, max_wavelength : float
        Wavelength range in meters (inclusive)
    num_steps : int
        Number of intervals across the range

    Returns
    -------
    wavelengths : np.ndarray
        Shape (num_steps + 1,)
    table : np.ndarray
        Shape (num_steps + 1, len(states)); column j holds states[j]
    """
    if num_steps < 1:
        raise ValueError(f"num_steps must be >= 1, got {num_steps}")
    if not 0 < min_wavelength <= max_wavelength:
        raise WavelengthOutOfRangeError(
            f"Invalid wavelength range [{min_wavelength}, {max_wavelength}]"
        )
    wavelengths = np.linspace(min_wavelength, max_wavelength, num_steps + 1)
    table = np.empty((len(wavelengths), len(states)))
    for j, state in enumerate(states):
        table[:, j] = state.index_of_refraction(wavelengths)
    return wavelengths, table
