"""
media.py - Materials and the regions of space they fill

Material types:
    - MediumState: a named material (air, water, glass, ...) with its
      dispersion function, calibrated at red light
    - Medium: a region of the play area filled with one material

Named materials are defined by their index of refraction at 650 nm. A
custom material entered while the laser is at another wavelength is
calibrated at that wavelength instead, so the displayed value is exact
for the current laser color.

Project: Bending Light Optics Core
"""

import logging

import numpy as np
from typing import Any, Iterable, Optional

from .dispersion import DispersionFunction, WAVELENGTH_RED
from .geometry import as_point, polygon_contains

logger = logging.getLogger(__name__)

# Range offered for user-entered indices of refraction
INDEX_OF_REFRACTION_MIN = 1.0
INDEX_OF_REFRACTION_MAX = 1.6


class MediumState:
    """
    A named material.

    Attributes
    ----------
    name : str
        Display name
    dispersion_function : DispersionFunction
        n(λ) for the material
    mystery : bool
        If True, the index of refraction is hidden from the user
    custom : bool
        If True, the material was entered by the user rather than chosen
    """

    def __init__(
        self,
        name: str,
        index_for_red_light: float,
        mystery: bool = False,
        custom: bool = False,
        reference_wavelength: float = WAVELENGTH_RED
    ):
        self._name = name
        self._dispersion_function = DispersionFunction(index_for_red_light, reference_wavelength)
        self._mystery = mystery
        self._custom = custom

    @property
    def name(self) -> str:
        """Display name."""
        return self._name

    @property
    def dispersion_function(self) -> DispersionFunction:
        """n(λ) for the material."""
        return self._dispersion_function

    @property
    def mystery(self) -> bool:
        """Whether the index of refraction is hidden from the user."""
        return self._mystery

    @property
    def custom(self) -> bool:
        """Whether the material was entered by the user."""
        return self._custom

    @classmethod
    def custom_at_wavelength(
        cls,
        index_of_refraction: float,
        wavelength: float,
        name: str = "Custom"
    ) -> 'MediumState':
        """
        Create a user-entered material calibrated at the laser wavelength.

        The index is clamped to [INDEX_OF_REFRACTION_MIN, INDEX_OF_REFRACTION_MAX].

        Parameters
        ----------
        index_of_refraction : float
            Index the user entered, valid at ``wavelength``
        wavelength : float
            Current laser wavelength in meters
        name : str, optional
            Display name (default: "Custom")
        """
        clamped = min(max(index_of_refraction, INDEX_OF_REFRACTION_MIN), INDEX_OF_REFRACTION_MAX)
        if clamped != index_of_refraction:
            logger.debug("Clamped custom index of refraction %s to %s", index_of_refraction, clamped)
        return cls(name, clamped, mystery=False, custom=True, reference_wavelength=wavelength)

    def index_of_refraction(self, wavelength):
        return self.dispersion_function.index_of_refraction(wavelength)

    def index_of_refraction_for_red_light(self) -> float:
        return self.dispersion_function.index_of_refraction_for_red()

    def __repr__(self) -> str:
        flags = [flag for flag, on in (("mystery", self.mystery), ("custom", self.custom)) if on]
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"MediumState({self.name!r}, {self.dispersion_function!r}){suffix}"


AIR = MediumState("Air", 1.000293)
WATER = MediumState("Water", 1.333)
GLASS = MediumState("Glass", 1.5)
DIAMOND = MediumState("Diamond", 2.419)
MYSTERY_A = MediumState("Mystery A", DIAMOND.index_of_refraction_for_red_light(), mystery=True)
MYSTERY_B = MediumState("Mystery B", 1.4, mystery=True)

# Materials offered in the material chooser
MEDIUM_STATES = (AIR, WATER, GLASS, MYSTERY_A, MYSTERY_B)


def find_state(
    index_of_refraction: float,
    wavelength: float,
    states: Iterable[MediumState] = MEDIUM_STATES
) -> Optional[MediumState]:
    """
    Find the named material with exactly this index at this wavelength.

    Returns
    -------
    MediumState or None
        The first matching state, or None for a custom value
    """
    for state in states:
        if state.index_of_refraction(wavelength) == index_of_refraction:
            return state
    return None


class Medium:
    """
    A region of space filled with one material.

    Attributes
    ----------
    shape : np.ndarray
        (N, 2) polygon vertices in meters
    state : MediumState
        Material filling the region
    color : Any
        Display color, opaque to the physics
    """

    def __init__(self, shape: np.ndarray, state: MediumState, color: Any = None):
        vertices = np.array(shape, dtype=np.float64)
        if vertices.ndim != 2 or vertices.shape[1] != 2 or len(vertices) < 3:
            raise ValueError(f"Medium shape must be an (N>=3, 2) polygon, got {vertices.shape}")
        vertices.setflags(write=False)
        self._shape = vertices
        self._state = state
        self._color = color

    @property
    def shape(self) -> np.ndarray:
        """Polygon vertices in meters (read-only)."""
        return self._shape

    @property
    def state(self) -> MediumState:
        """Material filling the region."""
        return self._state

    @property
    def color(self) -> Any:
        """Display color."""
        return self._color

    @property
    def is_mystery(self) -> bool:
        return self.state.mystery

    def index_of_refraction(self, wavelength):
        return self.state.index_of_refraction(wavelength)

    def contains(self, point) -> bool:
        """Check whether a point lies inside the region."""
        return polygon_contains(self.shape, as_point(point))

    def __repr__(self) -> str:
        return f"Medium({self.state.name!r}, vertices={len(self.shape)})"


def create_rectangular_medium(
    x_min: float,
    y_min: float,
    x_max: float,
    y_max: float,
    state: MediumState,
    color: Any = None
) -> Medium:
    """
    Create an axis-aligned rectangular medium.

    Parameters
    ----------
    x_min, y_min, x_max, y_max : float
        Bounds in meters
    state : MediumState
        Material filling the rectangle
    color : Any, optional
        Display color
    """
    if x_min >= x_max or y_min >= y_max:
        raise ValueError(
            f"Empty rectangle [{x_min}, {x_max}] x [{y_min}, {y_max}]"
        )
    shape = [[x_min, y_min], [x_max, y_min], [x_max, y_max], [x_min, y_max]]
    return Medium(shape, state, color)
