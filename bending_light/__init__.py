"""
bending_light - Optics core for an interactive refraction simulation

Provides the wavelength-dependent index of refraction of materials and the
light ray segment model that a ray tracer builds and a view renders.
"""

from .errors import BendingLightError, DegenerateGeometryError
from .errors import DegenerateDispersionError, WavelengthOutOfRangeError

from .dispersion import DispersionFunction, sellmeier_index, air_index, dispersion_table
from .dispersion import WAVELENGTH_RED

from .media import MediumState, Medium, find_state, create_rectangular_medium
from .media import AIR, WATER, GLASS, DIAMOND, MYSTERY_A, MYSTERY_B, MEDIUM_STATES

from .rays import LightRay, create_ray_chain, SPEED_OF_LIGHT
from .config import RenderConfig, DEFAULT_RAY_WIDTH

__version__ = "0.1.0"

__all__ = [
    # Errors
    "BendingLightError",
    "DegenerateGeometryError",
    "DegenerateDispersionError",
    "WavelengthOutOfRangeError",
    # Dispersion
    "DispersionFunction",
    "sellmeier_index",
    "air_index",
    "dispersion_table",
    "WAVELENGTH_RED",
    # Media
    "MediumState",
    "Medium",
    "find_state",
    "create_rectangular_medium",
    "AIR",
    "WATER",
    "GLASS",
    "DIAMOND",
    "MYSTERY_A",
    "MYSTERY_B",
    "MEDIUM_STATES",
    # Rays
    "LightRay",
    "create_ray_chain",
    "SPEED_OF_LIGHT",
    # Rendering
    "RenderConfig",
    "DEFAULT_RAY_WIDTH",
]
