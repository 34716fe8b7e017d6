"""
errors.py - Exceptions raised by the optics core

Every error derives from ValueError, so callers that already guard
numerical input with ``except ValueError`` keep working.

Project: Bending Light Optics Core
"""


class BendingLightError(ValueError):
    """Base class for all optics core errors."""


class DegenerateGeometryError(BendingLightError):
    """A ray segment has zero length, so it has no direction."""


class DegenerateDispersionError(BendingLightError):
    """
    The air and glass reference curves coincide at the reference wavelength,
    leaving the interpolation weight undefined.
    """


class WavelengthOutOfRangeError(BendingLightError):
    """Wavelength is not positive or the dispersion formulas are not finite there."""
