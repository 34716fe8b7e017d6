"""
rays.py - LightRay segment model for the bending light simulation

A LightRay is one straight segment of a beam, lying entirely in one medium:
    - Tail and tip points (tail -> tip is the propagation direction)
    - Index of refraction of the medium it is in
    - Vacuum wavelength λ (in meters)
    - Fraction of the laser power it carries
    - Phase offset: whole wavelengths elapsed before the segment begins

The renderer draws a segment either as a thin ray or as a wide wave whose
footprint is a trapezium, wider at the tail than at the tip when the wave
has to be clipped against the next medium.

Project: Bending Light Optics Core
"""

import logging
import math

import numpy as np
from typing import Any, List, Optional, Sequence

from .config import RenderConfig
from .errors import WavelengthOutOfRangeError
from .geometry import as_point, normalize, polygon_contains, segment_distance

logger = logging.getLogger(__name__)

SPEED_OF_LIGHT = 2.99792458e8  # m/s


class LightRay:
    """
    One straight, single-medium segment of a light beam.

    All attributes are fixed at construction except ``time``, the
    animation clock that the view advances once per frame.

    Attributes
    ----------
    tail : np.ndarray
        Start point [x, y] in meters (read-only)
    tip : np.ndarray
        End point [x, y] in meters (read-only)
    index_of_refraction : float
        Index of the medium at this segment's wavelength
    wavelength : float
        Vacuum wavelength in meters
    power_fraction : float
        Share of the laser power carried by this segment (0.0 to 1.0)
    num_wavelengths_phase_offset : float
        Wavelengths elapsed before the tail; 0 for light leaving the laser
    wave_width : float
        Width of the wave footprint at the tail in meters
    trapezium_width : float
        Width of the wave footprint at the tip in meters
    color : Any
        Display color, opaque to the physics
    opposite_medium : Any
        Adjacent medium the wave is clipped against, or None
    extend : bool
        Renderer should lengthen the wave forward
    extend_backwards : bool
        Renderer should lengthen the wave backwards, filling the triangle
        near the interface for transmitted beams
    time : float
        Animation clock in seconds

    Examples
    --------
    >>> ray = LightRay(1e-6, [0, 0], [1e-6, 0], 1.0, 500e-9, 1.0, None, 1e-6, 0.0)
    >>> ray.number_of_wavelengths
    2.0
    """

    def __init__(
        self,
        trapezium_width: float,
        tail: Sequence[float] | np.ndarray,
        tip: Sequence[float] | np.ndarray,
        index_of_refraction: float,
        wavelength: float,
        power_fraction: float,
        color: Any,
        wave_width: float,
        num_wavelengths_phase_offset: float,
        opposite_medium: Any = None,
        extend: bool = False,
        extend_backwards: bool = False
    ):
        if not (math.isfinite(wavelength) and wavelength > 0):
            raise WavelengthOutOfRangeError(f"Wavelength must be positive, got {wavelength} m")
        if not (math.isfinite(index_of_refraction) and index_of_refraction >= 1.0):
            raise ValueError(f"Index of refraction must be >= 1, got {index_of_refraction}")
        if not 0.0 <= power_fraction <= 1.0:
            raise ValueError(f"Power fraction must be in [0, 1], got {power_fraction}")

        self._tail = as_point(tail)
        self._tip = as_point(tip)
        self._tail.setflags(write=False)
        self._tip.setflags(write=False)
        self._index_of_refraction = float(index_of_refraction)
        self._wavelength = float(wavelength)
        self._power_fraction = float(power_fraction)
        self._num_wavelengths_phase_offset = float(num_wavelengths_phase_offset)
        self._wave_width = float(wave_width)
        self._trapezium_width = float(trapezium_width)
        self._color = color
        self._opposite_medium = opposite_medium
        self._extend = extend
        self._extend_backwards = extend_backwards
        self.time = 0.0

    # -------------------------------------------------------------------------
    # Stored values
    # -------------------------------------------------------------------------

    @property
    def tail(self) -> np.ndarray:
        """Start point [x, y] in meters."""
        return self._tail

    @property
    def tip(self) -> np.ndarray:
        """End point [x, y] in meters."""
        return self._tip

    @property
    def index_of_refraction(self) -> float:
        """Index of refraction of the medium."""
        return self._index_of_refraction

    @property
    def wavelength(self) -> float:
        """Vacuum wavelength in meters."""
        return self._wavelength

    @property
    def power_fraction(self) -> float:
        """Share of the laser power carried by this segment."""
        return self._power_fraction

    @property
    def num_wavelengths_phase_offset(self) -> float:
        """Wavelengths elapsed before the tail."""
        return self._num_wavelengths_phase_offset

    @property
    def wave_width(self) -> float:
        """Width of the wave footprint at the tail."""
        return self._wave_width

    @property
    def trapezium_width(self) -> float:
        """Width of the wave footprint at the tip."""
        return self._trapezium_width

    @property
    def color(self) -> Any:
        """Display color."""
        return self._color

    @property
    def opposite_medium(self) -> Any:
        """Adjacent medium the wave is clipped against."""
        return self._opposite_medium

    @property
    def extend(self) -> bool:
        """Whether the renderer lengthens the wave forward."""
        return self._extend

    @property
    def extend_backwards(self) -> bool:
        """Whether the renderer lengthens the wave backwards."""
        return self._extend_backwards

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    @property
    def length(self) -> float:
        """Distance from tail to tip in meters."""
        return float(np.linalg.norm(self._tip - self._tail))

    def to_vector(self) -> np.ndarray:
        """Vector from tail to tip."""
        return self._tip - self._tail

    def to_line(self):
        """(tail, tip) as independent writable copies."""
        return self._tail.copy(), self._tip.copy()

    def unit_vector(self) -> np.ndarray:
        """
        Direction of propagation.

        Raises
        ------
        DegenerateGeometryError
            If tail and tip coincide
        """
        return normalize(self.to_vector())

    def angle(self) -> float:
        """
        Direction of propagation in radians, measured from +x.

        Raises
        ------
        DegenerateGeometryError
            If tail and tip coincide
        """
        ux, uy = self.unit_vector()
        return math.atan2(uy, ux)

    # -------------------------------------------------------------------------
    # Kinematics and phase
    # -------------------------------------------------------------------------

    @property
    def speed(self) -> float:
        """Phase velocity in the medium, c / n."""
        return SPEED_OF_LIGHT / self._index_of_refraction

    @property
    def number_of_wavelengths(self) -> float:
        """Segment length in vacuum wavelengths."""
        return self.length / self._wavelength

    @property
    def next_phase_offset(self) -> float:
        """Phase offset, in wavelengths, at the tip of this segment."""
        return self._num_wavelengths_phase_offset + self.number_of_wavelengths

    @property
    def frequency(self) -> float:
        """Frequency in Hz, speed / wavelength."""
        return self.speed / self._wavelength

    @property
    def angular_frequency(self) -> float:
        """Angular frequency in rad/s."""
        return self.frequency * 2 * math.pi

    def velocity_vector(self) -> np.ndarray:
        """Unit direction scaled by the speed in the medium."""
        return self.unit_vector() * self.speed

    def phase_argument(self, distance_along_ray, time: Optional[float] = None):
        """
        Argument of the cosine describing the wave, k·x - ω·t + phase.

        Parameters
        ----------
        distance_along_ray : float or np.ndarray
            Distance from the tail in meters
        time : float, optional
            Elapsed time in seconds (default: the ``time`` attribute).
            Use the same value for every segment drawn in one frame.

        Returns
        -------
        float or np.ndarray
            Phase in radians
        """
        t = self.time if time is None else time
        k = 2 * math.pi / self._wavelength
        w = self.angular_frequency
        return k * distance_along_ray - w * t - 2 * math.pi * self._num_wavelengths_phase_offset

    # -------------------------------------------------------------------------
    # Rendering shape and hit testing
    # -------------------------------------------------------------------------

    def wave_shape(self) -> np.ndarray:
        """
        Trapezium covered by the segment in wave mode.

        The parallel sides are horizontal, centered on the tail and tip,
        with widths ``wave_width`` and ``trapezium_width``.

        Returns
        -------
        np.ndarray
            (5, 2) closed polygon, last vertex equal to the first
        """
        tail_half = self._wave_width / 2
        tip_half = self._trapezium_width / 2
        tx, ty = self._tail
        px, py = self._tip
        return np.array([
            [tx + tail_half, ty],
            [tx - tail_half, ty],
            [px - tip_half, py],
            [px + tip_half, py],
            [tx + tail_half, ty],
        ])

    def contains(self, position, wave_mode: bool, ray_width: Optional[float] = None) -> bool:
        """
        Check whether a position hits this segment as drawn.

        Parameters
        ----------
        position : array-like
            Point [x, y] in meters
        wave_mode : bool
            If True, test against the wave shape; otherwise against the
            thin ray stroke
        ray_width : float, optional
            Stroke width of a thin ray (default: RenderConfig().ray_width)
        """
        if wave_mode:
            return polygon_contains(self.wave_shape(), position)
        if ray_width is None:
            ray_width = RenderConfig().ray_width
        return segment_distance(position, self._tail, self._tip) <= ray_width / 2

    def __repr__(self) -> str:
        return (
            f"LightRay(tail=[{self._tail[0]:.4g}, {self._tail[1]:.4g}], "
            f"tip=[{self._tip[0]:.4g}, {self._tip[1]:.4g}], "
            f"n={self._index_of_refraction:.4f}, λ={self._wavelength * 1e9:.1f} nm, "
            f"power={self._power_fraction:.3f})"
        )

    def __str__(self) -> str:
        return (
            f"LightRay:\n"
            f"  Tail: ({self._tail[0]:.4g}, {self._tail[1]:.4g}) m\n"
            f"  Tip: ({self._tip[0]:.4g}, {self._tip[1]:.4g}) m\n"
            f"  Index of refraction: {self._index_of_refraction:.4f}\n"
            f"  Wavelength: {self._wavelength * 1e9:.1f} nm\n"
            f"  Power fraction: {self._power_fraction:.3f}\n"
            f"  Phase offset: {self._num_wavelengths_phase_offset:.4f} wavelengths"
        )


# =============================================================================
# Ray Chain Utilities
# =============================================================================

def create_ray_chain(
    points: Sequence[Sequence[float]] | np.ndarray,
    indices_of_refraction: Sequence[float],
    wavelength: float,
    power_fractions: Optional[Sequence[float]] = None,
    color: Any = None,
    wave_width: float = 0.0,
    num_wavelengths_phase_offset: float = 0.0
) -> List[LightRay]:
    """
    Build consecutive segments along a polyline, carrying the phase offset.

    Segment i runs from points[i] to points[i + 1] and starts with the
    phase offset accumulated over segments 0..i-1.

    Only the offset is carried; phase continuity is not enforced. At a
    shared vertex, ``phase_argument`` of segment i (at its length) and of
    segment i + 1 (at 0) differ by 4π·Nᵢ - (ωᵢ - ωᵢ₊₁)·t modulo 2π, where
    Nᵢ is ``number_of_wavelengths`` of segment i. They agree only when both
    segments have the same index of refraction and segment i spans a whole
    number of half-wavelengths.

    Parameters
    ----------
    points : array-like
        (N + 1, 2) vertices of the beam path in meters
    indices_of_refraction : sequence of float
        Index of the medium for each of the N segments
    wavelength : float
        Vacuum wavelength in meters
    power_fractions : sequence of float, optional
        Power carried by each segment (default: 1.0 for all)
    color : Any, optional
        Display color shared by all segments
    wave_width : float, optional
        Wave width at both ends of every segment
    num_wavelengths_phase_offset : float, optional
        Phase offset of the first segment

    Returns
    -------
    List[LightRay]
        The N segments in propagation order
    """
    vertices = np.array(points, dtype=np.float64)
    if vertices.ndim != 2 or vertices.shape[1] != 2 or len(vertices) < 2:
        raise ValueError(f"Expected at least two (x, y) points, got shape {vertices.shape}")

    num_segments = len(vertices) - 1
    if len(indices_of_refraction) != num_segments:
        raise ValueError(
            f"Need {num_segments} indices of refraction, got {len(indices_of_refraction)}"
        )
    if power_fractions is None:
        power_fractions = [1.0] * num_segments
    elif len(power_fractions) != num_segments:
        raise ValueError(f"Need {num_segments} power fractions, got {len(power_fractions)}")

    rays = []
    offset = num_wavelengths_phase_offset
    for i in range(num_segments):
        ray = LightRay(
            trapezium_width=wave_width,
            tail=vertices[i],
            tip=vertices[i + 1],
            index_of_refraction=indices_of_refraction[i],
            wavelength=wavelength,
            power_fraction=power_fractions[i],
            color=color,
            wave_width=wave_width,
            num_wavelengths_phase_offset=offset
        )
        rays.append(ray)
        offset = ray.next_phase_offset

    logger.debug("Built ray chain of %d segments, final phase offset %.6g", num_segments, offset)
    return rays
