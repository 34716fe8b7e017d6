"""
config.py - Rendering parameters consumed by the ray model

Project: Bending Light Optics Core
"""

from dataclasses import dataclass

# Stroke width of a thin ray in meters. At the default view transform this
# is a 4 pixel wide line; it is a display parameter, not a beam thickness.
DEFAULT_RAY_WIDTH = 1.5992063492063494e-7


@dataclass(frozen=True)
class RenderConfig:
    """
    View-dependent settings used for hit-testing rays.

    Attributes
    ----------
    ray_width : float
        Stroke width of a thin ray in model meters
    """

    ray_width: float = DEFAULT_RAY_WIDTH

    def __post_init__(self):
        if not self.ray_width > 0:
            raise ValueError(f"ray_width must be positive, got {self.ray_width}")

    @classmethod
    def from_view_scale(cls, stroke_pixels: float, pixels_per_meter: float) -> 'RenderConfig':
        """
        Map a stroke width in pixels back into model units.

        Parameters
        ----------
        stroke_pixels : float
            Width of the drawn ray in view pixels
        pixels_per_meter : float
            Scale of the model-to-view transform
        """
        if pixels_per_meter <= 0:
            raise ValueError(f"pixels_per_meter must be positive, got {pixels_per_meter}")
        return cls(ray_width=stroke_pixels / pixels_per_meter)
