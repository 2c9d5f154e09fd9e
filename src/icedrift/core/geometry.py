"""
Triangle Geometry for Buoy Deformation Analysis.

Primitives for the imaginary triangles formed by three buoys observed at
the same instant:
    - Signed area (sign encodes winding, positive = counter-clockwise)
    - Interior angles from normalized edge vectors
    - Sharp-angle test used to reject unstable shapes

Signed area:
    A = ½ det | 1  1  1  |
              | x1 x2 x3 |
              | y1 y2 y3 |

The scalar kernels are Numba-compiled so the enumeration loop can call
them without leaving nopython mode.
"""

import math
import numpy as np
from numba import njit
from dataclasses import dataclass
from typing import Tuple


@njit(cache=True, nogil=True)
def _signed_area(x1: float, y1: float, x2: float, y2: float,
                 x3: float, y3: float) -> float:
    """Half the determinant of the homogeneous vertex matrix."""
    return 0.5 * ((x2 - x1) * (y3 - y1) - (x3 - x1) * (y2 - y1))


@njit(cache=True, nogil=True)
def _interior_angles(x1: float, y1: float, x2: float, y2: float,
                     x3: float, y3: float) -> Tuple[float, float, float]:
    """
    Interior angles [degrees] at vertices 1, 2 and 3.

    Uses unit edge vectors e1 = p2-p1, e2 = p3-p2, e3 = p1-p3; the angle at
    a vertex is acos(-e_in · e_out) with the dot product clamped to [-1, 1].
    Coincident vertices give NaN for all three angles.
    """
    ex1 = x2 - x1
    ey1 = y2 - y1
    ex2 = x3 - x2
    ey2 = y3 - y2
    ex3 = x1 - x3
    ey3 = y1 - y3

    n1 = math.sqrt(ex1 * ex1 + ey1 * ey1)
    n2 = math.sqrt(ex2 * ex2 + ey2 * ey2)
    n3 = math.sqrt(ex3 * ex3 + ey3 * ey3)

    if n1 == 0.0 or n2 == 0.0 or n3 == 0.0:
        return np.nan, np.nan, np.nan

    d1 = -(ex3 * ex1 + ey3 * ey1) / (n3 * n1)
    d2 = -(ex1 * ex2 + ey1 * ey2) / (n1 * n2)
    d3 = -(ex2 * ex3 + ey2 * ey3) / (n2 * n3)

    a1 = math.degrees(math.acos(max(-1.0, min(1.0, d1))))
    a2 = math.degrees(math.acos(max(-1.0, min(1.0, d2))))
    a3 = math.degrees(math.acos(max(-1.0, min(1.0, d3))))

    return a1, a2, a3


@njit(cache=True, nogil=True)
def _is_too_sharp(x1: float, y1: float, x2: float, y2: float,
                  x3: float, y3: float, min_angle: float) -> bool:
    """True if any interior angle is below min_angle or undefined."""
    a1, a2, a3 = _interior_angles(x1, y1, x2, y2, x3, y3)
    # NaN fails every comparison, so degenerate shapes count as sharp
    return not (a1 >= min_angle and a2 >= min_angle and a3 >= min_angle)


@dataclass(frozen=True)
class Vertex:
    """Planar position [m] of one triangle corner."""
    x: float
    y: float


@dataclass(frozen=True)
class Triangle:
    """
    Immutable triangle of three planar vertices.

    Example:
        >>> t = Triangle.from_coords(0.0, 0.0, 1000.0, 0.0, 0.0, 1000.0)
        >>> t.signed_area
        500000.0
        >>> t.swapped().signed_area
        -500000.0
    """
    p1: Vertex
    p2: Vertex
    p3: Vertex

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float,
                    x3: float, y3: float) -> 'Triangle':
        return cls(Vertex(x1, y1), Vertex(x2, y2), Vertex(x3, y3))

    def vertices(self) -> Tuple[float, float, float, float, float, float]:
        """Flat coordinate tuple (x1, y1, x2, y2, x3, y3)."""
        return (self.p1.x, self.p1.y, self.p2.x, self.p2.y,
                self.p3.x, self.p3.y)

    @property
    def signed_area(self) -> float:
        return float(_signed_area(*self.vertices()))

    @property
    def is_positively_oriented(self) -> bool:
        return self.signed_area > 0

    @property
    def angles(self) -> Tuple[float, float, float]:
        """Interior angles [degrees] at p1, p2, p3."""
        a1, a2, a3 = _interior_angles(*self.vertices())
        return (float(a1), float(a2), float(a3))

    def is_too_sharp(self, min_angle: float) -> bool:
        return bool(_is_too_sharp(*self.vertices(), float(min_angle)))

    def swapped(self) -> 'Triangle':
        """Copy with the 2nd and 3rd vertices exchanged."""
        return Triangle(self.p1, self.p3, self.p2)

    def oriented(self) -> 'Triangle':
        """Copy in canonical (positive) orientation."""
        return self if self.is_positively_oriented else self.swapped()


def signed_area(triangle: Triangle) -> float:
    """Signed area [m²]; positive for counter-clockwise winding."""
    return triangle.signed_area


def is_positively_oriented(triangle: Triangle) -> bool:
    """True when the signed area is strictly positive."""
    return triangle.is_positively_oriented


def interior_angles(triangle: Triangle) -> Tuple[float, float, float]:
    """Interior angles [degrees] in vertex order."""
    return triangle.angles


def has_sharp_angle(triangle: Triangle, threshold: float) -> bool:
    """True if min(interior_angles) < threshold (or shape is degenerate)."""
    return triangle.is_too_sharp(threshold)
