"""
Differential Kinematics of Buoy Triangles.

Strain-rate tensor from the three vertex velocities using the discrete
line integral (Green's theorem) around the triangle:

    ∂u/∂x =  1/(2A) Σ (u_i + u_j)(y_j - y_i)
    ∂u/∂y = -1/(2A) Σ (u_i + u_j)(x_j - x_i)
    ∂v/∂x =  1/(2A) Σ (v_i + v_j)(y_j - y_i)
    ∂v/∂y = -1/(2A) Σ (v_i + v_j)(x_j - x_i)

summed over the edges i→j = 1→2, 2→3, 3→1 of a counter-clockwise
(positive area) triangle.

Derived invariants [1/day]:
    divergence  = ∂u/∂x + ∂v/∂y
    shear       = sqrt((∂u/∂x - ∂v/∂y)² + (∂u/∂y + ∂v/∂x)²)
    deformation = sqrt(divergence² + shear²)
"""

import logging
import math
import numpy as np
import pandas as pd
from numba import njit, prange

SECONDS_PER_DAY = 86400.0

# Areas below this [m²] are treated as degenerate
MIN_AREA = 1e-6

STRAIN_COLUMNS = [
    'dudx', 'dudy', 'dvdx', 'dvdy', 'divergence', 'shear', 'deformation',
]

logger = logging.getLogger(__name__)


@njit(cache=True, nogil=True)
def _strain_rates(x1, y1, x2, y2, x3, y3, area, u1, u2, u3, v1, v2, v3):
    """Velocity gradients [1/s] for one positively oriented triangle."""
    f = 1.0 / (2.0 * area)

    dudx = f * ((u1 + u2) * (y2 - y1) + (u2 + u3) * (y3 - y2)
                + (u3 + u1) * (y1 - y3))
    dudy = -f * ((u1 + u2) * (x2 - x1) + (u2 + u3) * (x3 - x2)
                 + (u3 + u1) * (x1 - x3))
    dvdx = f * ((v1 + v2) * (y2 - y1) + (v2 + v3) * (y3 - y2)
                + (v3 + v1) * (y1 - y3))
    dvdy = -f * ((v1 + v2) * (x2 - x1) + (v2 + v3) * (x3 - x2)
                 + (v3 + v1) * (x1 - x3))

    return dudx, dudy, dvdx, dvdy


@njit(cache=True, nogil=True)
def _invariants(dudx, dudy, dvdx, dvdy):
    """Divergence, shear and total deformation [1/day]."""
    div = (dudx + dvdy) * SECONDS_PER_DAY
    shr = math.sqrt((dudx - dvdy)**2 + (dudy + dvdx)**2) * SECONDS_PER_DAY
    return div, shr, math.sqrt(div**2 + shr**2)


@njit(cache=True, parallel=True)
def compute_strain_rates_numba(
    x1: np.ndarray, y1: np.ndarray,
    x2: np.ndarray, y2: np.ndarray,
    x3: np.ndarray, y3: np.ndarray,
    area: np.ndarray,
    u1: np.ndarray, u2: np.ndarray, u3: np.ndarray,
    v1: np.ndarray, v2: np.ndarray, v3: np.ndarray,
    min_area: float
) -> np.ndarray:
    """
    Strain rates and invariants for many triangles.

    Returns:
        Array of shape (n, 7): dudx, dudy, dvdx, dvdy [1/s],
        divergence, shear, deformation [1/day]. Rows with area below
        min_area are NaN.
    """
    n = len(area)
    out = np.full((n, 7), np.nan, dtype=np.float64)

    for r in prange(n):
        if not area[r] >= min_area:
            continue

        dudx, dudy, dvdx, dvdy = _strain_rates(
            x1[r], y1[r], x2[r], y2[r], x3[r], y3[r], area[r],
            u1[r], u2[r], u3[r], v1[r], v2[r], v3[r]
        )
        div, shr, deform = _invariants(dudx, dudy, dvdx, dvdy)

        out[r, 0] = dudx
        out[r, 1] = dudy
        out[r, 2] = dvdx
        out[r, 3] = dvdy
        out[r, 4] = div
        out[r, 5] = shr
        out[r, 6] = deform

    return out


def strain_rates(
    x1: float, y1: float, x2: float, y2: float, x3: float, y3: float,
    area: float,
    u1: float, u2: float, u3: float,
    v1: float, v2: float, v3: float
) -> dict:
    """
    Differential kinematic properties of a single triangle.

    Args:
        x1..y3: Vertex coordinates [m], positive orientation
        area: Triangle area [m²], must be positive
        u1..u3, v1..v3: Vertex velocity components [m/s]

    Returns:
        Dictionary with dudx, dudy, dvdx, dvdy [1/s] and divergence,
        shear, deformation [1/day]

    Raises:
        ValueError: If area is not above the degeneracy threshold
    """
    if not area >= MIN_AREA:
        raise ValueError(f"Triangle area {area:.3e} m² is degenerate")

    dudx, dudy, dvdx, dvdy = _strain_rates(
        float(x1), float(y1), float(x2), float(y2), float(x3), float(y3),
        float(area), float(u1), float(u2), float(u3),
        float(v1), float(v2), float(v3)
    )
    div, shr, deform = _invariants(dudx, dudy, dvdx, dvdy)

    return {
        'dudx': dudx,
        'dudy': dudy,
        'dvdx': dvdx,
        'dvdy': dvdy,
        'divergence': div,
        'shear': shr,
        'deformation': deform,
    }


def add_strain_rates(
    triangles: pd.DataFrame,
    inplace: bool = True,
    min_area: float = MIN_AREA
) -> pd.DataFrame:
    """
    Append strain-rate columns to a triangle table.

    Adds dudx, dudy, dvdx, dvdy [1/s] and divergence, shear,
    deformation [1/day]. Row order is preserved.

    Args:
        triangles: Table with x1..y3, area, u1..u3, v1..v3 columns
        inplace: Modify ``triangles`` directly (otherwise work on a copy)
        min_area: Rows below this area [m²] get NaN instead of a value

    Returns:
        The enriched table
    """
    df = triangles if inplace else triangles.copy()

    if len(df) == 0:
        for col in STRAIN_COLUMNS:
            df[col] = pd.Series(dtype=np.float64)
        return df

    cols = ['x1', 'y1', 'x2', 'y2', 'x3', 'y3', 'area',
            'u1', 'u2', 'u3', 'v1', 'v2', 'v3']
    arrays = [df[c].to_numpy(dtype=np.float64) for c in cols]

    out = compute_strain_rates_numba(*arrays, float(min_area))

    n_degenerate = int(np.sum(~(arrays[6] >= min_area)))
    if n_degenerate:
        logger.warning(
            f"{n_degenerate} triangle(s) with area below {min_area:.1e} m²; "
            "strain rates set to NaN"
        )

    for i, col in enumerate(STRAIN_COLUMNS):
        df[col] = out[:, i]

    return df
