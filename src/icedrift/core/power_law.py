"""
Scale Dependence of Sea-Ice Deformation.

Deformation rate follows a power law of the triangle length scale:

    deformation = α · L^β,    L = sqrt(area) [km]

fitted by ordinary least squares in log-log space:

    log(deformation) = log(α) + β log(L)
"""

import numpy as np
import pandas as pd
from scipy import linalg
from dataclasses import dataclass
from typing import Union

from .exceptions import InsufficientDataError


@dataclass(frozen=True)
class PowerLaw:
    """
    Fitted power law deformation = alpha · scale^beta.

    Attributes:
        alpha: Deformation rate at 1 km scale [1/day]
        beta: Scaling exponent
        n_points: Number of triangles used in the fit
        r_squared: Coefficient of determination in log-log space
    """
    alpha: float
    beta: float
    n_points: int = 0
    r_squared: float = np.nan

    def predict(self, scale: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Deformation rate [1/day] at the given scale [km]."""
        return predict_power_law(scale, self)

    def __repr__(self) -> str:
        return (
            f"PowerLaw(alpha={self.alpha:.4g}, beta={self.beta:.4f}, "
            f"n={self.n_points})"
        )


def fit_power_law(triangles: pd.DataFrame) -> PowerLaw:
    """
    Fit a power law for scale vs. deformation rate.

    Args:
        triangles: Table with 'area' [m²] and 'deformation' [1/day]

    Returns:
        PowerLaw fitted on triangles with positive deformation

    Raises:
        KeyError: If a required column is missing
        InsufficientDataError: Fewer than two usable triangles, or all
            triangles share a single scale
    """
    for col in ('area', 'deformation'):
        if col not in triangles.columns:
            raise KeyError(f"Triangle table has no '{col}' column")

    df = triangles[triangles['deformation'] > 0]
    n = len(df)
    if n < 2:
        raise InsufficientDataError(
            f"Power-law fit needs at least 2 triangles with positive "
            f"deformation, got {n}"
        )

    scale = np.sqrt(df['area'].to_numpy(dtype=np.float64)) / 1000.0
    log_scale = np.log(scale)
    log_deform = np.log(df['deformation'].to_numpy(dtype=np.float64))

    A = np.column_stack([np.ones(n), log_scale])
    coef, _, rank, _ = linalg.lstsq(A, log_deform)
    if rank < 2:
        raise InsufficientDataError(
            "Power-law fit is undetermined: all triangles have the same scale"
        )

    log_alpha, beta = coef
    residual = log_deform - A @ coef
    ss_tot = np.sum((log_deform - log_deform.mean())**2)
    r_squared = 1.0 - np.sum(residual**2) / ss_tot if ss_tot > 0 else 1.0

    return PowerLaw(
        alpha=float(np.exp(log_alpha)),
        beta=float(beta),
        n_points=n,
        r_squared=float(r_squared),
    )


def predict_power_law(
    scale: Union[float, np.ndarray],
    power_law: PowerLaw
) -> Union[float, np.ndarray]:
    """Predict deformation rate for given scale [km] and power law."""
    return power_law.alpha * np.power(scale, power_law.beta)
