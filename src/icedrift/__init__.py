"""
icedrift: Sea-Ice Deformation from Drifting Buoy Triangles

Estimates sea-ice divergence, shear and total deformation rate from the
drift of free-floating buoys, at multiple spatial scales.

Buoys observed at the same instant are combined into triangles:
    - All 3-combinations per timestamp, optionally with fixed
      reference points (e.g. shore points)
    - Rejection of sharp (< 15°) and degenerate triangles
    - Strain-rate tensor from vertex velocities (Green's theorem)
    - Power law deformation = α · L^β with L = sqrt(area) in km

Features:
    - Numba JIT compilation of the combinatorial search
    - Thread-parallel processing of independent timestamps
    - Haversine track speeds and bearings
    - Per-triangle means of environmental covariates

Example:
    >>> from icedrift import get_triangles, fit_power_law
    >>> triangles = get_triangles(observations, static=shore_points)
    >>> pl = fit_power_law(triangles)
    >>> pl.predict(10.0)  # deformation rate at 10 km [1/day]

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .core.exceptions import (
    IceDriftError,
    ConfigurationError,
    InsufficientDataError,
    AnalysisCancelled,
)
from .core.observations import BuoyObservation, observations_to_frame
from .core.geometry import (
    Vertex,
    Triangle,
    signed_area,
    is_positively_oriented,
    interior_angles,
    has_sharp_angle,
)
from .core.triangles import (
    TriangleFinder,
    get_triangles,
    empty_triangles,
    summarize_triangles,
)
from .core.kinematics import add_strain_rates, strain_rates
from .core.power_law import PowerLaw, fit_power_law, predict_power_law
from .core.tracks import (
    distance,
    bearing,
    uv_to_direction,
    winter,
    track_speeds,
    derive_speeds,
)
from .core.enrichment import get_triangle_rows, add_triangle_mean_cols
from .io.config_manager import ConfigManager
from .io.data_handler import DataHandler

__all__ = [
    # Errors
    "IceDriftError",
    "ConfigurationError",
    "InsufficientDataError",
    "AnalysisCancelled",
    # Data model
    "BuoyObservation",
    "observations_to_frame",
    # Geometry
    "Vertex",
    "Triangle",
    "signed_area",
    "is_positively_oriented",
    "interior_angles",
    "has_sharp_angle",
    # Triangles and kinematics
    "TriangleFinder",
    "get_triangles",
    "empty_triangles",
    "summarize_triangles",
    "add_strain_rates",
    "strain_rates",
    # Power law
    "PowerLaw",
    "fit_power_law",
    "predict_power_law",
    # Tracks
    "distance",
    "bearing",
    "uv_to_direction",
    "winter",
    "track_speeds",
    "derive_speeds",
    # Enrichment
    "get_triangle_rows",
    "add_triangle_mean_cols",
    # IO
    "ConfigManager",
    "DataHandler",
]
