"""Core computations for buoy triangle deformation."""

from .exceptions import (
    IceDriftError,
    ConfigurationError,
    InsufficientDataError,
    AnalysisCancelled,
)
from .observations import BuoyObservation, observations_to_frame
from .geometry import (
    Vertex,
    Triangle,
    signed_area,
    is_positively_oriented,
    interior_angles,
    has_sharp_angle,
)
from .triangles import TriangleFinder, get_triangles, empty_triangles
from .kinematics import add_strain_rates, strain_rates
from .power_law import PowerLaw, fit_power_law, predict_power_law
from .tracks import distance, bearing, uv_to_direction, winter, derive_speeds
from .enrichment import get_triangle_rows, add_triangle_mean_cols

__all__ = [
    "IceDriftError",
    "ConfigurationError",
    "InsufficientDataError",
    "AnalysisCancelled",
    "BuoyObservation",
    "observations_to_frame",
    "Vertex",
    "Triangle",
    "signed_area",
    "is_positively_oriented",
    "interior_angles",
    "has_sharp_angle",
    "TriangleFinder",
    "get_triangles",
    "empty_triangles",
    "add_strain_rates",
    "strain_rates",
    "PowerLaw",
    "fit_power_law",
    "predict_power_law",
    "distance",
    "bearing",
    "uv_to_direction",
    "winter",
    "derive_speeds",
    "get_triangle_rows",
    "add_triangle_mean_cols",
]
