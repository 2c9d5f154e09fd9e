"""
Buoy Track Kinematics.

Distance, speed and bearing between consecutive fixes of one buoy,
computed on the sphere:

    Haversine distance:
        d = 2R asin( sqrt( sin²(Δφ/2) + cos φ₁ cos φ₂ sin²(Δλ/2) ) )

    Initial bearing (0 = north, 90 = east):
        θ = atan2( sin Δλ cos φ₂, cos φ₁ sin φ₂ - sin φ₁ cos φ₂ cos Δλ )
"""

import numpy as np
import pandas as pd
from typing import Union

from .exceptions import ConfigurationError

EARTH_RADIUS = 6378.1e3  # [m]

ArrayLike = Union[float, np.ndarray]


def distance(
    lat1: ArrayLike,
    lat2: ArrayLike,
    lon1: ArrayLike,
    lon2: ArrayLike,
    radius: float = EARTH_RADIUS
) -> ArrayLike:
    """
    Haversine distance [m] between two points given in degrees.

    Example:
        >>> round(distance(-20.0, 20.0, 0.0, 180.0) / EARTH_RADIUS, 6)
        3.141593
    """
    phi1 = np.deg2rad(lat1)
    phi2 = np.deg2rad(lat2)
    term1 = np.sin((phi2 - phi1) / 2.0)**2
    term2 = np.sin(np.deg2rad(lon2 - lon1) / 2.0)**2 * np.cos(phi1) * np.cos(phi2)
    return 2.0 * radius * np.arcsin(np.sqrt(term1 + term2))


def bearing(
    lat1: ArrayLike,
    lat2: ArrayLike,
    lon1: ArrayLike,
    lon2: ArrayLike
) -> ArrayLike:
    """Initial bearing [degrees, 0-360) from point 1 to point 2."""
    phi1 = np.deg2rad(lat1)
    phi2 = np.deg2rad(lat2)
    dlon = np.deg2rad(np.asarray(lon2) - np.asarray(lon1))
    y = np.cos(phi2) * np.sin(dlon)
    x = np.cos(phi1) * np.sin(phi2) - np.sin(phi1) * np.cos(phi2) * np.cos(dlon)
    return np.mod(np.rad2deg(np.arctan2(y, x)), 360.0)


def uv_to_direction(u: ArrayLike, v: ArrayLike) -> ArrayLike:
    """Direction [degrees from north] of a velocity (u east, v north)."""
    return np.mod(90.0 - np.rad2deg(np.arctan2(v, u)), 360.0)


def winter(timestamp: pd.Timestamp) -> int:
    """Winter season label: winter 2011-2012 is 2012."""
    return timestamp.year + int(timestamp.month > 8)


def track_speeds(df: pd.DataFrame, remove_gaps: bool = False) -> pd.DataFrame:
    """
    Travelled distance, speed and bearing for a single buoy.

    Each row after the first gets the displacement from the previous fix.

    Args:
        df: Fixes of one buoy with buoy_id, timestamp, lon, lat, sorted
            by time
        remove_gaps: Drop rows following a gap longer than one week

    Returns:
        Table without the first fix, with distance [m], speed [m/s] and
        bearing [degrees] columns added
    """
    if df['buoy_id'].nunique() > 1:
        raise ConfigurationError("track_speeds expects the fixes of a single buoy")
    if not df['timestamp'].is_monotonic_increasing:
        raise ConfigurationError("track_speeds expects fixes sorted by timestamp")

    lat = df['lat'].to_numpy(dtype=np.float64)
    lon = df['lon'].to_numpy(dtype=np.float64)
    dt = df['timestamp'].diff().iloc[1:]

    out = df.iloc[1:].copy()
    out['distance'] = distance(lat[:-1], lat[1:], lon[:-1], lon[1:])
    out['speed'] = out['distance'].to_numpy() / dt.dt.total_seconds().to_numpy()
    out['bearing'] = bearing(lat[:-1], lat[1:], lon[:-1], lon[1:])

    if remove_gaps:
        out = out[(dt <= pd.Timedelta(weeks=1)).to_numpy()]

    return out


def derive_speeds(df: pd.DataFrame, remove_gaps: bool = False) -> pd.DataFrame:
    """Apply track_speeds per winter season and buoy."""
    df = df.sort_values(['buoy_id', 'timestamp'], kind='mergesort')
    seasons = df['timestamp'].map(winter)

    parts = [
        track_speeds(track, remove_gaps=remove_gaps)
        for _, track in df.groupby([seasons, df['buoy_id']], sort=True)
        if len(track) > 1
    ]
    if not parts:
        out = df.iloc[0:0].copy()
        for col in ('distance', 'speed', 'bearing'):
            out[col] = pd.Series(dtype=np.float64)
        return out
    return pd.concat(parts, ignore_index=True)
