"""
Buoy Observation Records.

A buoy observation is one position fix of a drifting buoy (or a fixed
geographic reference point) together with its speed and bearing:

    buoy_id, timestamp, lon, lat, x, y, speed, bearing, is_static

Coordinate convention:
    - x: Eastward [m] in the projected plane
    - y: Northward [m] in the projected plane
    - bearing: degrees clockwise from north (0 = N, 90 = E)
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, asdict
from typing import Iterable, Optional

from .exceptions import ConfigurationError


OBSERVATION_COLUMNS = [
    'buoy_id', 'timestamp', 'lon', 'lat', 'x', 'y', 'speed', 'bearing',
    'is_static',
]

REQUIRED_COLUMNS = ['buoy_id', 'timestamp', 'x', 'y', 'speed', 'bearing']
STATIC_REQUIRED_COLUMNS = ['buoy_id', 'x', 'y']


@dataclass(frozen=True)
class BuoyObservation:
    """
    Single buoy position fix.

    Attributes:
        buoy_id: Buoy identifier
        timestamp: Time of the fix
        lon: Longitude [degrees]
        lat: Latitude [degrees]
        x: Projected eastward position [m]
        y: Projected northward position [m]
        speed: Drift speed [m/s]
        bearing: Drift direction [degrees clockwise from north]
        is_static: True for a fixed reference point
    """
    buoy_id: int
    timestamp: pd.Timestamp
    lon: float
    lat: float
    x: float
    y: float
    speed: float = 0.0
    bearing: float = 0.0
    is_static: bool = False

    @property
    def u(self) -> float:
        """Eastward velocity component [m/s]."""
        return self.speed * np.sin(np.deg2rad(self.bearing))

    @property
    def v(self) -> float:
        """Northward velocity component [m/s]."""
        return self.speed * np.cos(np.deg2rad(self.bearing))


def observations_to_frame(observations: Iterable[BuoyObservation]) -> pd.DataFrame:
    """Build an observation table from BuoyObservation records."""
    rows = [asdict(obs) for obs in observations]
    if not rows:
        return empty_observations()
    df = pd.DataFrame(rows, columns=OBSERVATION_COLUMNS)
    df['timestamp'] = pd.to_datetime(df['timestamp'])
    return df


def empty_observations() -> pd.DataFrame:
    """Observation table with no rows and the standard dtypes."""
    return pd.DataFrame({
        'buoy_id': pd.Series(dtype=np.int64),
        'timestamp': pd.Series(dtype='datetime64[ns]'),
        'lon': pd.Series(dtype=np.float64),
        'lat': pd.Series(dtype=np.float64),
        'x': pd.Series(dtype=np.float64),
        'y': pd.Series(dtype=np.float64),
        'speed': pd.Series(dtype=np.float64),
        'bearing': pd.Series(dtype=np.float64),
        'is_static': pd.Series(dtype=bool),
    })


def _check_columns(df: pd.DataFrame, required, what: str):
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ConfigurationError(
            f"{what} table is missing required columns: {', '.join(missing)}"
        )


def prepare_observations(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate a moving-buoy observation table.

    Adds an all-False ``is_static`` column when absent. The input is not
    modified. A buoy may appear at most once per timestamp, so every
    triangle has three distinct buoys.
    """
    _check_columns(df, REQUIRED_COLUMNS, "Observation")
    df = df.copy()
    if 'is_static' not in df.columns:
        df['is_static'] = False
    df['is_static'] = df['is_static'].astype(bool)
    df['buoy_id'] = df['buoy_id'].astype(np.int64)
    duplicated = df.duplicated(subset=['timestamp', 'buoy_id'])
    if duplicated.any():
        first = df.loc[duplicated, ['timestamp', 'buoy_id']].iloc[0]
        raise ConfigurationError(
            f"{int(duplicated.sum())} duplicate (timestamp, buoy_id) rows, "
            f"first: buoy {first['buoy_id']} at {first['timestamp']}"
        )
    return df


def prepare_static(static: Optional[pd.DataFrame]) -> Optional[pd.DataFrame]:
    """
    Validate a static-reference table.

    Static references never move: missing speed/bearing become 0 and
    ``is_static`` is forced True. Timestamps are irrelevant and dropped.
    """
    if static is None:
        return None
    _check_columns(static, STATIC_REQUIRED_COLUMNS, "Static reference")
    static = static.copy()
    for col in ('speed', 'bearing'):
        if col not in static.columns:
            static[col] = 0.0
        static[col] = static[col].fillna(0.0)
    static['is_static'] = True
    static['buoy_id'] = static['buoy_id'].astype(np.int64)
    if static['buoy_id'].duplicated().any():
        raise ConfigurationError("Static reference ids must be unique")
    return static.drop(columns=['timestamp'], errors='ignore').reset_index(drop=True)
