"""Per-triangle means of buoy covariates (wind, ice, distance to shore)."""

import numpy as np
import pandas as pd
from typing import Optional, Sequence

MEAN_COLUMNS = [
    'dist2shore', 't_air', 'wind_speed', 'speed', 'sithic', 'siconc',
    'lon', 'lat',
]


def get_triangle_rows(triangle: pd.Series, observations: pd.DataFrame) -> pd.DataFrame:
    """Observation rows belonging to one triangle (same time, same buoys)."""
    mask = (
        (observations['timestamp'] == triangle['time'])
        & observations['buoy_id'].isin(triangle['buoy_ids'])
    )
    return observations[mask]


def add_triangle_mean_cols(
    triangles: pd.DataFrame,
    observations: pd.DataFrame,
    columns: Optional[Sequence[str]] = None
) -> pd.DataFrame:
    """
    Add covariates averaged over the buoys of each triangle.

    Static reference points have no observation rows and do not
    contribute to the means. Also adds ``scale`` = sqrt(area) [m] and,
    when both speed and wind_speed are averaged, ``wind_factor``.

    Args:
        triangles: Triangle table with time, buoy_ids and area
        observations: Buoy observation table with the covariates
        columns: Covariates to average (default: those of MEAN_COLUMNS
            present in observations)

    Returns:
        The triangle table, modified in place
    """
    if columns is None:
        columns = [c for c in MEAN_COLUMNS if c in observations.columns]
    else:
        missing = [c for c in columns if c not in observations.columns]
        if missing:
            raise KeyError(f"Observation table has no columns: {', '.join(missing)}")

    if len(triangles):
        # one row per (triangle, vertex), joined on (timestamp, buoy_id)
        keys = pd.DataFrame({
            'tri': np.repeat(np.arange(len(triangles)), 3),
            'timestamp': np.repeat(triangles['time'].to_numpy(), 3),
            'buoy_id': np.concatenate([np.asarray(ids) for ids in triangles['buoy_ids']]),
        })
        obs = observations[['timestamp', 'buoy_id', *columns]]
        joined = keys.merge(obs, on=['timestamp', 'buoy_id'], how='left')
        means = joined.groupby('tri')[list(columns)].mean()
        means = means.reindex(np.arange(len(triangles)))
        for col in columns:
            triangles[col] = means[col].to_numpy()
    else:
        for col in columns:
            triangles[col] = pd.Series(dtype=np.float64)

    if 'speed' in columns and 'wind_speed' in columns:
        triangles['wind_factor'] = triangles['speed'] / triangles['wind_speed']
    triangles['scale'] = np.sqrt(triangles['area'])

    return triangles
