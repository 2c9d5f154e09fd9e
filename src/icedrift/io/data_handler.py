"""
Data Handler for Buoy Deformation Analyses.

Reads:
    - CSV: Buoy observations and static reference points

Saves:
    - CSV: Triangle table with differential kinematics
    - CSV: Power-law parameters and summary metrics

Coordinate convention:
    - x: Eastward [m]
    - y: Northward [m]
"""

import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, Any, Optional

from ..core.observations import prepare_observations, prepare_static


class DataHandler:
    """Handle reading and saving analysis data."""

    @staticmethod
    def load_observations(filepath: str) -> pd.DataFrame:
        """
        Load buoy observations from CSV.

        Required columns: buoy_id, timestamp, x, y, speed, bearing.

        Args:
            filepath: Input file path

        Returns:
            Observation table with parsed timestamps
        """
        df = pd.read_csv(filepath)
        if 'timestamp' in df.columns:
            df['timestamp'] = pd.to_datetime(df['timestamp'])
        return prepare_observations(df)

    @staticmethod
    def load_static(filepath: Optional[str]) -> Optional[pd.DataFrame]:
        """
        Load static reference points from CSV.

        Required columns: buoy_id, x, y.
        """
        if filepath is None:
            return None
        return prepare_static(pd.read_csv(filepath))

    @staticmethod
    def save_triangles_csv(filepath: str, triangles: pd.DataFrame):
        """
        Save triangle table to CSV.

        The buoy id triple is written as id1, id2, id3 columns.

        Args:
            filepath: Output file path
            triangles: Triangle table
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        df = triangles.drop(columns=['buoy_ids'])
        ids = np.array([list(t) for t in triangles['buoy_ids']], dtype=np.int64)
        ids = ids.reshape(len(triangles), 3)
        insert_at = df.columns.get_loc('area') + 1
        for i in range(3):
            df.insert(insert_at + i, f'id{i + 1}', ids[:, i])

        df.to_csv(filepath, index=False, float_format='%.8e')

    @staticmethod
    def load_triangles_csv(filepath: str) -> pd.DataFrame:
        """Read a triangle table written by save_triangles_csv."""
        df = pd.read_csv(filepath, parse_dates=['time'])
        id_cols = ['id1', 'id2', 'id3']
        df['buoy_ids'] = [tuple(int(b) for b in row) for row in df[id_cols].to_numpy()]
        return df.drop(columns=id_cols)

    @staticmethod
    def save_summary_csv(filepath: str, summary: Dict[str, Any]):
        """
        Save summary metrics (including power-law parameters) to CSV.

        Args:
            filepath: Output file path
            summary: Dictionary of metrics
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        rows = []
        for key, value in sorted(summary.items()):
            if isinstance(value, (int, float, bool, np.integer, np.floating)):
                rows.append({
                    'Metric': key,
                    'Value': value,
                    'Units': DataHandler._get_metric_units(key),
                })

        df = pd.DataFrame(rows, columns=['Metric', 'Value', 'Units'])
        df.to_csv(filepath, index=False)

    @staticmethod
    def _get_metric_units(metric_name: str) -> str:
        """Get units for a metric."""
        units_map = {
            'n_triangles': 'count',
            'n_timestamps': 'count',
            'scale_min_km': 'km',
            'scale_max_km': 'km',
            'divergence_mean': '1/day',
            'divergence_median': '1/day',
            'shear_mean': '1/day',
            'shear_median': '1/day',
            'deformation_mean': '1/day',
            'deformation_median': '1/day',
            'power_law_alpha': '1/day',
            'power_law_beta': 'dimensionless',
            'power_law_r_squared': 'dimensionless',
            'power_law_n_points': 'count',
        }
        return units_map.get(metric_name, 'unknown')
