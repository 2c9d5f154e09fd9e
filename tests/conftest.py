"""Pytest configuration and fixtures for icedrift tests."""

import pytest
import numpy as np
import pandas as pd


T0 = pd.Timestamp("2012-02-01 12:00:00")


def _frame(rows, timestamp=T0):
    """Observation table from (buoy_id, x, y, speed, bearing) tuples."""
    df = pd.DataFrame(rows, columns=['buoy_id', 'x', 'y', 'speed', 'bearing'])
    df.insert(1, 'timestamp', pd.Timestamp(timestamp))
    df['lon'] = 24.0 + df['x'] / 50000.0
    df['lat'] = 65.0 + df['y'] / 111000.0
    return df


@pytest.fixture(scope="session")
def random_seed():
    """Set random seed for reproducibility."""
    np.random.seed(42)
    return 42


@pytest.fixture
def make_observations():
    """Factory building an observation table for one timestamp."""
    return _frame


@pytest.fixture
def right_triangle_obs():
    """
    Right isosceles triangle, legs 1 km; buoy 2 at (1000, 0) drifts east
    at 0.1 m/s, the others are at rest.
    """
    return _frame([
        (1, 0.0, 0.0, 0.0, 0.0),
        (2, 1000.0, 0.0, 0.1, 90.0),
        (3, 0.0, 1000.0, 0.0, 0.0),
    ])


@pytest.fixture
def two_moving_buoys():
    """Two moving buoys 1 km apart on the x-axis."""
    return _frame([
        (1, 0.0, 0.0, 0.05, 10.0),
        (2, 1000.0, 0.0, 0.07, 20.0),
    ])


@pytest.fixture
def static_points():
    """Two shore reference points north of the moving buoys."""
    return pd.DataFrame({
        'buoy_id': [100, 101],
        'x': [500.0, 500.0],
        'y': [800.0, 2000.0],
    })


@pytest.fixture
def buoy_array(random_seed):
    """Ten buoys scattered over 20 km at three timestamps."""
    rng = np.random.default_rng(random_seed)
    frames = []
    for hour in range(3):
        n = 10
        rows = [
            (
                i + 1,
                rng.uniform(0, 20000),
                rng.uniform(0, 20000),
                rng.uniform(0.0, 0.3),
                rng.uniform(0, 360),
            )
            for i in range(n)
        ]
        frames.append(_frame(rows, T0 + pd.Timedelta(hours=hour)))
    # shuffle so grouping and sorting are exercised
    df = pd.concat(frames, ignore_index=True)
    return df.sample(frac=1.0, random_state=1).reset_index(drop=True)


@pytest.fixture
def power_law_table():
    """Triangles with deformation = 2.0 · L^0.5 exactly (L in km)."""
    scale_km = np.array([0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 50.0])
    return pd.DataFrame({
        'area': (scale_km * 1000.0)**2,
        'deformation': 2.0 * scale_km**0.5,
    })
