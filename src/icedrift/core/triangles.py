"""
Triangle Enumeration for Buoy Deformation Analysis.

For every timestamp, all 3-combinations of the buoys observed at that
instant (optionally augmented with fixed reference points) are tested:

    1. Reject if more static references than allowed
    2. Re-order vertices to positive orientation (swap 2nd and 3rd)
    3. Reject if any interior angle < min_angle
    4. Reject (count as degenerate) if area < min_area
    5. Velocity components from speed and bearing:
           u = speed · sin(bearing),  v = speed · cos(bearing)

When static references are involved, only the smallest triangle is kept
among those sharing the same set of moving buoys.

The combinatorial search is O(n³) per timestamp and runs in a
Numba-compiled kernel; independent timestamps may be processed by a
thread pool.
"""

import logging
import threading
import numpy as np
import pandas as pd
from numba import njit
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple, List
from tqdm import tqdm

from .geometry import _signed_area, _is_too_sharp
from .kinematics import add_strain_rates, MIN_AREA
from .observations import prepare_observations, prepare_static
from .exceptions import ConfigurationError, AnalysisCancelled


TRIANGLE_COLUMNS = [
    'time', 'x1', 'y1', 'x2', 'y2', 'x3', 'y3', 'area',
    'u1', 'u2', 'u3', 'v1', 'v2', 'v3', 'buoy_ids', 'n_static',
]

logger = logging.getLogger(__name__)


def empty_triangles() -> pd.DataFrame:
    """Triangle table with no rows and the standard dtypes."""
    data = {'time': pd.Series(dtype='datetime64[ns]')}
    for col in TRIANGLE_COLUMNS[1:14]:
        data[col] = pd.Series(dtype=np.float64)
    data['buoy_ids'] = pd.Series(dtype=object)
    data['n_static'] = pd.Series(dtype=np.int64)
    return pd.DataFrame(data, columns=TRIANGLE_COLUMNS)


@njit(cache=True, nogil=True)
def _enumerate_triangles(
    x: np.ndarray,
    y: np.ndarray,
    is_static: np.ndarray,
    max_static: int,
    min_angle: float,
    min_area: float
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Search all index triples i < j < k for acceptable triangles.

    Args:
        x, y: Vertex coordinates [m]
        is_static: 1 for static references, 0 otherwise
        max_static: Maximum static references per triangle
        min_angle: Minimum interior angle [degrees]
        min_area: Minimum area [m²]

    Returns:
        Tuple of (indices, areas, counts) where indices has shape (m, 3)
        in positive orientation, areas has shape (m,), and counts holds
        the number of rejections (too static, too sharp, degenerate).
    """
    n = len(x)
    n_max = n * (n - 1) * (n - 2) // 6
    capacity = min(n_max, max(1024, 4 * n))

    indices = np.empty((capacity, 3), dtype=np.int64)
    areas = np.empty(capacity, dtype=np.float64)
    counts = np.zeros(3, dtype=np.int64)
    m = 0

    for i in range(n):
        for j in range(i + 1, n):
            for k in range(j + 1, n):
                if is_static[i] + is_static[j] + is_static[k] > max_static:
                    counts[0] += 1
                    continue

                b = j
                c = k
                area = _signed_area(x[i], y[i], x[b], y[b], x[c], y[c])
                if not area > 0.0:
                    b = k
                    c = j
                    area = -area

                if _is_too_sharp(x[i], y[i], x[b], y[b], x[c], y[c], min_angle):
                    counts[1] += 1
                    continue

                if area < min_area:
                    counts[2] += 1
                    continue

                if m == capacity:
                    capacity = min(n_max, 2 * capacity)
                    grown_indices = np.empty((capacity, 3), dtype=np.int64)
                    grown_indices[:m] = indices[:m]
                    indices = grown_indices
                    grown_areas = np.empty(capacity, dtype=np.float64)
                    grown_areas[:m] = areas[:m]
                    areas = grown_areas

                indices[m, 0] = i
                indices[m, 1] = b
                indices[m, 2] = c
                areas[m] = area
                m += 1

    return indices[:m], areas[:m], counts


def smallest_static_mask(
    buoy_ids: np.ndarray,
    static_flags: np.ndarray,
    areas: np.ndarray
) -> np.ndarray:
    """
    Keep-mask for the smallest triangle per shared set of moving buoys.

    Only triangles with at least one static vertex take part; they are
    grouped by the set of their moving-buoy ids and all but the minimum
    area one in each group are dropped. Ties keep the first triangle.

    Args:
        buoy_ids: (m, 3) buoy ids per triangle
        static_flags: (m, 3) static flags per triangle vertex
        areas: (m,) triangle areas

    Returns:
        Boolean array of shape (m,)
    """
    keep = np.ones(len(areas), dtype=bool)
    smallest: Dict[frozenset, int] = {}

    for r in range(len(areas)):
        if not static_flags[r].any():
            continue
        key = frozenset(int(b) for b, s in zip(buoy_ids[r], static_flags[r]) if not s)
        best = smallest.get(key)
        if best is None:
            smallest[key] = r
        elif areas[r] < areas[best]:
            keep[best] = False
            smallest[key] = r
        else:
            keep[r] = False

    return keep


@dataclass
class TriangleFinder:
    """
    Enumerate and filter buoy triangles, one timestamp at a time.

    Attributes:
        min_angle: Minimum interior angle [degrees]
        max_static: Maximum number of static references per triangle
        keep_smallest_static: Keep only the smallest triangle among those
            sharing the same moving buoys when static references are used
        min_area: Minimum triangle area [m²]
        n_workers: Number of threads processing timestamp groups
        stats: Counters from the last call to find()

    Example:
        >>> finder = TriangleFinder(max_static=1)
        >>> triangles = finder.find(observations, static=references)
    """
    min_angle: float = 15.0
    max_static: int = 1
    keep_smallest_static: bool = True
    min_area: float = MIN_AREA
    n_workers: int = 1
    stats: Dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        if self.max_static < 0:
            raise ConfigurationError(f"max_static must be >= 0, got {self.max_static}")
        if not 0.0 <= self.min_angle <= 60.0:
            raise ConfigurationError(
                f"min_angle must be within [0, 60] degrees, got {self.min_angle}"
            )
        if not self.min_area >= 0.0:
            raise ConfigurationError(f"min_area must be >= 0, got {self.min_area}")
        if self.n_workers < 1:
            raise ConfigurationError(f"n_workers must be >= 1, got {self.n_workers}")

    def find(
        self,
        observations: pd.DataFrame,
        static: Optional[pd.DataFrame] = None,
        cancel_event: Optional[threading.Event] = None,
        verbose: bool = False
    ) -> pd.DataFrame:
        """
        Form all eligible triangles.

        Args:
            observations: Buoy observation table
            static: Optional table of fixed reference points, added to
                every timestamp group
            cancel_event: Set this event to stop before the next group
            verbose: Show a progress bar

        Returns:
            Triangle table sorted by time (empty table if none found)

        Raises:
            ConfigurationError: Malformed tables or colliding static ids
            AnalysisCancelled: If cancel_event was set
        """
        df = prepare_observations(observations)
        static = prepare_static(static)

        if static is not None:
            clash = set(static['buoy_id']) & set(df['buoy_id'])
            if clash:
                raise ConfigurationError(
                    f"Static reference ids also used by moving buoys: {sorted(clash)}"
                )

        self.stats = {
            'n_groups': 0,
            'n_groups_skipped': 0,
            'n_rejected_static': 0,
            'n_rejected_sharp': 0,
            'n_degenerate': 0,
            'n_deduplicated': 0,
            'n_triangles': 0,
        }

        groups = [(t, g) for t, g in df.groupby('timestamp', sort=True)]
        self.stats['n_groups'] = len(groups)

        def work(item):
            if cancel_event is not None and cancel_event.is_set():
                raise AnalysisCancelled("Triangle enumeration cancelled")
            return self._process_group(item[0], item[1], static)

        results: List[Tuple[Optional[pd.DataFrame], np.ndarray, int]] = []
        with tqdm(total=len(groups), desc="Triangles", disable=not verbose) as progress:
            if self.n_workers == 1:
                for item in groups:
                    results.append(work(item))
                    progress.update(1)
            else:
                executor = ThreadPoolExecutor(max_workers=self.n_workers)
                try:
                    futures = [executor.submit(work, item) for item in groups]
                    for future in futures:
                        results.append(future.result())
                        progress.update(1)
                finally:
                    executor.shutdown(wait=True, cancel_futures=True)

        frames = []
        for frame, counts, n_dedup in results:
            self.stats['n_rejected_static'] += int(counts[0])
            self.stats['n_rejected_sharp'] += int(counts[1])
            self.stats['n_degenerate'] += int(counts[2])
            self.stats['n_deduplicated'] += n_dedup
            if frame is None:
                self.stats['n_groups_skipped'] += 1
            elif len(frame):
                frames.append(frame)

        if frames:
            triangles = pd.concat(frames, ignore_index=True)
            triangles = triangles.sort_values('time', kind='mergesort')
            triangles = triangles.reset_index(drop=True)
        else:
            triangles = empty_triangles()

        self.stats['n_triangles'] = len(triangles)
        logger.info(
            f"{self.stats['n_triangles']} triangles from "
            f"{self.stats['n_groups']} timestamps "
            f"({self.stats['n_rejected_sharp']} too sharp, "
            f"{self.stats['n_rejected_static']} too static, "
            f"{self.stats['n_degenerate']} degenerate, "
            f"{self.stats['n_deduplicated']} duplicate static)"
        )
        if self.stats['n_degenerate']:
            logger.debug(
                f"Skipped {self.stats['n_degenerate']} triangles with "
                f"area below {self.min_area:.1e} m²"
            )

        return triangles

    def _process_group(
        self,
        timestamp: pd.Timestamp,
        group: pd.DataFrame,
        static: Optional[pd.DataFrame]
    ) -> Tuple[Optional[pd.DataFrame], np.ndarray, int]:
        """Triangles for one timestamp; frame is None if the group is too small."""
        if static is not None:
            group = pd.concat([group, static], ignore_index=True)

        if len(group) < 3:
            return None, np.zeros(3, dtype=np.int64), 0

        x = group['x'].to_numpy(dtype=np.float64)
        y = group['y'].to_numpy(dtype=np.float64)
        flags = group['is_static'].to_numpy(dtype=bool)
        ids = group['buoy_id'].to_numpy(dtype=np.int64)

        idx, areas, counts = _enumerate_triangles(
            x, y, flags.astype(np.int64),
            int(self.max_static), float(self.min_angle), float(self.min_area)
        )

        n_dedup = 0
        if self.keep_smallest_static and flags.any() and len(areas) > 1:
            keep = smallest_static_mask(ids[idx], flags[idx], areas)
            n_dedup = int(np.sum(~keep))
            idx = idx[keep]
            areas = areas[keep]

        bearing = np.deg2rad(group['bearing'].to_numpy(dtype=np.float64))
        speed = group['speed'].to_numpy(dtype=np.float64)
        u = speed * np.sin(bearing)  # bearing 0 is north
        v = speed * np.cos(bearing)

        i1, i2, i3 = idx[:, 0], idx[:, 1], idx[:, 2]
        frame = pd.DataFrame({
            'time': [timestamp] * len(areas),
            'x1': x[i1], 'y1': y[i1],
            'x2': x[i2], 'y2': y[i2],
            'x3': x[i3], 'y3': y[i3],
            'area': areas,
            'u1': u[i1], 'u2': u[i2], 'u3': u[i3],
            'v1': v[i1], 'v2': v[i2], 'v3': v[i3],
            'buoy_ids': [tuple(int(b) for b in row) for row in ids[idx]],
            'n_static': flags[idx].sum(axis=1).astype(np.int64),
        }, columns=TRIANGLE_COLUMNS)

        return frame, counts, n_dedup


def get_triangles(
    observations: pd.DataFrame,
    static: Optional[pd.DataFrame] = None,
    max_static: int = 1,
    keep_smallest_static: bool = True,
    min_angle: float = 15.0,
    min_area: float = MIN_AREA,
    n_workers: int = 1,
    cancel_event: Optional[threading.Event] = None,
    verbose: bool = False
) -> pd.DataFrame:
    """
    Form all eligible triangles and compute their differential kinematics.

    Triangles are formed from buoys with matching timestamp. Result is
    sorted by time and carries dudx, dudy, dvdx, dvdy, divergence, shear
    and deformation columns.

    Args:
        observations: Buoy observation table
        static: Optional table of fixed reference points
        max_static: Maximum number of static references in a triangle
        keep_smallest_static: Keep only the smallest triangle when static
            references are involved
        min_angle: Minimum interior angle [degrees]
        min_area: Minimum triangle area [m²]
        n_workers: Threads for timestamp groups
        cancel_event: Optional event to stop early
        verbose: Show progress

    Returns:
        Enriched triangle table
    """
    finder = TriangleFinder(
        min_angle=min_angle,
        max_static=max_static,
        keep_smallest_static=keep_smallest_static,
        min_area=min_area,
        n_workers=n_workers,
    )
    triangles = finder.find(observations, static=static,
                            cancel_event=cancel_event, verbose=verbose)
    return add_strain_rates(triangles, inplace=True, min_area=min_area)


def summarize_triangles(triangles: pd.DataFrame) -> Dict[str, Any]:
    """Summary statistics of an enriched triangle table."""
    if len(triangles) == 0:
        return {'n_triangles': 0, 'n_timestamps': 0}

    scale_km = np.sqrt(triangles['area']) / 1000.0
    summary = {
        'n_triangles': int(len(triangles)),
        'n_timestamps': int(triangles['time'].nunique()),
        'scale_min_km': float(scale_km.min()),
        'scale_max_km': float(scale_km.max()),
    }
    for col in ('divergence', 'shear', 'deformation'):
        if col in triangles.columns:
            summary[f'{col}_mean'] = float(triangles[col].mean())
            summary[f'{col}_median'] = float(triangles[col].median())
    return summary
