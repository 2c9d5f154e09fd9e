"""
Comprehensive tests for icedrift core functionality.

Run with: pytest tests/ -v
"""

import math
import threading
from itertools import combinations

import numpy as np
import pandas as pd
import pytest

from icedrift import (
    BuoyObservation,
    observations_to_frame,
    Triangle,
    signed_area,
    is_positively_oriented,
    interior_angles,
    has_sharp_angle,
    TriangleFinder,
    get_triangles,
    empty_triangles,
    summarize_triangles,
    add_strain_rates,
    strain_rates,
    PowerLaw,
    fit_power_law,
    predict_power_law,
    ConfigurationError,
    InsufficientDataError,
    AnalysisCancelled,
)
from icedrift.core.triangles import TRIANGLE_COLUMNS, smallest_static_mask
from icedrift.core.kinematics import STRAIN_COLUMNS, compute_strain_rates_numba
from icedrift.core.observations import empty_observations


class TestGeometry:
    """Test triangle primitives."""

    def test_signed_area_counter_clockwise(self):
        """Test positive area for counter-clockwise vertices."""
        t = Triangle.from_coords(0.0, 0.0, 1000.0, 0.0, 0.0, 1000.0)
        assert signed_area(t) == pytest.approx(500000.0)
        assert is_positively_oriented(t)

    def test_signed_area_antisymmetric(self):
        """Test that swapping two vertices flips the sign."""
        t = Triangle.from_coords(3.0, 1.0, -2.0, 7.5, 4.0, 9.0)
        assert t.swapped().signed_area == pytest.approx(-t.signed_area)
        assert t.oriented().signed_area > 0
        assert t.swapped().oriented().signed_area > 0

    def test_collinear_zero_area(self):
        """Test collinear points have zero area and count as sharp."""
        t = Triangle.from_coords(0.0, 0.0, 1.0, 1.0, 2.0, 2.0)
        assert signed_area(t) == pytest.approx(0.0)
        assert not is_positively_oriented(t)
        assert has_sharp_angle(t, 15.0)

    def test_angles_in_vertex_order(self):
        """Test angles are reported at vertices 1, 2, 3."""
        t = Triangle.from_coords(0.0, 0.0, 1000.0, 0.0, 0.0, 1000.0)
        a1, a2, a3 = interior_angles(t)
        assert a1 == pytest.approx(90.0)
        assert a2 == pytest.approx(45.0)
        assert a3 == pytest.approx(45.0)

    def test_angles_sum_to_180(self):
        """Test interior angle sum for arbitrary triangles."""
        rng = np.random.default_rng(3)
        for _ in range(20):
            t = Triangle.from_coords(*rng.uniform(-1e4, 1e4, 6))
            assert sum(t.angles) == pytest.approx(180.0, abs=1e-8)

    def test_equilateral_angles(self):
        """Test equilateral triangle has 60 degree angles."""
        t = Triangle.from_coords(0.0, 0.0, 1.0, 0.0, 0.5, math.sqrt(3) / 2)
        assert np.allclose(t.angles, 60.0)
        assert not has_sharp_angle(t, 59.9)
        assert has_sharp_angle(t, 60.1)

    def test_coincident_vertices(self):
        """Test coincident vertices give NaN angles and are rejected."""
        t = Triangle.from_coords(1.0, 1.0, 1.0, 1.0, 5.0, 0.0)
        assert all(np.isnan(a) for a in t.angles)
        assert has_sharp_angle(t, 0.0)

    def test_sharp_triangle(self):
        """Test thin triangle is flagged as too sharp."""
        t = Triangle.from_coords(0.0, 0.0, 10000.0, 0.0, 5000.0, 500.0)
        assert min(t.angles) < 15.0
        assert has_sharp_angle(t, 15.0)

    def test_vertices(self):
        """Test flat coordinate tuple."""
        t = Triangle.from_coords(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
        assert t.vertices() == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)


class TestObservations:
    """Test buoy observation records."""

    def test_velocity_components(self):
        """Test bearing convention (0 = north, 90 = east)."""
        east = BuoyObservation(1, pd.Timestamp("2012-01-01"), 24.0, 65.0,
                               0.0, 0.0, speed=0.2, bearing=90.0)
        north = BuoyObservation(2, pd.Timestamp("2012-01-01"), 24.0, 65.0,
                                0.0, 0.0, speed=0.2, bearing=0.0)
        assert east.u == pytest.approx(0.2)
        assert east.v == pytest.approx(0.0, abs=1e-15)
        assert north.u == pytest.approx(0.0, abs=1e-15)
        assert north.v == pytest.approx(0.2)

    def test_observations_to_frame(self):
        """Test conversion of records to a table."""
        t = pd.Timestamp("2012-01-01")
        df = observations_to_frame([
            BuoyObservation(1, t, 24.0, 65.0, 0.0, 0.0),
            BuoyObservation(2, t, 24.1, 65.0, 100.0, 0.0, is_static=True),
        ])
        assert list(df['buoy_id']) == [1, 2]
        assert list(df['is_static']) == [False, True]

    def test_empty_observations(self):
        """Test empty table conversion."""
        df = observations_to_frame([])
        assert len(df) == 0
        assert 'timestamp' in df.columns


class TestTriangleFinder:
    """Test triangle enumeration and filtering."""

    def test_single_triangle(self, right_triangle_obs):
        """Test three buoys give exactly one triangle."""
        triangles = TriangleFinder().find(right_triangle_obs)
        assert len(triangles) == 1
        assert list(triangles.columns) == TRIANGLE_COLUMNS

        row = triangles.iloc[0]
        assert row['area'] == pytest.approx(500000.0)
        assert row['buoy_ids'] == (1, 2, 3)
        assert row['n_static'] == 0
        assert row['u2'] == pytest.approx(0.1)
        assert row['v2'] == pytest.approx(0.0, abs=1e-12)

    def test_orientation_swap(self, make_observations):
        """Test clockwise input is re-ordered with its velocities and ids."""
        obs = make_observations([
            (1, 0.0, 0.0, 0.0, 0.0),
            (2, 0.0, 1000.0, 0.1, 0.0),
            (3, 1000.0, 0.0, 0.2, 90.0),
        ])
        row = TriangleFinder().find(obs).iloc[0]

        assert row['buoy_ids'] == (1, 3, 2)
        assert (row['x2'], row['y2']) == (1000.0, 0.0)
        assert (row['x3'], row['y3']) == (0.0, 1000.0)
        assert row['u2'] == pytest.approx(0.2)
        assert row['v3'] == pytest.approx(0.1)
        assert row['area'] > 0

    def test_too_few_observations(self, two_moving_buoys):
        """Test group with fewer than three buoys is skipped."""
        finder = TriangleFinder()
        triangles = finder.find(two_moving_buoys)
        assert len(triangles) == 0
        assert finder.stats['n_groups_skipped'] == 1

    def test_empty_input(self):
        """Test empty input returns an empty, typed table."""
        triangles = TriangleFinder().find(empty_observations())
        assert len(triangles) == 0
        assert list(triangles.columns) == TRIANGLE_COLUMNS
        assert triangles['area'].dtype == np.float64

    def test_empty_input_with_kinematics(self):
        """Test empty input through the full pipeline."""
        triangles = get_triangles(empty_observations())
        assert len(triangles) == 0
        for col in STRAIN_COLUMNS:
            assert col in triangles.columns

    def test_collinear_rejected(self, make_observations):
        """Test collinear buoys give no triangle."""
        obs = make_observations([
            (1, 0.0, 0.0, 0.1, 0.0),
            (2, 1000.0, 1000.0, 0.1, 0.0),
            (3, 2000.0, 2000.0, 0.1, 0.0),
        ])
        finder = TriangleFinder()
        assert len(finder.find(obs)) == 0
        assert finder.stats['n_rejected_sharp'] == 1

    def test_tiny_triangle_skipped(self, make_observations):
        """Test a well-shaped triangle below min_area is counted, not kept."""
        obs = make_observations([
            (1, 0.0, 0.0, 0.1, 0.0),
            (2, 0.001, 0.0, 0.1, 0.0),
            (3, 0.0, 0.001, 0.1, 0.0),
        ])
        finder = TriangleFinder()
        triangles = finder.find(obs)
        assert len(triangles) == 0
        assert finder.stats['n_degenerate'] == 1
        assert finder.stats['n_rejected_sharp'] == 0

        # same shape passes once the threshold is below its 5e-7 m² area
        assert len(TriangleFinder(min_area=1e-7).find(obs)) == 1

    def test_many_triangles_one_timestamp(self, make_observations):
        """Test thousands of triangles from one group are all returned."""
        rng = np.random.default_rng(7)
        n = 40
        obs = make_observations([
            (i + 1, rng.uniform(0, 50000), rng.uniform(0, 50000), 0.1, 45.0)
            for i in range(n)
        ])
        finder = TriangleFinder(min_angle=0.0)
        triangles = finder.find(obs)

        assert len(triangles) > 1024
        assert len(triangles) + finder.stats['n_degenerate'] == math.comb(n, 3)
        assert len(set(triangles['buoy_ids'].map(frozenset))) == len(triangles)
        assert (triangles['area'] > 0).all()

    def test_candidate_count_bound(self, buoy_array):
        """Test at most C(n,3) triangles per timestamp."""
        finder = TriangleFinder()
        triangles = finder.find(buoy_array)

        for _, group in triangles.groupby('time'):
            assert len(group) <= math.comb(10, 3)

        total = 3 * math.comb(10, 3)
        rejected = finder.stats['n_rejected_sharp'] + finder.stats['n_degenerate']
        assert len(triangles) + rejected == total

    def test_accepted_triangles_valid(self, buoy_array):
        """Test all accepted triangles are positive and not too sharp."""
        triangles = TriangleFinder().find(buoy_array)
        assert len(triangles) > 0

        for _, row in triangles.iterrows():
            t = Triangle.from_coords(row['x1'], row['y1'], row['x2'],
                                     row['y2'], row['x3'], row['y3'])
            assert t.signed_area == pytest.approx(row['area'])
            assert row['area'] > 0
            assert min(t.angles) >= 15.0
            assert sum(t.angles) == pytest.approx(180.0)
            assert len(set(row['buoy_ids'])) == 3

    def test_sorted_by_time(self, buoy_array):
        """Test output is sorted by timestamp."""
        triangles = TriangleFinder().find(buoy_array)
        assert triangles['time'].is_monotonic_increasing
        assert triangles['time'].nunique() == 3

    def test_idempotent(self, buoy_array):
        """Test repeated runs produce identical tables."""
        first = get_triangles(buoy_array)
        second = get_triangles(buoy_array)
        pd.testing.assert_frame_equal(first, second)

    def test_parallel_matches_serial(self, buoy_array):
        """Test worker threads give the same table as a single thread."""
        serial = get_triangles(buoy_array, n_workers=1)
        parallel = get_triangles(buoy_array, n_workers=3)
        pd.testing.assert_frame_equal(serial, parallel)

    def test_cancellation(self, buoy_array):
        """Test a set cancel event stops enumeration."""
        event = threading.Event()
        event.set()
        with pytest.raises(AnalysisCancelled):
            TriangleFinder().find(buoy_array, cancel_event=event)
        with pytest.raises(AnalysisCancelled):
            TriangleFinder(n_workers=2).find(buoy_array, cancel_event=event)

    def test_input_not_modified(self, buoy_array):
        """Test the observation table is left untouched."""
        before = buoy_array.copy()
        get_triangles(buoy_array)
        pd.testing.assert_frame_equal(before, buoy_array)

    def test_lower_min_angle_accepts_more(self, buoy_array):
        """Test the angle threshold only removes triangles."""
        strict = TriangleFinder(min_angle=30.0).find(buoy_array)
        loose = TriangleFinder(min_angle=5.0).find(buoy_array)
        assert len(strict) <= len(loose)


class TestStaticReferences:
    """Test static reference points and smallest-triangle selection."""

    def test_keep_smallest_static(self, two_moving_buoys, static_points):
        """Test only the smaller of two static triangles survives."""
        finder = TriangleFinder(max_static=1, keep_smallest_static=True)
        triangles = finder.find(two_moving_buoys, static=static_points)

        assert len(triangles) == 1
        row = triangles.iloc[0]
        assert set(row['buoy_ids']) == {1, 2, 100}
        assert row['area'] == pytest.approx(400000.0)
        assert row['n_static'] == 1
        assert finder.stats['n_deduplicated'] == 1
        assert finder.stats['n_rejected_static'] == 2

    def test_keep_all_static(self, two_moving_buoys, static_points):
        """Test both static triangles survive without selection."""
        triangles = TriangleFinder(keep_smallest_static=False).find(
            two_moving_buoys, static=static_points
        )
        assert len(triangles) == 2
        assert sorted(triangles['area']) == pytest.approx([400000.0, 1000000.0])

    def test_two_static_allowed(self, two_moving_buoys):
        """Test max_static=2 admits triangles with two static points."""
        corners = pd.DataFrame({
            'buoy_id': [100, 101],
            'x': [0.0, 1000.0],
            'y': [1000.0, 1000.0],
        })
        one = TriangleFinder(max_static=1).find(two_moving_buoys, static=corners)
        two = TriangleFinder(max_static=2).find(two_moving_buoys, static=corners)
        assert (one['n_static'] <= 1).all()
        assert (two['n_static'] == 2).any()

    def test_static_points_have_zero_velocity(self, two_moving_buoys, static_points):
        """Test static vertices carry no velocity."""
        triangles = TriangleFinder().find(two_moving_buoys, static=static_points)
        row = triangles.iloc[0]
        for k, bid in enumerate(row['buoy_ids'], 1):
            if bid >= 100:
                assert row[f'u{k}'] == 0.0
                assert row[f'v{k}'] == 0.0

    def test_static_added_to_every_group(self, two_moving_buoys, static_points):
        """Test static points join each timestamp group."""
        later = two_moving_buoys.copy()
        later['timestamp'] = later['timestamp'] + pd.Timedelta(hours=3)
        obs = pd.concat([two_moving_buoys, later], ignore_index=True)

        triangles = TriangleFinder().find(obs, static=static_points)
        assert len(triangles) == 2
        assert triangles['time'].nunique() == 2

    def test_moving_triangles_unaffected(self, make_observations, static_points):
        """Test triangles without static vertices are never dropped."""
        obs = make_observations([
            (1, 0.0, 0.0, 0.0, 0.0),
            (2, 1000.0, 0.0, 0.0, 0.0),
            (3, 500.0, -900.0, 0.0, 0.0),
        ])
        with_static = TriangleFinder().find(obs, static=static_points)
        assert (with_static['n_static'] == 0).sum() == 1

    def test_all_static_rejected(self, make_observations):
        """Test a group of only static points yields no triangle."""
        obs = make_observations([
            (1, 0.0, 0.0, 0.0, 0.0),
            (2, 1000.0, 0.0, 0.0, 0.0),
            (3, 0.0, 1000.0, 0.0, 0.0),
        ])
        obs['is_static'] = True
        finder = TriangleFinder(max_static=1)
        assert len(finder.find(obs)) == 0
        assert finder.stats['n_rejected_static'] == 1

    def test_static_id_collision(self, two_moving_buoys):
        """Test static ids must differ from moving ids."""
        static = pd.DataFrame({'buoy_id': [1], 'x': [0.0], 'y': [500.0]})
        with pytest.raises(ConfigurationError):
            TriangleFinder().find(two_moving_buoys, static=static)

    def test_smallest_static_mask_ties(self):
        """Test ties keep the first triangle of a group."""
        ids = np.array([[1, 2, 100], [1, 2, 101], [1, 3, 100]])
        flags = np.array([[False, False, True]] * 3)
        areas = np.array([5.0, 5.0, 9.0])
        keep = smallest_static_mask(ids, flags, areas)
        assert list(keep) == [True, False, True]


class TestConfigurationErrors:
    """Test invalid parameters fail fast."""

    def test_negative_max_static(self):
        with pytest.raises(ConfigurationError):
            TriangleFinder(max_static=-1)

    def test_invalid_min_angle(self):
        with pytest.raises(ConfigurationError):
            TriangleFinder(min_angle=75.0)

    def test_invalid_workers(self):
        with pytest.raises(ConfigurationError):
            TriangleFinder(n_workers=0)

    def test_missing_columns(self):
        df = pd.DataFrame({'buoy_id': [1], 'x': [0.0], 'y': [0.0]})
        with pytest.raises(ConfigurationError):
            TriangleFinder().find(df)

    def test_duplicate_buoy_at_timestamp(self, make_observations):
        obs = make_observations([
            (1, 0.0, 0.0, 0.1, 0.0),
            (1, 1000.0, 0.0, 0.1, 0.0),
            (2, 0.0, 1000.0, 0.1, 0.0),
        ])
        with pytest.raises(ConfigurationError, match="duplicate"):
            TriangleFinder().find(obs)

    def test_same_buoy_at_other_timestamp_allowed(self, right_triangle_obs):
        later = right_triangle_obs.copy()
        later['timestamp'] = later['timestamp'] + pd.Timedelta(hours=1)
        obs = pd.concat([right_triangle_obs, later], ignore_index=True)
        assert len(TriangleFinder().find(obs)) == 2

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            TriangleFinder(min_area=-1.0)


class TestKinematics:
    """Test strain-rate tensor computation."""

    def test_expanding_right_triangle(self, right_triangle_obs):
        """Test hand-computed values for one vertex drifting east."""
        row = get_triangles(right_triangle_obs).iloc[0]

        # dudx = (u2 · 1000 m) / (2 · 500000 m²) = 1e-4 1/s
        assert row['dudx'] == pytest.approx(1e-4)
        assert row['dudy'] == pytest.approx(0.0, abs=1e-15)
        assert row['dvdx'] == pytest.approx(0.0, abs=1e-15)
        assert row['dvdy'] == pytest.approx(0.0, abs=1e-15)
        assert row['divergence'] == pytest.approx(8.64)
        assert row['divergence'] > 0
        assert row['shear'] == pytest.approx(8.64)
        assert row['deformation'] == pytest.approx(8.64 * math.sqrt(2))

    def test_uniform_expansion(self):
        """Test linear field u = a x, v = a y gives divergence 2a."""
        a = 1e-6
        x = [0.0, 2000.0, 500.0]
        y = [0.0, 300.0, 1800.0]
        t = Triangle.from_coords(x[0], y[0], x[1], y[1], x[2], y[2])
        result = strain_rates(*t.vertices(), t.signed_area,
                              a * x[0], a * x[1], a * x[2],
                              a * y[0], a * y[1], a * y[2])
        assert result['dudx'] == pytest.approx(a)
        assert result['dvdy'] == pytest.approx(a)
        assert result['divergence'] == pytest.approx(2 * a * 86400)
        assert result['shear'] == pytest.approx(0.0, abs=1e-12)

    def test_pure_shear(self):
        """Test linear field u = g y has no divergence."""
        g = 2e-6
        x = [0.0, 1500.0, 200.0]
        y = [0.0, 100.0, 1200.0]
        t = Triangle.from_coords(x[0], y[0], x[1], y[1], x[2], y[2])
        result = strain_rates(*t.vertices(), t.signed_area,
                              g * y[0], g * y[1], g * y[2], 0.0, 0.0, 0.0)
        assert result['dudy'] == pytest.approx(g)
        assert result['divergence'] == pytest.approx(0.0, abs=1e-12)
        assert result['shear'] == pytest.approx(g * 86400)

    def test_single_moving_vertex(self):
        """Test one moving vertex still recovers the linear field u = 1e-4 y."""
        result = strain_rates(0.0, 0.0, 1000.0, 0.0, 0.0, 1000.0, 500000.0,
                              0.0, 0.0, 0.1, 0.0, 0.0, 0.0)
        assert result['dudx'] == pytest.approx(0.0, abs=1e-15)
        assert result['dudy'] == pytest.approx(1e-4)
        assert result['dvdx'] == pytest.approx(0.0, abs=1e-15)
        assert result['dvdy'] == pytest.approx(0.0, abs=1e-15)
        assert result['divergence'] == pytest.approx(0.0, abs=1e-12)
        assert result['shear'] == pytest.approx(1e-4 * 86400)

    def test_rigid_translation(self):
        """Test uniform drift produces no deformation."""
        result = strain_rates(0.0, 0.0, 1000.0, 0.0, 0.0, 1000.0, 500000.0,
                              0.2, 0.2, 0.2, -0.1, -0.1, -0.1)
        assert result['deformation'] == pytest.approx(0.0, abs=1e-12)

    def test_degenerate_area_raises(self):
        """Test scalar formula refuses zero area."""
        with pytest.raises(ValueError):
            strain_rates(0.0, 0.0, 1.0, 1.0, 2.0, 2.0, 0.0,
                         0.1, 0.1, 0.1, 0.0, 0.0, 0.0)

    def test_degenerate_rows_are_nan(self):
        """Test table rows below the area threshold get NaN."""
        df = pd.DataFrame({
            'x1': [0.0, 0.0], 'y1': [0.0, 0.0],
            'x2': [1000.0, 1.0], 'y2': [0.0, 1.0],
            'x3': [0.0, 2.0], 'y3': [1000.0, 2.0],
            'area': [500000.0, 0.0],
            'u1': [0.0, 0.1], 'u2': [0.1, 0.1], 'u3': [0.0, 0.1],
            'v1': [0.0, 0.0], 'v2': [0.0, 0.0], 'v3': [0.0, 0.0],
        })
        out = add_strain_rates(df, inplace=False)
        assert np.isfinite(out.loc[0, 'divergence'])
        assert np.isnan(out.loc[1, 'divergence'])
        assert 'divergence' not in df.columns

    def test_numba_kernel_matches_scalar(self):
        """Test vectorized kernel agrees with the scalar formula."""
        rng = np.random.default_rng(7)
        n = 5
        cols = [rng.uniform(0, 1e4, n) for _ in range(6)]
        areas = np.array([
            abs(Triangle.from_coords(*(c[i] for c in cols)).signed_area)
            for i in range(n)
        ])
        vel = [rng.uniform(-0.2, 0.2, n) for _ in range(6)]
        out = compute_strain_rates_numba(*cols, areas, *vel, 1e-6)
        for i in range(n):
            ref = strain_rates(*(c[i] for c in cols), areas[i], *(v[i] for v in vel))
            assert out[i, 4] == pytest.approx(ref['divergence'])
            assert out[i, 6] == pytest.approx(ref['deformation'])

    def test_summary(self, buoy_array):
        """Test summary statistics of an enriched table."""
        triangles = get_triangles(buoy_array)
        summary = summarize_triangles(triangles)
        assert summary['n_triangles'] == len(triangles)
        assert summary['n_timestamps'] == 3
        assert summary['deformation_mean'] >= 0

    def test_summary_empty(self):
        assert summarize_triangles(empty_triangles())['n_triangles'] == 0


class TestPowerLaw:
    """Test scale vs. deformation power-law fit."""

    def test_exact_recovery(self, power_law_table):
        """Test noise-free data recovers alpha and beta."""
        pl = fit_power_law(power_law_table)
        assert pl.alpha == pytest.approx(2.0, abs=1e-6)
        assert pl.beta == pytest.approx(0.5, abs=1e-6)
        assert pl.n_points == len(power_law_table)
        assert pl.r_squared == pytest.approx(1.0)

    def test_prediction(self):
        """Test predict_power_law and PowerLaw.predict."""
        pl = PowerLaw(alpha=2.0, beta=0.5)
        assert predict_power_law(4.0, pl) == pytest.approx(4.0)
        assert np.allclose(pl.predict(np.array([1.0, 9.0])), [2.0, 6.0])

    def test_nonpositive_deformation_ignored(self, power_law_table):
        """Test zero deformation rows are excluded."""
        df = pd.concat([
            power_law_table,
            pd.DataFrame({'area': [1e6, 4e6], 'deformation': [0.0, 0.0]}),
        ], ignore_index=True)
        pl = fit_power_law(df)
        assert pl.n_points == len(power_law_table)
        assert pl.beta == pytest.approx(0.5, abs=1e-6)

    def test_insufficient_data(self):
        """Test fewer than two usable rows is an explicit failure."""
        df = pd.DataFrame({'area': [1e6, 4e6], 'deformation': [0.3, 0.0]})
        with pytest.raises(InsufficientDataError):
            fit_power_law(df)

    def test_single_scale(self):
        """Test identical scales cannot determine a slope."""
        df = pd.DataFrame({'area': [1e6, 1e6, 1e6], 'deformation': [0.1, 0.2, 0.3]})
        with pytest.raises(InsufficientDataError):
            fit_power_law(df)

    def test_missing_column(self):
        with pytest.raises(KeyError):
            fit_power_law(pd.DataFrame({'area': [1.0, 2.0]}))

    def test_fit_on_triangles(self, buoy_array):
        """Test the fit runs on enumerated triangles."""
        pl = fit_power_law(get_triangles(buoy_array))
        assert np.isfinite(pl.alpha)
        assert np.isfinite(pl.beta)
        assert pl.alpha > 0
