"""Analysis logger for buoy deformation runs."""

import logging
import numpy as np
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, List


class AnalysisLogger:
    """Logger for buoy triangle deformation analyses."""

    def __init__(
        self,
        scenario_name: str,
        log_dir: str = "logs",
        verbose: bool = True
    ):
        """
        Initialize analysis logger.

        Args:
            scenario_name: Scenario name (for log filename)
            log_dir: Directory for log files
            verbose: Print warnings and errors to console
        """
        self.scenario_name = scenario_name
        self.log_dir = Path(log_dir)
        self.verbose = verbose

        self.log_dir.mkdir(parents=True, exist_ok=True)

        clean_name = scenario_name.lower().replace(' ', '_').replace('-', '_')
        self.log_file = self.log_dir / f"{clean_name}.log"

        self.logger = self._setup_logger()
        self.warnings: List[str] = []
        self.errors: List[str] = []

    def _setup_logger(self) -> logging.Logger:
        """Configure Python logging."""
        logger = logging.getLogger(f"icedrift_{self.scenario_name}")
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

        handler = logging.FileHandler(self.log_file, mode='w')
        handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        return logger

    def info(self, msg: str):
        """Log informational message."""
        self.logger.info(msg)

    def warning(self, msg: str):
        """Log warning message."""
        self.logger.warning(msg)
        self.warnings.append(msg)

        if self.verbose:
            print(f"  WARNING: {msg}")

    def error(self, msg: str):
        """Log error message."""
        self.logger.error(msg)
        self.errors.append(msg)

        if self.verbose:
            print(f"  ERROR: {msg}")

    def log_config(self, config: Dict[str, Any]):
        """Log analysis parameters."""
        self.info("=" * 70)
        self.info("BUOY TRIANGLE DEFORMATION ANALYSIS")
        self.info(f"Scenario: {self.scenario_name}")
        self.info("=" * 70)
        self.info("")
        self.info("PARAMETERS:")
        self.info(f"  Observations: {config.get('observations_file', '?')}")
        self.info(f"  Static references: {config.get('static_file') or 'none'}")
        self.info(f"  Minimum angle = {config.get('min_angle', '?')} deg")
        self.info(f"  Maximum static per triangle = {config.get('max_static', '?')}")
        self.info(f"  Keep smallest static = {config.get('keep_smallest_static', '?')}")
        self.info(f"  Minimum area = {config.get('min_area', '?')} m²")
        self.info(f"  Workers = {config.get('n_workers', '?')}")
        self.info("=" * 70)

    def log_observations(self, observations, static=None):
        """Log input table sizes."""
        self.info("")
        self.info("INPUT:")
        self.info(f"  Observations: {len(observations)}")
        if len(observations):
            self.info(f"  Buoys: {observations['buoy_id'].nunique()}")
            self.info(f"  Timestamps: {observations['timestamp'].nunique()}")
            self.info(
                f"  Period: {observations['timestamp'].min()} to "
                f"{observations['timestamp'].max()}"
            )
        if static is not None:
            self.info(f"  Static references: {len(static)}")

    def log_triangles(self, stats: Dict[str, int], summary: Dict[str, Any]):
        """Log enumeration counters and triangle statistics."""
        self.info("")
        self.info("=" * 70)
        self.info("TRIANGLES")
        self.info("=" * 70)
        for key in sorted(stats):
            self.info(f"  {key}: {stats[key]}")

        self.info("")
        self.info("DEFORMATION:")
        for key in ('divergence', 'shear', 'deformation'):
            mean = summary.get(f'{key}_mean', np.nan)
            median = summary.get(f'{key}_median', np.nan)
            self.info(f"  {key}: mean {mean:.4e}, median {median:.4e} 1/day")
        self.info("=" * 70)

    def log_power_law(self, power_law):
        """Log fitted power law."""
        self.info("")
        self.info("POWER LAW (deformation = alpha · L^beta, L in km):")
        self.info(f"  alpha = {power_law.alpha:.4e} 1/day")
        self.info(f"  beta = {power_law.beta:.4f}")
        self.info(f"  R² = {power_law.r_squared:.4f}")
        self.info(f"  n = {power_law.n_points}")

    def log_timing(self, timing: Dict[str, float]):
        """Log timing breakdown."""
        self.info("")
        self.info("=" * 70)
        self.info("TIMING")
        self.info("=" * 70)

        for key, value in sorted(timing.items()):
            if key != 'total':
                self.info(f"  {key}: {value:.3f} s")

        self.info(f"  {'-' * 40}")
        total = timing.get('total', sum(timing.values()))
        self.info(f"  TOTAL: {total:.3f} s")

        self.info("=" * 70)

    def finalize(self):
        """Write final summary and release the log file."""
        self.info("")
        self.info("=" * 70)
        self.info("SUMMARY")
        self.info("=" * 70)

        if self.errors:
            self.info(f"ERRORS: {len(self.errors)}")
            for i, err in enumerate(self.errors, 1):
                self.info(f"  {i}. {err}")
        else:
            self.info("ERRORS: None")

        if self.warnings:
            self.info(f"WARNINGS: {len(self.warnings)}")
            for i, warn in enumerate(self.warnings, 1):
                self.info(f"  {i}. {warn}")
        else:
            self.info("WARNINGS: None")

        self.info("")
        self.info(f"Log file: {self.log_file}")
        self.info(f"Completed: {datetime.now().isoformat()}")
        self.info("=" * 70)

        for handler in self.logger.handlers:
            handler.close()
