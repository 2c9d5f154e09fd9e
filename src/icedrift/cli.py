#!/usr/bin/env python
"""
Command Line Interface for icedrift Sea-Ice Deformation Analyzer.

Usage:
    icedrift buoys.csv                       # Triangles, kinematics, power law
    icedrift buoys.csv --static shore.csv    # With fixed reference points
    icedrift --config analysis.txt           # Parameters from config file
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .core.triangles import TriangleFinder, summarize_triangles
from .core.kinematics import add_strain_rates
from .core.power_law import fit_power_law
from .core.exceptions import InsufficientDataError
from .io.config_manager import ConfigManager
from .io.data_handler import DataHandler
from .utils.logger import AnalysisLogger
from .utils.timer import Timer


def print_header():
    """Print ASCII art header."""
    print("\n" + "=" * 70)
    print(" " * 14 + "icedrift: Sea-Ice Deformation from Buoy Triangles")
    print(" " * 27 + "Version 0.1.0")
    print("=" * 70)
    print("\n  Triangle Enumeration | Strain-Rate Tensor | Scale Power Law")
    print("  License: MIT")
    print("=" * 70 + "\n")


def normalize_scenario_name(scenario_name: str) -> str:
    """Convert scenario name to clean filename format."""
    clean = scenario_name.lower()
    clean = clean.replace(' - ', '_')
    clean = clean.replace('-', '_')
    clean = clean.replace(' ', '_')

    while '__' in clean:
        clean = clean.replace('__', '_')

    clean = clean.rstrip('_')
    return clean


def run_analysis(
    config: dict,
    output_dir: Optional[str] = None,
    log_dir: str = "logs",
    verbose: bool = True
):
    """Run a complete triangle deformation analysis."""

    config = ConfigManager.validate({**ConfigManager.get_default_config(), **config})
    scenario_name = config.get('scenario_name') or 'deformation'
    clean_name = normalize_scenario_name(scenario_name)
    if output_dir is None:
        output_dir = config.get('output_dir') or 'outputs'

    if verbose:
        print(f"\n{'=' * 70}")
        print(f"SCENARIO: {scenario_name}")
        print(f"{'=' * 70}")

    logger = AnalysisLogger(clean_name, log_dir, verbose)
    timer = Timer()
    timer.start("total")

    try:
        logger.log_config(config)

        # [1/5] Load observations
        with timer.time_section("load"):
            if verbose:
                print("\n[1/5] Loading buoy observations...")

            if not config.get('observations_file'):
                raise ValueError("No observations file given")

            observations = DataHandler.load_observations(config['observations_file'])
            static = DataHandler.load_static(config.get('static_file'))
            logger.log_observations(observations, static)

            if verbose:
                print(f"      {len(observations):,} observations, "
                      f"{observations['timestamp'].nunique():,} timestamps")
                if static is not None:
                    print(f"      {len(static)} static reference points")

        # [2/5] Enumerate triangles
        with timer.time_section("triangles"):
            if verbose:
                print("\n[2/5] Forming buoy triangles...")

            finder = TriangleFinder(
                min_angle=config['min_angle'],
                max_static=config['max_static'],
                keep_smallest_static=config['keep_smallest_static'],
                min_area=config['min_area'],
                n_workers=config['n_workers'],
            )
            triangles = finder.find(observations, static=static, verbose=verbose)

            if verbose:
                print(f"      Accepted triangles: {len(triangles):,}")

        # [3/5] Differential kinematics
        with timer.time_section("kinematics"):
            if verbose:
                print("\n[3/5] Computing strain rates...")

            add_strain_rates(triangles, inplace=True, min_area=config['min_area'])
            summary = summarize_triangles(triangles)
            logger.log_triangles(finder.stats, summary)

        # [4/5] Power law
        power_law = None
        with timer.time_section("power_law"):
            if config.get('fit_power_law', True):
                if verbose:
                    print("\n[4/5] Fitting scale power law...")
                try:
                    power_law = fit_power_law(triangles)
                except InsufficientDataError as e:
                    logger.warning(f"No power law fitted: {e}")
                else:
                    logger.log_power_law(power_law)
                    summary['power_law_alpha'] = power_law.alpha
                    summary['power_law_beta'] = power_law.beta
                    summary['power_law_r_squared'] = power_law.r_squared
                    summary['power_law_n_points'] = power_law.n_points
                    if verbose:
                        print(f"      {power_law}")

        # [5/5] Save CSV data
        with timer.time_section("csv_save"):
            if verbose:
                print("\n[5/5] Saving CSV data...")

            csv_dir = Path(output_dir) / "csv"
            csv_dir.mkdir(parents=True, exist_ok=True)

            tri_file = csv_dir / f"{clean_name}_triangles.csv"
            DataHandler.save_triangles_csv(str(tri_file), triangles)

            summary_file = csv_dir / f"{clean_name}_summary.csv"
            DataHandler.save_summary_csv(str(summary_file), summary)

            if verbose:
                print(f"      Saved: {tri_file}")
                print(f"      Saved: {summary_file}")

        timer.stop("total")
        logger.log_timing(timer.get_times())

        if verbose:
            print(f"\n{'=' * 70}")
            print("ANALYSIS COMPLETED")
            print(f"{'=' * 70}")
            print(f"  Triangles: {len(triangles):,}")
            if power_law is not None:
                print(f"  Power law: alpha = {power_law.alpha:.3e}, "
                      f"beta = {power_law.beta:.3f}")
            print(f"  Total time: {timer.times.get('total', 0):.2f} s")
            print(f"{'=' * 70}\n")

        return triangles, power_law

    except Exception as e:
        logger.error(f"Analysis failed: {str(e)}")

        if verbose:
            print(f"\n{'=' * 70}")
            print(f"ANALYSIS FAILED: {str(e)}")
            print(f"{'=' * 70}\n")

        raise

    finally:
        logger.finalize()


def main(argv=None):
    """Main entry point for command-line interface."""
    parser = argparse.ArgumentParser(
        description='icedrift: Sea-ice deformation from drifting buoy triangles',
        epilog='Example: icedrift buoys.csv --static shore.csv'
    )

    parser.add_argument(
        'observations',
        nargs='?',
        help='CSV file with buoy observations'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Path to configuration file'
    )

    parser.add_argument(
        '--static', '-s',
        type=str,
        help='CSV file with static reference points'
    )

    parser.add_argument(
        '--max-static',
        type=int,
        help='Maximum static reference points per triangle (default: 1)'
    )

    parser.add_argument(
        '--min-angle',
        type=float,
        help='Minimum interior angle in degrees (default: 15)'
    )

    parser.add_argument(
        '--keep-all-static',
        action='store_true',
        help='Keep every triangle with static points, not only the smallest'
    )

    parser.add_argument(
        '--workers', '-j',
        type=int,
        help='Number of worker threads (default: 1)'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        help='Output directory for results (default: output_dir from the'
             ' config, else outputs)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Quiet mode (minimal output)'
    )

    args = parser.parse_args(argv)
    verbose = not args.quiet

    if args.config:
        config = ConfigManager.load(args.config)
    elif args.observations:
        config = ConfigManager.get_default_config()
    else:
        parser.print_help()
        sys.exit(0)

    if args.observations:
        config['observations_file'] = args.observations
        if config.get('scenario_name') == 'deformation':
            config['scenario_name'] = Path(args.observations).stem
    if args.static:
        config['static_file'] = args.static
    if args.max_static is not None:
        config['max_static'] = args.max_static
    if args.min_angle is not None:
        config['min_angle'] = args.min_angle
    if args.keep_all_static:
        config['keep_smallest_static'] = False
    if args.workers is not None:
        config['n_workers'] = args.workers

    if verbose:
        print_header()

    run_analysis(config, args.output_dir, verbose=verbose)


if __name__ == '__main__':
    main()
