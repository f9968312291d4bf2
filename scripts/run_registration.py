"""
Scanner registration workflow

Loads a scanner report, merges all scanners into one global frame and reports
the number of unique beacons and the largest Manhattan distance between two
scanners.
"""

import sys
import argparse
import logging
from pathlib import Path

# Add the src to the path to import modules
sys.path.append(str(Path(__file__).parent.parent / "src"))

from beacon_registration.preprocessing.loader import ScannerLoader
from beacon_registration.alignment import NoConvergenceError, combine_scanners, save_registration
from beacon_registration.acceleration import MatchParallelExecutor
from beacon_registration.analysis import unique_beacon_count, max_manhattan_distance
from beacon_registration.utils.config import load_config, AppConfig
from beacon_registration.utils.logging import setup_logger, set_package_level


def main() -> int:
    """
    Main function to run the registration workflow.
    """
    parser = argparse.ArgumentParser(description="Scanner Beacon Registration")
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Scanner report file (overrides paths.input_file)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file (defaults to config/default.yaml)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to write beacons.txt and scanner_positions.txt",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Override registration.threshold (minimum coincident beacons)",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Open a plotly view of the merged beacons and scanner positions",
    )
    args = parser.parse_args()

    cfg: AppConfig = load_config(args.config)
    if args.input:
        cfg.paths.input_file = args.input
    if args.output_dir:
        cfg.paths.output_dir = args.output_dir
    if args.threshold is not None:
        cfg.registration.threshold = args.threshold
    if args.visualize:
        cfg.visualization.enabled = True

    log_level = getattr(logging, cfg.logging.level.upper(), logging.INFO)
    logger = setup_logger(__name__, level=log_level, log_file=cfg.logging.file)
    set_package_level(log_level)

    if not cfg.paths.input_file:
        logger.error("No input file given (use --input or paths.input_file)")
        return 2

    logger.info("Scanner Beacon Registration")
    logger.info("===========================")

    scanners = ScannerLoader().load(cfg.paths.input_file)

    executor = None
    if cfg.parallel.enabled:
        executor = MatchParallelExecutor(n_workers=cfg.parallel.n_workers)

    try:
        result = combine_scanners(
            scanners,
            threshold=cfg.registration.threshold,
            strategy=cfg.registration.strategy,
            max_passes=cfg.registration.max_passes,
            executor=executor,
        )
    except NoConvergenceError as e:
        logger.error(f"Registration failed: {e}")
        return 1

    logger.info(f"Unique beacons: {unique_beacon_count(result)}")
    logger.info(f"Largest scanner Manhattan distance: {max_manhattan_distance(result.positions)}")

    if cfg.paths.output_dir:
        save_registration(result, cfg.paths.output_dir)

    if cfg.visualization.enabled:
        from beacon_registration.visualization import RegistrationVisualizer
        RegistrationVisualizer(backend=cfg.visualization.backend).visualize_registration(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
