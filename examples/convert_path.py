#!/usr/bin/env python3
"""Example script converting a lane-change path between Frenet and Cartesian frames.

A lateral shift of ``--offset`` metres is laid out along the reference curve
from the configuration, stored in a PathData container, and read back both
by path arc length and by reference arc length.
"""

import argparse
import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from pathdata.config import load_config
from pathdata.core import FrenetFramePoint, PathData
from pathdata.planning import ReferenceLine


def lane_change_profile(s_start: float, s_end: float, offset: float, num_points: int):
    """Quintic lateral shift from l=0 to l=offset with zero slope and curvature at both ends."""
    points = []
    length = s_end - s_start
    for s in np.linspace(s_start, s_end, num_points):
        u = (s - s_start) / length
        l = offset * (10 * u ** 3 - 15 * u ** 4 + 6 * u ** 5)
        dl = offset * (30 * u ** 2 - 60 * u ** 3 + 30 * u ** 4) / length
        ddl = offset * (60 * u - 180 * u ** 2 + 120 * u ** 3) / length ** 2
        points.append(FrenetFramePoint(s=float(s), l=l, dl=dl, ddl=ddl))
    return points


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description='Convert a lane-change path between Frenet and Cartesian frames'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='configs/default.yaml',
        help='Path to configuration file'
    )
    parser.add_argument(
        '--offset',
        type=float,
        default=3.5,
        help='Lateral shift of the lane change [m]'
    )
    parser.add_argument(
        '--num-points',
        type=int,
        default=20,
        help='Number of path samples'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level'
    )

    args = parser.parse_args()

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=args.log_level
    )

    logger.info(f"Loading configuration from {args.config}")
    config = load_config(args.config)

    reference_line = ReferenceLine.from_config(config)
    path_data = PathData(config)
    path_data.set_reference_line(reference_line)

    frenet_points = lane_change_profile(
        0.1 * reference_line.length, 0.9 * reference_line.length, args.offset, args.num_points
    )
    if not path_data.set_frenet_path(frenet_points):
        logger.error("Lane-change path could not be converted for this reference line")
        return 1

    logger.info("=" * 60)
    logger.info(f"{'s_ref':>8} {'l':>7} {'x':>8} {'y':>8} {'theta':>7} {'kappa':>8} {'s':>8}")
    for fp, pp in zip(path_data.frenet_frame_path, path_data.discretized_path):
        logger.info(f"{fp.s:8.2f} {fp.l:7.2f} {pp.x:8.2f} {pp.y:8.2f} "
                    f"{pp.theta:7.3f} {pp.kappa:8.4f} {pp.s:8.2f}")
    logger.info("=" * 60)

    path_length = path_data.discretized_path.length
    midpoint = path_data.get_path_point_with_path_s(path_length / 2.0)
    logger.info(f"Path length: {path_length:.2f}m "
                f"(reference span {frenet_points[-1].s - frenet_points[0].s:.2f}m)")
    logger.info(f"Point at half path length: ({midpoint.x:.2f}, {midpoint.y:.2f})")

    nearest = path_data.get_path_point_with_ref_s(reference_line.length / 2.0)
    logger.info(f"Sample nearest to half reference length: ({nearest.x:.2f}, {nearest.y:.2f})")

    logger.success("Conversion complete!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
