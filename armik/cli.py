"""Command-line entry point for one-off solves and checks."""

import argparse
import logging
import math
import sys
from typing import Optional, Sequence

from .config import ConfigError, build_kinematics, load_config, tracking_scale
from .geometry import GeometryConfigError
from .kinematics import ArmKinematics, SolveResult, TargetPosition
from .tracking import map_to_world

logger = logging.getLogger(__name__)


def _format_result(result: SolveResult) -> str:
    a = result.angles
    return (
        f"base={a.base:.6f} shoulder={a.shoulder:.6f} elbow={a.elbow:.6f} rad "
        f"(deg: {math.degrees(a.base):.2f}, {math.degrees(a.shoulder):.2f}, {math.degrees(a.elbow):.2f})\n"
        f"reach={result.reach_distance:.4f} at_limit={result.is_at_limit} status={result.status.value}"
    )


def _format_position(p: TargetPosition) -> str:
    return f"x={p.x:.6f} y={p.y:.6f} z={p.z:.6f}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="armik", description="3-DOF arm kinematics")
    parser.add_argument("--config", help="YAML config with 'arm' and 'tracking' sections")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("solve", help="Inverse kinematics for a world target")
    p.add_argument("xyz", nargs=3, type=float, metavar=("X", "Y", "Z"))
    p.add_argument("--check", action="store_true", help="Also print forward(solve(target))")

    p = sub.add_parser("forward", help="Forward kinematics for joint angles (radians)")
    p.add_argument("angles", nargs=3, type=float, metavar=("BASE", "SHOULDER", "ELBOW"))

    p = sub.add_parser("reach", help="Report whether a target is inside the workspace (exit 1 if not)")
    p.add_argument("xyz", nargs=3, type=float, metavar=("X", "Y", "Z"))

    p = sub.add_parser("landmark", help="Map a normalized hand landmark and solve for it")
    p.add_argument("nxyz", nargs=3, type=float, metavar=("NX", "NY", "NZ"))
    p.add_argument("--scale", type=float, help="Override tracking scale")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else {}
        arm: ArmKinematics = build_kinematics(config)
        if getattr(args, "scale", None) is not None:
            scale = tracking_scale({"tracking": {"scale": args.scale}})
        else:
            scale = tracking_scale(config)
    except (ConfigError, GeometryConfigError) as exc:
        logger.error("%s", exc)
        return 2

    geom = arm.geometry
    logger.debug(
        "Arm geometry base=%s lower=%s upper=%s reach=[%s, %s]",
        geom.base_height, geom.lower_arm_length, geom.upper_arm_length,
        geom.min_reach, geom.max_reach,
    )

    if args.command == "solve":
        result = arm.solve(args.xyz)
        print(_format_result(result))
        if args.check:
            print(_format_position(arm.forward(result.angles)))
    elif args.command == "forward":
        print(_format_position(arm.forward(args.angles)))
    elif args.command == "reach":
        reachable = arm.is_reachable(args.xyz)
        print("reachable" if reachable else "unreachable")
        return 0 if reachable else 1
    elif args.command == "landmark":
        target = map_to_world(args.nxyz, scale=scale)
        print(_format_position(target))
        print(_format_result(arm.solve(target)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
