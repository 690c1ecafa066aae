"""
Command-line interface for the orrery core.

Usage:
    # List the catalog bodies
    python -m orrery bodies

    # Compare every propulsion system for one route
    python -m orrery compare Earth Mars --departure-days 30

    # Fly a journey headless until arrival
    python -m orrery fly Earth Mars --propulsion chemical-rocket --time-speed 100000
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from orrery.bodies import Moon, bodies_data, get_body
from orrery.config import KEPLER_METHODS, make_config
from orrery.constants import AU_TO_KM, DAY, SCALE_FACTORS
from orrery.context import SimulationContext
from orrery.errors import OrreryError
from orrery.journey import JourneyStatus
from orrery.propulsion import format_duration, get_propulsion_by_id, propulsion_data


def _cmd_bodies(args) -> int:
    print(f"{'Name':<12} {'Kind':<9} {'Parent':<9} {'a (AU)':>10} {'Period (days)':>14} {'e':>8}")
    for body in bodies_data.values():
        parent = body.parent if isinstance(body, Moon) else '-'
        print(f"{body.name:<12} {body.kind:<9} {parent:<9} {body.elements.a:>10.5f} "
              f"{body.get_period('day'):>14.3f} {body.elements.e:>8.4f}")
    return 0


def _cmd_compare(args) -> int:
    origin = get_body(args.origin)
    destination = get_body(args.destination)
    config = make_config(scale_mode=args.scale_mode, kepler_method=args.kepler_method)
    use_flip = not args.no_flip

    print(f"{origin.name} -> {destination.name}, departing at day {args.departure_days:g}"
          f" ({'flip-and-burn' if use_flip else 'no deceleration'})")
    print(f"{'Propulsion':<36} {'Distance (AU)':>14} {'Travel time':>22} {'Rounds':>7}")
    for profile in propulsion_data.values():
        context = SimulationContext(config)
        context.clock.set_time(args.departure_days * DAY)
        solution = context.plan(origin, destination, profile, use_flip)
        flag = '' if solution.converged else ' *'
        print(f"{profile.name:<36} {solution.distance / AU_TO_KM:>14.6f} "
              f"{format_duration(solution.travel_time):>22} {solution.rounds:>7d}{flag}")
    return 0


def _cmd_fly(args) -> int:
    origin = get_body(args.origin)
    destination = get_body(args.destination)
    profile = get_propulsion_by_id(args.propulsion)
    config = make_config(scale_mode=args.scale_mode, kepler_method=args.kepler_method,
                         time_speed=args.time_speed, strict=True)
    use_flip = not args.no_flip

    context = SimulationContext(config)
    solution = context.plan_journey(origin, destination, profile, use_flip)
    print(f"{origin.name} -> {destination.name} by {profile.name}: "
          f"{solution.distance / AU_TO_KM:.6f} AU, predicted {format_duration(solution.travel_time)}")

    journeys = context.journeys
    phase = None
    for _ in range(args.max_ticks):
        context.tick(args.dt)
        current = journeys.flight_phase()
        if current is not phase:
            phase = current
            print(f"  t+{format_duration(journeys.journey.elapsed_time):>20}  {phase.value:<13} "
                  f"{journeys.current_speed():>14.3f} km/s  {100.0 * journeys.progress():6.2f}%")
        if journeys.status is JourneyStatus.ARRIVED:
            print(f"Arrived after {format_duration(journeys.journey.elapsed_time)}")
            return 0

    print(f"Not arrived after {args.max_ticks} ticks ({100.0 * journeys.progress():.2f}% of the way)")
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m orrery",
        description="Orbit propagation, intercept planning and propulsion kinematics.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("bodies", help="List catalog bodies.").set_defaults(func=_cmd_bodies)

    def add_route_args(sub):
        sub.add_argument("origin", help="Departure body name.")
        sub.add_argument("destination", help="Destination body name.")
        sub.add_argument(
            "--no-flip",
            action="store_true",
            help="Disable flip-and-burn deceleration.",
        )
        sub.add_argument(
            "--scale-mode",
            choices=tuple(SCALE_FACTORS),
            default="visual",
            help="Scene scale used for positions (default: visual).",
        )
        sub.add_argument(
            "--kepler-method",
            choices=KEPLER_METHODS,
            default="newton",
            help="Kepler solve for body positions (default: newton).",
        )

    compare = subparsers.add_parser("compare", help="Plan a route with every propulsion system.")
    add_route_args(compare)
    compare.add_argument(
        "--departure-days",
        type=float,
        default=0.0,
        help="Departure time in days after the reference epoch (default: 0).",
    )
    compare.set_defaults(func=_cmd_compare)

    fly = subparsers.add_parser("fly", help="Fly one journey through the state machine.")
    add_route_args(fly)
    fly.add_argument(
        "--propulsion",
        default="chemical-rocket",
        choices=tuple(propulsion_data),
        help="Propulsion id (default: chemical-rocket).",
    )
    fly.add_argument(
        "--time-speed",
        type=float,
        default=1.0e5,
        help="Simulation seconds per wall-clock second (default: 1e5).",
    )
    fly.add_argument(
        "--dt",
        type=float,
        default=0.1,
        help="Wall-clock seconds per tick (default: 0.1).",
    )
    fly.add_argument(
        "--max-ticks",
        type=int,
        default=1_000_000,
        help="Give up after this many ticks (default: 1000000).",
    )
    fly.set_defaults(func=_cmd_fly)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except OrreryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
