"""
Command-line interface for the orrery.

Usage:
    # Heliocentric positions of every catalogue body at a date
    python -m orrery positions --date 2024-04-08

    # Hohmann transfer between two planets
    python -m orrery transfer Earth Mars

    # Scan for alignments over a time span
    python -m orrery eclipses --start 0 --end 3650 --step 10

    # Save a plot of the system with a transfer arc
    python -m orrery plot --date 2026-01-01 --transfer Earth Mars --output orrery.png
"""

import argparse
import datetime
import logging
import sys

import numpy as np

from orrery.bodies import bodies_data, get_body
from orrery.config import SimulationConfig
from orrery.eclipses import EclipseMonitor
from orrery.hohmann import compute_hohmann
from orrery.scale import ScaleMode
from orrery.timeline import TIME_EVENTS, j2000_days

logger = logging.getLogger("orrery")


def date_type(value):
    """Parse an ISO date (YYYY-MM-DD) into days past J2000."""
    try:
        date = datetime.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Dates must be YYYY-MM-DD, got {value}")
    return j2000_days(date.year, date.month, date.day)


def _add_time_arguments(parser):
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        '--time', '-t',
        type=float,
        default=None,
        help='Elapsed days past J2000 (default: 0.0)'
    )
    group.add_argument(
        '--date', '-d',
        type=date_type,
        default=None,
        help='Calendar date (YYYY-MM-DD), converted to days past J2000'
    )


def _add_mode_argument(parser):
    parser.add_argument(
        '--mode', '-m',
        type=str,
        choices=[m.value for m in ScaleMode],
        default=None,
        help='Distance scale used for scene coordinates (default: exaggerated)'
    )


def _elapsed_days(args) -> float:
    if args.date is not None:
        return args.date
    return args.time if args.time is not None else 0.0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m orrery',
        description='Keplerian ephemeris, alignment scanning and Hohmann transfers for the solar system.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Increase logging verbosity (-v info, -vv debug)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    positions_parser = subparsers.add_parser('positions', help='Print body positions at a time')
    _add_time_arguments(positions_parser)
    _add_mode_argument(positions_parser)
    positions_parser.add_argument(
        '--bodies', '-b',
        type=str,
        nargs='+',
        metavar='NAME',
        help='Body names (default: whole catalogue)'
    )

    transfer_parser = subparsers.add_parser('transfer', help='Compute a Hohmann transfer between two bodies')
    transfer_parser.add_argument('origin', type=str, help='Departure body name')
    transfer_parser.add_argument('destination', type=str, help='Arrival body name')

    eclipses_parser = subparsers.add_parser('eclipses', help='Scan a time span for alignments')
    eclipses_parser.add_argument('--start', type=float, default=0.0, help='First day to scan (default: 0.0)')
    eclipses_parser.add_argument('--end', type=float, default=3652.5, help='Last day to scan (default: 3652.5)')
    eclipses_parser.add_argument('--step', type=float, default=None,
                                 help='Days between scans (default: the monitor interval)')
    eclipses_parser.add_argument('--threshold', type=float, default=None,
                                 help='Angular threshold in radians (default: 0.08)')
    eclipses_parser.add_argument('--cutoff', type=float, default=None,
                                 help='Minimum alignment score to report (default: 0.3)')
    eclipses_parser.add_argument('--planets-only', action='store_true',
                                 help='Exclude comets from the scan')

    subparsers.add_parser('events', help='List notable events and their J2000 day numbers')

    plot_parser = subparsers.add_parser('plot', help='Plot the system to an image file')
    _add_time_arguments(plot_parser)
    _add_mode_argument(plot_parser)
    plot_parser.add_argument('--transfer', type=str, nargs=2, metavar=('ORIGIN', 'DESTINATION'),
                             default=None, help='Draw the Hohmann arc between two bodies')
    plot_parser.add_argument('--segments', type=int, default=None,
                             help='Points per orbit polyline (default: 128)')
    plot_parser.add_argument('--transfer-segments', type=int, default=None,
                             help='Points along the transfer arc (default: 64)')
    plot_parser.add_argument('--asteroids', type=int, default=None,
                             help='Number of asteroid-belt particles to draw, 0 for none (default: 3000)')
    plot_parser.add_argument('--seed', type=int, default=None,
                             help='Seed for the asteroid belt (default: 0)')
    plot_parser.add_argument('--output', '-o', type=str, default='orrery.png',
                             help='Output image file (default: orrery.png)')

    return parser


# Argument name -> SimulationConfig field, for options left unset by default
_CONFIG_ARGUMENTS = {
    'mode': 'scale_mode',
    'threshold': 'eclipse_threshold',
    'cutoff': 'eclipse_cutoff',
    'segments': 'orbit_segments',
    'transfer_segments': 'transfer_segments',
    'asteroids': 'asteroid_count',
    'seed': 'asteroid_seed',
}


def _config_from_args(args) -> SimulationConfig:
    """SimulationConfig defaults overridden by whichever options were given."""
    overrides = {}
    for arg_name, field_name in _CONFIG_ARGUMENTS.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            overrides[field_name] = value
    return SimulationConfig(**overrides)


def _run_positions(args) -> int:
    t = _elapsed_days(args)
    mode = _config_from_args(args).scale_mode
    names = args.bodies if args.bodies else list(bodies_data)
    print(f"t = {t:.2f} days past J2000")
    print(f"{'body':<16}{'x (AU)':>12}{'y (AU)':>12}{'z (AU)':>12}{'r (AU)':>10}{'scene r':>10}")
    for name in names:
        body = get_body(name)
        r = body.position(t)
        scene = body.scene_position(t, mode)
        print(f"{body.name:<16}{r[0]:12.4f}{r[1]:12.4f}{r[2]:12.4f}"
              f"{np.linalg.norm(r):10.4f}{np.linalg.norm(scene):10.4f}")
    return 0


def _run_transfer(args) -> int:
    origin = get_body(args.origin)
    destination = get_body(args.destination)
    result = compute_hohmann(origin.distance_mkm, destination.distance_mkm)
    print(f"{origin.name} -> {destination.name}")
    print(result.summary())
    return 0


def _run_eclipses(args) -> int:
    config = _config_from_args(args)
    bodies = [b for b in bodies_data.values() if b.is_planet() or not args.planets_only]
    monitor = EclipseMonitor.from_config(bodies, config)
    step = args.step if args.step is not None else config.eclipse_interval_days
    if step <= 0.0:
        raise ValueError("--step must be positive")

    found = 0
    for t in np.arange(args.start, args.end + 0.5 * step, step):
        for event in monitor.update(float(t)):
            print(event)
            found += 1
    logger.info("Scanned %.1f..%.1f days, %d alignments", args.start, args.end, found)
    if found == 0:
        print("No alignments found.")
    return 0


def _run_events(args) -> int:
    for event in TIME_EVENTS:
        focus = f" [{event.focus_planet}]" if event.focus_planet else ""
        print(f"{event.date.isoformat()}  {event.elapsed_days:10.1f}  {event.category:<10} {event.name}{focus}")
    return 0


def _run_plot(args) -> int:
    # Deferred so the other subcommands do not pull in matplotlib
    from orrery.plot import plot_orrery

    transfer = None
    if args.transfer is not None:
        transfer = (get_body(args.transfer[0]), get_body(args.transfer[1]))
    plot_orrery(
        elapsed_days=_elapsed_days(args),
        config=_config_from_args(args),
        transfer=transfer,
        filename=args.output,
    )
    print(f"Saved {args.output}")
    return 0


COMMANDS = {
    'positions': _run_positions,
    'transfer': _run_transfer,
    'eclipses': _run_eclipses,
    'events': _run_events,
    'plot': _run_plot,
}


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    try:
        return COMMANDS[args.command](args)
    except (KeyError, ValueError) as err:
        # KeyError str() wraps the message in quotes
        message = err.args[0] if isinstance(err, KeyError) and err.args else str(err)
        print(f"error: {message}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
