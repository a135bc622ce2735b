"""
3D Aquarium Boids
=================

Schools of fish flocking inside a glass aquarium, with an orbit camera.

Usage:
    python main.py                                   # Viewer with the default schools
    python main.py --school Piranha=6 --school Sunfish=10
    python main.py --headless --ticks 600 --seed 7   # No window, print a summary

Controls:
    - 1-4: Add a BlueGoldfish / Piranha / CoralGrouper / Sunfish (shift: x5)
    - SPACE: Pause/Resume
    - R: Reset aquarium
    - C: Toggle re-clamp after collision correction
    - W/S, A/D, mouse drag: Rotate camera
    - Q/E, mouse wheel: Zoom
    - H: Toggle help text
    - ESC: Quit
"""

import argparse

import numpy as np

from config import aquarium as config
from boids import AgentKind, BoundedVolume, Flock, InvalidConfiguration


def parse_school(text: str):
    """Parse ``KIND=COUNT`` into (AgentKind, int)."""
    name, sep, count = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected KIND=COUNT, got {text!r}")
    try:
        kind = AgentKind.parse(name)
        number = int(count)
    except (InvalidConfiguration, ValueError) as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"Count must be >= 0, got {number}")
    return kind, number


def run_headless(schools: dict, ticks: int, seed=None, report_every: int = 0) -> Flock:
    """Advance a flock by fixed reference ticks and print a summary."""
    volume = BoundedVolume.from_config()
    flock = Flock(volume, seed=seed)
    flock.populate(schools)
    print(f"[Headless] {len(flock)} fish in a {volume.size:g}-unit aquarium, {ticks} ticks")

    for step in range(1, ticks + 1):
        flock.tick()
        if report_every and step % report_every == 0:
            _report(flock, f"tick {step}")

    _report(flock, "done")
    return flock


def _report(flock: Flock, label: str):
    positions = flock.active_positions()
    if len(positions) == 0:
        print(f"[Headless] {label}: empty aquarium")
        return
    velocities = flock.velocities[:flock.count][flock.active[:flock.count]]
    speeds = np.linalg.norm(velocities, axis=1)
    h = flock.volume.half_extent
    outside = int(np.count_nonzero(np.any(np.abs(positions) > h, axis=1)))
    print(
        f"[Headless] {label}: mean speed {speeds.mean():.4f} "
        f"(max {speeds.max():.4f}), outside bounds {outside}/{len(positions)}"
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="3D aquarium boids simulation")
    parser.add_argument("--school", action="append", type=parse_school, metavar="KIND=COUNT",
                        help="Add COUNT fish of KIND (repeatable); replaces the default schools")
    parser.add_argument("--seed", type=int, default=config.BOIDS.get("seed"),
                        help="Random seed for initial positions and velocities")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--ticks", type=int, default=600, help="Ticks to run in headless mode")
    parser.add_argument("--report-every", type=int, default=0,
                        help="Print a summary every N ticks in headless mode")
    args = parser.parse_args(argv)

    if args.school:
        schools = {}
        for kind, number in args.school:
            schools[kind] = schools.get(kind, 0) + number
    else:
        schools = dict(config.INITIAL_SCHOOLS)

    if args.headless:
        run_headless(schools, args.ticks, seed=args.seed, report_every=args.report_every)
        return

    # Import here so headless runs do not need a display or OpenGL
    from core import Application

    app = Application(schools=schools, seed=args.seed)
    app.run()


if __name__ == "__main__":
    main()
