"""
Command line entry point.

    python -m snake_game [--width 600] [--height 600] [--unit 24] [--seed 7] [-v]
"""
import argparse
import logging
import sys

from .config import ConfigError, Settings


def build_parser():
    d = Settings()
    p = argparse.ArgumentParser(prog="snake-game", description="Play Snake.")
    p.add_argument("--width", type=int, default=d.screen_width, help="window width in px")
    p.add_argument("--height", type=int, default=d.screen_height, help="window height in px")
    p.add_argument("--unit", type=int, default=d.unit_size, help="cell size in px")
    p.add_argument("--starting-body", type=int, default=d.starting_body,
                   help="initial snake length")
    p.add_argument("--base-interval", type=int, default=d.base_interval_ms,
                   help="starting delay between steps (ms)")
    p.add_argument("--speedup-step", type=int, default=d.speedup_step_ms,
                   help="delay removed per speed-up (ms)")
    p.add_argument("--min-interval", type=int, default=d.min_interval_ms,
                   help="fastest allowed delay (ms)")
    p.add_argument("--speedup-every", type=int, default=d.apples_per_speedup,
                   help="apples between speed-ups")
    p.add_argument("--seed", type=int, default=None, help="seed apple placement")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def settings_from_args(parser, args):
    try:
        return Settings(
            screen_width=args.width,
            screen_height=args.height,
            unit_size=args.unit,
            starting_body=args.starting_body,
            base_interval_ms=args.base_interval,
            speedup_step_ms=args.speedup_step,
            min_interval_ms=args.min_interval,
            apples_per_speedup=args.speedup_every,
            seed=args.seed,
        )
    except ConfigError as e:
        parser.error(str(e))


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings_from_args(parser, args)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # pygame is only imported once the arguments are valid.
    from .app import App
    App(settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
