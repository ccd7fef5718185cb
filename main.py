# main.py
"""
Main entry point for the CityRun demo.
"""
import argparse

from cityrun.core.safe_main import run_game


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the CityRun camera demo.")
    parser.add_argument("--frames", type=int, default=None,
                        help="Stop after this many frames (default: run until closed).")
    parser.add_argument("--entry", default="cityrun.demo:build_demo",
                        help="Scene builder as 'module:function'.")
    return parser.parse_args()


if __name__ == '__main__':
    args = _parse_args()
    raise SystemExit(run_game(args.entry, max_frames=args.frames))
