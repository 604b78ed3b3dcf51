"""
Run a script or module with the virtual environment already installed.

    python -m not_env app.py --port 8000
    python -m not_env -m mypackage.worker
"""

from __future__ import annotations

import argparse
import logging
import runpy
import sys

from not_env.services.installation import register


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m not_env",
        description="Fetch variables from not-env, then run the target with them as os.environ.",
    )
    parser.add_argument("-m", dest="module", action="store_true", help="Treat target as a module name")
    parser.add_argument("--no-patch", action="store_true", help="Do not rebind os.environ")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log bootstrap progress to stderr")
    parser.add_argument("target", help="Path to a Python file, or a module name with -m")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments passed to the target")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        )

    register(patch_os=not args.no_patch)

    sys.argv = [args.target, *args.args]
    if args.module:
        runpy.run_module(args.target, run_name="__main__", alter_sys=True)
    else:
        runpy.run_path(args.target, run_name="__main__")
    return 0


if __name__ == "__main__":
    sys.exit(main())
